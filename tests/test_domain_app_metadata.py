"""Tests for application root discovery and app.yaml decoding."""

from __future__ import annotations

from pathlib import Path

import pytest

from ksenv.domain.app_metadata import find_app_root, load_app_spec, parse_app_spec
from ksenv.errors import MetadataError, NotFoundError

APP_YAML = """apiVersion: 0.1.0
kind: ksonnet.io/app
name: guestbook
version: 0.0.1
environments:
  default:
    destination:
      namespace: default
      server: https://kubernetes.default.svc
    k8sVersion: v1.9.6
    path: default
registries:
  incubator:
    protocol: github
    uri: github.com/ksonnet/parts/tree/master/incubator
libraries:
  redis:
    name: redis
    registry: incubator
    version: 0.1.0
"""


def test_find_app_root_walks_up(tmp_path: Path) -> None:
    (tmp_path / "app.yaml").write_text(APP_YAML, encoding="utf-8")
    nested = tmp_path / "components" / "params"
    nested.mkdir(parents=True)
    component = nested / "guestbook.jsonnet"
    component.write_text("{}", encoding="utf-8")

    assert find_app_root(nested) == tmp_path.resolve()
    assert find_app_root(component) == tmp_path.resolve()
    assert find_app_root(str(tmp_path)) == tmp_path.resolve()


def test_find_app_root_not_found(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        find_app_root(tmp_path)


def test_load_app_spec(tmp_path: Path) -> None:
    (tmp_path / "app.yaml").write_text(APP_YAML, encoding="utf-8")
    spec = load_app_spec(tmp_path)

    assert spec.name == "guestbook"
    assert spec.version == "0.0.1"
    assert spec.api_version == "0.1.0"
    assert spec.registries["incubator"].protocol == "github"
    assert spec.libraries["redis"].registry == "incubator"
    env = spec.environments["default"]
    assert env.server == "https://kubernetes.default.svc"
    assert env.namespace == "default"
    assert env.k8s_version == "v1.9.6"


def test_load_app_spec_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / "app.yaml").write_text("name: [broken\n", encoding="utf-8")
    with pytest.raises(MetadataError):
        load_app_spec(tmp_path)


@pytest.mark.parametrize(
    "payload",
    [
        None,
        ["a", "list"],
        {"kind": "something/else"},
        {"registries": ["incubator"]},
        {"environments": {"default": "nope"}},
        {"name": {"nested": True}},
        {"authors": "me"},
    ],
)
def test_parse_app_spec_rejects_bad_shapes(payload: object) -> None:
    with pytest.raises(MetadataError):
        parse_app_spec(payload)


def test_parse_app_spec_minimal() -> None:
    spec = parse_app_spec({"name": "tiny"})
    assert spec.name == "tiny"
    assert spec.registries == {}
    assert spec.environments == {}


def test_app_spec_sections_are_read_only() -> None:
    spec = parse_app_spec(
        {"registries": {"incubator": {"protocol": "github", "uri": "github.com/x"}}}
    )
    with pytest.raises(TypeError):
        spec.registries["evil"] = None  # type: ignore[index]
    with pytest.raises(TypeError):
        spec.environments["prod"] = None  # type: ignore[index]
    assert list(spec.registries) == ["incubator"]


def test_scalars_are_read_verbatim(tmp_path: Path) -> None:
    (tmp_path / "app.yaml").write_text(
        "name: guestbook\nversion: 1.10\napiVersion: 0.3.0\nlicense: 2018-01-01\n"
        "description: ~\n",
        encoding="utf-8",
    )
    spec = load_app_spec(tmp_path)
    assert spec.version == "1.10"
    assert spec.license == "2018-01-01"
    assert spec.description is None


def test_parse_app_spec_rejects_float_scalars() -> None:
    with pytest.raises(MetadataError):
        parse_app_spec({"version": 1.1})


def test_load_app_spec_undecodable_bytes(tmp_path: Path) -> None:
    (tmp_path / "app.yaml").write_bytes(b"name: \xff\xfe\n")
    with pytest.raises(MetadataError):
        load_app_spec(tmp_path)
