"""ksonnet application discovery and `app.yaml` decoding."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from ksenv.errors import MetadataError, NotFoundError

APP_YAML_NAME = "app.yaml"
APP_KIND = "ksonnet.io/app"

# Scalars other than null are read as written, so `version: 1.10` stays "1.10".
_VERBATIM_TAGS = frozenset(
    {
        "tag:yaml.org,2002:bool",
        "tag:yaml.org,2002:float",
        "tag:yaml.org,2002:int",
        "tag:yaml.org,2002:timestamp",
    }
)


class _MetadataLoader(yaml.SafeLoader):
    """SafeLoader that keeps descriptor scalars as strings."""


_MetadataLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _VERBATIM_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass(frozen=True)
class RegistryRef:
    """Registry the application pulls packages from."""

    name: str
    protocol: str | None = None
    uri: str | None = None


@dataclass(frozen=True)
class LibraryRef:
    """Package vendored into the application."""

    name: str
    registry: str | None = None
    version: str | None = None


@dataclass(frozen=True)
class EnvironmentRef:
    """Environment declared in app.yaml (apiVersion 0.1.0 and later)."""

    name: str
    server: str | None = None
    namespace: str | None = None
    k8s_version: str | None = None
    path: str | None = None


@dataclass(frozen=True)
class AppSpec:
    """Decoded ksonnet application descriptor."""

    name: str | None = None
    version: str | None = None
    api_version: str | None = None
    kind: str | None = None
    description: str | None = None
    authors: tuple[str, ...] = ()
    license: str | None = None
    registries: Mapping[str, RegistryRef] = field(default_factory=dict)
    libraries: Mapping[str, LibraryRef] = field(default_factory=dict)
    environments: Mapping[str, EnvironmentRef] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("registries", "libraries", "environments"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))


def find_app_root(path: Path | str) -> Path:
    """Return the nearest directory at or above `path` holding app.yaml."""
    start = Path(path).resolve()
    if start.is_file():
        start = start.parent
    for candidate in (start, *start.parents):
        if (candidate / APP_YAML_NAME).is_file():
            return candidate
    raise NotFoundError(f"No ksonnet application found at or above {start}")


def _opt_str(data: dict[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, str | int):
        raise MetadataError(f"{where}.{key} must be a string")
    return str(value)


def _section(data: dict[str, Any], key: str) -> dict[str, dict[str, Any]]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MetadataError(f"{key} must be a mapping")
    for name, entry in value.items():
        if entry is not None and not isinstance(entry, dict):
            raise MetadataError(f"{key}.{name} must be a mapping")
    return {str(name): entry or {} for name, entry in value.items()}


def _environment(name: str, entry: dict[str, Any]) -> EnvironmentRef:
    where = f"environments.{name}"
    destination = entry.get("destination") or {}
    if not isinstance(destination, dict):
        raise MetadataError(f"{where}.destination must be a mapping")
    return EnvironmentRef(
        name=name,
        server=_opt_str(destination, "server", f"{where}.destination"),
        namespace=_opt_str(destination, "namespace", f"{where}.destination"),
        k8s_version=_opt_str(entry, "k8sVersion", where),
        path=_opt_str(entry, "path", where),
    )


def parse_app_spec(data: Any) -> AppSpec:
    """Build an AppSpec from the decoded app.yaml payload."""
    if not isinstance(data, dict):
        raise MetadataError("app.yaml must contain a mapping")
    kind = _opt_str(data, "kind", "app")
    if kind is not None and kind != APP_KIND:
        raise MetadataError(f"unexpected kind {kind!r}, want {APP_KIND!r}")

    authors = data.get("authors") or []
    if not isinstance(authors, list):
        raise MetadataError("authors must be a list")

    return AppSpec(
        name=_opt_str(data, "name", "app"),
        version=_opt_str(data, "version", "app"),
        api_version=_opt_str(data, "apiVersion", "app"),
        kind=kind,
        description=_opt_str(data, "description", "app"),
        authors=tuple(str(author) for author in authors),
        license=_opt_str(data, "license", "app"),
        registries={
            name: RegistryRef(
                name=name,
                protocol=_opt_str(entry, "protocol", f"registries.{name}"),
                uri=_opt_str(entry, "uri", f"registries.{name}"),
            )
            for name, entry in _section(data, "registries").items()
        },
        libraries={
            name: LibraryRef(
                name=_opt_str(entry, "name", f"libraries.{name}") or name,
                registry=_opt_str(entry, "registry", f"libraries.{name}"),
                version=_opt_str(entry, "version", f"libraries.{name}"),
            )
            for name, entry in _section(data, "libraries").items()
        },
        environments={
            name: _environment(name, entry)
            for name, entry in _section(data, "environments").items()
        },
    )


def load_app_spec(root: Path) -> AppSpec:
    """Read and decode app.yaml from an application root."""
    app_yaml = root / APP_YAML_NAME
    try:
        raw = app_yaml.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MetadataError(f"cannot read {app_yaml}: {exc}") from exc
    try:
        data = yaml.load(raw, Loader=_MetadataLoader)
    except yaml.YAMLError as exc:
        raise MetadataError(f"invalid YAML in {app_yaml}: {exc}") from exc
    return parse_app_spec(data)
