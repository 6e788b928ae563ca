"""Unstructured Kubernetes objects decoded from `ks show` output."""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import yaml

from ksenv.errors import FieldTypeError, ParseError

DOCUMENT_SEPARATOR = re.compile(r"\n---")

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _ManifestLoader(yaml.SafeLoader):
    """SafeLoader producing JSON-compatible values: timestamps stay strings."""


_ManifestLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _json_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def _json_compatible(value: Any) -> Any:
    """Stringify mapping keys the way a YAML to JSON conversion does."""
    if isinstance(value, dict):
        return {_json_key(k): _json_compatible(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_compatible(item) for item in value]
    return value


@dataclass(frozen=True)
class ManifestObject:
    """Single Kubernetes resource without a fixed schema."""

    object: dict[str, Any]

    def nested_field(self, *path: str) -> Any | None:
        """Return the value at `path`, or None when any key is absent."""
        current: Any = self.object
        walked: list[str] = []
        for key in path:
            if not isinstance(current, Mapping):
                raise FieldTypeError(
                    f"{'.'.join(walked)} is {type(current).__name__}, not a map"
                )
            if key not in current:
                return None
            current = current[key]
            walked.append(key)
        return current

    def _typed(self, path: tuple[str, ...], expected: type, label: str) -> Any:
        value = self.nested_field(*path)
        if value is None:
            return None
        if not isinstance(value, expected):
            raise FieldTypeError(
                f"{'.'.join(path)} is {type(value).__name__}, not a {label}"
            )
        return value

    def nested_string(self, *path: str) -> str | None:
        return self._typed(path, str, "string")

    def nested_map(self, *path: str) -> dict[str, Any] | None:
        return self._typed(path, dict, "map")

    def nested_list(self, *path: str) -> list[Any] | None:
        return self._typed(path, list, "list")

    @property
    def api_version(self) -> str | None:
        return self.nested_string("apiVersion")

    @property
    def kind(self) -> str | None:
        return self.nested_string("kind")

    @property
    def name(self) -> str | None:
        return self.nested_string("metadata", "name")

    @property
    def namespace(self) -> str | None:
        return self.nested_string("metadata", "namespace")

    @property
    def labels(self) -> dict[str, Any]:
        return self.nested_map("metadata", "labels") or {}

    @property
    def annotations(self) -> dict[str, Any]:
        return self.nested_map("metadata", "annotations") or {}

    def to_dict(self) -> dict[str, Any]:
        return self.object


def decode_manifest(document: str) -> ManifestObject:
    """Decode one YAML document into a manifest object.

    Mapping keys become strings and timestamps are kept as written.
    """
    try:
        payload = yaml.load(document, Loader=_ManifestLoader)
    except yaml.YAMLError as exc:
        raise ParseError(f"invalid YAML: {exc}") from exc
    if payload is None:
        raise ParseError("document has no content")
    if not isinstance(payload, dict):
        raise ParseError(f"manifest is {type(payload).__name__}, expected a mapping")
    kind = payload.get("kind")
    if not isinstance(kind, str) or not kind:
        raise ParseError("manifest is missing a string 'kind'")
    return ManifestObject(object=_json_compatible(payload))


def split_manifests(output: str) -> list[ManifestObject]:
    """Parse concatenated `ks show` output into objects, in output order."""
    objects: list[ManifestObject] = []
    for part in DOCUMENT_SEPARATOR.split(output):
        if not part.strip():
            continue
        try:
            objects.append(decode_manifest(part))
        except ParseError as exc:
            raise ParseError(
                f"Failed to unmarshal manifest from `ks show`: {exc}"
            ) from exc
    # TODO: sort objects by creation dependency (namespaces and CRDs first).
    return objects
