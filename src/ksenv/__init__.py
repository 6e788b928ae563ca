"""Python facade over the ksonnet `ks` command-line tool."""

from ksenv.application.environment_adapter import EnvironmentAdapter
from ksenv.domain.app_metadata import AppSpec
from ksenv.domain.manifests import ManifestObject
from ksenv.errors import (
    FieldTypeError,
    KsenvError,
    LaunchError,
    MetadataError,
    NotFoundError,
    ParseError,
    ToolError,
)

__all__ = [
    "AppSpec",
    "EnvironmentAdapter",
    "FieldTypeError",
    "KsenvError",
    "LaunchError",
    "ManifestObject",
    "MetadataError",
    "NotFoundError",
    "ParseError",
    "ToolError",
]
