"""Facade over the `ks` command-line tool for one application directory."""

from pathlib import Path

from ksenv.config import KsenvConfig
from ksenv.domain.app_metadata import AppSpec, find_app_root, load_app_spec
from ksenv.domain.manifests import ManifestObject, split_manifests
from ksenv.domain.param_table import parse_param_table
from ksenv.infrastructure.ks_client import ks_text


class EnvironmentAdapter:
    """ksonnet application directory with wrappers around `ks` commands."""

    def __init__(self, path: Path | str, *, binary: str = "ks") -> None:
        """Locate the application enclosing `path` and load its metadata.

        Parameters
        ----------
        path : Path | str
            Any file or directory inside the application.
        binary : str
            Name or path of the ks executable.

        Raises
        ------
        NotFoundError
            No app.yaml exists at or above `path`.
        MetadataError
            app.yaml could not be decoded.
        """
        self._root = find_app_root(path)
        self._app = load_app_spec(self._root)
        self.binary = binary

    @classmethod
    def from_config(
        cls, config: KsenvConfig, path: Path | str | None = None
    ) -> "EnvironmentAdapter":
        """Create an adapter using the configured binary and search path."""
        start = path if path is not None else config.search_path
        return cls(start, binary=config.ks_binary)

    @property
    def root(self) -> Path:
        """Return the application root directory."""
        return self._root

    @property
    def application(self) -> AppSpec:
        """Return the decoded app.yaml."""
        return self._app

    def _ks(self, *args: str) -> str:
        return ks_text(args, cwd=self._root, binary=self.binary)

    def show(self, environment: str) -> list[ManifestObject]:
        """Return the objects `ks show` would apply to `environment`.

        Objects keep the order ks printed them in.
        """
        return split_manifests(self._ks("show", environment))

    def list_env_params(self, environment: str) -> dict[str, str]:
        """Return component parameters resolved for `environment`."""
        return parse_param_table(self._ks("param", "list", "--env", environment))

    def set_component_params(
        self, environment: str, component: str, param: str, value: str
    ) -> None:
        """Update a component parameter in the given environment."""
        self._ks("param", "set", component, param, value, "--env", environment)

    def __repr__(self) -> str:
        root = str(self._root)
        return f"{type(self).__name__}(root={root!r}, binary={self.binary!r})"
