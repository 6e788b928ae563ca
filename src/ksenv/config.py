"""Facade configuration and environment loading."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_KS_BINARY = "ks"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class KsenvConfig:
    """Runtime options for talking to the ks binary."""

    ks_binary: str = DEFAULT_KS_BINARY
    log_level: str = DEFAULT_LOG_LEVEL
    app_dir: Path | None = None

    @property
    def search_path(self) -> Path:
        """Return the directory the application root search starts from."""
        return self.app_dir if self.app_dir is not None else Path.cwd()


def load_config(env_path: Path = Path(".env")) -> KsenvConfig:
    """Load config from environment and optional .env file."""
    load_dotenv(env_path, override=False)
    app_dir_raw = os.getenv("KSENV_APP_DIR")
    return KsenvConfig(
        ks_binary=os.getenv("KSENV_KS_BINARY") or DEFAULT_KS_BINARY,
        log_level=(os.getenv("KSENV_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        app_dir=Path(app_dir_raw) if app_dir_raw else None,
    )
