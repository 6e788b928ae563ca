"""Application facade exports."""

from ksenv.application.environment_adapter import EnvironmentAdapter

__all__ = ["EnvironmentAdapter"]
