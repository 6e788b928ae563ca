"""Error taxonomy shared by the ks facade."""


class KsenvError(RuntimeError):
    """Base class for all facade failures."""


class NotFoundError(KsenvError):
    """No ksonnet application root was found above the given path."""


class MetadataError(KsenvError):
    """The application descriptor exists but could not be decoded."""


class LaunchError(KsenvError):
    """The ks binary could not be started."""


class ToolError(KsenvError):
    """The ks binary exited with a non-zero status.

    The message is the tool's own stderr, trimmed, so callers see the
    diagnostic exactly as `ks` reported it.
    """

    def __init__(
        self,
        stderr: str,
        *,
        command: tuple[str, ...] = (),
        returncode: int | None = None,
    ) -> None:
        super().__init__(stderr)
        self.stderr = stderr
        self.command = command
        self.returncode = returncode


class ParseError(KsenvError):
    """ks succeeded but its output could not be decoded."""


class FieldTypeError(KsenvError):
    """A manifest field holds a value of an unexpected type."""
