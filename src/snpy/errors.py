"""Exceptions raised by snpy.

- SnpyError: Base exception for all snpy errors
- UnsupportedPromptKind: Prompt type is not one of the known kinds
- EmptyChoiceList: Select prompt constructed without choices
- InvalidBasePath: Directory prompt started at a missing directory
- TargetAlreadyExists: Folder or file to create is already there
- IOFailure: Any other filesystem failure
- ConfigError: Unknown setting or unusable setting value
"""


class SnpyError(Exception):
    """Base exception for all snpy errors."""

    pass


class UnsupportedPromptKind(SnpyError, ValueError):
    """Raised when a prompt spec names an unknown type."""

    def __init__(self, kind: object):
        super().__init__(f"Unsupported option type: {kind}")
        self.kind = kind


class EmptyChoiceList(SnpyError, ValueError):
    """Raised when a select prompt has nothing to select."""

    def __init__(self, name: str):
        super().__init__(f"Prompt '{name}' needs at least one choice")
        self.name = name


class InvalidBasePath(SnpyError, ValueError):
    """Raised when a directory prompt's base path is not a directory."""

    def __init__(self, path: str):
        super().__init__(f"Base path is not a directory: {path}")
        self.path = path


class TargetAlreadyExists(SnpyError):
    """A folder or file already exists where one was to be created.

    Attributes:
        path: The path that was about to be created
    """

    def __init__(self, path: str):
        super().__init__(f"Already exists: {path}")
        self.path = path


class IOFailure(SnpyError):
    """A filesystem call failed. The original OSError is chained."""

    def __init__(self, path: str, reason: str = ""):
        message = f"Filesystem error at {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.path = path


class ConfigError(SnpyError, ValueError):
    """A setting name or value is not usable."""

    pass
