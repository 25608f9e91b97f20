"""Exception types for the packing pipeline."""


class CodepackError(Exception):
    """Base exception for errors that abort a pack run."""

    pass


class EmptyRootListError(CodepackError):
    """No root directories were supplied to the walker."""

    pass


class RootPathError(CodepackError):
    """A root path does not exist or is not a directory."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)

    def __reduce__(self):
        return (type(self), (str(self), self.path))


class PatternError(CodepackError, ValueError):
    """An include or ignore pattern could not be compiled."""

    pass


class CompressionError(CodepackError):
    """Source text for a supported language could not be parsed.

    Raised from worker processes, so the only state kept is the message.
    """

    pass


class ConfigError(CodepackError, ValueError):
    """Configuration file or value is invalid."""

    pass
