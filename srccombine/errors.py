"""Exception hierarchy for srccombine runs."""


class CombineError(RuntimeError):
    """Base class for fatal errors that abort a combine run."""


class SourceReadError(CombineError):
    """Raised when an input source file cannot be read or decoded."""


class OutputWriteError(CombineError):
    """Raised when the combined output cannot be written."""


class DiscoveryError(CombineError):
    """Raised when a project list cannot be expanded into source files."""


class ConfigError(CombineError):
    """Raised when the configuration file cannot be parsed."""


__all__ = [
    "CombineError",
    "ConfigError",
    "DiscoveryError",
    "OutputWriteError",
    "SourceReadError",
]
