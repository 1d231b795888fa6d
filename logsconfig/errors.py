"""Errors raised while loading or validating a log source config."""


class ConfigError(Exception):
    """Base class for every misconfigured log source."""


class MissingTypeError(ConfigError):
    """Raised when a config reaches validation without a type."""


class UnsupportedTypeError(ConfigError):
    """Raised when a config declares a type outside the known set."""


class MissingPathError(ConfigError):
    """Raised when a file source has no path."""


class InvalidTailingModeError(ConfigError):
    """Raised when start_position is not a known tailing mode."""


class WildcardTailingError(ConfigError):
    """Raised when a wildcard path is tailed from the beginning."""


class MissingPortError(ConfigError):
    """Raised when a tcp or udp source has no port."""


class SourceFormatError(ConfigError):
    """Raised when raw config data cannot be turned into a source."""
