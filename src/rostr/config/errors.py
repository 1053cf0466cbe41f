"""Error types raised by the configuration model."""


class ConfigurationError(Exception):
    """Base class for configuration loading, mutation and saving errors."""

    pass


class ParseError(ConfigurationError):
    """Serialized configuration text is malformed or incomplete."""

    pass


class PushError(ConfigurationError):
    """A value could not be appended to its container."""

    pass


class ConfigIOError(ConfigurationError):
    """Configuration could not be read from or written to storage."""

    pass
