"""Exception types raised by the simulator."""


class BiathlonSimError(Exception):
    """Base class for all simulator errors."""


class FormatError(BiathlonSimError, ValueError):
    """A time-of-day or duration string could not be parsed."""


class ConfigError(BiathlonSimError):
    """The race configuration could not be loaded or failed validation."""
