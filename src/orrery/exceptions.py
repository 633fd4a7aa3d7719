"""Exception types raised by orrery.

Unknown planet keys are not errors: queries return ``None`` (or a tagged
``PositionResult``) for them. The exceptions below cover misuse only.
"""


class OrreryError(Exception):
    """Base class for all orrery errors."""


class ConfigError(OrreryError):
    """Invalid environment configuration or element-table file."""


class InvalidInstantError(OrreryError, ValueError):
    """A time instant that cannot be converted to calendar fields."""
