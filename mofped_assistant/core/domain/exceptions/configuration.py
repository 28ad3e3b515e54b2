"""Configuration exceptions for the MoFPED Help Assistant."""

from .base import AssistantError


class ConfigurationError(AssistantError):
    """Configuration or environment variable errors."""

    error_code = "MOF_CFG_001"


class InvalidConfigurationError(ConfigurationError):
    """A configuration value or data file is invalid.

    Raised, for example, when the external systems table cannot be parsed.
    """

    error_code = "MOF_CFG_002"
