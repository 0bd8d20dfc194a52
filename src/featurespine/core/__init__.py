"""featurespine core -- errors, gates, logging and settings shared by all adapters.

Architecture::

    errors.py      Structured error hierarchy (FeatureSpineError, ConfigError)
    gates.py       Gate types + default_config()
    logging.py     structlog configuration and get_logger()
    settings.py    FeatureSpineSettings (pydantic-settings) + get_settings()
"""

from featurespine.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    FeatureSpineError,
    InvalidConfigError,
    InvalidFeatureKeyError,
    InvalidGateError,
    StorageError,
    ValidationError,
)
from featurespine.core.gates import Gate, GateDataType, default_config
from featurespine.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    unbind_context,
)
from featurespine.core.settings import FeatureSpineSettings, clear_settings_cache, get_settings

__all__ = [
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "FeatureSpineError",
    "ConfigError",
    "InvalidConfigError",
    "ValidationError",
    "InvalidGateError",
    "InvalidFeatureKeyError",
    "StorageError",
    # Gates
    "Gate",
    "GateDataType",
    "default_config",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
    # Settings
    "FeatureSpineSettings",
    "get_settings",
    "clear_settings_cache",
]
