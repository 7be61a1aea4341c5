"""partialmask logging configuration."""

from .config import LoggingConfig, ObservabilityConfig, get_config, set_config
from .logging import configure_logging, get_logger

__all__ = [
    "LoggingConfig",
    "ObservabilityConfig",
    "get_config",
    "set_config",
    "configure_logging",
    "get_logger",
]
