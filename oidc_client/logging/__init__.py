"""
Logging

Logging structuré du client OIDC:
- Entrées JSON horodatées ISO 8601 UTC
- Niveaux DEBUG, INFO, WARN, ERROR, CRITICAL (NONE = silencieux)
- Masquage des codes, tokens et state (dictionnaires et URLs)
- Configuration globale au processus
"""

from .interfaces import (
    # Enums
    LogLevel,
    # Dataclasses
    LogEntry,
    LogConfig,
    # Interfaces
    IStructuredLogger,
    ISensitiveMasker,
)
from .sensitive_masker import (
    SensitiveMasker,
)
from .structured_logger import (
    StructuredLogger,
    ContextualLogger,
    configure_logging,
    get_logging_config,
    get_logger,
    parse_log_level,
    # Exceptions
    InvalidLogLevelError,
)

__all__ = [
    # Enums
    "LogLevel",
    # Dataclasses
    "LogEntry",
    "LogConfig",
    # Interfaces
    "IStructuredLogger",
    "ISensitiveMasker",
    # Implementations
    "SensitiveMasker",
    "StructuredLogger",
    "ContextualLogger",
    # Functions
    "configure_logging",
    "get_logging_config",
    "get_logger",
    "parse_log_level",
    # Exceptions
    "InvalidLogLevelError",
]
