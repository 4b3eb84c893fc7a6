"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from audio_vault.shared.core.logging import logger, get_logger
    from audio_vault.shared.core.exceptions import VaultException, NotFoundError

    logger.info("Starting operation", user_id=user_id)
"""

from audio_vault.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from audio_vault.shared.core.exceptions import (
    VaultException,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    UserNotFoundError,
    ItemNotFoundError,
    WildFindNotFoundError,
    NothingIdentifiedError,
    ValidationError,
    InvalidOperationError,
    ConflictError,
    DuplicateResourceError,
    RateLimitError,
    ExternalServiceError,
    AnalysisUnavailableError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "VaultException",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "UserNotFoundError",
    "ItemNotFoundError",
    "WildFindNotFoundError",
    "NothingIdentifiedError",
    "ValidationError",
    "InvalidOperationError",
    "ConflictError",
    "DuplicateResourceError",
    "RateLimitError",
    "ExternalServiceError",
    "AnalysisUnavailableError",
]
