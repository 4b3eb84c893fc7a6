"""
API Handlers

Route handlers for the Vintage Audio Vault API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer; errors raised there
are rendered by the global exception handlers.
"""

from audio_vault.api.handlers import (
    auth_handler,
    health_handler,
    item_handler,
    user_handler,
    wild_find_handler,
)

__all__ = [
    "auth_handler",
    "health_handler",
    "item_handler",
    "user_handler",
    "wild_find_handler",
]
