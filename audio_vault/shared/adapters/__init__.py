"""
Adapters Package

External service integrations.

Contents:
=========
- openai_adapter: Hosted model client (JSON completions with images)
- storage_adapter: S3 photo storage

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Both adapters are constructed once by create_application() and reach
handlers through FastAPI dependencies (api/dependencies/adapters.py).

Usage:
======
    from audio_vault.shared.adapters.openai_adapter import OpenAIAdapter
    from audio_vault.shared.adapters.storage_adapter import StorageAdapter
"""

from audio_vault.shared.adapters.openai_adapter import (
    CompletionResult,
    ImageInput,
    OpenAIAdapter,
    get_openai_adapter,
)
from audio_vault.shared.adapters.storage_adapter import (
    ANALYSIS_IMAGE_PREFIX,
    ITEM_PHOTO_PREFIX,
    StorageAdapter,
    analysis_prefix,
    UploadedFile,
    get_storage_adapter,
)

__all__ = [
    "ANALYSIS_IMAGE_PREFIX",
    "ITEM_PHOTO_PREFIX",
    "CompletionResult",
    "ImageInput",
    "OpenAIAdapter",
    "StorageAdapter",
    "UploadedFile",
    "analysis_prefix",
    "get_openai_adapter",
    "get_storage_adapter",
]
