"""
Adapter Dependencies

External clients are built once in create_application() and parked on
`app.state`; these dependencies hand them to the request.

Tests build the application with fake adapters, so nothing here constructs
a client on its own.
"""

from typing import Annotated

from fastapi import Depends, Request

from audio_vault.shared.adapters.openai_adapter import OpenAIAdapter
from audio_vault.shared.adapters.storage_adapter import StorageAdapter


def get_storage(request: Request) -> StorageAdapter:
    return request.app.state.storage_adapter


def get_openai(request: Request) -> OpenAIAdapter:
    return request.app.state.openai_adapter


Storage = Annotated[StorageAdapter, Depends(get_storage)]
OpenAI = Annotated[OpenAIAdapter, Depends(get_openai)]
