"""
Test doubles and request helpers shared by the test modules.
"""

import json
from collections import deque
from typing import Any, Optional, Sequence

from httpx import AsyncClient

from audio_vault.shared.adapters.openai_adapter import CompletionResult, ImageInput, OpenAIAdapter
from audio_vault.shared.adapters.storage_adapter import StorageAdapter


PUBLIC_BASE_URL = "https://photos.test"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


# ═══════════════════════════════════════════════════════════════════════════════
# FAKE ADAPTERS
# ═══════════════════════════════════════════════════════════════════════════════


class FakeStorage(StorageAdapter):
    """StorageAdapter that keeps objects in a dict instead of S3."""

    def __init__(self) -> None:
        super().__init__(bucket_name="test-bucket", public_base_url=PUBLIC_BASE_URL)
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []

    def _put_object(self, key: str, data: bytes, content_type: str) -> None:
        self.objects[key] = data

    def _delete_object(self, key: str) -> None:
        self.objects.pop(key, None)
        self.deleted.append(key)


class FakeOpenAI(OpenAIAdapter):
    """
    OpenAIAdapter answering from a script.

    Queue dicts (returned as JSON), raw strings (returned verbatim) or
    exceptions (raised) with `queue()`; calls are recorded in `calls`.
    """

    def __init__(self) -> None:
        super().__init__(api_key="test-key", vision_model="vision-test", text_model="text-test")
        self.responses: deque = deque()
        self.calls: list[dict[str, Any]] = []

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        images: Sequence[ImageInput] = (),
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> CompletionResult:
        self.calls.append({"prompt": user_prompt, "images": list(images), "json_mode": json_mode})
        if not self.responses:
            raise AssertionError(f"Unexpected AI call: {user_prompt[:80]}")

        response = self.responses.popleft()
        if isinstance(response, Exception):
            raise response
        content = response if isinstance(response, str) else json.dumps(response)
        return CompletionResult(
            content=content,
            model=self.vision_model if images else self.text_model,
            usage_prompt_tokens=0,
            usage_completion_tokens=0,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# REQUEST HELPERS
# ═══════════════════════════════════════════════════════════════════════════════


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def register(
    client: AsyncClient,
    email: str,
    password: str = "secret123",
    username: Optional[str] = None,
) -> dict[str, Any]:
    """Register through the API and return {"token", "id", "headers"}."""
    body: dict[str, Any] = {"email": email, "password": password}
    if username:
        body["username"] = username
    response = await client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.text
    data = response.json()
    return {
        "token": data["token"],
        "id": data["user"]["id"],
        "headers": auth_headers(data["token"]),
    }


PIONEER = {
    "make": "Pioneer",
    "model": "SX-780",
    "itemType": "Receiver",
    "condition": "Good",
    "isFullyFunctional": True,
}


async def create_item(client: AsyncClient, headers: dict[str, str], **overrides: Any) -> dict[str, Any]:
    response = await client.post("/api/items", json={**PIONEER, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()
