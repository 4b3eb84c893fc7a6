"""
OpenAI adapter - hosted model client for the AI analysis gateway.

Provides:
- JSON-mode chat completions
- Image inputs (uploaded bytes as data URLs, stored photos by URL)

The adapter only talks to the API. It logs and re-raises SDK errors;
AnalysisService turns them into application errors.
"""

import base64
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from openai import APIConnectionError, APIError, AsyncOpenAI, RateLimitError

from ...config.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class ImageInput:
    """
    An image handed to the model.

    Either raw bytes (an upload that has not been stored) or a URL of an
    already stored photo.
    """

    data: Optional[bytes] = None
    content_type: str = "image/jpeg"
    url: Optional[str] = None

    def as_url(self) -> str:
        if self.url:
            return self.url
        if self.data is None:
            raise ValueError("ImageInput needs either data or url")
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


@dataclass
class CompletionResult:
    """Result of a chat completion."""

    content: str
    model: str
    usage_prompt_tokens: int
    usage_completion_tokens: int


class OpenAIAdapter:
    """
    Adapter for OpenAI chat completions.

    Two models are configured: a vision model for anything that looks at
    photos and a cheaper text model for text-only prompts.
    """

    COMPLETION_MAX_TOKENS = 2048

    def __init__(
        self,
        api_key: Optional[str] = None,
        vision_model: Optional[str] = None,
        text_model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize OpenAI adapter.

        Args:
            api_key: OpenAI API key. If not provided, uses settings.
            vision_model: Model used when images are attached
            text_model: Model used for text-only prompts
            timeout: Per-request timeout in seconds
        """
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.vision_model = vision_model or settings.OPENAI_VISION_MODEL
        self.text_model = text_model or settings.OPENAI_TEXT_MODEL
        self.timeout = timeout or settings.OPENAI_TIMEOUT_SECONDS
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-loaded async OpenAI client."""
        if self._client is None:
            if not self.api_key:
                raise ValueError("OpenAI API key not configured")
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout)
        return self._client

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        images: Sequence[ImageInput] = (),
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> CompletionResult:
        """
        Generate a chat completion.

        Args:
            system_prompt: System instruction
            user_prompt: User message
            images: Images attached to the user message
            temperature: Sampling temperature (0-1)
            max_tokens: Maximum tokens in response
            json_mode: Ask the API for a JSON object response

        Returns:
            CompletionResult with generated text
        """
        user_content: List[Dict[str, Any]] = [{"type": "text", "text": user_prompt}]
        for image in images:
            user_content.append({"type": "image_url", "image_url": {"url": image.as_url()}})

        params: Dict[str, Any] = {
            "model": self.vision_model if images else self.text_model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens or self.COMPLETION_MAX_TOKENS,
        }
        if json_mode:
            params["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(**params)
        except RateLimitError as e:
            logger.warning("OpenAI rate limit hit: %s", e)
            raise
        except APIConnectionError as e:
            logger.error("OpenAI connection error: %s", e)
            raise
        except APIError as e:
            logger.error("OpenAI API error: %s", e)
            raise

        choice = response.choices[0]
        usage = response.usage

        return CompletionResult(
            content=choice.message.content or "",
            model=response.model,
            usage_prompt_tokens=usage.prompt_tokens if usage else 0,
            usage_completion_tokens=usage.completion_tokens if usage else 0,
        )

    async def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        images: Sequence[ImageInput] = (),
        temperature: float = 0.2,
    ) -> Dict[str, Any]:
        """
        Generate a completion and parse it as a JSON object.

        Raises:
            ValueError: If the response is not a JSON object
        """
        result = await self.complete(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            images=images,
            temperature=temperature,
            json_mode=True,
        )

        content = result.content.strip()

        # Handle markdown code blocks
        if content.startswith("```json"):
            content = content[7:]
        if content.startswith("```"):
            content = content[3:]
        if content.endswith("```"):
            content = content[:-3]

        try:
            parsed = json.loads(content.strip())
        except json.JSONDecodeError as e:
            logger.error("Failed to parse JSON response: %s", content[:200])
            raise ValueError(f"Invalid JSON response from LLM: {e}") from e

        if not isinstance(parsed, dict):
            raise ValueError("LLM response is not a JSON object")
        return parsed


# Singleton instance for convenience
_openai_adapter: Optional[OpenAIAdapter] = None


def get_openai_adapter() -> OpenAIAdapter:
    """Get or create OpenAI adapter singleton."""
    global _openai_adapter
    if _openai_adapter is None:
        _openai_adapter = OpenAIAdapter()
    return _openai_adapter
