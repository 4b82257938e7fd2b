"""Client for the Mistral chat completions API."""

from __future__ import annotations

import httpx
import structlog
from openai import APIStatusError, AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from tutor_relay.config import Settings
from tutor_relay.errors import InternalError, UpstreamError
from tutor_relay.mistral.models import CompletionResult

logger = structlog.get_logger()


def _error_message(body: object) -> str | None:
    """Pull the remote-supplied message out of an error body.

    The SDK usually unwraps ``{"error": {...}}`` already, so both the wrapped
    and the bare form are accepted.
    """
    if not isinstance(body, dict):
        return None
    error = body.get("error", body)
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return None


class MistralClient:
    """Async client making one chat completion call per prompt.

    Uses AsyncOpenAI against Mistral's OpenAI-compatible endpoint with SDK
    retries disabled. The raw JSON body is returned, validated but unchanged.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = AsyncOpenAI(
            base_url=settings.mistral_api_url,
            api_key=settings.mistral_api_key,
            timeout=settings.mistral_timeout,
            max_retries=0,
            http_client=http_client,
        )
        self._model = settings.mistral_model

    async def complete(self, prompt: str) -> CompletionResult:
        """Send ``prompt`` as a single user message.

        Raises:
            UpstreamError: Mistral answered with a non-2xx status.
            InternalError: network failure or an unexpected response body.
        """
        logger.info(
            "mistral_request_start",
            model=self._model,
            prompt_length=len(prompt),
        )

        try:
            response = await self._client.chat.completions.with_raw_response.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
            )
            result = CompletionResult.model_validate(response.http_response.json())
        except APIStatusError as e:
            message = _error_message(e.body)
            logger.error(
                "mistral_api_error",
                status_code=e.status_code,
                message=message or e.message,
            )
            raise UpstreamError(e.status_code, message or "Unknown error") from e
        except (OpenAIError, ValidationError, ValueError) as e:
            logger.error(
                "mistral_unexpected_error",
                model=self._model,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise InternalError() from e

        logger.info(
            "mistral_request_complete",
            model=result.model,
            completion_id=result.id,
            choice_count=len(result.choices),
        )
        return result

    async def close(self) -> None:
        await self._client.close()
