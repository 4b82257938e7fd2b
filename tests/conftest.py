"""Pytest fixtures for tutor-relay tests."""

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from tutor_relay.config import Settings
from tutor_relay.mistral.models import CompletionResult


@pytest.fixture
def mock_env_vars():
    """Mock environment variables for testing."""
    env_vars = {
        "MISTRAL_API_KEY": "test-key",
        "HOST": "127.0.0.1",
        "PORT": "4444",
        "LOG_LEVEL": "DEBUG",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def settings(mock_env_vars) -> Settings:
    """Create Settings instance with mocked environment."""
    return Settings(_env_file=None)


@pytest.fixture
def completion_body():
    """Successful chat completion body as sent by Mistral."""
    return {
        "id": "cmpl-e5cc70bb28c444948073e77776eb30ef",
        "object": "chat.completion",
        "created": 1702256327,
        "model": "mistral-medium",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "A derivative measures change."},
                "finish_reason": "stop",
            },
        ],
        "usage": {"prompt_tokens": 16, "completion_tokens": 34, "total_tokens": 50},
    }


@pytest.fixture
def mock_mistral_client(completion_body):
    """Mock MistralClient returning a fixed completion."""
    client = MagicMock()
    client.complete = AsyncMock(
        return_value=CompletionResult.model_validate(completion_body)
    )
    client.close = AsyncMock()
    return client
