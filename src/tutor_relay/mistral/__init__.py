"""Mistral completion gateway module."""

from tutor_relay.mistral.client import MistralClient
from tutor_relay.mistral.models import CompletionChoice, CompletionMessage, CompletionResult

__all__ = ["MistralClient", "CompletionChoice", "CompletionMessage", "CompletionResult"]
