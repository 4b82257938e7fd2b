"""Prompt construction module."""

from tutor_relay.prompts.builder import build_prompt
from tutor_relay.prompts.intent import (
    DEFAULT_KEYWORD_GROUPS,
    detect_modification,
    load_keyword_groups,
)
from tutor_relay.prompts.models import AskRequest, KeywordGroup, ModificationIntent
from tutor_relay.prompts.templates import build_subject_prompt

__all__ = [
    "AskRequest",
    "DEFAULT_KEYWORD_GROUPS",
    "KeywordGroup",
    "ModificationIntent",
    "build_prompt",
    "build_subject_prompt",
    "detect_modification",
    "load_keyword_groups",
]
