"""Data models for prompt construction."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ModificationIntent(str, Enum):
    """Rewrite operation requested for a previous answer."""

    SHORTEN = "shorten"
    EXPAND = "expand"
    SIMPLIFY = "simplify"
    REPHRASE = "rephrase"
    VERY_SHORT = "very_short"
    NONE = "none"


class KeywordGroup(BaseModel):
    """Trigger substrings that signal one modification intent."""

    model_config = ConfigDict(frozen=True)

    intent: ModificationIntent = Field(..., description="Intent returned when any keyword matches")
    keywords: tuple[str, ...] = Field(..., description="Substrings matched against lowercased text")

    @field_validator("intent")
    @classmethod
    def validate_intent(cls, v: ModificationIntent) -> ModificationIntent:
        if v is ModificationIntent.NONE:
            raise ValueError("intent 'none' cannot have trigger keywords")
        return v

    @field_validator("keywords")
    @classmethod
    def normalize_keywords(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        keywords = tuple(k.lower() for k in v if k.strip())
        if not keywords:
            raise ValueError("keyword group must contain at least one non-blank keyword")
        return keywords


class KeywordGroupsConfig(BaseModel):
    """Root keyword table loaded from YAML. Group order is match precedence."""

    groups: list[KeywordGroup] = Field(..., min_length=1)


class AskRequest(BaseModel):
    """Query parameters of a single ask call."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    subject: str = ""
    topic: str = ""
    modification_request: str = Field("", alias="modificationRequest")
    previous_answer: str = Field("", alias="previousAnswer")

    @property
    def is_empty(self) -> bool:
        """True when nothing identifies what to ask about."""
        return not (self.subject or self.topic or self.modification_request)
