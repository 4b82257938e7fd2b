"""Keyword-based detection of answer modification requests."""

import structlog
import yaml

from tutor_relay.prompts.models import KeywordGroup, KeywordGroupsConfig, ModificationIntent

logger = structlog.get_logger()

# Declaration order is match precedence: the first matching group wins.
DEFAULT_KEYWORD_GROUPS: tuple[KeywordGroup, ...] = (
    KeywordGroup(
        intent=ModificationIntent.SHORTEN,
        keywords=(
            "коротше", "скороти", "зменши", "стисни", "резюмуй", "резюме",
            "shorter", "shorten", "summarize", "condense", "brief", "compress",
        ),
    ),
    KeywordGroup(
        intent=ModificationIntent.EXPAND,
        keywords=(
            "розшир", "доповни", "глибше", "більше деталей", "розгорни",
            "expand", "elaborate", "more details", "deepen",
        ),
    ),
    KeywordGroup(
        intent=ModificationIntent.SIMPLIFY,
        keywords=(
            "спрост", "зроби простіше", "зрозуміліше", "легше",
            "simplify", "easier", "make it simple", "clarify",
        ),
    ),
    KeywordGroup(
        intent=ModificationIntent.REPHRASE,
        keywords=(
            "перефразуй", "по-іншому", "інакше скажи", "інакше сформулюй",
            "rephrase", "reword", "rewrite", "alternative phrasing",
        ),
    ),
    KeywordGroup(
        intent=ModificationIntent.VERY_SHORT,
        keywords=(
            "дуже коротко", "зроби дуже коротким",
            "make it very short", "shortest",
        ),
    ),
)


def detect_modification(
    text: str,
    keyword_groups: tuple[KeywordGroup, ...] = DEFAULT_KEYWORD_GROUPS,
) -> ModificationIntent:
    """Return the intent of the first keyword group found in ``text``.

    Matching is a case-insensitive substring test. Returns
    ``ModificationIntent.NONE`` for empty text or when no group matches.
    """
    if not text:
        return ModificationIntent.NONE

    lowered = text.lower()
    for group in keyword_groups:
        if any(keyword in lowered for keyword in group.keywords):
            return group.intent
    return ModificationIntent.NONE


def load_keyword_groups(path: str) -> tuple[KeywordGroup, ...]:
    """Load an ordered keyword table from a YAML file.

    Expected layout::

        groups:
          - intent: shorten
            keywords: [shorter, summarize]
          - intent: expand
            keywords: [expand]
    """
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    config = KeywordGroupsConfig(**(raw or {}))
    logger.info(
        "intent_keywords_loaded",
        path=path,
        intents=[group.intent.value for group in config.groups],
    )
    return tuple(config.groups)
