"""Choose between a fresh subject prompt and a rewrite of a previous answer."""

from tutor_relay.errors import InvalidRequestError
from tutor_relay.prompts.intent import DEFAULT_KEYWORD_GROUPS, detect_modification
from tutor_relay.prompts.models import AskRequest, KeywordGroup, ModificationIntent
from tutor_relay.prompts.templates import MODIFICATION_PROMPTS, build_subject_prompt


def build_prompt(
    request: AskRequest,
    keyword_groups: tuple[KeywordGroup, ...] = DEFAULT_KEYWORD_GROUPS,
) -> str:
    """Produce the single prompt sent to the completion API for a request.

    Raises:
        InvalidRequestError: subject, topic and modification request are all empty.
    """
    if request.is_empty:
        raise InvalidRequestError("Missing subject/topic or modification request")

    if request.modification_request and request.previous_answer:
        intent = detect_modification(request.modification_request, keyword_groups)
        template = MODIFICATION_PROMPTS.get(intent)
        if intent is ModificationIntent.NONE or template is None:
            # Unrecognized rewrite request: the previous answer is sent as-is.
            return request.previous_answer
        return template.format(answer=request.previous_answer)

    return build_subject_prompt(request.subject, request.topic)
