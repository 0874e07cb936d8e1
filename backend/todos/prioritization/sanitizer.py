# todos/prioritization/sanitizer.py

import json
import logging
import re
from typing import Any, List

from ..exceptions import ReplyParseError

logger = logging.getLogger(__name__)

FENCE = "```"
# Language tag right after an opening fence, e.g. ```json. A bare JSON
# literal (```null```) or number (```123```) is payload, not a tag.
_FENCE_LANGUAGE = re.compile(r"^(?!(?:true|false|null)\b)[A-Za-z][A-Za-z0-9_+-]*")


def strip_code_fence(text: str) -> str:
    """
    Remove a markdown code fence wrapped around the reply.

    Only applies when the (trimmed) text starts with a fence: the opening
    marker and its language tag are dropped, as is everything from the last
    closing marker onward.
    """
    cleaned = text.strip()
    if not cleaned.startswith(FENCE):
        return cleaned

    body = cleaned[len(FENCE):]
    tag = _FENCE_LANGUAGE.match(body)
    if tag:
        body = body[tag.end():]
    closing = body.rfind(FENCE)
    if closing != -1:
        body = body[:closing]
    return body.strip()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name!r}")


def sanitize_reply(text: str) -> List[Any]:
    """
    Turn raw classifier output into a list of priority candidates.

    Raises:
        ReplyParseError: The text is not valid JSON.

    A reply that parses but is not a JSON array is logged and treated as
    "nothing to update" (an empty list).
    """
    cleaned = strip_code_fence(text or "")

    try:
        parsed = json.loads(cleaned, parse_constant=_reject_constant)
    except ValueError as e:
        raise ReplyParseError(f"Classifier reply is not valid JSON: {e}") from e

    if not isinstance(parsed, list):
        logger.warning(
            f"Classifier returned non-array structure ({type(parsed).__name__}); "
            "treating as no updates"
        )
        return []

    return parsed
