# todos/prioritization/reconciler.py

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from ..models import Priority

logger = logging.getLogger(__name__)

_LABELS = {label.lower(): label for label in Priority.values}


@dataclass(frozen=True)
class ValidatedUpdate:
    todo_id: int
    priority: str


def is_valid_candidate(candidate: Any) -> bool:
    """True for a JSON object whose ``id`` is a whole number."""
    if not isinstance(candidate, dict):
        return False
    todo_id = candidate.get("id")
    # bool is an int subclass but never a valid id
    if isinstance(todo_id, bool):
        return False
    if isinstance(todo_id, int):
        return True
    return isinstance(todo_id, float) and todo_id.is_integer()


def normalize_priority(label: Any) -> Optional[str]:
    """Map a label onto High/Medium/Low, ignoring case. None if unrecognised."""
    if not isinstance(label, str):
        return None
    return _LABELS.get(label.strip().lower())


def reconcile(candidates: Iterable[Any]) -> List[ValidatedUpdate]:
    """
    Narrow untrusted candidates down to updates that may touch the database.

    Malformed candidates are dropped without error. Candidates with a
    priority outside the three tiers are dropped as well, with a warning.
    """
    updates: List[ValidatedUpdate] = []
    dropped = 0

    for candidate in candidates:
        if not is_valid_candidate(candidate):
            dropped += 1
            continue

        priority = normalize_priority(candidate.get("priority"))
        if priority is None:
            logger.warning(
                f"Rejected unrecognised priority {candidate.get('priority')!r} "
                f"for todo {candidate['id']}"
            )
            dropped += 1
            continue

        updates.append(ValidatedUpdate(todo_id=int(candidate["id"]), priority=priority))

    if dropped:
        logger.debug(f"Reconciler dropped {dropped} candidate(s)")
    return updates
