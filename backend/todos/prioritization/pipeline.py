# todos/prioritization/pipeline.py

import logging

from ..exceptions import ClassifierUnavailableError, PriorityUpdateError, ReplyParseError
from ..models import Todo
from ..outcomes import OutcomeStatus, PrioritizationOutcome
from .reconciler import reconcile
from .sanitizer import sanitize_reply
from .updater import apply_priority_updates

logger = logging.getLogger(__name__)


def prioritize_open_todos(owner, classifier) -> PrioritizationOutcome:
    """
    Classify ``owner``'s open todos and store the resulting priorities.

    Stages: classifier -> sanitizer -> reconciler -> atomic update.
    Every stage failure becomes an explicit outcome; nothing is retried.
    """
    open_todos = list(
        Todo.objects.owned_by(owner).open().order_by('id').values_list('id', 'task')
    )
    if not open_todos:
        logger.info(f"User {owner.pk} has no open todos to prioritize")
        return PrioritizationOutcome(OutcomeStatus.NOTHING_TO_PRIORITIZE)

    try:
        reply = classifier.classify(open_todos)
    except ClassifierUnavailableError as e:
        logger.exception(f"Priority classifier failed for user {owner.pk}: {e}")
        return PrioritizationOutcome(OutcomeStatus.SERVICE_FAILURE, detail=str(e))

    try:
        candidates = sanitize_reply(reply)
    except ReplyParseError as e:
        logger.exception(f"Unparseable classifier reply for user {owner.pk}: {e}")
        return PrioritizationOutcome(OutcomeStatus.PARSE_FAILURE, detail=str(e))

    updates = reconcile(candidates)
    if not updates:
        logger.warning(
            f"Classifier returned {len(candidates)} candidate(s) for user {owner.pk} "
            "but none were valid"
        )
        return PrioritizationOutcome(OutcomeStatus.NO_VALID_UPDATES)

    try:
        applied = apply_priority_updates(owner, updates)
    except PriorityUpdateError as e:
        logger.exception(f"Priority update failed for user {owner.pk}: {e}")
        return PrioritizationOutcome(OutcomeStatus.SERVICE_FAILURE, detail=str(e))

    return PrioritizationOutcome(OutcomeStatus.UPDATED, updated=applied)
