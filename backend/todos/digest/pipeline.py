# todos/digest/pipeline.py

import logging

from ..exceptions import DigestDeliveryError
from ..models import Todo
from ..outcomes import DigestOutcome, OutcomeStatus
from .renderer import render_digest

logger = logging.getLogger(__name__)


def send_task_digest(owner, target_email: str, dispatcher) -> DigestOutcome:
    """Render every todo of ``owner`` and mail the digest to ``target_email``."""
    todos = list(Todo.objects.owned_by(owner).order_by('id'))
    html_body = render_digest(todos)

    try:
        dispatcher.send(target_email, html_body)
    except DigestDeliveryError as e:
        logger.warning(f"Digest delivery failed for user {owner.pk}: {e}")
        return DigestOutcome(OutcomeStatus.SERVICE_FAILURE, detail=str(e))

    logger.info(f"Digest of {len(todos)} todo(s) sent for user {owner.pk}")
    return DigestOutcome(OutcomeStatus.SENT)
