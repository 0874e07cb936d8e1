# todos/prioritization/updater.py

import logging
from typing import Sequence

from django.db import DatabaseError, transaction

from ..exceptions import PriorityUpdateError
from ..models import Todo
from .reconciler import ValidatedUpdate

logger = logging.getLogger(__name__)


class _MissingTodo(Exception):
    pass


def apply_priority_updates(owner, updates: Sequence[ValidatedUpdate]) -> int:
    """
    Write every update in one transaction, scoped to ``owner``.

    Each update matches on (id, owner). If any of them matches no row, or
    the database raises, the whole set is rolled back and
    ``PriorityUpdateError`` is raised. Returns the number of rows written.
    """
    try:
        with transaction.atomic():
            owned = Todo.objects.owned_by(owner)
            applied = 0
            for update in updates:
                rows = owned.filter(pk=update.todo_id).update(priority=update.priority)
                if rows == 0:
                    raise _MissingTodo(update.todo_id)
                applied += rows
    except _MissingTodo as e:
        raise PriorityUpdateError(
            f"Todo {e.args[0]} does not exist for owner {owner.pk}; transaction rolled back"
        ) from e
    except DatabaseError as e:
        raise PriorityUpdateError(f"Priority transaction failed: {e}") from e

    logger.info(f"Applied {applied} priority update(s) for user {owner.pk}")
    return applied
