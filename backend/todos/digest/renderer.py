# todos/digest/renderer.py

from dataclasses import dataclass
from typing import Iterable, List

from django.template.loader import render_to_string

from ..models import Priority

DIGEST_TEMPLATE = "todos/email/task_digest.html"

# Unset priority ranks below Low.
PRIORITY_RANK = {
    Priority.HIGH.value: 3,
    Priority.MEDIUM.value: 2,
    Priority.LOW.value: 1,
}

PRIORITY_COLORS = {
    Priority.HIGH.value: "#ef4444",
    Priority.MEDIUM.value: "#f59e0b",
    Priority.LOW.value: "#3b82f6",
}

DEFAULT_DISPLAY_PRIORITY = Priority.MEDIUM

STATUS_COMPLETED = "✅ Completed"
STATUS_OPEN = "⏳ Open"


@dataclass(frozen=True)
class DigestRow:
    task: str
    priority_label: str
    completed: bool
    status_label: str
    color: str


def digest_sort_key(todo):
    """Open before completed, then High > Medium > Low > unset."""
    return (todo.completed, -PRIORITY_RANK.get(todo.priority, 0))


def build_digest_rows(todos: Iterable) -> List[DigestRow]:
    """
    Order todos for the digest and project them onto display rows.

    ``sorted`` is stable, so todos with the same rank keep the order they
    were read in. Unset priorities display as Medium; the todos themselves
    are not modified.
    """
    rows = []
    for todo in sorted(todos, key=digest_sort_key):
        display_priority = Priority(todo.priority) if todo.priority else DEFAULT_DISPLAY_PRIORITY
        rows.append(DigestRow(
            task=todo.task,
            priority_label=display_priority.value,
            completed=todo.completed,
            status_label=STATUS_COMPLETED if todo.completed else STATUS_OPEN,
            color=PRIORITY_COLORS[display_priority.value],
        ))
    return rows


def render_digest(todos: Iterable) -> str:
    """Render a self-contained HTML document listing ``todos``."""
    return render_to_string(DIGEST_TEMPLATE, {"rows": build_digest_rows(todos)})
