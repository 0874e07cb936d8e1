# todos/prioritization/__init__.py
"""
Prioritization Package
======================

AI-assisted priority reconciliation for a user's open todos.

Modules:
--------
- classifier: OpenAI adapter that builds the prompt and returns raw reply text
- sanitizer: strips code fences and parses the reply strictly as JSON
- reconciler: narrows parsed candidates to ValidatedUpdate records
- updater: applies all updates in one owner-scoped transaction
- pipeline: runs the stages and returns a PrioritizationOutcome

Flow:
-----
    classifier.classify -> sanitize_reply -> reconcile -> apply_priority_updates

Usage:
------
    from todos.prioritization import PriorityClassifier, prioritize_open_todos

    outcome = prioritize_open_todos(request.user, PriorityClassifier())
"""

from .classifier import PriorityClassifier, build_prompt
from .pipeline import prioritize_open_todos
from .reconciler import ValidatedUpdate, is_valid_candidate, normalize_priority, reconcile
from .sanitizer import sanitize_reply, strip_code_fence
from .updater import apply_priority_updates

__all__ = [
    "PriorityClassifier",
    "ValidatedUpdate",
    "apply_priority_updates",
    "build_prompt",
    "is_valid_candidate",
    "normalize_priority",
    "prioritize_open_todos",
    "reconcile",
    "sanitize_reply",
    "strip_code_fence",
]
