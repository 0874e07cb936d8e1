"""
Task digest: ordering, HTML rendering and mail delivery of a user's todos.
"""

from .mailer import DIGEST_SUBJECT, MailDispatcher
from .pipeline import send_task_digest
from .renderer import DigestRow, build_digest_rows, render_digest

__all__ = [
    "DIGEST_SUBJECT",
    "DigestRow",
    "MailDispatcher",
    "build_digest_rows",
    "render_digest",
    "send_task_digest",
]
