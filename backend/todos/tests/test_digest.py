# todos/tests/test_digest.py
"""
Digest Tests
============

Covers ordering and rendering of the task digest, the mail dispatcher and
the send_task_digest pipeline. Mail goes to Django's locmem backend.
"""

from __future__ import annotations

import smtplib
from unittest.mock import MagicMock

from django.contrib.auth import get_user_model
from django.core import mail
from django.test import SimpleTestCase, TestCase

from todos.digest.mailer import DIGEST_SUBJECT, MailDispatcher
from todos.digest.pipeline import send_task_digest
from todos.digest.renderer import (
    PRIORITY_COLORS,
    STATUS_COMPLETED,
    STATUS_OPEN,
    build_digest_rows,
    render_digest,
)
from todos.exceptions import DigestDeliveryError
from todos.models import Todo
from todos.outcomes import OutcomeStatus

User = get_user_model()


def make_todo(task: str, completed: bool = False, priority: str | None = None) -> Todo:
    """Unsaved todo; the renderer never touches the database."""
    return Todo(task=task, completed=completed, priority=priority)


# ===========================================================================
# RENDERER TESTS
# ===========================================================================


class TestDigestOrdering(SimpleTestCase):

    def test_open_before_done_then_by_priority(self) -> None:
        todos = [
            make_todo("open low", priority="Low"),
            make_todo("open high", priority="High"),
            make_todo("done high", completed=True, priority="High"),
        ]

        rows = build_digest_rows(todos)

        self.assertEqual(
            [(r.task, r.priority_label, r.completed) for r in rows],
            [("open high", "High", False), ("open low", "Low", False), ("done high", "High", True)],
        )

    def test_full_rank_order_with_unset_last(self) -> None:
        todos = [
            make_todo("unset"),
            make_todo("low", priority="Low"),
            make_todo("medium", priority="Medium"),
            make_todo("high", priority="High"),
            make_todo("done unset", completed=True),
            make_todo("done medium", completed=True, priority="Medium"),
        ]

        rows = build_digest_rows(todos)

        self.assertEqual(
            [r.task for r in rows],
            ["high", "medium", "low", "unset", "done medium", "done unset"],
        )

    def test_equal_rank_keeps_input_order(self) -> None:
        todos = [make_todo(f"task {i}", priority="Medium") for i in range(5)]
        self.assertEqual([r.task for r in build_digest_rows(todos)], [t.task for t in todos])

    def test_unset_priority_displays_as_medium(self) -> None:
        todo = make_todo("no priority yet")

        (row,) = build_digest_rows([todo])

        self.assertEqual(row.priority_label, "Medium")
        self.assertEqual(row.color, PRIORITY_COLORS["Medium"])
        self.assertIsNone(todo.priority)

    def test_colors_and_status_labels(self) -> None:
        rows = build_digest_rows([
            make_todo("a", priority="High"),
            make_todo("b", priority="Low"),
            make_todo("c", completed=True, priority="Medium"),
        ])

        self.assertEqual([r.color for r in rows], ["#ef4444", "#3b82f6", "#f59e0b"])
        self.assertEqual(
            [r.status_label for r in rows], [STATUS_OPEN, STATUS_OPEN, STATUS_COMPLETED]
        )


class TestDigestRendering(SimpleTestCase):

    def test_document_contains_header_and_rows_in_order(self) -> None:
        html = render_digest([
            make_todo("Second", priority="Low"),
            make_todo("First", priority="High"),
        ])

        self.assertIn("<h2>Your Updated Task List:</h2>", html)
        self.assertIn("<table", html)
        self.assertLess(html.index("First"), html.index("Second"))
        self.assertIn("color: #ef4444", html)
        self.assertNotIn("<link", html)

    def test_task_text_is_escaped(self) -> None:
        html = render_digest([make_todo("<script>alert(1)</script>")])

        self.assertNotIn("<script>", html)
        self.assertIn("&lt;script&gt;", html)

    def test_rendering_is_deterministic(self) -> None:
        todos = [make_todo("x", priority="Low"), make_todo("y", completed=True)]
        self.assertEqual(render_digest(todos), render_digest(todos))

    def test_empty_list_renders(self) -> None:
        self.assertIn("No tasks yet.", render_digest([]))


# ===========================================================================
# MAIL DISPATCHER TESTS
# ===========================================================================


class TestMailDispatcher(SimpleTestCase):

    def test_sends_html_with_text_alternative(self) -> None:
        dispatcher = MailDispatcher(from_email="relay@example.com")

        dispatcher.send("friend@example.com", "<p>Hello <b>there</b></p>")

        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.subject, DIGEST_SUBJECT)
        self.assertEqual(message.from_email, "relay@example.com")
        self.assertEqual(message.to, ["friend@example.com"])
        self.assertEqual(message.body, "Hello there")
        self.assertEqual(message.alternatives[0][1], "text/html")

    def test_relay_failure_raises_generic_error(self) -> None:
        connection = MagicMock()
        connection.send_messages.side_effect = smtplib.SMTPAuthenticationError(
            535, b"5.7.8 Username and Password not accepted"
        )
        dispatcher = MailDispatcher(from_email="relay@example.com", connection=connection)

        with self.assertLogs("todos.digest.mailer", level="ERROR"):
            with self.assertRaises(DigestDeliveryError) as ctx:
                dispatcher.send("friend@example.com", "<p>x</p>")

        self.assertNotIn("Password", str(ctx.exception))
        connection.send_messages.assert_called_once()

    def test_network_failure_raises(self) -> None:
        connection = MagicMock()
        connection.send_messages.side_effect = ConnectionRefusedError()
        dispatcher = MailDispatcher(connection=connection)

        with self.assertRaises(DigestDeliveryError):
            dispatcher.send("friend@example.com", "<p>x</p>")


# ===========================================================================
# DIGEST PIPELINE TESTS
# ===========================================================================


class TestSendTaskDigest(TestCase):

    def setUp(self) -> None:
        self.owner = User.objects.create_user(email="owner@example.com", password="testpass123")
        self.other = User.objects.create_user(email="other@example.com", password="testpass123")
        Todo.objects.create(user=self.owner, task="Mine", priority="High")
        Todo.objects.create(user=self.other, task="Not mine", priority="High")

    def test_digest_contains_only_owner_todos(self) -> None:
        outcome = send_task_digest(self.owner, "owner@example.com", MailDispatcher())

        self.assertEqual(outcome.status, OutcomeStatus.SENT)
        self.assertEqual(len(mail.outbox), 1)
        html = mail.outbox[0].alternatives[0][0]
        self.assertIn("Mine", html)
        self.assertNotIn("Not mine", html)

    def test_delivery_failure_becomes_service_failure(self) -> None:
        dispatcher = MagicMock()
        dispatcher.send.side_effect = DigestDeliveryError("relay down")

        with self.assertLogs("todos.digest.pipeline", level="WARNING") as logs:
            outcome = send_task_digest(self.owner, "owner@example.com", dispatcher)

        self.assertEqual(outcome.status, OutcomeStatus.SERVICE_FAILURE)
        self.assertIn("Digest delivery failed", logs.output[0])
        self.assertTrue(outcome.is_failure)

    def test_stored_priorities_are_not_modified(self) -> None:
        unset = Todo.objects.create(user=self.owner, task="Unset")

        send_task_digest(self.owner, "owner@example.com", MailDispatcher())

        unset.refresh_from_db()
        self.assertIsNone(unset.priority)
