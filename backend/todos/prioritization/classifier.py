# todos/prioritization/classifier.py
"""
Priority Classifier
===================

Adapter around the OpenAI Chat Completions API that asks a model to sort a
user's open todos into the High / Medium / Low tiers.

This module has NO Django ORM dependencies. It receives plain
``(id, task)`` pairs, builds the prompt, makes exactly one call and hands
the raw reply text back. Parsing and validation happen downstream.

Failure modes:
--------------
- ClassifierNotConfiguredError: no API key, raised when ``classify`` is called
- ClassifierUnavailableError: any OpenAI SDK error (auth, network, rate limit)

No retries: the client is built with ``max_retries=0``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from django.conf import settings
from openai import APIStatusError, OpenAI, OpenAIError

from ..exceptions import ClassifierNotConfiguredError, ClassifierUnavailableError
from ..models import Priority

logger = logging.getLogger(__name__)


# Schema hint sent with every request. Replies are still treated as untrusted.
OUTPUT_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "id": {"type": "integer"},
            "priority": {"type": "string", "enum": list(Priority.values)},
        },
        "required": ["id", "priority"],
    },
}


def build_prompt(open_todos: Sequence[Tuple[int, str]]) -> str:
    """
    Build the single classification prompt for a list of ``(id, task)`` pairs.
    """
    task_list = "\n".join(f"ID {todo_id}: {task}" for todo_id, task in open_todos)
    labels = ", ".join(f'"{label}"' for label in Priority.values)

    return (
        "Based on the following list of tasks, categorize each task into one of "
        f"these priority levels: {labels}.\n"
        "Return the response as a VALID JSON array. Each object MUST have an "
        '"id" (integer) and a "priority" (string) field.\n'
        "Do not include any other text, explanation, or markdown formatting "
        "outside the JSON array.\n"
        f"The output must follow this JSON schema: {json.dumps(OUTPUT_SCHEMA)}\n\n"
        "Tasks:\n"
        "---\n"
        f"{task_list}\n"
        "---"
    )


class PriorityClassifier:
    """
    Sends open todos to the external model and returns its raw reply.

    Like the rest of the external-service layer this class uses DEFERRED
    INITIALIZATION: a missing API key does not fail ``__init__``. The
    instance records ``is_configured`` / ``configuration_error`` and
    ``classify`` raises ``ClassifierNotConfiguredError`` instead.

    Attributes:
        model (str): Chat model identifier.
        timeout (float | None): Per-request timeout; None keeps the SDK default.
        client (OpenAI | None): The SDK client, or None when unconfigured.
    """

    DEFAULT_MODEL: str = "gpt-4o-mini"
    DEFAULT_TEMPERATURE: float = 0.0

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        **client_kwargs: Any,
    ) -> None:
        self.model: str = (
            model or getattr(settings, "PRIORITY_CLASSIFIER_MODEL", None) or self.DEFAULT_MODEL
        )
        self.timeout: Optional[float] = (
            timeout if timeout is not None
            else getattr(settings, "PRIORITY_CLASSIFIER_TIMEOUT", None)
        )
        self._client_kwargs: Dict[str, Any] = client_kwargs

        self.client: Optional[OpenAI] = None
        self.is_configured: bool = False
        self.configuration_error: Optional[str] = None

        self._configure(api_key)

    def _configure(self, api_key: Optional[str]) -> None:
        resolved_key = api_key or getattr(settings, "OPENAI_API_KEY", None) or ""
        if not resolved_key:
            self.configuration_error = (
                "OPENAI_API_KEY is not configured. "
                "Set the OPENAI_API_KEY environment variable or Django setting."
            )
            logger.warning(f"PriorityClassifier: {self.configuration_error}")
            return

        client_kwargs = {"max_retries": 0, **self._client_kwargs}
        if self.timeout is not None:
            client_kwargs.setdefault("timeout", self.timeout)

        try:
            self.client = OpenAI(api_key=resolved_key, **client_kwargs)
        except OpenAIError as e:
            self.configuration_error = f"Failed to initialize OpenAI client: {e}"
            logger.error(f"PriorityClassifier: {self.configuration_error}")
            return

        self.is_configured = True
        logger.info(f"PriorityClassifier initialized with model={self.model}")

    def classify(self, open_todos: Sequence[Tuple[int, str]]) -> str:
        """
        Ask the model for a priority per todo.

        Args:
            open_todos: ``(id, task)`` pairs of the caller's open todos.

        Returns:
            The raw reply text, which may or may not be valid JSON.

        Raises:
            ClassifierNotConfiguredError: No API key was configured.
            ClassifierUnavailableError: The API call failed.
        """
        if not self.is_configured or self.client is None:
            raise ClassifierNotConfiguredError(
                self.configuration_error or "Classifier not available"
            )

        messages: List[Dict[str, str]] = [
            {"role": "user", "content": build_prompt(open_todos)},
        ]

        logger.debug(f"PriorityClassifier: classifying {len(open_todos)} todos")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.DEFAULT_TEMPERATURE,
            )
        except APIStatusError as e:
            raise ClassifierUnavailableError(
                f"OpenAI API error (status {e.status_code})"
            ) from e
        except OpenAIError as e:
            raise ClassifierUnavailableError(
                f"OpenAI request failed: {type(e).__name__}"
            ) from e

        raw_content: str = response.choices[0].message.content or ""
        logger.debug(f"PriorityClassifier: raw reply: {raw_content[:200]}")
        return raw_content

