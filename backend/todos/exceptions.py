# todos/exceptions.py
"""
Failure types raised by the prioritization and digest stages.

Each pipeline turns these into an explicit outcome before anything reaches
a view; messages here are for server logs only.
"""


class TodoServiceError(Exception):
    """Base class for todo pipeline failures."""


class ReplyParseError(TodoServiceError):
    """The classifier reply could not be parsed as JSON."""


class ClassifierUnavailableError(TodoServiceError):
    """The classifier call failed (network, auth, rate limit, API error)."""


class ClassifierNotConfiguredError(ClassifierUnavailableError):
    """The classifier was used without an API key or client."""


class PriorityUpdateError(TodoServiceError):
    """The priority transaction was rolled back."""


class DigestDeliveryError(TodoServiceError):
    """The mail relay did not accept the digest."""
