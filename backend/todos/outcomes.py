# todos/outcomes.py
"""
Tagged results returned by the prioritization and digest pipelines.

Views only look at ``status``; the detail string stays in server logs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OutcomeStatus(str, Enum):
    UPDATED = "updated"
    NOTHING_TO_PRIORITIZE = "nothing_to_prioritize"
    NO_VALID_UPDATES = "no_valid_updates"
    SENT = "sent"
    PARSE_FAILURE = "parse_failure"
    SERVICE_FAILURE = "service_failure"


FAILURE_STATUSES = frozenset({OutcomeStatus.PARSE_FAILURE, OutcomeStatus.SERVICE_FAILURE})


@dataclass(frozen=True)
class PrioritizationOutcome:
    status: OutcomeStatus
    updated: int = 0
    detail: Optional[str] = None

    @property
    def is_failure(self) -> bool:
        return self.status in FAILURE_STATUSES


@dataclass(frozen=True)
class DigestOutcome:
    status: OutcomeStatus
    detail: Optional[str] = None

    @property
    def is_failure(self) -> bool:
        return self.status in FAILURE_STATUSES
