"""
Collector for data-integrity problems found while querying a schedule.

Integrity problems never stop a query: the offending entry is skipped, the
issue is logged and kept here for callers that want to report it.
"""
from dataclasses import dataclass
from typing import List, Optional

from tripfinder.logger import get_logger

logger = get_logger("diagnostics")

UNKNOWN_STOP = "unknown_stop"
UNKNOWN_TRIP = "unknown_trip"
DUPLICATE_SEQUENCE = "duplicate_sequence"
MISSING_COORDINATES = "missing_coordinates"


@dataclass(frozen=True)
class IntegrityIssue:
    kind: str
    message: str
    trip_id: Optional[str] = None
    stop_id: Optional[str] = None


class Diagnostics:
    """Append-only log of IntegrityIssue records, deduplicated."""

    def __init__(self):
        self._issues: List[IntegrityIssue] = []
        self._seen: set[IntegrityIssue] = set()

    def report(self, kind: str, message: str, trip_id: Optional[str] = None,
               stop_id: Optional[str] = None) -> None:
        issue = IntegrityIssue(kind=kind, message=message, trip_id=trip_id, stop_id=stop_id)
        if issue in self._seen:
            return
        self._seen.add(issue)
        self._issues.append(issue)
        logger.warning(message)

    @property
    def issues(self) -> tuple[IntegrityIssue, ...]:
        return tuple(self._issues)

    def of_kind(self, kind: str) -> List[IntegrityIssue]:
        return [issue for issue in self._issues if issue.kind == kind]

    def __len__(self) -> int:
        return len(self._issues)
