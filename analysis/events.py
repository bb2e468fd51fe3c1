"""
Report Model for the Deadlock Graph Analyzer.

Defines the log entries and the final deadlock report handed back to callers.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List


class Severity(Enum):
    """Severity of a report log entry."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class LogEntry:
    """
    A single human-readable message in the report log.

    The timestamp does not take part in equality, so two analyses of the
    same graph compare equal.
    """
    message: str
    severity: Severity
    timestamp: datetime = field(default_factory=datetime.now, compare=False)

    def __str__(self) -> str:
        return f"[{self.severity.value.upper()}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class DeadlockReport:
    """
    Result of analysing one graph snapshot.

    Attributes:
        is_deadlocked: True when at least one process cannot finish
        deadlocked_process_ids: Stuck processes, in input order
        deadlocked_resource_ids: Resources held or requested by stuck processes
        cycles: Explanatory circular waits, each an ordered list of node ids
        safe_sequence: Order in which the finishable processes were reduced
        log: Ordered messages describing the outcome
    """
    is_deadlocked: bool
    deadlocked_process_ids: List[str] = field(default_factory=list)
    deadlocked_resource_ids: List[str] = field(default_factory=list)
    cycles: List[List[str]] = field(default_factory=list)
    safe_sequence: List[str] = field(default_factory=list)
    log: List[LogEntry] = field(default_factory=list)

    def get_entries_by_severity(self, severity: Severity) -> List[LogEntry]:
        """Get all log entries of a specific severity."""
        return [e for e in self.log if e.severity == severity]

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form using the keys the front end expects."""
        return {
            "isDeadlocked": self.is_deadlocked,
            "deadlockedProcessIds": list(self.deadlocked_process_ids),
            "deadlockedResourceIds": list(self.deadlocked_resource_ids),
            "cycles": [list(c) for c in self.cycles],
            "safeSequence": list(self.safe_sequence),
            "log": [entry.to_dict() for entry in self.log],
        }

    def display(self) -> str:
        """Format all log entries for display."""
        return "\n".join(str(entry) for entry in self.log)
