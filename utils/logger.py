"""
Logger utility for the Deadlock Graph Analyzer.

Console logging with report severities, a verbose-only debug level and an
optional log file mirror.
"""

from typing import Optional, TextIO
from datetime import datetime

from analysis.events import DeadlockReport
from models.graph_model import GraphModel


# Prefix per level; levels without an entry print bare
LEVEL_PREFIXES = {
    "error": "[ERROR]",
    "warning": "[WARNING]",
    "success": "[OK]",
    "debug": "[DEBUG]",
}


class AnalyzerLogger:
    """
    Logger for analysis results and intermediate state.

    Format: "[ERROR] Deadlock detected! Processes [p1, p2] are stuck."

    Usable as a context manager; the log file is closed on exit.
    """

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        self.verbose = verbose
        self.log_file = log_file
        self._sink: Optional[TextIO] = None

        if log_file:
            self._sink = open(log_file, 'w', encoding='utf-8')
            started = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self._sink.write(f"Deadlock Analysis Log - {started}\n{'='*60}\n\n")

    def __enter__(self) -> "AnalyzerLogger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def log(self, message: str, level: str = "info") -> None:
        """
        Log a message.

        Args:
            message: Message to log
            level: info, success, warning, error, or debug (verbose only)
        """
        if level == "debug" and not self.verbose:
            return

        prefix = LEVEL_PREFIXES.get(level)
        self._emit(f"{prefix} {message}" if prefix else message)

    def _emit(self, line: str) -> None:
        print(line)
        if self._sink:
            self._sink.write(line + "\n")
            self._sink.flush()

    def log_report(self, report: DeadlockReport) -> None:
        """
        Log every entry of a report at its own severity.

        Args:
            report: Analysis result
        """
        for entry in report.log:
            self.log(entry.message, entry.severity.value)

        if report.is_deadlocked:
            self.log(f"Deadlocked resources: [{', '.join(report.deadlocked_resource_ids)}]")
            for i, cycle in enumerate(report.cycles, start=1):
                self.log(f"Cycle {i}: {' -> '.join(cycle)}", "debug")

    def log_model(self, model: GraphModel) -> None:
        """Log the parsed matrices (verbose only)."""
        if self.verbose:
            self.log(f"Parsed graph:\n{model.display()}", "debug")

    def close(self) -> None:
        """Close the log file if open."""
        if self._sink:
            self._sink.close()
            self._sink = None
