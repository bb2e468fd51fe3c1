"""
Report Builder for the Deadlock Graph Analyzer.

Assembles the final DeadlockReport and its human-readable log.
"""

from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from models.graph import Node, as_node
from analysis.events import DeadlockReport, LogEntry, Severity


def build_report(
    finish: Dict[str, bool],
    safe_sequence: Sequence[str],
    deadlocked_pids: Sequence[str],
    deadlocked_rids: Sequence[str],
    cycles: Sequence[Sequence[str]],
    nodes: Iterable[Any],
    clock: Optional[Callable[[], datetime]] = None
) -> DeadlockReport:
    """
    Build the report for one analysis.

    Log:
    - Deadlock: an error entry naming the stuck processes, then an info
      entry rendering the first cycle through node labels (if any cycle)
    - Safe: a success entry naming the safe sequence

    Args:
        finish: pid -> finished flag from graph reduction
        safe_sequence: Reduction order
        deadlocked_pids: Processes that could not finish
        deadlocked_rids: Resources held or requested by them
        cycles: Explanatory cycles
        nodes: Graph nodes, used to resolve labels
        clock: Timestamp source (defaults to datetime.now)

    Returns:
        New DeadlockReport
    """
    clock = clock or datetime.now
    labels = _label_lookup(nodes)
    is_deadlocked = len(deadlocked_pids) > 0
    log: List[LogEntry] = []

    if is_deadlocked:
        log.append(LogEntry(
            message=f"Deadlock detected! Processes [{', '.join(deadlocked_pids)}] are stuck.",
            severity=Severity.ERROR,
            timestamp=clock()
        ))
        if cycles:
            rendered = " -> ".join(str(labels.get(node_id) or node_id) for node_id in cycles[0])
            log.append(LogEntry(
                message=f"Circular wait detected: {rendered}",
                severity=Severity.INFO,
                timestamp=clock()
            ))
    else:
        if safe_sequence:
            rendered = " -> ".join(str(labels.get(pid) or pid) for pid in safe_sequence)
        else:
            rendered = "None needed (empty)"
        log.append(LogEntry(
            message=f"System is safe. Safe sequence: {rendered}",
            severity=Severity.SUCCESS,
            timestamp=clock()
        ))

    return DeadlockReport(
        is_deadlocked=is_deadlocked,
        deadlocked_process_ids=list(deadlocked_pids),
        deadlocked_resource_ids=list(deadlocked_rids),
        cycles=[list(cycle) for cycle in cycles],
        safe_sequence=list(safe_sequence),
        log=log
    )


def _label_lookup(nodes: Iterable[Any]) -> Dict[str, str]:
    """Map node id -> label (first occurrence wins)."""
    labels: Dict[str, str] = {}
    for raw in nodes:
        node: Node = as_node(raw)
        labels.setdefault(node.id, node.label)
    return labels
