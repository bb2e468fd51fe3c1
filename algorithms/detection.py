"""
Deadlock Detection for the Deadlock Graph Analyzer.

Runs the full analysis pipeline on one resource-allocation graph snapshot:
parse -> graph reduction -> deadlocked resources -> cycle search -> report.
"""

import numpy as np
from datetime import datetime
from typing import Any, Callable, Iterable, List, Optional

from models.graph_model import GraphModel
from algorithms.parser import parse_graph
from algorithms.safety import SafetyResult, analyze_safety
from algorithms.cycles import find_cycles
from analysis.events import DeadlockReport
from analysis.report_builder import build_report


def detect_deadlock(
    nodes: Iterable[Any],
    edges: Iterable[Any],
    clock: Optional[Callable[[], datetime]] = None
) -> DeadlockReport:
    """
    Detect deadlock in a resource-allocation graph.

    Four Deadlock Conditions Manifested:
    - Mutual Exclusion: each allocation edge holds one unit
    - Hold and Wait: a process with both allocation and request edges
    - No Preemption: units only come back when a process is reduced
    - Circular Wait: the cycle reported for the deadlocked subgraph

    Every input yields a report; nothing is raised and the caller's nodes
    and edges are not modified.

    Args:
        nodes: Node objects or dictionaries
        edges: Edge objects or dictionaries
        clock: Timestamp source for log entries (defaults to datetime.now)

    Returns:
        DeadlockReport

    References:
        Silberschatz, A., Galvin, P. B., & Gagne, G. (2018).
        Operating System Concepts (10th ed.). Chapter 7: Deadlocks.
    """
    model = parse_graph(nodes, edges)
    return report_from_model(model, analyze_safety(model), clock=clock)


def report_from_model(
    model: GraphModel,
    safety: SafetyResult,
    clock: Optional[Callable[[], datetime]] = None
) -> DeadlockReport:
    """
    Finish an analysis from an already parsed model and its reduction.

    Args:
        model: Parsed graph model
        safety: Result of analyze_safety(model)
        clock: Timestamp source for log entries (defaults to datetime.now)

    Returns:
        DeadlockReport
    """
    deadlocked_pids = safety.deadlocked_pids
    deadlocked_rids = find_deadlocked_resources(model, deadlocked_pids)

    cycles = []
    if deadlocked_pids:
        cycles = find_cycles(model, deadlocked_pids, deadlocked_rids)

    return build_report(
        safety.finish,
        safety.safe_sequence,
        deadlocked_pids,
        deadlocked_rids,
        cycles,
        list(model.nodes.values()),
        clock=clock
    )


def find_deadlocked_resources(model: GraphModel, deadlocked_pids: Iterable[str]) -> List[str]:
    """
    Collect the resources involved with deadlocked processes.

    For each deadlocked process in order: the resources it holds, then the
    resources it requests (both in resource order). Duplicates keep their
    first position.

    Args:
        model: Parsed graph model
        deadlocked_pids: Deadlocked process ids

    Returns:
        Ordered list of resource ids
    """
    involved = {}
    for pid in deadlocked_pids:
        i = model.process_index(pid)
        if i is None:
            continue
        for j in np.flatnonzero(model.allocation_matrix[i] > 0):
            involved.setdefault(model.resources[j].id, None)
        for j in np.flatnonzero(model.request_matrix[i] > 0):
            involved.setdefault(model.resources[j].id, None)
    return list(involved)
