"""
Safety Analyzer for the Deadlock Graph Analyzer.

Implements graph reduction (the Work/Finish safety check) over a parsed
resource-allocation graph.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Dict, List

from models.graph_model import GraphModel


@dataclass(frozen=True, eq=False)
class SafetyResult:
    """
    Outcome of graph reduction.

    Attributes:
        finish: pid -> True when the process could finish
        safe_sequence: PIDs in the order they were reduced
        available: Work vector left when reduction stopped [R]
        passes: Number of full passes over the process list
    """
    finish: Dict[str, bool] = field(default_factory=dict)
    safe_sequence: List[str] = field(default_factory=list)
    available: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=int))
    passes: int = 0

    @property
    def deadlocked_pids(self) -> List[str]:
        """Processes that never finished, in input order."""
        return [pid for pid, done in self.finish.items() if not done]

    @property
    def is_safe(self) -> bool:
        return all(self.finish.values())


def analyze_safety(model: GraphModel) -> SafetyResult:
    """
    Reduce the graph until no further process can finish.

    Algorithm:
    1. Initialize Work = Available.copy(), Finish = [False] * num_processes
    2. Pass over the processes in input order; a process i with
       Finish[i] == False and Request[i] <= Work (element-wise) is finished,
       appended to the safe sequence, and Work += Allocation[i] at once,
       before the rest of the pass is examined
    3. Repeat full passes while the previous pass finished someone
    4. Processes with Finish[i] == False are deadlocked

    Uses Request[i] (current pending request), not a declared maximum, and
    compares only the resources process i actually requests. Negative
    entries in Available simply make positive requests for that resource
    unsatisfiable; a process with no requests always finishes.

    Time Complexity: O(P²×R)

    Args:
        model: Parsed graph model (left untouched)

    Returns:
        SafetyResult with finish flags, safe sequence and final work vector
    """
    work = model.available_vector.copy()
    finish = np.zeros(model.num_processes, dtype=bool)
    safe_sequence = []
    passes = 0

    made_progress = True
    while made_progress:
        made_progress = False
        passes += 1

        for i, process in enumerate(model.processes):
            if finish[i]:
                continue

            # Only requested columns count; a negative pool elsewhere is irrelevant
            requested = model.request_matrix[i] > 0
            if np.all(model.request_matrix[i][requested] <= work[requested]):
                # Release held units before examining the next process
                work += model.allocation_matrix[i]
                finish[i] = True
                safe_sequence.append(process.id)
                made_progress = True

    return SafetyResult(
        finish={p.id: bool(finish[i]) for i, p in enumerate(model.processes)},
        safe_sequence=safe_sequence,
        available=work,
        passes=passes,
    )
