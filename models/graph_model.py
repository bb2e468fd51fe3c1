"""
Parsed graph model for the Deadlock Graph Analyzer.

Holds the matrices and vectors derived from one graph snapshot, as
required by the graph-reduction safety check and the cycle search.
"""

import numpy as np
from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, field

from models.graph import Node


@dataclass(frozen=True, eq=False)
class GraphModel:
    """
    Read-only structured view of a resource-allocation graph.

    Attributes:
        nodes: Every node of the snapshot, keyed by id (first occurrence wins)
        processes: Process nodes in input order
        resources: Resource nodes in input order
        allocation_matrix: [P][R] Units currently held by each process
        request_matrix: [P][R] Units currently requested by each process
        total_vector: [R] Declared instances per resource
        allocated_vector: [R] Units handed out per resource (sum of allocation edges)
        available_vector: [R] total - allocated (never clamped, may be negative)
        adjacency: node id -> ordered outgoing targets, from every edge with
            both endpoints present, whatever their kinds

    Arrays are flagged non-writeable; consumers work on copies.
    """
    nodes: Dict[str, Node] = field(default_factory=dict)
    processes: Tuple[Node, ...] = ()
    resources: Tuple[Node, ...] = ()
    allocation_matrix: np.ndarray = field(default_factory=lambda: np.zeros((0, 0), dtype=int))
    request_matrix: np.ndarray = field(default_factory=lambda: np.zeros((0, 0), dtype=int))
    total_vector: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=int))
    allocated_vector: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=int))
    available_vector: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=int))
    adjacency: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        """Build the id -> index lookups and freeze the arrays."""
        object.__setattr__(self, "_process_rows", {p.id: i for i, p in enumerate(self.processes)})
        object.__setattr__(self, "_resource_cols", {r.id: j for j, r in enumerate(self.resources)})
        for name in ("allocation_matrix", "request_matrix", "total_vector",
                     "allocated_vector", "available_vector"):
            getattr(self, name).flags.writeable = False

    @property
    def num_processes(self) -> int:
        """Number of processes in the graph."""
        return len(self.processes)

    @property
    def num_resources(self) -> int:
        """Number of resources in the graph."""
        return len(self.resources)

    @property
    def process_ids(self) -> List[str]:
        return [p.id for p in self.processes]

    @property
    def resource_ids(self) -> List[str]:
        return [r.id for r in self.resources]

    def process_index(self, pid: str) -> Optional[int]:
        """Row of a process in the matrices, or None."""
        return self._process_rows.get(pid)

    def resource_index(self, rid: str) -> Optional[int]:
        """Column of a resource in the matrices, or None."""
        return self._resource_cols.get(rid)

    def allocation(self, pid: str, rid: str) -> int:
        """Units of rid held by pid (0 when either id is unknown)."""
        i, j = self.process_index(pid), self.resource_index(rid)
        if i is None or j is None:
            return 0
        return int(self.allocation_matrix[i][j])

    def request(self, pid: str, rid: str) -> int:
        """Units of rid requested by pid (0 when either id is unknown)."""
        i, j = self.process_index(pid), self.resource_index(rid)
        if i is None or j is None:
            return 0
        return int(self.request_matrix[i][j])

    def available(self, rid: str) -> int:
        """Available units of rid (0 when unknown)."""
        j = self.resource_index(rid)
        return 0 if j is None else int(self.available_vector[j])

    def neighbors(self, node_id: str) -> Tuple[str, ...]:
        """Outgoing edge targets of a node, in edge order."""
        return self.adjacency.get(node_id, ())

    def label_of(self, node_id: str) -> str:
        """Label of a node, falling back to its id."""
        node = self.nodes.get(node_id)
        return node.label if node is not None and node.label else node_id

    def display(self) -> str:
        """
        Generate readable string representation of the parsed graph.

        Returns:
            Formatted string showing all matrices and vectors
        """
        header = "      " + " ".join(f"{r.id:>6}" for r in self.resources)

        output = []
        output.append("\n" + "="*60)
        output.append("GRAPH MODEL")
        output.append("="*60)

        output.append("\nResources (total / allocated / available):")
        for j, resource in enumerate(self.resources):
            output.append(
                f"  {resource.id}: {self.total_vector[j]} / "
                f"{self.allocated_vector[j]} / {self.available_vector[j]}"
            )

        output.append("\nAllocation Matrix:")
        output.append(header)
        for i, process in enumerate(self.processes):
            row = " ".join(f"{v:>6}" for v in self.allocation_matrix[i])
            output.append(f"  {process.id:>4}{row}")

        output.append("\nRequest Matrix (Pending):")
        output.append(header)
        for i, process in enumerate(self.processes):
            row = " ".join(f"{v:>6}" for v in self.request_matrix[i])
            output.append(f"  {process.id:>4}{row}")

        output.append("\nAdjacency:")
        for node_id, targets in self.adjacency.items():
            if targets:
                output.append(f"  {node_id} -> {', '.join(targets)}")

        output.append("\n" + "="*60)
        return "\n".join(output)

    def assert_resource_conservation(self, context=""):
        """Verify that sum(allocation[:, r]) == allocated[r] and allocated + available == total.

        Negative availability is not an error here: over-allocated graphs
        are analysed as given.

        Args:
            context: Description of when this check is being run (for error messages)

        Raises:
            AssertionError: If resource conservation is violated
        """
        for r_idx, resource in enumerate(self.resources):
            held = self.allocation_matrix[:, r_idx].sum()
            allocated = self.allocated_vector[r_idx]
            available = self.available_vector[r_idx]
            total = self.total_vector[r_idx]

            assert held == allocated, (
                f"Allocation mismatch for {resource.id} {context}\n"
                f"  Matrix column sum: {held}, Allocated counter: {allocated}"
            )
            assert allocated + available == total, (
                f"Resource conservation violated for {resource.id} {context}\n"
                f"  Allocated: {allocated}, Available: {available}, Total: {total}\n"
                f"  Allocated + Available = {allocated + available} != {total}"
            )
