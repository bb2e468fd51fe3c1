"""
Highlighting helper for the Deadlock Graph Analyzer.

Tells a front end which nodes and edges to mark after an analysis,
without touching the graph it owns.
"""

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterable

from models.graph import as_edge, as_node
from analysis.events import DeadlockReport


@dataclass(frozen=True)
class GraphHighlight:
    """
    Marks derived from a DeadlockReport.

    Attributes:
        deadlocked_node_ids: Nodes to draw as deadlocked
        cycle_edge_ids: Edges whose both endpoints lie on the first cycle
    """
    deadlocked_node_ids: FrozenSet[str] = field(default_factory=frozenset)
    cycle_edge_ids: FrozenSet[str] = field(default_factory=frozenset)

    def is_node_deadlocked(self, node_id: str) -> bool:
        return node_id in self.deadlocked_node_ids

    def is_cycle_edge(self, edge_id: str) -> bool:
        return edge_id in self.cycle_edge_ids


def highlight_graph(
    nodes: Iterable[Any],
    edges: Iterable[Any],
    report: DeadlockReport
) -> GraphHighlight:
    """
    Compute node and edge marks for a report.

    Args:
        nodes: Graph nodes (objects or dictionaries)
        edges: Graph edges (objects or dictionaries)
        report: Result of detect_deadlock on the same graph

    Returns:
        GraphHighlight
    """
    flagged = set(report.deadlocked_process_ids) | set(report.deadlocked_resource_ids)
    node_ids = {as_node(n).id for n in nodes}

    cycle_edges = set()
    if report.is_deadlocked and report.cycles:
        cycle_nodes = set(report.cycles[0])
        for raw in edges:
            edge = as_edge(raw)
            if edge.source in cycle_nodes and edge.target in cycle_nodes:
                cycle_edges.add(edge.id)

    return GraphHighlight(
        deadlocked_node_ids=frozenset(flagged & node_ids),
        cycle_edge_ids=frozenset(cycle_edges)
    )
