"""
Built-in sample graphs for the Deadlock Graph Analyzer.
"""

from typing import Callable, Dict, List, Tuple

from models.graph import Edge, Node, NodeKind

Graph = Tuple[List[Node], List[Edge]]


def sample_deadlock_graph() -> Graph:
    """
    Standard circular-wait deadlock.

    P1 requests RX, RX is allocated to P2, P2 requests RY, RY is allocated
    to P1. Cycle: P1 -> RX -> P2 -> RY -> P1
    """
    nodes = [
        Node(id="p_sample_1", kind=NodeKind.PROCESS, label="Process A", pid="P1"),
        Node(id="p_sample_2", kind=NodeKind.PROCESS, label="Process B", pid="P2"),
        Node(id="r_sample_1", kind=NodeKind.RESOURCE, label="Resource X", rid="RX", instances=1),
        Node(id="r_sample_2", kind=NodeKind.RESOURCE, label="Resource Y", rid="RY", instances=1),
    ]
    edges = [
        Edge(id="e_s1", source="p_sample_1", target="r_sample_1"),
        Edge(id="e_s2", source="r_sample_1", target="p_sample_2"),
        Edge(id="e_s3", source="p_sample_2", target="r_sample_2"),
        Edge(id="e_s4", source="r_sample_2", target="p_sample_1"),
    ]
    return nodes, edges


def safe_case_graph() -> Graph:
    """One process requesting a free single-instance resource."""
    nodes = [
        Node(id="p1", kind=NodeKind.PROCESS, label="Process 1", pid="P1"),
        Node(id="r1", kind=NodeKind.RESOURCE, label="Resource 1", rid="R1", instances=1),
    ]
    edges = [Edge(id="e_p1_r1", source="p1", target="r1")]
    return nodes, edges


SAMPLES: Dict[str, Callable[[], Graph]] = {
    "deadlock": sample_deadlock_graph,
    "safe": safe_case_graph,
}
