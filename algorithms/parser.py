"""
Graph Parser for the Deadlock Graph Analyzer.

Turns a flat list of typed nodes and directed edges into the allocation
matrix, request matrix, available vector and adjacency list.
"""

import numpy as np
from typing import Any, Dict, Iterable, List

from models.graph import Node, as_edge, as_node
from models.graph_model import GraphModel


def parse_graph(nodes: Iterable[Any], edges: Iterable[Any]) -> GraphModel:
    """
    Parse a graph snapshot into a GraphModel.

    Steps:
    1. Partition nodes into processes and resources (input order)
    2. Total[r] = instances(r), defaulting to 1
    3. Allocation and Request start as zero [P][R] matrices
    4. For each edge with both endpoints present:
       - record source -> target in the adjacency list (any kind pairing)
       - resource -> process: Allocation[p][r] += 1, Allocated[r] += 1
       - process -> resource: Request[p][r] += 1
    5. Available = Total - Allocated (not clamped)

    Edges referencing an unknown node are skipped. Nothing is raised; an
    empty snapshot yields an empty model.

    Args:
        nodes: Node objects or node dictionaries
        edges: Edge objects or edge dictionaries

    Returns:
        Read-only GraphModel
    """
    node_map: Dict[str, Node] = {}
    for raw in nodes:
        node = as_node(raw)
        node_map.setdefault(node.id, node)

    processes = [n for n in node_map.values() if n.is_process]
    resources = [n for n in node_map.values() if n.is_resource]

    row = {p.id: i for i, p in enumerate(processes)}
    col = {r.id: j for j, r in enumerate(resources)}

    total = np.array([r.total_instances for r in resources], dtype=np.int64)
    allocated = np.zeros(len(resources), dtype=int)
    allocation = np.zeros((len(processes), len(resources)), dtype=int)
    request = np.zeros((len(processes), len(resources)), dtype=int)

    adjacency: Dict[str, List[str]] = {node_id: [] for node_id in node_map}

    for raw in edges:
        edge = as_edge(raw)
        source = node_map.get(edge.source)
        target = node_map.get(edge.target)

        if source is None or target is None:
            continue

        adjacency[source.id].append(target.id)

        # Allocation edge: Resource -> Process
        if source.is_resource and target.is_process:
            allocation[row[target.id]][col[source.id]] += 1
            allocated[col[source.id]] += 1

        # Request edge: Process -> Resource
        elif source.is_process and target.is_resource:
            request[row[source.id]][col[target.id]] += 1

    return GraphModel(
        nodes=node_map,
        processes=tuple(processes),
        resources=tuple(resources),
        allocation_matrix=allocation,
        request_matrix=request,
        total_vector=total,
        allocated_vector=allocated,
        available_vector=total - allocated,
        adjacency={k: tuple(v) for k, v in adjacency.items()},
    )
