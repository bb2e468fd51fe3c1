"""
Graph Loader for the Deadlock Graph Analyzer.

Loads resource-allocation graph snapshots from JSON files. Accepts flat
node entries as well as React-Flow style entries with a nested "data" map.
"""

import json
from typing import Any, Dict, List, Tuple

from models.graph import Edge, Node


class GraphLoadError(Exception):
    """Exception raised when a graph file cannot be loaded or is invalid."""
    pass


def load_graph(file_path: str) -> Tuple[List[Node], List[Edge]]:
    """
    Load a graph from a JSON file.

    Args:
        file_path: Path to graph JSON file

    Returns:
        Tuple of (nodes, edges)

    Raises:
        GraphLoadError: If file cannot be loaded or is invalid
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise GraphLoadError(f"Graph file not found: {file_path}")
    except json.JSONDecodeError as e:
        raise GraphLoadError(f"Invalid JSON in graph file: {e}")

    return parse_graph_data(data)


def parse_graph_data(data: Any) -> Tuple[List[Node], List[Edge]]:
    """
    Validate decoded JSON and build nodes and edges.

    Only the file structure is checked here. Dangling edges, same-kind
    edges and odd instance counts are left for the analyzer to tolerate.

    Args:
        data: Decoded JSON document

    Returns:
        Tuple of (nodes, edges)

    Raises:
        GraphLoadError: If the document structure is invalid
    """
    if not isinstance(data, dict):
        raise GraphLoadError("Graph file must contain a JSON object")

    # Validate required fields
    if 'nodes' not in data:
        raise GraphLoadError("Graph missing 'nodes' field")
    if 'edges' not in data:
        raise GraphLoadError("Graph missing 'edges' field")
    if not isinstance(data['nodes'], list):
        raise GraphLoadError("'nodes' must be a list")
    if not isinstance(data['edges'], list):
        raise GraphLoadError("'edges' must be a list")

    nodes = [_load_node(i, entry) for i, entry in enumerate(data['nodes'])]
    edges = [_load_edge(i, entry) for i, entry in enumerate(data['edges'])]

    return nodes, edges


def _load_node(index: int, entry: Any) -> Node:
    """Build one node, requiring an object with an id."""
    if not isinstance(entry, dict):
        raise GraphLoadError(f"Node #{index} is not an object")
    if entry.get('id') is None:
        raise GraphLoadError(f"Node #{index} missing 'id' field")
    if 'data' in entry and not isinstance(entry['data'], (dict, type(None))):
        raise GraphLoadError(f"Node #{index} 'data' must be an object")
    return Node.from_dict(entry)


def _load_edge(index: int, entry: Any) -> Edge:
    """Build one edge, requiring an object with an id."""
    if not isinstance(entry, dict):
        raise GraphLoadError(f"Edge #{index} is not an object")
    for required in ('id', 'source', 'target'):
        if entry.get(required) is None:
            raise GraphLoadError(f"Edge #{index} missing '{required}' field")
    return Edge.from_dict(entry)


def graph_to_dict(nodes: List[Node], edges: List[Edge]) -> Dict[str, Any]:
    """Serializable form of a graph (the format load_graph reads)."""
    return {
        'nodes': [n.to_dict() for n in nodes],
        'edges': [e.to_dict() for e in edges],
    }


def get_graph_description(file_path: str) -> str:
    """
    Get description from graph file without full loading.

    Args:
        file_path: Path to graph JSON file

    Returns:
        Description string, or empty string if not present or unreadable
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return ''
    if not isinstance(data, dict):
        return ''
    return data.get('description', '')
