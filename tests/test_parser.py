"""
Graph Parser Tests

Tests node/edge normalisation and the matrices, vectors and adjacency list
built by parse_graph.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from models.graph import MAX_INSTANCES, Edge, Node, NodeKind
from algorithms.parser import parse_graph


def _process(node_id, label=None):
    return {"id": node_id, "kind": "process", "label": label or node_id, "pid": node_id}


def _resource(node_id, instances=1, label=None):
    return {"id": node_id, "kind": "resource", "label": label or node_id, "rid": node_id, "instances": instances}


def _edge(source, target):
    return {"id": f"{source}->{target}", "source": source, "target": target}


def test_node_from_dict_formats():
    """Flat and React-Flow style dictionaries both build nodes."""
    print("\n" + "="*60)
    print("TEST 1: Node normalisation")
    print("="*60)

    flat = Node.from_dict({"id": "p1", "kind": "process", "label": "Process 1", "pid": "P1"})
    nested = Node.from_dict({"id": "r1", "type": "resource", "data": {"label": "Resource 1", "rid": "R1", "instances": 3}})
    unknown = Node.from_dict({"id": "x", "kind": "printer"})

    assert flat.kind is NodeKind.PROCESS and flat.pid == "P1"
    assert nested.kind is NodeKind.RESOURCE and nested.total_instances == 3
    assert nested.label == "Resource 1"
    assert unknown.kind is None
    assert not unknown.is_process and not unknown.is_resource

    edge = Edge.from_dict({"source": "p1", "target": "r1"})
    assert edge.id == "e_p1_r1", "Edge id is derived when absent"
    print("  ✓ Nodes and edges normalised")


def test_instance_defaults():
    """Missing or non-positive instance counts read as 1."""
    for raw, expected in [(None, 1), (0, 1), (-3, 1), (2, 2), ("4", 4), ("many", 1)]:
        node = Node(id="r", kind=NodeKind.RESOURCE, instances=raw)
        assert node.total_instances == expected, f"instances={raw!r} should read as {expected}"

    model = parse_graph([{"id": "r", "kind": "resource"}, _resource("s", instances=0)], [])
    assert list(model.total_vector) == [1, 1]
    assert list(model.available_vector) == [1, 1]
    print("  ✓ Instance counts default to 1")


def test_extreme_instance_counts():
    """Non-finite counts read as 1; counts beyond the int64 range are capped."""
    for raw in (float("inf"), float("-inf"), float("nan")):
        node = Node(id="r", kind=NodeKind.RESOURCE, instances=raw)
        assert node.total_instances == 1, f"instances={raw!r} should read as 1"

    assert Node(id="r", kind=NodeKind.RESOURCE, instances=10**30).total_instances == MAX_INSTANCES

    nodes = [_process("P1"), _resource("R", instances=10**30), _resource("S", instances=float("inf"))]
    edges = [_edge("R", "P1"), _edge("P1", "S")]
    model = parse_graph(nodes, edges)

    assert list(model.total_vector) == [MAX_INSTANCES, 1]
    assert list(model.available_vector) == [MAX_INSTANCES - 1, 1]
    print("  ✓ Extreme instance counts handled")


def test_labels_and_nested_data_are_normalised():
    """Non-string labels become strings; a non-object "data" entry is ignored."""
    numbered = Node.from_dict({"id": "P1", "kind": "process", "label": 7})
    odd_data = Node.from_dict({"id": "P2", "type": "process", "data": [1]})

    assert numbered.label == "7"
    assert odd_data.kind is NodeKind.PROCESS
    assert odd_data.label == ""


def test_matrix_building():
    """Allocation/request edges fill the matrices; parallel edges accumulate."""
    print("\n" + "="*60)
    print("TEST 2: Matrix building")
    print("="*60)

    nodes = [_process("P1"), _process("P2"), _resource("R1", 3), _resource("R2", 1)]
    edges = [
        _edge("R1", "P1"),
        _edge("R1", "P1"),
        _edge("R1", "P2"),
        _edge("P2", "R2"),
        _edge("P1", "R2"),
        _edge("P1", "R2"),
    ]
    model = parse_graph(nodes, edges)
    print(model.display())

    assert model.allocation_matrix.shape == (2, 2)
    assert model.allocation("P1", "R1") == 2, "Parallel allocation edges accumulate"
    assert model.allocation("P2", "R1") == 1
    assert model.request("P1", "R2") == 2, "Parallel request edges accumulate"
    assert model.request("P2", "R2") == 1
    assert model.request("P2", "R1") == 0, "Pairs without edges are zero"
    assert model.available("R1") == 0
    assert model.available("R2") == 1
    assert model.allocation("P1", "missing") == 0
    print("  ✓ Matrices correct")


def test_conservation_property():
    """Column sums equal the allocated counter; available = total - allocated."""
    graphs = [
        ([], []),
        ([_process("P1"), _resource("R1", 2)], [_edge("R1", "P1")]),
        ([_process("P1"), _process("P2"), _resource("R1", 1)], [_edge("R1", "P1"), _edge("R1", "P2")]),
        ([_process("P1"), _resource("R1", 5), _resource("R2", 2)],
         [_edge("R1", "P1"), _edge("R2", "P1"), _edge("P1", "R1"), _edge("R2", "R1")]),
    ]

    for nodes, edges in graphs:
        model = parse_graph(nodes, edges)
        for j, rid in enumerate(model.resource_ids):
            assert model.allocation_matrix[:, j].sum() == model.allocated_vector[j]
            assert model.available(rid) == model.total_vector[j] - model.allocated_vector[j]
        model.assert_resource_conservation("in property test")
    print("  ✓ Conservation holds for all graphs")


def test_malformed_and_same_kind_edges():
    """Dangling edges are dropped; same-kind edges only reach the adjacency list."""
    nodes = [_process("P1"), _process("P2"), _resource("R1"), _resource("R2")]
    edges = [
        _edge("P1", "ghost"),
        _edge("ghost", "R1"),
        _edge("R1", "R2"),
        _edge("P1", "P2"),
        _edge("P1", "R1"),
    ]
    model = parse_graph(nodes, edges)

    assert model.neighbors("P1") == ("P2", "R1")
    assert model.neighbors("R1") == ("R2",)
    assert "ghost" not in model.adjacency
    assert model.allocated_vector.sum() == 0, "Same-kind edges allocate nothing"
    assert model.request_matrix.sum() == 1, "Only P1 -> R1 is a request"
    print("  ✓ Malformed edges dropped, same-kind edges kept in adjacency")


def test_unknown_kind_nodes_join_adjacency_only():
    """Nodes of unknown kind are reachable in the adjacency but not in the matrices."""
    nodes = [_process("P1"), {"id": "N", "kind": "note"}]
    model = parse_graph(nodes, [_edge("P1", "N")])

    assert model.num_processes == 1 and model.num_resources == 0
    assert model.neighbors("P1") == ("N",)
    assert model.neighbors("N") == ()


def test_duplicate_ids_first_wins():
    nodes = [_resource("R1", 2), _process("R1"), _process("P1")]
    model = parse_graph(nodes, [_edge("R1", "P1")])

    assert model.resource_ids == ["R1"]
    assert model.process_ids == ["P1"]
    assert model.allocation("P1", "R1") == 1


def test_empty_graph():
    model = parse_graph([], [])

    assert model.num_processes == 0
    assert model.num_resources == 0
    assert model.allocation_matrix.shape == (0, 0)
    assert model.adjacency == {}


def test_model_is_read_only_and_input_untouched():
    """The model freezes its arrays and the caller's dictionaries are unchanged."""
    nodes = [_process("P1"), _resource("R1")]
    edges = [_edge("R1", "P1")]
    before = ([dict(n) for n in nodes], [dict(e) for e in edges])

    model = parse_graph(nodes, edges)

    assert not model.allocation_matrix.flags.writeable
    assert not model.available_vector.flags.writeable
    try:
        model.available_vector[0] = 99
        assert False, "Writing into the model should fail"
    except ValueError:
        pass
    assert (nodes, edges) == before
    print("  ✓ Model is read-only")


def main():
    """Run all parser tests."""
    test_node_from_dict_formats()
    test_instance_defaults()
    test_extreme_instance_counts()
    test_labels_and_nested_data_are_normalised()
    test_matrix_building()
    test_conservation_property()
    test_malformed_and_same_kind_edges()
    test_unknown_kind_nodes_join_adjacency_only()
    test_duplicate_ids_first_wins()
    test_empty_graph()
    test_model_is_read_only_and_input_untouched()
    print("\n✅ Graph Parser Tests PASSED")
    return 0


if __name__ == '__main__':
    sys.exit(main())
