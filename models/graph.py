"""
Graph primitives for the Deadlock Graph Analyzer.

Represents the nodes (processes and resources) and directed edges of a
resource-allocation graph snapshot.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


# Largest instance count a resource may declare; leaves headroom in int64
# for the allocation edges added back during reduction
MAX_INSTANCES = 2**62


class NodeKind(Enum):
    """Kinds of nodes in a resource-allocation graph."""
    PROCESS = "process"
    RESOURCE = "resource"

    @classmethod
    def parse(cls, value: Any) -> Optional["NodeKind"]:
        """Map a raw kind string to a NodeKind, or None when unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class Node:
    """
    A single node of the resource-allocation graph.

    Attributes:
        id: Unique node identifier
        kind: PROCESS, RESOURCE, or None for kinds the analyzer does not know
        label: Human-readable name (used in log messages)
        pid: Process identifier (processes only)
        rid: Resource identifier (resources only)
        instances: Declared instance count (resources only, default 1)
    """
    id: str
    kind: Optional[NodeKind]
    label: str = ""
    pid: Optional[str] = None
    rid: Optional[str] = None
    instances: Optional[int] = None

    @property
    def is_process(self) -> bool:
        return self.kind is NodeKind.PROCESS

    @property
    def is_resource(self) -> bool:
        return self.kind is NodeKind.RESOURCE

    @property
    def total_instances(self) -> int:
        """
        Declared instance count, defaulting to 1.

        Missing, non-numeric, non-finite, or non-positive counts are read
        as 1. Counts beyond MAX_INSTANCES are capped there so the matrices
        stay within a 64-bit integer.
        """
        try:
            count = int(self.instances)
        except (TypeError, ValueError, OverflowError):
            return 1
        if count <= 0:
            return 1
        return min(count, MAX_INSTANCES)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        """
        Build a Node from a flat or React-Flow style dictionary.

        Flat:       {"id", "kind", "label", "pid"/"rid", "instances"}
        React-Flow: {"id", "type", "data": {"label", "pid"/"rid", "instances"}}
        """
        nested = data.get("data")
        attrs = dict(nested) if isinstance(nested, dict) else {}
        attrs.update({k: v for k, v in data.items() if k != "data"})

        label = attrs.get("label")
        return cls(
            id=str(attrs.get("id")),
            kind=NodeKind.parse(attrs.get("kind", attrs.get("type"))),
            label="" if label is None else str(label),
            pid=attrs.get("pid"),
            rid=attrs.get("rid"),
            instances=attrs.get("instances"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Flat dictionary form (inverse of from_dict)."""
        out: Dict[str, Any] = {
            "id": self.id,
            "kind": self.kind.value if self.kind else None,
            "label": self.label,
        }
        if self.is_process:
            out["pid"] = self.pid
        elif self.is_resource:
            out["rid"] = self.rid
            out["instances"] = self.total_instances
        return out


@dataclass(frozen=True)
class Edge:
    """
    A directed edge of the resource-allocation graph.

    process -> resource is a request, resource -> process is an allocation.
    """
    id: str
    source: str
    target: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Edge":
        source = str(data.get("source"))
        target = str(data.get("target"))
        edge_id = data.get("id") or f"e_{source}_{target}"
        return cls(id=str(edge_id), source=source, target=target)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "source": self.source, "target": self.target}


def as_node(value: Any) -> Node:
    """Accept a Node or a node dictionary."""
    return value if isinstance(value, Node) else Node.from_dict(value)


def as_edge(value: Any) -> Edge:
    """Accept an Edge or an edge dictionary."""
    return value if isinstance(value, Edge) else Edge.from_dict(value)
