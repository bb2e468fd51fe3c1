"""
Cycle Finder for the Deadlock Graph Analyzer.

Surfaces one circular-wait path per deadlocked entry point by depth-first
search restricted to the deadlocked subgraph.
"""

from typing import Iterable, List, Set

from models.graph_model import GraphModel


def find_cycles(
    model: GraphModel,
    deadlocked_pids: Iterable[str],
    deadlocked_rids: Iterable[str]
) -> List[List[str]]:
    """
    Find explanatory cycles among the deadlocked nodes.

    Search:
    - Interesting nodes = deadlocked processes + their held/requested resources
    - DFS from every deadlocked process not yet visited, following only
      edges into interesting nodes
    - An edge back to a node on the current descent closes a cycle: the
      path from that node's first occurrence to the end is recorded and
      the descent is abandoned (siblings are not explored afterwards)

    At most one cycle per entry point; this is not an enumeration of all
    simple cycles. The DFS keeps an explicit stack of
    (node, next neighbor position) frames instead of recursing.

    Args:
        model: Parsed graph model
        deadlocked_pids: Deadlocked process ids (search entry points, in order)
        deadlocked_rids: Resources held or requested by deadlocked processes

    Returns:
        List of cycles, each an ordered list of node ids
    """
    entry_points = list(deadlocked_pids)
    if not entry_points:
        return []

    interesting: Set[str] = set(entry_points) | set(deadlocked_rids)
    visited: Set[str] = set()
    cycles: List[List[str]] = []

    for start in entry_points:
        if start in visited:
            continue

        on_stack: Set[str] = set()
        path: List[str] = []
        frames = []

        visited.add(start)
        on_stack.add(start)
        path.append(start)
        frames.append([start, 0])

        while frames:
            frame = frames[-1]
            node, position = frame
            neighbors = model.neighbors(node)

            if position >= len(neighbors):
                # Backtrack
                frames.pop()
                on_stack.discard(node)
                path.pop()
                continue

            neighbor = neighbors[position]
            frame[1] = position + 1

            if neighbor not in interesting:
                continue

            if neighbor not in visited:
                visited.add(neighbor)
                on_stack.add(neighbor)
                path.append(neighbor)
                frames.append([neighbor, 0])
            elif neighbor in on_stack:
                cycles.append(path[path.index(neighbor):])
                break

    return cycles
