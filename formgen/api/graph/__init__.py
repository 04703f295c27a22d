"""Entity reference graph analysis."""

from .entity_graph import (
    build_entity_graph,
    find_dangling_references,
    find_cycles,
    dependency_order,
)

__all__ = [
    "build_entity_graph",
    "find_dangling_references",
    "find_cycles",
    "dependency_order",
]
