# src/circuitsim_core/topology/__init__.py
from .exceptions import (
    TerminalConnectionError, UnknownComponentError, UnknownTerminalError, ArityError
)
from .union_find import DisjointSet
from .nodes import (
    NodeAssignment, resolve_nodes, render_node,
    GROUND_NODE, DEFAULT_GROUND_MARKER, DEFAULT_NODE_PREFIX
)
from .graph import build_connectivity_graph, find_floating_nodes

__all__ = [
    "DisjointSet",
    "NodeAssignment", "resolve_nodes", "render_node",
    "GROUND_NODE", "DEFAULT_GROUND_MARKER", "DEFAULT_NODE_PREFIX",
    "build_connectivity_graph", "find_floating_nodes",
    "TerminalConnectionError", "UnknownComponentError", "UnknownTerminalError", "ArityError",
]
