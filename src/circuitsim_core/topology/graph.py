# src/circuitsim_core/topology/graph.py
import logging
from typing import TYPE_CHECKING, Iterable, List

import networkx as nx

from .nodes import GROUND_NODE, NodeAssignment

if TYPE_CHECKING:
    from ..components.base import ComponentBase

logger = logging.getLogger(__name__)


def build_connectivity_graph(components: Iterable["ComponentBase"],
                             assignment: NodeAssignment) -> nx.MultiGraph:
    """
    Builds an undirected multigraph whose vertices are node ids and whose edges
    are components.

    A component with k terminals contributes a star of k-1 edges from its first
    terminal's node to each of the others, keyed by the component name. Every
    node in the assignment appears as a vertex even if no edge touches it.
    """
    graph = nx.MultiGraph()
    graph.add_nodes_from(assignment.nodes)
    for component in components:
        nodes = assignment.nodes_of(component)
        if not nodes:
            continue
        anchor = nodes[0]
        for terminal, node in zip(component.terminals()[1:], nodes[1:]):
            graph.add_edge(anchor, node, key=f"{component.name}.{terminal}", component=component.name)
    return graph


def find_floating_nodes(graph: nx.MultiGraph) -> List[int]:
    """Returns the sorted ids of nodes with no conductive path to ground."""
    if GROUND_NODE not in graph:
        floating = sorted(graph.nodes)
    else:
        grounded = nx.node_connected_component(graph, GROUND_NODE)
        floating = sorted(n for n in graph.nodes if n not in grounded)
    if floating:
        logger.debug(f"Nodes without a path to ground: {floating}")
    return floating
