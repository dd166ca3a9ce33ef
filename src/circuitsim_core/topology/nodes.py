# src/circuitsim_core/topology/nodes.py
"""
Canonical node numbering.

`resolve_nodes` turns the union-find state of a circuit into a `NodeAssignment`:
ground's class is node 0 and every other class is numbered 1, 2, ... in the
order its first terminal is met while walking the terminal sequence. The walk
order is the only input besides the union-find state, so the same connection
set always yields the same numbering.
"""
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping, Tuple

from ..pin import GROUND, Pin
from .exceptions import UnknownTerminalError
from .union_find import DisjointSet

if TYPE_CHECKING:
    from ..components.base import ComponentBase

logger = logging.getLogger(__name__)

GROUND_NODE = 0
DEFAULT_GROUND_MARKER = "gnd"
DEFAULT_NODE_PREFIX = "_net"


def render_node(node: int, ground_marker: str = DEFAULT_GROUND_MARKER,
                node_prefix: str = DEFAULT_NODE_PREFIX) -> str:
    """Renders a node id the way it appears in netlist text ('gnd', '_net3')."""
    if node == GROUND_NODE:
        return ground_marker
    return f"{node_prefix}{node}"


@dataclass(frozen=True)
class NodeAssignment:
    """Immutable mapping from every registered pin to its node id."""
    pin_nodes: Mapping[Pin, int]
    node_count: int

    def node_of(self, pin: Pin) -> int:
        try:
            return self.pin_nodes[pin]
        except KeyError:
            raise UnknownTerminalError(
                component=getattr(pin.component, "name", repr(pin.component)),
                details="The pin was not part of the circuit when nodes were assigned.",
                terminal=pin.terminal,
            ) from None

    def node_name(self, pin: Pin, ground_marker: str = DEFAULT_GROUND_MARKER,
                  node_prefix: str = DEFAULT_NODE_PREFIX) -> str:
        return render_node(self.node_of(pin), ground_marker, node_prefix)

    def nodes_of(self, component: "ComponentBase") -> List[int]:
        """Node ids of a component's terminals, in declared terminal order."""
        return [self.node_of(pin) for pin in component.pins]

    @property
    def nodes(self) -> Tuple[int, ...]:
        """Every distinct node id in use, ground included if anything touches it."""
        return tuple(sorted(set(self.pin_nodes.values())))

    def pins_on(self, node: int) -> List[Pin]:
        return [pin for pin, n in self.pin_nodes.items() if n == node]


def resolve_nodes(pins: Iterable[Pin], disjoint_set: DisjointSet) -> NodeAssignment:
    """
    Assigns canonical node ids to `pins` from the classes held in `disjoint_set`.

    Args:
        pins: Every registered terminal, in component insertion order and then
              declared terminal order.
        disjoint_set: The union-find structure holding the connection set.
                      `GROUND` must be an element of it.

    Returns:
        A `NodeAssignment` covering exactly the given pins.
    """
    ground_root = disjoint_set.find(GROUND)
    root_ids: Dict[Pin, int] = {ground_root: GROUND_NODE}
    pin_nodes: Dict[Pin, int] = {}
    next_id = 1
    for pin in pins:
        root = disjoint_set.find(pin)
        node = root_ids.get(root)
        if node is None:
            node = next_id
            root_ids[root] = node
            next_id += 1
        pin_nodes[pin] = node

    logger.debug(f"Resolved {len(pin_nodes)} terminals onto {next_id - 1} non-ground nodes.")
    return NodeAssignment(pin_nodes=MappingProxyType(pin_nodes), node_count=next_id - 1)
