# src/circuitsim_core/circuit.py
"""
The `Circuit` container: ordered component ownership plus the accumulated set
of terminal connections.

Node numbering is derived state. `assign_nodes()` recomputes it from the
connection set every time it is called, so it is always consistent with the
connections made so far and identical across calls while they are unchanged.
"""
import logging
from typing import Dict, Iterator, List, Tuple, Union

import networkx as nx

from .components.base import ComponentBase
from .components.exceptions import DuplicateComponentError, OwnershipError
from .pin import GROUND, Pin
from .topology import (
    DisjointSet, NodeAssignment, resolve_nodes,
    build_connectivity_graph, find_floating_nodes, DEFAULT_GROUND_MARKER,
)
from .topology.exceptions import UnknownComponentError, UnknownTerminalError

logger = logging.getLogger(__name__)


class Circuit:
    """
    An ordered collection of uniquely named components and their connections.

    Components are emitted, numbered and reported in insertion order.
    A circuit is single-writer: callers building circuits concurrently must
    use one circuit per worker.
    """

    def __init__(self, name: str = "circuit"):
        self.name = name
        self._components: Dict[str, ComponentBase] = {}
        self._connections: DisjointSet[Pin] = DisjointSet()
        self._connections.add(GROUND)
        self._merge_count = 0
        logger.debug(f"Created circuit '{name}'")

    @property
    def ground(self) -> Pin:
        return GROUND

    # --- Ownership ---

    def add(self, component: ComponentBase) -> ComponentBase:
        """
        Transfers `component` into this circuit.

        Raises:
            OwnershipError: If the component already belongs to another circuit.
            DuplicateComponentError: If a component with the same name is present.
        """
        if not isinstance(component, ComponentBase):
            raise TypeError(f"Only components can be added to a circuit, got {type(component).__name__}.")
        owner = component.owner
        if owner is not None and owner is not self:
            raise OwnershipError(
                component=component.name,
                details=f"'{component.name}' was already added to circuit '{owner.name}'.",
                owner=owner.name,
            )
        if component.name in self._components:
            raise DuplicateComponentError(
                component=component.name,
                details=f"Circuit '{self.name}' already has a component named '{component.name}'.",
                circuit=self.name,
            )

        component._owner = self
        self._components[component.name] = component
        for pin in component.pins:
            self._connections.add(pin)
        if component.ground_reference:
            for pin in component.pins:
                self._connections.union(pin, GROUND)
        logger.debug(f"Added {component} to circuit '{self.name}'")
        return component

    def add_all(self, *components: ComponentBase) -> List[ComponentBase]:
        return [self.add(component) for component in components]

    def component(self, name: str) -> ComponentBase:
        try:
            return self._components[name]
        except KeyError:
            raise UnknownComponentError(
                component=name,
                details=f"Known components: {list(self._components)}",
                circuit=self.name,
            ) from None

    @property
    def components(self) -> Tuple[ComponentBase, ...]:
        return tuple(self._components.values())

    def __iter__(self) -> Iterator[ComponentBase]:
        return iter(self._components.values())

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, item: Union[str, ComponentBase]) -> bool:
        if isinstance(item, ComponentBase):
            return self._components.get(item.name) is item
        return item in self._components

    # --- Connections ---

    def _check_pin(self, pin: Pin) -> None:
        if not isinstance(pin, Pin):
            raise TypeError(f"Expected a Pin, got {type(pin).__name__}: {pin!r}")
        if pin.is_ground:
            return
        component = pin.component
        name = getattr(component, "name", repr(component))
        if self._components.get(name) is not component:
            raise UnknownComponentError(
                component=name,
                details=f"Pin '{pin.name}' belongs to a component that was never added to this circuit.",
                circuit=self.name,
            )
        if pin.terminal not in component.terminals():
            raise UnknownTerminalError(
                component=name,
                details=f"{type(component).__name__} does not declare terminal '{pin.terminal}'.",
                terminal=pin.terminal,
                available=component.terminals(),
            )

    def connect(self, pin_a: Pin, pin_b: Pin) -> None:
        """
        Merges the electrical identity of two terminals.

        Connecting a pin to itself, or connecting two pins that are already in
        the same node, changes nothing.

        Raises:
            UnknownComponentError: If either pin's component is not in this circuit.
            UnknownTerminalError: If either pin names an undeclared terminal.
        """
        self._check_pin(pin_a)
        self._check_pin(pin_b)
        if self._connections.union(pin_a, pin_b):
            self._merge_count += 1
            logger.debug(f"Connected {pin_a.name} <-> {pin_b.name}")
        else:
            logger.debug(f"{pin_a.name} and {pin_b.name} already share a node.")

    def connect_all(self, *pins: Pin) -> None:
        """Places every given pin on one node."""
        for pin in pins[1:]:
            self.connect(pins[0], pin)

    def pin(self, reference: str, ground_marker: str = DEFAULT_GROUND_MARKER) -> Pin:
        """Resolves a 'Component.terminal' reference (or the ground marker) to a Pin."""
        if reference == ground_marker:
            return GROUND
        component_name, sep, terminal = reference.rpartition(".")
        if not sep or not component_name:
            raise UnknownTerminalError(
                component=reference,
                details="Pin references have the form 'Component.terminal'.",
                terminal=terminal,
            )
        return self.component(component_name).pin(terminal)

    def terminals(self) -> Iterator[Pin]:
        """Every registered pin, in component insertion order then declared terminal order."""
        for component in self._components.values():
            yield from component.pins

    def are_connected(self, pin_a: Pin, pin_b: Pin) -> bool:
        self._check_pin(pin_a)
        self._check_pin(pin_b)
        return self._connections.connected(pin_a, pin_b)

    # --- Derived topology ---

    def assign_nodes(self) -> NodeAssignment:
        """Computes the canonical node numbering for the current connection set."""
        assignment = resolve_nodes(self.terminals(), self._connections)
        logger.debug(
            f"Circuit '{self.name}': {len(self)} components, {self._merge_count} merges, "
            f"{assignment.node_count} non-ground nodes."
        )
        return assignment

    def connectivity_graph(self) -> nx.MultiGraph:
        return build_connectivity_graph(self._components.values(), self.assign_nodes())

    def floating_nodes(self) -> List[int]:
        """Node ids that have no conductive path to ground through any component."""
        return find_floating_nodes(self.connectivity_graph())

    def __repr__(self) -> str:
        return f"Circuit(name='{self.name}', components={list(self._components)})"
