# src/circuitsim_core/pin.py
"""
The terminal identity type.

A `Pin` names one terminal of one component instance. Two pins are equal when
they refer to the *same component object* and the same terminal name; pins
carry no state of their own and are created on demand by
`ComponentBase.pin()`.
"""
from typing import Any


class _GroundReference:
    """Stand-in owner for the circuit-wide ground terminal."""
    name = "gnd"

    def __repr__(self) -> str:
        return "GROUND"


class Pin:
    __slots__ = ("component", "terminal")

    def __init__(self, component: Any, terminal: str):
        self.component = component
        self.terminal = terminal

    @property
    def name(self) -> str:
        """Dotted display name, e.g. 'R1.n2'."""
        if self.is_ground:
            return "gnd"
        return f"{self.component.name}.{self.terminal}"

    @property
    def is_ground(self) -> bool:
        return self.component is _GROUND_REFERENCE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pin):
            return NotImplemented
        return self.component is other.component and self.terminal == other.terminal

    def __hash__(self) -> int:
        return hash((id(self.component), self.terminal))

    def __repr__(self) -> str:
        return f"Pin('{self.name}')"


_GROUND_REFERENCE = _GroundReference()

# The single distinguished ground terminal shared by every circuit.
GROUND = Pin(_GROUND_REFERENCE, "gnd")
