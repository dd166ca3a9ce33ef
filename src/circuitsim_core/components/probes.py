# src/circuitsim_core/components/probes.py
"""
Measurement probes.

A probe writes a line of its own so the solver reports a named quantity for
it: a voltage probe's reading appears as `<name>.V` (`.v`, `.Vt` for AC and
transient) and a current probe's as `<name>.I`. Read them back with
`probe_voltage` / `probe_current` on the result.
"""
import logging
from typing import List

from .base import ComponentBase, ParameterSpec, register_component
from .elements import TwoTerminalElement

logger = logging.getLogger(__name__)


@register_component("VoltageProbe")
class VoltageProbe(TwoTerminalElement):
    """Reads the voltage from n1 to n2. Open circuit; does not load the circuit."""
    wire_tag = "VProbe"

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return []


@register_component("CurrentProbe")
class CurrentProbe(TwoTerminalElement):
    """Reads the current flowing from n1 to n2. Inserted in series; zero impedance."""
    wire_tag = "IProbe"

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return []


@register_component("PowerProbe")
class PowerProbe(ComponentBase):
    """Reads the power flowing between the differential ports (n1, n2) and (n3, n4)."""
    wire_tag = "WProbe"

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["n1", "n2", "n3", "n4"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return []
