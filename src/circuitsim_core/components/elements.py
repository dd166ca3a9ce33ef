# src/circuitsim_core/components/elements.py
"""
Passive elements (Resistor, Capacitor, Inductor) and the zero-parameter
specializations (Ground, Short, Open).
"""

import logging
from typing import List, Optional, Sequence

from .base import ComponentBase, ParameterSpec, register_component
from .capabilities import INetlistContributor, provides

logger = logging.getLogger(__name__)

SHORT_RESISTANCE_OHM = 1e-6
OPEN_RESISTANCE_OHM = 1e12


class TwoTerminalElement(ComponentBase):
    """Shared terminal declaration for two-terminal passives."""

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["n1", "n2"]


@register_component("Resistor")
class Resistor(TwoTerminalElement):
    """Ideal resistor with optional temperature coefficients."""
    wire_tag = "R"
    positional_parameters = ("R",)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("R", unit="ohm"),
            ParameterSpec("Temp", 26.85),
            ParameterSpec("Tc1", 0.0),
            ParameterSpec("Tc2", 0.0),
            ParameterSpec("Tnom", 26.85),
        ]


@register_component("Capacitor")
class Capacitor(TwoTerminalElement):
    wire_tag = "C"
    positional_parameters = ("C",)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [ParameterSpec("C", unit="farad")]


@register_component("Inductor")
class Inductor(TwoTerminalElement):
    wire_tag = "L"
    positional_parameters = ("L",)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [ParameterSpec("L", unit="henry")]


@register_component("Ground")
class Ground(ComponentBase):
    """
    The ground reference as a placeable component.

    Its single terminal joins the circuit's ground class as soon as it is added,
    and it writes no netlist line: ground appears only as the node marker.
    """
    wire_tag = "GND"
    parseable = False
    ground_reference = True

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["n"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return []

    @provides(INetlistContributor)
    class NetlistContributor:
        def to_netlist_line(self, component: "Ground", node_names: Sequence[str]) -> Optional[str]:
            return None


@register_component("Short")
class Short(TwoTerminalElement):
    """Ideal short circuit, written as a very small resistor."""
    wire_tag = "R"
    parseable = False
    fixed_properties = (("R", SHORT_RESISTANCE_OHM),)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return []


@register_component("Open")
class Open(TwoTerminalElement):
    """Ideal open circuit, written as a very large resistor."""
    wire_tag = "R"
    parseable = False
    fixed_properties = (("R", OPEN_RESISTANCE_OHM),)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return []


# --- RF building blocks ---

@register_component("DCBlock")
class DCBlock(TwoTerminalElement):
    """Series coupling capacitor that blocks DC."""
    wire_tag = "DCBlock"
    positional_parameters = ("C",)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [ParameterSpec("C", unit="farad")]


@register_component("DCFeed")
class DCFeed(TwoTerminalElement):
    """Series choke inductor that passes DC only."""
    wire_tag = "DCFeed"
    positional_parameters = ("L",)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [ParameterSpec("L", unit="henry")]


@register_component("BiasTee")
class BiasTee(ComponentBase):
    wire_tag = "BiasT"

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["rf", "dc", "out"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("C", unit="farad"),
            ParameterSpec("L", unit="henry"),
        ]


@register_component("IdealTransformer")
class IdealTransformer(ComponentBase):
    """Ideal transformer with turns ratio T (primary n1/n2, secondary n3/n4)."""
    wire_tag = "Tr"
    positional_parameters = ("T",)

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["n1", "n2", "n3", "n4"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [ParameterSpec("T", 1.0)]


@register_component("Attenuator")
class Attenuator(TwoTerminalElement):
    wire_tag = "Attenuator"
    positional_parameters = ("L",)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("L", suffix="dB"),
            ParameterSpec("Zref", 50.0, unit="ohm"),
            ParameterSpec("Temp", 26.85),
        ]


@register_component("Amplifier")
class Amplifier(TwoTerminalElement):
    """Ideal unilateral amplifier with gain and noise figure in dB."""
    wire_tag = "Amp"
    positional_parameters = ("G",)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("G", suffix="dB"),
            ParameterSpec("NF", 0.0, suffix="dB"),
            ParameterSpec("Z1", 50.0, unit="ohm"),
            ParameterSpec("Z2", 50.0, unit="ohm"),
        ]
