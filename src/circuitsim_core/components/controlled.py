# src/circuitsim_core/components/controlled.py
"""
Linear controlled sources. Terminals n1/n2 are the controlling port and
n3/n4 the controlled output; `G` is the transfer factor and `T` a delay.
"""
from typing import List

from .base import ComponentBase, ParameterSpec, register_component


class ControlledSource(ComponentBase):
    positional_parameters = ("G",)

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["n1", "n2", "n3", "n4"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("G", 1.0),
            ParameterSpec("T", 0.0, unit="second"),
        ]


@register_component("VCVS")
class VoltageControlledVoltageSource(ControlledSource):
    wire_tag = "VCVS"


@register_component("VCCS")
class VoltageControlledCurrentSource(ControlledSource):
    wire_tag = "VCCS"


@register_component("CCVS")
class CurrentControlledVoltageSource(ControlledSource):
    wire_tag = "CCVS"


@register_component("CCCS")
class CurrentControlledCurrentSource(ControlledSource):
    wire_tag = "CCCS"
