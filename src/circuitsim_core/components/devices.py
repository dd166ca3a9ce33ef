# src/circuitsim_core/components/devices.py
"""
Semiconductor device models: diode, tunnel diode, BJT, JFET, MOSFET,
thyristor, triac and diac.

The model parameters are opaque data for this package: they are validated for
type and written to the netlist, never evaluated. Every default matches the
solver's own default, so an untouched device renders as a bare
`Tag:Name nodes` line.
"""
import logging
from typing import Iterable, List, Tuple

from .base import ComponentBase, ParameterSpec, register_component

logger = logging.getLogger(__name__)

TEMP = 26.85


def _model(pairs: Iterable[Tuple[str, float]]) -> List[ParameterSpec]:
    return [ParameterSpec(key, float(default)) for key, default in pairs]


_DIODE_MODEL = (
    ("Is", 1e-15), ("N", 1.0), ("M", 0.5), ("Cj0", 10e-15), ("Vj", 0.7),
    ("Rs", 0.0), ("Isr", 0.0), ("Nr", 2.0), ("Bv", 0.0), ("Ibv", 1e-3),
    ("Ikf", 0.0), ("Tt", 0.0), ("Fc", 0.5), ("Cp", 0.0), ("Kf", 0.0),
    ("Af", 1.0), ("Ffe", 1.0), ("Temp", TEMP), ("Xti", 3.0), ("Eg", 1.11),
    ("Tbv", 0.0), ("Trs", 0.0), ("Ttt1", 0.0), ("Ttt2", 0.0), ("Tm1", 0.0),
    ("Tm2", 0.0), ("Tnom", TEMP), ("Area", 1.0),
)

_TUNNEL_DIODE_MODEL = (
    ("Ip", 4.0e-3), ("Iv", 0.6e-3), ("Vv", 0.8), ("Cj0", 80e-15), ("M", 0.5),
    ("Vj", 0.5), ("Wr", 2.83e-20), ("eta", 1.73), ("dW", 0.3e-3),
    ("Tmax", 1.05e-10), ("de", 0.9), ("dv", 2.0), ("nv", 16.0), ("te", 0.5e-12),
    ("Temp", TEMP), ("Area", 1.0),
)

_BJT_MODEL = (
    ("Is", 1e-15), ("Nf", 1.0), ("Nr", 1.0), ("Ikf", 0.0), ("Ikr", 0.0),
    ("Vaf", 0.0), ("Var", 0.0), ("Ise", 0.0), ("Ne", 1.5), ("Isc", 0.0),
    ("Nc", 2.0), ("Bf", 100.0), ("Br", 1.0), ("Rbm", 0.0), ("Irb", 0.0),
    ("Rc", 0.0), ("Re", 0.0), ("Rb", 0.0), ("Cje", 0.0), ("Vje", 0.75),
    ("Mje", 0.33), ("Cjc", 0.0), ("Vjc", 0.75), ("Mjc", 0.33), ("Xcjc", 1.0),
    ("Cjs", 0.0), ("Vjs", 0.75), ("Mjs", 0.0), ("Fc", 0.5), ("Vtf", 0.0),
    ("Tf", 0.0), ("Xtf", 0.0), ("Itf", 0.0), ("Tr", 0.0), ("Temp", TEMP),
    ("Kf", 0.0), ("Af", 1.0), ("Ffe", 1.0), ("Kb", 0.0), ("Ab", 1.0),
    ("Fb", 1.0), ("Ptf", 0.0), ("Xtb", 0.0), ("Xti", 3.0), ("Eg", 1.11),
    ("Tnom", TEMP), ("Area", 1.0),
)

_JFET_MODEL = (
    ("Is", 1e-14), ("N", 1.0), ("Vt0", -2.0), ("Lambda", 0.0), ("Beta", 1e-4),
    ("M", 0.5), ("Pb", 1.0), ("Fc", 0.5), ("Cgs", 0.0), ("Cgd", 0.0),
    ("Rd", 0.0), ("Rs", 0.0), ("Isr", 0.0), ("Nr", 2.0), ("Kf", 0.0),
    ("Af", 1.0), ("Ffe", 1.0), ("Temp", TEMP), ("Xti", 3.0), ("Vt0tc", 0.0),
    ("Betatce", 0.0), ("Tnom", TEMP), ("Area", 1.0),
)

_MOSFET_MODEL = (
    ("Is", 1e-14), ("N", 1.0), ("Vt0", 0.0), ("Lambda", 0.0), ("Kp", 2e-5),
    ("Gamma", 0.0), ("Phi", 0.6), ("Theta", 0.0), ("Ld", 0.0), ("W", 1e-6),
    ("L", 1e-6), ("Rd", 0.0), ("Rs", 0.0), ("Rg", 0.0), ("Rb", 0.0),
    ("Cbd", 0.0), ("Cbs", 0.0), ("Cgb", 0.0), ("Cgd", 0.0), ("Cgs", 0.0),
    ("Pb", 0.8), ("Mj", 0.5), ("Fc", 0.5), ("Isr", 0.0), ("Js", 0.0),
    ("Ad", 0.0), ("As", 0.0), ("Pd", 0.0), ("Ps", 0.0), ("Temp", TEMP),
    ("Tnom", TEMP),
)


@register_component("Diode")
class Diode(ComponentBase):
    """PN junction diode."""
    wire_tag = "Diode"

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["cathode", "anode"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return _model(_DIODE_MODEL)


@register_component("TunnelDiode")
class TunnelDiode(ComponentBase):
    """Resonant tunnelling diode."""
    wire_tag = "RTD"

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["cathode", "anode"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return _model(_TUNNEL_DIODE_MODEL)


@register_component("BJT")
class BJT(ComponentBase):
    """Gummel-Poon bipolar junction transistor."""
    wire_tag = "BJT"

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["base", "collector", "emitter", "substrate"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [ParameterSpec("Type", "npn", kind=str, choices=("npn", "pnp"))] + _model(_BJT_MODEL)


@register_component("JFET")
class JFET(ComponentBase):
    wire_tag = "JFET"

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["gate", "drain", "source"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [ParameterSpec("Type", "nfet", kind=str, choices=("nfet", "pfet"))] + _model(_JFET_MODEL)


@register_component("MOSFET")
class MOSFET(ComponentBase):
    """Level-1 MOSFET."""
    wire_tag = "MOSFET"

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["gate", "drain", "source", "bulk"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [ParameterSpec("Type", "nfet", kind=str, choices=("nfet", "pfet"))] + _model(_MOSFET_MODEL)


@register_component("Thyristor")
class Thyristor(ComponentBase):
    wire_tag = "SCR"

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["anode", "gate", "cathode"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return _model((
            ("Igt", 50e-6), ("Vbo", 30.0), ("Cj0", 10e-12), ("Is", 1e-10),
            ("N", 2.0), ("Ri", 10.0), ("Rg", 5.0), ("Temp", TEMP),
        ))


@register_component("Triac")
class Triac(ComponentBase):
    wire_tag = "Triac"

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["t1", "gate", "t2"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return _model((
            ("Vbo", 30.0), ("Cj0", 10e-12), ("Is", 1e-10), ("N", 2.0),
            ("Ri", 10.0), ("Rg", 5.0), ("Temp", TEMP),
        ))


@register_component("Diac")
class Diac(ComponentBase):
    wire_tag = "Diac"

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["cathode", "anode"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return _model((
            ("Ibo", 50e-6), ("Vbo", 30.0), ("Cj0", 10e-12), ("Is", 1e-10),
            ("N", 2.0), ("Ri", 10.0), ("Temp", TEMP),
        ))
