# src/circuitsim_core/components/__init__.py
import logging
logger = logging.getLogger(__name__)

# Import base first to define the registries and decorator
from .base import (
    ComponentBase, ParameterSpec, REQUIRED,
    COMPONENT_REGISTRY, WIRE_TAG_REGISTRY, register_component,
)
from .capabilities import (
    ComponentCapability, INetlistContributor, IExternalFileProvider, provides
)
from .exceptions import (
    ConstructionError, RangeError, MissingEquationError, ParameterValueError,
    DuplicateComponentError, OwnershipError,
)
# Import concrete components to trigger registration
from .elements import (
    Resistor, Capacitor, Inductor, Ground, Short, Open,
    DCBlock, DCFeed, BiasTee, IdealTransformer, Attenuator, Amplifier,
)
from .sources import (
    DCVoltageSource, DCCurrentSource, ACVoltageSource, ACCurrentSource, PowerSource,
    VoltagePulseSource, CurrentPulseSource,
    VoltageRectangularSource, CurrentRectangularSource,
    VoltageExponentialSource, CurrentExponentialSource,
    VoltagePMSource, VoltageNoiseSource, CurrentNoiseSource,
    VoltageVoltageNoiseSource, CurrentCurrentNoiseSource, CurrentVoltageNoiseSource,
    FileSource, FileVoltageSource, FileCurrentSource,
)
from .controlled import (
    VoltageControlledVoltageSource, VoltageControlledCurrentSource,
    CurrentControlledVoltageSource, CurrentControlledCurrentSource,
)
from .devices import Diode, TunnelDiode, BJT, JFET, MOSFET, Thyristor, Triac, Diac
from .equation_defined import EquationDefinedDevice, EDD
from .probes import VoltageProbe, CurrentProbe, PowerProbe

logger.info(f"Available component types: {list(COMPONENT_REGISTRY.keys())}")

__all__ = [
    "ComponentBase", "ParameterSpec", "REQUIRED",
    "COMPONENT_REGISTRY", "WIRE_TAG_REGISTRY", "register_component",
    "ComponentCapability", "INetlistContributor", "IExternalFileProvider", "provides",
    "ConstructionError", "RangeError", "MissingEquationError", "ParameterValueError",
    "DuplicateComponentError", "OwnershipError",
    "Resistor", "Capacitor", "Inductor", "Ground", "Short", "Open",
    "DCBlock", "DCFeed", "BiasTee", "IdealTransformer", "Attenuator", "Amplifier",
    "DCVoltageSource", "DCCurrentSource", "ACVoltageSource", "ACCurrentSource", "PowerSource",
    "VoltagePulseSource", "CurrentPulseSource",
    "VoltageRectangularSource", "CurrentRectangularSource",
    "VoltageExponentialSource", "CurrentExponentialSource",
    "VoltagePMSource", "VoltageNoiseSource", "CurrentNoiseSource",
    "VoltageVoltageNoiseSource", "CurrentCurrentNoiseSource", "CurrentVoltageNoiseSource",
    "FileSource", "FileVoltageSource", "FileCurrentSource",
    "VoltageControlledVoltageSource", "VoltageControlledCurrentSource",
    "CurrentControlledVoltageSource", "CurrentControlledCurrentSource",
    "Diode", "TunnelDiode", "BJT", "JFET", "MOSFET", "Thyristor", "Triac", "Diac",
    "EquationDefinedDevice", "EDD",
    "VoltageProbe", "CurrentProbe", "PowerProbe",
]
