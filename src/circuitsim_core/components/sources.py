# src/circuitsim_core/components/sources.py
"""
Independent sources: DC, AC, power port, pulse, rectangular, exponential,
noise, correlated noise, file-driven and phase-modulated.

Default values follow the solver's documented defaults so that eliding a
parameter never changes what the solver simulates.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional

from ..timeseries import FileData, FileFormat, write_file
from .base import ComponentBase, ParameterSpec, register_component
from .capabilities import IExternalFileProvider, provides
from .exceptions import ParameterValueError

logger = logging.getLogger(__name__)

SIM_TEMPERATURE_C = 26.85


class TwoTerminalSource(ComponentBase):
    """Shared terminal declaration for independent two-terminal sources."""

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["nplus", "nminus"]


# --- DC and AC ---

@register_component("DCVoltageSource")
class DCVoltageSource(TwoTerminalSource):
    wire_tag = "Vdc"
    positional_parameters = ("U",)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [ParameterSpec("U", unit="volt")]


@register_component("DCCurrentSource")
class DCCurrentSource(TwoTerminalSource):
    wire_tag = "Idc"
    positional_parameters = ("I",)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [ParameterSpec("I", unit="ampere")]


@register_component("ACVoltageSource")
class ACVoltageSource(TwoTerminalSource):
    wire_tag = "Vac"
    positional_parameters = ("U",)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("U", unit="volt"),
            ParameterSpec("f", 1e9, unit="hertz"),
            ParameterSpec("Phase", 0.0),
            ParameterSpec("Theta", 0.0),
        ]


@register_component("ACCurrentSource")
class ACCurrentSource(TwoTerminalSource):
    wire_tag = "Iac"
    positional_parameters = ("I",)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("I", unit="ampere"),
            ParameterSpec("f", 1e9, unit="hertz"),
            ParameterSpec("Phase", 0.0),
            ParameterSpec("Theta", 0.0),
        ]


@register_component("PowerSource")
class PowerSource(TwoTerminalSource):
    """
    Power source and S-parameter port. `Num` is the port number used in
    S-parameter results; `P` is the available power in dBm.
    """
    wire_tag = "Pac"
    positional_parameters = ("Num",)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("Num", kind=int),
            ParameterSpec("Z", 50.0, unit="ohm"),
            ParameterSpec("P", 0.0, suffix="dBm"),
            ParameterSpec("f", 1e9, unit="hertz"),
            ParameterSpec("Temp", SIM_TEMPERATURE_C),
        ]


# --- Transient waveforms ---

@register_component("VoltagePulseSource")
class VoltagePulseSource(TwoTerminalSource):
    wire_tag = "Vpulse"

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("U1", 0.0, unit="volt"),
            ParameterSpec("U2", 1.0, unit="volt"),
            ParameterSpec("T1", 0.0, unit="second"),
            ParameterSpec("T2", 1e-3, unit="second"),
            ParameterSpec("Tr", 1e-9, unit="second"),
            ParameterSpec("Tf", 1e-9, unit="second"),
        ]


@register_component("CurrentPulseSource")
class CurrentPulseSource(TwoTerminalSource):
    wire_tag = "Ipulse"

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("I1", 0.0, unit="ampere"),
            ParameterSpec("I2", 1e-3, unit="ampere"),
            ParameterSpec("T1", 0.0, unit="second"),
            ParameterSpec("T2", 1e-3, unit="second"),
            ParameterSpec("Tr", 1e-9, unit="second"),
            ParameterSpec("Tf", 1e-9, unit="second"),
        ]


@register_component("VoltageRectangularSource")
class VoltageRectangularSource(TwoTerminalSource):
    wire_tag = "Vrect"

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("U", 1.0, unit="volt"),
            ParameterSpec("TH", 1e-3, unit="second"),
            ParameterSpec("TL", 1e-3, unit="second"),
            ParameterSpec("Tr", 1e-9, unit="second"),
            ParameterSpec("Tf", 1e-9, unit="second"),
            ParameterSpec("Td", 0.0, unit="second"),
        ]


@register_component("CurrentRectangularSource")
class CurrentRectangularSource(TwoTerminalSource):
    wire_tag = "Irect"

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("I", 1e-3, unit="ampere"),
            ParameterSpec("TH", 1e-3, unit="second"),
            ParameterSpec("TL", 1e-3, unit="second"),
            ParameterSpec("Tr", 1e-9, unit="second"),
            ParameterSpec("Tf", 1e-9, unit="second"),
            ParameterSpec("Td", 0.0, unit="second"),
        ]


@register_component("VoltageExponentialSource")
class VoltageExponentialSource(TwoTerminalSource):
    wire_tag = "Vexp"

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("U1", 0.0, unit="volt"),
            ParameterSpec("U2", 1.0, unit="volt"),
            ParameterSpec("T1", 0.0, unit="second"),
            ParameterSpec("T2", 1e-3, unit="second"),
            ParameterSpec("Tr", 1e-9, unit="second"),
            ParameterSpec("Tf", 1e-9, unit="second"),
        ]


@register_component("CurrentExponentialSource")
class CurrentExponentialSource(TwoTerminalSource):
    wire_tag = "Iexp"

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("I1", 0.0, unit="ampere"),
            ParameterSpec("I2", 1e-3, unit="ampere"),
            ParameterSpec("T1", 0.0, unit="second"),
            ParameterSpec("T2", 1e-3, unit="second"),
            ParameterSpec("Tr", 1e-9, unit="second"),
            ParameterSpec("Tf", 1e-9, unit="second"),
        ]


@register_component("VoltagePMSource")
class VoltagePMSource(ComponentBase):
    """AC voltage source whose phase is modulated by the voltage at `nmod`."""
    wire_tag = "PM_Mod"

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["nplus", "nminus", "nmod"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("U", 1.0, unit="volt"),
            ParameterSpec("f", 1e9, unit="hertz"),
            ParameterSpec("M", 1.0),
            ParameterSpec("Phase", 0.0),
        ]


# --- Noise ---
# Spectral density follows PSD = value / (a + c * f^e).

@register_component("VoltageNoiseSource")
class VoltageNoiseSource(TwoTerminalSource):
    wire_tag = "Vnoise"

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("u", 1e-6),
            ParameterSpec("a", 0.0),
            ParameterSpec("c", 1.0),
            ParameterSpec("e", 0.0),
        ]


@register_component("CurrentNoiseSource")
class CurrentNoiseSource(TwoTerminalSource):
    wire_tag = "Inoise"

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("i", 1e-6),
            ParameterSpec("a", 0.0),
            ParameterSpec("c", 1.0),
            ParameterSpec("e", 0.0),
        ]


def _correlated_noise_parameters(first: str, second: str) -> List[ParameterSpec]:
    return [
        ParameterSpec(first, 1e-6),
        ParameterSpec(second, 1e-6),
        ParameterSpec("C", 0.0, bounds=(-1.0, 1.0)),
        ParameterSpec("a", 0.0),
        ParameterSpec("c", 1.0),
        ParameterSpec("e", 0.0),
    ]


@register_component("VoltageVoltageNoiseSource")
class VoltageVoltageNoiseSource(ComponentBase):
    """Two correlated noise voltage sources; `C` is the correlation coefficient."""
    wire_tag = "vvnoise"

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["v1plus", "v1minus", "v2plus", "v2minus"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return _correlated_noise_parameters("v1", "v2")


@register_component("CurrentCurrentNoiseSource")
class CurrentCurrentNoiseSource(ComponentBase):
    wire_tag = "iinoise"

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["i1plus", "i1minus", "i2plus", "i2minus"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return _correlated_noise_parameters("i1", "i2")


@register_component("CurrentVoltageNoiseSource")
class CurrentVoltageNoiseSource(ComponentBase):
    wire_tag = "ivnoise"

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return ["i1plus", "i1minus", "v2plus", "v2minus"]

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return _correlated_noise_parameters("i1", "v2")


# --- File-driven ---

class FileSource(TwoTerminalSource):
    """
    Source whose waveform is read by the solver from a data file.

    Either name an existing file with `File`, or pass the samples in memory
    with `data=`; in the latter case `File` defaults to '<name>.dat' (or
    '.csv') and the file is written by `prepare_external_files`.
    """
    positional_parameters = ("File",)

    def __init__(self, name: str, *args: Any, data: Optional[FileData] = None, **parameters: Any):
        if data is not None and not isinstance(data, FileData):
            raise ParameterValueError(
                component=str(name),
                details=f"'data' must be a FileData instance, got {type(data).__name__}.",
                parameter="data",
            )
        if data is not None and not args and "File" not in parameters:
            parameters["File"] = f"{name}{data.format.extension}"
        self.data: Optional[FileData] = data
        super().__init__(name, *args, **parameters)

    @classmethod
    def from_samples(cls, name: str, times, samples, fmt: FileFormat = FileFormat.BLOCK,
                     **parameters: Any) -> "FileSource":
        data = FileData(independent=times, dependent=samples, format=fmt)
        return cls(name, data=data, **parameters)

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return [
            ParameterSpec("File", kind=str),
            ParameterSpec("Interpolator", "linear", kind=str, choices=("hold", "linear", "cubic")),
            ParameterSpec("Repeat", False, kind=bool),
            ParameterSpec("G", 1.0),
            ParameterSpec("T", 0.0, unit="second"),
        ]

    @provides(IExternalFileProvider)
    class ExternalFileProvider:
        def prepare_external_files(self, component: "FileSource", directory: Path) -> List[Path]:
            if component.data is None:
                return []
            target = Path(component.get("File"))
            if not target.is_absolute():
                target = Path(directory) / target
            target.parent.mkdir(parents=True, exist_ok=True)
            write_file(component.data, target)
            logger.debug(f"Prepared data file '{target}' for '{component.name}'.")
            return [target]


@register_component("FileVoltageSource")
class FileVoltageSource(FileSource):
    wire_tag = "Vfile"


@register_component("FileCurrentSource")
class FileCurrentSource(FileSource):
    wire_tag = "Ifile"
