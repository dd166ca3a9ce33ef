# src/circuitsim_core/analysis/directives.py
"""
Analysis directives: the `.DC`, `.AC`, `.TR`, `.SP`, `.Noise`, `.HB` and `.SW`
lines appended to a netlist to tell the solver what to compute.

Each directive is a frozen dataclass validated on construction and rendered
by `to_netlist_line()`. Unlike component lines, directive lines always carry
every property.
"""
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type

from ..formatting import format_value
from .exceptions import InvalidAnalysisError

logger = logging.getLogger(__name__)


class AnalysisKind(str, Enum):
    """Selects the decoding strategy for solver output."""
    DC = "dc"
    AC = "ac"
    TRANSIENT = "transient"
    SPARAMETER = "sparameter"
    NOISE = "noise"
    HARMONIC_BALANCE = "hb"


class SweepType(str, Enum):
    LINEAR = "lin"
    LOGARITHMIC = "log"


DIRECTIVE_REGISTRY: Dict[str, Type["AnalysisDirective"]] = {}


def register_directive(cls):
    DIRECTIVE_REGISTRY[cls.wire_tag] = cls
    return cls


@dataclass(frozen=True)
class AnalysisDirective:
    """Base class for all analysis directives."""
    kind: ClassVar[AnalysisKind]
    wire_tag: ClassVar[str]

    def properties(self) -> List[Tuple[str, Any]]:
        raise NotImplementedError

    def to_netlist_line(self) -> str:
        fields = [f".{self.wire_tag}:{self.name}"]
        fields.extend(f'{key}="{format_value(value)}"' for key, value in self.properties())
        return " ".join(fields)


def _check_sweep(name: str, start: float, stop: float, points: int, positive_start: bool) -> None:
    if positive_start and not start > 0:
        raise InvalidAnalysisError(component=name, details=f"Start must be positive, got {start}.", field="start")
    if not stop > start:
        raise InvalidAnalysisError(
            component=name, details=f"Stop ({stop}) must be greater than start ({start}).", field="stop"
        )
    if isinstance(points, bool) or not isinstance(points, int) or points < 2:
        raise InvalidAnalysisError(component=name, details=f"At least 2 points are required, got {points!r}.", field="points")


@register_directive
@dataclass(frozen=True)
class DCAnalysis(AnalysisDirective):
    kind: ClassVar[AnalysisKind] = AnalysisKind.DC
    wire_tag: ClassVar[str] = "DC"

    name: str = "DC1"
    save_ops: bool = True
    temperature: float = 26.85
    save_all: bool = False

    def properties(self) -> List[Tuple[str, Any]]:
        return [("saveOPs", self.save_ops), ("Temp", float(self.temperature)), ("saveAll", self.save_all)]


@register_directive
@dataclass(frozen=True)
class ACAnalysis(AnalysisDirective):
    """Small-signal frequency sweep."""
    kind: ClassVar[AnalysisKind] = AnalysisKind.AC
    wire_tag: ClassVar[str] = "AC"

    start: float
    stop: float
    points: int
    sweep_type: SweepType = SweepType.LOGARITHMIC
    name: str = "AC1"

    def __post_init__(self):
        _check_sweep(self.name, self.start, self.stop, self.points, positive_start=True)
        object.__setattr__(self, "sweep_type", SweepType(self.sweep_type))

    def properties(self) -> List[Tuple[str, Any]]:
        return [
            ("Type", self.sweep_type.value), ("Start", float(self.start)),
            ("Stop", float(self.stop)), ("Points", self.points),
        ]


@register_directive
@dataclass(frozen=True)
class TransientAnalysis(AnalysisDirective):
    """
    Time-domain simulation from `start` to `stop`.

    Give either `points` or `step`; with neither, 101 points are used.
    """
    kind: ClassVar[AnalysisKind] = AnalysisKind.TRANSIENT
    wire_tag: ClassVar[str] = "TR"

    stop: float
    start: float = 0.0
    points: Optional[int] = None
    step: Optional[float] = None
    name: str = "TR1"
    integration_method: str = "Trapezoidal"

    def __post_init__(self):
        if self.points is not None and self.step is not None:
            raise InvalidAnalysisError(component=self.name, details="Specify either points or step, not both.", field="step")
        points = self.points
        if points is None:
            points = 101 if self.step is None else math.ceil((self.stop - self.start) / self.step) + 1
        object.__setattr__(self, "points", points)
        _check_sweep(self.name, self.start, self.stop, points, positive_start=False)

    def properties(self) -> List[Tuple[str, Any]]:
        return [
            ("Type", SweepType.LINEAR.value), ("Start", float(self.start)),
            ("Stop", float(self.stop)), ("Points", self.points),
            ("IntegrationMethod", self.integration_method),
        ]


@register_directive
@dataclass(frozen=True)
class SParameterAnalysis(AnalysisDirective):
    kind: ClassVar[AnalysisKind] = AnalysisKind.SPARAMETER
    wire_tag: ClassVar[str] = "SP"

    start: float
    stop: float
    points: int
    sweep_type: SweepType = SweepType.LOGARITHMIC
    z0: float = 50.0
    noise: bool = False
    noise_input_port: int = 1
    noise_output_port: int = 2
    name: str = "SP1"

    def __post_init__(self):
        _check_sweep(self.name, self.start, self.stop, self.points, positive_start=True)
        if not self.z0 > 0:
            raise InvalidAnalysisError(component=self.name, details="Reference impedance must be positive.", field="z0")
        if self.noise_input_port < 1 or self.noise_output_port < 1:
            raise InvalidAnalysisError(component=self.name, details="Noise port numbers start at 1.", field="noise ports")
        object.__setattr__(self, "sweep_type", SweepType(self.sweep_type))

    def properties(self) -> List[Tuple[str, Any]]:
        return [
            ("Type", self.sweep_type.value), ("Start", float(self.start)),
            ("Stop", float(self.stop)), ("Points", self.points), ("Z0", float(self.z0)),
            ("Noise", self.noise), ("NoiseIP", self.noise_input_port), ("NoiseOP", self.noise_output_port),
        ]

    def sweep_metadata(self) -> Dict[str, Any]:
        return {
            "type": self.sweep_type.value, "start": float(self.start),
            "stop": float(self.stop), "points": self.points,
        }


@register_directive
@dataclass(frozen=True)
class NoiseAnalysis(AnalysisDirective):
    """Noise analysis at `output` (a node name) driven by source `source`."""
    kind: ClassVar[AnalysisKind] = AnalysisKind.NOISE
    wire_tag: ClassVar[str] = "Noise"

    start: float
    stop: float
    points: int
    output: str
    source: str
    sweep_type: SweepType = SweepType.LOGARITHMIC
    name: str = "Noise1"

    def __post_init__(self):
        _check_sweep(self.name, self.start, self.stop, self.points, positive_start=True)
        object.__setattr__(self, "sweep_type", SweepType(self.sweep_type))

    def properties(self) -> List[Tuple[str, Any]]:
        return [
            ("Type", self.sweep_type.value), ("Start", float(self.start)),
            ("Stop", float(self.stop)), ("Points", self.points),
            ("Output", self.output), ("Src", self.source),
        ]


@register_directive
@dataclass(frozen=True)
class HarmonicBalanceAnalysis(AnalysisDirective):
    """Periodic steady state of a nonlinear circuit driven at `frequency`."""
    kind: ClassVar[AnalysisKind] = AnalysisKind.HARMONIC_BALANCE
    wire_tag: ClassVar[str] = "HB"

    frequency: float
    harmonics: int = 5
    name: str = "HB1"

    def __post_init__(self):
        if not self.frequency > 0:
            raise InvalidAnalysisError(
                component=self.name, details=f"Fundamental frequency must be positive, got {self.frequency}.",
                field="frequency",
            )
        if isinstance(self.harmonics, bool) or not isinstance(self.harmonics, int) or self.harmonics < 1:
            raise InvalidAnalysisError(
                component=self.name, details=f"At least 1 harmonic is required, got {self.harmonics!r}.",
                field="harmonics",
            )

    def properties(self) -> List[Tuple[str, Any]]:
        return [("n", self.harmonics), ("f", float(self.frequency))]


@register_directive
@dataclass(frozen=True)
class ParameterSweep(AnalysisDirective):
    """
    Repeats `inner` while sweeping `parameter`. Renders the inner directive's
    line first, followed by the `.SW` line that references it.
    """
    wire_tag: ClassVar[str] = "SW"

    parameter: str
    start: float
    stop: float
    points: int
    inner: AnalysisDirective = field(default_factory=DCAnalysis)
    sweep_type: SweepType = SweepType.LINEAR
    name: str = "SW1"

    def __post_init__(self):
        _check_sweep(self.name, self.start, self.stop, self.points, positive_start=False)
        object.__setattr__(self, "sweep_type", SweepType(self.sweep_type))

    @property
    def kind(self) -> AnalysisKind:
        return self.inner.kind

    def properties(self) -> List[Tuple[str, Any]]:
        return [
            ("Type", self.sweep_type.value), ("Param", self.parameter),
            ("Start", float(self.start)), ("Stop", float(self.stop)),
            ("Points", self.points), ("Sim", self.inner.name),
        ]

    def to_netlist_line(self) -> str:
        return f"{self.inner.to_netlist_line()}\n{super().to_netlist_line()}"
