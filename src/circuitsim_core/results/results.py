# src/circuitsim_core/results/results.py
"""
Typed, immutable result objects built from a parsed dataset.

Each result validates itself on construction, so an object that exists is
complete: every waveform has one sample per independent point and every
S-parameter matrix has all N x N entries. Queries for names the result does
not hold raise `MissingFieldError` listing the names it does hold.
"""
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Dict, FrozenSet, Mapping, Optional, Tuple, Union

import numpy as np

from ..analysis import AnalysisKind
from ..config import DEFAULT_CONFIG, NetlistConfig
from ..errors import LengthMismatchError
from ..pin import Pin
from ..topology import GROUND_NODE, NodeAssignment, render_node
from .exceptions import IncompleteMatrixError, MissingFieldError

logger = logging.getLogger(__name__)


def _lookup(table: Mapping[str, Any], key: str, subject: str, what: str) -> Any:
    try:
        return table[key]
    except KeyError:
        raise MissingFieldError(
            subject=subject,
            details=f"No {what} named '{key}'.",
            field_name=key,
            available=sorted(table),
        ) from None


def _frozen_array(values, dtype) -> np.ndarray:
    array = np.array(values, dtype=dtype)
    array.setflags(write=False)
    return array


class _CircuitQueries:
    """
    Pin-level helpers shared by results that carry node voltages and branch
    currents. Subclasses provide `voltage(node)`, `current(branch)` and `_zero()`.
    """

    def pin_voltage(self, pin: Pin, assignment: NodeAssignment, config: NetlistConfig = DEFAULT_CONFIG):
        """Voltage of the node `pin` sits on; ground is exactly zero."""
        node = GROUND_NODE if pin.is_ground else assignment.node_of(pin)
        if node == GROUND_NODE:
            return self._zero()
        return self.voltage(render_node(node, config.ground_marker, config.node_prefix))

    def voltage_across(self, positive: Pin, negative: Pin, assignment: NodeAssignment,
                       config: NetlistConfig = DEFAULT_CONFIG):
        return self.pin_voltage(positive, assignment, config) - self.pin_voltage(negative, assignment, config)

    def _two_terminal(self, component, what: str, field_name: str):
        terminals = component.terminals()
        if len(terminals) != 2:
            raise MissingFieldError(
                subject=self.subject,
                details=f"{what} are reported for two-terminal branches only; "
                        f"'{component.name}' has {len(terminals)} terminals.",
                field_name=field_name,
                available=sorted(self.currents),
            )
        return terminals

    def pin_current(self, pin: Pin):
        """
        Current into `pin` of a two-terminal branch. The solver reports the
        current entering the first terminal; the second terminal carries the
        same current with opposite sign.
        """
        if pin.is_ground:
            raise MissingFieldError(
                subject=self.subject,
                details="Ground is a node, not a branch; it carries no single terminal current.",
                field_name=pin.name,
                available=sorted(self.currents),
            )
        terminals = self._two_terminal(pin.component, "Terminal currents", pin.name)
        current = self.current(pin.component.name)
        return current if pin.terminal == terminals[0] else -current

    def power(self, component, assignment: NodeAssignment, config: NetlistConfig = DEFAULT_CONFIG):
        """Power absorbed by a two-terminal branch: voltage across it times its current."""
        self._two_terminal(component, "Branch powers", component.name)
        first, second = component.pins
        return self.voltage_across(first, second, assignment, config) * self.current(component.name)

    def probe_voltage(self, probe):
        """Reading of a `VoltageProbe`, given the probe or its name."""
        return _lookup(self.voltages, getattr(probe, "name", probe), self.subject, "voltage probe")

    def probe_current(self, probe):
        """Reading of a `CurrentProbe`, given the probe or its name."""
        return _lookup(self.currents, getattr(probe, "name", probe), self.subject, "current probe")


@dataclass(frozen=True)
class DCResult(_CircuitQueries):
    """Operating point: one real voltage per node and one real current per branch."""
    voltages: Mapping[str, float]
    currents: Mapping[str, float] = field(default_factory=dict)

    kind: ClassVar[AnalysisKind] = AnalysisKind.DC
    subject: ClassVar[str] = "DC result"

    def __post_init__(self):
        object.__setattr__(self, "voltages", MappingProxyType({k: float(v) for k, v in self.voltages.items()}))
        object.__setattr__(self, "currents", MappingProxyType({k: float(v) for k, v in self.currents.items()}))

    def voltage(self, node: str) -> float:
        return _lookup(self.voltages, node, self.subject, "node voltage")

    def current(self, branch: str) -> float:
        return _lookup(self.currents, branch, self.subject, "branch current")

    def _zero(self) -> float:
        return 0.0


_WAVEFORM_KINDS = (AnalysisKind.AC, AnalysisKind.TRANSIENT, AnalysisKind.HARMONIC_BALANCE)


@dataclass(frozen=True)
class WaveformResult(_CircuitQueries):
    """
    Voltages and currents sampled over an independent variable: time for a
    transient analysis, frequency for AC and harmonic-balance analyses.
    Transient samples are real, the others are complex phasors.
    """
    kind: AnalysisKind
    independent_name: str
    independent: np.ndarray
    voltages: Mapping[str, np.ndarray]
    currents: Mapping[str, np.ndarray] = field(default_factory=dict)

    def __post_init__(self):
        kind = AnalysisKind(self.kind)
        if kind not in _WAVEFORM_KINDS:
            raise ValueError(f"WaveformResult holds AC, transient or harmonic-balance data, not {kind.value}.")
        dtype = float if kind is AnalysisKind.TRANSIENT else np.complex128
        object.__setattr__(self, "kind", kind)
        independent = _frozen_array(np.real(self.independent), float)
        object.__setattr__(self, "independent", independent)
        for attr in ("voltages", "currents"):
            table = {}
            for name, values in getattr(self, attr).items():
                values = _frozen_array(values if dtype is not float else np.real(values), dtype)
                if values.shape != independent.shape:
                    raise LengthMismatchError(
                        subject=name,
                        details=f"Waveform must have one sample per '{self.independent_name}' point.",
                        expected=len(independent),
                        actual=values.size,
                    )
                table[name] = values
            object.__setattr__(self, attr, MappingProxyType(table))

    @property
    def subject(self) -> str:
        return f"{self.kind.value} result"

    def __len__(self) -> int:
        return len(self.independent)

    @property
    def time(self) -> np.ndarray:
        if self.kind is not AnalysisKind.TRANSIENT:
            raise MissingFieldError(subject=self.subject, details="Only transient results have a time axis.",
                                    field_name="time", available=[self.independent_name])
        return self.independent

    @property
    def frequency(self) -> np.ndarray:
        if self.kind is AnalysisKind.TRANSIENT:
            raise MissingFieldError(subject=self.subject, details="Transient results have no frequency axis.",
                                    field_name="frequency", available=[self.independent_name])
        return self.independent

    def voltage(self, node: str) -> np.ndarray:
        return _lookup(self.voltages, node, self.subject, "node voltage")

    def current(self, branch: str) -> np.ndarray:
        return _lookup(self.currents, branch, self.subject, "branch current")

    def _zero(self) -> np.ndarray:
        dtype = float if self.kind is AnalysisKind.TRANSIENT else np.complex128
        return np.zeros(len(self.independent), dtype=dtype)


PortPair = Tuple[int, int]


@dataclass(frozen=True)
class SParameterResult:
    """
    Scattering parameters over frequency.

    Attributes:
        frequencies: Frequency points in Hz.
        s_matrix: Complex trace per (out, in) port pair, ports numbered from 1.
                  Holds every pair in 1..num_ports x 1..num_ports.
        num_ports: Number of ports N.
        z0: Reference impedance in ohms.
        sweep: Sweep settings of the analysis that produced the data.
    """
    frequencies: np.ndarray
    s_matrix: Mapping[PortPair, np.ndarray]
    num_ports: int
    z0: float = 50.0
    sweep: Mapping[str, Any] = field(default_factory=dict)

    kind: ClassVar[AnalysisKind] = AnalysisKind.SPARAMETER
    subject: ClassVar[str] = "S-parameter result"

    def __post_init__(self):
        if self.num_ports < 1:
            raise ValueError(f"An S-parameter result needs at least one port, got {self.num_ports}.")
        frequencies = _frozen_array(np.real(self.frequencies), float)
        object.__setattr__(self, "frequencies", frequencies)

        expected = [(i, j) for i in range(1, self.num_ports + 1) for j in range(1, self.num_ports + 1)]
        missing = [pair for pair in expected if pair not in self.s_matrix]
        if missing:
            raise IncompleteMatrixError(
                subject=self.subject,
                details=f"A {self.num_ports}-port result needs all {len(expected)} entries.",
                missing=missing,
                num_ports=self.num_ports,
            )

        table = {}
        for pair in expected:
            values = _frozen_array(self.s_matrix[pair], np.complex128)
            if values.shape != frequencies.shape:
                raise LengthMismatchError(
                    subject=f"S[{pair[0]},{pair[1]}]",
                    details="Every S-parameter trace needs one value per frequency point.",
                    expected=len(frequencies),
                    actual=values.size,
                )
            table[pair] = values
        object.__setattr__(self, "s_matrix", MappingProxyType(table))
        object.__setattr__(self, "sweep", MappingProxyType(dict(self.sweep)))

    @property
    def frequency(self) -> np.ndarray:
        return self.frequencies

    def s(self, out_port: int, in_port: int) -> np.ndarray:
        try:
            return self.s_matrix[(out_port, in_port)]
        except KeyError:
            raise MissingFieldError(
                subject=self.subject,
                details=f"Ports are numbered 1 to {self.num_ports}.",
                field_name=f"S[{out_port},{in_port}]",
                available=[f"S[{i},{j}]" for i, j in self.s_matrix],
            ) from None

    def s_db(self, out_port: int, in_port: int) -> np.ndarray:
        """Magnitude of S[out, in] in dB (20 log10 |S|)."""
        with np.errstate(divide="ignore"):
            return 20.0 * np.log10(np.abs(self.s(out_port, in_port)))

    def matrix(self) -> np.ndarray:
        """The full matrix as an array of shape (num_frequencies, N, N), zero-based."""
        n = self.num_ports
        out = np.empty((len(self.frequencies), n, n), dtype=np.complex128)
        for (i, j), values in self.s_matrix.items():
            out[:, i - 1, j - 1] = values
        return out


SourcePair = FrozenSet[str]


@dataclass(frozen=True)
class NoiseResult:
    """
    Noise analysis output.

    Correlation coefficients are keyed by the unordered pair of source names;
    values are passed through as reported, including any outside [-1, 1].
    Spectra such as input- and output-referred noise voltage are sampled over
    `frequencies` when the dataset holds a frequency axis.
    """
    correlations: Mapping[SourcePair, float]
    frequencies: Optional[np.ndarray] = None
    spectra: Mapping[str, np.ndarray] = field(default_factory=dict)

    kind: ClassVar[AnalysisKind] = AnalysisKind.NOISE
    subject: ClassVar[str] = "noise result"

    def __post_init__(self):
        object.__setattr__(self, "correlations", MappingProxyType(
            {frozenset(pair): float(value) for pair, value in self.correlations.items()}
        ))
        frequencies = None if self.frequencies is None else _frozen_array(np.real(self.frequencies), float)
        object.__setattr__(self, "frequencies", frequencies)
        table: Dict[str, np.ndarray] = {}
        for name, values in self.spectra.items():
            values = _frozen_array(np.real(values), float)
            if frequencies is not None and values.shape != frequencies.shape:
                raise LengthMismatchError(
                    subject=name,
                    details="Noise spectra need one value per frequency point.",
                    expected=len(frequencies),
                    actual=values.size,
                )
            table[name] = values
        object.__setattr__(self, "spectra", MappingProxyType(table))

    def correlation(self, source_a: str, source_b: str) -> float:
        key = frozenset((source_a, source_b))
        try:
            return self.correlations[key]
        except KeyError:
            raise MissingFieldError(
                subject=self.subject,
                details=f"No correlation between '{source_a}' and '{source_b}'.",
                field_name=f"{source_a},{source_b}",
                available=sorted(",".join(sorted(pair)) for pair in self.correlations),
            ) from None

    def spectrum(self, name: str) -> np.ndarray:
        return _lookup(self.spectra, name, self.subject, "noise spectrum")


Result = Union[DCResult, WaveformResult, SParameterResult, NoiseResult]
