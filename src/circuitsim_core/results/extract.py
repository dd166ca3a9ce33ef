# src/circuitsim_core/results/extract.py
"""
Turns solver output into the typed result for a given analysis kind.

Vector naming written by the solver:

    =============  ============  ===================  ===================
    Analysis       Independent   Node voltages         Branch currents
    =============  ============  ===================  ===================
    DC             (none)        ``<node>.V``          ``<branch>.I``
    AC             acfrequency   ``<node>.v``          ``<branch>.i``
    Transient      time          ``<node>.Vt``         ``<branch>.It``
    HB             hbfrequency   ``<node>.Vb``         ``<branch>.Ib``
    =============  ============  ===================  ===================

S-parameter traces are ``S[i,j]`` over ``frequency``. Noise correlations are
single-valued ``C[<source>,<source>]`` vectors; every other dependent vector of
a noise dataset (``inoise``, ``onoise``, ...) is kept as a spectrum.
"""
import logging
import re
from typing import Any, Dict, Mapping, Optional, Tuple

from ..analysis import AnalysisKind
from ..errors import LengthMismatchError
from .dataset import Dataset, parse_dataset
from .exceptions import DatasetSyntaxError, MissingFieldError
from .results import DCResult, NoiseResult, Result, SParameterResult, WaveformResult

logger = logging.getLogger(__name__)

_S_RE = re.compile(r"^S\[(\d+),(\d+)\]$")
_CORRELATION_RE = re.compile(r"^C\[([^,\]]+),([^,\]]+)\]$")

_WAVEFORM_NAMING = {
    AnalysisKind.AC: ("acfrequency", ".v", ".i"),
    AnalysisKind.TRANSIENT: ("time", ".Vt", ".It"),
    AnalysisKind.HARMONIC_BALANCE: ("hbfrequency", ".Vb", ".Ib"),
}
_NOISE_AXES = ("frequency", "acfrequency")


def _require_independent(dataset: Dataset, name: str, kind: AnalysisKind):
    vector = dataset.vectors.get(name)
    if vector is None or not vector.is_independent:
        raise MissingFieldError(
            subject=f"{kind.value} dataset",
            details=f"A {kind.value} dataset must contain the independent vector '{name}'.",
            field_name=name,
            available=[v.name for v in dataset.independent()],
        )
    return vector


def _split_by_suffix(dataset: Dataset, voltage_suffix: str, current_suffix: str):
    voltages, currents = {}, {}
    for vector in dataset.dependent():
        if vector.name.endswith(voltage_suffix):
            voltages[vector.name[:-len(voltage_suffix)]] = vector
        elif vector.name.endswith(current_suffix):
            currents[vector.name[:-len(current_suffix)]] = vector
        else:
            logger.debug(f"Ignoring dataset vector '{vector.name}'.")
    return voltages, currents


def extract_dc(dataset: Dataset) -> DCResult:
    voltages, currents = _split_by_suffix(dataset, ".V", ".I")
    for vector in (*voltages.values(), *currents.values()):
        if len(vector) != 1:
            raise LengthMismatchError(
                subject=vector.name,
                details="An operating-point value must be a single number.",
                expected=1,
                actual=len(vector),
            )
    if not voltages:
        raise MissingFieldError(
            subject="dc dataset",
            details="The dataset holds no node voltages ('<node>.V' vectors).",
            field_name="*.V",
            available=dataset.names(),
        )
    return DCResult(
        voltages={name: vector.real[0] for name, vector in voltages.items()},
        currents={name: vector.real[0] for name, vector in currents.items()},
    )


def extract_waveform(dataset: Dataset, kind: AnalysisKind) -> WaveformResult:
    axis, voltage_suffix, current_suffix = _WAVEFORM_NAMING[kind]
    independent = _require_independent(dataset, axis, kind)
    voltages, currents = _split_by_suffix(dataset, voltage_suffix, current_suffix)
    return WaveformResult(
        kind=kind,
        independent_name=axis,
        independent=independent.values,
        voltages={name: vector.values for name, vector in voltages.items()},
        currents={name: vector.values for name, vector in currents.items()},
    )


def extract_sparameters(dataset: Dataset, num_ports: Optional[int] = None, z0: float = 50.0,
                        sweep: Optional[Mapping[str, Any]] = None) -> SParameterResult:
    """
    Collects the ``S[i,j]`` traces of an S-parameter dataset.

    Args:
        num_ports: Declared port count. When omitted it is the largest port
                   index found in the dataset.
        z0: Reference impedance of the analysis.
        sweep: Sweep settings to attach; defaults to the range of the
               frequency vector.
    """
    frequencies = _require_independent(dataset, "frequency", AnalysisKind.SPARAMETER)
    traces: Dict[Tuple[int, int], Any] = {}
    for vector in dataset.dependent():
        match = _S_RE.match(vector.name)
        if match:
            traces[(int(match.group(1)), int(match.group(2)))] = vector.values

    if num_ports is None:
        if not traces:
            raise MissingFieldError(
                subject="sparameter dataset",
                details="The dataset holds no 'S[i,j]' vectors and no port count was given.",
                field_name="S[1,1]",
                available=dataset.names(),
            )
        num_ports = max(max(pair) for pair in traces)
    out_of_range = sorted(pair for pair in traces if not (1 <= min(pair) and max(pair) <= num_ports))
    if out_of_range:
        raise DatasetSyntaxError(
            reason=f"Entries {out_of_range} lie outside the declared {num_ports}-port matrix."
        )

    if sweep is None:
        f = frequencies.real
        sweep = {"start": float(f[0]), "stop": float(f[-1]), "points": len(f)} if len(f) else {}
    return SParameterResult(
        frequencies=frequencies.values,
        s_matrix=traces,
        num_ports=num_ports,
        z0=z0,
        sweep=sweep,
    )


def extract_noise(dataset: Dataset) -> NoiseResult:
    axis = next((dataset.vectors[name] for name in _NOISE_AXES
                 if name in dataset and dataset.vectors[name].is_independent), None)
    correlations = {}
    spectra = {}
    for vector in dataset.dependent():
        match = _CORRELATION_RE.match(vector.name)
        if match:
            if len(vector) != 1:
                raise LengthMismatchError(
                    subject=vector.name,
                    details="A correlation coefficient must be a single number.",
                    expected=1,
                    actual=len(vector),
                )
            value = vector.real[0]
            if not -1.0 <= value <= 1.0:
                logger.warning(f"Correlation {vector.name} = {value} lies outside [-1, 1]; passing it through.")
            correlations[frozenset((match.group(1).strip(), match.group(2).strip()))] = value
        else:
            spectra[vector.name] = vector.values
    return NoiseResult(
        correlations=correlations,
        frequencies=None if axis is None else axis.values,
        spectra=spectra,
    )


def extract_result(dataset: Dataset, kind: AnalysisKind, num_ports: Optional[int] = None,
                   z0: float = 50.0, sweep: Optional[Mapping[str, Any]] = None) -> Result:
    """Builds the result object for `kind` from an already parsed dataset."""
    kind = AnalysisKind(kind)
    if kind is AnalysisKind.DC:
        result = extract_dc(dataset)
    elif kind in _WAVEFORM_NAMING:
        result = extract_waveform(dataset, kind)
    elif kind is AnalysisKind.SPARAMETER:
        result = extract_sparameters(dataset, num_ports=num_ports, z0=z0, sweep=sweep)
    else:
        result = extract_noise(dataset)
    logger.info(f"Extracted {kind.value} result from dataset with {len(dataset)} vectors.")
    return result


def parse_result(text: str, kind: AnalysisKind, num_ports: Optional[int] = None, z0: float = 50.0,
                 sweep: Optional[Mapping[str, Any]] = None, source=None) -> Result:
    """
    Parses solver output text straight into a typed result.

    Args:
        text: Complete solver output.
        kind: Which result to build.
        num_ports: S-parameter port count; inferred when omitted.
        z0: S-parameter reference impedance.
        sweep: S-parameter sweep settings to attach to the result.
        source: Optional file path, used only in error messages.

    Raises:
        SolverOutputError: If the output reports solver errors.
        DatasetSyntaxError: If the text is not a well-formed dataset.
        MissingFieldError: If a vector the result needs is absent.
        IncompleteMatrixError: If an S-parameter matrix lacks an entry.
        LengthMismatchError: If vectors disagree in length.
    """
    return extract_result(parse_dataset(text, source), kind, num_ports=num_ports, z0=z0, sweep=sweep)
