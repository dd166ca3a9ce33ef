# src/circuitsim_core/simulation/execution.py
"""
Public entry point for running one analysis of a circuit through a solver.

`simulate` ties the pieces together: it writes the data files of file-driven
sources, renders the netlist with the analysis directive appended, hands the
text to the solver and parses what comes back into the typed result for the
analysis kind. Errors are logged and propagate unchanged, so callers can catch
the specific failure (`SolverError`, `IncompleteMatrixError`, ...).
"""
import logging
from pathlib import Path
from typing import Optional, Union

from ..analysis import AnalysisDirective, AnalysisKind, SParameterAnalysis
from ..circuit import Circuit
from ..components import PowerSource
from ..config import DEFAULT_CONFIG, NetlistConfig
from ..errors import DiagnosableError, SolverError
from ..netlist import NetlistSerializer
from ..results import Result, parse_result
from .solver import Solver

logger = logging.getLogger(__name__)


def _port_count(circuit: Circuit) -> Optional[int]:
    ports = [c for c in circuit if isinstance(c, PowerSource)]
    return len(ports) or None


def simulate(
    circuit: Circuit,
    analysis: AnalysisDirective,
    solver: Solver,
    config: NetlistConfig = DEFAULT_CONFIG,
    work_directory: Optional[Union[str, Path]] = None,
) -> Result:
    """
    Runs `analysis` on `circuit` and returns the typed result.

    Args:
        circuit: The circuit to simulate.
        analysis: The directive appended to the netlist. Its kind selects how
                  the solver output is decoded.
        solver: The solver collaborator.
        config: Rendering configuration.
        work_directory: Where data files of file-driven sources are written.
                        Defaults to `config.data_directory`, then the current
                        directory.

    Returns:
        A `DCResult`, `WaveformResult`, `SParameterResult` or `NoiseResult`.

    Raises:
        SolverError: If the solver fails or reports errors in its output.
        FormatError: If the output is not a well-formed dataset.
        IncompleteResultError: If the output lacks data the result needs.
    """
    serializer = NetlistSerializer(config)
    logger.info(f"--- Simulating '{circuit.name}' ({analysis.kind.value} analysis '{analysis.name}') ---")
    try:
        serializer.prepare_external_files(circuit, work_directory)
        netlist_text = serializer.render(circuit, [analysis])

        try:
            output = solver.run(netlist_text)
        except SolverError:
            raise
        except Exception as e:
            logger.critical(f"Solver raised an unexpected {type(e).__name__}: {e}", exc_info=True)
            raise SolverError(details=f"Unexpected {type(e).__name__} from the solver: {e}") from e

        options = {}
        if analysis.kind is AnalysisKind.SPARAMETER:
            options["num_ports"] = _port_count(circuit)
            if isinstance(analysis, SParameterAnalysis):
                options["z0"] = float(analysis.z0)
                options["sweep"] = analysis.sweep_metadata()
        result = parse_result(output, analysis.kind, **options)
    except DiagnosableError as e:
        logger.error(f"Simulation of '{circuit.name}' failed: {e}")
        raise

    logger.info(f"Simulation of '{circuit.name}' completed.")
    return result
