# src/circuitsim_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("CircuitSim Core package initialized.")

from .units import ureg, pint, Quantity
from .errors import (
    CircuitSimError, Diagnosable, DiagnosableError, FormatError, ValidationError,
    NonMonotonicError, LengthMismatchError, SolverError, SolverOutputError,
)
from .pin import Pin, GROUND
from .config import NetlistConfig, ConfigError, DEFAULT_CONFIG
from .circuit import Circuit
from .components import (
    ComponentBase, ParameterSpec, COMPONENT_REGISTRY, WIRE_TAG_REGISTRY, register_component,
    ConstructionError, RangeError, MissingEquationError, ParameterValueError,
    DuplicateComponentError, OwnershipError,
    Resistor, Capacitor, Inductor, Ground, DCVoltageSource, DCCurrentSource,
    ACVoltageSource, PowerSource, FileVoltageSource, FileCurrentSource, EquationDefinedDevice,
    VoltageProbe, CurrentProbe, PowerProbe,
)
from .topology import (
    NodeAssignment, DisjointSet, TerminalConnectionError,
    UnknownComponentError, UnknownTerminalError, ArityError,
)
from .analysis import (
    AnalysisKind, SweepType, DCAnalysis, ACAnalysis, TransientAnalysis,
    SParameterAnalysis, NoiseAnalysis, HarmonicBalanceAnalysis, ParameterSweep, InvalidAnalysisError,
)
from .timeseries import FileData, FileFormat, read_file, write_file, UnrecognizedFormatError
from .netlist import NetlistSerializer, render_netlist, read_netlist, NetlistSyntaxError, format_value
from .results import (
    parse_dataset, parse_result, Dataset, DataVector,
    DCResult, WaveformResult, SParameterResult, NoiseResult,
    DatasetSyntaxError, IncompleteResultError, IncompleteMatrixError, MissingFieldError,
)
from .simulation import Solver, CallableSolver, simulate

__all__ = [
    # Units
    "ureg", "pint", "Quantity",
    # Errors
    "CircuitSimError", "Diagnosable", "DiagnosableError", "FormatError", "ValidationError",
    "NonMonotonicError", "LengthMismatchError", "SolverError", "SolverOutputError",
    # Circuit model
    "Pin", "GROUND", "Circuit", "NodeAssignment", "DisjointSet",
    "TerminalConnectionError", "UnknownComponentError", "UnknownTerminalError", "ArityError",
    # Configuration
    "NetlistConfig", "ConfigError", "DEFAULT_CONFIG",
    # Analyses
    "AnalysisKind", "SweepType", "DCAnalysis", "ACAnalysis", "TransientAnalysis",
    "SParameterAnalysis", "NoiseAnalysis", "HarmonicBalanceAnalysis", "ParameterSweep", "InvalidAnalysisError",
    # Time series
    "FileData", "FileFormat", "read_file", "write_file", "UnrecognizedFormatError",
    # Netlist
    "NetlistSerializer", "render_netlist", "read_netlist", "NetlistSyntaxError", "format_value",
    # Results
    "parse_dataset", "parse_result", "Dataset", "DataVector",
    "DCResult", "WaveformResult", "SParameterResult", "NoiseResult",
    "DatasetSyntaxError", "IncompleteResultError", "IncompleteMatrixError", "MissingFieldError",
    # Simulation
    "Solver", "CallableSolver", "simulate",
    # Components
    "ComponentBase", "ParameterSpec", "COMPONENT_REGISTRY", "WIRE_TAG_REGISTRY", "register_component",
    "ConstructionError", "RangeError", "MissingEquationError", "ParameterValueError",
    "DuplicateComponentError", "OwnershipError",
    "Resistor", "Capacitor", "Inductor", "Ground", "DCVoltageSource", "DCCurrentSource",
    "ACVoltageSource", "PowerSource", "FileVoltageSource", "FileCurrentSource", "EquationDefinedDevice",
    "VoltageProbe", "CurrentProbe", "PowerProbe",
]
