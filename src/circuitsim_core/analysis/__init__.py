# src/circuitsim_core/analysis/__init__.py
from .directives import (
    AnalysisKind, SweepType, AnalysisDirective, DIRECTIVE_REGISTRY,
    DCAnalysis, ACAnalysis, TransientAnalysis, SParameterAnalysis, NoiseAnalysis, HarmonicBalanceAnalysis,
    ParameterSweep,
)
from .exceptions import InvalidAnalysisError

__all__ = [
    "AnalysisKind", "SweepType", "AnalysisDirective", "DIRECTIVE_REGISTRY",
    "DCAnalysis", "ACAnalysis", "TransientAnalysis", "SParameterAnalysis", "NoiseAnalysis",
    "HarmonicBalanceAnalysis", "ParameterSweep", "InvalidAnalysisError",
]
