# src/circuitsim_core/results/__init__.py
from .exceptions import DatasetSyntaxError, IncompleteResultError, IncompleteMatrixError, MissingFieldError
from .dataset import DataVector, Dataset, parse_dataset, parse_value
from .results import DCResult, WaveformResult, SParameterResult, NoiseResult, Result
from .extract import (
    extract_dc, extract_waveform, extract_sparameters, extract_noise, extract_result, parse_result,
)

__all__ = [
    "DatasetSyntaxError", "IncompleteResultError", "IncompleteMatrixError", "MissingFieldError",
    "DataVector", "Dataset", "parse_dataset", "parse_value",
    "DCResult", "WaveformResult", "SParameterResult", "NoiseResult", "Result",
    "extract_dc", "extract_waveform", "extract_sparameters", "extract_noise", "extract_result", "parse_result",
]
