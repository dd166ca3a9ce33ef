# src/circuitsim_core/formatting.py
"""
Canonical text rendering of parameter and sample values.

Floats are written with `repr`, the shortest string that reads back to the
identical double, so every numeric value survives a write/read cycle exactly.
"""
import numbers
from typing import Any

import numpy as np


def format_value(value: Any) -> str:
    """
    Renders a parameter value for netlist or data-file text.

    - bool (including numpy bool) -> 'yes' / 'no'
    - integers -> decimal integer text
    - floats -> shortest round-trip representation ('1e-12', '1000.0')
    - strings -> unchanged
    """
    if isinstance(value, (bool, np.bool_)):
        return "yes" if value else "no"
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        return repr(float(value))
    if isinstance(value, str):
        return value
    raise TypeError(f"Cannot format value of type '{type(value).__name__}': {value!r}")


def parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in ("yes", "true", "1"):
        return True
    if lowered in ("no", "false", "0"):
        return False
    raise ValueError(f"'{text}' is not a boolean literal (expected 'yes' or 'no').")
