# --- src/circuitsim_core/units.py ---
import logging
from typing import Any, Optional, Union

import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.debug("Pint Unit Registry initialized.")


def to_magnitude(value: Union[str, Quantity], unit: Optional[str]) -> float:
    """
    Converts a dimensioned parameter value to a plain float magnitude in `unit`.

    Accepts a `Quantity` or a string that pint can parse ("1 kohm", "10 nH",
    "2.5"). Dimensionless input is taken as already being in `unit`.

    Raises:
        pint.DimensionalityError: If the quantity's dimension does not match `unit`.
        pint.UndefinedUnitError: If a unit string names an unknown unit.
    """
    qty = value if isinstance(value, Quantity) else ureg.Quantity(value)
    if not isinstance(qty, Quantity):
        # pint returns a bare number for purely numeric strings.
        return float(qty)
    if qty.dimensionless:
        return float(qty.to(ureg.dimensionless).magnitude)
    if unit is None:
        raise pint.DimensionalityError(qty.units, ureg.dimensionless)
    return float(qty.to(unit).magnitude)
