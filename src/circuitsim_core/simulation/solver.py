# src/circuitsim_core/simulation/solver.py
"""
The boundary to the external numerical solver.

The solver is an opaque, synchronous collaborator: it receives complete
netlist text and returns the dataset text it produced, or raises
`SolverError`. How it runs (subprocess, remote service, canned output in a
test) is the implementation's business.
"""
import logging
from typing import Callable, Protocol, runtime_checkable

from ..errors import SolverError

logger = logging.getLogger(__name__)


@runtime_checkable
class Solver(Protocol):
    def run(self, netlist_text: str) -> str:
        """
        Simulates `netlist_text` and returns the solver's output text.

        Raises:
            SolverError: If no output could be produced.
        """
        ...


class CallableSolver:
    """Adapts a plain `netlist_text -> output_text` function to the `Solver` protocol."""

    def __init__(self, function: Callable[[str], str], name: str = "callable"):
        self.function = function
        self.name = name

    def run(self, netlist_text: str) -> str:
        logger.debug(f"Handing {len(netlist_text.splitlines())} netlist lines to solver '{self.name}'.")
        output = self.function(netlist_text)
        if not isinstance(output, str):
            raise SolverError(details=f"Solver '{self.name}' returned {type(output).__name__}, not text.")
        return output

    def __repr__(self) -> str:
        return f"CallableSolver({self.name!r})"
