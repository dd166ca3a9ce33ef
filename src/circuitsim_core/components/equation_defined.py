# src/circuitsim_core/components/equation_defined.py
"""
The equation-defined device (EDD): a variable-arity component whose branches
are described by a current equation and a charge equation each.

Branch i occupies terminals `p<i>` and `n<i>`, so a device with N branches has
exactly 2N terminals, ordered p1, n1, p2, n2, ... Equation text is opaque and
written to the netlist unevaluated.
"""
import logging
import re
from typing import Dict, List, Mapping, Optional, Tuple

from .base import ComponentBase, ParameterSpec, register_component
from .exceptions import MissingEquationError, ParameterValueError, RangeError

logger = logging.getLogger(__name__)

MIN_BRANCHES = 1
MAX_BRANCHES = 20
ZERO_EQUATION = "0"

_EQUATION_KEY_RE = re.compile(r"^([IQ])(\d+)$")


@register_component("EquationDefinedDevice")
class EquationDefinedDevice(ComponentBase):
    wire_tag = "EDD"
    variable_arity = True

    def __init__(
        self,
        name: str,
        branch_count: int,
        current_equations: Optional[Mapping[int, str]] = None,
        charge_equations: Optional[Mapping[int, str]] = None,
    ):
        """
        Args:
            name: Component name.
            branch_count: Number of branches, 1 to 20.
            current_equations: Branch index -> current equation text. Branch 1 is required.
            charge_equations: Branch index -> charge equation text. Branch 1 is required.

        Raises:
            RangeError: If `branch_count` or an equation's branch index is out of range.
            MissingEquationError: If the branch-1 current or charge equation is missing.
            ParameterValueError: If an equation is not a non-empty string.
        """
        super().__init__(name)
        if isinstance(branch_count, bool) or not isinstance(branch_count, int):
            raise ParameterValueError(
                component=name,
                details=f"Branch count must be an integer, got {type(branch_count).__name__}.",
                parameter="branch_count",
                value=branch_count,
            )
        if not MIN_BRANCHES <= branch_count <= MAX_BRANCHES:
            raise RangeError(
                component=name,
                details=f"An equation-defined device has between {MIN_BRANCHES} and {MAX_BRANCHES} branches.",
                value=branch_count,
                lower=MIN_BRANCHES,
                upper=MAX_BRANCHES,
            )
        self.branch_count: int = branch_count
        self.current_equations: Dict[int, str] = self._check_equations("I", current_equations or {})
        self.charge_equations: Dict[int, str] = self._check_equations("Q", charge_equations or {})
        logger.debug(f"EDD '{name}' has {branch_count} branch(es) and {self.terminal_count()} terminals.")

    def _check_equations(self, prefix: str, equations: Mapping[int, str]) -> Dict[int, str]:
        for branch, text in equations.items():
            if isinstance(branch, bool) or not isinstance(branch, int) or not 1 <= branch <= self.branch_count:
                raise RangeError(
                    component=self.name,
                    details=f"Equation {prefix}{branch} refers to a branch this device does not have.",
                    value=branch,
                    lower=1,
                    upper=self.branch_count,
                )
            if not isinstance(text, str) or not text.strip() or '"' in text:
                raise ParameterValueError(
                    component=self.name,
                    details="Equations must be non-empty strings without double quotes.",
                    parameter=f"{prefix}{branch}",
                    value=text,
                )
        if 1 not in equations:
            kind = "current" if prefix == "I" else "charge"
            raise MissingEquationError(
                component=self.name,
                details=f"The branch-1 {kind} equation is required.",
                equation=f"{prefix}1",
            )
        # Keep branch order explicit: 1..N, independent of how the mapping was built.
        return {branch: equations[branch] for branch in sorted(equations)}

    @classmethod
    def declare_terminals(cls) -> List[str]:
        return []

    @classmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        return []

    def terminals(self) -> List[str]:
        names = []
        for branch in range(1, self.branch_count + 1):
            names.extend((f"p{branch}", f"n{branch}"))
        return names

    def current_equation(self, branch: int) -> str:
        return self.current_equations.get(branch, ZERO_EQUATION)

    def charge_equation(self, branch: int) -> str:
        return self.charge_equations.get(branch, ZERO_EQUATION)

    def branches(self) -> List[Tuple[int, str, str]]:
        """(branch, current equation, charge equation) for every branch, 1..N."""
        return [
            (branch, self.current_equation(branch), self.charge_equation(branch))
            for branch in range(1, self.branch_count + 1)
        ]

    def netlist_parameters(self) -> List[Tuple[str, str]]:
        pairs = []
        for branch, current, charge in self.branches():
            pairs.append((f"I{branch}", current))
            pairs.append((f"Q{branch}", charge))
        return pairs

    @classmethod
    def from_netlist_parameters(cls, name: str, parameters: Dict[str, str]) -> "EquationDefinedDevice":
        currents: Dict[int, str] = {}
        charges: Dict[int, str] = {}
        for key, text in parameters.items():
            match = _EQUATION_KEY_RE.match(key)
            if not match:
                raise ParameterValueError(
                    component=name,
                    details=f"Unexpected key '{key}'; an EDD line carries only I<n>/Q<n> equations.",
                    parameter=key,
                    value=text,
                )
            branch = int(match.group(2))
            (currents if match.group(1) == "I" else charges)[branch] = text
        branch_indices = [int(_EQUATION_KEY_RE.match(k).group(2)) for k in parameters]
        branch_count = max(branch_indices, default=0)
        return cls(name, branch_count, current_equations=currents, charge_equations=charges)

    def __repr__(self) -> str:
        return f"EquationDefinedDevice(name='{self.name}', branch_count={self.branch_count})"


EDD = EquationDefinedDevice
