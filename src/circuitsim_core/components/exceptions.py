# src/circuitsim_core/components/exceptions.py
"""
Defines the diagnosable exceptions raised while constructing components and
placing them into a circuit.

Every exception here derives from `ConstructionError`, so callers that only care
whether a component could be built can catch a single type.
"""
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(eq=False)
class ConstructionError(DiagnosableError):
    """Base class for every failure to build a component or add it to a circuit."""
    component: str
    details: str

    def __str__(self):
        return f"Cannot construct component '{self.component}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Component Construction Error",
            details=self.details,
            suggestion="Check the arguments passed to the component constructor.",
            context={'component': self.component}
        )


@dataclass(eq=False)
class RangeError(ConstructionError):
    """A numeric construction argument lies outside its permitted interval."""
    value: Any = None
    lower: Optional[float] = None
    upper: Optional[float] = None

    def __str__(self):
        return (
            f"Component '{self.component}': value {self.value!r} is outside "
            f"[{self.lower}, {self.upper}]. {self.details}"
        )

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Value Out Of Range",
            details=self.details,
            suggestion=f"Choose a value between {self.lower} and {self.upper} (inclusive).",
            context={
                'component': self.component,
                'expected': f"[{self.lower}, {self.upper}]",
                'actual': self.value,
            }
        )


@dataclass(eq=False)
class MissingEquationError(ConstructionError):
    """An equation-defined device lacks an equation it cannot be built without."""
    equation: str = ""

    def __str__(self):
        return f"Component '{self.component}' requires equation '{self.equation}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Missing Equation",
            details=self.details,
            suggestion=f"Supply the '{self.equation}' equation when constructing the device.",
            context={'component': self.component, 'expected': self.equation}
        )


@dataclass(eq=False)
class ParameterValueError(ConstructionError):
    """A parameter keyword is unknown, missing, or has a value that cannot be converted."""
    parameter: str = ""
    value: Any = None

    def __str__(self):
        return f"Component '{self.component}', parameter '{self.parameter}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Parameter",
            details=self.details,
            suggestion="Check the parameter name and give a value in a compatible unit.",
            context={
                'component': self.component,
                'user_input': None if self.value is None else f"{self.parameter}={self.value!r}",
            }
        )


@dataclass(eq=False)
class DuplicateComponentError(ConstructionError):
    """A component with the same name already exists in the circuit."""
    circuit: str = ""

    def __str__(self):
        return f"Circuit '{self.circuit}' already contains a component named '{self.component}'."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Duplicate Component Name",
            details=self.details,
            suggestion="Component names must be unique within a circuit. Rename one of them.",
            context={'component': self.component}
        )


@dataclass(eq=False)
class OwnershipError(ConstructionError):
    """The component has already been added to a different circuit."""
    owner: str = ""

    def __str__(self):
        return f"Component '{self.component}' is already owned by circuit '{self.owner}'."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Component Already Owned",
            details=self.details,
            suggestion="Construct a new component instance for each circuit.",
            context={'component': self.component, 'actual': self.owner}
        )
