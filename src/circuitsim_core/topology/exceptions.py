# src/circuitsim_core/topology/exceptions.py
"""
Diagnosable exceptions for terminal connections.

`TerminalConnectionError` roots the family. Connection failures are caller
programming errors and are raised immediately from `Circuit.connect` and
`ComponentBase.connect`.
"""
from dataclasses import dataclass
from typing import List, Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(eq=False)
class TerminalConnectionError(DiagnosableError):
    """Base class for errors raised while wiring terminals together."""
    component: str
    details: str

    def __str__(self):
        return f"Connection error on '{self.component}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Connection Error",
            details=self.details,
            suggestion="Check that every pin passed to connect() belongs to a component in this circuit.",
            context={'component': self.component}
        )


@dataclass(eq=False)
class UnknownComponentError(TerminalConnectionError):
    """A pin refers to a component that was never added to the circuit."""
    circuit: str = ""

    def __str__(self):
        return f"Component '{self.component}' is not part of circuit '{self.circuit}'. {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Unknown Component",
            details=self.details,
            suggestion="Call circuit.add(component) before connecting its terminals.",
            context={'component': self.component}
        )


@dataclass(eq=False)
class UnknownTerminalError(TerminalConnectionError):
    """A pin names a terminal the component does not declare."""
    terminal: str = ""
    available: Optional[List[str]] = None

    def __str__(self):
        return (
            f"Component '{self.component}' has no terminal '{self.terminal}'. "
            f"Available terminals: {self.available}"
        )

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Unknown Terminal",
            details=self.details,
            suggestion=f"Use one of the declared terminals: {self.available}",
            context={'component': self.component, 'terminal': self.terminal}
        )


@dataclass(eq=False)
class ArityError(TerminalConnectionError):
    """The number of connection targets does not match the component's terminal count."""
    expected: int = 0
    actual: int = 0

    def __str__(self):
        return (
            f"Component '{self.component}' has {self.expected} terminals "
            f"but {self.actual} connection targets were given."
        )

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Arity Mismatch",
            details=self.details,
            suggestion="Pass exactly one connection target per terminal, in declared terminal order.",
            context={'component': self.component, 'expected': self.expected, 'actual': self.actual}
        )
