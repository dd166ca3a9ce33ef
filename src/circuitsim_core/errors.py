# src/circuitsim_core/errors.py
import logging
from dataclasses import dataclass
from pathlib import Path
from abc import abstractmethod
from typing import Any, Dict, Optional, Protocol, Tuple, Union
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Root ---

class CircuitSimError(Exception):
    """Base class for every error raised by CircuitSim Core."""
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own rich diagnostic report.
    Any code can work with a "diagnosable" object without needing to know its
    concrete type.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(CircuitSimError, Diagnosable):
    """
    The concrete base class for all diagnosable errors in the package.

    It is catchable in `except` clauses and declares `get_diagnostic_report` as
    abstract, so every subclass must say how it reports itself or it cannot be
    instantiated.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, ensuring a
    consistent look and feel for all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Arity Mismatch").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (component, terminal,
                 source file, expected/actual counts).

    Returns:
        A formatted, user-friendly diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "============== CircuitSim Core: Actionable Diagnostic Report ==============",
        f"Error Type:     {error_type}",
    ]
    if component := context.get('component'):
        lines.append(f"Component:      {component}")
    if terminal := context.get('terminal'):
        lines.append(f"Terminal:       {terminal}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")
    if context.get('expected') is not None:
        lines.append(f"Expected:       {context['expected']}")
    if context.get('actual') is not None:
        lines.append(f"Actual:         {context['actual']}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("===========================================================================")
    return "\n".join(lines)


# --- Shared Error Families ---
# These are raised by more than one subsystem (file codec, netlist reader,
# dataset parser, configuration loader), so they live at the top level.

@dataclass(eq=False)
class FormatError(DiagnosableError):
    """Raised when file or text content cannot be parsed or is structurally invalid."""
    reason: str
    file_path: Optional[Union[str, Path]] = None

    def __str__(self):
        if self.file_path is not None:
            return f"Format error in '{self.file_path}': {self.reason}"
        return f"Format error: {self.reason}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Format Error",
            details=self.reason,
            suggestion="Check the content of the file or text against the documented format.",
            context={'source_file': self.file_path}
        )


@dataclass(eq=False)
class ValidationError(DiagnosableError):
    """Raised when parallel numeric sequences violate a structural invariant."""
    subject: str
    details: str

    def __str__(self):
        return f"Validation failed for '{self.subject}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Validation Error",
            details=self.details,
            suggestion="Ensure the sequences have equal lengths and that the independent variable is strictly increasing.",
            context={'user_input': self.subject}
        )


@dataclass(eq=False)
class NonMonotonicError(ValidationError):
    """The independent sequence is not strictly increasing."""
    index: Optional[int] = None

    def __str__(self):
        where = f" at index {self.index}" if self.index is not None else ""
        return f"Sequence '{self.subject}' is not strictly increasing{where}: {self.details}"


@dataclass(eq=False)
class LengthMismatchError(ValidationError):
    """Two sequences that must be aligned index-for-index have different lengths."""
    expected: Optional[int] = None
    actual: Optional[int] = None

    def __str__(self):
        return (
            f"Length mismatch for '{self.subject}': expected {self.expected}, "
            f"got {self.actual}. {self.details}"
        )

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Length Mismatch",
            details=self.details,
            suggestion="Every sequence must have exactly one value per independent-variable point.",
            context={'user_input': self.subject, 'expected': self.expected, 'actual': self.actual}
        )


# --- Solver Boundary ---

@dataclass(eq=False)
class SolverError(DiagnosableError):
    """The external solver could not produce a dataset."""
    details: str
    exit_status: Optional[int] = None

    def __str__(self):
        status = f" (exit status {self.exit_status})" if self.exit_status is not None else ""
        return f"Solver failed{status}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Solver Failure",
            details=self.details,
            suggestion="Inspect the generated netlist; the solver rejected it or failed while running it.",
            context={'actual': self.exit_status}
        )


@dataclass(eq=False)
class SolverOutputError(SolverError):
    """The solver's output text reports errors instead of (or alongside) a dataset."""
    messages: Tuple[str, ...] = ()

    def __str__(self):
        return f"Solver reported {len(self.messages)} error(s): " + "; ".join(self.messages)

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Solver Reported Errors",
            details="\n".join(self.messages) or self.details,
            suggestion="Fix the reported netlist problems and run the analysis again.",
            context={}
        )
