# src/circuitsim_core/results/exceptions.py
"""
Exceptions raised while turning solver dataset text into result objects.

Malformed text is a `DatasetSyntaxError`. Well-formed text that lacks data a
result needs is an `IncompleteResultError`, so callers can tell "the solver
wrote garbage" apart from "the solver did not compute what was asked for".
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..errors import DiagnosableError, FormatError, format_diagnostic_report


@dataclass(eq=False)
class DatasetSyntaxError(FormatError):
    """The dataset text is empty, truncated or not in the block format."""
    line_number: Optional[int] = None

    def __str__(self):
        where = f" (line {self.line_number})" if self.line_number is not None else ""
        return f"Dataset syntax error{where}: {self.reason}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Dataset Syntax Error",
            details=self.reason if self.line_number is None else f"Line {self.line_number}: {self.reason}",
            suggestion="The solver output must contain '<indep ...>' and '<dep ...>' blocks, each closed by its end tag.",
            context={'source_file': self.file_path}
        )


@dataclass(eq=False)
class IncompleteResultError(DiagnosableError):
    """The dataset parsed, but it does not hold everything the requested result needs."""
    subject: str
    details: str

    def __str__(self):
        return f"Incomplete result for '{self.subject}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Incomplete Result",
            details=self.details,
            suggestion="Check that the analysis directive matches the requested result kind.",
            context={'user_input': self.subject}
        )


@dataclass(eq=False)
class IncompleteMatrixError(IncompleteResultError):
    """An S-parameter matrix is missing one or more (out, in) entries."""
    missing: List[Tuple[int, int]] = field(default_factory=list)
    num_ports: Optional[int] = None

    def __str__(self):
        return (
            f"S-parameter matrix of '{self.subject}' is incomplete for {self.num_ports} ports; "
            f"missing entries: {self.missing}"
        )

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Incomplete S-Parameter Matrix",
            details=f"{self.details}\nMissing entries: " + ", ".join(f"S[{i},{j}]" for i, j in self.missing),
            suggestion="Every port must be terminated by a power source so that the full matrix is computed.",
            context={'expected': f"{self.num_ports * self.num_ports} entries" if self.num_ports else None,
                     'actual': f"{self.num_ports * self.num_ports - len(self.missing)} entries" if self.num_ports else None}
        )


@dataclass(eq=False)
class MissingFieldError(IncompleteResultError):
    """A named vector is absent from the dataset or the result."""
    field_name: str = ""
    available: Sequence[str] = ()

    def __str__(self):
        available = ", ".join(self.available) if self.available else "none"
        return f"'{self.field_name}' not found in '{self.subject}'. Available: {available}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Missing Result Field",
            details=f"{self.details}\nAvailable: " + (", ".join(self.available) or "none"),
            suggestion="Use one of the available names listed above.",
            context={'user_input': self.field_name}
        )
