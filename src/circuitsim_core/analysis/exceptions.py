# src/circuitsim_core/analysis/exceptions.py
from dataclasses import dataclass

from ..components.exceptions import ConstructionError
from ..errors import format_diagnostic_report


@dataclass(eq=False)
class InvalidAnalysisError(ConstructionError):
    """An analysis directive was constructed with inconsistent sweep settings."""
    field: str = ""

    def __str__(self):
        return f"Invalid analysis '{self.component}' ({self.field}): {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Analysis Directive",
            details=self.details,
            suggestion="Check the sweep start/stop values and point count of the analysis.",
            context={'component': self.component, 'user_input': self.field}
        )
