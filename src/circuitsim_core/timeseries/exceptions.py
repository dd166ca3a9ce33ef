# src/circuitsim_core/timeseries/exceptions.py
from dataclasses import dataclass

from ..errors import FormatError, format_diagnostic_report


@dataclass(eq=False)
class UnrecognizedFormatError(FormatError):
    """The content is neither block-structured nor delimited two-column text."""

    def __str__(self):
        where = f" '{self.file_path}'" if self.file_path is not None else ""
        return f"Unrecognized time-series format{where}: {self.reason}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Unrecognized Time-Series Format",
            details=self.reason,
            suggestion=(
                "Use either comma/semicolon separated 'time,value' rows (optionally with a header row)\n"
                "or a block file starting with '<Qucs Dataset 1.0.0>'."
            ),
            context={'source_file': self.file_path}
        )
