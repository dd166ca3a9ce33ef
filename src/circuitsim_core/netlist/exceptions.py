# src/circuitsim_core/netlist/exceptions.py
from dataclasses import dataclass
from typing import Optional

from ..errors import FormatError, format_diagnostic_report


@dataclass(eq=False)
class NetlistSyntaxError(FormatError):
    """A netlist line does not follow `Tag:Name node ... key="value" ...`."""
    line: str = ""
    line_number: Optional[int] = None

    def __str__(self):
        where = f"line {self.line_number}: " if self.line_number is not None else ""
        return f"Netlist syntax error ({where}{self.line!r}): {self.reason}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Netlist Syntax Error",
            details=f"{self.reason}\nLine {self.line_number}: {self.line}" if self.line_number else self.reason,
            suggestion='Lines have the form Tag:Name node_1 ... node_k key="value" ...',
            context={'source_file': self.file_path, 'user_input': self.line}
        )
