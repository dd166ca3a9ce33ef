# src/circuitsim_core/netlist/raw_data.py
"""
Intermediate representation of netlist text, produced by the line reader
before any component is rebuilt from it.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class ParsedNetlistLine:
    """
    One component or directive line.

    For directive lines (`.DC:DC1 ...`) `tag` keeps its leading dot and `nodes`
    is empty.
    """
    tag: str
    name: str
    nodes: Tuple[str, ...]
    parameters: Dict[str, str] = field(default_factory=dict)
    line_number: int = 0

    @property
    def is_directive(self) -> bool:
        return self.tag.startswith(".")


@dataclass(frozen=True)
class ParsedNetlist:
    """All lines of a netlist, split into component and directive lines in source order."""
    components: List[ParsedNetlistLine]
    directives: List[ParsedNetlistLine]
