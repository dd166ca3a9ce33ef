# src/circuitsim_core/netlist/__init__.py
from ..formatting import format_value
from .exceptions import NetlistSyntaxError
from .raw_data import ParsedNetlistLine, ParsedNetlist
from .serializer import NetlistSerializer, render_netlist
from .parser import parse_netlist_line, parse_netlist, component_from_line, read_netlist

__all__ = [
    "format_value",
    "NetlistSyntaxError",
    "ParsedNetlistLine", "ParsedNetlist",
    "NetlistSerializer", "render_netlist",
    "parse_netlist_line", "parse_netlist", "component_from_line", "read_netlist",
]
