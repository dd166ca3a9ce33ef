# src/circuitsim_core/netlist/parser.py
"""
Reads netlist text back into `ParsedNetlistLine` records, components and
circuits.

Reading is the inverse of `NetlistSerializer`: every non-default parameter of
a component survives a render/read cycle with an identical value, and a
circuit read from rendered text renders to the same text again.
"""
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..circuit import Circuit
from ..components.base import WIRE_TAG_REGISTRY, ComponentBase
from ..config import DEFAULT_CONFIG, NetlistConfig
from ..pin import Pin
from .exceptions import NetlistSyntaxError
from .raw_data import ParsedNetlist, ParsedNetlistLine

logger = logging.getLogger(__name__)

# Either key="value" (value may contain spaces) or a bare token.
_TOKEN_RE = re.compile(r'\s*(?:([^\s="]+)="([^"]*)"|([^\s"]+))')


def _tokenize(line: str, line_number: int, source) -> List[Tuple[Optional[str], str]]:
    tokens = []
    pos = 0
    stripped = line.rstrip()
    while pos < len(stripped):
        match = _TOKEN_RE.match(stripped, pos)
        if match is None or match.end() == pos:
            raise NetlistSyntaxError(
                reason=f"Unexpected character at column {pos + 1}.",
                file_path=source, line=line, line_number=line_number,
            )
        key, value, bare = match.groups()
        tokens.append((key, value) if key is not None else (None, bare))
        pos = match.end()
    return tokens


def parse_netlist_line(line: str, line_number: int = 0,
                       source: Optional[Union[str, Path]] = None) -> ParsedNetlistLine:
    """
    Splits one line into tag, name, node tokens and raw parameter strings.

    Raises:
        NetlistSyntaxError: If the line is blank, lacks the `Tag:Name` head,
                            repeats a key, or has a node token after a parameter.
    """
    tokens = _tokenize(line, line_number, source)
    if not tokens:
        raise NetlistSyntaxError(reason="Empty line.", file_path=source, line=line, line_number=line_number)

    head_key, head = tokens[0]
    tag, sep, name = head.partition(":")
    if head_key is not None or not sep or not tag or not name:
        raise NetlistSyntaxError(
            reason="A line must start with 'Tag:Name'.", file_path=source, line=line, line_number=line_number
        )

    nodes: List[str] = []
    parameters: Dict[str, str] = {}
    for key, value in tokens[1:]:
        if key is None:
            if "=" in value:
                raise NetlistSyntaxError(
                    reason=f"Parameter values must be double-quoted: '{value}'.",
                    file_path=source, line=line, line_number=line_number,
                )
            if parameters:
                raise NetlistSyntaxError(
                    reason=f"Node token '{value}' follows a parameter.",
                    file_path=source, line=line, line_number=line_number,
                )
            nodes.append(value)
        elif key in parameters:
            raise NetlistSyntaxError(
                reason=f"Parameter '{key}' is given twice.", file_path=source, line=line, line_number=line_number
            )
        else:
            parameters[key] = value

    if tag.startswith(".") and nodes:
        raise NetlistSyntaxError(
            reason="Analysis directives take no node tokens.", file_path=source, line=line, line_number=line_number
        )
    return ParsedNetlistLine(tag=tag, name=name, nodes=tuple(nodes), parameters=parameters, line_number=line_number)


def parse_netlist(text: str, source: Optional[Union[str, Path]] = None) -> ParsedNetlist:
    """Parses every non-blank, non-comment line of `text`."""
    components: List[ParsedNetlistLine] = []
    directives: List[ParsedNetlistLine] = []
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parsed = parse_netlist_line(line, number, source)
        (directives if parsed.is_directive else components).append(parsed)
    logger.debug(f"Parsed {len(components)} component and {len(directives)} directive lines.")
    return ParsedNetlist(components=components, directives=directives)


def component_from_line(parsed: Union[ParsedNetlistLine, str]) -> ComponentBase:
    """
    Rebuilds a standalone component from a parsed (or raw) netlist line.

    Raises:
        NetlistSyntaxError: For a directive line, an unknown tag, or a node
                            count that does not match the component.
        ConstructionError: If the parameters are rejected by the component.
    """
    if isinstance(parsed, str):
        parsed = parse_netlist_line(parsed)
    if parsed.is_directive:
        raise NetlistSyntaxError(
            reason=f"'{parsed.tag}:{parsed.name}' is an analysis directive, not a component.",
            line_number=parsed.line_number,
        )
    cls = WIRE_TAG_REGISTRY.get(parsed.tag)
    if cls is None:
        raise NetlistSyntaxError(
            reason=f"Unknown component tag '{parsed.tag}'. Known tags: {sorted(WIRE_TAG_REGISTRY)}",
            line=f"{parsed.tag}:{parsed.name}",
            line_number=parsed.line_number,
        )
    component = cls.from_netlist_parameters(parsed.name, dict(parsed.parameters))
    if len(parsed.nodes) != component.terminal_count():
        raise NetlistSyntaxError(
            reason=f"{cls.__name__} has {component.terminal_count()} terminals but the line lists "
                   f"{len(parsed.nodes)} nodes.",
            line=f"{parsed.tag}:{parsed.name}",
            line_number=parsed.line_number,
        )
    return component


def read_netlist(text: str, config: NetlistConfig = DEFAULT_CONFIG, name: str = "circuit",
                 source: Optional[Union[str, Path]] = None) -> Tuple[Circuit, List[ParsedNetlistLine]]:
    """
    Rebuilds a circuit from netlist text.

    Terminals that share a node token are connected; the ground marker
    connects to ground.

    Returns:
        The circuit and the analysis directive lines, in source order.
    """
    parsed = parse_netlist(text, source)
    circuit = Circuit(name)
    first_pin_on: Dict[str, Pin] = {}
    for line in parsed.components:
        component = circuit.add(component_from_line(line))
        for pin, token in zip(component.pins, line.nodes):
            if token == config.ground_marker:
                circuit.connect(pin, circuit.ground)
            elif token in first_pin_on:
                circuit.connect(first_pin_on[token], pin)
            else:
                first_pin_on[token] = pin
    logger.info(f"Read circuit '{name}' with {len(circuit)} components from netlist text.")
    return circuit, parsed.directives
