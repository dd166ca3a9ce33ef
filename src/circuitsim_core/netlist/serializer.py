# src/circuitsim_core/netlist/serializer.py
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..analysis import AnalysisDirective
from ..circuit import Circuit
from ..components.base import ComponentBase
from ..components.capabilities import IExternalFileProvider, INetlistContributor
from ..config import DEFAULT_CONFIG, NetlistConfig
from ..topology import NodeAssignment, build_connectivity_graph, find_floating_nodes, render_node

logger = logging.getLogger(__name__)


class NetlistSerializer:
    """
    Renders a circuit as solver netlist text.

    Output is one line per component in insertion order, followed by one line
    per analysis directive. Nodes are written as the configured ground marker
    or `<node_prefix><id>`; parameters equal to their documented default are
    left out. Rendering the same circuit twice yields identical text.
    """

    def __init__(self, config: NetlistConfig = DEFAULT_CONFIG):
        self.config = config

    def node_names(self, component: ComponentBase, assignment: NodeAssignment) -> List[str]:
        return [
            render_node(node, self.config.ground_marker, self.config.node_prefix)
            for node in assignment.nodes_of(component)
        ]

    def render_component(self, component: ComponentBase, assignment: NodeAssignment) -> Optional[str]:
        """The component's netlist line, or None if it writes no line (ground)."""
        contributor = component.get_capability(INetlistContributor)
        if contributor is None:
            raise TypeError(f"{component} does not provide a netlist rendering capability.")
        return contributor.to_netlist_line(component, self.node_names(component, assignment))

    def render_lines(self, circuit: Circuit, assignment: Optional[NodeAssignment] = None) -> List[str]:
        assignment = assignment if assignment is not None else circuit.assign_nodes()
        if self.config.warn_floating_nodes:
            self._warn_floating(circuit, assignment)
        lines = []
        for component in circuit:
            line = self.render_component(component, assignment)
            if line is not None:
                lines.append(line)
        return lines

    def render(self, circuit: Circuit, analyses: Sequence[AnalysisDirective] = ()) -> str:
        """
        Renders the full netlist text.

        Args:
            circuit: The circuit to render.
            analyses: Directives appended after the component lines, in order.

        Returns:
            Newline-terminated netlist text.
        """
        lines = self.render_lines(circuit)
        lines.extend(directive.to_netlist_line() for directive in analyses)
        logger.info(
            f"Rendered netlist for circuit '{circuit.name}': {len(circuit)} components, "
            f"{len(analyses)} analyses."
        )
        return "\n".join(lines) + "\n"

    def prepare_external_files(self, circuit: Circuit, directory: Optional[Union[str, Path]] = None) -> List[Path]:
        """Writes the data files of every component that provides them."""
        target = Path(directory) if directory is not None else (self.config.data_directory or Path.cwd())
        target.mkdir(parents=True, exist_ok=True)
        written: List[Path] = []
        for component in circuit:
            provider = component.get_capability(IExternalFileProvider)
            if provider is not None:
                written.extend(provider.prepare_external_files(component, target))
        if written:
            logger.info(f"Prepared {len(written)} external data file(s) in '{target}'.")
        return written

    def write(self, circuit: Circuit, path: Union[str, Path],
              analyses: Sequence[AnalysisDirective] = ()) -> Path:
        """Prepares external files next to `path` and writes the netlist to it."""
        path = Path(path)
        self.prepare_external_files(circuit, path.parent)
        text = self.render(circuit, analyses)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info(f"Wrote netlist to '{path}'.")
        return path

    def _warn_floating(self, circuit: Circuit, assignment: NodeAssignment) -> None:
        graph = build_connectivity_graph(circuit, assignment)
        floating = find_floating_nodes(graph)
        if floating:
            names = [render_node(n, self.config.ground_marker, self.config.node_prefix) for n in floating]
            logger.warning(
                f"Circuit '{circuit.name}' has nodes with no path to ground: {names}. "
                f"The solver may report a singular matrix."
            )


def render_netlist(circuit: Circuit, analyses: Sequence[AnalysisDirective] = (),
                   config: NetlistConfig = DEFAULT_CONFIG) -> str:
    return NetlistSerializer(config).render(circuit, analyses)
