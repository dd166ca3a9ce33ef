# tests/netlist/test_netlist_reader.py
import pytest

from circuitsim_core import Resistor, PowerSource, ParameterValueError, NetlistSyntaxError
from circuitsim_core.netlist import parse_netlist_line, parse_netlist, component_from_line, read_netlist
from circuitsim_core.config import NetlistConfig


class TestLineSyntax:
    def test_component_line(self):
        parsed = parse_netlist_line('R:R1 _net1 gnd R="1000.0" Temp="30.0"', line_number=4)
        assert parsed.tag == "R"
        assert parsed.name == "R1"
        assert parsed.nodes == ("_net1", "gnd")
        assert parsed.parameters == {"R": "1000.0", "Temp": "30.0"}
        assert parsed.line_number == 4
        assert not parsed.is_directive

    def test_quoted_values_may_contain_spaces(self):
        parsed = parse_netlist_line('Pac:P1 _net1 gnd Num="1" P="-3.0 dBm"')
        assert parsed.parameters["P"] == "-3.0 dBm"

    def test_directive_line(self):
        parsed = parse_netlist_line('.DC:DC1 saveOPs="yes"')
        assert parsed.is_directive
        assert parsed.nodes == ()

    @pytest.mark.parametrize("line", [
        'R:R1 _net1 gnd R=1000',
        'R:R1 _net1 R="1.0" gnd',
        'R:R1 _net1 gnd R="1.0" R="2.0"',
        'R1 _net1 gnd R="1.0"',
        ':R1 _net1 gnd',
        'R: _net1 gnd',
        '.DC:DC1 _net1',
        'R:R1 _net1 gnd R="1.0',
    ])
    def test_malformed_lines(self, line):
        with pytest.raises(NetlistSyntaxError):
            parse_netlist_line(line)

    def test_error_reports_line_number(self):
        with pytest.raises(NetlistSyntaxError) as exc_info:
            parse_netlist('R:R1 _net1 gnd R="1.0"\n\nR:R2 _net1 gnd R=2\n')
        assert exc_info.value.line_number == 3

    def test_comments_and_blank_lines_are_skipped(self):
        parsed = parse_netlist('# header\n\nR:R1 _net1 gnd R="1.0"\n.DC:DC1\n')
        assert [line.name for line in parsed.components] == ["R1"]
        assert [line.name for line in parsed.directives] == ["DC1"]


class TestComponentFromLine:
    def test_rebuilds_resistor(self):
        component = component_from_line('R:R7 _net1 _net2 R="470.0" Tc1="0.001"')
        assert isinstance(component, Resistor)
        assert component.name == "R7"
        assert component.get("R") == 470.0
        assert component.get("Tc1") == 0.001

    def test_suffixed_value(self):
        component = component_from_line('Pac:P2 _net3 gnd Num="2" P="-10.0 dBm"')
        assert isinstance(component, PowerSource)
        assert component.get("Num") == 2
        assert component.get("P") == -10.0

    def test_unknown_tag(self):
        with pytest.raises(NetlistSyntaxError, match="Unknown component tag"):
            component_from_line('Flux:F1 _net1 gnd')

    def test_node_count_must_match(self):
        with pytest.raises(NetlistSyntaxError, match="terminals"):
            component_from_line('R:R1 _net1 R="1.0"')

    def test_directive_is_not_a_component(self):
        with pytest.raises(NetlistSyntaxError):
            component_from_line('.DC:DC1 saveOPs="yes"')

    def test_rejected_parameter_value(self):
        with pytest.raises(ParameterValueError):
            component_from_line('R:R1 _net1 gnd R="lots"')


class TestReadNetlist:
    def test_shared_tokens_become_connections(self):
        circuit, _ = read_netlist(
            'Vdc:V1 _net1 gnd U="1.0"\nR:R1 _net1 _net2 R="1000.0"\nR:R2 _net2 gnd R="500.0"\n',
            name="divider",
        )
        v1, r1, r2 = circuit.component("V1"), circuit.component("R1"), circuit.component("R2")
        assert circuit.name == "divider"
        assert circuit.are_connected(v1["nplus"], r1["n1"])
        assert circuit.are_connected(r1["n2"], r2["n1"])
        assert circuit.are_connected(r2["n2"], circuit.ground)
        assert not circuit.are_connected(r1["n1"], r1["n2"])

    def test_custom_ground_marker(self):
        circuit, _ = read_netlist('R:R1 n1 0 R="1.0"\n', config=NetlistConfig(ground_marker="0", node_prefix="n"))
        r1 = circuit.component("R1")
        assert circuit.are_connected(r1["n2"], circuit.ground)
        assert not circuit.are_connected(r1["n1"], circuit.ground)
