# tests/components/test_equation_defined.py
import pytest

from circuitsim_core import Circuit, GROUND
from circuitsim_core.components import (
    EquationDefinedDevice, RangeError, MissingEquationError, ParameterValueError, ConstructionError,
)
from circuitsim_core.netlist import component_from_line, render_netlist
from circuitsim_core.topology import ArityError


class TestConstruction:
    def test_terminals_follow_branch_count(self):
        edd = EquationDefinedDevice("D1", 2, {1: "V1*1e-3"}, {1: "0"})
        assert edd.terminals() == ["p1", "n1", "p2", "n2"]
        assert edd.terminal_count() == 4

    @pytest.mark.parametrize("count", [0, 21, -1])
    def test_branch_count_out_of_range(self, count):
        with pytest.raises(RangeError) as exc_info:
            EquationDefinedDevice("D1", count, {1: "V1"}, {1: "0"})
        assert (exc_info.value.lower, exc_info.value.upper) == (1, 20)

    def test_branch_count_limits_are_inclusive(self):
        assert EquationDefinedDevice("D1", 1, {1: "V1"}, {1: "0"}).terminal_count() == 2
        assert EquationDefinedDevice("D1", 20, {1: "V1"}, {1: "0"}).terminal_count() == 40

    def test_branch_count_must_be_integer(self):
        with pytest.raises(ParameterValueError):
            EquationDefinedDevice("D1", 2.0, {1: "V1"}, {1: "0"})

    def test_missing_first_current_equation(self):
        with pytest.raises(MissingEquationError) as exc_info:
            EquationDefinedDevice("D1", 2, {2: "V2"}, {1: "0"})
        assert exc_info.value.equation == "I1"
        assert isinstance(exc_info.value, ConstructionError)

    def test_missing_first_charge_equation(self):
        with pytest.raises(MissingEquationError) as exc_info:
            EquationDefinedDevice("D1", 1, {1: "V1"})
        assert exc_info.value.equation == "Q1"

    def test_equation_for_absent_branch(self):
        with pytest.raises(RangeError):
            EquationDefinedDevice("D1", 2, {1: "V1", 3: "V3"}, {1: "0"})

    def test_equation_text_cannot_hold_quotes(self):
        with pytest.raises(ParameterValueError):
            EquationDefinedDevice("D1", 1, {1: 'V1*"x"'}, {1: "0"})

    def test_unset_higher_branches_default_to_zero(self):
        edd = EquationDefinedDevice("D1", 3, {1: "V1", 3: "V3"}, {1: "Q"})
        assert edd.branches() == [(1, "V1", "Q"), (2, "0", "0"), (3, "V3", "0")]


class TestWiring:
    def test_arity_mismatch_on_connect(self):
        circuit = Circuit()
        edd = circuit.add(EquationDefinedDevice("D1", 2, {1: "V1"}, {1: "0"}))
        with pytest.raises(ArityError) as exc_info:
            edd.connect(circuit, GROUND, GROUND, GROUND)
        assert (exc_info.value.expected, exc_info.value.actual) == (4, 3)

    def test_full_connection_accepted(self):
        circuit = Circuit()
        edd = circuit.add(EquationDefinedDevice("D1", 1, {1: "V1"}, {1: "0"}))
        edd.connect(circuit, GROUND, GROUND)
        assert circuit.assign_nodes().nodes_of(edd) == [0, 0]


class TestNetlist:
    def test_line_lists_every_branch(self):
        circuit = Circuit()
        edd = circuit.add(EquationDefinedDevice("D1", 2, {1: "V1*1e-3"}, {1: "0"}))
        circuit.connect(edd["n1"], GROUND)
        circuit.connect(edd["n2"], GROUND)
        assert render_netlist(circuit) == (
            'EDD:D1 _net1 gnd _net2 gnd I1="V1*1e-3" Q1="0" I2="0" Q2="0"\n'
        )

    def test_line_rebuilds_the_device(self):
        rebuilt = component_from_line('EDD:D1 a b c d I1="V1*1e-3" Q1="0" I2="0" Q2="0"')
        assert isinstance(rebuilt, EquationDefinedDevice)
        assert rebuilt.branch_count == 2
        assert rebuilt.branches() == [(1, "V1*1e-3", "0"), (2, "0", "0")]

    def test_explicit_zero_equations_are_kept(self):
        rebuilt = component_from_line('EDD:D1 a b c d I1="V1*1e-3" Q1="0" I2="0" Q2="1e-12*V2"')
        assert rebuilt.current_equations == {1: "V1*1e-3", 2: "0"}
        assert rebuilt.charge_equations == {1: "0", 2: "1e-12*V2"}
        assert rebuilt.netlist_parameters() == [
            ("I1", "V1*1e-3"), ("Q1", "0"), ("I2", "0"), ("Q2", "1e-12*V2"),
        ]
