# tests/test_circuit.py
import pytest

from circuitsim_core import (
    Circuit, Resistor, Capacitor, GROUND,
    DuplicateComponentError, OwnershipError, UnknownComponentError, UnknownTerminalError, ArityError,
    DiagnosableError, ConstructionError, TerminalConnectionError,
)


class TestOwnership:
    def test_components_keep_insertion_order(self):
        circuit = Circuit()
        names = ["R3", "R1", "C2"]
        for name in names:
            circuit.add(Resistor(name, 1.0) if name.startswith("R") else Capacitor(name, 1e-12))
        assert [c.name for c in circuit] == names
        assert len(circuit) == 3
        assert "R1" in circuit and "R9" not in circuit

    def test_duplicate_name_rejected(self):
        circuit = Circuit("dup")
        circuit.add(Resistor("R1", 1.0))
        with pytest.raises(DuplicateComponentError) as exc_info:
            circuit.add(Resistor("R1", 2.0))
        assert exc_info.value.component == "R1"
        assert isinstance(exc_info.value, ConstructionError)
        assert "R1" in exc_info.value.get_diagnostic_report()

    def test_component_cannot_join_two_circuits(self):
        first, second = Circuit("first"), Circuit("second")
        r = first.add(Resistor("R1", 1.0))
        assert r.owner is first
        with pytest.raises(OwnershipError) as exc_info:
            second.add(r)
        assert exc_info.value.owner == "first"
        assert len(second) == 0

    def test_only_components_can_be_added(self):
        with pytest.raises(TypeError):
            Circuit().add("R1")

    def test_lookup_of_unknown_component(self):
        with pytest.raises(UnknownComponentError):
            Circuit().component("R1")


class TestConnections:
    def test_pin_of_foreign_component_rejected(self):
        circuit = Circuit()
        r1 = circuit.add(Resistor("R1", 1.0))
        stranger = Resistor("R2", 1.0)
        with pytest.raises(UnknownComponentError):
            circuit.connect(r1["n1"], stranger["n1"])

    def test_same_name_different_instance_is_foreign(self):
        circuit = Circuit()
        circuit.add(Resistor("R1", 1.0))
        impostor = Resistor("R1", 1.0)
        with pytest.raises(UnknownComponentError):
            circuit.connect(impostor["n1"], GROUND)

    def test_unknown_terminal(self):
        circuit = Circuit()
        r1 = circuit.add(Resistor("R1", 1.0))
        with pytest.raises(UnknownTerminalError) as exc_info:
            r1.pin("n3")
        assert exc_info.value.available == ["n1", "n2"]
        with pytest.raises(UnknownTerminalError):
            circuit.pin("R1.n3")

    def test_pin_reference_strings(self):
        circuit = Circuit()
        r1 = circuit.add(Resistor("R1", 1.0))
        assert circuit.pin("R1.n2") == r1["n2"]
        assert circuit.pin("gnd") is GROUND
        with pytest.raises(UnknownTerminalError):
            circuit.pin("R1")

    def test_component_connect_checks_arity(self):
        circuit = Circuit()
        r1 = circuit.add(Resistor("R1", 1.0))
        r2 = circuit.add(Resistor("R2", 1.0))
        with pytest.raises(ArityError) as exc_info:
            r1.connect(circuit, r2["n1"])
        assert (exc_info.value.expected, exc_info.value.actual) == (2, 1)
        assert isinstance(exc_info.value, TerminalConnectionError)

        r1.connect(circuit, r2["n1"], GROUND)
        assert circuit.are_connected(r1["n1"], r2["n1"])
        assert circuit.are_connected(r1["n2"], GROUND)

    def test_connect_all_places_pins_on_one_node(self):
        circuit = Circuit()
        rs = [circuit.add(Resistor(f"R{i}", 1.0)) for i in range(3)]
        circuit.connect_all(*(r["n1"] for r in rs))
        assignment = circuit.assign_nodes()
        assert len({assignment.node_of(r["n1"]) for r in rs}) == 1

    def test_errors_are_diagnosable(self):
        circuit = Circuit()
        with pytest.raises(DiagnosableError) as exc_info:
            circuit.component("missing")
        report = exc_info.value.get_diagnostic_report()
        assert "Actionable Diagnostic Report" in report
