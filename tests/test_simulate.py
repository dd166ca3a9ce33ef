# tests/test_simulate.py
import logging

import pytest

from circuitsim_core import (
    Circuit, CallableSolver, DCAnalysis, DCResult, FileVoltageSource, GROUND, IncompleteMatrixError,
    NetlistConfig, PowerSource, Resistor, SParameterAnalysis, SParameterResult, Solver, SolverError,
    SolverOutputError, TransientAnalysis, WaveformResult, simulate,
)


class RecordingSolver:
    """Returns canned output and remembers every netlist it was given."""

    def __init__(self, output: str):
        self.output = output
        self.netlists = []

    def run(self, netlist_text: str) -> str:
        self.netlists.append(netlist_text)
        return self.output


@pytest.fixture
def two_port() -> Circuit:
    circuit = Circuit("through")
    p1 = circuit.add(PowerSource("P1", 1))
    p2 = circuit.add(PowerSource("P2", 2))
    r1 = circuit.add(Resistor("R1", 10.0))
    circuit.connect(p1["nplus"], r1["n1"])
    circuit.connect(r1["n2"], p2["nplus"])
    circuit.connect(p1["nminus"], GROUND)
    circuit.connect(p2["nminus"], GROUND)
    return circuit


class TestSolverBoundary:
    def test_protocol(self):
        assert isinstance(RecordingSolver(""), Solver)
        assert isinstance(CallableSolver(str.upper), Solver)

    def test_callable_must_return_text(self):
        with pytest.raises(SolverError):
            CallableSolver(lambda text: None, name="broken").run("R:R1 a gnd")


class TestSimulate:
    def test_dc_divider(self, divider, divider_dc_output):
        """VERIFIES: The solver sees the rendered netlist plus the directive, and the result is typed."""
        solver = RecordingSolver(divider_dc_output)
        result = simulate(divider, DCAnalysis(), solver)
        assert isinstance(result, DCResult)
        netlist = solver.netlists[0]
        assert netlist.startswith('Vdc:V1 _net1 gnd U="1.0"\n')
        assert netlist.splitlines()[-1].startswith(".DC:DC1")
        assert result.pin_voltage(divider.pin("R2.n1"), divider.assign_nodes()) == pytest.approx(1 / 3)

    def test_config_shapes_the_netlist(self, divider, divider_dc_output):
        seen = []

        def solve(text):
            seen.append(text)
            return divider_dc_output.replace("_net", "n")

        result = simulate(divider, DCAnalysis(), CallableSolver(solve), config=NetlistConfig(node_prefix="n"))
        assert "R:R1 n1 n2" in seen[0]
        assert result.voltage("n1") == pytest.approx(1.0)

    def test_unexpected_solver_failure_is_wrapped(self, divider, caplog):
        def explode(text):
            raise RuntimeError("process crashed")

        with caplog.at_level(logging.ERROR), pytest.raises(SolverError) as exc_info:
            simulate(divider, DCAnalysis(), CallableSolver(explode))
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "process crashed" in caplog.text

    def test_solver_errors_propagate_unchanged(self, divider):
        failure = SolverError(details="license expired", exit_status=3)

        def refuse(text):
            raise failure

        with pytest.raises(SolverError) as exc_info:
            simulate(divider, DCAnalysis(), CallableSolver(refuse))
        assert exc_info.value is failure

    def test_error_lines_in_output(self, divider):
        solver = RecordingSolver("checker error: unknown node in R:R1\n")
        with pytest.raises(SolverOutputError) as exc_info:
            simulate(divider, DCAnalysis(), solver)
        assert "unknown node" in str(exc_info.value)


class TestSParameterRuns:
    def test_metadata_comes_from_the_analysis(self, two_port, two_port_sp_output):
        analysis = SParameterAnalysis(start=1e9, stop=2e9, points=2, z0=75.0, sweep_type="lin")
        result = simulate(two_port, analysis, RecordingSolver(two_port_sp_output))
        assert isinstance(result, SParameterResult)
        assert result.num_ports == 2
        assert result.z0 == 75.0
        assert dict(result.sweep) == {"type": "lin", "start": 1e9, "stop": 2e9, "points": 2}

    def test_missing_entry_is_reported(self, two_port, make_dataset):
        output = make_dataset("""
            <indep frequency 1>
              +1.0e+09
            </indep>
            <dep S[1,1] frequency>
              +0.1+j0.0
            </dep>
            <dep S[1,2] frequency>
              +0.9+j0.0
            </dep>
            <dep S[2,2] frequency>
              +0.1+j0.0
            </dep>
        """)
        analysis = SParameterAnalysis(start=1e9, stop=2e9, points=2)
        with pytest.raises(IncompleteMatrixError) as exc_info:
            simulate(two_port, analysis, RecordingSolver(output))
        assert exc_info.value.missing == [(2, 1)]
        assert exc_info.value.num_ports == 2


class TestFileSources:
    def test_data_files_exist_before_the_solver_runs(self, tmp_path, make_dataset):
        circuit = Circuit("driven")
        vin = circuit.add(FileVoltageSource.from_samples("VIN", [0.0, 1e-9], [0.0, 1.0]))
        load = circuit.add(Resistor("RL", 50.0))
        circuit.connect(vin["nplus"], load["n1"])
        circuit.connect(vin["nminus"], GROUND)
        circuit.connect(load["n2"], GROUND)

        output = make_dataset("""
            <indep time 2>
              +0.0
              +1.0e-09
            </indep>
            <dep _net1.Vt time>
              +0.0
              +1.0
            </dep>
        """)

        def solve(text):
            assert (tmp_path / "VIN.dat").is_file()
            return output

        result = simulate(circuit, TransientAnalysis(stop=1e-9, points=2), CallableSolver(solve),
                          work_directory=tmp_path)
        assert isinstance(result, WaveformResult)
        assert result.voltage("_net1")[1] == 1.0
