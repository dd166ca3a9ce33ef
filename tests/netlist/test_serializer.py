# tests/netlist/test_serializer.py
import logging

import pytest

from circuitsim_core import (
    Circuit, NetlistConfig, NetlistSerializer, render_netlist, read_netlist,
    Resistor, Capacitor, Inductor, PowerSource, ACVoltageSource, Ground, GROUND,
    DCAnalysis, ACAnalysis, TransientAnalysis, SParameterAnalysis, NoiseAnalysis, ParameterSweep,
    HarmonicBalanceAnalysis, AnalysisKind, VoltageProbe, CurrentProbe,
    InvalidAnalysisError, FileVoltageSource,
)
from circuitsim_core.components import BJT, IdealTransformer, PowerProbe, VoltageVoltageNoiseSource
from circuitsim_core.analysis import DIRECTIVE_REGISTRY
from circuitsim_core.formatting import format_value

DIVIDER_NETLIST = (
    'Vdc:V1 _net1 gnd U="1.0"\n'
    'R:R1 _net1 _net2 R="1000.0"\n'
    'R:R2 _net2 gnd R="500.0"\n'
)


class TestFormatValue:
    @pytest.mark.parametrize("value, text", [
        (True, "yes"), (False, "no"), (3, "3"), (1000.0, "1000.0"),
        (1e-12, "1e-12"), (0.1, "0.1"), (-2.5e9, "-2500000000.0"), ("nfet", "nfet"),
    ])
    def test_canonical_text(self, value, text):
        assert format_value(value) == text

    def test_floats_read_back_identically(self):
        for value in (0.1 + 0.2, 1 / 3, 6.02214076e23, 5e-324):
            assert float(format_value(value)) == value

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            format_value([1, 2])


class TestRendering:
    def test_divider_netlist(self, divider):
        """VERIFIES: Three lines, ground written as the marker, ground component omitted."""
        assert render_netlist(divider) == DIVIDER_NETLIST

    def test_rendering_is_deterministic(self, divider):
        serializer = NetlistSerializer()
        assert serializer.render(divider) == serializer.render(divider)

    def test_directives_follow_components(self, divider):
        text = render_netlist(divider, [DCAnalysis()])
        lines = text.splitlines()
        assert lines[:3] == DIVIDER_NETLIST.splitlines()
        assert lines[3] == '.DC:DC1 saveOPs="yes" Temp="26.85" saveAll="no"'

    def test_custom_markers(self, divider):
        config = NetlistConfig(ground_marker="0", node_prefix="n")
        text = NetlistSerializer(config).render(divider)
        assert text.splitlines()[0] == 'Vdc:V1 n1 0 U="1.0"'

    def test_multi_terminal_order(self):
        circuit = Circuit()
        q = circuit.add(BJT("Q1", Type="pnp", Bf=50))
        circuit.connect(q["emitter"], GROUND)
        circuit.connect(q["substrate"], GROUND)
        assert render_netlist(circuit) == 'BJT:Q1 _net1 _net2 gnd gnd Type="pnp" Bf="50.0"\n'

    def test_floating_nodes_are_warned_about(self, caplog):
        circuit = Circuit("floating")
        circuit.add(Resistor("R1", 1.0))
        with caplog.at_level(logging.WARNING):
            render_netlist(circuit)
        assert "no path to ground" in caplog.text

    def test_floating_warning_can_be_disabled(self, caplog):
        circuit = Circuit("floating")
        circuit.add(Resistor("R1", 1.0))
        with caplog.at_level(logging.WARNING):
            NetlistSerializer(NetlistConfig(warn_floating_nodes=False)).render(circuit)
        assert "no path to ground" not in caplog.text

    def test_write_prepares_data_files(self, tmp_path):
        circuit = Circuit()
        src = circuit.add(FileVoltageSource.from_samples("VIN", [0.0, 1e-9], [0.0, 1.0]))
        circuit.add(Ground("G"))
        circuit.connect(src["nminus"], circuit.component("G")["n"])
        path = NetlistSerializer().write(circuit, tmp_path / "run" / "circuit.net", [TransientAnalysis(stop=1e-9)])
        assert (tmp_path / "run" / "VIN.dat").is_file()
        assert path.read_text().startswith('Vfile:VIN _net1 gnd File="VIN.dat"\n')


class TestRoundTrip:
    def test_divider_round_trip(self, divider):
        """VERIFIES: Rendering, reading and rendering again yields identical text."""
        text = render_netlist(divider)
        rebuilt, directives = read_netlist(text)
        assert directives == []
        assert render_netlist(rebuilt) == text

    def test_non_default_values_survive(self):
        circuit = Circuit("rt")
        r = circuit.add(Resistor("R1", 0.1 + 0.2, Tc1=1 / 3))
        c = circuit.add(Capacitor("C1", "10 pF"))
        l = circuit.add(Inductor("L1", 1e-9))
        p = circuit.add(PowerSource("P1", 1, P="-3 dBm", Z=75))
        n = circuit.add(VoltageVoltageNoiseSource("N1", C=0.25))
        t = circuit.add(IdealTransformer("T1", 2))
        circuit.connect_all(r["n2"], c["n1"], l["n1"], p["nplus"], n["v1plus"], t["n1"])
        for pin in (c["n2"], l["n2"], p["nminus"], n["v1minus"], n["v2minus"], t["n2"], t["n4"]):
            circuit.connect(pin, GROUND)
        text = render_netlist(circuit)

        rebuilt, _ = read_netlist(text)
        for original in circuit:
            copy = rebuilt.component(original.name)
            assert type(copy) is type(original)
            assert copy.non_default_parameters() == original.non_default_parameters()
        assert render_netlist(rebuilt) == text

    def test_directives_are_returned(self, divider):
        text = render_netlist(divider, [DCAnalysis(), ACAnalysis(1e3, 1e6, 31)])
        _, directives = read_netlist(text)
        assert [(d.tag, d.name) for d in directives] == [(".DC", "DC1"), (".AC", "AC1")]
        assert directives[1].parameters["Points"] == "31"


class TestAnalysisDirectives:
    def test_ac_line(self):
        line = ACAnalysis(start=1e3, stop=1e9, points=61).to_netlist_line()
        assert line == '.AC:AC1 Type="log" Start="1000.0" Stop="1000000000.0" Points="61"'

    def test_transient_step_gives_points(self):
        tr = TransientAnalysis(stop=1.0, step=0.25)
        assert tr.points == 5

    def test_transient_rejects_points_and_step(self):
        with pytest.raises(InvalidAnalysisError):
            TransientAnalysis(stop=1e-6, points=10, step=1e-8)

    def test_sweep_validation(self):
        with pytest.raises(InvalidAnalysisError):
            ACAnalysis(start=0.0, stop=1e9, points=10)
        with pytest.raises(InvalidAnalysisError):
            SParameterAnalysis(start=2e9, stop=1e9, points=10)
        with pytest.raises(InvalidAnalysisError):
            NoiseAnalysis(start=1e3, stop=1e6, points=1, output="_net1", source="V1")

    def test_sparameter_line_and_metadata(self):
        sp = SParameterAnalysis(start=1e9, stop=2e9, points=11, z0=75.0)
        assert 'Z0="75.0"' in sp.to_netlist_line()
        assert sp.sweep_metadata() == {"type": "log", "start": 1e9, "stop": 2e9, "points": 11}

    def test_parameter_sweep_renders_inner_first(self):
        sweep = ParameterSweep("Rload", 10.0, 100.0, 10, inner=DCAnalysis())
        first, second = sweep.to_netlist_line().splitlines()
        assert first.startswith(".DC:DC1")
        assert second == '.SW:SW1 Type="lin" Param="Rload" Start="10.0" Stop="100.0" Points="10" Sim="DC1"'
        assert sweep.kind.value == "dc"

    def test_harmonic_balance_line(self):
        hb = HarmonicBalanceAnalysis(frequency=1e9, harmonics=7)
        assert hb.to_netlist_line() == '.HB:HB1 n="7" f="1000000000.0"'
        assert hb.kind is AnalysisKind.HARMONIC_BALANCE
        assert HarmonicBalanceAnalysis(frequency=100e6).harmonics == 5
        assert DIRECTIVE_REGISTRY["HB"] is HarmonicBalanceAnalysis

    @pytest.mark.parametrize("kwargs, field", [
        ({"frequency": 0.0}, "frequency"),
        ({"frequency": 1e9, "harmonics": 0}, "harmonics"),
        ({"frequency": 1e9, "harmonics": 2.5}, "harmonics"),
    ])
    def test_harmonic_balance_validation(self, kwargs, field):
        with pytest.raises(InvalidAnalysisError) as exc_info:
            HarmonicBalanceAnalysis(**kwargs)
        assert exc_info.value.field == field


class TestProbes:
    def test_probe_lines(self, divider):
        vp = divider.add(VoltageProbe("VP1"))
        ip = divider.add(CurrentProbe("IP1"))
        divider.connect(vp["n1"], divider.pin("R1.n2"))
        divider.connect(vp["n2"], GROUND)
        divider.connect(ip["n1"], divider.pin("V1.nplus"))
        lines = render_netlist(divider).splitlines()
        assert lines[-2:] == ["VProbe:VP1 _net2 gnd", "IProbe:IP1 _net1 _net3"]

    def test_power_probe_has_four_terminals(self):
        circuit = Circuit()
        wp = circuit.add(PowerProbe("WP1"))
        circuit.connect(wp["n2"], GROUND)
        circuit.connect(wp["n4"], GROUND)
        circuit.connect(wp["n1"], wp["n3"])
        assert render_netlist(circuit) == "WProbe:WP1 _net1 gnd _net1 gnd\n"

    def test_probe_lines_read_back(self):
        circuit, _ = read_netlist("VProbe:VP1 _net1 gnd\nIProbe:IP1 _net1 _net2\nR:R1 _net2 gnd R=\"50.0\"\n")
        assert isinstance(circuit.component("VP1"), VoltageProbe)
        assert isinstance(circuit.component("IP1"), CurrentProbe)
        assert circuit.are_connected(circuit.pin("VP1.n1"), circuit.pin("IP1.n1"))
