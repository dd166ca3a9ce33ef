# tests/components/test_component_catalogue.py
"""
Component construction, parameter coercion, default elision and the
registration contract.
"""
import pytest

from circuitsim_core import ureg, Circuit
from circuitsim_core.components import (
    COMPONENT_REGISTRY, WIRE_TAG_REGISTRY, ComponentBase, ParameterSpec, register_component,
    INetlistContributor, IExternalFileProvider,
    ParameterValueError, RangeError,
    Resistor, Capacitor, Inductor, Ground, Short, Open, Attenuator, Amplifier,
    DCVoltageSource, PowerSource, VoltagePulseSource, VoltageVoltageNoiseSource,
    FileVoltageSource, BJT, Diode, VoltageControlledVoltageSource,
    VoltageProbe, CurrentProbe, PowerProbe,
)
from circuitsim_core.timeseries import FileData, FileFormat, read_file


class TestParameterCoercion:
    def test_plain_numbers_are_si_magnitudes(self):
        assert Resistor("R1", 50).get("R") == 50.0
        assert isinstance(Resistor("R1", 50).get("R"), float)

    def test_unit_strings_are_converted(self):
        assert Resistor("R1", "1 kohm").get("R") == pytest.approx(1000.0)
        assert Capacitor("C1", "10 pF").get("C") == pytest.approx(10e-12)
        assert Inductor("L1", "2.5 nH").get("L") == pytest.approx(2.5e-9)

    def test_quantities_are_converted(self):
        assert Resistor("R1", 2 * ureg.kiloohm).get("R") == pytest.approx(2000.0)

    def test_numeric_strings_read_exactly(self):
        assert Resistor("R1", "1e-3").get("R") == 1e-3

    def test_wrong_dimension_rejected(self):
        with pytest.raises(ParameterValueError) as exc_info:
            Resistor("R1", "10 nH")
        assert exc_info.value.parameter == "R"

    def test_required_parameter_missing(self):
        with pytest.raises(ParameterValueError, match="required"):
            Resistor("R1")

    def test_unknown_keyword_rejected(self):
        with pytest.raises(ParameterValueError, match="Unknown parameter"):
            Resistor("R1", 1.0, Q=3)

    def test_choices_enforced(self):
        assert BJT("Q1", Type="pnp").get("Type") == "pnp"
        with pytest.raises(ParameterValueError):
            BJT("Q1", Type="nmos")

    def test_bounds_enforced(self):
        assert VoltageVoltageNoiseSource("N1", C=-1.0).get("C") == -1.0
        with pytest.raises(RangeError) as exc_info:
            VoltageVoltageNoiseSource("N1", C=1.5)
        assert (exc_info.value.lower, exc_info.value.upper) == (-1.0, 1.0)

    def test_invalid_names_rejected(self):
        for bad in ("", "R 1", 'R"1', "R=1", "R:1"):
            with pytest.raises(ParameterValueError):
                Resistor(bad, 1.0)

    def test_set_parameter_coerces(self):
        r = Resistor("R1", 1.0)
        r.set_parameter("R", "3 ohm")
        assert r.get("R") == 3.0
        with pytest.raises(ParameterValueError):
            r.set_parameter("X", 1.0)


class TestDefaultElision:
    def test_defaults_are_left_out(self):
        r = Resistor("R1", 50.0, Temp=26.85)
        assert r.netlist_parameters() == [("R", "50.0")]

    def test_non_defaults_kept_in_table_order(self):
        r = Resistor("R1", 50.0, Tnom=20.0, Tc1=0.01)
        assert r.netlist_parameters() == [("R", "50.0"), ("Tc1", "0.01"), ("Tnom", "20.0")]

    def test_untouched_device_has_no_parameters(self):
        assert Diode("D1").netlist_parameters() == []
        assert VoltagePulseSource("V1").netlist_parameters() == []

    def test_fixed_properties_always_written(self):
        assert Short("S1").netlist_parameters() == [("R", "1e-06")]
        assert Open("O1").netlist_parameters() == [("R", "1000000000000.0")]

    def test_unit_suffixes_are_rendered(self):
        assert Attenuator("A1", 3).netlist_parameters() == [("L", "3.0 dB")]
        assert PowerSource("P1", 1, P="10 dBm").netlist_parameters() == [("Num", "1"), ("P", "10.0 dBm")]
        assert Amplifier("AMP1", "20 dB").get("G") == 20.0

    def test_booleans_render_as_yes_no(self):
        src = FileVoltageSource("V1", "in.csv", Repeat=True)
        assert ("Repeat", "yes") in src.netlist_parameters()


class TestRegistry:
    def test_types_and_tags_registered(self):
        assert COMPONENT_REGISTRY["Resistor"] is Resistor
        assert WIRE_TAG_REGISTRY["R"] is Resistor
        assert WIRE_TAG_REGISTRY["Vdc"] is DCVoltageSource
        assert WIRE_TAG_REGISTRY["VCVS"] is VoltageControlledVoltageSource
        assert "GND" not in WIRE_TAG_REGISTRY

    def test_probes_registered(self):
        assert WIRE_TAG_REGISTRY["VProbe"] is VoltageProbe
        assert WIRE_TAG_REGISTRY["IProbe"] is CurrentProbe
        assert WIRE_TAG_REGISTRY["WProbe"] is PowerProbe
        assert PowerProbe("WP1").terminals() == ["n1", "n2", "n3", "n4"]
        assert VoltageProbe("VP1").non_default_parameters() == {}

    def test_register_rejects_bad_terminals(self):
        with pytest.raises(TypeError, match="non-empty strings"):
            @register_component("BadTerminalsCatalogue")
            class BadTerminals(ComponentBase):
                @classmethod
                def declare_terminals(cls): return ["a", ""]
                @classmethod
                def declare_parameters(cls): return []

    def test_register_rejects_duplicate_terminals(self):
        with pytest.raises(TypeError, match="unique"):
            @register_component("DuplicateTerminalsCatalogue")
            class DuplicateTerminals(ComponentBase):
                @classmethod
                def declare_terminals(cls): return ["a", "a"]
                @classmethod
                def declare_parameters(cls): return []

    def test_register_rejects_bad_parameter_table(self):
        with pytest.raises(TypeError, match="List\\[ParameterSpec\\]"):
            @register_component("BadParametersCatalogue")
            class BadParameters(ComponentBase):
                @classmethod
                def declare_terminals(cls): return ["a", "b"]
                @classmethod
                def declare_parameters(cls): return {"R": 1.0}

    def test_registration_is_logged(self, caplog):
        caplog.set_level("INFO", logger="circuitsim_core.components.base")

        @register_component("LoggedCatalogueElement")
        class LoggedElement(ComponentBase):
            wire_tag = "LCE"
            @classmethod
            def declare_terminals(cls): return ["a", "b"]
            @classmethod
            def declare_parameters(cls): return [ParameterSpec("X", 1.0)]

        assert "LoggedCatalogueElement" in caplog.text
        assert WIRE_TAG_REGISTRY["LCE"] is LoggedElement


class TestCapabilities:
    def test_every_component_renders(self):
        assert Resistor("R1", 1.0).get_capability(INetlistContributor) is not None

    def test_capability_instance_is_cached(self):
        r = Resistor("R1", 1.0)
        assert r.get_capability(INetlistContributor) is r.get_capability(INetlistContributor)

    def test_ground_writes_no_line(self):
        ground = Ground("GND")
        contributor = ground.get_capability(INetlistContributor)
        assert contributor.to_netlist_line(ground, ["gnd"]) is None

    def test_only_file_sources_provide_external_files(self):
        assert Resistor("R1", 1.0).get_capability(IExternalFileProvider) is None
        assert FileVoltageSource("V1", "wave.csv").get_capability(IExternalFileProvider) is not None


class TestFileSources:
    def test_in_memory_samples_name_their_file(self):
        src = FileVoltageSource.from_samples("VIN", [0.0, 1e-9, 2e-9], [0.0, 1.0, 0.0])
        assert src.get("File") == "VIN.dat"
        assert src.data.format is FileFormat.BLOCK

    def test_prepare_writes_the_data_file(self, tmp_path):
        data = FileData(independent=[0.0, 1.0], dependent=[2.0, 3.0], format=FileFormat.CSV)
        src = FileVoltageSource("VIN", data=data)
        provider = src.get_capability(IExternalFileProvider)
        written = provider.prepare_external_files(src, tmp_path)
        assert written == [tmp_path / "VIN.csv"]
        assert read_file(written[0]).same_samples(data)

    def test_named_file_without_samples_writes_nothing(self, tmp_path):
        src = FileVoltageSource("VIN", "existing.csv")
        assert src.get_capability(IExternalFileProvider).prepare_external_files(src, tmp_path) == []

    def test_data_must_be_file_data(self):
        with pytest.raises(ParameterValueError):
            FileVoltageSource("VIN", data=[(0.0, 1.0)])

    def test_interpolator_choices(self):
        with pytest.raises(ParameterValueError):
            FileVoltageSource("VIN", "a.csv", Interpolator="spline")
