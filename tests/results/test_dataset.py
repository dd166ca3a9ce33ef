# tests/results/test_dataset.py
import logging

import numpy as np
import pytest

from circuitsim_core import (
    DatasetSyntaxError, LengthMismatchError, MissingFieldError, SolverOutputError, parse_dataset,
)
from circuitsim_core.results import parse_value


class TestValues:
    @pytest.mark.parametrize("text, value", [
        ("+1.5e+00", 1.5),
        ("-6.66666666667e-04", -6.66666666667e-04),
        ("+1.2e-01-j5.6e-01", 0.12 - 0.56j),
        ("-3.0e+00+j4.0e+00", -3.0 + 4.0j),
        ("-j2.0", -2.0j),
        ("  +0.0+j0.0  ", 0j),
    ])
    def test_parse(self, text, value):
        assert parse_value(text) == value

    @pytest.mark.parametrize("text", ["j2.0", "1.0j", "abc", "+1.0+jx"])
    def test_malformed(self, text):
        with pytest.raises(ValueError):
            parse_value(text)


class TestStructure:
    def test_vectors_and_dependencies(self, two_port_sp_output):
        ds = parse_dataset(two_port_sp_output)
        assert ds.version == "0.0.19"
        assert ds.names() == ["frequency", "S[1,1]", "S[1,2]", "S[2,1]", "S[2,2]"]
        freq = ds.get("frequency")
        assert freq.is_independent and freq.is_real
        np.testing.assert_array_equal(freq.real, [1e9, 2e9])
        s11 = ds.get("S[1,1]")
        assert s11.dependencies == ("frequency",)
        assert not s11.is_real
        assert s11.values[1] == pytest.approx(0.15 - 0.25j)

    def test_values_are_read_only(self, divider_dc_output):
        ds = parse_dataset(divider_dc_output)
        with pytest.raises(ValueError):
            ds.get("_net1.V").values[0] = 0.0

    def test_missing_vector(self, divider_dc_output):
        ds = parse_dataset(divider_dc_output)
        with pytest.raises(MissingFieldError) as exc_info:
            ds.get("_net3.V")
        assert exc_info.value.available == ["_net1.V", "_net2.V", "V1.I"]

    def test_multi_dimensional_dependency(self, make_dataset):
        ds = parse_dataset(make_dataset("""
            <indep a 2>
              +1.0
              +2.0
            </indep>
            <indep b 3>
              +1.0
              +2.0
              +3.0
            </indep>
            <dep y a b>
              +1.0
              +2.0
              +3.0
              +4.0
              +5.0
              +6.0
            </dep>
        """))
        assert len(ds.get("y")) == 6
        assert [v.name for v in ds.independent()] == ["a", "b"]
        assert [v.name for v in ds.dependent()] == ["y"]


class TestSolverDiagnostics:
    def test_error_lines_abort(self, divider_dc_output):
        text = "error: singular matrix in DC analysis\n" + divider_dc_output
        with pytest.raises(SolverOutputError) as exc_info:
            parse_dataset(text)
        assert exc_info.value.messages == ("error: singular matrix in DC analysis",)

    @pytest.mark.parametrize("line", [
        "Fatal: netlist has no components",
        "ERROR: node _net3 is floating",
        "checker error: unknown property 'Rx' in R:R1",
    ])
    def test_error_line_forms(self, line):
        with pytest.raises(SolverOutputError):
            parse_dataset(f"{line}\n")

    def test_warnings_are_kept(self, divider_dc_output, caplog):
        text = "warning: DC convergence slow\n" + divider_dc_output
        with caplog.at_level(logging.WARNING):
            ds = parse_dataset(text)
        assert ds.warnings == ("warning: DC convergence slow",)
        assert "DC convergence slow" in caplog.text

    def test_chatter_outside_blocks_is_ignored(self, divider_dc_output):
        ds = parse_dataset("solver 0.0.19 starting\n" + divider_dc_output + "done.\n")
        assert len(ds) == 3


class TestMalformed:
    @pytest.mark.parametrize("text", ["", "   \n\n"])
    def test_empty(self, text):
        with pytest.raises(DatasetSyntaxError, match="empty"):
            parse_dataset(text)

    def test_no_dataset(self):
        with pytest.raises(DatasetSyntaxError, match="No dataset"):
            parse_dataset("hello\nworld\n")

    def test_unclosed_block(self, make_dataset):
        with pytest.raises(DatasetSyntaxError, match="never closed"):
            parse_dataset(make_dataset("<dep x>\n+1.0"))

    def test_mismatched_end_tag(self, make_dataset):
        with pytest.raises(DatasetSyntaxError) as exc_info:
            parse_dataset(make_dataset("<indep x 1>\n+1.0\n</dep>"))
        assert exc_info.value.line_number == 4

    def test_nested_tag(self, make_dataset):
        with pytest.raises(DatasetSyntaxError, match="not closed"):
            parse_dataset(make_dataset("<dep x>\n+1.0\n<dep y>\n+2.0\n</dep>"))

    def test_unknown_tag(self, make_dataset):
        with pytest.raises(DatasetSyntaxError, match="Unrecognized"):
            parse_dataset(make_dataset("<matrix x 2>"))

    def test_duplicate_vector(self, make_dataset):
        with pytest.raises(DatasetSyntaxError, match="twice"):
            parse_dataset(make_dataset("<dep x>\n+1.0\n</dep>\n<dep x>\n+2.0\n</dep>"))

    def test_unknown_dependency(self, make_dataset):
        with pytest.raises(DatasetSyntaxError, match="unknown independent"):
            parse_dataset(make_dataset("<dep x time>\n+1.0\n</dep>"))

    def test_non_numeric_value(self, make_dataset):
        with pytest.raises(DatasetSyntaxError) as exc_info:
            parse_dataset(make_dataset("<dep x>\n+1.0\nnan-ish\n</dep>"))
        assert exc_info.value.line_number == 4

    def test_independent_size_mismatch(self, make_dataset):
        with pytest.raises(LengthMismatchError) as exc_info:
            parse_dataset(make_dataset("<indep time 3>\n+0.0\n+1.0\n</indep>"))
        assert (exc_info.value.expected, exc_info.value.actual) == (3, 2)

    def test_dependent_size_mismatch(self, make_dataset):
        with pytest.raises(LengthMismatchError):
            parse_dataset(make_dataset("""
                <indep frequency 2>
                  +1.0e+09
                  +2.0e+09
                </indep>
                <dep S[1,1] frequency>
                  +0.1+j0.1
                  +0.2+j0.2
                  +0.3+j0.3
                </dep>
            """))
