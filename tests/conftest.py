# tests/conftest.py
import textwrap

import pytest

from circuitsim_core import Circuit, DCVoltageSource, Ground, Resistor


DIVIDER_NETLIST = (
    'Vdc:V1 _net1 gnd U="1.0"\n'
    'R:R1 _net1 _net2 R="1000.0"\n'
    'R:R2 _net2 gnd R="500.0"\n'
)


def build_divider() -> Circuit:
    """V1 (1 V) feeding R1 (1 kOhm) in series with R2 (500 Ohm) to ground."""
    circuit = Circuit("divider")
    v1 = circuit.add(DCVoltageSource("V1", 1.0))
    r1 = circuit.add(Resistor("R1", 1000.0))
    r2 = circuit.add(Resistor("R2", 500.0))
    gnd = circuit.add(Ground("GND"))
    circuit.connect(v1["nplus"], r1["n1"])
    circuit.connect(r1["n2"], r2["n1"])
    circuit.connect(v1["nminus"], gnd["n"])
    circuit.connect(r2["n2"], gnd["n"])
    return circuit


@pytest.fixture
def divider() -> Circuit:
    return build_divider()


def dataset(body: str, version: str = "0.0.19") -> str:
    """Wraps dedented vector blocks in a dataset header."""
    return f"<Qucs Dataset {version}>\n" + textwrap.dedent(body).strip() + "\n"


@pytest.fixture
def divider_dc_output() -> str:
    return dataset("""
        <dep _net1.V>
          +1.00000000000e+00
        </dep>
        <dep _net2.V>
          +3.33333333333e-01
        </dep>
        <dep V1.I>
          -6.66666666667e-04
        </dep>
    """)


@pytest.fixture
def two_port_sp_output() -> str:
    return dataset("""
        <indep frequency 2>
          +1.00000000000e+09
          +2.00000000000e+09
        </indep>
        <dep S[1,1] frequency>
          +1.0e-01+j2.0e-01
          +1.5e-01-j2.5e-01
        </dep>
        <dep S[1,2] frequency>
          +9.0e-01+j0.0e+00
          +8.0e-01-j1.0e-01
        </dep>
        <dep S[2,1] frequency>
          +9.0e-01+j0.0e+00
          +8.0e-01-j1.0e-01
        </dep>
        <dep S[2,2] frequency>
          +1.0e-01-j2.0e-01
          +1.5e-01+j2.5e-01
        </dep>
    """)


@pytest.fixture
def make_dataset():
    return dataset
