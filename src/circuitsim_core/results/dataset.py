# src/circuitsim_core/results/dataset.py
"""
Low-level reader for the solver's dataset text.

A dataset is a version header followed by named vectors::

    <Qucs Dataset 0.0.19>
    <indep frequency 2>
      +1.00000000000e+09
      +2.00000000000e+09
    </indep>
    <dep S[1,1] frequency>
      +1.2e-01+j5.6e-01
      +1.1e-01-j4.9e-01
    </dep>

Independent vectors declare their length; dependent vectors name the
independent vectors they are sampled over. Values are real numbers or
complex numbers written as `<real>+j<imag>` / `<real>-j<imag>`.

The solver may interleave diagnostic lines with the dataset. Lines that start
with `error`/`fatal` (or contain `error:`) abort the parse with
`SolverOutputError`; warning lines are kept on the `Dataset`; any other
text outside a block is treated as solver chatter and ignored.
"""
import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

import numpy as np

from ..errors import LengthMismatchError, SolverOutputError
from .exceptions import DatasetSyntaxError, MissingFieldError

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^<Qucs Dataset\s+(\S+)>$")
_INDEP_RE = re.compile(r"^<indep\s+(\S+)\s+(\d+)>$")
_DEP_RE = re.compile(r"^<dep\s+(\S+)((?:\s+\S+)*)>$")


def parse_value(text: str) -> complex:
    """
    Parses one dataset value.

    Examples:
        '+1.5e+00'            -> (1.5+0j)
        '+1.2e-01-j5.6e-01'   -> (0.12-0.56j)
        '-j2.0'               -> -2j

    Raises:
        ValueError: If the token is not a number in either notation.
    """
    token = text.strip()
    j = token.find("j")
    if j < 0:
        return complex(float(token), 0.0)
    if j == 0 or token[j - 1] not in "+-":
        raise ValueError(f"Malformed complex value {text!r}.")
    real_text = token[:j - 1]
    real = float(real_text) if real_text else 0.0
    imag = float(token[j - 1] + token[j + 1:])
    return complex(real, imag)


@dataclass(frozen=True, eq=False)
class DataVector:
    """
    One named vector of a dataset.

    Attributes:
        name: Vector name as written by the solver ('_net1.V', 'S[2,1]').
        values: Read-only complex128 array.
        dependencies: Names of the independent vectors a dependent vector is
                      sampled over; empty for independent vectors.
        is_independent: True for `<indep>` vectors.
    """
    name: str
    values: np.ndarray
    dependencies: Tuple[str, ...] = ()
    is_independent: bool = False

    def __post_init__(self):
        values = np.array(self.values, dtype=np.complex128)
        values.setflags(write=False)
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "dependencies", tuple(self.dependencies))

    def __len__(self) -> int:
        return len(self.values)

    @property
    def real(self) -> np.ndarray:
        return self.values.real

    @property
    def is_real(self) -> bool:
        return bool(np.all(self.values.imag == 0))


@dataclass(frozen=True)
class Dataset:
    """All vectors of one solver run, in the order they were written."""
    version: Optional[str]
    vectors: Mapping[str, DataVector]
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def __contains__(self, name: str) -> bool:
        return name in self.vectors

    def __len__(self) -> int:
        return len(self.vectors)

    def names(self) -> List[str]:
        return list(self.vectors)

    def get(self, name: str) -> DataVector:
        try:
            return self.vectors[name]
        except KeyError:
            raise MissingFieldError(
                subject="dataset",
                details=f"The solver output contains no vector named '{name}'.",
                field_name=name,
                available=self.names(),
            ) from None

    def real(self, name: str) -> np.ndarray:
        return self.get(name).real

    def independent(self) -> List[DataVector]:
        return [v for v in self.vectors.values() if v.is_independent]

    def dependent(self) -> List[DataVector]:
        return [v for v in self.vectors.values() if not v.is_independent]


def _is_error_line(line: str) -> bool:
    lowered = line.lower()
    return lowered.startswith(("error", "fatal")) or "error:" in lowered


def _is_warning_line(line: str) -> bool:
    lowered = line.lower()
    return lowered.startswith("warning") or "warning:" in lowered


def parse_dataset(text: str, source=None) -> Dataset:
    """
    Parses solver output into a `Dataset`.

    Args:
        text: The complete solver output.
        source: Optional file path, used only in error messages.

    Raises:
        SolverOutputError: If the text contains error lines.
        DatasetSyntaxError: If the text is empty, holds no dataset, or has a
                            malformed, unterminated or duplicate block.
        LengthMismatchError: If a vector's value count disagrees with its
                             declared size or with its dependencies.
    """
    if not text or not text.strip():
        raise DatasetSyntaxError(reason="The solver output is empty.", file_path=source)

    lines = [(number, raw.strip()) for number, raw in enumerate(text.splitlines(), start=1)]
    errors = [line for _, line in lines if line and _is_error_line(line)]
    if errors:
        raise SolverOutputError(details="The solver output contains error lines.", messages=tuple(errors))

    version: Optional[str] = None
    vectors: Dict[str, DataVector] = {}
    warnings: List[str] = []

    # State of the block being read: (name, declared size or None, dependencies, first line number)
    block: Optional[Tuple[str, Optional[int], Tuple[str, ...], int]] = None
    values: List[complex] = []

    for number, line in lines:
        if not line:
            continue
        if block is not None:
            if line in ("</indep>", "</dep>"):
                name, size, deps, opened = block
                if (line == "</indep>") != (size is not None):
                    raise DatasetSyntaxError(
                        reason=f"'{line}' does not close the block opened on line {opened}.",
                        file_path=source, line_number=number,
                    )
                vectors[name] = _close_vector(name, size, deps, values, vectors, source, number)
                block, values = None, []
                continue
            if line.startswith("<"):
                raise DatasetSyntaxError(
                    reason=f"Block '{block[0]}' opened on line {block[3]} is not closed before {line!r}.",
                    file_path=source, line_number=number,
                )
            try:
                values.append(parse_value(line))
            except ValueError:
                raise DatasetSyntaxError(
                    reason=f"Expected a numeric value in block '{block[0]}', got {line!r}.",
                    file_path=source, line_number=number,
                ) from None
            continue

        if _is_warning_line(line):
            warnings.append(line)
            logger.warning(f"Solver warning: {line}")
            continue
        version_match = _VERSION_RE.match(line)
        indep_match = _INDEP_RE.match(line)
        dep_match = _DEP_RE.match(line)
        if version_match:
            version = version_match.group(1)
        elif indep_match or dep_match:
            name = (indep_match or dep_match).group(1)
            if name in vectors:
                raise DatasetSyntaxError(
                    reason=f"Vector '{name}' is defined twice.", file_path=source, line_number=number
                )
            if indep_match:
                block = (name, int(indep_match.group(2)), (), number)
            else:
                block = (name, None, tuple(dep_match.group(2).split()), number)
        elif line.startswith("<"):
            raise DatasetSyntaxError(reason=f"Unrecognized tag {line!r}.", file_path=source, line_number=number)
        else:
            logger.debug(f"Ignoring solver output line {number}: {line!r}")

    if block is not None:
        raise DatasetSyntaxError(
            reason=f"Block '{block[0]}' opened on line {block[3]} is never closed.", file_path=source
        )
    if version is None and not vectors:
        raise DatasetSyntaxError(reason="No dataset found in the solver output.", file_path=source)

    logger.debug(f"Parsed dataset version {version} with {len(vectors)} vectors and {len(warnings)} warnings.")
    return Dataset(version=version, vectors=MappingProxyType(vectors), warnings=tuple(warnings))


def _close_vector(name, size, deps, values, vectors, source, line_number) -> DataVector:
    if size is not None:
        if len(values) != size:
            raise LengthMismatchError(
                subject=name,
                details=f"Independent vector declares {size} values (block ends on line {line_number}).",
                expected=size,
                actual=len(values),
            )
        return DataVector(name=name, values=values, is_independent=True)

    expected = 1
    for dep in deps:
        indep = vectors.get(dep)
        if indep is None or not indep.is_independent:
            raise DatasetSyntaxError(
                reason=f"Vector '{name}' depends on unknown independent vector '{dep}'.",
                file_path=source, line_number=line_number,
            )
        expected *= len(indep)
    if deps and len(values) != expected:
        raise LengthMismatchError(
            subject=name,
            details=f"Dependent vector is sampled over {list(deps)}.",
            expected=expected,
            actual=len(values),
        )
    return DataVector(name=name, values=values, dependencies=deps)
