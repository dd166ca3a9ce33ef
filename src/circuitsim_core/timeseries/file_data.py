# src/circuitsim_core/timeseries/file_data.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

from ..errors import LengthMismatchError, NonMonotonicError, ValidationError

logger = logging.getLogger(__name__)

MIN_POINTS = 2


class FileFormat(str, Enum):
    """On-disk layout of a time-series file."""
    CSV = "csv"
    BLOCK = "block"

    @property
    def extension(self) -> str:
        return ".csv" if self is FileFormat.CSV else ".dat"


def validate_samples(independent: np.ndarray, dependent: np.ndarray, subject: str) -> None:
    """
    Checks the invariants shared by every time-series: at least two points,
    equal lengths and a strictly increasing independent sequence.

    Raises:
        LengthMismatchError: If the sequences differ in length.
        ValidationError: If there are fewer than two points.
        NonMonotonicError: If the independent sequence ever fails to increase.
    """
    if independent.ndim != 1 or dependent.ndim != 1:
        raise ValidationError(subject=subject, details="Sequences must be one-dimensional.")
    if len(independent) != len(dependent):
        raise LengthMismatchError(
            subject=subject,
            details="Independent and dependent sequences must have the same length.",
            expected=len(independent),
            actual=len(dependent),
        )
    if len(independent) < MIN_POINTS:
        raise ValidationError(
            subject=subject,
            details=f"At least {MIN_POINTS} data points are required, got {len(independent)}.",
        )
    steps = np.diff(independent)
    bad = np.flatnonzero(~(steps > 0))
    if bad.size:
        i = int(bad[0]) + 1
        raise NonMonotonicError(
            subject=subject,
            details=f"value {independent[i]!r} does not exceed the previous value {independent[i - 1]!r}.",
            index=i,
        )


@dataclass(frozen=True, eq=False)
class FileData:
    """
    An immutable, validated pair of sample sequences.

    Attributes:
        independent: Strictly increasing independent variable (usually time).
        dependent: Sample values, one per independent point.
        independent_name: Display name of the independent column.
        dependent_name: Display name of the dependent column.
        format: The layout the data was read from or will be written as.
    """
    independent: np.ndarray
    dependent: np.ndarray
    independent_name: str = "time"
    dependent_name: str = "data"
    format: FileFormat = FileFormat.CSV

    def __post_init__(self):
        independent = np.array(self.independent, dtype=float)
        dependent = np.array(self.dependent, dtype=float)
        validate_samples(independent, dependent, subject=f"{self.independent_name}/{self.dependent_name}")
        independent.setflags(write=False)
        dependent.setflags(write=False)
        object.__setattr__(self, "independent", independent)
        object.__setattr__(self, "dependent", dependent)
        object.__setattr__(self, "format", FileFormat(self.format))

    @classmethod
    def from_samples(cls, times: Sequence[float], samples: Sequence[float], **kwargs) -> "FileData":
        return cls(independent=times, dependent=samples, **kwargs)

    @property
    def times(self) -> np.ndarray:
        return self.independent

    @property
    def samples(self) -> np.ndarray:
        return self.dependent

    def __len__(self) -> int:
        return len(self.independent)

    def same_samples(self, other: "FileData") -> bool:
        """True if both sequences are element-for-element identical, ignoring names and format."""
        return (
            np.array_equal(self.independent, other.independent)
            and np.array_equal(self.dependent, other.dependent)
        )

    def __repr__(self) -> str:
        return (
            f"FileData({self.independent_name}/{self.dependent_name}, {len(self)} points, "
            f"format={self.format.value})"
        )
