# src/circuitsim_core/timeseries/codec.py
"""
Readers and writers for the two time-series interchange formats.

Delimited two-column text::

    time,voltage
    0.0,0.0
    1e-09,1.0

Block-structured text (the solver's native dataset layout)::

    <Qucs Dataset 1.0.0>
    <indep time 2>
      0.0
      1e-09
    </indep>
    <dep voltage 2>
      0.0
      1.0
    </dep>

Every decoder validates its output through `FileData`; any violation is
reported as a `FormatError` carrying the source path and the reason. Writers
format samples with `repr` and refuse column names their reader could not
recover, so decoding an encoded file reproduces the input exactly.
"""
import logging
import re
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from ..errors import FormatError, ValidationError
from ..formatting import format_value
from .exceptions import UnrecognizedFormatError
from .file_data import FileData, FileFormat, validate_samples

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

BLOCK_VERSION_HEADER = "<Qucs Dataset 1.0.0>"
_BLOCK_HEADER_RE = re.compile(r"^<Qucs Dataset\s+([\d.]+)>$")
_INDEP_RE = re.compile(r"^<indep\s+(\S+)\s+(\d+)>$")
_DEP_RE = re.compile(r"^<dep\s+(\S+)\s+(\d+)>$")
_NUMERIC_START_RE = re.compile(r"^[+-]?(\d|\.\d|inf|nan)", re.IGNORECASE)
_BLOCK_NAME_RE = re.compile(r"^[^\s<>]+$")

DEFAULT_INDEPENDENT_NAME = "time"
DEFAULT_DEPENDENT_NAME = "data"


def _is_float(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def _content_lines(text: str) -> List[Tuple[int, str]]:
    """Non-blank, non-comment lines with their 1-based line numbers."""
    lines = []
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if line and not line.startswith("#"):
            lines.append((number, line))
    return lines


def _build(independent, dependent, independent_name, dependent_name, fmt, source) -> FileData:
    try:
        return FileData(
            independent=independent,
            dependent=dependent,
            independent_name=independent_name,
            dependent_name=dependent_name,
            format=fmt,
        )
    except ValidationError as e:
        raise FormatError(reason=str(e), file_path=source) from e


def _check_samples(times, samples, independent_name, dependent_name) -> Tuple[np.ndarray, np.ndarray]:
    times = np.asarray(times, dtype=float)
    samples = np.asarray(samples, dtype=float)
    validate_samples(times, samples, subject=f"{independent_name}/{dependent_name}")
    return times, samples


def check_display_names(fmt: FileFormat, *names: str) -> None:
    """
    Rejects column names the reader for `fmt` could not recover from the
    written text.

    Delimited names must be non-empty, free of delimiters, line breaks and
    surrounding whitespace, must not start a comment and must not read as a
    number. Block names must be non-empty and free of whitespace and angle
    brackets.

    Raises:
        FormatError: Naming the first offending name.
    """
    fmt = FileFormat(fmt)
    for name in names:
        if not isinstance(name, str) or not name:
            problem = "must be a non-empty string"
        elif fmt is FileFormat.BLOCK:
            problem = None if _BLOCK_NAME_RE.match(name) else "must not contain whitespace, '<' or '>'"
        elif name != name.strip() or any(c in name for c in ",;\r\n"):
            problem = "must not contain ',', ';', line breaks or surrounding whitespace"
        elif name.startswith("#"):
            problem = "must not start with '#'"
        elif _is_float(name):
            problem = "must not read as a number"
        else:
            problem = None
        if problem:
            raise FormatError(reason=f"Column name {name!r} {problem} in {fmt.value} files.")


# --- Format detection ---

def detect_format(text: str, source: Optional[PathLike] = None) -> FileFormat:
    """
    Decides which format `text` is in from its first content line.

    Raises:
        UnrecognizedFormatError: If the first line is neither the block version
                                 header, nor delimited, nor numeric.
    """
    lines = _content_lines(text)
    if not lines:
        raise UnrecognizedFormatError(reason="The content is empty.", file_path=source)
    first = lines[0][1]
    if first.startswith("<Qucs Dataset"):
        return FileFormat.BLOCK
    if "," in first or ";" in first or _NUMERIC_START_RE.match(first):
        return FileFormat.CSV
    raise UnrecognizedFormatError(
        reason=f"First line {first!r} is neither a dataset header nor delimited or numeric data.",
        file_path=source,
    )


# --- Delimited two-column format ---

def decode_csv(text: str, source: Optional[PathLike] = None) -> FileData:
    lines = _content_lines(text)
    if not lines:
        raise FormatError(reason="The file contains no data rows.", file_path=source)

    first = lines[0][1]
    delimiter = "," if "," in first else ";"
    if delimiter not in first:
        raise FormatError(
            reason=f"Line {lines[0][0]}: expected two columns separated by ',' or ';', got {first!r}.",
            file_path=source,
        )

    independent_name, dependent_name = DEFAULT_INDEPENDENT_NAME, DEFAULT_DEPENDENT_NAME
    first_tokens = [token.strip() for token in first.split(delimiter)]
    if not _is_float(first_tokens[0]):
        if len(first_tokens) != 2 or not all(first_tokens):
            raise FormatError(
                reason=f"Header row must name exactly two columns, got {first_tokens}.",
                file_path=source,
            )
        independent_name, dependent_name = first_tokens
        lines = lines[1:]

    times: List[float] = []
    samples: List[float] = []
    for number, line in lines:
        fields = [field.strip() for field in line.split(delimiter)]
        if len(fields) != 2:
            raise FormatError(
                reason=f"Line {number}: expected 2 columns, found {len(fields)} in {line!r}.",
                file_path=source,
            )
        try:
            times.append(float(fields[0]))
            samples.append(float(fields[1]))
        except ValueError:
            raise FormatError(
                reason=f"Line {number}: non-numeric value in {line!r}.",
                file_path=source,
            ) from None

    logger.debug(f"Decoded {len(times)} delimited rows (delimiter {delimiter!r}).")
    return _build(times, samples, independent_name, dependent_name, FileFormat.CSV, source)


def encode_csv(
    times: Sequence[float],
    samples: Sequence[float],
    independent_name: str = DEFAULT_INDEPENDENT_NAME,
    dependent_name: str = DEFAULT_DEPENDENT_NAME,
    delimiter: str = ",",
) -> str:
    """
    Writes a header row and one `time<delimiter>sample` row per point.

    Raises:
        ValueError: If `delimiter` is not ',' or ';'.
        FormatError: If a column name would not survive being read back.
        ValidationError: If the sequences do not form a valid time-series.
    """
    if delimiter not in (",", ";"):
        raise ValueError(f"Delimiter must be ',' or ';', got {delimiter!r}.")
    check_display_names(FileFormat.CSV, independent_name, dependent_name)
    times, samples = _check_samples(times, samples, independent_name, dependent_name)
    rows = [f"{independent_name}{delimiter}{dependent_name}"]
    rows.extend(
        f"{format_value(float(t))}{delimiter}{format_value(float(v))}" for t, v in zip(times, samples)
    )
    return "\n".join(rows) + "\n"


# --- Block-structured format ---

def _read_block(lines: List[Tuple[int, str]], start: int, closing: str, source) -> Tuple[List[float], int]:
    values: List[float] = []
    i = start
    while i < len(lines):
        number, line = lines[i]
        if line == closing:
            return values, i + 1
        try:
            values.append(float(line))
        except ValueError:
            raise FormatError(reason=f"Line {number}: expected a numeric value, got {line!r}.", file_path=source) from None
        i += 1
    raise FormatError(reason=f"Missing closing '{closing}' tag.", file_path=source)


def decode_block(text: str, source: Optional[PathLike] = None) -> FileData:
    """
    Reads a block-structured file. The first `<indep>` and the first `<dep>`
    block form the result; any further blocks are checked against their
    declared counts and skipped.
    """
    lines = _content_lines(text)
    if not lines or not _BLOCK_HEADER_RE.match(lines[0][1]):
        raise FormatError(reason="Missing '<Qucs Dataset VERSION>' header line.", file_path=source)

    independent = dependent = None
    independent_name = DEFAULT_INDEPENDENT_NAME
    dependent_name = DEFAULT_DEPENDENT_NAME
    skipped: List[str] = []
    i = 1
    while i < len(lines):
        number, line = lines[i]
        indep_match = _INDEP_RE.match(line)
        dep_match = _DEP_RE.match(line)
        match = indep_match or dep_match
        if match is None:
            raise FormatError(
                reason=f"Line {number}: expected an '<indep NAME COUNT>' or '<dep NAME COUNT>' tag, got {line!r}.",
                file_path=source,
            )
        name, declared = match.group(1), int(match.group(2))
        values, i = _read_block(lines, i + 1, "</indep>" if indep_match else "</dep>", source)
        if len(values) != declared:
            raise FormatError(
                reason=f"Line {number}: block declares {declared} values but contains {len(values)}.",
                file_path=source,
            )
        if indep_match and independent is None:
            independent_name, independent = name, values
        elif dep_match and dependent is None:
            dependent_name, dependent = name, values
        else:
            skipped.append(name)

    if independent is None or dependent is None:
        raise FormatError(reason="Both an <indep> and a <dep> block are required.", file_path=source)
    if skipped:
        logger.debug(f"Skipped additional blocks {skipped}; using '{independent_name}'/'{dependent_name}'.")
    logger.debug(f"Decoded block dataset '{independent_name}'/'{dependent_name}' with {len(independent)} points.")
    return _build(independent, dependent, independent_name, dependent_name, FileFormat.BLOCK, source)


def encode_block(
    times: Sequence[float],
    samples: Sequence[float],
    independent_name: str = DEFAULT_INDEPENDENT_NAME,
    dependent_name: str = DEFAULT_DEPENDENT_NAME,
) -> str:
    check_display_names(FileFormat.BLOCK, independent_name, dependent_name)
    times, samples = _check_samples(times, samples, independent_name, dependent_name)
    lines = [BLOCK_VERSION_HEADER, f"<indep {independent_name} {len(times)}>"]
    lines.extend(f"  {format_value(float(t))}" for t in times)
    lines.append("</indep>")
    lines.append(f"<dep {dependent_name} {len(samples)}>")
    lines.extend(f"  {format_value(float(v))}" for v in samples)
    lines.append("</dep>")
    return "\n".join(lines) + "\n"


# --- Generic entry points ---

def decode(text: str, source: Optional[PathLike] = None) -> FileData:
    """Decodes `text` in whichever format `detect_format` reports."""
    if detect_format(text, source) is FileFormat.BLOCK:
        return decode_block(text, source)
    return decode_csv(text, source)


def encode(data: FileData, fmt: Optional[FileFormat] = None) -> str:
    fmt = FileFormat(fmt) if fmt is not None else data.format
    if fmt is FileFormat.BLOCK:
        return encode_block(data.independent, data.dependent, data.independent_name, data.dependent_name)
    return encode_csv(data.independent, data.dependent, data.independent_name, data.dependent_name)


def read_file(path: PathLike) -> FileData:
    """Loads a time-series file, auto-detecting its format."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise FormatError(reason=f"Cannot read file: {e.strerror or e}", file_path=path) from e
    data = decode(text, source=path)
    logger.info(f"Loaded {len(data)} points from '{path}' ({data.format.value}).")
    return data


def write_file(data: FileData, path: PathLike, fmt: Optional[FileFormat] = None) -> Path:
    """Writes `data` to `path` in `fmt` (default: the data's own format)."""
    path = Path(path)
    text = encode(data, fmt)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info(f"Wrote {len(data)} points to '{path}'.")
    return path
