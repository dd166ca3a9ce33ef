# src/circuitsim_core/timeseries/__init__.py
from .file_data import FileData, FileFormat, validate_samples
from .codec import (
    detect_format, decode, encode, read_file, write_file, check_display_names,
    decode_csv, encode_csv, decode_block, encode_block, BLOCK_VERSION_HEADER,
)
from .exceptions import UnrecognizedFormatError

__all__ = [
    "FileData", "FileFormat", "validate_samples",
    "detect_format", "decode", "encode", "read_file", "write_file", "check_display_names",
    "decode_csv", "encode_csv", "decode_block", "encode_block", "BLOCK_VERSION_HEADER",
    "UnrecognizedFormatError",
]
