# src/circuitsim_core/config.py
"""
Explicit configuration for netlist rendering and simulation runs.

A `NetlistConfig` is passed to the serializer and to `simulate()`; nothing in
the package reads environment variables. Configurations can be loaded from a
YAML file, validated against a Cerberus schema:

    ground_marker: gnd
    node_prefix: _net
    data_directory: ./data
    log_level: DEBUG
    warn_floating_nodes: true
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import cerberus
import yaml

from .errors import FormatError, format_diagnostic_report
from .log_config import setup_logging

logger = logging.getLogger(__name__)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
# Node tokens are separated by whitespace and may not look like key="value".
_TOKEN_REGEX = r'^[^\s"=:]+$'


@dataclass(eq=False)
class ConfigError(FormatError):
    """The configuration file is unreadable or fails schema validation."""

    def __str__(self):
        where = f" '{self.file_path}'" if self.file_path is not None else ""
        return f"Invalid configuration{where}: {self.reason}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Configuration Error",
            details=self.reason,
            suggestion="Allowed keys: ground_marker, node_prefix, data_directory, log_level, warn_floating_nodes.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class NetlistConfig:
    """
    Attributes:
        ground_marker: Token written for node 0.
        node_prefix: Prefix of every non-ground node token ('_net' -> '_net1').
        data_directory: Where file-driven sources write their data files.
                        None means the solver's working directory.
        log_level: Level applied by `apply_logging()`.
        warn_floating_nodes: Log a warning for nodes with no path to ground.
    """
    ground_marker: str = "gnd"
    node_prefix: str = "_net"
    data_directory: Optional[Path] = None
    log_level: str = "INFO"
    warn_floating_nodes: bool = True

    _schema = {
        "ground_marker": {"type": "string", "empty": False, "regex": _TOKEN_REGEX},
        "node_prefix": {"type": "string", "empty": False, "regex": _TOKEN_REGEX},
        "data_directory": {"type": "string", "empty": False, "nullable": True},
        "log_level": {"type": "string", "allowed": _LOG_LEVELS, "coerce": str.upper},
        "warn_floating_nodes": {"type": "boolean"},
    }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any], source: Optional[Union[str, Path]] = None) -> "NetlistConfig":
        validator = cerberus.Validator(cls._schema)
        validator.allow_unknown = False
        if not isinstance(raw, dict):
            raise ConfigError(reason=f"Top level must be a mapping, got {type(raw).__name__}.", file_path=source)
        if not validator.validate(raw):
            raise ConfigError(reason=f"Schema validation failed: {validator.errors}", file_path=source)
        data = dict(validator.document)
        if data.get("data_directory") is not None:
            base = Path(source).parent if source is not None else Path.cwd()
            data["data_directory"] = (base / data["data_directory"]).resolve()
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "NetlistConfig":
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigError(reason="Configuration file not found.", file_path=path) from None
        except yaml.YAMLError as e:
            raise ConfigError(reason=f"Invalid YAML syntax: {e}", file_path=path) from e
        config = cls.from_dict(raw or {}, source=path)
        logger.info(f"Loaded configuration from '{path}'.")
        return config

    def apply_logging(self) -> None:
        setup_logging(self.log_level)


DEFAULT_CONFIG = NetlistConfig()
