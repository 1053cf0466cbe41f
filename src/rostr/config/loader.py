"""JSON configuration parsing, serialization and validation.

Parsing is strict: every field is required and typed, and a single bad
value rejects the whole document with a message naming its location.
"""

import json
import logging
from pathlib import Path
from typing import Any

from .configuration import Configuration
from .errors import ConfigIOError, ParseError
from .process import Process
from .schema import MAX_ID, Destination, Endpoint, Operation, Source, Transfer

logger = logging.getLogger(__name__)

# Config file search paths in priority order
CONFIG_PATHS = [
    Path.home() / ".config" / "rostr" / "configuration.json",
    Path("/etc/rostr/configuration.json"),
]


def find_config_file(explicit_path: str | None = None) -> Path | None:
    """Find configuration file.

    Args:
        explicit_path: Explicitly specified config path (highest priority)

    Returns:
        Path to config file, or None if not found

    Raises:
        ConfigIOError: If explicit_path does not exist
    """
    if explicit_path:
        path = Path(explicit_path)
        if path.exists():
            return path
        raise ConfigIOError(f"Config file not found: {explicit_path}")

    for path in CONFIG_PATHS:
        if path.exists():
            return path

    return None


def _decode(text: str | bytes) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON syntax: {e}") from e
    except (TypeError, UnicodeDecodeError) as e:
        raise ParseError(f"Cannot decode configuration text: {e}") from e


def _require(data: Any, key: str, where: str) -> Any:
    if not isinstance(data, dict):
        raise ParseError(f"{where}: expected an object, got {type(data).__name__}")
    if key not in data:
        raise ParseError(f"{where}: missing required '{key}' field")
    return data[key]


def _parse_id(data: dict[str, Any], where: str) -> int:
    value = _require(data, "id", where)
    # bool is an int subclass, but true/false are not ids
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(f"{where}: 'id' must be an unsigned integer, got {value!r}")
    if not 0 <= value <= MAX_ID:
        raise ParseError(f"{where}: 'id' {value} is out of range 0..{MAX_ID}")
    return value


def _parse_list(data: dict[str, Any], key: str, where: str) -> list:
    value = _require(data, key, where)
    if not isinstance(value, list):
        raise ParseError(f"{where}: '{key}' must be an array")
    return value


def _parse_endpoint(
    data: Any, where: str, endpoint_class: type[Endpoint]
) -> Endpoint:
    """Parse a source or destination endpoint from dict."""
    path = _require(data, "path", where)
    if not isinstance(path, str) or not path:
        raise ParseError(f"{where}: 'path' must be a non-empty string")

    options = _parse_list(data, "option", where)
    for i, option in enumerate(options):
        if not isinstance(option, str):
            raise ParseError(f"{where}.option[{i}]: expected a string, got {option!r}")

    return endpoint_class(path=path, options=list(options))


def _parse_transfer(data: Any, where: str = "transfer") -> Transfer:
    """Parse transfer configuration from dict."""
    transfer_id = _parse_id(data, where)
    literal = _require(data, "operation", where)
    try:
        operation = Operation.parse(literal)
    except ParseError as e:
        raise ParseError(f"{where}: {e}") from e

    return Transfer(
        id=transfer_id,
        operation=operation,
        src=_parse_endpoint(_require(data, "src", where), f"{where}.src", Source),
        dst=_parse_endpoint(
            _require(data, "dst", where), f"{where}.dst", Destination
        ),
    )


def _parse_process(data: Any, where: str = "process") -> Process:
    """Parse process configuration from dict."""
    process_id = _parse_id(data, where)

    parallel = _require(data, "parallel", where)
    if not isinstance(parallel, bool):
        raise ParseError(f"{where}: 'parallel' must be a boolean, got {parallel!r}")

    transfers = [
        _parse_transfer(t, f"{where}.transfer[{i}]")
        for i, t in enumerate(_parse_list(data, "transfer", where))
    ]

    return Process(id=process_id, parallel=parallel, transfer=transfers)


def parse_transfer(text: str | bytes) -> Transfer:
    """Parse a single transfer from its JSON text.

    Raises:
        ParseError: If the text is not a valid transfer
    """
    return _parse_transfer(_decode(text))


def parse_process(text: str | bytes) -> Process:
    """Parse a single process from its JSON text.

    Raises:
        ParseError: If the text is not a valid process
    """
    return _parse_process(_decode(text))


def parse_configuration(text: str | bytes) -> Configuration:
    """Parse a complete configuration from its JSON text.

    The document root is an array of processes.

    Raises:
        ParseError: If the text is not a valid configuration
    """
    data = _decode(text)
    if not isinstance(data, list):
        raise ParseError(
            f"Configuration root must be an array of processes, got {type(data).__name__}"
        )

    processes = [_parse_process(p, f"process[{i}]") for i, p in enumerate(data)]
    logger.debug("Parsed %d process(es)", len(processes))
    return Configuration(process=processes)


def _dump_endpoint(endpoint: Endpoint) -> dict[str, Any]:
    return {"path": endpoint.path, "option": list(endpoint.options)}


def dump_transfer(transfer: Transfer) -> dict[str, Any]:
    """Convert a transfer to its plain-data form."""
    return {
        "id": transfer.id,
        "operation": Operation(transfer.operation).value,
        "src": _dump_endpoint(transfer.src),
        "dst": _dump_endpoint(transfer.dst),
    }


def dump_process(process: Process) -> dict[str, Any]:
    """Convert a process to its plain-data form."""
    return {
        "id": process.id,
        "parallel": process.parallel,
        "transfer": [dump_transfer(t) for t in process.transfer],
    }


def dump_configuration(config: Configuration) -> list[dict[str, Any]]:
    """Convert a configuration to its plain-data form."""
    return [dump_process(p) for p in config.process]


def dumps_configuration(config: Configuration) -> str:
    """Serialize a configuration to pretty-printed JSON text."""
    return json.dumps(dump_configuration(config), indent=2) + "\n"


def _validate_config(config: Configuration) -> list[str]:
    """Validate configuration and return list of warnings."""
    warnings = []

    if not config.process:
        warnings.append("No processes configured")

    # Check for duplicate process ids
    process_ids = config.process_ids()
    if len(process_ids) != len(set(process_ids)):
        warnings.append("Duplicate process ids detected")

    for process in config.process:
        if not process.transfer:
            warnings.append(f"Process {process.id} has no transfers configured")

        transfer_ids = process.transfer_ids()
        if len(transfer_ids) != len(set(transfer_ids)):
            warnings.append(f"Process {process.id} has duplicate transfer ids")

        for transfer in process.transfer:
            if transfer.src.path == transfer.dst.path:
                warnings.append(
                    f"Transfer {transfer.id} in process {process.id} "
                    f"reads and writes the same path '{transfer.src.path}'"
                )

    return warnings


def load_config(path: Path | str) -> tuple[Configuration, list[str]]:
    """Load and validate configuration from a JSON file.

    Args:
        path: Path to configuration file

    Returns:
        Tuple of (Configuration object, list of warnings)

    Raises:
        ConfigIOError: If the file cannot be read
        ParseError: If the file content is not a valid configuration
    """
    config = Configuration.load(path)

    # Validate and collect warnings
    warnings = _validate_config(config)
    for warning in warnings:
        logger.debug("%s: %s", path, warning)

    return config, warnings


def generate_example_config() -> str:
    """Generate example configuration file content."""
    return """[
  {
    "id": 1,
    "parallel": false,
    "transfer": [
      {
        "id": 1,
        "operation": "overwrite",
        "src": {
          "path": "PG:dbname=gis tables=public.roads",
          "option": []
        },
        "dst": {
          "path": "/data/export/roads.gpkg",
          "option": ["SPATIAL_INDEX=YES"]
        }
      }
    ]
  },
  {
    "id": 2,
    "parallel": true,
    "transfer": [
      {
        "id": 1,
        "operation": "upsert",
        "src": {
          "path": "/data/import/parcels.shp",
          "option": ["ENCODING=UTF-8"]
        },
        "dst": {
          "path": "PG:dbname=gis",
          "option": ["SCHEMA=cadastre", "PRECISION=NO"]
        }
      },
      {
        "id": 2,
        "operation": "update",
        "src": {
          "path": "/data/import/buildings.geojson",
          "option": []
        },
        "dst": {
          "path": "PG:dbname=gis",
          "option": ["SCHEMA=cadastre"]
        }
      }
    ]
  }
]
"""
