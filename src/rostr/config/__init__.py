"""Configuration model for rostr.

This module provides the process/transfer configuration tree, its JSON
loading and saving, and id based lookup and removal.
"""

from .configuration import Configuration
from .errors import ConfigIOError, ConfigurationError, ParseError, PushError
from .loader import (
    dumps_configuration,
    find_config_file,
    load_config,
    parse_configuration,
)
from .process import Process
from .schema import Destination, Endpoint, Operation, Source, Transfer

__all__ = [
    "Operation",
    "Endpoint",
    "Source",
    "Destination",
    "Transfer",
    "Process",
    "Configuration",
    "parse_configuration",
    "dumps_configuration",
    "load_config",
    "find_config_file",
    "ConfigurationError",
    "ParseError",
    "PushError",
    "ConfigIOError",
]
