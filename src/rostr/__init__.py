"""rostr: rostr/__init__.py."""

from .config import Configuration, Operation, Process, Transfer

__version__ = "0.1.0"

__all__ = ["Configuration", "Operation", "Process", "Transfer", "__version__"]
