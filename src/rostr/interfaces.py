"""Contracts for the dataset collaborators.

rostr never opens datasets itself. Probing a dataset and moving data
are done by implementations of these protocols, typically wrapping
GDAL/OGR.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .config.schema import Transfer


@runtime_checkable
class DatasetProbe(Protocol):
    """Checks whether a dataset can be opened."""

    def open(self, path: str, options: list[str], allowed_drivers: list[str]) -> bool:
        """Try to open path with the given driver options.

        allowed_drivers restricts which drivers may be used; an empty
        list lets the probe pick any driver.
        """
        ...


@runtime_checkable
class TransferExecutor(Protocol):
    """Moves the data described by a transfer."""

    def execute(self, transfer: Transfer) -> None:
        """Copy transfer.src into transfer.dst using transfer.operation."""
        ...
