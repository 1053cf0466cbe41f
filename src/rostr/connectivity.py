"""Endpoint reachability checks.

Runs a DatasetProbe over the sources and destinations of a
configuration on request. Nothing is probed while loading or editing a
configuration.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Callable

from .config.configuration import Configuration
from .interfaces import DatasetProbe

logger = logging.getLogger(__name__)


class DriverRegistry:
    """Names of the dataset drivers a probe may use.

    The registry is handed to whoever needs it instead of living in a
    module global. The loader runs once, the first time the drivers are
    asked for.
    """

    def __init__(self, loader: Callable[[], Iterable[str]]) -> None:
        self._loader = loader
        self._drivers: list[str] | None = None

    @property
    def drivers(self) -> list[str]:
        """Driver short names, loaded on first access."""
        if self._drivers is None:
            self._drivers = list(self._loader())
            logger.debug("Registered %d driver(s)", len(self._drivers))
        return list(self._drivers)

    @property
    def count(self) -> int:
        return len(self.drivers)

    def __contains__(self, name: object) -> bool:
        return name in self.drivers

    def __str__(self) -> str:
        return f"DriverRegistry({self.count}, {self.drivers})"


@dataclass
class EndpointCheck:
    """Result of probing one endpoint."""

    process_id: int
    transfer_id: int
    role: str  # "src" or "dst"
    path: str
    reachable: bool
    message: str = ""


@dataclass
class ConnectivityReport:
    """All endpoint checks of one run."""

    checks: list[EndpointCheck] = field(default_factory=list)

    @property
    def reachable(self) -> int:
        return sum(1 for c in self.checks if c.reachable)

    @property
    def unreachable(self) -> list[EndpointCheck]:
        return [c for c in self.checks if not c.reachable]

    @property
    def ok(self) -> bool:
        return not self.unreachable


def check_connectivity(
    config: Configuration,
    probe: DatasetProbe,
    registry: DriverRegistry | None = None,
    process_ids: Iterable[int] | None = None,
) -> ConnectivityReport:
    """Probe the source and destination of every transfer.

    Args:
        config: Configuration to check
        probe: Collaborator that opens datasets
        registry: Drivers the probe may use (None = any driver)
        process_ids: Only check these processes (None = all)

    Returns:
        ConnectivityReport with one check per endpoint
    """
    allowed = registry.drivers if registry is not None else []
    if process_ids is None:
        processes = config.get_process_by_list(config.process_ids())
    else:
        processes = config.get_process_by_list(process_ids)

    report = ConnectivityReport()
    for process in processes:
        for transfer in process.transfer:
            for role, endpoint in (("src", transfer.src), ("dst", transfer.dst)):
                check = EndpointCheck(
                    process_id=process.id,
                    transfer_id=transfer.id,
                    role=role,
                    path=endpoint.path,
                    reachable=False,
                )
                try:
                    check.reachable = bool(
                        probe.open(endpoint.path, list(endpoint.options), allowed)
                    )
                    if not check.reachable:
                        check.message = "Dataset not reachable, please check the path"
                except Exception as e:
                    check.message = str(e)
                    logger.warning("Probe of %s failed: %s", endpoint.path, e)
                report.checks.append(check)

    logger.info(
        "%d of %d endpoint(s) reachable", report.reachable, len(report.checks)
    )
    return report
