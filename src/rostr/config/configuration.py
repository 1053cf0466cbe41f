"""Configuration: the root container of processes.

A Configuration owns its processes, which in turn own their transfers.
Nothing holds a reference back to its container, so navigation is
always top down: configuration -> process -> transfer.

Read accessors (get_process, get_process_by_list) hand out detached
copies. Edits go through the *_mut accessors, which return the live
objects held by the container. The container has no locking; callers
sharing one instance between threads must serialize access themselves.
"""

import copy
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from filelock import FileLock

from .errors import ConfigIOError, PushError
from .process import Process, next_id, swap_remove

logger = logging.getLogger(__name__)


@dataclass
class Configuration:
    """Root configuration object.

    Attributes:
        process: Processes in insertion order
    """

    process: list[Process] = field(default_factory=list)

    @classmethod
    def from_str(cls, text: str) -> "Configuration":
        """Build a Configuration from its JSON text.

        Construction is all or nothing: any malformed or missing field
        rejects the whole document.

        Raises:
            ParseError: If the text is not a valid configuration
        """
        from .loader import parse_configuration

        return parse_configuration(text)

    @classmethod
    def load(cls, path: Path | str) -> "Configuration":
        """Read and parse a configuration file.

        Raises:
            ConfigIOError: If the file cannot be read
            ParseError: If its content is not a valid configuration
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigIOError(f"Cannot read configuration file: {e}") from e

        logger.debug("Loaded %d bytes from %s", len(text), path)
        return cls.from_str(text)

    def save(self, path: Path | str) -> None:
        """Write the configuration as pretty-printed JSON.

        The file is created or truncated; its directory must already exist.
        Writers going through save are serialized by a `<name>.lock` file
        next to the target, which is left in place afterwards. The write
        itself is not atomic.

        Raises:
            ConfigIOError: If serialization or writing fails
        """
        from .loader import dumps_configuration

        path = Path(path)
        try:
            output = dumps_configuration(self)
        except (TypeError, ValueError) as e:
            raise ConfigIOError(f"Cannot serialize configuration: {e}") from e

        if not path.parent.is_dir():
            raise ConfigIOError(
                f"Cannot write configuration file: directory {path.parent} does not exist"
            )

        lock_path = path.with_name(path.name + ".lock")
        try:
            with FileLock(lock_path):
                with open(path, "w", encoding="utf-8") as f:
                    f.write(output)
        except OSError as e:
            raise ConfigIOError(f"Cannot write configuration file: {e}") from e

        logger.debug("Saved %d process(es) to %s", len(self.process), path)

    def __str__(self) -> str:
        return "\n".join(str(p) for p in self.process)

    def push(self, process: Process) -> None:
        """Append a process at the end of the list.

        Duplicate ids are accepted.

        Raises:
            PushError: If process is not a Process
        """
        if not isinstance(process, Process):
            raise PushError(f"The process {process!r} can't be pushed")
        self.process.append(process)

    def process_ids(self) -> list[int]:
        """Ids of all processes, in list order."""
        return [p.id for p in self.process]

    def next_process_id(self) -> int:
        """Smallest id greater than every process id in this configuration."""
        return next_id(self.process)

    def get_process(self, id: int) -> Process | None:
        """Return a detached copy of the first process with the given id.

        Changes to the returned object do not affect this configuration;
        use get_process_mut to edit in place.
        """
        process = self.get_process_mut(id)
        return copy.deepcopy(process) if process is not None else None

    def get_process_mut(self, id: int) -> Process | None:
        """Return the process with the given id, as owned by this configuration."""
        return next((p for p in self.process if p.id == id), None)

    def get_process_by_list(self, ids: Iterable[int]) -> list[Process]:
        """Return copies of the processes whose id is in ids, in list order."""
        return copy.deepcopy(self.get_process_by_list_mut(ids))

    def get_process_by_list_mut(self, ids: Iterable[int]) -> list[Process]:
        """Return the processes whose id is in ids, in list order.

        The result follows configuration order, not the order of ids.
        Each process appears once; unknown ids are skipped.
        """
        wanted = set(ids)
        return [p for p in self.process if p.id in wanted]

    def remove_process(self, id: int) -> Process | None:
        """Remove the first process with the given id and return it.

        The last process takes the freed slot, so order is not kept.
        """
        removed = swap_remove(self.process, lambda p: p.id == id)
        if removed is not None:
            logger.debug("Removed process %d", id)
        return removed

    def remove_process_by_list(self, ids: Iterable[int]) -> None:
        """Remove every process whose id is in ids, keeping the order of the rest."""
        wanted = set(ids)
        self.process[:] = [p for p in self.process if p.id not in wanted]
