"""Process: a group of transfers sharing a parallelism hint."""

import copy
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from .errors import PushError
from .schema import MAX_ID, Transfer

logger = logging.getLogger(__name__)

T = TypeVar("T")


def swap_remove(items: list[T], match: Callable[[T], bool]) -> T | None:
    """Remove the first matching item, moving the last item into its slot.

    Order of the remaining items is not preserved.
    """
    for idx, item in enumerate(items):
        if match(item):
            break
    else:
        return None

    last = items.pop()
    if idx == len(items):
        return last
    removed = items[idx]
    items[idx] = last
    return removed


def next_id(items: Iterable) -> int:
    """Return one past the highest id in items, or 0 when empty.

    Raises:
        OverflowError: If the highest id is already MAX_ID
    """
    highest = max((item.id for item in items), default=-1)
    if highest >= MAX_ID:
        raise OverflowError(f"No id left above {highest}, ids stop at {MAX_ID}")
    return highest + 1


@dataclass
class Process:
    """A named group of transfers.

    The parallel flag only advises an executor that the transfers may
    run concurrently; nothing here schedules them.

    Attributes:
        id: Identifier, unique within the owning configuration
        parallel: Whether transfers may be run concurrently
        transfer: Transfers in insertion order
    """

    id: int
    parallel: bool = False
    transfer: list[Transfer] = field(default_factory=list)

    @classmethod
    def from_str(cls, text: str) -> "Process":
        """Build a Process from a JSON object."""
        from .loader import parse_process

        return parse_process(text)

    def __str__(self) -> str:
        lines = [f"Process ({self.id}, {self.parallel}, ["]
        lines.extend(f"    {t}," for t in self.transfer)
        lines.append("])")
        return "\n".join(lines)

    def push_transfer(self, transfer: Transfer) -> None:
        """Append a transfer at the end of the list.

        Duplicate ids are accepted.

        Raises:
            PushError: If transfer is not a Transfer
        """
        if not isinstance(transfer, Transfer):
            raise PushError(f"The transfer {transfer!r} can't be pushed")
        self.transfer.append(transfer)

    def transfer_ids(self) -> list[int]:
        """Ids of all transfers, in list order."""
        return [t.id for t in self.transfer]

    def next_transfer_id(self) -> int:
        """Smallest id greater than every transfer id in this process."""
        return next_id(self.transfer)

    def get_transfer(self, id: int) -> Transfer | None:
        """Return a detached copy of the first transfer with the given id.

        Changes to the returned object do not affect this process; use
        get_transfer_mut to edit in place.
        """
        transfer = self.get_transfer_mut(id)
        return copy.deepcopy(transfer) if transfer is not None else None

    def get_transfer_mut(self, id: int) -> Transfer | None:
        """Return the transfer with the given id, as owned by this process."""
        return next((t for t in self.transfer if t.id == id), None)

    def get_transfer_by_list(self, ids: Iterable[int]) -> list[Transfer]:
        """Return copies of the transfers whose id is in ids, in list order."""
        return copy.deepcopy(self.get_transfer_by_list_mut(ids))

    def get_transfer_by_list_mut(self, ids: Iterable[int]) -> list[Transfer]:
        """Return the transfers whose id is in ids, in list order.

        Each transfer appears once; unknown ids are skipped.
        """
        wanted = set(ids)
        return [t for t in self.transfer if t.id in wanted]

    def remove_transfer(self, id: int) -> Transfer | None:
        """Remove the first transfer with the given id and return it.

        The last transfer takes the freed slot, so order is not kept.
        """
        removed = swap_remove(self.transfer, lambda t: t.id == id)
        if removed is not None:
            logger.debug("Removed transfer %d from process %d", id, self.id)
        return removed

    def remove_transfer_by_list(self, ids: Iterable[int]) -> None:
        """Remove every transfer whose id is in ids, keeping the order of the rest."""
        wanted = set(ids)
        self.transfer[:] = [t for t in self.transfer if t.id not in wanted]
