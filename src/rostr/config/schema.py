"""Value types of the transfer configuration.

A Transfer moves one table or layer from a Source to a Destination
under a given Operation. Endpoint options are driver specific and are
carried verbatim, in order.
"""

from dataclasses import dataclass, field
from enum import Enum

from .errors import ParseError

# Ids are unsigned 32-bit integers
MAX_ID = 2**32 - 1


class Operation(Enum):
    """Write mode applied to the destination."""

    OVERWRITE = "overwrite"
    UPDATE = "update"
    UPSERT = "upsert"

    @classmethod
    def parse(cls, value) -> "Operation":
        """Parse an operation from its lowercase literal.

        Only the exact strings "overwrite", "update" and "upsert" are
        accepted.

        Raises:
            ParseError: If value is not one of the known literals
        """
        if isinstance(value, str):
            for operation in cls:
                if operation.value == value:
                    return operation
        choices = ", ".join(f"'{op.value}'" for op in cls)
        raise ParseError(f"Invalid operation {value!r}, must be one of {choices}")

    def __str__(self) -> str:
        return self.value


@dataclass
class Endpoint:
    """A dataset location plus its driver options.

    Attributes:
        path: Dataset path or connection string
        options: Driver options, passed on untouched and in order
    """

    path: str
    options: list[str] = field(default_factory=list)

    def __post_init__(self):
        if not self.path:
            raise ValueError(f"{type(self).__name__} path must not be empty")

    def __str__(self) -> str:
        return f"{type(self).__name__} ({self.path}, {self.options})"


class Source(Endpoint):
    """Endpoint data is read from."""


class Destination(Endpoint):
    """Endpoint data is written to."""


@dataclass
class Transfer:
    """A single source to destination data movement.

    Attributes:
        id: Identifier, unique within the owning process
        operation: Write mode applied to the destination
        src: Where the data is read from
        dst: Where the data is written to
    """

    id: int
    operation: Operation
    src: Source
    dst: Destination

    def __post_init__(self):
        # src is always a Source and dst always a Destination
        if type(self.src) is Endpoint:
            self.src = Source(self.src.path, list(self.src.options))
        if type(self.dst) is Endpoint:
            self.dst = Destination(self.dst.path, list(self.dst.options))

    @classmethod
    def from_str(cls, text: str) -> "Transfer":
        """Build a Transfer from a JSON object."""
        from .loader import parse_transfer

        return parse_transfer(text)

    def __str__(self) -> str:
        return f"Transfer ({self.id}, {self.operation}, {self.src}, {self.dst})"
