"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self
from uuid import UUID

DEFAULT_TICKET_CODE_PREFIX = "ROS"
TICKET_CODE_WIDTH = 4


@dataclass(frozen=True)
class RegistrantId:
    """Unique identifier for a Registrant."""

    value: UUID


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


@dataclass(frozen=True)
class TicketNumber:
    """Sequence number handed out by the ticket counter, starting at 1."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError("Ticket number must be positive")


@dataclass(frozen=True)
class TicketCode:
    """Printable ticket code derived from a ticket number, e.g. ROS-0007.

    Numbers wider than the pad width are kept whole.
    """

    value: str

    @classmethod
    def from_number(
        cls, number: TicketNumber | int, prefix: str = DEFAULT_TICKET_CODE_PREFIX
    ) -> Self:
        if isinstance(number, int):
            number = TicketNumber(number)
        return cls(value=f"{prefix}-{number.value:0{TICKET_CODE_WIDTH}d}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PhoneNumber:
    """Phone number in canonical international form (+<cc><national>)."""

    value: str

    def __post_init__(self) -> None:
        digits = self.value[1:]
        if not self.value.startswith("+") or not (digits.isascii() and digits.isdigit()):
            raise ValueError("Phone number must be in +<digits> form")

    def __str__(self) -> str:
        return self.value
