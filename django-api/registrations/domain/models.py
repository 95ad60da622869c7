"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in registrations/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import datetime

from registrations.domain.value_objects import (
    Capacity,
    PhoneNumber,
    RegistrantId,
    TicketCode,
)


@dataclass(frozen=True)
class Counter:
    """Domain representation of the ticket counter."""

    key: str
    current: int
    total: Capacity

    @property
    def left(self) -> int:
        return max(self.total.value - self.current, 0)


@dataclass(frozen=True)
class Registrant:
    """Domain representation of a Registrant."""

    id: RegistrantId
    name: str
    phone: PhoneNumber
    email: str | None
    ticket_code: TicketCode
    created_at: datetime


@dataclass(frozen=True)
class TicketAvailability:
    """Tickets still available out of the total."""

    left: int
    total: int


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a successful registration."""

    registrant: Registrant
    message: str
    delivery: dict[str, bool] = field(default_factory=dict)

    @property
    def ticket_code(self) -> TicketCode:
        return self.registrant.ticket_code
