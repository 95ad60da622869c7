from registrations.domain.models import (
    Counter,
    Registrant,
    RegistrationResult,
    TicketAvailability,
)
from registrations.domain.value_objects import (
    Capacity,
    PhoneNumber,
    RegistrantId,
    TicketCode,
    TicketNumber,
)

__all__ = [
    "Counter",
    "Registrant",
    "RegistrationResult",
    "TicketAvailability",
    "Capacity",
    "PhoneNumber",
    "RegistrantId",
    "TicketCode",
    "TicketNumber",
]
