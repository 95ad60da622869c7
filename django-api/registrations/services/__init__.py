from registrations.services.allocator import TicketAllocator
from registrations.services.registration_service import (
    RegistrationPolicy,
    RegistrationService,
)

__all__ = ["RegistrationPolicy", "RegistrationService", "TicketAllocator"]
