"""Registration service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from registrations.domain import RegistrationResult, TicketAvailability, TicketCode
from registrations.domain.errors import (
    DuplicateRegistrantError,
    InvalidRegistrationError,
    RegistrantConflictError,
    StoreUnavailableError,
)
from registrations.domain.phone import parse_phone
from registrations.notifications import EventDetails, Notification, NotificationDispatcher
from registrations.notifications.messages import confirmation_message
from registrations.services.allocator import TicketAllocator
from registrations.stores.interfaces import RegistrantStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrationPolicy:
    """Configurable parts of the registration workflow."""

    default_country_code: str = "233"
    redundant_prefixes: tuple[str, ...] | None = None
    require_email: bool = False
    ticket_code_prefix: str = "ROS"


class RegistrationService:
    """Service for registering attendees and issuing tickets."""

    def __init__(
        self,
        allocator: TicketAllocator,
        registrants: RegistrantStore,
        dispatcher: NotificationDispatcher,
        event: EventDetails,
        policy: RegistrationPolicy | None = None,
    ) -> None:
        self._allocator = allocator
        self._registrants = registrants
        self._dispatcher = dispatcher
        self._event = event
        self._policy = policy or RegistrationPolicy()

    def tickets_left(self) -> TicketAvailability:
        """Return remaining and total tickets.

        Raises:
            CounterNotFoundError: If the counter does not exist.
        """
        return self._allocator.availability()

    def register(
        self, name: str | None, phone: str | None, email: str | None = None
    ) -> RegistrationResult:
        """Register an attendee and issue the next ticket.

        Raises:
            InvalidRegistrationError: If a required field is blank.
            InvalidPhoneError: If the phone number cannot be normalized.
            DuplicateRegistrantError: If the email is already registered.
            TicketsExhaustedError: If no tickets are left.
            RegistrantConflictError: If the store rejects a concurrent duplicate.
            StoreUnavailableError: If the store fails.
        """
        name = (name or "").strip()
        phone = (phone or "").strip()
        email = (email or "").strip().lower() or None

        if not name or not phone:
            raise InvalidRegistrationError()
        if self._policy.require_email and email is None:
            raise InvalidRegistrationError("Name, email and phone number are required")

        phone_number = parse_phone(
            phone, self._policy.default_country_code, self._policy.redundant_prefixes
        )

        if email is not None and self._registrants.find_by_email(email) is not None:
            logger.warning("Duplicate registration rejected", extra={"email": email})
            raise DuplicateRegistrantError(email)

        ticket_number = self._allocator.claim()
        ticket_code = TicketCode.from_number(
            ticket_number, prefix=self._policy.ticket_code_prefix
        )

        try:
            registrant = self._registrants.create(
                name=name, phone=phone_number, email=email, ticket_code=ticket_code
            )
        except (RegistrantConflictError, StoreUnavailableError):
            # The ticket number stays consumed; it is never reissued.
            logger.error(
                "Ticket claimed but registrant not saved",
                extra={"ticket_code": ticket_code.value},
            )
            raise

        logger.info(
            "Registrant saved",
            extra={"ticket_code": ticket_code.value, "registrant_id": str(registrant.id.value)},
        )

        self._dispatcher.dispatch(
            Notification(
                name=registrant.name,
                phone=registrant.phone.value,
                email=registrant.email,
                ticket_code=ticket_code.value,
                event=self._event,
            )
        )

        return RegistrationResult(
            registrant=registrant,
            message=confirmation_message(ticket_code.value),
            delivery=_pending(self._dispatcher.channel_names),
        )

    def reset(self) -> int:
        """Delete all registrants and zero the counter.

        Both happen in one store transaction. The counter is written first so
        concurrent claims wait for the reset to finish.

        Returns the number of registrants removed.
        """
        with self._allocator.atomic():
            self._allocator.reset()
            removed = self._registrants.delete_all()
        logger.warning(
            "Registrations reset",
            extra={"counter": self._allocator.counter_key, "removed": removed},
        )
        return removed


def _pending(channel_names: Iterable[str]) -> dict[str, bool]:
    return {f"{name}Sent": False for name in channel_names}
