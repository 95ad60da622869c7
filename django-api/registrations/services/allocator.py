"""Ticket allocation against a capacity-bounded counter.

No in-process locking happens here: uniqueness of ticket numbers comes from
the store's atomic conditional increment, so any number of processes may
share one counter.
"""

import logging

from registrations.domain import TicketAvailability, TicketNumber
from registrations.domain.errors import CounterNotFoundError, TicketsExhaustedError
from registrations.stores.interfaces import TicketCounterStore

logger = logging.getLogger(__name__)


class TicketAllocator:
    """Claims sequential ticket numbers from a single counter."""

    def __init__(
        self, store: TicketCounterStore, counter_key: str, default_total: int
    ) -> None:
        self._store = store
        self._counter_key = counter_key
        self._default_total = default_total

    @property
    def counter_key(self) -> str:
        return self._counter_key

    def ensure_counter(self) -> None:
        """Create the counter with the default total unless it exists."""
        self._store.ensure_counter(self._counter_key, self._default_total)

    def claim(self) -> TicketNumber:
        """Claim the next ticket number.

        Raises:
            TicketsExhaustedError: If every ticket has been issued.
        """
        self.ensure_counter()
        value = self._store.increment_if_available(self._counter_key)
        if value is None:
            logger.warning("Tickets exhausted", extra={"counter": self._counter_key})
            raise TicketsExhaustedError(self._counter_key)
        logger.info(
            "Ticket claimed", extra={"counter": self._counter_key, "ticket_number": value}
        )
        return TicketNumber(value)

    def availability(self) -> TicketAvailability:
        """Return how many tickets are left.

        Raises:
            CounterNotFoundError: If the counter record does not exist.
        """
        counter = self._store.get_counter(self._counter_key)
        if counter is None:
            raise CounterNotFoundError(self._counter_key)
        return TicketAvailability(left=counter.left, total=counter.total.value)

    def atomic(self):
        """Group the counter write with other store writes in one unit."""
        return self._store.atomic()

    def reset(self) -> None:
        """Set the issued count back to zero, keeping the total."""
        self.ensure_counter()
        self._store.set_current(self._counter_key, 0)
