"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from registrations.domain import Counter, PhoneNumber, Registrant, TicketCode


class TicketCounterStore(ABC):
    """Interface for the durable ticket counter."""

    @abstractmethod
    def get_counter(self, key: str) -> Counter | None:
        """Return the counter for ``key``, or None if it does not exist."""
        ...

    @abstractmethod
    def ensure_counter(self, key: str, total: int) -> Counter:
        """Create the counter with ``current=0`` unless it already exists.

        An existing counter is returned unchanged.
        """
        ...

    @abstractmethod
    def increment_if_available(self, key: str) -> int | None:
        """Atomically increment ``current`` if it is below ``total``.

        Returns the post-increment value, or None when nothing was updated.
        """
        ...

    @abstractmethod
    def set_current(self, key: str, value: int) -> None:
        """Overwrite ``current``, leaving ``total`` untouched."""
        ...

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Return a context grouping counter and registrant writes into one unit.

        Once the counter is written inside the block, claims wait until the
        block exits.
        """
        ...


class RegistrantStore(ABC):
    """Interface for registrant persistence operations."""

    @abstractmethod
    def create(
        self,
        name: str,
        phone: PhoneNumber,
        email: str | None,
        ticket_code: TicketCode,
    ) -> Registrant:
        """Persist a new registrant.

        Raises:
            RegistrantConflictError: If a uniqueness constraint is violated.
        """
        ...

    @abstractmethod
    def find_by_email(self, email: str) -> Registrant | None:
        """Return the registrant holding ``email``, or None."""
        ...

    @abstractmethod
    def delete_all(self) -> int:
        """Delete every registrant and return how many were removed."""
        ...

    @abstractmethod
    def count(self) -> int:
        """Return the number of registrants."""
        ...
