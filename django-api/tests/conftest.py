"""Pytest configuration and shared fixtures."""

import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone

import pytest
from rest_framework.test import APIClient

from registrations.domain import (
    Capacity,
    Counter,
    Registrant,
    RegistrantId,
)
from registrations.domain.errors import RegistrantConflictError
from registrations.notifications import EventDetails
from registrations.services import RegistrationPolicy, RegistrationService, TicketAllocator
from registrations.stores.interfaces import RegistrantStore, TicketCounterStore

COUNTER_KEY = "ticket"


class InMemoryTicketCounterStore(TicketCounterStore):
    """Counter store whose conditional increment is serialized by a lock.

    ``atomic`` holds the same lock, so claims wait for the block to exit.
    """

    def __init__(self) -> None:
        self._rows: dict[str, dict[str, int]] = {}
        self._lock = threading.RLock()
        self.mutations = 0
        self.in_atomic = False

    def get_counter(self, key: str) -> Counter | None:
        row = self._rows.get(key)
        if row is None:
            return None
        return Counter(key=key, current=row["current"], total=Capacity(row["total"]))

    def ensure_counter(self, key: str, total: int) -> Counter:
        with self._lock:
            self._rows.setdefault(key, {"current": 0, "total": total})
        return self.get_counter(key)

    def increment_if_available(self, key: str) -> int | None:
        with self._lock:
            row = self._rows.get(key)
            if row is None or row["current"] >= row["total"]:
                return None
            row["current"] += 1
            self.mutations += 1
            return row["current"]

    def set_current(self, key: str, value: int) -> None:
        with self._lock:
            self._rows[key]["current"] = value

    @contextmanager
    def atomic(self):
        with self._lock:
            self.in_atomic = True
            try:
                yield
            finally:
                self.in_atomic = False


class InMemoryRegistrantStore(RegistrantStore):
    """Registrant store enforcing unique email and ticket code."""

    def __init__(self) -> None:
        self.rows: list[Registrant] = []

    def create(self, name, phone, email, ticket_code) -> Registrant:
        for row in self.rows:
            if (email is not None and row.email == email) or row.ticket_code == ticket_code:
                raise RegistrantConflictError()
        registrant = Registrant(
            id=RegistrantId(uuid.uuid4()),
            name=name,
            phone=phone,
            email=email,
            ticket_code=ticket_code,
            created_at=datetime.now(timezone.utc),
        )
        self.rows.append(registrant)
        return registrant

    def find_by_email(self, email: str) -> Registrant | None:
        return next((row for row in self.rows if row.email == email), None)

    def delete_all(self) -> int:
        removed = len(self.rows)
        self.rows.clear()
        return removed

    def count(self) -> int:
        return len(self.rows)


class RecordingDispatcher:
    """Dispatcher double that keeps what it was given."""

    def __init__(self, channel_names: tuple[str, ...] = ()) -> None:
        self.channel_names = channel_names
        self.dispatched = []

    def dispatch(self, notification):
        self.dispatched.append(notification)
        return None


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def close_notification_dispatcher():
    from registrations.services.factory import close_dispatcher

    yield
    close_dispatcher()


@pytest.fixture
def event() -> EventDetails:
    return EventDetails(
        name="Roses of Sharon",
        date="13th February, 2026",
        time="6:00 PM",
        location="Haatso, Accra",
        map_url="https://maps.example.com/?q=haatso",
    )


@pytest.fixture
def counter_store() -> InMemoryTicketCounterStore:
    return InMemoryTicketCounterStore()


@pytest.fixture
def registrant_store() -> InMemoryRegistrantStore:
    return InMemoryRegistrantStore()


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher(channel_names=("email", "sms"))


@pytest.fixture
def allocator(counter_store) -> TicketAllocator:
    return TicketAllocator(counter_store, counter_key=COUNTER_KEY, default_total=3)


@pytest.fixture
def service(allocator, registrant_store, dispatcher, event) -> RegistrationService:
    return RegistrationService(
        allocator=allocator,
        registrants=registrant_store,
        dispatcher=dispatcher,
        event=event,
        policy=RegistrationPolicy(default_country_code="233"),
    )

