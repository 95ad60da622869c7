"""Integration tests for the Django ORM stores.

Run with: pytest tests/test_stores.py -v
"""

from concurrent.futures import ThreadPoolExecutor
from unittest import mock

import pytest
from django.db import OperationalError, connection

from registrations.domain import PhoneNumber, TicketCode
from registrations.domain.errors import RegistrantConflictError, StoreUnavailableError
from registrations.models import Registrant, TicketCounter
from registrations.services import RegistrationService, TicketAllocator
from registrations.stores.django_store import DjangoRegistrantStore, DjangoTicketCounterStore

KEY = "store-test"


@pytest.mark.django_db
class TestDjangoTicketCounterStore:
    """Tests for DjangoTicketCounterStore."""

    def test_get_missing_counter(self):
        assert DjangoTicketCounterStore().get_counter(KEY) is None

    def test_ensure_counter_is_idempotent(self):
        """A second ensure keeps the original total and progress."""
        store = DjangoTicketCounterStore()
        store.ensure_counter(KEY, 2)
        store.increment_if_available(KEY)

        counter = store.ensure_counter(KEY, 50)

        assert (counter.current, counter.total.value) == (1, 2)
        assert TicketCounter.objects.filter(key=KEY).count() == 1

    def test_increment_until_capacity(self):
        """Increments return post-increment values, then None at capacity."""
        store = DjangoTicketCounterStore()
        store.ensure_counter(KEY, 2)

        assert store.increment_if_available(KEY) == 1
        assert store.increment_if_available(KEY) == 2
        assert store.increment_if_available(KEY) is None

        assert TicketCounter.objects.get(key=KEY).current == 2

    def test_increment_missing_counter(self):
        assert DjangoTicketCounterStore().increment_if_available(KEY) is None

    def test_set_current_keeps_total(self):
        store = DjangoTicketCounterStore()
        store.ensure_counter(KEY, 5)
        store.increment_if_available(KEY)

        store.set_current(KEY, 0)

        row = TicketCounter.objects.get(key=KEY)
        assert (row.current, row.total) == (0, 5)

    def test_database_error_becomes_store_error(self):
        store = DjangoTicketCounterStore()
        with mock.patch.object(
            TicketCounter.objects, "filter", side_effect=OperationalError("down")
        ):
            with pytest.raises(StoreUnavailableError) as exc_info:
                store.get_counter(KEY)
        assert exc_info.value.operation == "get_counter"


@pytest.mark.django_db(transaction=True)
class TestDjangoTicketCounterConcurrency:
    """Concurrent claims against the real database."""

    @pytest.mark.parametrize("total,workers,claims_each", [(10, 8, 3), (5, 6, 2)])
    def test_concurrent_increments_never_overlap(self, total, workers, claims_each):
        """K tickets under contention yield exactly K distinct contiguous numbers."""
        store = DjangoTicketCounterStore()
        store.ensure_counter(KEY, total)

        def claim_batch(_):
            try:
                return [store.increment_if_available(KEY) for _ in range(claims_each)]
            finally:
                connection.close()

        with ThreadPoolExecutor(max_workers=workers) as pool:
            batches = list(pool.map(claim_batch, range(workers)))

        results = [value for batch in batches for value in batch]
        issued = sorted(value for value in results if value is not None)
        assert issued == list(range(1, total + 1))
        assert results.count(None) == workers * claims_each - total
        counter = store.get_counter(KEY)
        assert counter.current == counter.total.value == total


@pytest.mark.django_db
class TestDjangoRegistrantStore:
    """Tests for DjangoRegistrantStore."""

    def test_create_and_find_by_email(self):
        store = DjangoRegistrantStore()
        created = store.create(
            name="Ama",
            phone=PhoneNumber("+233244123456"),
            email="ama@example.com",
            ticket_code=TicketCode("ROS-0001"),
        )

        found = store.find_by_email("ama@example.com")

        assert found == created
        assert found.phone.value == "+233244123456"
        assert store.find_by_email("kofi@example.com") is None

    def test_duplicate_email_is_a_conflict(self):
        """The unique constraint is the authoritative duplicate guard."""
        store = DjangoRegistrantStore()
        store.create("Ama", PhoneNumber("+233244123456"), "ama@example.com", TicketCode("ROS-0001"))

        with pytest.raises(RegistrantConflictError):
            store.create("Ama", PhoneNumber("+233244123457"), "ama@example.com", TicketCode("ROS-0002"))

        assert store.count() == 1

    def test_registrants_without_email_do_not_collide(self):
        store = DjangoRegistrantStore()
        store.create("Ama", PhoneNumber("+233244123456"), None, TicketCode("ROS-0001"))
        store.create("Kofi", PhoneNumber("+233244123457"), None, TicketCode("ROS-0002"))
        assert store.count() == 2

    def test_delete_all(self):
        store = DjangoRegistrantStore()
        store.create("Ama", PhoneNumber("+233244123456"), None, TicketCode("ROS-0001"))
        store.create("Kofi", PhoneNumber("+233244123457"), None, TicketCode("ROS-0002"))

        assert store.delete_all() == 2
        assert Registrant.objects.count() == 0


@pytest.mark.django_db
class TestDjangoReset:
    """Tests for RegistrationService.reset against the Django stores."""

    @pytest.fixture
    def service(self, dispatcher, event) -> RegistrationService:
        allocator = TicketAllocator(DjangoTicketCounterStore(), KEY, default_total=5)
        return RegistrationService(allocator, DjangoRegistrantStore(), dispatcher, event)

    @pytest.fixture(autouse=True)
    def registered(self, db):
        TicketCounter.objects.create(key=KEY, current=2, total=5)
        Registrant.objects.create(name="Ama", phone="+233244123456", ticket_code="ROS-0001")
        Registrant.objects.create(name="Kofi", phone="+233244123457", ticket_code="ROS-0002")

    def test_reset_clears_registrants_and_counter(self, service):
        assert service.reset() == 2
        assert Registrant.objects.count() == 0
        row = TicketCounter.objects.get(key=KEY)
        assert (row.current, row.total) == (0, 5)

    def test_failed_delete_rolls_back_counter(self, service):
        """A failure partway through leaves counter and registrants untouched."""
        with mock.patch.object(
            Registrant.objects, "all", side_effect=OperationalError("down")
        ):
            with pytest.raises(StoreUnavailableError):
                service.reset()

        assert TicketCounter.objects.get(key=KEY).current == 2
        assert Registrant.objects.count() == 2
