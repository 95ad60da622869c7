"""Django ORM implementations of the registration stores."""

import logging
from functools import wraps

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F

from registrations import models
from registrations.domain import (
    Capacity,
    Counter,
    PhoneNumber,
    Registrant,
    RegistrantId,
    TicketCode,
)
from registrations.domain.errors import RegistrantConflictError, StoreUnavailableError
from registrations.stores.interfaces import RegistrantStore, TicketCounterStore

logger = logging.getLogger(__name__)


def _translate_database_errors(method):
    """Re-raise database failures as StoreUnavailableError."""

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except IntegrityError:
            raise
        except DatabaseError as exc:
            logger.exception(
                "Store operation failed", extra={"operation": method.__name__}
            )
            raise StoreUnavailableError(method.__name__) from exc

    return wrapper


def _to_counter(row: models.TicketCounter) -> Counter:
    return Counter(key=row.key, current=row.current, total=Capacity(row.total))


def _to_registrant(row: models.Registrant) -> Registrant:
    return Registrant(
        id=RegistrantId(row.id),
        name=row.name,
        phone=PhoneNumber(row.phone),
        email=row.email,
        ticket_code=TicketCode(row.ticket_code),
        created_at=row.created_at,
    )


class DjangoTicketCounterStore(TicketCounterStore):
    """Database-backed counter relying on a conditional UPDATE for atomicity."""

    @_translate_database_errors
    def get_counter(self, key: str) -> Counter | None:
        row = models.TicketCounter.objects.filter(key=key).first()
        return _to_counter(row) if row is not None else None

    @_translate_database_errors
    def ensure_counter(self, key: str, total: int) -> Counter:
        row, created = models.TicketCounter.objects.get_or_create(
            key=key, defaults={"current": 0, "total": total}
        )
        if created:
            logger.info(
                "Ticket counter initialized", extra={"counter": key, "total": total}
            )
        return _to_counter(row)

    @_translate_database_errors
    def increment_if_available(self, key: str) -> int | None:
        # The UPDATE holds the row lock until commit, so the read below sees
        # exactly the value this call produced.
        with transaction.atomic():
            updated = models.TicketCounter.objects.filter(
                key=key, current__lt=F("total")
            ).update(current=F("current") + 1)
            if not updated:
                return None
            return (
                models.TicketCounter.objects.filter(key=key)
                .values_list("current", flat=True)
                .get()
            )

    @_translate_database_errors
    def set_current(self, key: str, value: int) -> None:
        models.TicketCounter.objects.filter(key=key).update(current=value)

    def atomic(self):
        # Both stores share the default connection, so one transaction
        # covers the registrant table as well.
        return transaction.atomic()


class DjangoRegistrantStore(RegistrantStore):
    """Database-backed registrant store."""

    @_translate_database_errors
    def create(
        self,
        name: str,
        phone: PhoneNumber,
        email: str | None,
        ticket_code: TicketCode,
    ) -> Registrant:
        try:
            with transaction.atomic():
                row = models.Registrant.objects.create(
                    name=name,
                    phone=phone.value,
                    email=email,
                    ticket_code=ticket_code.value,
                )
        except IntegrityError as exc:
            raise RegistrantConflictError() from exc
        return _to_registrant(row)

    @_translate_database_errors
    def find_by_email(self, email: str) -> Registrant | None:
        row = models.Registrant.objects.filter(email=email).first()
        return _to_registrant(row) if row is not None else None

    @_translate_database_errors
    def delete_all(self) -> int:
        deleted, _ = models.Registrant.objects.all().delete()
        return deleted

    @_translate_database_errors
    def count(self) -> int:
        return models.Registrant.objects.count()
