"""Builds services from Django settings.

The notification dispatcher owns a worker pool and HTTP clients, so one
instance is created per process on first use and shut down at exit.
"""

import atexit
import threading

from django.conf import settings

from registrations.notifications import EventDetails, NotificationDispatcher, build_channels
from registrations.services.allocator import TicketAllocator
from registrations.services.registration_service import (
    RegistrationPolicy,
    RegistrationService,
)
from registrations.stores.django_store import DjangoRegistrantStore, DjangoTicketCounterStore

_dispatcher: NotificationDispatcher | None = None
_dispatcher_lock = threading.Lock()


def get_dispatcher() -> NotificationDispatcher:
    global _dispatcher
    with _dispatcher_lock:
        if _dispatcher is None:
            config = settings.NOTIFICATIONS
            _dispatcher = NotificationDispatcher(
                build_channels(config), max_workers=int(config.get("WORKERS", 4))
            )
            atexit.register(_dispatcher.shutdown)
        return _dispatcher


def close_dispatcher(wait: bool = True) -> None:
    """Shut down the process dispatcher; the next call builds a fresh one."""
    global _dispatcher
    with _dispatcher_lock:
        if _dispatcher is not None:
            atexit.unregister(_dispatcher.shutdown)
            _dispatcher.shutdown(wait=wait)
            _dispatcher = None


def build_allocator() -> TicketAllocator:
    config = settings.REGISTRATION
    return TicketAllocator(
        DjangoTicketCounterStore(),
        counter_key=config["COUNTER_KEY"],
        default_total=int(config["TOTAL_TICKETS"]),
    )


def build_registration_service() -> RegistrationService:
    config = settings.REGISTRATION
    prefixes = config.get("REDUNDANT_PREFIXES")
    return RegistrationService(
        allocator=build_allocator(),
        registrants=DjangoRegistrantStore(),
        dispatcher=get_dispatcher(),
        event=EventDetails.from_settings(settings.EVENT),
        policy=RegistrationPolicy(
            default_country_code=config["DEFAULT_COUNTRY_CODE"],
            redundant_prefixes=tuple(prefixes) if prefixes else None,
            require_email=bool(config.get("REQUIRE_EMAIL", False)),
            ticket_code_prefix=config.get("TICKET_CODE_PREFIX", "ROS"),
        ),
    )
