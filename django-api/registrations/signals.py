"""Django signals for seeding the ticket counter."""

import logging

from django.conf import settings
from django.db.models.signals import post_migrate
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(post_migrate)
def ensure_ticket_counter(sender, app_config=None, using="default", **kwargs):
    """Create the ticket counter after this app's migrations have run."""
    if app_config is None or app_config.name != "registrations":
        return

    from registrations.models import TicketCounter

    config = settings.REGISTRATION
    _, created = TicketCounter.objects.using(using).get_or_create(
        key=config["COUNTER_KEY"],
        defaults={"current": 0, "total": int(config["TOTAL_TICKETS"])},
    )
    if created:
        logger.info(
            "Ticket counter seeded",
            extra={"counter": config["COUNTER_KEY"], "total": config["TOTAL_TICKETS"]},
        )
