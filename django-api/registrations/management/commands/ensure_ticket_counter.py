from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from registrations.models import TicketCounter


class Command(BaseCommand):
    help = "Create the ticket counter if missing, optionally changing its total."

    def add_arguments(self, parser):
        parser.add_argument(
            "--total",
            type=int,
            help="Set the ticket capacity. Defaults to TOTAL_TICKETS for a new counter.",
        )
        parser.add_argument(
            "--key",
            default=settings.REGISTRATION["COUNTER_KEY"],
            help="Counter key (default: %(default)s).",
        )

    def handle(self, *args, **options):
        key = options["key"]
        total = options["total"]
        if total is not None and total < 0:
            raise CommandError("--total cannot be negative")

        counter, created = TicketCounter.objects.get_or_create(
            key=key,
            defaults={
                "current": 0,
                "total": total if total is not None else int(settings.REGISTRATION["TOTAL_TICKETS"]),
            },
        )
        if not created and total is not None and total != counter.total:
            if total < counter.current:
                raise CommandError(
                    f"--total {total} is below the {counter.current} tickets already issued"
                )
            counter.total = total
            counter.save(update_fields=["total"])
            self.stdout.write(f"Counter {key!r} total set to {total}")

        state = "created" if created else "ready"
        self.stdout.write(
            self.style.SUCCESS(
                f"Counter {key!r} {state}: {counter.current}/{counter.total} issued"
            )
        )
