"""Tests for counter seeding: the post_migrate signal and management command.

Run with: pytest tests/test_commands.py -v
"""

from io import StringIO

import pytest
from django.apps import apps
from django.core.management import call_command
from django.core.management.base import CommandError

from registrations.models import TicketCounter
from registrations.signals import ensure_ticket_counter


@pytest.mark.django_db
class TestPostMigrateSeeding:
    """Tests for the ensure_ticket_counter signal handler."""

    def test_counter_seeded_after_migrate(self, settings):
        assert TicketCounter.objects.filter(key=settings.REGISTRATION["COUNTER_KEY"]).exists()

    def test_seed_does_not_touch_existing_counter(self):
        TicketCounter.objects.update_or_create(
            key="ticket", defaults={"current": 4, "total": 9}
        )
        ensure_ticket_counter(sender=None, app_config=apps.get_app_config("registrations"))
        counter = TicketCounter.objects.get(key="ticket")
        assert (counter.current, counter.total) == (4, 9)

    def test_other_apps_ignored(self, settings):
        TicketCounter.objects.all().delete()
        ensure_ticket_counter(sender=None, app_config=apps.get_app_config("auth"))
        assert not TicketCounter.objects.exists()


@pytest.mark.django_db
class TestEnsureTicketCounterCommand:
    """Tests for the ensure_ticket_counter management command."""

    def call(self, *args) -> str:
        out = StringIO()
        call_command("ensure_ticket_counter", *args, stdout=out)
        return out.getvalue()

    def test_creates_missing_counter(self):
        output = self.call("--key", "gala", "--total", "50")
        counter = TicketCounter.objects.get(key="gala")
        assert (counter.current, counter.total) == (0, 50)
        assert "created" in output

    def test_updates_total(self):
        TicketCounter.objects.update_or_create(
            key="ticket", defaults={"current": 2, "total": 10}
        )
        self.call("--key", "ticket", "--total", "20")
        counter = TicketCounter.objects.get(key="ticket")
        assert (counter.current, counter.total) == (2, 20)

    def test_refuses_total_below_issued(self):
        TicketCounter.objects.update_or_create(
            key="ticket", defaults={"current": 5, "total": 10}
        )
        with pytest.raises(CommandError):
            self.call("--key", "ticket", "--total", "3")
        assert TicketCounter.objects.get(key="ticket").total == 10

    def test_existing_counter_unchanged_without_total(self):
        TicketCounter.objects.update_or_create(
            key="ticket", defaults={"current": 1, "total": 10}
        )
        output = self.call("--key", "ticket")
        assert "1/10" in output
