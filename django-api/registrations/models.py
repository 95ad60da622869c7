"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class TicketCounter(models.Model):
    """Persistence model for the capacity-bounded ticket counter."""

    key = models.CharField(primary_key=True, max_length=64)
    current = models.PositiveIntegerField(default=0)
    total = models.PositiveIntegerField()

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=models.Q(current__lte=models.F("total")),
                name="ticket_counter_current_lte_total",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.key}: {self.current}/{self.total}"


class Registrant(models.Model):
    """Persistence model for registrants."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=16)
    email = models.EmailField(unique=True, blank=True, null=True)
    ticket_code = models.CharField(max_length=32, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["phone"], name="registrant_phone_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.ticket_code} - {self.name}"
