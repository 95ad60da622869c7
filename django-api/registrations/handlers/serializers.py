"""Serializers for request parsing and transforming domain models to API responses."""

from rest_framework import serializers


class RegistrationRequestSerializer(serializers.Serializer):
    """Input for POST /api/register.

    Blank values pass through; the service decides what is required.
    """

    name = serializers.CharField(
        max_length=255, required=False, allow_blank=True, default=""
    )
    phone = serializers.CharField(
        max_length=64, required=False, allow_blank=True, default=""
    )
    email = serializers.EmailField(
        max_length=254, required=False, allow_blank=True, allow_null=True, default=None
    )


class TicketAvailabilitySerializer(serializers.Serializer):
    """Serializer for TicketAvailability domain model."""

    left = serializers.IntegerField()
    total = serializers.IntegerField()


class RegistrationResultSerializer(serializers.Serializer):
    """Serializer for RegistrationResult domain model."""

    success = serializers.SerializerMethodField()
    ticketCode = serializers.CharField(source="ticket_code.value")
    message = serializers.CharField()
    delivery = serializers.DictField(child=serializers.BooleanField())

    def get_success(self, obj) -> bool:
        return True
