"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from registrations.domain.errors import DomainError, ErrorCode
from registrations.handlers.permissions import ResetTokenPermission
from registrations.handlers.serializers import (
    RegistrationRequestSerializer,
    RegistrationResultSerializer,
    TicketAvailabilitySerializer,
)
from registrations.services.factory import build_registration_service

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.INVALID_REGISTRATION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PHONE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DUPLICATE_REGISTRANT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.REGISTRANT_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.TICKETS_EXHAUSTED: status.HTTP_410_GONE,
    ErrorCode.COUNTER_NOT_FOUND: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(error: DomainError) -> Response:
    """Map a domain error to a response carrying only its user-safe message."""
    code = ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response({"error": error.message, "code": error.code.value}, status=code)


class TicketsLeftView(APIView):
    """Handler for GET /api/tickets-left"""

    def get(self, request: Request) -> Response:
        try:
            availability = build_registration_service().tickets_left()
        except DomainError as exc:
            logger.error("Tickets-left failed", extra={"code": exc.code.value})
            return error_response(exc)
        return Response(TicketAvailabilitySerializer(availability).data)


class RegisterView(APIView):
    """Handler for POST /api/register"""

    def post(self, request: Request) -> Response:
        serializer = RegistrationRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {
                    "error": "Invalid registration details",
                    "code": ErrorCode.INVALID_REGISTRATION.value,
                    "details": serializer.errors,
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        data = serializer.validated_data
        try:
            result = build_registration_service().register(
                name=data["name"], phone=data["phone"], email=data.get("email")
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(RegistrationResultSerializer(result).data)


class ResetView(APIView):
    """Handler for POST /api/reset-test"""

    permission_classes = [ResetTokenPermission]

    def post(self, request: Request) -> Response:
        try:
            build_registration_service().reset()
        except DomainError as exc:
            logger.error("Reset failed", extra={"code": exc.code.value})
            return error_response(exc)
        return Response(
            {"success": True, "message": "Test data cleared - counter reset"}
        )
