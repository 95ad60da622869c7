"""Access control for administrative endpoints."""

import hmac

from django.conf import settings
from rest_framework.permissions import BasePermission

RESET_TOKEN_HEADER = "X-Reset-Token"


class ResetTokenPermission(BasePermission):
    """Allow staff users, or callers presenting the configured reset token.

    With no token configured only staff users get through.
    """

    message = "Reset requires authentication"

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated and user.is_staff:
            return True

        expected = settings.REGISTRATION.get("RESET_TOKEN") or ""
        provided = request.headers.get(RESET_TOKEN_HEADER, "")
        if not expected or not provided:
            return False
        return hmac.compare_digest(expected.encode(), provided.encode())
