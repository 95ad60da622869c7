from registrations.handlers.views import RegisterView, ResetView, TicketsLeftView

__all__ = ["RegisterView", "ResetView", "TicketsLeftView"]
