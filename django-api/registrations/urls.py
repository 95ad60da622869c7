from django.urls import path

from registrations.handlers import RegisterView, ResetView, TicketsLeftView

urlpatterns = [
    path("tickets-left", TicketsLeftView.as_view(), name="tickets-left"),
    path("register", RegisterView.as_view(), name="register"),
    path("reset-test", ResetView.as_view(), name="reset-test"),
]
