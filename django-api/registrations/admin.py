from django.contrib import admin

from registrations.models import Registrant, TicketCounter


@admin.register(TicketCounter)
class TicketCounterAdmin(admin.ModelAdmin):
    list_display = ["key", "current", "total"]
    readonly_fields = ["current"]


@admin.register(Registrant)
class RegistrantAdmin(admin.ModelAdmin):
    list_display = ["ticket_code", "name", "phone", "email", "created_at"]
    search_fields = ["name", "phone", "email", "ticket_code"]
    readonly_fields = ["ticket_code", "created_at"]
