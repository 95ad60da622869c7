from registrations.notifications.channels import (
    EmailChannel,
    NotificationChannel,
    SmsChannel,
    WhatsAppChannel,
    build_channels,
)
from registrations.notifications.dispatcher import NotificationDispatcher
from registrations.notifications.messages import EventDetails, Notification

__all__ = [
    "EmailChannel",
    "EventDetails",
    "Notification",
    "NotificationChannel",
    "NotificationDispatcher",
    "SmsChannel",
    "WhatsAppChannel",
    "build_channels",
]
