"""Confirmation message content."""

from dataclasses import dataclass
from html import escape


@dataclass(frozen=True)
class EventDetails:
    """What, when and where, as shown to registrants."""

    name: str
    date: str
    time: str
    location: str
    map_url: str = ""

    @classmethod
    def from_settings(cls, config: dict) -> "EventDetails":
        return cls(
            name=config.get("NAME", ""),
            date=config.get("DATE", ""),
            time=config.get("TIME", ""),
            location=config.get("LOCATION", ""),
            map_url=config.get("MAP_URL", ""),
        )


@dataclass(frozen=True)
class Notification:
    """A confirmation to deliver to one registrant."""

    name: str
    phone: str
    email: str | None
    ticket_code: str
    event: EventDetails


CONFIRMATION_MESSAGE = (
    "Registration successful! Your ticket ({ticket_code}) is confirmed.\n"
    "Please keep this code safe. We will send your ticket details shortly."
)

TEXT_MESSAGE = (
    "Dear {name},\n\n"
    "Thank you for registering for {event.name}!\n\n"
    "Your Ticket Code: {ticket_code}\n"
    "Date: {event.date}\n"
    "Time: {event.time}\n"
    "Location: {event.location}\n"
    "{map_line}"
    "\nWe can't wait to see you there!"
)

EMAIL_SUBJECT = "Your {event.name} ticket {ticket_code}"

EMAIL_HTML = """\
<html>
  <body style="font-family: Arial, sans-serif; color: #333; padding: 20px;">
    <h2>Welcome to {event.name}!</h2>
    <p>Dear {name},</p>
    <p>Thank you for registering.</p>
    <p style="font-size: 1.2em; font-weight: bold;">Your Ticket Code: {ticket_code}</p>
    <ul style="list-style: none; padding-left: 0;">
      <li><strong>Date:</strong> {event.date}</li>
      <li><strong>Time:</strong> {event.time}</li>
      <li><strong>Location:</strong> {event.location}</li>
    </ul>
    {map_link}
    {image}
  </body>
</html>
"""


def confirmation_message(ticket_code: str) -> str:
    """Message returned to the caller right after registering."""
    return CONFIRMATION_MESSAGE.format(ticket_code=ticket_code)


def text_body(notification: Notification) -> str:
    """Plain-text body used for SMS, WhatsApp and the email text part."""
    map_line = f"Map: {notification.event.map_url}\n" if notification.event.map_url else ""
    return TEXT_MESSAGE.format(
        name=notification.name,
        event=notification.event,
        ticket_code=notification.ticket_code,
        map_line=map_line,
    )


def email_subject(notification: Notification) -> str:
    return EMAIL_SUBJECT.format(
        event=notification.event, ticket_code=notification.ticket_code
    )


def email_html(notification: Notification, image_cid: str | None = None) -> str:
    event = notification.event
    safe_event = EventDetails(
        name=escape(event.name),
        date=escape(event.date),
        time=escape(event.time),
        location=escape(event.location),
        map_url=escape(event.map_url),
    )
    map_link = (
        f'<p><a href="{safe_event.map_url}">View on Google Maps</a></p>'
        if event.map_url
        else ""
    )
    image = (
        f'<img src="cid:{image_cid}" alt="Ticket" style="max-width: 100%;" />'
        if image_cid
        else ""
    )
    return EMAIL_HTML.format(
        event=safe_event,
        name=escape(notification.name),
        ticket_code=escape(notification.ticket_code),
        map_link=map_link,
        image=image,
    )
