"""Delivery channels for confirmation messages.

Each channel sends one message and reports whether the vendor accepted it.
Channels raise on failure; the dispatcher turns exceptions into log lines.
"""

import logging
from abc import ABC, abstractmethod
from email.mime.image import MIMEImage
from pathlib import Path

import httpx
from django.core.mail import EmailMultiAlternatives

from registrations.notifications import messages
from registrations.notifications.messages import Notification

logger = logging.getLogger(__name__)

BREVO_SMS_URL = "https://api.brevo.com/v3/transactionalSMS/sms"
WHATSAPP_API_URL = "https://graph.facebook.com/v19.0/{phone_number_id}/messages"
TICKET_IMAGE_CID = "ticketImage"


class NotificationChannel(ABC):
    """A way of reaching a registrant."""

    name: str = ""

    @abstractmethod
    def send(self, notification: Notification) -> bool:
        """Deliver ``notification``.

        Returns False when the channel does not apply to this registrant.
        Raises on delivery failure.
        """
        ...

    def close(self) -> None:
        """Release held resources."""


class EmailChannel(NotificationChannel):
    """Email through Django's configured mail backend."""

    name = "email"

    def __init__(
        self,
        from_email: str | None = None,
        ticket_image: str | Path | None = None,
    ) -> None:
        self._from_email = from_email
        self._ticket_image = Path(ticket_image) if ticket_image else None

    def send(self, notification: Notification) -> bool:
        if not notification.email:
            return False

        image_cid = None
        image = None
        if self._ticket_image is not None and self._ticket_image.is_file():
            image = MIMEImage(self._ticket_image.read_bytes())
            image.add_header("Content-ID", f"<{TICKET_IMAGE_CID}>")
            image.add_header(
                "Content-Disposition", "inline", filename=self._ticket_image.name
            )
            image_cid = TICKET_IMAGE_CID

        message = EmailMultiAlternatives(
            subject=messages.email_subject(notification),
            body=messages.text_body(notification),
            from_email=self._from_email,
            to=[notification.email],
        )
        message.attach_alternative(
            messages.email_html(notification, image_cid=image_cid), "text/html"
        )
        if image is not None:
            message.mixed_subtype = "related"
            message.attach(image)

        # SMTP connect/read limits come from settings.EMAIL_TIMEOUT.
        return bool(message.send())


class HttpChannel(NotificationChannel):
    """Base for vendors reached over HTTP with a bounded timeout."""

    def __init__(self, timeout: float, client: httpx.Client | None = None) -> None:
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(timeout, connect=min(timeout, 5.0))
        )

    def close(self) -> None:
        self._client.close()


class SmsChannel(HttpChannel):
    """Transactional SMS through the Brevo API."""

    name = "sms"

    def __init__(
        self,
        api_key: str,
        sender: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
        url: str = BREVO_SMS_URL,
    ) -> None:
        super().__init__(timeout, client)
        self._api_key = api_key
        self._sender = sender
        self._url = url

    def send(self, notification: Notification) -> bool:
        response = self._client.post(
            self._url,
            json={
                "sender": self._sender,
                "recipient": notification.phone,
                "content": messages.text_body(notification),
                "type": "transactional",
            },
            headers={
                "accept": "application/json",
                "api-key": self._api_key,
            },
        )
        response.raise_for_status()
        return True


class WhatsAppChannel(HttpChannel):
    """Text message through the WhatsApp Cloud API."""

    name = "whatsapp"

    def __init__(
        self,
        token: str,
        phone_number_id: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
        url: str = WHATSAPP_API_URL,
    ) -> None:
        super().__init__(timeout, client)
        self._token = token
        self._url = url.format(phone_number_id=phone_number_id)

    def send(self, notification: Notification) -> bool:
        response = self._client.post(
            self._url,
            json={
                "messaging_product": "whatsapp",
                "to": notification.phone.lstrip("+"),
                "type": "text",
                "text": {"body": messages.text_body(notification)},
            },
            headers={"Authorization": f"Bearer {self._token}"},
        )
        response.raise_for_status()
        return True


def build_channels(config: dict) -> list[NotificationChannel]:
    """Build the channels named in ``config["CHANNELS"]``.

    Channels without credentials are skipped with a warning.
    """
    timeout = float(config.get("TIMEOUT", 10))
    channels: list[NotificationChannel] = []
    for name in config.get("CHANNELS", ()):
        if name == EmailChannel.name:
            channels.append(
                EmailChannel(
                    from_email=config.get("EMAIL_FROM") or None,
                    ticket_image=config.get("TICKET_IMAGE") or None,
                )
            )
        elif name == SmsChannel.name:
            if not (config.get("BREVO_API_KEY") and config.get("BREVO_SMS_SENDER")):
                logger.warning("SMS channel skipped: missing Brevo credentials")
                continue
            channels.append(
                SmsChannel(
                    api_key=config["BREVO_API_KEY"],
                    sender=config["BREVO_SMS_SENDER"],
                    timeout=timeout,
                )
            )
        elif name == WhatsAppChannel.name:
            if not (config.get("WHATSAPP_TOKEN") and config.get("WHATSAPP_PHONE_NUMBER_ID")):
                logger.warning("WhatsApp channel skipped: missing credentials")
                continue
            channels.append(
                WhatsAppChannel(
                    token=config["WHATSAPP_TOKEN"],
                    phone_number_id=config["WHATSAPP_PHONE_NUMBER_ID"],
                    timeout=timeout,
                )
            )
        else:
            logger.warning("Unknown notification channel %r ignored", name)
    return channels
