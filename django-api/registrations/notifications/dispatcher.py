"""Background delivery of confirmation messages.

The request path hands a Notification to ``NotificationDispatcher.dispatch``
and returns; delivery runs on a worker pool and never reports back to the
caller. Every failure is logged inside the worker.
"""

import logging
from collections.abc import Sequence
from concurrent.futures import Executor, Future, ThreadPoolExecutor

from registrations.notifications.channels import NotificationChannel
from registrations.notifications.messages import Notification

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Runs every configured channel for a notification on a worker pool."""

    def __init__(
        self,
        channels: Sequence[NotificationChannel],
        executor: Executor | None = None,
        max_workers: int = 4,
    ) -> None:
        self._channels = tuple(channels)
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="notify"
        )
        self._closed = False

    @property
    def channel_names(self) -> tuple[str, ...]:
        return tuple(channel.name for channel in self._channels)

    def dispatch(self, notification: Notification) -> Future | None:
        """Queue delivery of ``notification``; never raises."""
        if not self._channels:
            return None
        try:
            return self._executor.submit(self._deliver, notification)
        except RuntimeError:
            # Executor already shut down.
            logger.exception(
                "Notification not queued",
                extra={"ticket_code": notification.ticket_code},
            )
            return None

    def _deliver(self, notification: Notification) -> dict[str, bool]:
        results: dict[str, bool] = {}
        for channel in self._channels:
            try:
                results[channel.name] = channel.send(notification)
            except Exception:
                logger.exception(
                    "Notification failed",
                    extra={
                        "channel": channel.name,
                        "ticket_code": notification.ticket_code,
                    },
                )
                results[channel.name] = False
            else:
                logger.info(
                    "Notification %s",
                    "sent" if results[channel.name] else "skipped",
                    extra={
                        "channel": channel.name,
                        "ticket_code": notification.ticket_code,
                    },
                )
        return results

    def shutdown(self, wait: bool = True) -> None:
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=wait)
        for channel in self._channels:
            channel.close()
