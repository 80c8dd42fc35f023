"""
In-Process Benachrichtigung über geänderte abgeleitete Zustände.

Abhängige Komponenten (z.B. Caches von Dashboard-Ansichten) abonnieren ein
Thema und werden nach einem erfolgreichen Commit benachrichtigt.
"""
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, NamedTuple

logger = logging.getLogger(__name__)

EVENT_PAYMENT_CHANGED = "EVENT_PAYMENT_CHANGED"


class Notification(NamedTuple):
    topic: str
    ts: str
    payload: Dict[str, Any]


Handler = Callable[[Notification], None]


class ChangeNotifier:
    """Einfacher Publish/Subscribe-Bus für Themen wie EVENT_PAYMENT_CHANGED"""

    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, topic: str, handler: Handler) -> None:
        handlers = self._subscribers.setdefault(topic, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, topic: str, handler: Handler) -> None:
        handlers = self._subscribers.get(topic, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, topic: str, payload: Dict[str, Any]) -> int:
        """
        Benachrichtigt alle Abonnenten eines Themas.

        Fehler einzelner Handler werden geloggt und brechen die
        auslösende Operation nicht ab.

        Returns:
            Anzahl der erfolgreich benachrichtigten Handler
        """
        notification = Notification(topic=topic, ts=datetime.now().isoformat(), payload=payload)
        delivered = 0
        for handler in list(self._subscribers.get(topic, [])):
            try:
                handler(notification)
                delivered += 1
            except Exception:
                logger.exception(f"Handler {handler!r} failed for {topic}")
        return delivered


def log_payment_change(notification: Notification) -> None:
    payload = notification.payload
    logger.info(
        f"Payment status of event {payload.get('event_id')} changed: "
        f"{payload.get('old_status')} -> {payload.get('new_status')}"
    )


notifier = ChangeNotifier()
notifier.subscribe(EVENT_PAYMENT_CHANGED, log_payment_change)
