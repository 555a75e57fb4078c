"""
In-process change notifications.

Routes publish after a successful insert; admin feed connections subscribe
and forward events to their websocket.
"""

from typing import Any, Callable, Iterable

from app.helpers.logger import get_logger

logger = get_logger()

INSERT = "INSERT"

Handler = Callable[[dict], Any]


class Subscription:
    def __init__(self, feed: "ChangeFeed", table: str, event: str, handler: Handler):
        self._feed = feed
        self.table = table
        self.event = event
        self.handler = handler
        self.active = True

    def cancel(self):
        if self.active:
            self.active = False
            self._feed._remove(self)


class ChangeFeed:
    def __init__(self):
        self._subscriptions: list[Subscription] = []

    def subscribe(self, table: str, event: str, handler: Handler) -> Subscription:
        subscription = Subscription(self, table, event, handler)
        self._subscriptions.append(subscription)
        logger.debug(f"Subscribed to {event} on {table} ({len(self._subscriptions)} active)")
        return subscription

    def _remove(self, subscription: Subscription):
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def publish(self, table: str, event: str, record: dict) -> int:
        """Deliver a record to every matching handler. Returns the delivery count."""
        delivered = 0
        for subscription in list(self._subscriptions):
            if subscription.table != table or subscription.event != event:
                continue
            try:
                subscription.handler(record)
                delivered += 1
            except Exception as e:
                logger.error(f"Change feed handler failed for {event} on {table}: {e}")
        return delivered

    def __len__(self):
        return len(self._subscriptions)


def merge_incoming(existing: Iterable[dict], incoming: Iterable[dict]) -> list[dict]:
    """
    Prepend newly pushed records to an already loaded list.
    Records already present (by id) are skipped; nothing loaded is dropped.
    """
    existing = list(existing)
    seen = {str(record["id"]) for record in existing}
    fresh = []
    for record in incoming:
        record_id = str(record["id"])
        if record_id in seen:
            continue
        seen.add(record_id)
        fresh.append(record)
    # newest event first
    return list(reversed(fresh)) + existing


feed = ChangeFeed()


def get_change_feed() -> ChangeFeed:
    return feed
