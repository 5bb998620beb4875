"""Per-run cache of master-event recurrence lines."""

import asyncio
import logging

logger = logging.getLogger(__name__)


class RecurrenceRuleCache:
    """
    Memoizes recurrence lookups by master event id.

    A successful fetch is cached even when the master event has no
    recurrence lines. A failed fetch returns [] and is NOT cached, so the
    next lookup for that id retries.

    Concurrent lookups for the same id share one in-flight fetch.
    """

    def __init__(self, gateway):
        self.gateway = gateway
        self._rules: dict[str, list[str]] = {}
        self._in_flight: dict[str, asyncio.Task] = {}
        self.fetch_count = 0

    def __contains__(self, event_id: str) -> bool:
        return event_id in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    async def resolve(self, event_id: str) -> list[str]:
        """Return the recurrence lines of the master event event_id."""
        if event_id in self._rules:
            return self._rules[event_id]

        task = self._in_flight.get(event_id)
        if task is None:
            task = asyncio.ensure_future(self._fetch(event_id))
            self._in_flight[event_id] = task
        return await asyncio.shield(task)

    async def _fetch(self, event_id: str) -> list[str]:
        self.fetch_count += 1
        try:
            event = await self.gateway.fetch_event(event_id)
        except Exception as e:
            logger.warning(f"Failed to fetch recurrence rules for {event_id}: {e}")
            return []
        finally:
            self._in_flight.pop(event_id, None)

        rules = list(event.get("recurrence") or [])
        self._rules[event_id] = rules
        return rules
