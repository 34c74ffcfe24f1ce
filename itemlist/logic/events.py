"""Domain event constants and publisher.

Every successful mutation command publishes exactly one event. Events are
logged and kept in an in-memory buffer, numbered in publish order, so
tests and the test-support feed can read what happened since a given
point. The buffer holds at most ``EVENT_BUFFER_LIMIT`` events; older ones
are dropped as new ones arrive.
"""

from __future__ import annotations

from collections import deque
import itertools
import logging
import threading
from typing import Any, Deque, Dict, List, Optional

logger = logging.getLogger(__name__)

ITEMS_UPDATED = "items.updated"
ITEM_TOGGLED = "item.toggled"
ITEM_REORDERED = "item.reordered"

EVENT_BUFFER_LIMIT = 1000

# In-memory buffer for domain events (test-only visibility)
EVENT_BUFFER: Deque[Dict[str, Any]] = deque(maxlen=EVENT_BUFFER_LIMIT)
_SEQ = itertools.count(1)
_BUFFER_LOCK = threading.Lock()


def publish(event_type: str, payload: Dict[str, Any]) -> None:
    """Log the event and append it to the buffer with the next sequence number."""
    with _BUFFER_LOCK:
        seq = next(_SEQ)
        EVENT_BUFFER.append({"seq": seq, "type": event_type, "payload": payload})
    logger.info("event_publish seq=%s type=%s payload=%s", seq, event_type, payload)


def get_buffered_events(clear: bool = True, since: Optional[int] = None) -> List[Dict[str, Any]]:
    """Return buffered events, optionally only those after ``since``; optionally clear."""
    with _BUFFER_LOCK:
        events = [e for e in EVENT_BUFFER if since is None or e["seq"] > since]
        if clear:
            EVENT_BUFFER.clear()
    return events


__all__ = [
    "ITEMS_UPDATED",
    "ITEM_TOGGLED",
    "ITEM_REORDERED",
    "EVENT_BUFFER_LIMIT",
    "publish",
    "get_buffered_events",
    "EVENT_BUFFER",
]
