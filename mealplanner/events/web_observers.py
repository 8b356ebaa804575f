"""Web-facing observers for planning events.

This module subscribes to the GLOBAL_EVENT_BUS for:
  - planning.pool_expanded
  - planning.filter_relaxed
  - planning.slot_skipped

and stores a lightweight in-memory ring buffer of recent events that can be
queried by the web layer (GET /api/planning/events).

Design:
  * Each event stored with an auto-increment integer id (cursor) so clients
    can request only newer events (since=<last_id_seen>).
  * A Lock guards the buffer; with several uvicorn workers each process keeps
    its own buffer.
  * MAX_EVENTS caps memory use.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, PLANNING_POOL_EXPANDED, PLANNING_FILTER_RELAXED, PLANNING_SLOT_SKIPPED
)

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300  # keep a few hundred recent events
_started = False

_PAYLOAD_FIELDS = ('tier', 'received', 'pool_size', 'level', 'remaining', 'needed', 'date', 'meal_type', 'reason')


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(),
        }
        if isinstance(payload, dict):
            for k in _PAYLOAD_FIELDS:
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in (PLANNING_POOL_EXPANDED, PLANNING_FILTER_RELAXED, PLANNING_SLOT_SKIPPED):
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True
    logger.info("Planning event observers registered")


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive).

    If since is None, returns the last N (up to MAX_EVENTS) events.
    Response includes next_cursor (largest id) so client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events']
