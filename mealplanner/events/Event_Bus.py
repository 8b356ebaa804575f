"""Simple Event Bus / Observer implementation for planning notifications.

Event names used so far:
  planning.pool_expanded -> payload {"tier": str, "received": int, "pool_size": int}
  planning.filter_relaxed -> payload {"level": str, "remaining": int, "needed": int}
  planning.slot_skipped -> payload {"date": str, "meal_type": str, "reason": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PLANNING_POOL_EXPANDED = "planning.pool_expanded"
PLANNING_FILTER_RELAXED = "planning.filter_relaxed"
PLANNING_SLOT_SKIPPED = "planning.slot_skipped"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		# Subscriber failures are logged, never raised to the publisher
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def publish_event(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus (sugar function)."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish_event',
	'PLANNING_POOL_EXPANDED', 'PLANNING_FILTER_RELAXED', 'PLANNING_SLOT_SKIPPED'
]
