"""Event helper utilities.

Helper functions for publishing planning events on the global event bus.

Quick import:
    from mealplanner.events.event_helpers import (
        publish_pool_expanded, publish_filter_relaxed, publish_slot_skipped
    )
"""
from __future__ import annotations
from datetime import date
from .Event_Bus import (
    publish_event,
    PLANNING_POOL_EXPANDED, PLANNING_FILTER_RELAXED, PLANNING_SLOT_SKIPPED,
)

__all__ = [
    'publish_pool_expanded', 'publish_filter_relaxed', 'publish_slot_skipped',
    'PLANNING_POOL_EXPANDED', 'PLANNING_FILTER_RELAXED', 'PLANNING_SLOT_SKIPPED',
]


def publish_pool_expanded(tier: str, received: int, pool_size: int):
    """Publish a planning.pool_expanded event (a relaxed catalog query was issued)."""
    publish_event(PLANNING_POOL_EXPANDED, {
        'tier': tier,
        'received': received,
        'pool_size': pool_size,
    })


def publish_filter_relaxed(level: str, remaining: int, needed: int):
    """Publish a planning.filter_relaxed event."""
    publish_event(PLANNING_FILTER_RELAXED, {
        'level': level,
        'remaining': remaining,
        'needed': needed,
    })


def publish_slot_skipped(day: date, meal_type: str, reason: str):
    """Publish a planning.slot_skipped event."""
    publish_event(PLANNING_SLOT_SKIPPED, {
        'date': day.isoformat(),
        'meal_type': meal_type,
        'reason': reason,
    })
