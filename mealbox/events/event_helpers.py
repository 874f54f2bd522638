"""Event helper utilities.

Helpers for publishing plan-commit events on the global event bus.

Quick import:
    from mealbox.events.event_helpers import publish_plan_committed, publish_commit_failed
"""
from __future__ import annotations
from datetime import date

from mealbox.utilities.constants import DATE_FORMAT
from .Event_Bus import publish_event, PLAN_COMMITTED, PLAN_COMMIT_FAILED

__all__ = ['publish_plan_committed', 'publish_commit_failed', 'PLAN_COMMITTED', 'PLAN_COMMIT_FAILED']


def publish_plan_committed(user_id: str, start_date: date, succeeded: int, failed: int):
    """Publish a plan.committed event with the commit summary."""
    publish_event(PLAN_COMMITTED, {
        'user_id': user_id,
        'start_date': start_date.strftime(DATE_FORMAT),
        'succeeded': succeeded,
        'failed': failed,
        'total': succeeded + failed,
    })


def publish_commit_failed(user_id: str, day: date, slot: str, name: str, error: str):
    """Publish a plan.commit_failed event for one entry that could not be written."""
    publish_event(PLAN_COMMIT_FAILED, {
        'user_id': user_id,
        'date': day.strftime(DATE_FORMAT),
        'slot': slot,
        'name': name,
        'error': error,
    })
