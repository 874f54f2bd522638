"""Simple Event Bus / Observer implementation for plan commit notifications.

Event names used so far:
  plan.committed     -> payload {"user_id": str, "start_date": "dd-mm-yyyy", "succeeded": int, "failed": int, "total": int}
  plan.commit_failed -> payload {"user_id": str, "date": "dd-mm-yyyy", "slot": str, "name": str, "error": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PLAN_COMMITTED = "plan.committed"
PLAN_COMMIT_FAILED = "plan.commit_failed"


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
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:  # a broken subscriber must not break the publisher
				logger.exception("Error delivering %s to %s", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def publish_event(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus (sugar function)."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = ['EventBus', 'GLOBAL_EVENT_BUS', 'publish_event', 'PLAN_COMMITTED', 'PLAN_COMMIT_FAILED']
