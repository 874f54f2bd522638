"""Web-facing observers for plan commit events.

Subscribes to the GLOBAL_EVENT_BUS for:
  - plan.committed
  - plan.commit_failed

and keeps a small in-memory ring buffer of recent events that the web layer
can poll (since=<last_id_seen>) to surface "N of M planned" notices.

Design:
  * Each event gets an auto-increment integer id (cursor).
  * Access is guarded by a Lock; the buffer is per-process.
  * MAX_EVENTS caps memory.
"""
from __future__ import annotations
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import GLOBAL_EVENT_BUS, PLAN_COMMITTED, PLAN_COMMIT_FAILED

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(),
        }
        if isinstance(payload, dict):
            for k in ('user_id', 'start_date', 'date', 'slot', 'name', 'succeeded', 'failed', 'total', 'error'):
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    GLOBAL_EVENT_BUS.subscribe(PLAN_COMMITTED, _record)
    GLOBAL_EVENT_BUS.subscribe(PLAN_COMMIT_FAILED, _record)
    _started = True


def get_events(since: int | None = None, user_id: str | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), optionally for one user.

    next_cursor is the largest id seen so the client can poll with since=next_cursor.
    """
    with _lock:
        data = list(_events) if since is None else [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    if user_id is not None:
        data = [e for e in data if e.get('user_id') == user_id]
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events']
