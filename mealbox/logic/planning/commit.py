"""Plan commit: turn enabled plan entries into schedule writes.

Invariant kept against the store: for a user and a date there is at most one
meal per slot. For each (date, slot) the occupants (planned and logged) are
deleted before the new meal is inserted. Distinct keys are written in
parallel; one entry failing never aborts the others, and nothing is rolled back.
"""
from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from threading import Lock
from typing import Dict, List, Optional, Protocol, Tuple

from mealbox.domain.Box import PlanEntry
from mealbox.domain.Dish import Dish
from mealbox.domain.ScheduledMeal import ScheduledMeal
from mealbox.events.event_helpers import publish_plan_committed, publish_commit_failed
from mealbox.utilities.config import COMMIT_WORKERS

logger = logging.getLogger(__name__)

# Striped locks keyed by (user, date, slot): a replace is never interleaved with
# another replace of the same key, even across overlapping commits
_KEY_LOCK_STRIPES = 64
_key_locks = [Lock() for _ in range(_KEY_LOCK_STRIPES)]


def _lock_for(user_id: str, day: date, slot: str) -> Lock:
    return _key_locks[hash((user_id, day, slot)) % _KEY_LOCK_STRIPES]


class ScheduleStore(Protocol):
    user_id: str

    def delete_scheduled_meal(self, day: date, slot: str) -> int: ...

    def delete_logged_meal(self, day: date, slot: str) -> int: ...

    def insert_scheduled_meal(self, day: date, slot: str, fields: dict) -> ScheduledMeal: ...


class EntryResult:
    def __init__(self, entry: PlanEntry, day: date, ok: bool, error: str = ""):
        self.entry = entry
        self.date = day
        self.ok = ok
        self.error = error

    def to_dict(self):
        return {
            "id": self.entry.id,
            "dayIndex": self.entry.day_index,
            "slot": self.entry.slot,
            "name": self.entry.name,
            "date": self.date.isoformat(),
            "ok": self.ok,
            "error": self.error,
        }


class CommitReport:
    def __init__(self, results: List[EntryResult]):
        self.results = results

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    @property
    def total(self) -> int:
        return len(self.results)

    def summary(self) -> str:
        return f"{self.succeeded} of {self.total} planned"

    def to_dict(self):
        return {
            "succeeded": self.succeeded,
            "failed": self.failed,
            "total": self.total,
            "summary": self.summary(),
            "results": [r.to_dict() for r in self.results],
        }


def target_date(start_date: date, day_index: int) -> date:
    return start_date + timedelta(days=day_index - 1)


def _fields_for(entry: PlanEntry, dishes_by_name: Dict[str, Dish]) -> dict:
    dish = dishes_by_name.get(entry.name)
    return {
        "name": entry.name,
        "calories": entry.calories,
        "cooking_time": entry.cooking_time,
        "image_url": entry.image,
        "recipe": (dish.recipe if dish else "") or "",
    }


def _write_slot(store: ScheduleStore, day: date, slot: str, entries: List[PlanEntry],
                dishes_by_name: Dict[str, Dish]) -> List[EntryResult]:
    """Replace whatever occupies (day, slot). Runs sequentially within the key."""
    results = []
    key_lock = _lock_for(getattr(store, "user_id", ""), day, slot)
    for entry in entries:
        try:
            with key_lock:
                store.delete_scheduled_meal(day, slot)
                store.delete_logged_meal(day, slot)
                store.insert_scheduled_meal(day, slot, _fields_for(entry, dishes_by_name))
            results.append(EntryResult(entry, day, True))
        except Exception as e:
            logger.exception("Failed to schedule %s on %s (%s)", entry.name, day, slot)
            publish_commit_failed(getattr(store, "user_id", ""), day, slot, entry.name, str(e))
            results.append(EntryResult(entry, day, False, str(e)))
    return results


def commit_plan(entries: List[PlanEntry], start_date: date, store: ScheduleStore,
                dishes: Optional[List[Dish]] = None, max_workers: int = COMMIT_WORKERS) -> CommitReport:
    """Write every enabled entry to the schedule starting at `start_date` (day 1)."""
    dishes_by_name = {d.name: d for d in dishes or []}

    groups: Dict[Tuple[date, str], List[PlanEntry]] = {}
    for entry in entries:
        if not entry.enabled:
            continue
        groups.setdefault((target_date(start_date, entry.day_index), entry.slot), []).append(entry)

    results: List[EntryResult] = []
    if groups:
        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
            futures = [pool.submit(_write_slot, store, day, slot, group, dishes_by_name)
                       for (day, slot), group in groups.items()]
            for future in futures:
                results.extend(future.result())

    report = CommitReport(results)
    logger.info("Plan committed from %s: %s", start_date, report.summary())
    publish_plan_committed(getattr(store, "user_id", ""), start_date, report.succeeded, report.failed)
    return report


__all__ = ["commit_plan", "CommitReport", "EntryResult", "ScheduleStore", "target_date"]
