"""Per-user schedule ledger persisted in a JSON file.

File layout: { "<user_id>": [ {date, slot, name, ..., status}, ... ], ... }
Planned and logged meals share one list and differ by `status`.
"""
import json
import os
import shutil
import tempfile
from datetime import date
from threading import Lock
from typing import List, Optional
from uuid import uuid4

from mealbox.domain.ScheduledMeal import ScheduledMeal, PLANNED, LOGGED
from mealbox.infra.paths import SCHEDULE_FILE
from mealbox.utilities.constants import DATE_FORMAT, MEAL_SLOTS

# One lock for every repository instance: all users share the file
_file_lock = Lock()


class ScheduleRepository:
    def __init__(self, user_id: str, path=None):
        self.user_id = user_id
        self.path = str(path or SCHEDULE_FILE)

    # --- file helpers (call with _file_lock held) ---
    def _load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f) or {}
        except json.JSONDecodeError:
            return {}

    def _atomic_write(self, store: dict):
        directory = os.path.dirname(self.path) or "."
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".schedule_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(store, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def _delete(self, day: date, slot: str, status: str) -> int:
        key = day.strftime(DATE_FORMAT)
        with _file_lock:
            store = self._load()
            records = store.get(self.user_id, [])
            kept = [r for r in records
                    if not (r.get("date") == key and r.get("slot") == slot and r.get("status", PLANNED) == status)]
            removed = len(records) - len(kept)
            if removed:
                store[self.user_id] = kept
                self._atomic_write(store)
        return removed

    # --- store operations ---
    def delete_scheduled_meal(self, day: date, slot: str) -> int:
        """Remove planned meals occupying (day, slot). Returns the number removed."""
        return self._delete(day, slot, PLANNED)

    def delete_logged_meal(self, day: date, slot: str) -> int:
        """Remove already-logged meals occupying (day, slot). Returns the number removed."""
        return self._delete(day, slot, LOGGED)

    def insert_scheduled_meal(self, day: date, slot: str, fields: dict, status: str = PLANNED) -> ScheduledMeal:
        meal = ScheduledMeal(
            id=uuid4().hex,
            date=day,
            slot=slot,
            name=fields.get("name", ""),
            calories=fields.get("calories", 0),
            cooking_time=fields.get("cooking_time", ""),
            image_url=fields.get("image_url", ""),
            recipe=fields.get("recipe", ""),
            status=status,
        )
        with _file_lock:
            store = self._load()
            store.setdefault(self.user_id, []).append(meal.to_dict())
            self._atomic_write(store)
        return meal

    def list_meals(self, start: Optional[date] = None, end: Optional[date] = None) -> List[ScheduledMeal]:
        """Meals of this user between start and end (inclusive), sorted by date then slot order."""
        with _file_lock:
            records = list(self._load().get(self.user_id, []))
        meals = [ScheduledMeal.from_dict(r) for r in records]
        if start is not None:
            meals = [m for m in meals if m.date >= start]
        if end is not None:
            meals = [m for m in meals if m.date <= end]
        order = {s: i for i, s in enumerate(MEAL_SLOTS)}
        meals.sort(key=lambda m: (m.date, order.get(m.slot, len(order))))
        return meals

    def meals_at(self, day: date, slot: str) -> List[ScheduledMeal]:
        return [m for m in self.list_meals(day, day) if m.slot == slot]
