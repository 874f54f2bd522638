"""Plan session: one user's assembled boxes plus the editable plan being customized.

Lifecycle: projected -> (swapped | toggled)* -> committed | discarded.
The boxes are assembled once when the session is created and reused for every
render; scores carry jitter, so re-assembling would reshuffle the grid.
"""
from __future__ import annotations
import logging
from datetime import date
from threading import Lock
from typing import List, Optional

from mealbox.domain.Box import PlanEntry, WeeklyBox
from mealbox.domain.Dish import Dish
from mealbox.domain.Profile import UserProfile
from mealbox.logic.box.assembler import build_boxes, find_week
from mealbox.logic.box.projection import build_plan_entries
from mealbox.logic.box.swap import swap_entry
from mealbox.logic.planning.commit import commit_plan, CommitReport, ScheduleStore
from mealbox.logic.scoring.random_source import RandomSource, DEFAULT_RANDOM

logger = logging.getLogger(__name__)

EMPTY = "empty"
PROJECTED = "projected"
COMMITTED = "committed"
DISCARDED = "discarded"


class SessionClosedError(Exception):
    """Raised when editing a session that was already committed or discarded."""


class EntryNotFoundError(LookupError):
    pass


class PlanSession:
    def __init__(self, dishes: List[Dish], profile: Optional[UserProfile], rng: RandomSource = DEFAULT_RANDOM):
        self.dishes = list(dishes)
        self.profile = profile
        self.rng = rng
        self.boxes: List[WeeklyBox] = build_boxes(self.dishes, profile, rng)
        self.week: int = 1
        self.duration: int = 7
        self.entries: List[PlanEntry] = []
        self.state = EMPTY
        self._lock = Lock()

    def _ensure_open(self):
        if self.state in (COMMITTED, DISCARDED):
            raise SessionClosedError(f"Plan session is {self.state}")

    def _index_of(self, entry_id: str, day_index: int) -> int:
        for i, e in enumerate(self.entries):
            if e.id == entry_id and e.day_index == day_index:
                return i
        raise EntryNotFoundError(f"No plan entry {entry_id} on day {day_index}")

    @property
    def current_box(self) -> Optional[WeeklyBox]:
        return find_week(self.boxes, self.week)

    def open(self, week: int, duration: int) -> List[PlanEntry]:
        """Project the chosen week; reopening a closed session starts a fresh plan."""
        with self._lock:
            self.week = week
            self.duration = duration
            self.entries = build_plan_entries(self.current_box, duration)
            self.state = PROJECTED
            return self.entries

    def change_duration(self, duration: int) -> List[PlanEntry]:
        """Rebuild every entry for the new duration; projects the session if it was never opened."""
        with self._lock:
            self._ensure_open()
            self.duration = duration
            self.entries = build_plan_entries(self.current_box, duration)
            self.state = PROJECTED
            return self.entries

    def toggle(self, entry_id: str, day_index: int) -> PlanEntry:
        with self._lock:
            self._ensure_open()
            i = self._index_of(entry_id, day_index)
            self.entries[i] = self.entries[i].toggled()
            return self.entries[i]

    def swap(self, entry_id: str, day_index: int) -> PlanEntry:
        with self._lock:
            self._ensure_open()
            i = self._index_of(entry_id, day_index)
            self.entries[i] = swap_entry(self.entries[i], self.dishes, self.profile, self.rng)
            return self.entries[i]

    def commit(self, store: ScheduleStore, start_date: date) -> CommitReport:
        """Write the enabled entries once; a second or concurrent commit raises SessionClosedError."""
        with self._lock:
            self._ensure_open()
            report = commit_plan(self.entries, start_date, store, dishes=self.dishes)
            self.state = COMMITTED
            return report

    def discard(self):
        with self._lock:
            self.entries = []
            self.state = DISCARDED

    def to_dict(self):
        return {
            "week": self.week,
            "duration": self.duration,
            "state": self.state,
            "entries": [e.to_dict() for e in self.entries],
        }
