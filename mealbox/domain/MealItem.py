"""Tagged meal item: {kind, payload} wrapper for heterogeneous meal records.

Consumers branch on ``kind`` instead of probing payload fields:
  - "box"        -> payload is a BoxMeal / PlanEntry
  - "scheduled"  -> payload is a ScheduledMeal
  - "suggestion" -> payload is a dict returned by the suggestion service
"""
from typing import Any

BOX = "box"
SCHEDULED = "scheduled"
SUGGESTION = "suggestion"
KINDS = (BOX, SCHEDULED, SUGGESTION)


class MealItem:
    def __init__(self, kind: str, payload: Any):
        if kind not in KINDS:
            raise ValueError(f"Unknown meal item kind: {kind}")
        self.kind = kind
        self.payload = payload

    def __repr__(self) -> str:
        return f"MealItem({self.kind}, {self.payload!r})"

    @classmethod
    def box(cls, meal):
        return cls(BOX, meal)

    @classmethod
    def scheduled(cls, meal):
        return cls(SCHEDULED, meal)

    @classmethod
    def suggestion(cls, data: dict):
        return cls(SUGGESTION, dict(data))

    @property
    def name(self) -> str:
        if self.kind == SUGGESTION:
            return self.payload.get("name", "")
        return self.payload.name

    def to_dict(self):
        payload = self.payload if self.kind == SUGGESTION else self.payload.to_dict()
        return {"kind": self.kind, "payload": payload}
