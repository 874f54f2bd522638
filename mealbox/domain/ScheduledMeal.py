"""ScheduledMeal entity: one persisted {date, slot, dish} ledger record (planned or logged)."""
from datetime import date, datetime
from typing import Optional

from mealbox.utilities.constants import DATE_FORMAT

PLANNED = "planned"
LOGGED = "logged"


class ScheduledMeal:
    def __init__(self, date: date, slot: str, name: str, calories: int = 0, cooking_time: str = "",
                 image_url: str = "", recipe: str = "", created_at: Optional[datetime] = None,
                 status: str = PLANNED, id: str = ""):
        self.id = id
        self.date = date
        self.slot = slot
        self.name = name
        self.calories = calories
        self.cooking_time = cooking_time
        self.image_url = image_url
        self.recipe = recipe or ""
        self.created_at = created_at or datetime.now()
        self.status = status

    def __str__(self) -> str:
        return f"{self.date.strftime(DATE_FORMAT)} {self.slot}: {self.name} [{self.status}]"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        created = d.get("created_at")
        return ScheduledMeal(
            id=d.get("id", ""),
            date=datetime.strptime(d["date"], DATE_FORMAT).date(),
            slot=d["slot"],
            name=d.get("name", ""),
            calories=d.get("calories", 0) or 0,
            cooking_time=d.get("cooking_time", ""),
            image_url=d.get("image_url", ""),
            recipe=d.get("recipe", ""),
            created_at=datetime.fromisoformat(created) if created else None,
            status=d.get("status", PLANNED),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "date": self.date.strftime(DATE_FORMAT),
            "slot": self.slot,
            "name": self.name,
            "calories": self.calories,
            "cooking_time": self.cooking_time,
            "image_url": self.image_url,
            "recipe": self.recipe,
            "created_at": self.created_at.isoformat(),
            "status": self.status,
        }
