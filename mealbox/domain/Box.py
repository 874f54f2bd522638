"""Box domain entities: meals laid out per week / day / slot, and the editable plan entries."""
from typing import List, Optional


class BoxMeal:
    """One dish placed in one (week, day, slot) cell. Values are replaced, never mutated."""

    def __init__(self, id: str, name: str, cooking_time: str, calories: int, image: str,
                 category: str, slot: str, match_reason: str = ""):
        self.id = id
        self.name = name
        self.cooking_time = cooking_time
        self.calories = calories
        self.image = image
        self.category = category
        self.slot = slot
        self.match_reason = match_reason

    def __str__(self) -> str:
        return f"{self.id}: {self.name} ({self.slot}, {self.calories} kcal)"

    __repr__ = __str__

    @staticmethod
    def make_id(week: int, day: int, slot: str) -> str:
        return f"w{week}d{day}t{slot}"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "cookingTime": self.cooking_time,
            "calories": self.calories,
            "image": self.image,
            "category": self.category,
            "slot": self.slot,
            "matchReason": self.match_reason,
        }


class DayPlan:
    def __init__(self, day: int, label: str, meals: List[BoxMeal]):
        self.day = day
        self.label = label
        self.meals = meals

    def total_calories(self) -> int:
        return sum(m.calories for m in self.meals)

    def to_dict(self):
        return {"day": self.day, "label": self.label, "meals": [m.to_dict() for m in self.meals]}


class WeeklyBox:
    def __init__(self, week: int, title: str, theme: str, description: str, color: str, days: List[DayPlan]):
        self.week = week
        self.title = title
        self.theme = theme
        self.description = description
        self.color = color
        self.days = days

    def find_day(self, day: int) -> Optional[DayPlan]:
        return next((d for d in self.days if d.day == day), None)

    def meal_count(self) -> int:
        return sum(len(d.meals) for d in self.days)

    def to_dict(self):
        return {
            "week": self.week,
            "title": self.title,
            "theme": self.theme,
            "description": self.description,
            "color": self.color,
            "days": [d.to_dict() for d in self.days],
        }


class PlanEntry(BoxMeal):
    """A BoxMeal projected into an editable plan: tagged with its day and an enabled flag."""

    def __init__(self, id: str, name: str, cooking_time: str, calories: int, image: str,
                 category: str, slot: str, match_reason: str = "",
                 day_index: int = 1, day_label: str = "", enabled: bool = True):
        super().__init__(id, name, cooking_time, calories, image, category, slot, match_reason)
        self.day_index = day_index
        self.day_label = day_label
        self.enabled = enabled

    @staticmethod
    def from_box_meal(meal: BoxMeal, day_index: int, day_label: str) -> "PlanEntry":
        return PlanEntry(meal.id, meal.name, meal.cooking_time, meal.calories, meal.image,
                         meal.category, meal.slot, meal.match_reason,
                         day_index=day_index, day_label=day_label, enabled=True)

    @property
    def key(self):
        return (self.day_index, self.slot)

    def with_dish(self, name: str, cooking_time: str, calories: int, image: str,
                  category: str, match_reason: str) -> "PlanEntry":
        """Return a new entry under the same identity holding another dish."""
        return PlanEntry(self.id, name, cooking_time, calories, image, category, self.slot, match_reason,
                         day_index=self.day_index, day_label=self.day_label, enabled=self.enabled)

    def toggled(self) -> "PlanEntry":
        return PlanEntry(self.id, self.name, self.cooking_time, self.calories, self.image,
                         self.category, self.slot, self.match_reason,
                         day_index=self.day_index, day_label=self.day_label, enabled=not self.enabled)

    def to_dict(self):
        d = super().to_dict()
        d.update({"dayIndex": self.day_index, "dayLabel": self.day_label, "enabled": self.enabled})
        return d
