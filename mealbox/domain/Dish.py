"""Dish domain entity: a verified catalog record (name, category, origin, calories, image, recipe)."""
from typing import Optional


class Dish:
    def __init__(self, id: str = "", name: str = "", category: str = "", origin: str = "",
                 cooking_time: str = "", calories: Optional[int] = None, image_url: str = "",
                 recipe: Optional[str] = None):
        self.id = id
        self.name = name or ""
        self.category = category or ""
        self.origin = origin or ""
        self.cooking_time = cooking_time or ""
        self.calories = calories
        self.image_url = image_url or ""
        self.recipe = recipe

    def __str__(self) -> str:
        return f"{self.name} ({self.category}, {self.origin}) - {self.calories or '?'} kcal"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data or {})
        calories = d.get("calories")
        try:
            calories = int(calories) if calories not in (None, "") else None
        except (TypeError, ValueError):
            calories = None
        return Dish(
            id=str(d.get("id", "")),
            name=d.get("name", ""),
            category=d.get("category", ""),
            origin=d.get("origin", ""),
            # Catalog exports use camelCase keys
            cooking_time=d.get("cookingTime", d.get("cooking_time", "")),
            calories=calories,
            image_url=d.get("imageUrl", d.get("image_url", "")),
            recipe=d.get("recipe"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "origin": self.origin,
            "cookingTime": self.cooking_time,
            "calories": self.calories,
            "imageUrl": self.image_url,
            "recipe": self.recipe,
        }
