import json
import logging
from typing import List

from mealbox.domain.Dish import Dish
from mealbox.infra.paths import DISHES_FILE

logger = logging.getLogger(__name__)


def reading_from_dishes(path=None) -> List[Dish]:
    """Read the verified dish catalog from JSON with graceful error handling."""
    path = path or DISHES_FILE
    try:
        with open(path, 'r', encoding='utf-8') as f:
            dishes_data = json.load(f)
        return [Dish.from_dict(entry) for entry in dishes_data or []]
    except FileNotFoundError:
        logger.warning(f"Dishes file not found: {path}. Returning empty catalog.")
        return []
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in dishes file: {e}")
        return []
