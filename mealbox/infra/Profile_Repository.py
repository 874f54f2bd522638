"""Profile repository helpers (read-only file persistence)."""

import json
import logging
from typing import Optional

from mealbox.domain.Profile import UserProfile
from mealbox.infra.paths import PROFILES_FILE

logger = logging.getLogger(__name__)


def reading_profile(user_id: str, path=None) -> Optional[UserProfile]:
    """Return the profile stored under `user_id`, or None (cold start) when absent or unreadable."""
    path = path or PROFILES_FILE
    try:
        with open(path, 'r', encoding='utf-8') as f:
            profiles = json.load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Profiles file not found: {path}")
        return None
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in profiles file: {e}")
        return None
    data = profiles.get(user_id)
    if not data:
        return None
    data = dict(data)
    data.setdefault("id", user_id)
    return UserProfile.from_dict(data)
