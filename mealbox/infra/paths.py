from mealbox.utilities.config import DATA_DIR

# Centralized paths for data files (single source of truth)
DISHES_FILE = DATA_DIR / 'dishes.json'
PROFILES_FILE = DATA_DIR / 'profiles.json'
SCHEDULE_FILE = DATA_DIR / 'schedule.json'

__all__ = ['DATA_DIR', 'DISHES_FILE', 'PROFILES_FILE', 'SCHEDULE_FILE']
