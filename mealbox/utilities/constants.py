from typing import Final

DATE_FORMAT: Final[str] = "%d-%m-%Y"

# Fixed order of the four daily meal occasions
MEAL_SLOTS: Final[tuple[str, ...]] = ("breakfast", "lunch", "snack", "dinner")
SLOT_LABELS: Final[dict[str, str]] = {
    "breakfast": "Petit-déj",
    "lunch": "Déjeuner",
    "snack": "Dessert / Collation",
    "dinner": "Dîner",
}
DAY_LABELS: Final[tuple[str, ...]] = ("Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi", "Dimanche")

WEEKS_PER_BOX: Final[int] = 4
DAYS_PER_WEEK: Final[int] = 7
ALLOWED_DURATIONS: Final[tuple[int, ...]] = (3, 7)

# Scoring
HARD_EXCLUSION: Final[float] = -9999
EXCLUSION_THRESHOLD: Final[float] = -9000
SCORING_CALORIES_DEFAULT: Final[int] = 500
COLD_START_RANGE: Final[float] = 10.0
JITTER_RANGE: Final[float] = 6.0

# Box layout (empirical, see DESIGN.md)
WEEK_BIAS: Final[float] = 0.5
WEEK_OFFSET: Final[int] = 11
SWAP_TOP_N: Final[int] = 5

# Display defaults for missing dish data
DEFAULT_COOKING_TIME: Final[str] = "20 min"
DEFAULT_BOX_CALORIES: Final[int] = 450
PLACEHOLDER_IMAGE: Final[str] = "https://picsum.photos/seed/{name}/400/400"

SINGLE_MEAL_PROMPT: Final[str] = (
    """
    Propose un seul plat pour le repas "{slot}" adapté au profil suivant.
    Origine: {origin}. Pays: {country}. Objectif: {objective}.
    Allergies (à exclure absolument): {allergies}. Préférences: {preferences}.
    Réponds uniquement en JSON avec le format :
    """
)
SINGLE_MEAL_JSON_FORMAT: Final[str] = (
    """
{
    "name": str,
    "category": str,
    "origin": str,
    "cookingTime": str,
    "calories": int,
    "reason": str
}
    """
)
