import re
import json
import logging
from json import JSONDecodeError
from typing import Optional
from openai import OpenAI
from fastapi import APIRouter, HTTPException

from mealbox.domain.Dish import Dish
from mealbox.domain.MealItem import MealItem
from mealbox.domain.Profile import UserProfile
from mealbox.infra.Profile_Repository import reading_profile
from mealbox.logic.scoring.dish_scoring import is_blocked
from mealbox.logic.scoring.match_reason import match_reason
from mealbox.utilities.config import OPENAI_API_KEY, OPENAI_MODEL
from mealbox.utilities.constants import SINGLE_MEAL_PROMPT, SINGLE_MEAL_JSON_FORMAT, SLOT_LABELS
from mealbox.utilities.validators import SuggestionInput

logger = logging.getLogger(__name__)


# === Helper: Get OpenAI Client ===
def _get_openai_client():
    """Return an OpenAI client if OPENAI_API_KEY is set, otherwise None."""
    if not OPENAI_API_KEY:
        return None
    return OpenAI(api_key=OPENAI_API_KEY)


def build_prompt(profile: Optional[UserProfile], slot: str) -> str:
    p = profile or UserProfile()
    return SINGLE_MEAL_PROMPT.format(
        slot=SLOT_LABELS.get(slot, slot),
        origin=p.origin or "-",
        country=p.country or "-",
        objective=p.main_objective or "-",
        allergies=p.allergies or "aucune",
        preferences=p.preferences or "-",
    ) + SINGLE_MEAL_JSON_FORMAT


# === Text Cleaning Helpers ===
def _strip_code_fences(text: str) -> str:
    """Remove common markdown code fences and leading/trailing whitespace."""
    text = re.sub(r"```(?:json)?\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text)
    return text.strip()


def _remove_trailing_commas(text: str) -> str:
    """Remove common trailing commas in JSON-like text to help json.loads succeed."""
    return re.sub(r",\s*(\}|\])", r"\1", text)


def parse_suggestion(raw: str) -> Optional[dict]:
    """Decode the model output into a suggestion dict, or None when it is not usable JSON."""
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        data = json.loads(_remove_trailing_commas(_strip_code_fences(raw)))
    except JSONDecodeError:
        match = re.search(r"\{.*\}", raw, flags=re.S)
        if not match:
            return None
        try:
            data = json.loads(_remove_trailing_commas(match.group(0)))
        except JSONDecodeError:
            return None
    if not isinstance(data, dict) or not data.get("name"):
        return None
    return data


def suggest_single_meal(profile: Optional[UserProfile], slot: str, client=None) -> Optional[MealItem]:
    """Ask the generative service for one meal; returns a tagged suggestion item or None.

    Suggestions hitting an allergy of the profile are dropped, like hard-excluded catalog dishes.
    """
    client = client or _get_openai_client()
    if client is None:
        logger.warning("OPENAI_API_KEY not set, cannot suggest a meal.")
        return None

    response = client.responses.create(model=OPENAI_MODEL, input=build_prompt(profile, slot))
    data = parse_suggestion(response.output_text)
    if data is None:
        logger.warning("AI output is not a valid meal suggestion")
        return None

    dish = Dish.from_dict(data)
    if is_blocked(dish, profile):
        logger.info("Dropping suggestion %s: matches an allergy", dish.name)
        return None

    data["slot"] = slot
    data.setdefault("reason", match_reason(dish, profile))
    return MealItem.suggestion(data)


# === FastAPI Endpoint ===
router = APIRouter()


@router.post("/api/suggest/meal")
def suggest_meal(payload: SuggestionInput):
    if _get_openai_client() is None:
        raise HTTPException(status_code=503, detail="Suggestion service is not configured")
    profile = reading_profile(payload.user_id)
    try:
        item = suggest_single_meal(profile, payload.slot)
    except Exception as e:
        logger.exception("Suggestion service call failed")
        raise HTTPException(status_code=503, detail=str(e))
    if item is None:
        raise HTTPException(status_code=502, detail="AI did not return a usable suggestion")
    return item.to_dict()
