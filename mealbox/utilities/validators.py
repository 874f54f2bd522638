"""
Input validation schemas using Pydantic for the plan endpoints.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date

from mealbox.utilities.constants import MEAL_SLOTS, WEEKS_PER_BOX, DAYS_PER_WEEK, ALLOWED_DURATIONS


def _check_duration(v: int) -> int:
    """Plans run for 3 or 7 days."""
    if v not in ALLOWED_DURATIONS:
        raise ValueError(f"Duration must be one of {ALLOWED_DURATIONS}")
    return v


class PlanOpenInput(BaseModel):
    """Schema for projecting one week of the box into an editable plan."""
    user_id: str = Field(..., min_length=1)
    week: int = Field(1, ge=1, le=WEEKS_PER_BOX)
    duration: int = 7

    @field_validator('duration')
    @classmethod
    def validate_duration(cls, v):
        return _check_duration(v)


class DurationInput(BaseModel):
    """Schema for changing the plan duration (rebuilds every entry)."""
    user_id: str = Field(..., min_length=1)
    duration: int

    @field_validator('duration')
    @classmethod
    def validate_duration(cls, v):
        return _check_duration(v)


class EntryRefInput(BaseModel):
    """Schema addressing one plan entry by id and day."""
    user_id: str = Field(..., min_length=1)
    entry_id: str = Field(..., min_length=1)
    day_index: int = Field(..., ge=1, le=DAYS_PER_WEEK)


class CommitInput(BaseModel):
    """Schema for committing the enabled entries from a start date."""
    user_id: str = Field(..., min_length=1)
    start_date: Optional[date] = None

    @field_validator('start_date')
    @classmethod
    def validate_start_date(cls, v):
        """Plans start today or later."""
        if v is not None and v < date.today():
            raise ValueError('Start date cannot be in the past')
        return v


class SuggestionInput(BaseModel):
    """Schema for a single-meal suggestion request."""
    user_id: str = Field(..., min_length=1)
    slot: str = Field('lunch')

    @field_validator('slot')
    @classmethod
    def validate_slot(cls, v):
        """Slot must be one of the four daily meal occasions."""
        v = v.strip().lower()
        if v not in MEAL_SLOTS:
            raise ValueError(f"Slot must be one of {', '.join(MEAL_SLOTS)}")
        return v
