"""User profile entity plus the externally learned virtual profile (affinity weights)."""
from typing import Dict, Optional


class VirtualProfile:
    """Per-origin / per-category affinity weights maintained by the interaction tracker."""

    def __init__(self, origin_scores: Optional[Dict[str, float]] = None,
                 category_scores: Optional[Dict[str, float]] = None,
                 total_interactions: int = 0):
        self.origin_scores = dict(origin_scores or {})
        self.category_scores = dict(category_scores or {})
        self.total_interactions = total_interactions

    def origin_score(self, origin: str) -> float:
        return float(self.origin_scores.get(origin, 0) or 0)

    def category_score(self, category: str) -> float:
        return float(self.category_scores.get(category, 0) or 0)

    @staticmethod
    def from_dict(data):
        d = dict(data or {})
        return VirtualProfile(
            origin_scores=d.get("originScores", d.get("origin_scores")),
            category_scores=d.get("categoryScores", d.get("category_scores")),
            total_interactions=int(d.get("totalInteractions", d.get("total_interactions", 0)) or 0),
        )

    def to_dict(self):
        return {
            "originScores": self.origin_scores,
            "categoryScores": self.category_scores,
            "totalInteractions": self.total_interactions,
        }


class UserProfile:
    def __init__(self, user_id: str = "", origin: str = "", country: str = "", main_objective: str = "",
                 allergies: str = "", preferences: str = "",
                 virtual_profile: Optional[VirtualProfile] = None):
        self.user_id = user_id
        self.origin = origin or ""
        self.country = country or ""
        self.main_objective = main_objective or ""
        self.allergies = allergies or ""
        self.preferences = preferences or ""
        self.virtual_profile = virtual_profile

    def __str__(self) -> str:
        return f"UserProfile({self.user_id}: origin={self.origin!r}, objective={self.main_objective!r})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data or {})
        vp = d.get("virtualProfile", d.get("virtual_profile"))
        return UserProfile(
            user_id=str(d.get("id", d.get("user_id", ""))),
            origin=d.get("origin", ""),
            country=d.get("country", ""),
            main_objective=d.get("mainObjective", d.get("main_objective", "")),
            allergies=d.get("allergies", ""),
            preferences=d.get("preferences", ""),
            virtual_profile=VirtualProfile.from_dict(vp) if vp else None,
        )

    def to_dict(self):
        return {
            "id": self.user_id,
            "origin": self.origin,
            "country": self.country,
            "mainObjective": self.main_objective,
            "allergies": self.allergies,
            "preferences": self.preferences,
            "virtualProfile": self.virtual_profile.to_dict() if self.virtual_profile else None,
        }
