from __future__ import annotations

from .clothing import decide_clothing
from .recommendation import Recommendation, RecommendationService
from .selector import select_representative_points, target_day_for
from .summary import summarise

__all__ = [
    "decide_clothing",
    "Recommendation",
    "RecommendationService",
    "select_representative_points",
    "target_day_for",
    "summarise",
]
