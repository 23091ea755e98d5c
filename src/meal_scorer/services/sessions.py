"""Per-session meal state."""

import threading
from dataclasses import dataclass, field

from meal_scorer.domain.meals import Meal


@dataclass
class MealSessions:
    """Holds one meal per caller session, created on first use."""

    _meals: dict[str, Meal] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get(self, session_id: str) -> Meal:
        with self._lock:
            meal = self._meals.get(session_id)
            if meal is None:
                meal = Meal()
                self._meals[session_id] = meal
            return meal
