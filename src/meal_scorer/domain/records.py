"""Nutrient record value type."""

import math
from dataclasses import dataclass

KJ_PER_KCAL = 4.184

NUTRIENT_FIELDS = (
    "calories",
    "protein_g",
    "fat_g",
    "carbs_g",
    "sugar_g",
    "fiber_g",
    "sat_fat_g",
    "sodium_mg",
)


@dataclass(frozen=True)
class NutrientRecord:
    """A food item with nutrients per 100 g, or per serving once scaled."""

    name: str
    calories: float = 0.0
    protein_g: float = 0.0
    fat_g: float = 0.0
    carbs_g: float = 0.0
    sugar_g: float = 0.0
    fiber_g: float = 0.0
    sat_fat_g: float = 0.0
    sodium_mg: float = 0.0
    serving_g: float | None = None

    def __post_init__(self) -> None:
        for field_name in NUTRIENT_FIELDS:
            value = getattr(self, field_name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(
                    f"{field_name} must be finite and non-negative, got {value!r}"
                )

    @property
    def key(self) -> str:
        """Lowercased name used for indexing and comparison."""
        return self.name.lower()

    @property
    def energy_kj(self) -> float:
        return self.calories * KJ_PER_KCAL

    def nutrients(self) -> dict[str, float]:
        """Return the eight nutrient values keyed by field name."""
        return {field_name: getattr(self, field_name) for field_name in NUTRIENT_FIELDS}
