"""Nutrition scoring from fixed breakpoint tables.

Each nutrient is classified against an ascending ladder of thresholds: the
bucket is the number of thresholds strictly below the value, so a value equal
to a threshold falls into the lower bucket. A value above the last threshold
gets the maximum bucket (the ladder length).
"""

from bisect import bisect_left

from meal_scorer.domain.records import NutrientRecord

MIN_SCORE = 1
MAX_SCORE = 10

# Negative components, 0..10 points each.
ENERGY_KJ_LADDER = (335, 670, 1005, 1340, 1675, 2010, 2345, 2680, 3015, 3350)
SAT_FAT_G_LADDER = (1, 2, 3, 4, 5, 6, 7, 8, 9, 10)
SUGAR_G_LADDER = (4.5, 9, 13.5, 18, 22.5, 27, 31, 36, 40, 45)
SODIUM_MG_LADDER = (90, 180, 270, 360, 450, 540, 630, 720, 810, 900)

# Positive components, 0..5 points each.
PROTEIN_G_LADDER = (1.6, 3.2, 4.8, 6.4, 8.0)
FIBER_G_LADDER = (0.9, 1.9, 2.8, 3.7, 4.7)

_FEEDBACK = (
    (9, "Excellent! Very nutritious choice."),
    (7, "Good! This is a healthy option."),
    (5, "Moderate. Could be balanced with healthier foods."),
    (3, "Below average. Consider healthier alternatives."),
)
_POOR_FEEDBACK = "Poor nutritional value. Try to limit consumption."


def classify(value: float, ladder: tuple[float, ...]) -> int:
    """Return the bucket index of value on an ascending ladder."""
    return bisect_left(ladder, value)


def negative_points(record: NutrientRecord) -> int:
    """Sum points for energy, saturated fat, sugar and sodium."""
    return (
        classify(record.energy_kj, ENERGY_KJ_LADDER)
        + classify(record.sat_fat_g, SAT_FAT_G_LADDER)
        + classify(record.sugar_g, SUGAR_G_LADDER)
        + classify(record.sodium_mg, SODIUM_MG_LADDER)
    )


def positive_points(record: NutrientRecord) -> int:
    """Sum points for protein and fiber."""
    return classify(record.protein_g, PROTEIN_G_LADDER) + classify(
        record.fiber_g, FIBER_G_LADDER
    )


def score(record: NutrientRecord) -> int:
    """Score a record from 1 (poor) to 10 (excellent)."""
    raw = MAX_SCORE - (negative_points(record) - positive_points(record))
    return max(MIN_SCORE, min(MAX_SCORE, raw))


def feedback(value: int) -> str:
    """Return the display message for a score."""
    for minimum, message in _FEEDBACK:
        if value >= minimum:
            return message
    return _POOR_FEEDBACK


def score_band(value: int) -> str:
    """Return the colour band used when displaying a score."""
    if value >= 7:  # noqa: PLR2004
        return "high"
    if value >= 4:  # noqa: PLR2004
        return "medium"
    return "low"
