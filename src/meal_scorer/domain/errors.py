"""Domain errors raised to the immediate caller."""


class MealScorerError(Exception):
    """Base class for recoverable catalog and meal errors."""


class EmptyCatalog(MealScorerError):
    """Raised when an index is built from zero records."""

    def __init__(self) -> None:
        super().__init__("Cannot build an index from an empty catalog.")


class IndexNotReady(MealScorerError):
    """Raised when the catalog is queried before a build has completed."""

    def __init__(self) -> None:
        super().__init__("The food catalog is still loading. Try again shortly.")


class EmptyQuery(MealScorerError):
    """Raised when the search text is blank."""

    def __init__(self) -> None:
        super().__init__("Search term cannot be empty.")


class InvalidLimit(MealScorerError):
    """Raised when fewer than one search result is requested."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"Result limit must be at least 1, got {limit!r}.")
        self.limit = limit


class EmptyMeal(MealScorerError):
    """Raised when a meal with no items is totalled, scored or saved."""

    def __init__(self) -> None:
        super().__init__("No items in meal! Add some foods first.")


class InvalidServing(MealScorerError):
    """Raised for a serving size that is not a positive number of grams."""

    def __init__(self, serving_g: object) -> None:
        super().__init__(
            f"Serving size must be a positive number of grams, got {serving_g!r}."
        )
        self.serving_g = serving_g


class MealItemNotFound(MealScorerError):
    """Raised when removing a meal item at a position that does not exist."""

    def __init__(self, position: int) -> None:
        super().__init__(f"No meal item at position {position}.")
        self.position = position


class MealSnapshotNotFound(MealScorerError):
    """Raised when a saved meal id is unknown."""

    def __init__(self, snapshot_id: object) -> None:
        super().__init__(f"No saved meal with id {snapshot_id}.")
        self.snapshot_id = snapshot_id
