"""Pydantic models for API request bodies."""

from pydantic import BaseModel, ConfigDict, Field


class AddMealItemRequest(BaseModel):
    """Pick one of the foods matching a query and add it to the meal."""

    query: str
    choice: int = Field(default=1, ge=1)
    serving_g: float = 100.0


class SaveMealRequest(BaseModel):
    """Name for a saved meal."""

    name: str | None = None


class NutrientsRequest(BaseModel):
    """Nutrients per 100 g of an arbitrary food."""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str = "Custom food"
    calories: float = Field(default=0.0, ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    fat_g: float = Field(default=0.0, ge=0)
    carbs_g: float = Field(default=0.0, ge=0)
    sugar_g: float = Field(default=0.0, ge=0)
    fiber_g: float = Field(default=0.0, ge=0)
    sat_fat_g: float = Field(default=0.0, ge=0)
    sodium_mg: float = Field(default=0.0, ge=0)
