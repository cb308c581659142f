from typing import Annotated
from pydantic import BaseModel, Field, field_validator

from liftlog.models.nutrition import MealType
from liftlog.schemas.weight import UtcDatetime

Macro = Annotated[float, Field(ge=0)]

class NutritionCreate(BaseModel):
    food: Annotated[str, Field(max_length=255)]
    calories: Annotated[float, Field(gt=0)]
    protein: Macro | None = None
    carbs: Macro | None = None
    fat: Macro | None = None
    meal_type: MealType
    recorded_at: UtcDatetime | None = None

    @field_validator("food")
    @classmethod
    def food_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("food cannot be blank")
        return v2

class NutritionRead(BaseModel):
    id: int
    food: str
    calories: float
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    meal_type: MealType
    recorded_at: UtcDatetime

    model_config = {"from_attributes": True}

class NutritionTotals(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0

class DailyNutrition(BaseModel):
    entries: list[NutritionRead]
    totals: NutritionTotals

class GoalUpsert(BaseModel):
    calories: Annotated[float, Field(gt=0)]
    protein: Macro | None = None
    carbs: Macro | None = None
    fat: Macro | None = None

class GoalRead(GoalUpsert):
    id: int

    model_config = {"from_attributes": True}
