from typing import Annotated
from pydantic import BaseModel, Field, StringConstraints

NonNeg = Annotated[float, Field(ge=0)]

class FoodCreate(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
    category: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
    calories: Annotated[float, Field(gt=0)]
    protein: NonNeg
    carbs: NonNeg
    fat: NonNeg
    serving_size: Annotated[str, Field(max_length=120)] | None = None

class FoodRead(BaseModel):
    id: int
    name: str
    category: str
    calories: float
    protein: float
    carbs: float
    fat: float
    serving_size: str | None = None
    is_custom: bool

    model_config = {"from_attributes": True}
