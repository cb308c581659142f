from typing import Annotated
from pydantic import BaseModel, Field, field_validator

MovementName = Annotated[str, Field(max_length=120)]

class MovementCreate(BaseModel):
    name: MovementName
    is_body_weight: bool = False

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name cannot be blank")
        return v2

class MovementRead(BaseModel):
    id: int
    name: str
    is_body_weight: bool

    model_config = {"from_attributes": True}
