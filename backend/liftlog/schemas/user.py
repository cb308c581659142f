from typing import Annotated
from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator
from datetime import datetime

from liftlog.security import PASSWORD_MAX_LENGTH, PASSWORD_POLICY_MESSAGE, password_meets_policy
from liftlog.units import WeightUnit

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class UserBase(BaseModel):
    email: EmailStr = Field(max_length=255)
    name: NameStr

class UserRegister(UserBase):
    password: Annotated[str, Field(min_length=1, max_length=PASSWORD_MAX_LENGTH)]

    @field_validator("password")
    @classmethod
    def password_policy(cls, v: str) -> str:
        if not password_meets_policy(v):
            raise ValueError(PASSWORD_POLICY_MESSAGE)
        return v

class UserLogin(BaseModel):
    email: EmailStr
    password: Annotated[str, Field(min_length=1, max_length=256)]

class UserRead(UserBase):
    id: int
    weight_unit: WeightUnit
    created_at: datetime
    model_config = {"from_attributes": True}

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class WeightUnitBody(BaseModel):
    unit: WeightUnit
