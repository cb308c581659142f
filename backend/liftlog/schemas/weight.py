from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints, AfterValidator

from liftlog.db import as_utc
from liftlog.units import WeightUnit

# stored and returned as UTC
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]
NoteStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]

class WeightCreate(BaseModel):
    weight: Annotated[float, Field(gt=0, le=2000)]
    recorded_at: UtcDatetime | None = None
    note: NoteStr | None = None

class WeightRead(BaseModel):
    id: int
    weight: float
    unit: WeightUnit
    recorded_at: UtcDatetime
    note: str | None = None

    model_config = {"from_attributes": True}

class LatestWeight(BaseModel):
    weight: float
    unit: WeightUnit
