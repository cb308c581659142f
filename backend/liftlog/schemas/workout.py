from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field

PosInt = Annotated[int, Field(ge=1)]
NonNegFloat = Annotated[float, Field(ge=0, le=10000)]

class MovementRef(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}

class SetCreate(BaseModel):
    movement_id: int
    weight: NonNegFloat
    reps: PosInt

class SetRead(BaseModel):
    id: int
    workout_id: int
    weight: float
    reps: int
    movement: MovementRef

    model_config = {"from_attributes": True}

class WorkoutRead(BaseModel):
    id: int
    started_at: datetime
    completed_at: datetime | None = None
    sets: list[SetRead] = []

    model_config = {"from_attributes": True}

class BestSetRead(BaseModel):
    weight: float
    reps: int

    model_config = {"from_attributes": True}

class PersonalRecordRead(BaseModel):
    movement_id: int
    movement_name: str
    best_set: BestSetRead

    model_config = {"from_attributes": True}

class PRResult(BaseModel):
    # PR against completed-workout history
    is_pr: bool
    # PR worth showing now: also the best set of this movement in the workout
    announce: bool
    previous_best: PersonalRecordRead | None = None

class SetLogged(BaseModel):
    set: SetRead
    pr: PRResult

class WorkoutIds(BaseModel):
    workout_ids: Annotated[list[int], Field(min_length=1, max_length=500)]

class DeletedCount(BaseModel):
    deleted: int
