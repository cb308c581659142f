from __future__ import annotations
from typing import Optional
from sqlalchemy import select

from liftlog.models import WorkoutSet
from liftlog.repositories.base import BaseRepository

class SetRepository(BaseRepository[WorkoutSet]):
    model = WorkoutSet

    def get_in_workout(self, set_id: int, workout_id: int) -> Optional[WorkoutSet]:
        stmt = select(WorkoutSet).where(WorkoutSet.id == set_id, WorkoutSet.workout_id == workout_id)
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def list_by_workout(self, workout_id: int, *, movement_id: int | None = None) -> list[WorkoutSet]:
        stmt = select(WorkoutSet).where(WorkoutSet.workout_id == workout_id)
        if movement_id is not None:
            stmt = stmt.where(WorkoutSet.movement_id == movement_id)
        stmt = stmt.order_by(WorkoutSet.id.asc())
        return list(self.db.execute(stmt).unique().scalars().all())

    def create(self, workout_id: int, *, movement_id: int, weight: float, reps: int) -> WorkoutSet:
        s = WorkoutSet(workout_id=workout_id, movement_id=movement_id, weight=weight, reps=reps)
        return self.add_and_refresh(s)
