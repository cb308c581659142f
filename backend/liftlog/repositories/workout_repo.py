from __future__ import annotations
from datetime import datetime
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from liftlog.db import utcnow
from liftlog.models import Workout, WorkoutSet
from liftlog.repositories.base import BaseRepository

class WorkoutRepository(BaseRepository[Workout]):
    model = Workout

    def get_active(self, user_id: int) -> Optional[Workout]:
        stmt = select(Workout).where(Workout.user_id == user_id, Workout.completed_at.is_(None))\
                              .options(selectinload(Workout.sets))\
                              .order_by(Workout.id.desc())\
                              .limit(1)
        return self.db.execute(stmt).scalars().first()

    def list_completed(self, user_id: int, *, limit: int = 50, offset: int = 0) -> list[Workout]:
        stmt = select(Workout).where(Workout.user_id == user_id, Workout.completed_at.is_not(None))\
                              .options(selectinload(Workout.sets))\
                              .order_by(Workout.completed_at.desc(), Workout.id.desc())\
                              .limit(limit).offset(offset)
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: int) -> Workout:
        return self.add_and_refresh(Workout(user_id=user_id))

    def complete(self, workout: Workout) -> Workout:
        workout.completed_at = utcnow()
        self.db.commit()
        self.db.refresh(workout)
        return workout

    def delete_many(self, user_id: int, workout_ids: list[int]) -> int:
        stmt = select(Workout).where(Workout.user_id == user_id, Workout.id.in_(workout_ids))
        workouts = self.db.execute(stmt).scalars().all()
        # ORM delete so the sets cascade on every backend
        for w in workouts:
            self.db.delete(w)
        self.db.commit()
        return len(workouts)

    def completed_sets(
        self,
        user_id: int,
        *,
        movement_id: int | None = None,
        since: datetime | None = None,
    ) -> list[WorkoutSet]:
        """Sets of the user's completed workouts, oldest workout first."""
        stmt = select(WorkoutSet).join(Workout, WorkoutSet.workout_id == Workout.id)\
                                 .where(Workout.user_id == user_id, Workout.completed_at.is_not(None))
        if movement_id is not None:
            stmt = stmt.where(WorkoutSet.movement_id == movement_id)
        if since is not None:
            stmt = stmt.where(Workout.completed_at >= since)
        stmt = stmt.order_by(Workout.completed_at.asc(), WorkoutSet.id.asc())
        return list(self.db.execute(stmt).unique().scalars().all())
