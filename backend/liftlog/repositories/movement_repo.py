from __future__ import annotations
from sqlalchemy import select, func

from liftlog.models import Movement, WorkoutSet
from liftlog.repositories.base import BaseRepository

# Seeded for users who have not created any movement yet: (name, is_body_weight)
DEFAULT_MOVEMENTS: tuple[tuple[str, bool], ...] = (
    ("Bench Press", False),
    ("Squat", False),
    ("Deadlift", False),
    ("Overhead Press", False),
    ("Pull Up", True),
    ("Push Up", True),
    ("Dip", True),
    ("Dumbbell Curl", False),
    ("Tricep Extension", False),
    ("Leg Press", False),
    ("Lat Pulldown", False),
    ("Seated Row", False),
)

class MovementRepository(BaseRepository[Movement]):
    model = Movement

    def list_by_user(self, user_id: int) -> list[Movement]:
        stmt = select(Movement).where(Movement.user_id == user_id).order_by(Movement.name.asc(), Movement.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: int, *, name: str, is_body_weight: bool = False) -> Movement:
        return self.add_and_refresh(Movement(user_id=user_id, name=name, is_body_weight=is_body_weight))

    def seed_defaults(self, user_id: int) -> None:
        self.db.add_all(
            Movement(user_id=user_id, name=name, is_body_weight=body_weight)
            for name, body_weight in DEFAULT_MOVEMENTS
        )
        self.db.commit()

    def count_sets(self, movement_id: int) -> int:
        stmt = select(func.count()).select_from(WorkoutSet).where(WorkoutSet.movement_id == movement_id)
        return self.db.execute(stmt).scalar_one()
