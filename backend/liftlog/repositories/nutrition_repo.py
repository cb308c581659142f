from __future__ import annotations
from datetime import datetime
from typing import Optional
from sqlalchemy import select

from liftlog.db import utcnow
from liftlog.models import MealType, NutritionEntry, NutritionGoal
from liftlog.repositories.base import BaseRepository

class NutritionRepository(BaseRepository[NutritionEntry]):
    model = NutritionEntry

    def list_by_user(self, user_id: int) -> list[NutritionEntry]:
        stmt = select(NutritionEntry).where(NutritionEntry.user_id == user_id)\
                                     .order_by(NutritionEntry.recorded_at.desc(), NutritionEntry.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def list_between(self, user_id: int, start: datetime, end: datetime) -> list[NutritionEntry]:
        """Entries with ``start <= recorded_at < end``, oldest first."""
        stmt = select(NutritionEntry).where(
            NutritionEntry.user_id == user_id,
            NutritionEntry.recorded_at >= start,
            NutritionEntry.recorded_at < end,
        ).order_by(NutritionEntry.recorded_at.asc(), NutritionEntry.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def create(
        self,
        user_id: int,
        *,
        food: str,
        calories: float,
        protein: float | None,
        carbs: float | None,
        fat: float | None,
        meal_type: MealType,
        recorded_at: datetime | None,
    ) -> NutritionEntry:
        entry = NutritionEntry(
            user_id=user_id,
            food=food,
            calories=calories,
            protein=protein,
            carbs=carbs,
            fat=fat,
            meal_type=meal_type,
            recorded_at=recorded_at or utcnow(),
        )
        return self.add_and_refresh(entry)

    # Goals: one row per user
    def get_goal(self, user_id: int) -> Optional[NutritionGoal]:
        stmt = select(NutritionGoal).where(NutritionGoal.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def upsert_goal(
        self,
        user_id: int,
        *,
        calories: float,
        protein: float | None,
        carbs: float | None,
        fat: float | None,
    ) -> NutritionGoal:
        goal = self.get_goal(user_id) or NutritionGoal(user_id=user_id)
        goal.calories = calories
        goal.protein = protein
        goal.carbs = carbs
        goal.fat = fat
        return self.add_and_refresh(goal)
