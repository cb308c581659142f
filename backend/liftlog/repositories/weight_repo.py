from __future__ import annotations
from datetime import datetime
from typing import Optional
from sqlalchemy import select

from liftlog.db import utcnow
from liftlog.models import WeightEntry
from liftlog.repositories.base import BaseRepository
from liftlog.units import WeightUnit

class WeightRepository(BaseRepository[WeightEntry]):
    model = WeightEntry

    def _newest_first(self, user_id: int):
        return select(WeightEntry).where(WeightEntry.user_id == user_id)\
                                  .order_by(WeightEntry.recorded_at.desc(), WeightEntry.id.desc())

    def list_by_user(self, user_id: int) -> list[WeightEntry]:
        return list(self.db.execute(self._newest_first(user_id)).scalars().all())

    def latest(self, user_id: int) -> Optional[WeightEntry]:
        return self.db.execute(self._newest_first(user_id).limit(1)).scalars().first()

    def create(
        self,
        user_id: int,
        *,
        weight: float,
        unit: WeightUnit,
        recorded_at: datetime | None,
        note: str | None,
    ) -> WeightEntry:
        entry = WeightEntry(
            user_id=user_id,
            weight=weight,
            unit=unit,
            recorded_at=recorded_at or utcnow(),
            note=note or None,
        )
        return self.add_and_refresh(entry)
