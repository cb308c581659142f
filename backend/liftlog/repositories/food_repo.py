from __future__ import annotations
from typing import Iterable, Optional
from sqlalchemy import select, or_, func

from liftlog.models import Food
from liftlog.repositories.base import BaseRepository

class FoodRepository(BaseRepository[Food]):
    model = Food

    def _visible_to(self, user_id: int):
        return or_(Food.user_id.is_(None), Food.user_id == user_id)

    def get_visible(self, food_id: int, user_id: int) -> Optional[Food]:
        stmt = select(Food).where(Food.id == food_id, self._visible_to(user_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def search(self, user_id: int, term: str, *, limit: int = 100) -> list[Food]:
        """Case-insensitive match on name or category; ranking is left to the caller."""
        pattern = f"%{term.lower()}%"
        stmt = select(Food).where(
            self._visible_to(user_id),
            or_(func.lower(Food.name).like(pattern), func.lower(Food.category).like(pattern)),
        ).order_by(Food.is_custom.desc(), Food.name.asc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def list_custom(self, user_id: int) -> list[Food]:
        stmt = select(Food).where(Food.user_id == user_id, Food.is_custom.is_(True)).order_by(Food.name.asc())
        return list(self.db.execute(stmt).scalars().all())

    def create_custom(self, user_id: int, **fields) -> Food:
        return self.add_and_refresh(Food(user_id=user_id, is_custom=True, **fields))

    def shared_names(self) -> set[str]:
        stmt = select(Food.name).where(Food.user_id.is_(None))
        return {n.lower() for n in self.db.execute(stmt).scalars().all()}

    def add_shared(self, rows: Iterable[dict]) -> int:
        """Insert catalogue rows whose name is not already present. Returns the count added."""
        existing = self.shared_names()
        added = 0
        for row in rows:
            if row["name"].lower() in existing:
                continue
            self.db.add(Food(is_custom=False, user_id=None, **row))
            existing.add(row["name"].lower())
            added += 1
        self.db.commit()
        return added
