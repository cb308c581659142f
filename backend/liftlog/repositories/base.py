# liftlog/repositories/base.py
from __future__ import annotations
from typing import Generic, Optional, TypeVar

from sqlalchemy.orm import Session
from sqlalchemy import select

T = TypeVar("T")  # SQLAlchemy model type

class BaseRepository(Generic[T]):
    """Lightweight base for per-user repositories using SQLAlchemy 2.0 style."""
    model: type[T]

    def __init__(self, db: Session):
        self.db = db

    def get(self, entity_id: int) -> Optional[T]:
        return self.db.get(self.model, entity_id)

    def get_owned(self, entity_id: int, user_id: int) -> Optional[T]:
        """Row by id, but only when it belongs to ``user_id``."""
        stmt = select(self.model).where(self.model.id == entity_id, self.model.user_id == user_id)
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def add_and_refresh(self, entity: T) -> T:
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity: T) -> None:
        self.db.delete(entity)
        self.db.commit()
