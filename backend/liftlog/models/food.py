from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, false, Float, ForeignKey, Integer, String
from liftlog.db import Base

class Food(Base):
    """Catalogue item. Shared rows have no owner; custom rows belong to one user."""
    __tablename__ = "foods"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(120), nullable=False)
    calories: Mapped[float] = mapped_column(Float, nullable=False)
    protein: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    carbs: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    fat: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    serving_size: Mapped[str | None] = mapped_column(String(120), nullable=True)
    is_custom: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
