from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Boolean, false, DateTime, ForeignKey, Integer, String, func
from liftlog.db import Base

class Movement(Base):
    __tablename__ = "movements"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    is_body_weight: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="movements")
    sets = relationship("WorkoutSet", back_populates="movement")
