"""SQLAlchemy declarative base and ORM models for saved games."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.types import JSON


class Base(DeclarativeBase):
    """Base class for all database models."""


class GameSessionModel(Base):
    """ORM model for a saved game session.

    hero / inventory / ring_pool are stored as JSON produced by the core codec
    (GameSession.to_dict).
    """

    __tablename__ = "game_sessions"

    session_id: Mapped[str] = mapped_column(String, primary_key=True)
    hero: Mapped[dict] = mapped_column(JSON, nullable=False)
    inventory: Mapped[list] = mapped_column(JSON, default=list)
    gold: Mapped[int] = mapped_column(Integer, default=0)
    distance: Mapped[int] = mapped_column(Integer, default=0)
    # 남은 반지 종류
    ring_pool: Mapped[list] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    tombstones: Mapped[list["TombstoneModel"]] = relationship(
        "TombstoneModel",
        back_populates="session",
        cascade="all, delete-orphan",
    )


class TombstoneModel(Base):
    """ORM model for a chest left behind where the hero was defeated."""

    __tablename__ = "tombstones"
    __table_args__ = (UniqueConstraint("session_id", "distance"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(
        String, ForeignKey("game_sessions.session_id", ondelete="CASCADE"), nullable=False
    )
    distance: Mapped[int] = mapped_column(Integer, nullable=False)
    chest: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    session: Mapped["GameSessionModel"] = relationship(
        "GameSessionModel", back_populates="tombstones"
    )
