"""GrindSetting ORM — grinder configuration reused across brew sessions."""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, Float
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brewlog.db.base import Base
from brewlog.db.types import UTCDateTime


class GrindSetting(Base):
    __tablename__ = "grind_settings"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    grind_size: Mapped[int] = mapped_column(Integer, nullable=False)
    grind_time_seconds: Mapped[float] = mapped_column(Float, nullable=False)
    grind_weight: Mapped[float] = mapped_column(Float, nullable=False)
    grinder_type: Mapped[str] = mapped_column(String(100), nullable=False)
    notes: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    created_date: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    brew_sessions: Mapped[list["BrewSession"]] = relationship(
        "BrewSession", back_populates="grind_setting",
    )
