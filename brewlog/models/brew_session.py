"""BrewSession ORM — one brew: method, parameters, rating, and what was used.

Invariants:
    - coffee_bean_id and grind_setting_id are required FKs; brewing_equipment_id optional
    - method stored by canonical name
    - rating NULL means unrated (excluded from analytics averages)

Design Decisions:
    - Related rows loaded with selectin: every response embeds bean, grind setting and equipment
    - FKs use RESTRICT: deleting a referenced row is refused by the service before the DB sees it
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, Float, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brewlog.core.domain_types import BrewMethod
from brewlog.db.base import Base
from brewlog.db.types import SymbolicColumn, UTCDateTime


class BrewSession(Base):
    __tablename__ = "brew_sessions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    method: Mapped[BrewMethod] = mapped_column(
        SymbolicColumn(BrewMethod), nullable=False,
    )
    water_temperature: Mapped[float] = mapped_column(Float, nullable=False)
    brew_time_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    tasting_notes: Mapped[str] = mapped_column(
        String(1000), nullable=False, default="",
    )
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_favorite: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_date: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    coffee_bean_id: Mapped[int] = mapped_column(
        ForeignKey("coffee_beans.id", ondelete="RESTRICT"), nullable=False, index=True,
    )
    grind_setting_id: Mapped[int] = mapped_column(
        ForeignKey("grind_settings.id", ondelete="RESTRICT"), nullable=False, index=True,
    )
    brewing_equipment_id: Mapped[int | None] = mapped_column(
        ForeignKey("brewing_equipment.id", ondelete="SET NULL"), nullable=True, index=True,
    )

    # Relationships
    coffee_bean: Mapped["CoffeeBean"] = relationship(
        "CoffeeBean", back_populates="brew_sessions", lazy="selectin",
    )
    grind_setting: Mapped["GrindSetting"] = relationship(
        "GrindSetting", back_populates="brew_sessions", lazy="selectin",
    )
    brewing_equipment: Mapped["BrewingEquipment | None"] = relationship(
        "BrewingEquipment", back_populates="brew_sessions", lazy="selectin",
    )
