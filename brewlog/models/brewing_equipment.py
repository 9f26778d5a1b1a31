"""BrewingEquipment ORM — machines, grinders and manual brewers.

Invariants:
    - type stored by canonical name
    - specifications is a flat string-to-string map (JSON column)

Design Decisions:
    - JSON column for specifications: free-form per equipment type, never queried by key
"""

from datetime import datetime, timezone

from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brewlog.core.domain_types import EquipmentType
from brewlog.db.base import Base
from brewlog.db.types import SymbolicColumn, UTCDateTime


class BrewingEquipment(Base):
    __tablename__ = "brewing_equipment"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vendor: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[EquipmentType] = mapped_column(
        SymbolicColumn(EquipmentType), nullable=False,
    )
    specifications: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
    created_date: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    brew_sessions: Mapped[list["BrewSession"]] = relationship(
        "BrewSession", back_populates="brewing_equipment",
    )
