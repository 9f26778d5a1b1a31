"""CoffeeBean ORM — a bag of beans identified by name and brand.

Invariants:
    - (name, brand) unique case-insensitively (enforced by the service)
    - roast_level stored by canonical name
    - modified_date set on every update, NULL until then
"""

from datetime import datetime, timezone

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brewlog.core.domain_types import RoastLevel
from brewlog.db.base import Base
from brewlog.db.types import SymbolicColumn, UTCDateTime


class CoffeeBean(Base):
    __tablename__ = "coffee_beans"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    brand: Mapped[str] = mapped_column(String(100), nullable=False)
    roast_level: Mapped[RoastLevel] = mapped_column(
        SymbolicColumn(RoastLevel), nullable=False,
    )
    origin: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    created_date: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    modified_date: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), nullable=True,
    )

    brew_sessions: Mapped[list["BrewSession"]] = relationship(
        "BrewSession", back_populates="coffee_bean",
    )
