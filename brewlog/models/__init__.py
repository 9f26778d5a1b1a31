"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - BrewSession references CoffeeBean, GrindSetting and (optionally) BrewingEquipment
    - Symbolic columns store canonical names (db/types.py)

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from brewlog.models.coffee_bean import CoffeeBean  # noqa: F401
from brewlog.models.grind_setting import GrindSetting  # noqa: F401
from brewlog.models.brewing_equipment import BrewingEquipment  # noqa: F401
from brewlog.models.brew_session import BrewSession  # noqa: F401
