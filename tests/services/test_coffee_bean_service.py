"""Coffee Bean Service — tests against an in-memory database.

Tests cover:
    - create/get/update/delete round through the session
    - Duplicate (name, brand) rejected case-insensitively
    - Delete refused while brew sessions reference the bean
    - Filters, recent and most-used ordering
"""

import pytest

from brewlog.core.domain_types import BrewMethod, RoastLevel
from brewlog.core.errors import (
    BusinessValidationError, ReferentialIntegrityError, ResourceNotFoundError,
)
from brewlog.models.brew_session import BrewSession
from brewlog.models.grind_setting import GrindSetting
from brewlog.schemas.coffee_bean import CoffeeBeanCreate, CoffeeBeanUpdate
from brewlog.services import coffee_beans


def _create(name="Geometry", brand="Onyx", roast_level="Light", origin="Blend"):
    return CoffeeBeanCreate(
        name=name, brand=brand, roast_level=roast_level, origin=origin,
    )


async def _brew_with(db, bean):
    grind = GrindSetting(
        grind_size=8, grind_time_seconds=10, grind_weight=18, grinder_type="Niche",
    )
    db.add(grind)
    await db.flush()
    db.add(BrewSession(
        method=BrewMethod.ESPRESSO, water_temperature=93, brew_time_seconds=28,
        coffee_bean_id=bean.id, grind_setting_id=grind.id,
    ))
    await db.commit()


async def test_create_then_get(test_db):
    bean = await coffee_beans.create_coffee_bean(test_db, _create(name="  Geometry "))
    loaded = await coffee_beans.get_coffee_bean(test_db, bean.id)
    assert loaded.name == "Geometry"
    assert loaded.roast_level is RoastLevel.LIGHT
    assert loaded.modified_date is None


async def test_get_missing_raises_not_found(test_db):
    with pytest.raises(ResourceNotFoundError):
        await coffee_beans.get_coffee_bean(test_db, 404)


async def test_invalid_payload_raises_business_validation(test_db):
    with pytest.raises(BusinessValidationError) as exc_info:
        await coffee_beans.create_coffee_bean(test_db, _create(name="", roast_level=""))
    fields = [e["field"] for e in exc_info.value.errors]
    assert fields == ["name", "roast_level"]


async def test_duplicate_name_and_brand_rejected_case_insensitively(test_db):
    await coffee_beans.create_coffee_bean(test_db, _create())
    with pytest.raises(BusinessValidationError) as exc_info:
        await coffee_beans.create_coffee_bean(test_db, _create(name="GEOMETRY", brand="onyx"))
    assert "already exists" in exc_info.value.message


async def test_update_may_keep_its_own_name(test_db):
    bean = await coffee_beans.create_coffee_bean(test_db, _create())
    updated = await coffee_beans.update_coffee_bean(
        test_db, bean.id,
        CoffeeBeanUpdate(name="Geometry", brand="Onyx", roast_level=3, origin="Colombia"),
    )
    assert updated.roast_level is RoastLevel.MEDIUM_DARK
    assert updated.origin == "Colombia"
    assert updated.modified_date is not None


async def test_delete_unreferenced_bean(test_db):
    bean = await coffee_beans.create_coffee_bean(test_db, _create())
    await coffee_beans.delete_coffee_bean(test_db, bean.id)
    with pytest.raises(ResourceNotFoundError):
        await coffee_beans.get_coffee_bean(test_db, bean.id)


async def test_delete_referenced_bean_refused(test_db):
    bean = await coffee_beans.create_coffee_bean(test_db, _create())
    await _brew_with(test_db, bean)
    with pytest.raises(ReferentialIntegrityError):
        await coffee_beans.delete_coffee_bean(test_db, bean.id)


async def test_filters(test_db):
    await coffee_beans.create_coffee_bean(test_db, _create())
    await coffee_beans.create_coffee_bean(
        test_db, _create(name="Hair Bender", brand="Stumptown", roast_level="Dark"),
    )
    dark = await coffee_beans.list_coffee_beans(test_db, roast_level=RoastLevel.DARK)
    assert [b.name for b in dark] == ["Hair Bender"]
    by_brand = await coffee_beans.list_coffee_beans(test_db, brand="ONY")
    assert [b.name for b in by_brand] == ["Geometry"]


async def test_most_used_omits_unused_beans(test_db):
    used = await coffee_beans.create_coffee_bean(test_db, _create())
    await coffee_beans.create_coffee_bean(test_db, _create(name="Idle"))
    await _brew_with(test_db, used)
    most_used = await coffee_beans.most_used_coffee_beans(test_db)
    assert [b.id for b in most_used] == [used.id]


async def test_recent_newest_first(test_db):
    first = await coffee_beans.create_coffee_bean(test_db, _create(name="First"))
    second = await coffee_beans.create_coffee_bean(test_db, _create(name="Second"))
    recent = await coffee_beans.recent_coffee_beans(test_db, 1)
    assert [b.id for b in recent] == [second.id]
    assert first.id != second.id
