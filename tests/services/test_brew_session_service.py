"""Brew Session Service — tests against an in-memory database.

Tests cover:
    - Created sessions come back with related rows loaded
    - Missing references reported alongside rule failures
    - Update re-points relationships; toggle favorite flips the flag
    - favorites / top-rated / filters
"""

import pytest

from brewlog.core.domain_types import BrewMethod, EquipmentType, RoastLevel
from brewlog.core.errors import BusinessValidationError, ResourceNotFoundError
from brewlog.models.brewing_equipment import BrewingEquipment
from brewlog.models.coffee_bean import CoffeeBean
from brewlog.models.grind_setting import GrindSetting
from brewlog.schemas.brew_session import BrewSessionCreate, BrewSessionUpdate
from brewlog.services import brew_sessions


@pytest.fixture
async def refs(test_db):
    beans = [
        CoffeeBean(name="Geometry", brand="Onyx", roast_level=RoastLevel.LIGHT, origin="Blend"),
        CoffeeBean(name="Hair Bender", brand="Stumptown", roast_level=RoastLevel.DARK, origin="Blend"),
    ]
    grind = GrindSetting(
        grind_size=20, grind_time_seconds=15, grind_weight=30, grinder_type="Encore",
    )
    press = BrewingEquipment(
        vendor="Bodum", model="Chambord", type=EquipmentType.FRENCH_PRESS,
        specifications={},
    )
    test_db.add_all([*beans, grind, press])
    await test_db.commit()
    return {"beans": beans, "grind": grind, "press": press}


def _payload(refs, **overrides):
    fields = {
        "method": "FrenchPress", "water_temperature": 94, "brew_time_seconds": 240,
        "rating": 7, "coffee_bean_id": refs["beans"][0].id,
        "grind_setting_id": refs["grind"].id,
        "brewing_equipment_id": refs["press"].id,
    }
    fields.update(overrides)
    return BrewSessionCreate(**fields)


async def test_create_loads_relationships(test_db, refs):
    brew = await brew_sessions.create_brew_session(test_db, _payload(refs))
    assert brew.method is BrewMethod.FRENCH_PRESS
    assert brew.coffee_bean.name == "Geometry"
    assert brew.grind_setting.grind_size == 20
    assert brew.brewing_equipment.vendor == "Bodum"


async def test_missing_references_reported_with_rule_failures(test_db, refs):
    with pytest.raises(BusinessValidationError) as exc_info:
        await brew_sessions.create_brew_session(
            test_db, _payload(refs, rating=11, coffee_bean_id=999, brewing_equipment_id=998),
        )
    assert [e["field"] for e in exc_info.value.errors] == [
        "rating", "coffee_bean_id", "brewing_equipment_id",
    ]
    assert "Coffee bean with ID 999 does not exist" in exc_info.value.message


async def test_update_repoints_bean(test_db, refs):
    brew = await brew_sessions.create_brew_session(test_db, _payload(refs))
    other = refs["beans"][1]
    updated = await brew_sessions.update_brew_session(
        test_db, brew.id,
        BrewSessionUpdate(**_payload(refs, coffee_bean_id=other.id).model_dump()),
    )
    assert updated.coffee_bean.name == "Hair Bender"


async def test_update_missing_session(test_db, refs):
    with pytest.raises(ResourceNotFoundError):
        await brew_sessions.update_brew_session(
            test_db, 12345, BrewSessionUpdate(**_payload(refs).model_dump()),
        )


async def test_toggle_favorite_twice(test_db, refs):
    brew = await brew_sessions.create_brew_session(test_db, _payload(refs))
    assert (await brew_sessions.toggle_favorite(test_db, brew.id)).is_favorite is True
    assert (await brew_sessions.toggle_favorite(test_db, brew.id)).is_favorite is False


async def test_favorites_and_top_rated(test_db, refs):
    low = await brew_sessions.create_brew_session(test_db, _payload(refs, rating=5))
    high = await brew_sessions.create_brew_session(
        test_db, _payload(refs, rating=9, is_favorite=True),
    )
    await brew_sessions.create_brew_session(test_db, _payload(refs, rating=None))

    favorites = await brew_sessions.favorite_brew_sessions(test_db)
    assert [b.id for b in favorites] == [high.id]
    top = await brew_sessions.top_rated_brew_sessions(test_db, 5)
    assert [b.id for b in top] == [high.id, low.id]


async def test_filter_by_method_and_rating(test_db, refs):
    await brew_sessions.create_brew_session(test_db, _payload(refs, rating=4))
    await brew_sessions.create_brew_session(test_db, _payload(
        refs, method="ColdBrew", water_temperature=20, brew_time_seconds=12 * 3600,
        rating=8, brewing_equipment_id=None,
    ))
    cold = await brew_sessions.list_brew_sessions(test_db, method=BrewMethod.COLD_BREW)
    assert len(cold) == 1 and cold[0].brewing_equipment is None
    good = await brew_sessions.list_brew_sessions(test_db, min_rating=5)
    assert [b.method for b in good] == [BrewMethod.COLD_BREW]


async def test_delete_session(test_db, refs):
    brew = await brew_sessions.create_brew_session(test_db, _payload(refs))
    await brew_sessions.delete_brew_session(test_db, brew.id)
    with pytest.raises(ResourceNotFoundError):
        await brew_sessions.get_brew_session(test_db, brew.id)
