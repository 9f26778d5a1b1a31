"""Analytics Routes — end-to-end tests through the FastAPI app.

Invariants:
    - Empty database yields zeroed stats, never errors
    - Symbolic values in analytics payloads are canonical names
"""


async def test_dashboard_empty(client):
    res = await client.get("/api/v1/analytics/dashboard")
    assert res.status_code == 200
    body = res.json()
    assert body["total_brew_sessions"] == 0
    assert body["average_rating"] == 0.0
    assert body["recent_brews"] == []


async def test_dashboard_with_sessions(client, espresso):
    await client.post("/api/v1/brew-sessions", json=espresso(rating=8, is_favorite=True))
    await client.post("/api/v1/brew-sessions", json=espresso(rating=6))
    body = (await client.get("/api/v1/analytics/dashboard")).json()
    assert body["total_brew_sessions"] == 2
    assert body["total_coffee_beans"] == 1
    assert body["favorite_brews"] == 1
    assert body["brew_method_stats"][0]["method"] == "Espresso"
    assert body["equipment_stats"][0]["type"] == "EspressoMachine"
    assert body["recent_brews"][0]["coffee_bean_name"] == "Onyx Yirgacheffe"


async def test_correlations_and_recommendations(client, espresso):
    await client.post("/api/v1/brew-sessions", json=espresso(rating=9, is_favorite=True))
    await client.post("/api/v1/brew-sessions", json=espresso(rating=7, is_favorite=True))

    correlations = (await client.get("/api/v1/analytics/correlations")).json()
    assert correlations["grind_size_correlations"] == [
        {"grind_size": 8, "average_rating": 8.0, "sample_count": 2},
    ]

    recommendations = (await client.get("/api/v1/analytics/recommendations")).json()
    types = {r["type"] for r in recommendations}
    assert types == {"BestBean", "OptimalGrindSize", "BestEquipment", "FavoriteCombo"}


async def test_equipment_performance(client, espresso):
    await client.post("/api/v1/brew-sessions", json=espresso(rating=9))
    body = (await client.get("/api/v1/analytics/equipment-performance")).json()
    assert body["best_performing_equipment"]["vendor"] == "Breville"
    assert body["most_used_equipment"]["type"] == "EspressoMachine"


async def test_equipment_performance_empty_omits_best(client):
    body = (await client.get("/api/v1/analytics/equipment-performance")).json()
    assert body == {"equipment_performance": []}
