"""Health checks and published OpenAPI document.

Invariants:
    - Liveness always 200; readiness 200 with a reachable database
    - Symbolic body fields and query parameters documented with their values,
      with "Possible values" appended to any existing description
    - The internal schema marker never leaks into the document
"""

import json

from brewlog.schemas.symbolic_fields import SYMBOLIC_SCHEMA_MARKER


async def test_liveness(client):
    res = await client.get("/api/v1/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def _document(client):
    res = await client.get("/openapi.json")
    assert res.status_code == 200
    return res.json()


async def test_body_property_documented(client):
    document = await _document(client)
    schemas = document["components"]["schemas"]
    prop = schemas["CoffeeBeanCreate"]["properties"]["roast_level"]
    assert prop["type"] == "string"
    assert prop["enum"] == ["Light", "MediumLight", "Medium", "MediumDark", "Dark"]
    assert prop["example"] == "Light"
    assert prop["description"] == (
        "Roast level of the beans. Possible values: "
        "'Light', 'MediumLight', 'Medium', 'MediumDark', 'Dark'"
    )


async def test_property_without_description_gets_value_list(client):
    document = await _document(client)
    responses = [
        schema for name, schema in document["components"]["schemas"].items()
        if name.startswith("CoffeeBeanResponse")
    ]
    prop = responses[0]["properties"]["roast_level"]
    assert prop["description"].startswith("Possible values: 'Light'")


async def test_query_parameter_documented(client):
    document = await _document(client)
    parameters = document["paths"]["/api/v1/brew-sessions"]["get"]["parameters"]
    method = next(p for p in parameters if p["name"] == "method")
    assert method["description"].startswith("Filter by brewing method. Possible values: 'Espresso'")
    assert method["example"] == "Espresso"
    assert method["schema"]["enum"][-1] == "ColdBrew"
    assert method["schema"]["type"] == "string"


async def test_marker_removed(client):
    document = await _document(client)
    assert SYMBOLIC_SCHEMA_MARKER not in json.dumps(document)


async def test_every_symbolic_query_parameter_documented(client):
    document = await _document(client)
    expected = {
        "/api/v1/coffee-beans": ("roast_level", "Light"),
        "/api/v1/equipment": ("type", "EspressoMachine"),
        "/api/v1/brew-sessions": ("method", "Espresso"),
    }
    for path, (name, example) in expected.items():
        parameters = document["paths"][path]["get"]["parameters"]
        parameter = next(p for p in parameters if p["name"] == name)
        assert "anyOf" not in parameter["schema"]
        assert parameter["schema"]["type"] == "string"
        assert parameter["example"] == example
        assert "Possible values:" in parameter["description"]
