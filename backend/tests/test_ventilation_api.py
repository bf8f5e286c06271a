import pytest
from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)


@pytest.fixture
def project_payload():
    return {
        "spaces": [
            {"id": "s1", "name": "Office", "areaSf": 1000, "ceilingHeightFt": 10, "zoneId": "z1"},
            {"id": "s2", "name": "Toilet", "areaSf": 50, "spaceType": "toilet_private", "fixtureCount": 2},
        ],
        "zones": [{"id": "z1", "name": "Zone 1", "systemId": "ahu-1"}],
        "systems": [{"id": "ahu-1", "name": "AHU-1", "systemType": "single_zone", "occupancyDiversity": 1.0}],
        "settings": {},
    }


def test_health():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_project_calculation(project_payload):
    response = client.post("/api/v1/ventilation/project", json=project_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["design_conditions"]["location_name"] == "Not specified"
    assert data["totals"]["total_vot"] == 88
    assert data["totals"]["total_exhaust_cfm"] == 50
    assert data["systems"][0]["vot"] == 85
    assert data["systems"][0]["heating_load_btuh"] == 5508
    assert [s["space_id"] for s in data["unassigned_spaces"]] == ["s2"]


def test_invalid_project_uses_error_envelope(project_payload):
    project_payload["spaces"][0]["areaSf"] = -5
    response = client.post("/api/v1/ventilation/project", json=project_payload)

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["type"] == "ValidationError"
    assert error["details"]["errors"][0]["loc"] == ["spaces", "0", "areaSf"]


def test_space_calculation():
    response = client.post("/api/v1/ventilation/space", json={
        "space": {"id": "s1", "name": "Office", "areaSf": 1000},
        "ez": 0.8,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["vbz"] == 85
    assert data["voz"] == 106


def test_space_calculation_rejects_zero_ez():
    response = client.post("/api/v1/ventilation/space", json={
        "space": {"id": "s1", "name": "Office", "areaSf": 1000},
        "ez": 0,
    })

    assert response.status_code == 422


def test_space_types_filtered():
    response = client.get("/api/v1/ventilation/space-types", params={"query": "sauna", "category": "Wellness"})

    assert response.status_code == 200
    data = response.json()
    ids = [st["id"] for st in data["space_types"]]
    assert "sauna" in ids
    assert all(st["category"] == "Wellness" for st in data["space_types"])
    assert "Wellness" in data["categories"]


def test_location_search():
    response = client.get("/api/v1/ventilation/locations", params={"query": "denver"})

    assert response.status_code == 200
    locations = response.json()["locations"]
    assert locations[0]["id"] == "US-CO-DEN"
    assert locations[0]["display_name"] == "Denver, CO"


def test_ez_values():
    response = client.get("/api/v1/ventilation/ez-values")

    ez_values = {item["id"]: item["ez"] for item in response.json()["ez_values"]}
    assert ez_values["FSCR_LV"] == 1.2
    assert len(ez_values) == 10


def test_cors_headers_on_options_request():
    response = client.options(
        "/api/v1/ventilation/project",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"}
    )

    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"


def test_cors_rejected_for_unknown_origin():
    response = client.get("/health", headers={"Origin": "http://malicious-site.com"})

    assert response.headers.get("Access-Control-Allow-Origin") != "http://malicious-site.com"
