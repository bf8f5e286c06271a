"""
Tests for project snapshot validation and conversion
"""

import logging
import pytest

from domain.models.project import CoolingDesignCondition
from domain.models.zones import SystemType
from models.schemas import ProjectSnapshot, snapshot_from_dict
from services.error_types import CriticalError, DataQualityError, NonCriticalError, ValidationError


@pytest.fixture
def editor_payload():
    """Snapshot as sent by the project editor (camelCase)"""
    return {
        "spaces": [
            {"id": "s1", "name": "Office", "areaSf": 1000, "ceilingHeightFt": 9,
             "spaceType": "office", "zoneId": "z1", "ventilationAch": 1.5},
            {"id": "s2", "name": "Lobby", "area_sf": 400, "zone_id": ""},
        ],
        "zones": [{"id": "z1", "name": "Zone 1", "ez": 0.8, "systemId": "ahu-1"}],
        "systems": [{"id": "ahu-1", "name": "AHU-1", "systemType": "single_zone",
                     "ervEnabled": True, "occupancyDiversity": 1.0}],
        "settings": {"locationId": "US-CO-DEN", "coolingDesignCondition": "1%",
                     "summerIndoorDb": 74},
    }


class TestSnapshotConversion:

    def test_camel_and_snake_case(self, editor_payload):
        spaces, zones, systems, settings = snapshot_from_dict(editor_payload).to_domain()

        assert spaces[0].area_sf == 1000
        assert spaces[0].ceiling_height_ft == 9
        assert spaces[0].ventilation_ach == 1.5
        assert spaces[1].area_sf == 400
        assert spaces[1].zone_id is None  # blank reference
        assert spaces[1].space_type == "office"
        assert zones[0].ez == 0.8
        assert systems[0].system_type == SystemType.SINGLE_ZONE
        assert systems[0].erv_enabled is True
        assert settings.location_id == "US-CO-DEN"
        assert settings.cooling_design_condition == CoolingDesignCondition.PCT_1
        assert settings.summer_indoor_db == 74

    def test_defaults(self):
        spaces, zones, systems, settings = snapshot_from_dict({}).to_domain()

        assert (spaces, zones, systems) == ([], [], [])
        assert settings.altitude_correction is True

    def test_custom_location(self):
        snapshot = snapshot_from_dict({"settings": {"customLocation": {
            "name": "Site", "cooling_04_db": 100, "cooling_04_mcwb": 72, "cooling_1_db": 98,
            "cooling_1_mcwb": 71, "heating_99_db": 12, "heating_996_db": 8,
        }}})
        settings = snapshot.settings.to_domain()

        assert settings.custom_location.name == "Site"
        assert settings.custom_location.elevation_ft == 0.0

    def test_type_defaults_only_when_requested(self, editor_payload):
        editor_payload["spaces"].append(
            {"id": "s3", "name": "Sauna", "areaSf": 100, "spaceType": "sauna", "useTypeDefaults": True}
        )
        editor_payload["spaces"].append({"id": "s4", "name": "Sauna 2", "areaSf": 100, "spaceType": "sauna"})
        spaces, _, _, _ = snapshot_from_dict(editor_payload).to_domain()

        assert (spaces[2].ventilation_ach, spaces[2].exhaust_ach) == (6, 6)
        assert (spaces[3].ventilation_ach, spaces[3].exhaust_ach) == (None, None)
        assert spaces[0].ventilation_ach == 1.5

    def test_diversity_estimated_from_zone_count(self, editor_payload):
        editor_payload["zones"] = [
            {"id": f"z{i}", "name": f"Zone {i}", "systemId": "vav-1"} for i in range(3)
        ]
        editor_payload["systems"] = [
            {"id": "vav-1", "name": "VAV-1", "systemType": "vav_multi_zone"},
            {"id": "vav-2", "name": "VAV-2", "systemType": "vav_multi_zone", "occupancyDiversity": 0.7},
        ]
        _, _, systems, _ = snapshot_from_dict(editor_payload).to_domain()

        assert systems[0].occupancy_diversity == 0.85  # 3 zones
        assert systems[1].occupancy_diversity == 0.7


class TestSnapshotValidation:

    @pytest.mark.parametrize("space_patch", [
        {"areaSf": 0},
        {"areaSf": -100},
        {"ceilingHeightFt": 0},
        {"ventilationAch": -1},
        {"fixtureCount": -2},
    ])
    def test_invalid_space(self, editor_payload, space_patch):
        editor_payload["spaces"][0].update(space_patch)

        with pytest.raises(ValidationError) as exc_info:
            snapshot_from_dict(editor_payload)
        errors = exc_info.value.details["errors"]
        assert errors[0]["loc"][:2] == ["spaces", "0"]

    def test_zero_ez_rejected(self, editor_payload):
        editor_payload["zones"][0]["ez"] = 0
        with pytest.raises(ValidationError):
            snapshot_from_dict(editor_payload)

    @pytest.mark.parametrize("system_patch", [
        {"ervSensibleEfficiency": 1.5},
        {"occupancyDiversity": -0.1},
        {"systemType": "chilled_beam"},
    ])
    def test_invalid_system(self, editor_payload, system_patch):
        editor_payload["systems"][0].update(system_patch)
        with pytest.raises(ValidationError):
            snapshot_from_dict(editor_payload)

    def test_invalid_design_condition(self, editor_payload):
        editor_payload["settings"]["heatingDesignCondition"] = "97.5%"
        with pytest.raises(ValidationError):
            snapshot_from_dict(editor_payload)

    def test_error_is_json_ready(self):
        with pytest.raises(ValidationError) as exc_info:
            snapshot_from_dict({"spaces": [{"id": "s1"}]})

        assert isinstance(exc_info.value, CriticalError)
        payload = exc_info.value.to_json()
        assert payload["type"] == "ValidationError"
        assert "Invalid project snapshot" in payload["message"]


class TestDanglingReferences:

    def test_reported_and_tolerated(self, editor_payload, caplog):
        editor_payload["spaces"][0]["zoneId"] = "gone"
        editor_payload["zones"][0]["systemId"] = "also-gone"
        snapshot = ProjectSnapshot.model_validate(editor_payload)

        issues = snapshot.find_dangling_references()
        assert len(issues) == 2
        assert all(isinstance(issue, DataQualityError) for issue in issues)
        assert all(isinstance(issue, NonCriticalError) for issue in issues)

        with caplog.at_level(logging.WARNING):
            spaces, zones, _, _ = snapshot.to_domain()
        assert spaces[0].zone_id == "gone"
        assert "references unknown zone" in caplog.text

    def test_clean_snapshot(self, editor_payload):
        assert ProjectSnapshot.model_validate(editor_payload).find_dangling_references() == []
