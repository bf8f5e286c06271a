"""
Tests for zone aggregation
"""

import pytest

from domain.calculations.zone_ventilation import calculate_zone_ventilation
from domain.models.spaces import Space
from domain.models.zones import Zone


@pytest.fixture
def zone_spaces():
    return [
        Space(space_id="a", name="Office A", area_sf=1000, space_type="office", zone_id="z1"),
        Space(space_id="b", name="Office B", area_sf=500, space_type="office", zone_id="z1"),
        Space(space_id="c", name="Conference", area_sf=300, space_type="conference_meeting", zone_id="z1"),
        Space(space_id="d", name="Elsewhere", area_sf=800, space_type="office", zone_id="z2"),
    ]


class TestZoneAggregation:

    def test_sums_member_spaces_only(self, zone, zone_spaces, settings):
        result = calculate_zone_ventilation(zone, zone_spaces, settings)

        assert result.space_count == 3
        assert result.total_area_sf == 1800
        # 5 + ceil(2.5) + ceil(15)
        assert result.total_occupancy == 23
        # 85 + 45 + (75 + 18)
        assert result.total_vbz == 223
        assert result.total_voz == 223
        assert result.primary_voz == 93
        assert result.zp == 1.0

    def test_ez_applies_to_each_space(self, zone_spaces, settings):
        zone = Zone(zone_id="z1", name="UFAD", ez=1.2)
        result = calculate_zone_ventilation(zone, zone_spaces, settings)

        # round(85/1.2) + round(45/1.2) + round(93/1.2)
        assert result.total_voz == 71 + 38 + 78
        assert result.total_vbz == 223

    def test_empty_zone(self, settings):
        zone = Zone(zone_id="empty", name="Empty")
        result = calculate_zone_ventilation(zone, [], settings)

        assert result.space_count == 0
        assert result.total_area_sf == 0
        assert result.total_voz == 0
        assert result.primary_voz == 0
        assert result.zp == 0

    def test_order_does_not_change_totals(self, zone, zone_spaces, settings):
        forward = calculate_zone_ventilation(zone, zone_spaces, settings)
        backward = calculate_zone_ventilation(zone, list(reversed(zone_spaces)), settings)

        assert forward.total_vbz == backward.total_vbz
        assert forward.total_voz == backward.total_voz
        assert forward.total_occupancy == backward.total_occupancy
        assert forward.total_exhaust_cfm == backward.total_exhaust_cfm
        assert forward.primary_voz == backward.primary_voz

    def test_to_json_nests_spaces(self, zone, zone_spaces, settings):
        data = calculate_zone_ventilation(zone, zone_spaces, settings).to_json()

        assert data["zone_id"] == "z1"
        assert data["system_id"] == "ahu-1"
        assert [s["space_id"] for s in data["spaces"]] == ["a", "b", "c"]
