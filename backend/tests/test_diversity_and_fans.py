"""
Tests for diversity estimates and standalone fan aggregation
"""

import pytest

from domain.calculations.diversity_factors import estimate_diversity_factor
from domain.calculations.project_ventilation import calculate_project_ventilation
from domain.calculations.standalone_fans import aggregate_standalone_fans
from domain.models.spaces import Space
from domain.models.zones import SystemType


class TestDiversityEstimate:

    @pytest.mark.parametrize("system_type,zone_count,expected", [
        (SystemType.SINGLE_ZONE, 1, 1.0),
        (SystemType.SINGLE_ZONE, 20, 1.0),
        (SystemType.DOAS_100_OA, 8, 0.9),
        (SystemType.VAV_MULTI_ZONE, 1, 0.95),
        (SystemType.VAV_MULTI_ZONE, 2, 0.95),
        (SystemType.VAV_MULTI_ZONE, 5, 0.85),
        (SystemType.VAV_MULTI_ZONE, 10, 0.75),
        (SystemType.VAV_MULTI_ZONE, 11, 0.65),
    ])
    def test_estimate(self, system_type, zone_count, expected):
        assert estimate_diversity_factor(system_type, zone_count) == expected


class TestStandaloneFans:

    def test_spaces_share_a_fan(self):
        spaces = [
            Space(space_id="a", name="Janitor", area_sf=100, ceiling_height_ft=10, exhaust_ach=6, exhaust_fan_tag="EF-1"),
            Space(space_id="b", name="Storage", area_sf=50, ceiling_height_ft=10, exhaust_ach=6, exhaust_fan_tag="EF-1"),
        ]
        fans = aggregate_standalone_fans(spaces)

        assert len(fans) == 1
        assert fans[0].tag == "EF-1"
        assert fans[0].fan_type == "exhaust"
        assert fans[0].total_cfm == 150
        assert [(s.space_name, s.cfm) for s in fans[0].spaces] == [("Janitor", 100), ("Storage", 50)]

    def test_sorted_by_tag_exhaust_first(self):
        spaces = [
            Space(space_id="a", name="Pool", area_sf=100, supply_ach=6, supply_fan_tag="SF-1"),
            Space(space_id="b", name="Electrical", area_sf=100, exhaust_ach=3, exhaust_fan_tag="EF-2"),
            Space(space_id="c", name="Boiler", area_sf=100, supply_ach=3, exhaust_ach=3,
                  supply_fan_tag="F-1", exhaust_fan_tag="F-1"),
        ]
        fans = aggregate_standalone_fans(spaces)

        assert [(f.tag, f.fan_type) for f in fans] == [
            ("EF-2", "exhaust"),
            ("F-1", "exhaust"),
            ("F-1", "supply"),
            ("SF-1", "supply"),
        ]

    def test_tag_without_ach_lists_zero(self):
        fans = aggregate_standalone_fans([Space(space_id="a", name="Closet", area_sf=40, exhaust_fan_tag="EF-9")])

        assert fans[0].total_cfm == 0
        assert fans[0].spaces[0].cfm == 0

    def test_untagged_spaces_have_no_fans(self, office_space):
        assert aggregate_standalone_fans([office_space]) == ()

    def test_included_in_project(self, settings):
        space = Space(space_id="a", name="Janitor", area_sf=100, exhaust_ach=6, exhaust_fan_tag="EF-1")
        result = calculate_project_ventilation([space], [], [], settings)

        assert result.standalone_fans[0].total_cfm == 100
        assert result.to_json()["standalone_fans"][0]["spaces"] == [{"space_name": "Janitor", "cfm": 100}]
