"""
Tests for the ASHRAE space type and climate reference tables
"""

import pytest

from services import ashrae62, climate_data
from services.error_types import ConfigurationError
from services.reference_data import check_reference_data, get_data_dir, DEFAULT_DATA_DIR
from domain.models.project import CoolingDesignCondition, HeatingDesignCondition


class TestSpaceTypes:

    def test_office_rates(self):
        office = ashrae62.get_space_type("office")

        assert office.rp == 5
        assert office.ra == 0.06
        assert office.default_occupancy == 5
        assert office.has_area_exhaust is False

    def test_blank_rates_stay_unset(self):
        banya = ashrae62.get_space_type("banya")

        assert banya.rp is None
        assert banya.ra is None
        assert banya.ventilation_mode == "ach"
        assert banya.ventilation_ach == 6

    def test_fixture_exhaust_metadata(self):
        toilet = ashrae62.get_space_type("toilet_private")

        assert toilet.has_fixture_exhaust
        assert toilet.exhaust_cfm_unit == 25
        assert toilet.exhaust_unit_type == "toilet"
        assert toilet.exhaust_min_per_room == 50

    def test_healthcare_spaces_are_separate(self):
        assert ashrae62.get_space_type("isolation_aii") is None

        aii = ashrae62.get_ashrae170_space("isolation_aii")
        assert aii.min_total_ach == 12
        assert aii.min_oa_ach == 2
        assert aii.pressure_relationship == "negative"
        assert aii.all_air_exhaust is True
        assert aii.recirculated is False

    def test_search(self):
        ids = [st.id for st in ashrae62.search_space_types("SAUNA")]

        assert "sauna" in ids
        assert "infrared_sauna" in ids

    def test_categories(self):
        categories = ashrae62.get_categories()

        assert categories == sorted(categories)
        assert "Office" in categories
        assert "Wellness" in categories

    def test_by_category(self):
        ids = {st.id for st in ashrae62.get_space_types_by_category("Office")}
        assert {"office", "reception"} <= ids

    @pytest.mark.parametrize("space_type,area,expected", [
        ("office", 1000, 5),
        ("office", 500, 3),
        ("conference_meeting", 300, 15),
        ("not_a_type", 1000, 0),
    ])
    def test_default_occupancy(self, space_type, area, expected):
        assert ashrae62.calculate_default_occupancy(space_type, area) == expected

    @pytest.mark.parametrize("name,expected", [
        ("Conference Room", "conference_meeting"),
        ("Sauna", "sauna"),
        ("Quantum Flux Chamber", "office"),
    ])
    def test_match_space_name(self, name, expected):
        assert ashrae62.match_space_name_to_ashrae(name) == expected

    @pytest.mark.parametrize("config_id,expected", [
        ("CS", 1.0),
        ("FSCR_LV", 1.2),
        ("FSCRW", 0.7),
        ("MU_EX", 0.5),
        ("UNKNOWN", 1.0),
    ])
    def test_ez_values(self, config_id, expected):
        assert ashrae62.get_ez_value(config_id) == expected


class TestLocations:

    def test_lookup(self):
        denver = climate_data.get_location_by_id("US-CO-DEN")

        assert denver.name == "Denver"
        assert denver.state == "CO"
        assert denver.elevation_ft == 5331

    def test_international_has_no_state(self):
        assert climate_data.get_location_by_id("UK-LHR").state is None

    def test_search_is_case_insensitive(self):
        assert [loc.id for loc in climate_data.search_locations("DENVER")] == ["US-CO-DEN"]

    def test_search_is_limited(self):
        assert len(climate_data.search_locations("usa")) == climate_data.SEARCH_RESULT_LIMIT

    def test_by_country(self):
        canada = climate_data.get_locations_by_country("Canada")

        assert len(canada) == 9
        assert all(loc.country == "Canada" for loc in canada)

    def test_by_state_is_us_only(self):
        assert climate_data.get_locations_by_state("ON") == []
        assert "US-CO-DEN" in [loc.id for loc in climate_data.get_locations_by_state("CO")]

    def test_us_states(self):
        states = climate_data.get_us_states()

        assert states == sorted(states)
        assert "CO" in states
        assert "ON" not in states

    def test_design_temps(self):
        temps = climate_data.get_design_temps("US-CO-DEN", CoolingDesignCondition.PCT_1, HeatingDesignCondition.PCT_99_6)

        assert (temps.cooling_db, temps.cooling_wb, temps.heating_db) == (93, 59, -5)
        assert temps.elevation_ft == 5331

    def test_design_temps_unknown(self):
        assert climate_data.get_design_temps("XX-NOPE") is None

    def test_altitude_factor(self):
        assert climate_data.get_altitude_correction_factor(0) == 1.0
        assert climate_data.get_altitude_correction_factor(5331) == pytest.approx(0.8218, abs=1e-3)

    def test_display(self):
        assert climate_data.format_location_display(climate_data.get_location_by_id("US-CO-DEN")) == "Denver, CO"
        assert climate_data.format_location_display(climate_data.get_location_by_id("FR-CDG")) == "Paris, France"


class TestDataDirectory:

    def test_bundled_tables_present(self):
        assert len(check_reference_data()) == 3

    def test_missing_override_directory_falls_back(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ASHRAE_DATA_DIR", str(tmp_path / "does-not-exist"))
        assert get_data_dir() == DEFAULT_DATA_DIR

    def test_empty_override_directory(self, monkeypatch, tmp_path, reload_reference_data):
        monkeypatch.setenv("ASHRAE_DATA_DIR", str(tmp_path))

        with pytest.raises(ConfigurationError) as exc_info:
            check_reference_data()
        assert len(exc_info.value.details["missing"]) == 3

        # Loaders degrade to empty tables, the calculation keeps its fallbacks
        assert ashrae62.get_space_type("office") is None
        assert climate_data.get_location_by_id("US-CO-DEN") is None
        assert ashrae62.calculate_default_occupancy("office", 1000) == 0

    def test_override_directory_is_used(self, monkeypatch, tmp_path, reload_reference_data):
        (tmp_path / "ashrae_locations.csv").write_text(
            "id,name,state,country,lat,lon,elevation_ft,cooling_04_db,cooling_04_mcwb,"
            "cooling_1_db,cooling_1_mcwb,heating_99_db,heating_996_db,summer_dp_04,summer_hr,winter_hr\n"
            "XX-TST,Testville,,Nowhere,0,0,100,90,70,88,69,20,15,,,\n"
        )
        monkeypatch.setenv("ASHRAE_DATA_DIR", str(tmp_path))

        assert [loc.id for loc in climate_data.get_all_locations()] == ["XX-TST"]
        assert climate_data.get_location_by_id("XX-TST").summer_dp_04 is None
