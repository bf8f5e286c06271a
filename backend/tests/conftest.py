"""
Pytest configuration and fixtures
"""
import pytest

from domain.models.project import ProjectSettings
from domain.models.spaces import Space
from domain.models.zones import HVACSystem, SystemType, Zone
from services import ashrae62, climate_data


@pytest.fixture
def settings():
    """No location selected: generic 95/75 cooling, 10 heating, sea level"""
    return ProjectSettings()


@pytest.fixture
def office_space():
    """1000 sf office, default 5 people / 1000 sf"""
    return Space(space_id="s1", name="Open Office", area_sf=1000, ceiling_height_ft=10,
                 space_type="office", zone_id="z1")


@pytest.fixture
def single_zone_system():
    return HVACSystem(system_id="ahu-1", name="AHU-1", system_type=SystemType.SINGLE_ZONE,
                      occupancy_diversity=1.0)


@pytest.fixture
def zone():
    return Zone(zone_id="z1", name="Zone 1", ez=1.0, system_id="ahu-1")


@pytest.fixture
def reload_reference_data():
    """Clear cached tables before and after a test that changes ASHRAE_DATA_DIR"""
    ashrae62.clear_cache()
    climate_data.clear_cache()
    yield
    ashrae62.clear_cache()
    climate_data.clear_cache()
