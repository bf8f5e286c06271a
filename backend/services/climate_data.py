"""
Climate Data Service for ventilation load calculations
ASHRAE Fundamentals design conditions for US, Canadian and international sites
"""

import csv
import logging
from dataclasses import dataclass
from typing import Dict, Optional, List
from functools import lru_cache

from domain.models.project import CoolingDesignCondition, HeatingDesignCondition
from services.reference_data import LOCATIONS_FILE, data_file, optional_float

logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 20


@dataclass(frozen=True)
class ASHRAELocation:
    """Design weather for one ASHRAE station"""
    id: str
    name: str
    country: str
    lat: float
    lon: float
    elevation_ft: float

    # Cooling design (dry bulb / mean coincident wet bulb)
    cooling_04_db: float
    cooling_04_mcwb: float
    cooling_1_db: float
    cooling_1_mcwb: float

    # Heating design (dry bulb)
    heating_99_db: float
    heating_996_db: float

    state: Optional[str] = None  # US state or Canadian province

    # Dehumidification design, informational only
    summer_dp_04: Optional[float] = None
    summer_hr: Optional[float] = None  # gr/lb
    winter_hr: Optional[float] = None  # gr/lb


@dataclass(frozen=True)
class DesignTemps:
    cooling_db: float
    cooling_wb: float
    heating_db: float
    elevation_ft: float


@lru_cache(maxsize=1)
def load_locations() -> Dict[str, ASHRAELocation]:
    """Load ASHRAE design weather keyed by location id, in table order"""
    path = data_file(LOCATIONS_FILE)
    locations = {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            reader = csv.DictReader(f)
            for row in reader:
                loc = ASHRAELocation(
                    id=row['id'],
                    name=row['name'],
                    state=row['state'] or None,
                    country=row['country'],
                    lat=float(row['lat']),
                    lon=float(row['lon']),
                    elevation_ft=float(row['elevation_ft']),
                    cooling_04_db=float(row['cooling_04_db']),
                    cooling_04_mcwb=float(row['cooling_04_mcwb']),
                    cooling_1_db=float(row['cooling_1_db']),
                    cooling_1_mcwb=float(row['cooling_1_mcwb']),
                    heating_99_db=float(row['heating_99_db']),
                    heating_996_db=float(row['heating_996_db']),
                    summer_dp_04=optional_float(row.get('summer_dp_04')),
                    summer_hr=optional_float(row.get('summer_hr')),
                    winter_hr=optional_float(row.get('winter_hr')),
                )
                locations[loc.id] = loc
    except FileNotFoundError:
        logger.warning(f"{path} not found, design conditions will use fallback temperatures")

    logger.debug(f"Loaded {len(locations)} ASHRAE climate locations")
    return locations


def clear_cache():
    load_locations.cache_clear()


def get_all_locations() -> List[ASHRAELocation]:
    return list(load_locations().values())


def get_location_by_id(location_id: str) -> Optional[ASHRAELocation]:
    return load_locations().get(location_id)


def search_locations(query: str) -> List[ASHRAELocation]:
    """
    Search locations by name, state, country or id (case-insensitive)

    Results are capped at SEARCH_RESULT_LIMIT in table order.
    """
    lower_query = query.lower()
    matches = []
    for loc in load_locations().values():
        if (lower_query in loc.name.lower()
                or (loc.state and lower_query in loc.state.lower())
                or lower_query in loc.country.lower()
                or lower_query in loc.id.lower()):
            matches.append(loc)
            if len(matches) >= SEARCH_RESULT_LIMIT:
                break
    return matches


def get_locations_by_country(country: str) -> List[ASHRAELocation]:
    return [loc for loc in load_locations().values() if loc.country == country]


def get_locations_by_state(state: str) -> List[ASHRAELocation]:
    """US locations in one state"""
    return [
        loc for loc in load_locations().values()
        if loc.country == 'USA' and loc.state == state
    ]


def get_us_states() -> List[str]:
    """Sorted unique US state abbreviations"""
    return sorted({
        loc.state for loc in load_locations().values()
        if loc.country == 'USA' and loc.state
    })


def get_design_temps(
    location_id: str,
    cooling_condition: CoolingDesignCondition = CoolingDesignCondition.PCT_0_4,
    heating_condition: HeatingDesignCondition = HeatingDesignCondition.PCT_99
) -> Optional[DesignTemps]:
    """
    Design temperatures at the requested percentiles

    Returns:
        DesignTemps, or None when the location id is unknown
    """
    loc = get_location_by_id(location_id)
    if loc is None:
        return None

    if cooling_condition == CoolingDesignCondition.PCT_0_4:
        cooling_db, cooling_wb = loc.cooling_04_db, loc.cooling_04_mcwb
    else:
        cooling_db, cooling_wb = loc.cooling_1_db, loc.cooling_1_mcwb

    if heating_condition == HeatingDesignCondition.PCT_99:
        heating_db = loc.heating_99_db
    else:
        heating_db = loc.heating_996_db

    return DesignTemps(
        cooling_db=cooling_db,
        cooling_wb=cooling_wb,
        heating_db=heating_db,
        elevation_ft=loc.elevation_ft,
    )


def get_altitude_correction_factor(elevation_ft: float) -> float:
    """
    Air density ratio at elevation from the standard atmosphere:
    P/P0 = (1 - 0.0000068753 * h)^5.2559
    """
    return (1 - 0.0000068753 * elevation_ft) ** 5.2559


def format_location_display(loc: ASHRAELocation) -> str:
    if loc.state:
        return f"{loc.name}, {loc.state}"
    return f"{loc.name}, {loc.country}"


def format_design_conditions_preview(loc: ASHRAELocation) -> str:
    return (
        f"Summer: {loc.cooling_04_db:g}°F DB / {loc.cooling_04_mcwb:g}°F WB | "
        f"Winter: {loc.heating_99_db:g}°F"
    )
