"""
ASHRAE 62.1 Space Type Reference Data
Ventilation rates (Table 6-1), exhaust rates (Table 6-2), zone air distribution
effectiveness (Table 6-4), plus the ACH minimums of ASHRAE 170 healthcare spaces
"""

import csv
import math
import logging
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Dict, List, Optional

from domain.core.fallbacks import FALLBACK_OCCUPANCY_DENSITY
from domain.models.spaces import Space
from services.reference_data import (
    ASHRAE170_FILE,
    SPACE_TYPES_FILE,
    data_file,
    optional_float,
    parse_bool,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpaceTypeRecord:
    """One row of the ASHRAE 62.1 space type table"""
    id: str
    category: str
    name: str
    display_name: str
    standard: str = "ashrae62"
    rp: Optional[float] = None  # CFM per person, None when the table leaves it blank
    ra: Optional[float] = None  # CFM per sf
    default_occupancy: float = 0.0  # People per 1000 sf
    air_class: int = 1

    # Exhaust (Table 6-2)
    exhaust_cfm_sf: Optional[float] = None
    exhaust_cfm_unit: Optional[float] = None
    exhaust_unit_type: Optional[str] = None  # toilet, urinal, shower, room, kitchen
    exhaust_cfm_min: Optional[float] = None
    exhaust_cfm_max: Optional[float] = None
    exhaust_min_per_room: Optional[float] = None
    exhaust_notes: Optional[str] = None

    # "cfm_rates" uses Rp/Ra, "ach" adds the ACH defaults below
    ventilation_mode: str = "cfm_rates"
    ventilation_ach: Optional[float] = None
    exhaust_ach: Optional[float] = None

    @property
    def has_area_exhaust(self) -> bool:
        return bool(self.exhaust_cfm_sf)

    @property
    def has_fixture_exhaust(self) -> bool:
        return bool(self.exhaust_cfm_unit)


@dataclass(frozen=True)
class Ashrae170Space:
    """Healthcare space with ACH minimums (ASHRAE 170 Table 7-1)"""
    id: str
    category: str
    name: str
    display_name: str
    min_total_ach: float
    min_oa_ach: float
    pressure_relationship: str  # positive, negative, equal
    all_air_exhaust: bool = False
    recirculated: bool = True


@dataclass(frozen=True)
class EzConfiguration:
    """Zone air distribution configuration (Table 6-4)"""
    id: str
    description: str
    ez: float


ZONE_EZ_VALUES: List[EzConfiguration] = [
    EzConfiguration('CS', 'Ceiling supply of cool air', 1.0),
    EzConfiguration('CSFR', 'Ceiling supply of warm air and floor return', 1.0),
    EzConfiguration('CSCRH', 'Ceiling supply of warm air 15°F+ above space temp, ceiling return', 0.8),
    EzConfiguration('CSCRW', 'Ceiling supply of warm air <15°F above space temp, ceiling return', 0.8),
    EzConfiguration('FSCR', 'Floor supply of cool air, ceiling return (>50 fpm at 4.5ft)', 1.0),
    EzConfiguration('FSCR_LV', 'Floor supply, low-velocity displacement or UFAD', 1.2),
    EzConfiguration('FSFR', 'Floor supply of warm air, floor return', 1.0),
    EzConfiguration('FSCRW', 'Floor supply of warm air, ceiling return', 0.7),
    EzConfiguration('MUEX', 'Makeup supply opposite side from exhaust', 0.8),
    EzConfiguration('MU_EX', 'Makeup supply near exhaust', 0.5),
]


@lru_cache(maxsize=1)
def load_space_types() -> Dict[str, SpaceTypeRecord]:
    """Load the ASHRAE 62.1 space type table keyed by id"""
    path = data_file(SPACE_TYPES_FILE)
    space_types = {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            reader = csv.DictReader(f)
            for row in reader:
                record = SpaceTypeRecord(
                    id=row['id'],
                    category=row['category'],
                    name=row['name'],
                    display_name=row['display_name'],
                    standard=row['standard'] or 'ashrae62',
                    rp=optional_float(row['rp']),
                    ra=optional_float(row['ra']),
                    default_occupancy=optional_float(row['default_occupancy']) or 0.0,
                    air_class=int(row['air_class'] or 1),
                    exhaust_cfm_sf=optional_float(row['exhaust_cfm_sf']),
                    exhaust_cfm_unit=optional_float(row['exhaust_cfm_unit']),
                    exhaust_unit_type=row['exhaust_unit_type'] or None,
                    exhaust_cfm_min=optional_float(row['exhaust_cfm_min']),
                    exhaust_cfm_max=optional_float(row['exhaust_cfm_max']),
                    exhaust_min_per_room=optional_float(row['exhaust_min_per_room']),
                    exhaust_notes=row['exhaust_notes'] or None,
                    ventilation_mode=row['ventilation_mode'] or 'cfm_rates',
                    ventilation_ach=optional_float(row['ventilation_ach']),
                    exhaust_ach=optional_float(row['exhaust_ach']),
                )
                space_types[record.id] = record
    except FileNotFoundError:
        logger.warning(f"{path} not found, every space type will use fallback rates")

    logger.debug(f"Loaded {len(space_types)} ASHRAE 62.1 space types")
    return space_types


@lru_cache(maxsize=1)
def load_ashrae170_spaces() -> Dict[str, Ashrae170Space]:
    """Load ASHRAE 170 healthcare spaces keyed by id"""
    path = data_file(ASHRAE170_FILE)
    spaces = {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            reader = csv.DictReader(f)
            for row in reader:
                record = Ashrae170Space(
                    id=row['id'],
                    category=row['category'],
                    name=row['name'],
                    display_name=row['display_name'],
                    min_total_ach=optional_float(row['min_total_ach']) or 0.0,
                    min_oa_ach=optional_float(row['min_oa_ach']) or 0.0,
                    pressure_relationship=row['pressure_relationship'] or 'equal',
                    all_air_exhaust=parse_bool(row['all_air_exhaust']),
                    recirculated=parse_bool(row['recirculated'], default=True),
                )
                spaces[record.id] = record
    except FileNotFoundError:
        logger.warning(f"{path} not found, ASHRAE 170 ACH minimums unavailable")

    return spaces


def clear_cache():
    """Drop cached tables so the next lookup re-reads ASHRAE_DATA_DIR"""
    load_space_types.cache_clear()
    load_ashrae170_spaces.cache_clear()


def get_space_type(space_type_id: str) -> Optional[SpaceTypeRecord]:
    return load_space_types().get(space_type_id)


def get_ashrae170_space(space_type_id: str) -> Optional[Ashrae170Space]:
    return load_ashrae170_spaces().get(space_type_id)


def get_all_space_types() -> List[SpaceTypeRecord]:
    return list(load_space_types().values())


def get_space_types_by_category(category: str) -> List[SpaceTypeRecord]:
    return [st for st in load_space_types().values() if st.category == category]


def get_categories() -> List[str]:
    """All unique categories, sorted"""
    return sorted({st.category for st in load_space_types().values()})


def search_space_types(query: str) -> List[SpaceTypeRecord]:
    """Case-insensitive match on name, display name or category"""
    lower_query = query.lower()
    return [
        st for st in load_space_types().values()
        if lower_query in st.name.lower()
        or lower_query in st.display_name.lower()
        or lower_query in st.category.lower()
    ]


def calculate_default_occupancy(space_type_id: str, area_sf: float) -> int:
    """
    Default occupancy from the Table 6-1 density (people per 1000 sf).
    Unknown space types have no default occupants.
    """
    space_type = get_space_type(space_type_id)
    density = space_type.default_occupancy if space_type else FALLBACK_OCCUPANCY_DENSITY
    return math.ceil((area_sf / 1000) * density)


def apply_space_type_defaults(space: Space) -> Space:
    """
    Copy the ACH values a space type recommends onto the space, the way the
    project editor stores them when a room type is picked.

    Only ACH fields the space leaves unset are filled. Wellness rows carry
    ventilation and exhaust ACH. ASHRAE 170 rooms take their outdoor-air ACH
    for ventilation, their total ACH for supply, and for all-air-exhaust rooms
    their total ACH for exhaust as well.
    """
    ventilation_ach = exhaust_ach = supply_ach = None

    space_type = get_space_type(space.space_type)
    if space_type is not None:
        ventilation_ach = space_type.ventilation_ach
        exhaust_ach = space_type.exhaust_ach
    else:
        healthcare = get_ashrae170_space(space.space_type)
        if healthcare is not None:
            ventilation_ach = healthcare.min_oa_ach or None
            supply_ach = healthcare.min_total_ach or None
            if healthcare.all_air_exhaust:
                exhaust_ach = supply_ach

    defaults = {
        "ventilation_ach": ventilation_ach,
        "exhaust_ach": exhaust_ach,
        "supply_ach": supply_ach,
    }
    changes = {
        field: value for field, value in defaults.items()
        if value is not None and getattr(space, field) is None
    }
    if not changes:
        return space

    logger.debug(f"Space {space.space_id}: {space.space_type} defaults {changes}")
    return replace(space, **changes)


def match_space_name_to_ashrae(name: str) -> str:
    """
    Best-effort match of a free-text room name to a space type id.
    Returns 'office' when nothing matches.
    """
    lower = name.lower()
    for st in load_space_types().values():
        display = st.display_name.lower()
        if lower in display or display in lower or lower in st.name.lower():
            return st.id
    return 'office'


def get_ez_value(config_id: str) -> float:
    """Ez for a Table 6-4 configuration id, 1.0 when unknown"""
    for config in ZONE_EZ_VALUES:
        if config.id == config_id:
            return config.ez
    return 1.0
