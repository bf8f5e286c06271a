"""
Project-Level Design Settings
Climate location selection and indoor design conditions shared by every system
"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum

from domain.core.fallbacks import (
    DEFAULT_SUMMER_INDOOR_DB_F,
    DEFAULT_SUMMER_INDOOR_RH,
    DEFAULT_WINTER_INDOOR_DB_F,
    DEFAULT_WINTER_INDOOR_RH,
)


class CoolingDesignCondition(str, Enum):
    """Annual cooling design percentile"""
    PCT_0_4 = "0.4%"
    PCT_1 = "1%"


class HeatingDesignCondition(str, Enum):
    """Annual heating design percentile"""
    PCT_99 = "99%"
    PCT_99_6 = "99.6%"


@dataclass(frozen=True)
class CustomLocation:
    """User-entered design conditions for a site missing from the location table"""
    name: str
    cooling_04_db: float
    cooling_04_mcwb: float
    cooling_1_db: float
    cooling_1_mcwb: float
    heating_99_db: float
    heating_996_db: float
    elevation_ft: float = 0.0


@dataclass(frozen=True)
class ProjectSettings:
    """Design settings for one project"""
    location_id: Optional[str] = None
    custom_location: Optional[CustomLocation] = None

    cooling_design_condition: CoolingDesignCondition = CoolingDesignCondition.PCT_0_4
    heating_design_condition: HeatingDesignCondition = HeatingDesignCondition.PCT_99

    # Indoor design conditions
    summer_indoor_db: float = DEFAULT_SUMMER_INDOOR_DB_F
    summer_indoor_rh: float = DEFAULT_SUMMER_INDOOR_RH
    winter_indoor_db: float = DEFAULT_WINTER_INDOOR_DB_F
    winter_indoor_rh: float = DEFAULT_WINTER_INDOOR_RH

    # Auto-apply air density correction at altitude
    altitude_correction: bool = True
