"""
Outdoor Design Conditions
Resolves design temperatures, elevation and air density correction for a project
"""

import logging
from dataclasses import dataclass
from typing import Optional

from domain.core.fallbacks import (
    ALTITUDE_CORRECTION_THRESHOLD_FT,
    FALLBACK_COOLING_DB_F,
    FALLBACK_COOLING_WB_F,
    FALLBACK_ELEVATION_FT,
    FALLBACK_HEATING_DB_F,
    FALLBACK_LOCATION_NAME,
)
from domain.models.project import (
    CoolingDesignCondition,
    HeatingDesignCondition,
    ProjectSettings,
)
from services.climate_data import (
    format_location_display,
    get_altitude_correction_factor,
    get_location_by_id,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DesignConditions:
    """Resolved outdoor and indoor design conditions for one calculation"""
    location_name: str
    cooling_db: float
    cooling_wb: float
    heating_db: float
    elevation_ft: float
    indoor_summer_db: float
    indoor_winter_db: float
    altitude_factor: float  # 1.0 when no correction applies

    @property
    def altitude_corrected(self) -> bool:
        return self.altitude_factor != 1.0


def resolve_design_conditions(settings: Optional[ProjectSettings] = None) -> DesignConditions:
    """
    Resolve design conditions from a custom location, else the selected
    ASHRAE location, else generic fallbacks.

    The cooling and heating percentiles are taken from whichever source was
    resolved, so a custom location honours the 1% / 99.6% selection too.
    """
    settings = settings or ProjectSettings()
    use_1_pct = settings.cooling_design_condition == CoolingDesignCondition.PCT_1
    use_996_pct = settings.heating_design_condition == HeatingDesignCondition.PCT_99_6

    custom = settings.custom_location
    location = get_location_by_id(settings.location_id) if settings.location_id else None

    if settings.location_id and location is None and custom is None:
        logger.info(f"Location '{settings.location_id}' not found, using fallback design temperatures")

    source = custom or location
    if source is not None:
        cooling_db = source.cooling_1_db if use_1_pct else source.cooling_04_db
        cooling_wb = source.cooling_1_mcwb if use_1_pct else source.cooling_04_mcwb
        heating_db = source.heating_996_db if use_996_pct else source.heating_99_db
        elevation_ft = source.elevation_ft
    else:
        cooling_db = FALLBACK_COOLING_DB_F
        cooling_wb = FALLBACK_COOLING_WB_F
        heating_db = FALLBACK_HEATING_DB_F
        elevation_ft = FALLBACK_ELEVATION_FT

    if custom is not None:
        location_name = custom.name
    elif location is not None:
        location_name = format_location_display(location)
    else:
        location_name = FALLBACK_LOCATION_NAME

    return DesignConditions(
        location_name=location_name,
        cooling_db=cooling_db,
        cooling_wb=cooling_wb,
        heating_db=heating_db,
        elevation_ft=elevation_ft,
        indoor_summer_db=settings.summer_indoor_db,
        indoor_winter_db=settings.winter_indoor_db,
        altitude_factor=resolve_altitude_factor(settings.altitude_correction, elevation_ft),
    )


def resolve_altitude_factor(enabled: bool, elevation_ft: float) -> float:
    """Density correction only applies above the threshold elevation"""
    if enabled and elevation_ft > ALTITUDE_CORRECTION_THRESHOLD_FT:
        return get_altitude_correction_factor(elevation_ft)
    return 1.0
