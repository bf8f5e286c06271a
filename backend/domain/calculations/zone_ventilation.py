"""
Zone Ventilation Aggregator
Sums member spaces and finds the critical space for multi-zone systems
"""

import logging
from typing import Optional, Sequence

from domain.calculations.space_ventilation import calculate_space_ventilation
from domain.models.project import ProjectSettings
from domain.models.results import ZoneVentilationResult
from domain.models.spaces import Space
from domain.models.zones import Zone

logger = logging.getLogger(__name__)


def calculate_zone_ventilation(
    zone: Zone,
    spaces: Sequence[Space],
    settings: Optional[ProjectSettings] = None
) -> ZoneVentilationResult:
    """
    Calculate every space assigned to the zone and aggregate.

    Sums use the rounded space values so zone totals match the space rows
    shown beneath them. Zp is simplified to 1.0 whenever the zone needs
    outdoor air: primary airflow (Vpz) is not modeled, so Voz / Vpz is taken
    as 100%.
    """
    space_results = tuple(
        calculate_space_ventilation(space, zone.ez, settings)
        for space in spaces
        if space.zone_id == zone.zone_id
    )

    total_area_sf = sum(s.area_sf for s in space_results)
    total_occupancy = sum(s.occupancy for s in space_results)
    total_vbz = sum(s.vbz for s in space_results)
    total_voz = sum(s.voz for s in space_results)
    total_exhaust_cfm = sum(s.exhaust_cfm for s in space_results)

    # Critical space: highest Voz
    primary_voz = max([s.voz for s in space_results] + [0])
    zp = 1.0 if primary_voz > 0 else 0.0

    if not space_results:
        logger.debug(f"Zone {zone.zone_id} has no spaces")

    return ZoneVentilationResult(
        zone_id=zone.zone_id,
        zone_name=zone.name,
        system_id=zone.system_id,
        ez=zone.ez,
        total_area_sf=total_area_sf,
        total_occupancy=total_occupancy,
        total_vbz=total_vbz,
        total_voz=total_voz,
        total_exhaust_cfm=total_exhaust_cfm,
        primary_voz=primary_voz,
        zp=zp,
        spaces=space_results,
    )
