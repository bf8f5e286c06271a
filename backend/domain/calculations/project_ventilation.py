"""
Project Ventilation Aggregator
Runs every air handler, evaluates spaces outside any zone, and totals the project
"""

import logging
from typing import Optional, Sequence

from domain.calculations.design_conditions import resolve_design_conditions
from domain.calculations.space_ventilation import calculate_space_ventilation
from domain.calculations.standalone_fans import aggregate_standalone_fans
from domain.calculations.system_ventilation import calculate_system_ventilation
from domain.core.fallbacks import BTUH_PER_MBH, BTUH_PER_TON, DEFAULT_ZONE_EZ, round_half_up
from domain.models.project import ProjectSettings
from domain.models.results import ProjectVentilationResult
from domain.models.spaces import Space
from domain.models.zones import HVACSystem, Zone
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)


def calculate_project_ventilation(
    spaces: Sequence[Space],
    zones: Sequence[Zone],
    systems: Sequence[HVACSystem],
    settings: Optional[ProjectSettings] = None
) -> ProjectVentilationResult:
    """
    Complete ventilation analysis for a project snapshot.

    Spaces whose zone_id matches no zone are unassigned: they are evaluated
    alone with Ez = 1.0 and skip system diversity and Ev. Their Voz is added
    to the project outdoor air total next to the systems' Vot. Spaces in a
    zone that has no system are assigned but appear in no system result.

    Cooling and heating totals come from systems only.
    """
    settings = settings or ProjectSettings()

    with log_operation("project_ventilation", {
        "spaces": len(spaces), "zones": len(zones), "systems": len(systems)
    }, logger=logger, level=logging.DEBUG):
        conditions = resolve_design_conditions(settings)

        system_results = tuple(
            calculate_system_ventilation(system, zones, spaces, settings, conditions)
            for system in systems
        )

        zone_ids = {zone.zone_id for zone in zones}
        unassigned = tuple(
            calculate_space_ventilation(space, DEFAULT_ZONE_EZ, settings)
            for space in spaces
            if space.zone_id not in zone_ids
        )
        if unassigned:
            logger.debug(f"{len(unassigned)} spaces are not in any zone")

        orphan_zones = [z.zone_id for z in zones if z.system_id not in {s.system_id for s in systems}]
        if orphan_zones:
            logger.debug(f"Zones without a system are excluded from system totals: {orphan_zones}")

        total_area_sf = sum(s.total_area_sf for s in system_results) + sum(s.area_sf for s in unassigned)
        total_occupancy = sum(s.total_occupancy for s in system_results) + sum(s.occupancy for s in unassigned)
        total_vot = sum(s.vot for s in system_results) + sum(s.voz for s in unassigned)
        total_exhaust_cfm = sum(s.total_exhaust_cfm for s in system_results) + sum(s.exhaust_cfm for s in unassigned)

        total_cooling_btuh = sum(s.cooling_load_btuh for s in system_results)
        total_heating_btuh = sum(s.heating_load_btuh for s in system_results)

        return ProjectVentilationResult(
            location_name=conditions.location_name,
            cooling_db=conditions.cooling_db,
            cooling_wb=conditions.cooling_wb,
            heating_db=conditions.heating_db,
            indoor_summer_db=conditions.indoor_summer_db,
            indoor_winter_db=conditions.indoor_winter_db,
            altitude_correction=round_half_up(conditions.altitude_factor, 3),
            total_area_sf=total_area_sf,
            total_occupancy=total_occupancy,
            total_vot=round_half_up(total_vot),
            total_exhaust_cfm=round_half_up(total_exhaust_cfm),
            total_cooling_btuh=round_half_up(total_cooling_btuh),
            total_heating_btuh=round_half_up(total_heating_btuh),
            total_cooling_tons=round_half_up(total_cooling_btuh / BTUH_PER_TON, 1),
            total_heating_mbh=round_half_up(total_heating_btuh / BTUH_PER_MBH, 1),
            systems=system_results,
            unassigned_spaces=unassigned,
            standalone_fans=aggregate_standalone_fans(spaces),
        )
