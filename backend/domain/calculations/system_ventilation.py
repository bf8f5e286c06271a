"""
System Ventilation Calculator
ASHRAE 62.1 multi-zone outdoor air intake with ERV pre-treatment and
ventilation loads at design conditions
"""

import math
import logging
from typing import Iterable, Optional, Sequence

from domain.calculations.design_conditions import DesignConditions, resolve_design_conditions
from domain.calculations.psychrometrics import calculate_enthalpy, estimate_humidity_ratio
from domain.calculations.zone_ventilation import calculate_zone_ventilation
from domain.core.fallbacks import (
    BTUH_PER_MBH,
    BTUH_PER_TON,
    EV_DOAS,
    EV_SINGLE_ZONE,
    EV_VAV_FACTOR,
    EV_VAV_FLOOR,
    INDOOR_SUMMER_HUMIDITY_RATIO,
    INDOOR_WET_BULB_PROXY_F,
    SENSIBLE_FACTOR,
    TOTAL_FACTOR,
    ZP_FLOOR,
    round_half_up,
)
from domain.models.project import ProjectSettings
from domain.models.results import SystemVentilationResult
from domain.models.spaces import Space
from domain.models.zones import HVACSystem, SystemType, Zone

logger = logging.getLogger(__name__)


def calculate_system_ventilation_efficiency(system_type: SystemType, zps: Iterable[float]) -> float:
    """
    System ventilation efficiency (Ev).

    Single zone and DOAS systems do not recirculate between zones, Ev = 1.0.
    For multi-zone VAV the worst zone primary OA fraction (floored at 0.5)
    gives Ev = min(1 / maxZp, 1.0) × 0.85, floored at 0.6. This is a
    conservative stand-in for the iterative Table 6-3 procedure.
    """
    zps = list(zps)
    if system_type == SystemType.VAV_MULTI_ZONE and zps:
        max_zp = max(zps + [ZP_FLOOR])
        ev = min(1 / max_zp, 1.0) * EV_VAV_FACTOR
        return max(ev, EV_VAV_FLOOR)
    if system_type == SystemType.DOAS_100_OA:
        return EV_DOAS
    return EV_SINGLE_ZONE


def _safe_ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator


def calculate_system_ventilation(
    system: HVACSystem,
    zones: Sequence[Zone],
    spaces: Sequence[Space],
    settings: Optional[ProjectSettings] = None,
    conditions: Optional[DesignConditions] = None
) -> SystemVentilationResult:
    """
    Calculate outdoor air intake and ventilation loads for one air handler.

    Args:
        system: Air handler snapshot
        zones: All project zones; those with a matching system_id are used
        spaces: All project spaces
        settings: Project settings (design location, indoor setpoints, altitude toggle)
        conditions: Pre-resolved design conditions; resolved from settings when omitted

    Returns:
        SystemVentilationResult. An empty system yields zero airflow and loads.
    """
    if conditions is None:
        conditions = resolve_design_conditions(settings)

    zone_results = tuple(
        calculate_zone_ventilation(zone, spaces, settings)
        for zone in zones
        if zone.system_id == system.system_id
    )
    space_results = [sp for zone in zone_results for sp in zone.spaces]

    total_area_sf = sum(z.total_area_sf for z in zone_results)
    total_occupancy = sum(z.total_occupancy for z in zone_results)
    total_exhaust_cfm = sum(z.total_exhaust_cfm for z in zone_results)

    diversity = system.occupancy_diversity
    diversified_occupancy = math.ceil(total_occupancy * diversity)

    # Vou = D × Σ(Rp × Pz) + Σ(Ra × Az); diversity only reduces the people term
    sum_rp_pz = sum(sp.rp * sp.occupancy for sp in space_results)
    sum_ra_az = sum(sp.ra * sp.area_sf for sp in space_results)
    vou = diversity * sum_rp_pz + sum_ra_az

    ev = calculate_system_ventilation_efficiency(system.system_type, (z.zp for z in zone_results))

    # Vot = Vou / Ev, then more volumetric flow at altitude for the same air mass
    vot = vou / ev / conditions.altitude_factor

    cooling_db = conditions.cooling_db
    cooling_wb = conditions.cooling_wb
    heating_db = conditions.heating_db
    indoor_summer_db = conditions.indoor_summer_db
    indoor_winter_db = conditions.indoor_winter_db

    cooling_db_eff = cooling_db
    cooling_wb_eff = cooling_wb
    heating_db_eff = heating_db
    erv_savings = 0

    if system.erv_enabled:
        sensible_eff = system.erv_sensible_efficiency
        latent_eff = system.erv_latent_efficiency

        # Leaving air: T_out - Es × (T_out - T_in)
        cooling_db_eff = cooling_db - sensible_eff * (cooling_db - indoor_summer_db)
        heating_db_eff = heating_db + sensible_eff * (indoor_winter_db - heating_db)
        cooling_wb_eff = cooling_wb - latent_eff * (cooling_wb - INDOOR_WET_BULB_PROXY_F)

        # Advisory CFM equivalent, does not feed the loads below
        savings_cooling = vot * _safe_ratio(cooling_db - cooling_db_eff, cooling_db - indoor_summer_db)
        savings_heating = vot * _safe_ratio(heating_db_eff - heating_db, indoor_winter_db - heating_db)
        erv_savings = round_half_up(max(savings_cooling, savings_heating))

    # Sensible: Q = 1.08 × CFM × ΔT
    sensible_cooling = SENSIBLE_FACTOR * vot * max(cooling_db_eff - indoor_summer_db, 0)
    sensible_heating = SENSIBLE_FACTOR * vot * max(indoor_winter_db - heating_db_eff, 0)

    # Total: Q = 4.5 × CFM × Δh
    outdoor_w = estimate_humidity_ratio(cooling_db_eff, cooling_wb_eff)
    outdoor_h = calculate_enthalpy(cooling_db_eff, outdoor_w)
    indoor_h = calculate_enthalpy(indoor_summer_db, INDOOR_SUMMER_HUMIDITY_RATIO)
    total_cooling = TOTAL_FACTOR * vot * max(outdoor_h - indoor_h, 0)
    latent_cooling = max(total_cooling - sensible_cooling, 0)

    logger.debug(
        f"System {system.system_id} ({system.system_type.value}): zones={len(zone_results)} "
        f"Vou={vou:.1f} Ev={ev:.3f} Vot={vot:.1f} cooling={total_cooling:.0f} heating={sensible_heating:.0f}"
    )

    return SystemVentilationResult(
        system_id=system.system_id,
        system_name=system.name,
        system_type=system.system_type.value,
        total_area_sf=total_area_sf,
        total_occupancy=total_occupancy,
        vou=round_half_up(vou),
        ev=round_half_up(ev, 2),
        vot=round_half_up(vot),
        diversity_factor=diversity,
        diversified_occupancy=diversified_occupancy,
        erv_enabled=system.erv_enabled,
        erv_savings=erv_savings,
        total_exhaust_cfm=total_exhaust_cfm,
        cooling_load_btuh=round_half_up(total_cooling),
        heating_load_btuh=round_half_up(sensible_heating),
        cooling_load_tons=round_half_up(total_cooling / BTUH_PER_TON, 1),
        heating_load_mbh=round_half_up(sensible_heating / BTUH_PER_MBH, 1),
        sensible_cooling_btuh=round_half_up(sensible_cooling),
        latent_cooling_btuh=round_half_up(latent_cooling),
        zones=zone_results,
    )
