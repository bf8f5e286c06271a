"""
Space Ventilation Calculator
ASHRAE 62.1 Ventilation Rate Procedure for a single space

Every airflow is the larger of the code rate and any ACH-derived rate:
the ACH path can raise a requirement but never lower it below code.
"""

import math
import logging
from typing import Optional

from domain.core.fallbacks import (
    DEFAULT_SPACE_TYPE_ID,
    DEFAULT_ZONE_EZ,
    FALLBACK_RA_CFM_PER_SQFT,
    FALLBACK_RP_CFM_PER_PERSON,
    OCCUPANTS_PER_FIXTURE,
    round_half_up,
)
from domain.models.project import ProjectSettings
from domain.models.results import SpaceVentilationResult
from domain.models.spaces import Space
from services.ashrae62 import SpaceTypeRecord, calculate_default_occupancy, get_space_type

logger = logging.getLogger(__name__)


def resolve_with_ach_floor(code_value: float, ach_value: Optional[float]) -> float:
    """
    Max-of-two-methods rule: an ACH-derived airflow acts as a floor on the
    code-calculated airflow and never reduces it.
    """
    if ach_value is None:
        return code_value
    return max(code_value, ach_value)


def ach_to_cfm(ach: Optional[float], volume_cf: float) -> float:
    """Air changes per hour to CFM; a missing or zero ACH contributes nothing"""
    if not ach:
        return 0.0
    return ach * volume_cf / 60


def _first_set(*values: Optional[float]) -> Optional[float]:
    for value in values:
        if value is not None:
            return value
    return None


def calculate_code_exhaust(
    space: Space,
    space_type: Optional[SpaceTypeRecord],
    occupancy: float
) -> float:
    """
    Table 6-2 exhaust: area based when the type has a CFM/sf rate, otherwise
    fixture based. Fixture counts not entered on the space are estimated as
    one fixture per ten occupants.
    """
    if space_type is None:
        return 0.0

    if space_type.exhaust_cfm_sf:
        return space_type.exhaust_cfm_sf * space.area_sf

    if space_type.exhaust_cfm_unit:
        fixtures = space.fixture_count
        if fixtures is None:
            fixtures = math.ceil(occupancy / OCCUPANTS_PER_FIXTURE)
        return space_type.exhaust_cfm_unit * fixtures

    return 0.0


def calculate_space_ventilation(
    space: Space,
    ez: float = DEFAULT_ZONE_EZ,
    settings: Optional[ProjectSettings] = None
) -> SpaceVentilationResult:
    """
    Calculate outdoor air, exhaust and supply for one space.

    Args:
        space: Space snapshot
        ez: Zone air distribution effectiveness of the owning zone (1.0 when unassigned)
        settings: Project settings; accepted for a uniform pipeline signature,
            space-level airflow does not depend on design weather

    Returns:
        SpaceVentilationResult with integer-rounded CFM values. Missing data
        degrades to fallback rates, this never raises.
    """
    space_type_id = space.space_type or DEFAULT_SPACE_TYPE_ID
    space_type = get_space_type(space_type_id)
    if space_type is None:
        logger.debug(f"Space {space.space_id}: '{space_type_id}' has no Table 6-1 rates, using fallback rates")

    # Ventilation rates: explicit override, then table value, then fallback
    rp = _first_set(space.rp_override, space_type.rp if space_type else None, FALLBACK_RP_CFM_PER_PERSON)
    ra = _first_set(space.ra_override, space_type.ra if space_type else None, FALLBACK_RA_CFM_PER_SQFT)

    if space.occupancy_override is not None:
        occupancy = space.occupancy_override
    else:
        occupancy = calculate_default_occupancy(space_type_id, space.area_sf)

    volume_cf = space.volume_cf

    # Vbz = Rp × Pz + Ra × Az, floored by the ACH-derived airflow
    vbz_code = rp * occupancy + ra * space.area_sf
    vbz = resolve_with_ach_floor(vbz_code, ach_to_cfm(space.ventilation_ach, volume_cf))

    # Voz = Vbz / Ez
    voz = vbz / ez

    exhaust_code = calculate_code_exhaust(space, space_type, occupancy)
    exhaust_cfm = resolve_with_ach_floor(exhaust_code, ach_to_cfm(space.exhaust_ach, volume_cf))

    # An explicit supply ACH sets supply outright, otherwise supply covers
    # the larger of ventilation and exhaust makeup
    supply_forced = ach_to_cfm(space.supply_ach, volume_cf)
    if supply_forced > 0:
        supply_cfm = supply_forced
    else:
        supply_cfm = max(voz, exhaust_cfm)

    logger.debug(
        f"Space {space.space_id} ({space_type_id}): occ={occupancy} "
        f"Vbz={vbz:.1f} Voz={voz:.1f} exhaust={exhaust_cfm:.1f} supply={supply_cfm:.1f}"
    )

    return SpaceVentilationResult(
        space_id=space.space_id,
        space_name=space.name,
        space_type=space_type_id,
        area_sf=space.area_sf,
        volume_cf=volume_cf,
        occupancy=occupancy,
        rp=rp,
        ra=ra,
        vbz=round_half_up(vbz),
        voz=round_half_up(voz),
        exhaust_required=exhaust_cfm > 0,
        exhaust_cfm=round_half_up(exhaust_cfm),
        supply_cfm=round_half_up(supply_cfm),
        ventilation_ach_used=space.ventilation_ach,
        exhaust_ach_used=space.exhaust_ach,
        supply_ach_used=space.supply_ach,
    )
