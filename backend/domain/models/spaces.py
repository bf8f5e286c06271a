"""
Space Model for Ventilation Calculations
Represents individual rooms as supplied by the project editor
"""

from dataclasses import dataclass
from typing import Optional

from domain.core.fallbacks import DEFAULT_SPACE_TYPE_ID


@dataclass(frozen=True)
class Space:
    """
    A single room or space in the building.
    This is the fundamental unit of the ventilation pipeline.

    Every override is optional; None means "not user-specified" and lets the
    ASHRAE 62.1 space-type defaults apply.
    """
    space_id: str
    name: str
    area_sf: float
    ceiling_height_ft: float = 10.0
    space_type: str = DEFAULT_SPACE_TYPE_ID  # ASHRAE 62.1 / 170 space type id

    # Occupancy and rate overrides
    occupancy_override: Optional[float] = None
    rp_override: Optional[float] = None  # CFM/person
    ra_override: Optional[float] = None  # CFM/sf

    # ACH-based sizing (alternative to Rp/Ra)
    ventilation_ach: Optional[float] = None
    exhaust_ach: Optional[float] = None
    supply_ach: Optional[float] = None  # Forces supply CFM when set

    # Fixture-based exhaust (WCs, urinals, showerheads)
    fixture_count: Optional[int] = None

    # Organization
    zone_id: Optional[str] = None

    # Standalone fan tagging, e.g. "EF-1" / "SF-1"
    exhaust_fan_tag: Optional[str] = None
    supply_fan_tag: Optional[str] = None

    @property
    def volume_cf(self) -> float:
        """Room volume for ACH conversions"""
        return self.area_sf * self.ceiling_height_ft
