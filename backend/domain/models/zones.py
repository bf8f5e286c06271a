"""
Zone and Air-Handling System Models
Zones group spaces served by one terminal; systems group zones served by one air handler
"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum


class SystemType(str, Enum):
    """Air-handling system configurations"""
    SINGLE_ZONE = "single_zone"
    VAV_MULTI_ZONE = "vav_multi_zone"
    DOAS_100_OA = "doas_100_oa"  # Dedicated outdoor air, no recirculation


@dataclass(frozen=True)
class Zone:
    """
    A ventilation zone: one or more spaces sharing an air distribution
    configuration. Spaces reference the zone through Space.zone_id.
    """
    zone_id: str
    name: str
    ez: float = 1.0  # Zone air distribution effectiveness
    heating_setpoint_f: float = 70.0
    cooling_setpoint_f: float = 75.0
    system_id: Optional[str] = None


@dataclass(frozen=True)
class HVACSystem:
    """
    An air handler serving one or more zones. Zones reference the system
    through Zone.system_id.
    """
    system_id: str
    name: str
    system_type: SystemType = SystemType.VAV_MULTI_ZONE

    # Energy recovery
    erv_enabled: bool = False
    erv_sensible_efficiency: float = 0.75  # 0-1
    erv_latent_efficiency: float = 0.65  # 0-1

    # Diversity (1.0 for single zone, ~0.8 for multi-zone)
    occupancy_diversity: float = 0.8
