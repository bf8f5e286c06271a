"""
Ventilation Result Structures
Immutable snapshots produced by each stage of the space → zone → system → project pipeline
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class SpaceVentilationResult:
    """ASHRAE 62.1 ventilation for one space"""
    space_id: str
    space_name: str
    space_type: str
    area_sf: float
    volume_cf: float
    occupancy: float

    # Rates actually used (after overrides and fallbacks)
    rp: float  # CFM per person
    ra: float  # CFM per sf

    vbz: int  # Breathing zone outdoor airflow
    voz: int  # Zone outdoor airflow (after Ez)

    exhaust_required: bool
    exhaust_cfm: int
    supply_cfm: int

    # ACH values that fed the max-of-two-methods comparison
    ventilation_ach_used: Optional[float] = None
    exhaust_ach_used: Optional[float] = None
    supply_ach_used: Optional[float] = None

    # Loads are only computed at the system level
    cooling_load_btuh: float = 0
    heating_load_btuh: float = 0

    def to_json(self) -> Dict[str, Any]:
        return {
            "space_id": self.space_id,
            "space_name": self.space_name,
            "space_type": self.space_type,
            "area_sf": self.area_sf,
            "volume_cf": self.volume_cf,
            "occupancy": self.occupancy,
            "rp": self.rp,
            "ra": self.ra,
            "vbz": self.vbz,
            "voz": self.voz,
            "exhaust_required": self.exhaust_required,
            "exhaust_cfm": self.exhaust_cfm,
            "supply_cfm": self.supply_cfm,
            "ventilation_ach_used": self.ventilation_ach_used,
            "exhaust_ach_used": self.exhaust_ach_used,
            "supply_ach_used": self.supply_ach_used,
            "cooling_load_btuh": self.cooling_load_btuh,
            "heating_load_btuh": self.heating_load_btuh,
        }


@dataclass(frozen=True)
class ZoneVentilationResult:
    """Aggregated ventilation for one zone"""
    zone_id: str
    zone_name: str
    system_id: Optional[str]
    ez: float

    total_area_sf: float
    total_occupancy: float
    total_vbz: int
    total_voz: int
    total_exhaust_cfm: int

    primary_voz: int  # Highest space Voz (critical space for VAV)
    zp: float  # Primary outdoor-air fraction

    cooling_load_btuh: float = 0
    heating_load_btuh: float = 0

    spaces: Tuple[SpaceVentilationResult, ...] = field(default_factory=tuple)

    @property
    def space_count(self) -> int:
        return len(self.spaces)

    def to_json(self) -> Dict[str, Any]:
        return {
            "zone_id": self.zone_id,
            "zone_name": self.zone_name,
            "system_id": self.system_id,
            "ez": self.ez,
            "total_area_sf": self.total_area_sf,
            "total_occupancy": self.total_occupancy,
            "total_vbz": self.total_vbz,
            "total_voz": self.total_voz,
            "total_exhaust_cfm": self.total_exhaust_cfm,
            "primary_voz": self.primary_voz,
            "zp": self.zp,
            "cooling_load_btuh": self.cooling_load_btuh,
            "heating_load_btuh": self.heating_load_btuh,
            "spaces": [space.to_json() for space in self.spaces],
        }


@dataclass(frozen=True)
class SystemVentilationResult:
    """Outdoor air intake and ventilation loads for one air handler"""
    system_id: str
    system_name: str
    system_type: str

    total_area_sf: float
    total_occupancy: float

    vou: int  # Uncorrected outdoor air intake
    ev: float  # System ventilation efficiency
    vot: int  # Outdoor air intake after Ev and altitude correction

    diversity_factor: float
    diversified_occupancy: int

    erv_enabled: bool
    erv_savings: int  # Advisory CFM equivalent, not used in loads

    total_exhaust_cfm: int

    cooling_load_btuh: int  # Total (sensible + latent)
    heating_load_btuh: int
    cooling_load_tons: float
    heating_load_mbh: float
    sensible_cooling_btuh: int
    latent_cooling_btuh: int

    zones: Tuple[ZoneVentilationResult, ...] = field(default_factory=tuple)

    def to_json(self) -> Dict[str, Any]:
        return {
            "system_id": self.system_id,
            "system_name": self.system_name,
            "system_type": self.system_type,
            "total_area_sf": self.total_area_sf,
            "total_occupancy": self.total_occupancy,
            "vou": self.vou,
            "ev": self.ev,
            "vot": self.vot,
            "diversity_factor": self.diversity_factor,
            "diversified_occupancy": self.diversified_occupancy,
            "erv_enabled": self.erv_enabled,
            "erv_savings": self.erv_savings,
            "total_exhaust_cfm": self.total_exhaust_cfm,
            "cooling_load_btuh": self.cooling_load_btuh,
            "heating_load_btuh": self.heating_load_btuh,
            "cooling_load_tons": self.cooling_load_tons,
            "heating_load_mbh": self.heating_load_mbh,
            "sensible_cooling_btuh": self.sensible_cooling_btuh,
            "latent_cooling_btuh": self.latent_cooling_btuh,
            "zones": [zone.to_json() for zone in self.zones],
        }


@dataclass(frozen=True)
class FanSpaceContribution:
    """One tagged space's share of a standalone fan"""
    space_name: str
    cfm: int


@dataclass(frozen=True)
class StandaloneFanSummary:
    """Exhaust or supply fan serving tagged spaces outside the air handlers"""
    tag: str
    fan_type: str  # "exhaust" or "supply"
    total_cfm: int
    spaces: Tuple[FanSpaceContribution, ...] = field(default_factory=tuple)

    def to_json(self) -> Dict[str, Any]:
        return {
            "tag": self.tag,
            "fan_type": self.fan_type,
            "total_cfm": self.total_cfm,
            "spaces": [
                {"space_name": s.space_name, "cfm": s.cfm} for s in self.spaces
            ],
        }


@dataclass(frozen=True)
class ProjectVentilationResult:
    """Complete ventilation analysis for a project"""
    # Design conditions
    location_name: str
    cooling_db: float
    cooling_wb: float
    heating_db: float
    indoor_summer_db: float
    indoor_winter_db: float
    altitude_correction: float

    # Totals
    total_area_sf: float
    total_occupancy: float
    total_vot: int  # Systems' Vot plus unassigned spaces' Voz
    total_exhaust_cfm: int

    total_cooling_btuh: int
    total_heating_btuh: int
    total_cooling_tons: float
    total_heating_mbh: float

    systems: Tuple[SystemVentilationResult, ...] = field(default_factory=tuple)
    unassigned_spaces: Tuple[SpaceVentilationResult, ...] = field(default_factory=tuple)
    standalone_fans: Tuple[StandaloneFanSummary, ...] = field(default_factory=tuple)

    def to_json(self) -> Dict[str, Any]:
        return {
            "design_conditions": {
                "location_name": self.location_name,
                "cooling_db": self.cooling_db,
                "cooling_wb": self.cooling_wb,
                "heating_db": self.heating_db,
                "indoor_summer_db": self.indoor_summer_db,
                "indoor_winter_db": self.indoor_winter_db,
                "altitude_correction": self.altitude_correction,
            },
            "totals": {
                "total_area_sf": self.total_area_sf,
                "total_occupancy": self.total_occupancy,
                "total_vot": self.total_vot,
                "total_exhaust_cfm": self.total_exhaust_cfm,
                "total_cooling_btuh": self.total_cooling_btuh,
                "total_heating_btuh": self.total_heating_btuh,
                "total_cooling_tons": self.total_cooling_tons,
                "total_heating_mbh": self.total_heating_mbh,
            },
            "systems": [system.to_json() for system in self.systems],
            "unassigned_spaces": [space.to_json() for space in self.unassigned_spaces],
            "standalone_fans": [fan.to_json() for fan in self.standalone_fans],
        }
