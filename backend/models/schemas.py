"""
Project Snapshot Schemas
Validate project data arriving from the editor and convert it to domain entities.
Field names accept both snake_case and the editor's camelCase.
"""

import logging
from collections import Counter
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator
from pydantic.alias_generators import to_camel

from domain.calculations.diversity_factors import estimate_diversity_factor
from domain.core.fallbacks import (
    DEFAULT_SPACE_TYPE_ID,
    DEFAULT_SUMMER_INDOOR_DB_F,
    DEFAULT_SUMMER_INDOOR_RH,
    DEFAULT_WINTER_INDOOR_DB_F,
    DEFAULT_WINTER_INDOOR_RH,
    DEFAULT_ZONE_EZ,
)
from domain.models.project import (
    CoolingDesignCondition,
    CustomLocation,
    HeatingDesignCondition,
    ProjectSettings,
)
from domain.models.spaces import Space
from domain.models.zones import HVACSystem, SystemType, Zone
from services.ashrae62 import apply_space_type_defaults
from services.error_types import DataQualityError, ValidationError, log_error_with_context

logger = logging.getLogger(__name__)


class SnapshotModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class SpaceSchema(SnapshotModel):
    id: str
    name: str
    area_sf: float = Field(..., gt=0)
    ceiling_height_ft: float = Field(10.0, gt=0)
    space_type: str = DEFAULT_SPACE_TYPE_ID

    occupancy_override: Optional[float] = Field(None, ge=0)
    rp_override: Optional[float] = Field(None, ge=0)
    ra_override: Optional[float] = Field(None, ge=0)

    ventilation_ach: Optional[float] = Field(None, ge=0)
    exhaust_ach: Optional[float] = Field(None, ge=0)
    supply_ach: Optional[float] = Field(None, ge=0)

    fixture_count: Optional[int] = Field(None, ge=0)

    # Fill unset ACH fields from the space type row (wellness, ASHRAE 170)
    use_type_defaults: bool = False

    zone_id: Optional[str] = None
    exhaust_fan_tag: Optional[str] = None
    supply_fan_tag: Optional[str] = None

    @field_validator('space_type')
    @classmethod
    def blank_space_type_is_default(cls, v):
        return v.strip() or DEFAULT_SPACE_TYPE_ID

    @field_validator('zone_id', 'exhaust_fan_tag', 'supply_fan_tag')
    @classmethod
    def blank_reference_is_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    def to_domain(self) -> Space:
        space = Space(
            space_id=self.id,
            name=self.name,
            area_sf=self.area_sf,
            ceiling_height_ft=self.ceiling_height_ft,
            space_type=self.space_type,
            occupancy_override=self.occupancy_override,
            rp_override=self.rp_override,
            ra_override=self.ra_override,
            ventilation_ach=self.ventilation_ach,
            exhaust_ach=self.exhaust_ach,
            supply_ach=self.supply_ach,
            fixture_count=self.fixture_count,
            zone_id=self.zone_id,
            exhaust_fan_tag=self.exhaust_fan_tag,
            supply_fan_tag=self.supply_fan_tag,
        )
        if self.use_type_defaults:
            return apply_space_type_defaults(space)
        return space


class ZoneSchema(SnapshotModel):
    id: str
    name: str
    ez: float = Field(DEFAULT_ZONE_EZ, gt=0)
    heating_setpoint_f: float = 70.0
    cooling_setpoint_f: float = 75.0
    system_id: Optional[str] = None

    def to_domain(self) -> Zone:
        return Zone(
            zone_id=self.id,
            name=self.name,
            ez=self.ez,
            heating_setpoint_f=self.heating_setpoint_f,
            cooling_setpoint_f=self.cooling_setpoint_f,
            system_id=self.system_id or None,
        )


class SystemSchema(SnapshotModel):
    id: str
    name: str
    system_type: SystemType = SystemType.VAV_MULTI_ZONE
    erv_enabled: bool = False
    erv_sensible_efficiency: float = Field(0.75, ge=0, le=1)
    erv_latent_efficiency: float = Field(0.65, ge=0, le=1)
    # Estimated from the system type and zone count when not given
    occupancy_diversity: Optional[float] = Field(None, ge=0, le=1)

    def to_domain(self, zone_count: int = 1) -> HVACSystem:
        diversity = self.occupancy_diversity
        if diversity is None:
            diversity = estimate_diversity_factor(self.system_type, zone_count)
        return HVACSystem(
            system_id=self.id,
            name=self.name,
            system_type=self.system_type,
            erv_enabled=self.erv_enabled,
            erv_sensible_efficiency=self.erv_sensible_efficiency,
            erv_latent_efficiency=self.erv_latent_efficiency,
            occupancy_diversity=diversity,
        )


class CustomLocationSchema(BaseModel):
    # Column-style names match the location table, no camelCase
    model_config = ConfigDict(extra="ignore")

    name: str
    cooling_04_db: float
    cooling_04_mcwb: float
    cooling_1_db: float
    cooling_1_mcwb: float
    heating_99_db: float
    heating_996_db: float
    elevation_ft: float = 0.0

    def to_domain(self) -> CustomLocation:
        return CustomLocation(**self.model_dump())


class ProjectSettingsSchema(SnapshotModel):
    location_id: Optional[str] = None
    custom_location: Optional[CustomLocationSchema] = None
    cooling_design_condition: CoolingDesignCondition = CoolingDesignCondition.PCT_0_4
    heating_design_condition: HeatingDesignCondition = HeatingDesignCondition.PCT_99
    summer_indoor_db: float = DEFAULT_SUMMER_INDOOR_DB_F
    summer_indoor_rh: float = Field(DEFAULT_SUMMER_INDOOR_RH, ge=0, le=100)
    winter_indoor_db: float = DEFAULT_WINTER_INDOOR_DB_F
    winter_indoor_rh: float = Field(DEFAULT_WINTER_INDOOR_RH, ge=0, le=100)
    altitude_correction: bool = True

    def to_domain(self) -> ProjectSettings:
        return ProjectSettings(
            location_id=self.location_id or None,
            custom_location=self.custom_location.to_domain() if self.custom_location else None,
            cooling_design_condition=self.cooling_design_condition,
            heating_design_condition=self.heating_design_condition,
            summer_indoor_db=self.summer_indoor_db,
            summer_indoor_rh=self.summer_indoor_rh,
            winter_indoor_db=self.winter_indoor_db,
            winter_indoor_rh=self.winter_indoor_rh,
            altitude_correction=self.altitude_correction,
        )


class ProjectSnapshot(SnapshotModel):
    """Everything the ventilation pipeline reads for one calculation"""
    spaces: List[SpaceSchema] = Field(default_factory=list)
    zones: List[ZoneSchema] = Field(default_factory=list)
    systems: List[SystemSchema] = Field(default_factory=list)
    settings: ProjectSettingsSchema = Field(default_factory=ProjectSettingsSchema)

    def find_dangling_references(self) -> List[DataQualityError]:
        """
        References to zones or systems that are not in the snapshot.
        They are tolerated (the space becomes unassigned, the zone serves no
        system) but usually mean the editor sent a partial project.
        """
        zone_ids = {z.id for z in self.zones}
        system_ids = {s.id for s in self.systems}
        issues = []
        for space in self.spaces:
            if space.zone_id is not None and space.zone_id not in zone_ids:
                issues.append(DataQualityError(
                    f"Space '{space.id}' references unknown zone",
                    details={"space_id": space.id, "zone_id": space.zone_id}
                ))
        for zone in self.zones:
            if zone.system_id and zone.system_id not in system_ids:
                issues.append(DataQualityError(
                    f"Zone '{zone.id}' references unknown system",
                    details={"zone_id": zone.id, "system_id": zone.system_id}
                ))
        return issues

    def to_domain(self):
        """Returns (spaces, zones, systems, settings) ready for the calculators"""
        for issue in self.find_dangling_references():
            log_error_with_context(issue, {"stage": "snapshot"})
        zone_counts = Counter(z.system_id for z in self.zones if z.system_id)
        return (
            [s.to_domain() for s in self.spaces],
            [z.to_domain() for z in self.zones],
            [s.to_domain(zone_counts[s.id]) for s in self.systems],
            self.settings.to_domain(),
        )


class SpaceCalculationRequest(SnapshotModel):
    """A single space evaluated outside any zone or with an explicit Ez"""
    space: SpaceSchema
    ez: float = Field(DEFAULT_ZONE_EZ, gt=0)
    settings: ProjectSettingsSchema = Field(default_factory=ProjectSettingsSchema)


def _error_details(exc: PydanticValidationError) -> Dict[str, Any]:
    return {
        "errors": [
            {"loc": [str(part) for part in err["loc"]], "msg": err["msg"], "type": err["type"]}
            for err in exc.errors(include_url=False)
        ]
    }


def snapshot_from_dict(data: Dict[str, Any]) -> ProjectSnapshot:
    """
    Validate a raw project snapshot.

    Raises:
        ValidationError: when the snapshot cannot be interpreted
    """
    try:
        return ProjectSnapshot.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid project snapshot ({e.error_count()} errors)",
            details=_error_details(e)
        ) from e
