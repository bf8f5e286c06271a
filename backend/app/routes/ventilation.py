import logging
from fastapi import APIRouter, Body
from typing import Any, Dict, Optional

from domain.calculations.project_ventilation import calculate_project_ventilation
from domain.calculations.space_ventilation import calculate_space_ventilation
from models.schemas import SpaceCalculationRequest, snapshot_from_dict
from services import ashrae62, climate_data
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/project")
async def calculate_project(payload: Dict[str, Any] = Body(...)):
    """
    Full space → zone → system → project ventilation analysis

    Invalid snapshots are rejected with 422 and the error envelope.
    """
    snapshot = snapshot_from_dict(payload)
    spaces, zones, systems, settings = snapshot.to_domain()
    with log_operation("ventilation_request", {
        "spaces": len(spaces), "zones": len(zones), "systems": len(systems),
        "location_id": settings.location_id,
    }, logger=logger):
        result = calculate_project_ventilation(spaces, zones, systems, settings)
    return result.to_json()


@router.post("/space")
async def calculate_space(request: SpaceCalculationRequest):
    """Ventilation for one space at a given Ez"""
    result = calculate_space_ventilation(
        request.space.to_domain(), request.ez, request.settings.to_domain()
    )
    return result.to_json()


@router.get("/space-types")
async def list_space_types(query: Optional[str] = None, category: Optional[str] = None):
    """ASHRAE 62.1 space types, optionally filtered by search text and category"""
    if query:
        space_types = ashrae62.search_space_types(query)
    else:
        space_types = ashrae62.get_all_space_types()
    if category:
        space_types = [st for st in space_types if st.category == category]

    return {
        "categories": ashrae62.get_categories(),
        "space_types": [
            {
                "id": st.id,
                "category": st.category,
                "display_name": st.display_name,
                "rp": st.rp,
                "ra": st.ra,
                "default_occupancy": st.default_occupancy,
                "air_class": st.air_class,
                "exhaust_cfm_sf": st.exhaust_cfm_sf,
                "exhaust_cfm_unit": st.exhaust_cfm_unit,
                "exhaust_min_per_room": st.exhaust_min_per_room,
                "ventilation_ach": st.ventilation_ach,
                "exhaust_ach": st.exhaust_ach,
                "notes": st.exhaust_notes,
            }
            for st in space_types
        ],
    }


@router.get("/locations")
async def list_locations(query: Optional[str] = None):
    """ASHRAE design weather locations; without a query every location is returned"""
    if query:
        locations = climate_data.search_locations(query)
    else:
        locations = climate_data.get_all_locations()

    return {
        "locations": [
            {
                "id": loc.id,
                "display_name": climate_data.format_location_display(loc),
                "country": loc.country,
                "elevation_ft": loc.elevation_ft,
                "preview": climate_data.format_design_conditions_preview(loc),
            }
            for loc in locations
        ]
    }


@router.get("/ez-values")
async def list_ez_values():
    """Zone air distribution effectiveness configurations (Table 6-4)"""
    return {
        "ez_values": [
            {"id": config.id, "description": config.description, "ez": config.ez}
            for config in ashrae62.ZONE_EZ_VALUES
        ]
    }
