"""
Default Fallbacks for the Ventilation Pipeline
Every missing or unknown input degrades to one of these named values instead of raising
"""

import math


# Space type not found in the ASHRAE 62.1 table
FALLBACK_RP_CFM_PER_PERSON = 5.0
FALLBACK_RA_CFM_PER_SQFT = 0.06
FALLBACK_OCCUPANCY_DENSITY = 0.0  # people per 1000 sf

# Space records that do not name a type
DEFAULT_SPACE_TYPE_ID = "office"

# Spaces outside any zone are evaluated with ideal distribution
DEFAULT_ZONE_EZ = 1.0

# No location selected and no custom design conditions
FALLBACK_COOLING_DB_F = 95.0
FALLBACK_COOLING_WB_F = 75.0
FALLBACK_HEATING_DB_F = 10.0
FALLBACK_ELEVATION_FT = 0.0
FALLBACK_LOCATION_NAME = "Not specified"

# Indoor design setpoints
DEFAULT_SUMMER_INDOOR_DB_F = 75.0
DEFAULT_SUMMER_INDOOR_RH = 50.0
DEFAULT_WINTER_INDOOR_DB_F = 70.0
DEFAULT_WINTER_INDOOR_RH = 30.0

# Indoor reference used for the cooling enthalpy difference
INDOOR_SUMMER_HUMIDITY_RATIO = 0.009  # lb water / lb dry air (~50% RH at 75°F)
INDOOR_WET_BULB_PROXY_F = 65.0

# Altitude correction only kicks in above this elevation
ALTITUDE_CORRECTION_THRESHOLD_FT = 2000.0

# Fixture count estimate when a space does not list its fixtures
OCCUPANTS_PER_FIXTURE = 10

# System ventilation efficiency (simplified Table 6-3)
EV_SINGLE_ZONE = 1.0
EV_DOAS = 1.0
EV_VAV_FACTOR = 0.85
EV_VAV_FLOOR = 0.6
ZP_FLOOR = 0.5

# Air-side load factors at standard conditions
SENSIBLE_FACTOR = 1.08  # BTU/(hr·CFM·°F)
TOTAL_FACTOR = 4.5  # BTU/(hr·CFM) per BTU/lb of enthalpy difference

BTUH_PER_TON = 12000.0
BTUH_PER_MBH = 1000.0


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round like the report generator does (halves go up, toward +inf),
    not Python's banker's rounding.

    round_half_up(2.5) -> 3, round_half_up(-2.5) -> -2, round_half_up(0.125, 2) -> 0.13
    """
    factor = 10 ** ndigits
    rounded = math.floor(value * factor + 0.5) / factor
    if ndigits == 0:
        return int(rounded)
    return rounded
