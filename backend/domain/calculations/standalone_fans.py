"""
Standalone Fan Aggregation
Groups spaces tagged to exhaust/supply fans that sit outside the air handlers
"""

import logging
from typing import Dict, List, Sequence, Tuple

from domain.calculations.space_ventilation import ach_to_cfm
from domain.core.fallbacks import round_half_up
from domain.models.results import FanSpaceContribution, StandaloneFanSummary
from domain.models.spaces import Space

logger = logging.getLogger(__name__)

EXHAUST_FAN = "exhaust"
SUPPLY_FAN = "supply"


def aggregate_standalone_fans(spaces: Sequence[Space]) -> Tuple[StandaloneFanSummary, ...]:
    """
    Sum tagged spaces per fan tag.

    A tagged space contributes its own exhaust/supply ACH × volume / 60;
    a tag without ACH contributes 0 CFM but still lists the space.
    Fans are ordered by tag, exhaust before supply for a shared tag.
    """
    # tag -> (raw total, contributions), insertion ordered
    exhaust: Dict[str, Tuple[float, List[FanSpaceContribution]]] = {}
    supply: Dict[str, Tuple[float, List[FanSpaceContribution]]] = {}

    for space in spaces:
        if space.exhaust_fan_tag:
            cfm = ach_to_cfm(space.exhaust_ach, space.volume_cf)
            _add(exhaust, space.exhaust_fan_tag, space.name, cfm)
        if space.supply_fan_tag:
            cfm = ach_to_cfm(space.supply_ach, space.volume_cf)
            _add(supply, space.supply_fan_tag, space.name, cfm)

    fans = _summaries(exhaust, EXHAUST_FAN) + _summaries(supply, SUPPLY_FAN)
    fans.sort(key=lambda fan: fan.tag)

    if fans:
        logger.debug(f"Aggregated {len(fans)} standalone fans")
    return tuple(fans)


def _add(fans: Dict[str, Tuple[float, List[FanSpaceContribution]]], tag: str, space_name: str, cfm: float):
    total, contributions = fans.get(tag, (0.0, []))
    contributions.append(FanSpaceContribution(space_name=space_name, cfm=round_half_up(cfm)))
    fans[tag] = (total + cfm, contributions)


def _summaries(fans: Dict[str, Tuple[float, List[FanSpaceContribution]]], fan_type: str) -> List[StandaloneFanSummary]:
    return [
        StandaloneFanSummary(
            tag=tag,
            fan_type=fan_type,
            total_cfm=round_half_up(total),
            spaces=tuple(contributions),
        )
        for tag, (total, contributions) in fans.items()
    ]
