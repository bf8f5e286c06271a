"""
Occupancy Diversity Estimates
Starting diversity (D) offered for a system when the editor leaves it blank
"""

from domain.models.zones import SystemType


# VAV occupancy diversity by zone count: (max zones, factor)
VAV_DIVERSITY_STEPS = [
    (2, 0.95),
    (5, 0.85),
    (10, 0.75),
]
VAV_DIVERSITY_LARGE = 0.65


def estimate_diversity_factor(system_type: SystemType, zone_count: int) -> float:
    """
    Estimate occupancy diversity (D) for a system.

    Single zone systems see every occupant at once. DOAS units usually serve
    a whole floor so a small reduction applies. Multi-zone VAV diversity
    grows with the number of zones because peak occupancy rarely coincides.
    """
    if system_type == SystemType.SINGLE_ZONE:
        return 1.0
    if system_type == SystemType.DOAS_100_OA:
        return 0.9

    for max_zones, factor in VAV_DIVERSITY_STEPS:
        if zone_count <= max_zones:
            return factor
    return VAV_DIVERSITY_LARGE
