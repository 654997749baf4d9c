""" Well-known tags for systems, stations and routes.

Tags are free-form strings, anything can carry any tag. These are the ones
generation assigns and downstream consumers query for.
"""

from typing import FrozenSet

# systems
CORE = "core"
FRONTIER = "frontier"
BORDER = "border"
INDUSTRIAL = "industrial"
MINING = "mining"
AGRICULTURAL = "agricultural"
LAWLESS = "lawless"
MILITARY = "military"
CONTESTED = "contested"
HUB = "hub"
PIRATE_HAVEN = "pirate_haven"
RESEARCH_OUTPOST = "research_outpost"
QUARANTINED = "quarantined"

# stations
TRADE_HUB = "trade_hub"
BLACK_MARKET = "black_market"
REPAIR_YARD = "repair_yard"
RECRUITMENT = "recruitment"
MEDICAL = "medical"
ENTERTAINMENT = "entertainment"
REFINERY = "refinery"
SHIPYARD = "shipyard"

# routes
DANGEROUS = "dangerous"
PATROLLED = "patrolled"
HIDDEN = "hidden"
BLOCKADED = "blockaded"
SHORTCUT = "shortcut"
ASTEROID_FIELD = "asteroid_field"
NEBULA = "nebula"
UNSTABLE = "unstable"

SYSTEM_TAGS:FrozenSet[str] = frozenset([
    CORE, FRONTIER, BORDER, INDUSTRIAL, MINING, AGRICULTURAL, LAWLESS,
    MILITARY, CONTESTED, HUB, PIRATE_HAVEN, RESEARCH_OUTPOST, QUARANTINED,
])

STATION_TAGS:FrozenSet[str] = frozenset([
    TRADE_HUB, BLACK_MARKET, REPAIR_YARD, RECRUITMENT, MEDICAL,
    ENTERTAINMENT, REFINERY, SHIPYARD,
])

ROUTE_TAGS:FrozenSet[str] = frozenset([
    DANGEROUS, PATROLLED, HIDDEN, BLOCKADED, SHORTCUT, ASTEROID_FIELD,
    NEBULA, UNSTABLE,
])

def is_system_tag(tag:str) -> bool:
    return tag in SYSTEM_TAGS

def is_station_tag(tag:str) -> bool:
    return tag in STATION_TAGS

def is_route_tag(tag:str) -> bool:
    return tag in ROUTE_TAGS
