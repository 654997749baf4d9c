""" Route hazard levels and tags from endpoint systems """

import logging

from fringeworld import core
from fringeworld.core import tags, SystemType

logger = logging.getLogger(__name__)

CONTESTED_HAZARD = 2
DERELICT_HAZARD = 1
NEBULA_HAZARD = 1
DANGEROUS_HAZARD = 3
PATROLLED_SECURITY = 4

def route_hazard(a:core.StarSystem, b:core.StarSystem) -> int:
    """ unclamped hazard for a route between a and b """
    endpoint_types = (a.system_type, b.system_type)
    hazard = 0
    if SystemType.CONTESTED in endpoint_types:
        hazard += CONTESTED_HAZARD
    if SystemType.DERELICT in endpoint_types:
        hazard += DERELICT_HAZARD
    if SystemType.NEBULA in endpoint_types:
        hazard += NEBULA_HAZARD
    hazard += max(a.metrics.criminal_activity, b.metrics.criminal_activity) // 2
    hazard -= min(a.metrics.security_level, b.metrics.security_level) // 2
    return hazard

def derive_route_hazard(world:core.WorldGraph, route:core.Route) -> None:
    a = world.get_system(route.system_a)
    b = world.get_system(route.system_b)
    assert a is not None and b is not None

    # setter clamps into [0, 5]
    route.hazard_level = route_hazard(a, b)

    endpoint_types = (a.system_type, b.system_type)
    if route.hazard_level >= DANGEROUS_HAZARD:
        route.add_tag(tags.DANGEROUS)
    if min(a.metrics.security_level, b.metrics.security_level) >= PATROLLED_SECURITY:
        route.add_tag(tags.PATROLLED)
    if SystemType.ASTEROID in endpoint_types:
        route.add_tag(tags.ASTEROID_FIELD)
    if SystemType.NEBULA in endpoint_types:
        route.add_tag(tags.HIDDEN)

def update_route_hazards(world:core.WorldGraph) -> None:
    """ must run after system types and metrics are final """
    for route in world.routes():
        derive_route_hazard(world, route)
    logger.info(f'{len(world.dangerous_routes(DANGEROUS_HAZARD))} of {len(world.routes())} routes are dangerous')
