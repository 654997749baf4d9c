""" Faction capitals, territory flood fill and neutral frontier """

import math
import logging
import collections
from typing import Dict, List, Sequence, Deque

import numpy as np

from fringeworld import core, util
from fringeworld.core import tags

logger = logging.getLogger(__name__)

NEUTRAL_KEY = "neutral"

def place_capitals(world:core.WorldGraph, faction_ids:Sequence[str], width:float, height:float) -> Dict[str, int]:
    """ picks one well spaced capital system per faction

    The first capital is the system farthest from the map center, each later
    one maximizes its distance to the nearest capital placed so far. Ties go
    to the lowest id. Factions unknown to world, or beyond the number of
    systems, get no capital.

    returns faction id -> capital system id, in placement order
    """

    systems = world.systems()
    to_place = [x for x in faction_ids if world.get_faction(x) is not None][:len(systems)]
    center = np.array((width/2, height/2))

    capitals:Dict[str, int] = {}
    for faction_id in to_place:
        best_system = None
        best_dist = -1.
        for system in systems:
            if system.system_id in capitals.values():
                continue
            if len(capitals) == 0:
                dist = util.distance(system.loc, center)
            else:
                dist = min(util.distance(system.loc, world.get_system(x).loc) for x in capitals.values()) # type: ignore
            if dist > best_dist:
                best_dist = dist
                best_system = system

        if best_system is None:
            break
        capitals[faction_id] = best_system.system_id
        best_system.add_tag(tags.HUB)
        best_system.add_tag(tags.CORE)
        logger.debug(f'capital of {faction_id} at {best_system}')

    return capitals

def assign_ownership(world:core.WorldGraph, capitals:Dict[str, int]) -> None:
    """ floods ownership out from every capital at once

    A system reached by a second faction at the same hop count it was
    claimed at keeps its first owner but is marked contested and border.
    Systems unreachable from any capital stay unowned.
    """

    ownership:Dict[int, str] = {}
    hops:Dict[int, int] = {}
    for faction_id, system_id in capitals.items():
        ownership[system_id] = faction_id
        hops[system_id] = 0
        world.get_system(system_id).faction_id = faction_id # type: ignore

    queue:Deque[int] = collections.deque(capitals.values())
    while queue:
        current = queue.popleft()
        current_hops = hops[current]
        current_faction = ownership[current]
        for neighbor in world.neighbors(current):
            if neighbor not in ownership:
                ownership[neighbor] = current_faction
                hops[neighbor] = current_hops + 1
                world.get_system(neighbor).faction_id = current_faction # type: ignore
                queue.append(neighbor)
            elif ownership[neighbor] != current_faction and hops[neighbor] == current_hops + 1:
                # equidistant contention, tagging is a set union so repeat
                # marks from a third faction change nothing
                system = world.get_system(neighbor)
                system.add_tag(tags.CONTESTED) # type: ignore
                system.add_tag(tags.BORDER) # type: ignore

def min_capital_distance(world:core.WorldGraph, system:core.StarSystem, capitals:Dict[str, int]) -> float:
    if len(capitals) == 0:
        return math.inf
    return min(util.distance(system.loc, world.get_system(x).loc) for x in capitals.values()) # type: ignore

def mark_neutral_systems(world:core.WorldGraph, capitals:Dict[str, int], neutral_fraction:float) -> List[int]:
    """ clears ownership on the systems farthest from any capital

    int(system count * neutral_fraction) non-capital systems are cleared,
    farthest first, lower id first among equals. Those not already contested
    are tagged frontier.

    returns the neutral system ids, farthest first
    """

    neutral_count = int(len(world.systems()) * neutral_fraction)
    if neutral_count == 0:
        return []

    capital_ids = set(capitals.values())
    candidates = [s for s in world.systems() if s.system_id not in capital_ids]
    # sorted is stable, so id order breaks ties
    candidates = sorted(candidates, key=lambda s: -min_capital_distance(world, s, capitals))

    neutral = []
    for system in candidates[:neutral_count]:
        system.faction_id = None
        if not system.has_tag(tags.CONTESTED):
            system.add_tag(tags.FRONTIER)
        neutral.append(system.system_id)
    return neutral

def assign_territory(world:core.WorldGraph, faction_ids:Sequence[str], width:float, height:float, neutral_fraction:float) -> Dict[str, int]:
    capitals = place_capitals(world, faction_ids, width, height)
    assign_ownership(world, capitals)
    neutral = mark_neutral_systems(world, capitals, neutral_fraction)
    logger.info(f'placed {len(capitals)} capitals, {len(world.systems_by_tag(tags.CONTESTED))} contested, {len(neutral)} neutral')
    return capitals

def faction_system_counts(world:core.WorldGraph) -> Dict[str, int]:
    """ systems per owning faction id, unowned counted under "neutral" """
    counts:Dict[str, int] = collections.defaultdict(int)
    for system in world.systems():
        counts[system.faction_id if system.faction_id is not None else NEUTRAL_KEY] += 1
    return dict(counts)
