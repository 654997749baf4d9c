""" Stations for inhabited systems """

import enum
import logging
from typing import Collection, Dict, Mapping, Optional, Sequence, Tuple

import numpy as np

from fringeworld import core
from fringeworld.core import tags, SystemType, FacilityType
from .names import NameGenerator

logger = logging.getLogger(__name__)

class StationArchetype(enum.Enum):
    HUB = enum.auto()
    OUTPOST = enum.auto()
    MINING = enum.auto()
    PIRATE_DEN = enum.auto()
    MILITARY = enum.auto()
    BLACK_MARKET = enum.auto()

# (facility type, level) in the order they're added, then station tags
FACILITY_BUNDLES:Mapping[StationArchetype, Tuple[Sequence[Tuple[FacilityType, int]], Sequence[str]]] = {
    StationArchetype.HUB: (
        [
            (FacilityType.SHOP, 2),
            (FacilityType.MISSION_BOARD, 2),
            (FacilityType.REPAIR_YARD, 1),
            (FacilityType.BAR, 1),
            (FacilityType.RECRUITMENT, 1),
            (FacilityType.FUEL_DEPOT, 1),
        ],
        [tags.HUB, tags.TRADE_HUB],
    ),
    StationArchetype.OUTPOST: (
        [
            (FacilityType.SHOP, 1),
            (FacilityType.MISSION_BOARD, 1),
            (FacilityType.FUEL_DEPOT, 1),
        ],
        [tags.FRONTIER],
    ),
    StationArchetype.MINING: (
        [
            (FacilityType.SHOP, 1),
            (FacilityType.MISSION_BOARD, 1),
            (FacilityType.REPAIR_YARD, 2),
            (FacilityType.FUEL_DEPOT, 2),
        ],
        [tags.INDUSTRIAL],
    ),
    StationArchetype.PIRATE_DEN: (
        [
            (FacilityType.BAR, 2),
            (FacilityType.BLACK_MARKET, 2),
            (FacilityType.RECRUITMENT, 1),
            (FacilityType.REPAIR_YARD, 1),
        ],
        [tags.BLACK_MARKET],
    ),
    StationArchetype.MILITARY: (
        [
            (FacilityType.MISSION_BOARD, 2),
            (FacilityType.REPAIR_YARD, 2),
            (FacilityType.MEDICAL, 2),
            (FacilityType.FUEL_DEPOT, 2),
        ],
        [tags.MILITARY],
    ),
    StationArchetype.BLACK_MARKET: (
        [
            (FacilityType.BAR, 1),
            (FacilityType.BLACK_MARKET, 3),
            (FacilityType.RECRUITMENT, 1),
        ],
        [tags.BLACK_MARKET],
    ),
}

NEBULA_BLACK_MARKET_CRIME = 3

def should_have_station(system:core.StarSystem, inhabited_types:Collection[SystemType]) -> bool:
    # derelict and contested systems never get stations, whatever the config
    if system.system_type in (SystemType.DERELICT, SystemType.CONTESTED):
        return False
    return system.system_type in inhabited_types

def choose_archetype(system:core.StarSystem) -> StationArchetype:
    """ first matching rule wins: hub, military, pirate haven, lawless, then
    by system type """
    if system.has_tag(tags.HUB):
        return StationArchetype.HUB
    elif system.has_tag(tags.MILITARY):
        return StationArchetype.MILITARY
    elif system.has_tag(tags.PIRATE_HAVEN):
        return StationArchetype.PIRATE_DEN
    elif system.has_tag(tags.LAWLESS):
        return StationArchetype.BLACK_MARKET

    if system.system_type == SystemType.ASTEROID:
        return StationArchetype.MINING
    elif system.system_type == SystemType.NEBULA:
        if system.metrics.criminal_activity >= NEBULA_BLACK_MARKET_CRIME:
            return StationArchetype.BLACK_MARKET
        return StationArchetype.OUTPOST
    else:
        return StationArchetype.OUTPOST

def create_station(station_id:int, name:str, system:core.StarSystem, archetype:StationArchetype) -> core.Station:
    station = core.Station(station_id, name, system.system_id, system.faction_id)
    facilities, station_tags = FACILITY_BUNDLES[archetype]
    for facility_type, level in facilities:
        station.add_facility(facility_type, level)
    for tag in station_tags:
        station.add_tag(tag)
    return station

def create_station_for_system(r:np.random.Generator, world:core.WorldGraph, system:core.StarSystem, name_generator:NameGenerator) -> core.Station:
    # id and name come before the archetype, which draws nothing
    station_id = world.generate_station_id()
    name = name_generator.station_name(r, system.name)
    return create_station(station_id, name, system, choose_archetype(system))

def generate_stations(r:np.random.Generator, world:core.WorldGraph, inhabited_types:Collection[SystemType], name_generator:NameGenerator) -> None:
    for system in world.systems():
        if not should_have_station(system, inhabited_types):
            continue
        world.add_station(create_station_for_system(r, world, system, name_generator))
    logger.info(f'created {len(world.stations())} stations {station_type_counts(world)}')

def station_archetype_of(station:core.Station) -> Optional[StationArchetype]:
    """ best guess at the archetype a station was built from, by its tags

    Pirate dens and black markets share a tag and both read as BLACK_MARKET.
    """
    if station.has_tag(tags.HUB):
        return StationArchetype.HUB
    elif station.has_tag(tags.MILITARY):
        return StationArchetype.MILITARY
    elif station.has_tag(tags.BLACK_MARKET):
        return StationArchetype.BLACK_MARKET
    elif station.has_tag(tags.INDUSTRIAL):
        return StationArchetype.MINING
    elif station.has_tag(tags.FRONTIER):
        return StationArchetype.OUTPOST
    return None

def station_type_counts(world:core.WorldGraph) -> Dict[str, int]:
    counts:Dict[str, int] = {}
    for station in world.stations():
        archetype = station_archetype_of(station)
        key = archetype.name if archetype is not None else "UNKNOWN"
        counts[key] = counts.get(key, 0) + 1
    return counts
