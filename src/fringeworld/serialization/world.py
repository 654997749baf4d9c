""" Flat record form of a WorldGraph, and msgpack save/load of it.

Records are plain dicts and lists with no references between them other than
ids, so they round trip through any format that handles those.
"""

import io
import logging
from typing import Any, Dict

import numpy as np
import msgpack # type: ignore

from fringeworld import core
from fringeworld.core import SystemType, FacilityType, FactionType

logger = logging.getLogger(__name__)

RECORD_VERSION = 1

def system_to_record(system:core.StarSystem) -> Dict[str, Any]:
    return {
        "id": system.system_id,
        "name": system.name,
        "type": system.system_type.name,
        "loc": [float(system.loc[0]), float(system.loc[1])],
        "connections": list(system.connections),
        "faction_id": system.faction_id,
        "metrics": list(system.metrics.as_tuple()),
        "tags": sorted(system.tags),
        "station_ids": list(system.station_ids),
    }

def system_from_record(record:Dict[str, Any]) -> core.StarSystem:
    system = core.StarSystem(record["id"], record["name"], SystemType[record["type"]], np.array(record["loc"], dtype=np.float64))
    system.connections = list(record["connections"])
    system.faction_id = record["faction_id"]
    system.metrics = core.SystemMetrics(*record["metrics"])
    system.tags = set(record["tags"])
    system.station_ids = list(record["station_ids"])
    return system

def route_to_record(route:core.Route) -> Dict[str, Any]:
    return {
        "system_a": route.system_a,
        "system_b": route.system_b,
        "distance": route.distance,
        "hazard_level": route.hazard_level,
        "tags": sorted(route.tags),
    }

def route_from_record(record:Dict[str, Any]) -> core.Route:
    route = core.Route(record["system_a"], record["system_b"], record["distance"], record["hazard_level"])
    route.tags = set(record["tags"])
    return route

def station_to_record(station:core.Station) -> Dict[str, Any]:
    return {
        "id": station.station_id,
        "name": station.name,
        "system_id": station.system_id,
        "faction_id": station.faction_id,
        "facilities": [
            {
                "type": f.facility_type.name,
                "level": f.level,
                "available": f.available,
                "tags": sorted(f.tags),
            } for f in station.facilities
        ],
        "tags": sorted(station.tags),
    }

def station_from_record(record:Dict[str, Any]) -> core.Station:
    station = core.Station(record["id"], record["name"], record["system_id"], record["faction_id"])
    for f in record["facilities"]:
        facility = core.Facility(FacilityType[f["type"]], f["level"], f["available"])
        facility.tags = set(f["tags"])
        station.facilities.append(facility)
    station.tags = set(record["tags"])
    return station

def faction_to_record(faction:core.Faction) -> Dict[str, Any]:
    return {
        "id": faction.faction_id,
        "name": faction.name,
        "type": faction.faction_type.name,
        "color": list(faction.color),
        "hostility_default": faction.hostility_default,
        "metrics": list(faction.metrics.as_tuple()),
    }

def faction_from_record(record:Dict[str, Any]) -> core.Faction:
    color = record["color"]
    return core.Faction(
        record["id"],
        record["name"],
        FactionType[record["type"]],
        (color[0], color[1], color[2]),
        record["hostility_default"],
        core.FactionMetrics(*record["metrics"]),
    )

def to_records(world:core.WorldGraph) -> Dict[str, Any]:
    return {
        "version": RECORD_VERSION,
        "name": world.name,
        "next_station_id": world.next_station_id,
        "factions": [faction_to_record(x) for x in world.factions()],
        "systems": [system_to_record(x) for x in world.systems()],
        "routes": [route_to_record(x) for x in world.routes()],
        "stations": [station_to_record(x) for x in world.stations()],
    }

def from_records(data:Dict[str, Any]) -> core.WorldGraph:
    """ rebuilds a world exactly as recorded

    Connections and station id lists come from the system records as is, so
    routes and stations are registered directly rather than through
    connect/add_station which would append to them.
    """
    if data.get("version") != RECORD_VERSION:
        raise ValueError(f'unsupported world record version {data.get("version")=}')

    world = core.WorldGraph(data["name"])
    for record in data["factions"]:
        world.add_faction(faction_from_record(record))
    for record in data["systems"]:
        world.add_system(system_from_record(record))
    for record in data["routes"]:
        world.restore_route(route_from_record(record))
    for record in data["stations"]:
        world.restore_station(station_from_record(record))
    world.next_station_id = data["next_station_id"]
    return world

def save(world:core.WorldGraph, f:io.IOBase) -> int:
    b = msgpack.packb(to_records(world))
    logger.debug(f'writing {len(b)} bytes for {world}')
    return f.write(b)

def load(f:io.IOBase) -> core.WorldGraph:
    data = msgpack.unpackb(f.read())
    return from_records(data)
