""" The world graph: systems, routes, stations and factions, by id """

import enum
import logging
import collections
from typing import Optional, List, Dict, Iterable, Any, Deque

from fringeworld import util
from .system import StarSystem, SystemMetricType, METRIC_MIN, METRIC_MAX
from .route import Route, route_id, DEFAULT_HAZARD, HAZARD_MIN, HAZARD_MAX
from .station import Station, Facility, FacilityType
from .faction import Faction

class GenerationErrorCase(enum.Enum):
    ASYMMETRIC_CONNECTION = enum.auto()
    MISSING_ROUTE = enum.auto()
    DANGLING_ROUTE = enum.auto()
    ROUTE_ID_MISMATCH = enum.auto()
    METRIC_BOUNDS = enum.auto()
    HAZARD_BOUNDS = enum.auto()
    STATION_PARENT = enum.auto()
    STATION_OWNER = enum.auto()
    UNKNOWN_FACTION = enum.auto()

class GenerationError(Exception):
    def __init__(self, case:GenerationErrorCase, *args:Any, **kwargs:Any) -> None:
        super().__init__(*args, **kwargs)
        self.case = case

class WorldGraph:
    """ Canonical world state for a campaign.

    Entities never hold references to each other, only ids which are resolved
    through the maps held here. Lookups of unknown ids return None and
    mutators of unknown ids return False.
    """

    def __init__(self, name:str="") -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.name = name

        self._systems:Dict[int, StarSystem] = {}
        self._routes:Dict[int, Route] = {}
        self._stations:Dict[int, Station] = {}
        self._factions:Dict[str, Faction] = {}

        self.next_station_id = 0

    def __str__(self) -> str:
        return f'{self.name} ({len(self._systems)} systems, {len(self._routes)} routes, {len(self._stations)} stations)'

    # construction

    def add_system(self, system:StarSystem) -> None:
        if system.system_id in self._systems:
            raise ValueError(f'duplicate {system.system_id=}')
        self._systems[system.system_id] = system

    def add_faction(self, faction:Faction) -> None:
        if faction.faction_id in self._factions:
            raise ValueError(f'duplicate {faction.faction_id=}')
        self._factions[faction.faction_id] = faction

    def generate_station_id(self) -> int:
        station_id = self.next_station_id
        self.next_station_id += 1
        return station_id

    def add_station(self, station:Station) -> None:
        system = self._systems.get(station.system_id)
        if system is None:
            raise ValueError(f'station {station.station_id} in unknown {station.system_id=}')
        if station.station_id in self._stations:
            raise ValueError(f'duplicate {station.station_id=}')
        self._stations[station.station_id] = station
        system.add_station(station.station_id)
        if station.station_id >= self.next_station_id:
            self.next_station_id = station.station_id + 1

    def add_route(self, route:Route) -> None:
        """ registers an already built route, connecting its endpoints """
        a = self._systems.get(route.system_a)
        b = self._systems.get(route.system_b)
        if a is None or b is None:
            raise ValueError(f'route between unknown systems {route.system_a=} {route.system_b=}')
        if route.route_id in self._routes:
            raise ValueError(f'duplicate {route.route_id=}')
        self._routes[route.route_id] = route
        a.add_connection(b.system_id)
        b.add_connection(a.system_id)

    def restore_route(self, route:Route) -> None:
        """ registers a route leaving endpoint connections alone, for loading """
        self._routes[route.route_id] = route

    def restore_station(self, station:Station) -> None:
        """ registers a station leaving its system alone, for loading """
        self._stations[station.station_id] = station

    def connect(self, a:int, b:int, hazard_level:int=DEFAULT_HAZARD) -> Route:
        """ creates a route between a and b, or returns the existing one """
        existing = self.get_route(a, b)
        if existing is not None:
            return existing
        system_a = self._systems.get(a)
        system_b = self._systems.get(b)
        if system_a is None or system_b is None:
            raise ValueError(f'cannot connect unknown systems {a=} {b=}')
        route = Route(a, b, util.distance(system_a.loc, system_b.loc), hazard_level)
        self.add_route(route)
        return route

    # lookups

    def get_system(self, system_id:int) -> Optional[StarSystem]:
        return self._systems.get(system_id)

    def get_route(self, a:int, b:int) -> Optional[Route]:
        if a == b:
            return None
        return self._routes.get(route_id(a, b))

    def get_route_by_id(self, rid:int) -> Optional[Route]:
        return self._routes.get(rid)

    def get_station(self, station_id:int) -> Optional[Station]:
        return self._stations.get(station_id)

    def get_faction(self, faction_id:str) -> Optional[Faction]:
        return self._factions.get(faction_id)

    def faction_name(self, faction_id:Optional[str]) -> str:
        if faction_id is None:
            return "Unclaimed"
        faction = self._factions.get(faction_id)
        if faction is None:
            return "Unknown"
        return faction.name

    def systems(self) -> List[StarSystem]:
        return list(self._systems.values())

    def routes(self) -> List[Route]:
        return list(self._routes.values())

    def stations(self) -> List[Station]:
        return list(self._stations.values())

    def factions(self) -> List[Faction]:
        return list(self._factions.values())

    # topology

    def neighbors(self, system_id:int) -> List[int]:
        system = self._systems.get(system_id)
        if system is None:
            return []
        return list(system.connections)

    def are_connected(self, a:int, b:int) -> bool:
        system = self._systems.get(a)
        return system is not None and system.is_connected_to(b)

    def has_route(self, a:int, b:int) -> bool:
        return self.get_route(a, b) is not None

    def travel_distance(self, a:int, b:int) -> Optional[float]:
        """ length of the direct route between a and b, if any """
        route = self.get_route(a, b)
        if route is None:
            return None
        return route.distance

    # systems

    def systems_by_faction(self, faction_id:Optional[str]) -> List[StarSystem]:
        return [s for s in self._systems.values() if s.faction_id == faction_id]

    def owned_system_ids(self, faction_id:str) -> List[int]:
        return [s.system_id for s in self._systems.values() if s.faction_id == faction_id]

    def systems_by_tag(self, tag:str) -> List[StarSystem]:
        return [s for s in self._systems.values() if tag in s.tags]

    def systems_with_any_tag(self, tags:Iterable[str]) -> List[StarSystem]:
        tag_set = set(tags)
        return [s for s in self._systems.values() if not s.tags.isdisjoint(tag_set)]

    def systems_with_all_tags(self, tags:Iterable[str]) -> List[StarSystem]:
        tag_set = set(tags)
        return [s for s in self._systems.values() if tag_set <= s.tags]

    def systems_by_metric(self, metric:SystemMetricType, min_value:int=METRIC_MIN, max_value:int=METRIC_MAX) -> List[StarSystem]:
        """ systems with metric in [min_value, max_value] inclusive """
        return [s for s in self._systems.values() if min_value <= s.metrics.get(metric) <= max_value]

    def get_system_metric(self, system_id:int, metric:SystemMetricType) -> Optional[int]:
        system = self._systems.get(system_id)
        if system is None:
            return None
        return system.metrics.get(metric)

    def has_tag(self, system_id:int, tag:str) -> bool:
        system = self._systems.get(system_id)
        return system is not None and tag in system.tags

    # routes

    def routes_from(self, system_id:int) -> List[Route]:
        system = self._systems.get(system_id)
        if system is None:
            return []
        routes = []
        for other_id in system.connections:
            route = self.get_route(system_id, other_id)
            if route is not None:
                routes.append(route)
        return routes

    def routes_by_tag(self, tag:str) -> List[Route]:
        return [r for r in self._routes.values() if tag in r.tags]

    def dangerous_routes(self, min_hazard:int=3) -> List[Route]:
        return [r for r in self._routes.values() if r.hazard_level >= min_hazard]

    def safe_routes(self, max_hazard:int=1) -> List[Route]:
        return [r for r in self._routes.values() if r.hazard_level <= max_hazard]

    def get_route_hazard(self, a:int, b:int) -> Optional[int]:
        route = self.get_route(a, b)
        if route is None:
            return None
        return route.hazard_level

    # paths

    def find_path(self, start:int, end:int) -> List[int]:
        """ fewest hops path from start to end, both included

        A path from a system to itself is just that system. Unknown ids or
        unreachable targets give an empty path.
        """
        if start not in self._systems or end not in self._systems:
            return []
        if start == end:
            return [start]

        parent:Dict[int, int] = {start: start}
        queue:Deque[int] = collections.deque([start])
        while queue:
            current = queue.popleft()
            for neighbor in self._systems[current].connections:
                if neighbor in parent:
                    continue
                parent[neighbor] = current
                if neighbor == end:
                    path = [end]
                    while path[-1] != start:
                        path.append(parent[path[-1]])
                    path.reverse()
                    return path
                queue.append(neighbor)
        return []

    def is_reachable(self, start:int, end:int) -> bool:
        return len(self.find_path(start, end)) > 0

    def path_routes(self, path:List[int]) -> List[Route]:
        routes = []
        for a, b in zip(path, path[1:]):
            route = self.get_route(a, b)
            if route is None:
                raise ValueError(f'path has no route between {a=} {b=}')
            routes.append(route)
        return routes

    def path_distance(self, path:List[int]) -> float:
        return sum((r.distance for r in self.path_routes(path)), 0.)

    def path_hazard(self, path:List[int]) -> int:
        return sum(r.hazard_level for r in self.path_routes(path))

    # stations

    def stations_in_system(self, system_id:int) -> List[Station]:
        system = self._systems.get(system_id)
        if system is None:
            return []
        return [self._stations[x] for x in system.station_ids if x in self._stations]

    def primary_station(self, system_id:int) -> Optional[Station]:
        stations = self.stations_in_system(system_id)
        if len(stations) == 0:
            return None
        return stations[0]

    def facilities(self, station_id:int) -> List[Facility]:
        station = self._stations.get(station_id)
        if station is None:
            return []
        return list(station.facilities)

    def has_facility(self, station_id:int, facility_type:FacilityType) -> bool:
        station = self._stations.get(station_id)
        return station is not None and station.has_facility(facility_type)

    def stations_by_tag(self, tag:str) -> List[Station]:
        return [s for s in self._stations.values() if tag in s.tags]

    def nearby_station_systems(self, system_id:int, max_hops:int) -> List[int]:
        """ systems with at least one station within max_hops of system_id

        In breadth first order, starting with system_id itself. """
        if system_id not in self._systems:
            return []
        hops = {system_id: 0}
        queue:Deque[int] = collections.deque([system_id])
        found = []
        while queue:
            current = queue.popleft()
            if len(self._systems[current].station_ids) > 0:
                found.append(current)
            if hops[current] >= max_hops:
                continue
            for neighbor in self._systems[current].connections:
                if neighbor not in hops:
                    hops[neighbor] = hops[current] + 1
                    queue.append(neighbor)
        return found

    # mutations

    def set_system_metric(self, system_id:int, metric:SystemMetricType, value:int) -> bool:
        system = self._systems.get(system_id)
        if system is None:
            return False
        before = system.metrics.get(metric)
        system.metrics.set(metric, value)
        self.logger.debug(f'{system} {metric.name} {before} -> {system.metrics.get(metric)}')
        return True

    def modify_system_metric(self, system_id:int, metric:SystemMetricType, delta:int) -> bool:
        system = self._systems.get(system_id)
        if system is None:
            return False
        before = system.metrics.get(metric)
        system.metrics.modify(metric, delta)
        self.logger.debug(f'{system} {metric.name} {before} -> {system.metrics.get(metric)} ({delta=})')
        return True

    def add_system_tag(self, system_id:int, tag:str) -> bool:
        system = self._systems.get(system_id)
        if system is None:
            return False
        system.add_tag(tag)
        return True

    def remove_system_tag(self, system_id:int, tag:str) -> bool:
        system = self._systems.get(system_id)
        if system is None:
            return False
        system.remove_tag(tag)
        return True

    def add_route_tag(self, a:int, b:int, tag:str) -> bool:
        route = self.get_route(a, b)
        if route is None:
            return False
        route.add_tag(tag)
        return True

    def remove_route_tag(self, a:int, b:int, tag:str) -> bool:
        route = self.get_route(a, b)
        if route is None:
            return False
        route.remove_tag(tag)
        return True

    def add_station_tag(self, station_id:int, tag:str) -> bool:
        station = self._stations.get(station_id)
        if station is None:
            return False
        station.add_tag(tag)
        return True

    def remove_station_tag(self, station_id:int, tag:str) -> bool:
        station = self._stations.get(station_id)
        if station is None:
            return False
        station.remove_tag(tag)
        return True

    def set_system_owner(self, system_id:int, faction_id:Optional[str]) -> bool:
        """ changes a system's owner, and the owner of its stations with it

        faction_id None clears ownership. An unknown faction is refused. """
        system = self._systems.get(system_id)
        if system is None:
            return False
        if faction_id is not None and faction_id not in self._factions:
            return False
        self.logger.debug(f'{system} owner {system.faction_id} -> {faction_id}')
        system.faction_id = faction_id
        for station in self.stations_in_system(system_id):
            station.faction_id = faction_id
        return True

    def set_station_owner(self, station_id:int, faction_id:Optional[str]) -> bool:
        station = self._stations.get(station_id)
        if station is None:
            return False
        if faction_id is not None and faction_id not in self._factions:
            return False
        station.faction_id = faction_id
        return True

    # invariants

    def sanity_check(self) -> None:
        """ raises GenerationError on the first broken invariant found """
        for system in self._systems.values():
            for other_id in system.connections:
                other = self._systems.get(other_id)
                if other is None or system.system_id not in other.connections:
                    raise GenerationError(GenerationErrorCase.ASYMMETRIC_CONNECTION, f'{system} lists {other_id} but not vice versa')
                if self.get_route(system.system_id, other_id) is None:
                    raise GenerationError(GenerationErrorCase.MISSING_ROUTE, f'{system} lists {other_id} without a route')
            for value in system.metrics.as_tuple():
                if not METRIC_MIN <= value <= METRIC_MAX:
                    raise GenerationError(GenerationErrorCase.METRIC_BOUNDS, f'{system} has metric {value=}')
            if system.faction_id is not None and system.faction_id not in self._factions:
                raise GenerationError(GenerationErrorCase.UNKNOWN_FACTION, f'{system} owned by unknown {system.faction_id=}')
            for station_id in system.station_ids:
                station = self._stations.get(station_id)
                if station is None or station.system_id != system.system_id:
                    raise GenerationError(GenerationErrorCase.STATION_PARENT, f'{system} lists station {station_id} that is not there')

        for rid, route in self._routes.items():
            a = self._systems.get(route.system_a)
            b = self._systems.get(route.system_b)
            if a is None or b is None:
                raise GenerationError(GenerationErrorCase.DANGLING_ROUTE, f'{route} has a missing endpoint')
            if rid != route_id(route.system_a, route.system_b) or rid != route.route_id:
                raise GenerationError(GenerationErrorCase.ROUTE_ID_MISMATCH, f'{route} stored under {rid}')
            if not a.is_connected_to(b.system_id) or not b.is_connected_to(a.system_id):
                raise GenerationError(GenerationErrorCase.ASYMMETRIC_CONNECTION, f'{route} endpoints do not list each other')
            if not HAZARD_MIN <= route.hazard_level <= HAZARD_MAX:
                raise GenerationError(GenerationErrorCase.HAZARD_BOUNDS, f'{route} out of bounds')

        for station in self._stations.values():
            system = self._systems.get(station.system_id)
            if system is None or station.station_id not in system.station_ids:
                raise GenerationError(GenerationErrorCase.STATION_PARENT, f'{station} not listed by its system {station.system_id}')
            if station.faction_id != system.faction_id:
                raise GenerationError(GenerationErrorCase.STATION_OWNER, f'{station} owned by {station.faction_id} but {system} by {system.faction_id}')
