""" Routes between star systems """

from typing import Set

from fringeworld import util

HAZARD_MIN = 0
HAZARD_MAX = 5
DEFAULT_HAZARD = 1

# route ids pack both endpoints, so system ids must stay below this
ROUTE_ID_FACTOR = 10000

def route_id(a:int, b:int) -> int:
    """ direction independent id for the route between systems a and b """
    return ROUTE_ID_FACTOR * min(a, b) + max(a, b)

class Route:
    def __init__(self, system_a:int, system_b:int, distance:float, hazard_level:int=DEFAULT_HAZARD) -> None:
        if system_a == system_b:
            raise ValueError(f'route endpoints must differ {system_a=} {system_b=}')
        if max(system_a, system_b) >= ROUTE_ID_FACTOR:
            raise ValueError(f'system ids must be less than {ROUTE_ID_FACTOR} {system_a=} {system_b=}')

        self.system_a = system_a
        self.system_b = system_b
        self.route_id = route_id(system_a, system_b)
        self.distance = float(distance)
        self._hazard_level = HAZARD_MIN
        self.hazard_level = hazard_level
        self.tags:Set[str] = set()

    def __repr__(self) -> str:
        return f'Route({self.system_a}, {self.system_b}, {self.distance:.1f}, hazard={self.hazard_level})'

    @property
    def hazard_level(self) -> int:
        return self._hazard_level

    @hazard_level.setter
    def hazard_level(self, value:int) -> None:
        self._hazard_level = util.clamp(int(value), HAZARD_MIN, HAZARD_MAX)

    def connects(self, system_id:int) -> bool:
        return system_id == self.system_a or system_id == self.system_b

    def other(self, system_id:int) -> int:
        """ the endpoint opposite system_id """
        if system_id == self.system_a:
            return self.system_b
        elif system_id == self.system_b:
            return self.system_a
        else:
            raise ValueError(f'route {self.route_id} does not touch {system_id=}')

    def has_tag(self, tag:str) -> bool:
        return tag in self.tags

    def add_tag(self, tag:str) -> None:
        self.tags.add(tag)

    def remove_tag(self, tag:str) -> None:
        self.tags.discard(tag)
