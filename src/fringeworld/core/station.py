""" Stations and the facilities they offer """

import enum
from typing import Optional, List, Set

from fringeworld import util

FACILITY_LEVEL_MIN = 1
FACILITY_LEVEL_MAX = 3

class FacilityType(enum.Enum):
    SHOP = enum.auto()
    BAR = enum.auto()
    MISSION_BOARD = enum.auto()
    REPAIR_YARD = enum.auto()
    RECRUITMENT = enum.auto()
    MEDICAL = enum.auto()
    BLACK_MARKET = enum.auto()
    FUEL_DEPOT = enum.auto()

class Facility:
    def __init__(self, facility_type:FacilityType, level:int=FACILITY_LEVEL_MIN, available:bool=True) -> None:
        self.facility_type = facility_type
        self._level = FACILITY_LEVEL_MIN
        self.level = level
        self.available = available
        self.tags:Set[str] = set()

    def __repr__(self) -> str:
        return f'Facility({self.facility_type}, {self.level}, available={self.available})'

    @property
    def level(self) -> int:
        return self._level

    @level.setter
    def level(self, value:int) -> None:
        self._level = util.clamp(int(value), FACILITY_LEVEL_MIN, FACILITY_LEVEL_MAX)

class Station:
    """ A dockable location in a system.

    A station's owner always follows its system's owner. WorldGraph keeps
    them in sync.
    """

    def __init__(self, station_id:int, name:str, system_id:int, faction_id:Optional[str]=None) -> None:
        self.station_id = station_id
        self.name = name
        self.system_id = system_id
        self.faction_id = faction_id
        self.facilities:List[Facility] = []
        self.tags:Set[str] = set()

    def __str__(self) -> str:
        return f'{self.station_id}:{self.name}'

    def get_facility(self, facility_type:FacilityType) -> Optional[Facility]:
        for facility in self.facilities:
            if facility.facility_type == facility_type:
                return facility
        return None

    def has_facility(self, facility_type:FacilityType) -> bool:
        """ true iff the station has an available facility of this type """
        facility = self.get_facility(facility_type)
        return facility is not None and facility.available

    def available_facilities(self) -> List[Facility]:
        return [f for f in self.facilities if f.available]

    def add_facility(self, facility_type:FacilityType, level:int=FACILITY_LEVEL_MIN) -> Optional[Facility]:
        """ adds a facility unless one of that type is already present

        returns the new facility, or None if it was a duplicate. """
        if self.get_facility(facility_type) is not None:
            return None
        facility = Facility(facility_type, level)
        self.facilities.append(facility)
        return facility

    def has_tag(self, tag:str) -> bool:
        return tag in self.tags

    def add_tag(self, tag:str) -> None:
        self.tags.add(tag)

    def remove_tag(self, tag:str) -> None:
        self.tags.discard(tag)
