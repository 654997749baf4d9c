""" Star systems and their metrics """

import enum
from typing import Optional, List, Set, Mapping, Tuple

import numpy as np
import numpy.typing as npt

from fringeworld import util

METRIC_MIN = 0
METRIC_MAX = 5

class SystemType(enum.Enum):
    STATION = enum.auto()
    OUTPOST = enum.auto()
    DERELICT = enum.auto()
    ASTEROID = enum.auto()
    NEBULA = enum.auto()
    CONTESTED = enum.auto()

class SystemMetricType(enum.Enum):
    STABILITY = enum.auto()
    SECURITY_LEVEL = enum.auto()
    CRIMINAL_ACTIVITY = enum.auto()
    ECONOMIC_ACTIVITY = enum.auto()
    LAW_ENFORCEMENT_PRESENCE = enum.auto()

# stability, security, crime, economy, enforcement
_ARCHETYPE_METRICS:Mapping[SystemType, Tuple[int, int, int, int, int]] = {
    SystemType.STATION: (4, 4, 1, 4, 4),
    SystemType.OUTPOST: (3, 2, 2, 2, 2),
    SystemType.DERELICT: (1, 0, 3, 0, 0),
    SystemType.ASTEROID: (2, 1, 2, 3, 1),
    SystemType.NEBULA: (2, 0, 3, 1, 0),
    SystemType.CONTESTED: (1, 1, 4, 2, 1),
}

class SystemMetrics:
    """ The five 0-5 ratings describing conditions in a system.

    Every write is clamped into [METRIC_MIN, METRIC_MAX], there's no way to
    store an out of range value.
    """

    @staticmethod
    def for_system_type(system_type:SystemType) -> "SystemMetrics":
        return SystemMetrics(*_ARCHETYPE_METRICS[system_type])

    def __init__(self, stability:int=3, security_level:int=3, criminal_activity:int=2, economic_activity:int=3, law_enforcement_presence:int=3) -> None:
        self._stability = METRIC_MIN
        self._security_level = METRIC_MIN
        self._criminal_activity = METRIC_MIN
        self._economic_activity = METRIC_MIN
        self._law_enforcement_presence = METRIC_MIN

        self.stability = stability
        self.security_level = security_level
        self.criminal_activity = criminal_activity
        self.economic_activity = economic_activity
        self.law_enforcement_presence = law_enforcement_presence

    def __repr__(self) -> str:
        return f'SystemMetrics({self.stability}, {self.security_level}, {self.criminal_activity}, {self.economic_activity}, {self.law_enforcement_presence})'

    def __eq__(self, other:object) -> bool:
        if not isinstance(other, SystemMetrics):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    @property
    def stability(self) -> int:
        return self._stability

    @stability.setter
    def stability(self, value:int) -> None:
        self._stability = util.clamp(int(value), METRIC_MIN, METRIC_MAX)

    @property
    def security_level(self) -> int:
        return self._security_level

    @security_level.setter
    def security_level(self, value:int) -> None:
        self._security_level = util.clamp(int(value), METRIC_MIN, METRIC_MAX)

    @property
    def criminal_activity(self) -> int:
        return self._criminal_activity

    @criminal_activity.setter
    def criminal_activity(self, value:int) -> None:
        self._criminal_activity = util.clamp(int(value), METRIC_MIN, METRIC_MAX)

    @property
    def economic_activity(self) -> int:
        return self._economic_activity

    @economic_activity.setter
    def economic_activity(self, value:int) -> None:
        self._economic_activity = util.clamp(int(value), METRIC_MIN, METRIC_MAX)

    @property
    def law_enforcement_presence(self) -> int:
        return self._law_enforcement_presence

    @law_enforcement_presence.setter
    def law_enforcement_presence(self, value:int) -> None:
        self._law_enforcement_presence = util.clamp(int(value), METRIC_MIN, METRIC_MAX)

    def get(self, metric:SystemMetricType) -> int:
        if metric == SystemMetricType.STABILITY:
            return self.stability
        elif metric == SystemMetricType.SECURITY_LEVEL:
            return self.security_level
        elif metric == SystemMetricType.CRIMINAL_ACTIVITY:
            return self.criminal_activity
        elif metric == SystemMetricType.ECONOMIC_ACTIVITY:
            return self.economic_activity
        elif metric == SystemMetricType.LAW_ENFORCEMENT_PRESENCE:
            return self.law_enforcement_presence
        else:
            raise ValueError(f'unknown {metric=}')

    def set(self, metric:SystemMetricType, value:int) -> None:
        if metric == SystemMetricType.STABILITY:
            self.stability = value
        elif metric == SystemMetricType.SECURITY_LEVEL:
            self.security_level = value
        elif metric == SystemMetricType.CRIMINAL_ACTIVITY:
            self.criminal_activity = value
        elif metric == SystemMetricType.ECONOMIC_ACTIVITY:
            self.economic_activity = value
        elif metric == SystemMetricType.LAW_ENFORCEMENT_PRESENCE:
            self.law_enforcement_presence = value
        else:
            raise ValueError(f'unknown {metric=}')

    def modify(self, metric:SystemMetricType, delta:int) -> None:
        self.set(metric, self.get(metric) + delta)

    def as_tuple(self) -> Tuple[int, int, int, int, int]:
        return (
            self.stability,
            self.security_level,
            self.criminal_activity,
            self.economic_activity,
            self.law_enforcement_presence,
        )

    def clone(self) -> "SystemMetrics":
        return SystemMetrics(*self.as_tuple())

class StarSystem:
    """ A node in the galaxy graph.

    connections holds neighbor system ids in the order they were connected.
    That order is what path finding and territory flood fill iterate over, so
    it's kept as a list rather than a set.
    """

    def __init__(self, system_id:int, name:str, system_type:SystemType, loc:npt.NDArray[np.float64]) -> None:
        self.system_id = system_id
        self.name = name
        self.system_type = system_type
        self.loc = np.array(loc, dtype=np.float64)

        self.connections:List[int] = []
        self.faction_id:Optional[str] = None
        self.metrics = SystemMetrics()
        self.tags:Set[str] = set()
        self.station_ids:List[int] = []

    def __str__(self) -> str:
        return f'{self.system_id}:{self.name}'

    def __repr__(self) -> str:
        return f'StarSystem({self.system_id}, {self.name!r}, {self.system_type})'

    @property
    def is_owned(self) -> bool:
        return self.faction_id is not None

    def is_connected_to(self, other_id:int) -> bool:
        return other_id in self.connections

    def add_connection(self, other_id:int) -> None:
        if other_id == self.system_id:
            raise ValueError(f'system cannot connect to itself {other_id=}')
        if other_id not in self.connections:
            self.connections.append(other_id)

    def connection_count(self) -> int:
        return len(self.connections)

    def has_tag(self, tag:str) -> bool:
        return tag in self.tags

    def add_tag(self, tag:str) -> None:
        self.tags.add(tag)

    def remove_tag(self, tag:str) -> None:
        self.tags.discard(tag)

    def add_station(self, station_id:int) -> None:
        if station_id not in self.station_ids:
            self.station_ids.append(station_id)
