""" fringeworld core data model """

from . import tags
from .system import StarSystem, SystemType, SystemMetricType, SystemMetrics
from .route import Route, route_id
from .station import Station, Facility, FacilityType
from .faction import Faction, FactionType, FactionMetrics, FactionRegistry
from .world import WorldGraph, GenerationError, GenerationErrorCase
