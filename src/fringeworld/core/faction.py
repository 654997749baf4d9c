""" Factions and the registry generation draws them from """

import enum
import logging
from typing import Optional, List, Dict, Tuple, Iterable, Any, Mapping

from fringeworld import util, config

METRIC_MIN = 0
METRIC_MAX = 5

class FactionType(enum.Enum):
    CORPORATE = enum.auto()
    GOVERNMENT = enum.auto()
    CRIMINAL = enum.auto()
    INDEPENDENT = enum.auto()
    NEUTRAL = enum.auto()

class FactionMetrics:
    def __init__(self, military_strength:int=3, economic_power:int=3, influence:int=3, desperation:int=1, corruption:int=2) -> None:
        self.military_strength = util.clamp(military_strength, METRIC_MIN, METRIC_MAX)
        self.economic_power = util.clamp(economic_power, METRIC_MIN, METRIC_MAX)
        self.influence = util.clamp(influence, METRIC_MIN, METRIC_MAX)
        self.desperation = util.clamp(desperation, METRIC_MIN, METRIC_MAX)
        self.corruption = util.clamp(corruption, METRIC_MIN, METRIC_MAX)

    def __eq__(self, other:object) -> bool:
        if not isinstance(other, FactionMetrics):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def as_tuple(self) -> Tuple[int, int, int, int, int]:
        return (self.military_strength, self.economic_power, self.influence, self.desperation, self.corruption)

    def clone(self) -> "FactionMetrics":
        return FactionMetrics(*self.as_tuple())

class Faction:
    """ A power that can own systems.

    Owned systems aren't stored here, ask the WorldGraph which systems carry
    this faction's id.
    """

    def __init__(self, faction_id:str, name:str, faction_type:FactionType, color:Tuple[float, float, float]=(0.5, 0.5, 0.5), hostility_default:int=50, metrics:Optional[FactionMetrics]=None) -> None:
        self.faction_id = faction_id
        self.name = name
        self.faction_type = faction_type
        self.color = (float(color[0]), float(color[1]), float(color[2]))
        self.hostility_default = hostility_default
        self.metrics = metrics if metrics is not None else FactionMetrics()

    def __str__(self) -> str:
        return f'{self.faction_id}:{self.name}'

    def clone(self) -> "Faction":
        return Faction(self.faction_id, self.name, self.faction_type, self.color, self.hostility_default, self.metrics.clone())

def faction_from_dict(d:Mapping[str, Any]) -> Faction:
    metrics = FactionMetrics(**d.get("metrics", {}))
    color = d.get("color", (0.5, 0.5, 0.5))
    return Faction(
        d["id"],
        d["name"],
        FactionType[d["type"]],
        (color[0], color[1], color[2]),
        d.get("hostility_default", config.Settings.generate.factions.DEFAULT_HOSTILITY),
        metrics,
    )

def default_factions() -> List[Faction]:
    return [
        Faction("corp", "Helix Corp", FactionType.CORPORATE, (0.2, 0.4, 0.8), 50, FactionMetrics(3, 5, 4, 1, 2)),
        Faction("rebels", "Free Colonies", FactionType.INDEPENDENT, (0.2, 0.7, 0.3), 50, FactionMetrics(2, 2, 2, 1, 2)),
        Faction("pirates", "Red Claw", FactionType.CRIMINAL, (0.8, 0.2, 0.2), 50, FactionMetrics(3, 2, 1, 1, 2)),
    ]

class FactionRegistry:
    """ Source of faction definitions for generation.

    Generation never uses registry factions directly, it clones them into the
    world so a campaign can mutate its factions freely.
    """

    @staticmethod
    def load(filename:str="factions.toml") -> "FactionRegistry":
        data = config.read_data(filename)
        registry = FactionRegistry(faction_from_dict(d) for d in data.get("factions", []))
        if len(registry) == 0:
            registry.logger.info(f'no factions in {filename}, using defaults')
            for faction in default_factions():
                registry.register(faction)
        return registry

    def __init__(self, factions:Optional[Iterable[Faction]]=None) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self._factions:Dict[str, Faction] = {}
        if factions is not None:
            for faction in factions:
                self.register(faction)

    def __len__(self) -> int:
        return len(self._factions)

    def __contains__(self, faction_id:object) -> bool:
        return faction_id in self._factions

    def register(self, faction:Faction) -> None:
        if faction.faction_id in self._factions:
            raise ValueError(f'duplicate faction {faction.faction_id=}')
        self._factions[faction.faction_id] = faction

    def get(self, faction_id:str) -> Optional[Faction]:
        return self._factions.get(faction_id)

    def faction_ids(self) -> List[str]:
        return list(self._factions.keys())

    def factions(self) -> List[Faction]:
        return list(self._factions.values())
