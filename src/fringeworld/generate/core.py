import sys
import abc
import enum
import math
import logging
import argparse
import weakref
import contextlib
from typing import Optional, List, Dict, Any

import numpy as np
import graphviz # type: ignore
import tqdm # type: ignore

from fringeworld import util, core, config
from fringeworld.core import SystemType
from fringeworld.serialization import world as s_world
from . import placement, topology, territory, content, hazards, stations
from .names import NameGenerator

class GalaxyConfigError(ValueError):
    pass

class GenerationStep(enum.Enum):
    NONE = enum.auto()
    SECTOR = enum.auto()
    PLACEMENT = enum.auto()
    TOPOLOGY = enum.auto()
    TERRITORY = enum.auto()
    CONTENT = enum.auto()
    HAZARDS = enum.auto()
    STATIONS = enum.auto()

class GalaxyGeneratorObserver(abc.ABC):
    def estimated_generation_ticks(self, ticks:int) -> None:
        """ provides an estimate of the number of ticks during generation. """
        pass

    def generation_tick(self) -> None:
        """ indicates progress during generation. """
        pass

    def generation_step(self, step:GenerationStep) -> None:
        """ indicates a generation step has begun. """
        pass

    def galaxy_generated(self, world:core.WorldGraph) -> None:
        pass

def _system_type(name:str) -> SystemType:
    try:
        return SystemType[name]
    except KeyError:
        raise GalaxyConfigError(f'unknown system type {name=}')

def _type_weights(ns:Any) -> Dict[SystemType, float]:
    return dict((_system_type(k), float(v)) for k, v in vars(ns).items())

class GalaxyConfig:
    """ Everything a galaxy generation run needs besides its seed.

    Defaults come from config.Settings.generate.Galaxy. The object is handed
    to GalaxyGenerator explicitly, nothing reads it globally.
    """

    @staticmethod
    def preset(name:str) -> "GalaxyConfig":
        galaxy_config = GalaxyConfig()
        overrides = getattr(config.Settings.generate.Galaxy.presets, name, None)
        if overrides is None:
            raise GalaxyConfigError(f'unknown preset {name=}')
        for key, value in vars(overrides).items():
            attr = key.lower()
            if not hasattr(galaxy_config, attr):
                raise GalaxyConfigError(f'preset {name} sets unknown {key=}')
            setattr(galaxy_config, attr, value)
        return galaxy_config

    @staticmethod
    def small() -> "GalaxyConfig":
        return GalaxyConfig.preset("small")

    @staticmethod
    def large() -> "GalaxyConfig":
        return GalaxyConfig.preset("large")

    def __init__(self) -> None:
        settings = config.Settings.generate.Galaxy

        # topology
        self.system_count:int = settings.SYSTEM_COUNT
        self.max_connections:int = settings.MAX_CONNECTIONS
        self.max_route_distance:float = settings.MAX_ROUTE_DISTANCE
        self.extra_route_chance:float = settings.EXTRA_ROUTE_CHANCE

        # spatial
        self.map_width:float = settings.MAP_WIDTH
        self.map_height:float = settings.MAP_HEIGHT
        self.min_system_distance:float = settings.MIN_SYSTEM_DISTANCE
        self.edge_margin:float = settings.EDGE_MARGIN

        # factions
        self.faction_ids:List[str] = list(settings.FACTION_IDS)
        self.neutral_fraction:float = settings.NEUTRAL_FRACTION

        # content
        self.system_type_weights:Dict[SystemType, float] = _type_weights(settings.SYSTEM_TYPE_WEIGHTS)
        self.inhabited_types:List[SystemType] = [_system_type(x) for x in settings.INHABITED_TYPES]

    @property
    def usable_width(self) -> float:
        return self.map_width - 2 * self.edge_margin

    @property
    def usable_height(self) -> float:
        return self.map_height - 2 * self.edge_margin

    def max_packable_systems(self) -> int:
        """ upper bound on points pairwise min_system_distance apart in the
        usable area

        Disks of radius min_system_distance/2 around each point can't overlap
        and all fit in the usable area grown by that radius on every side.
        """
        d = self.min_system_distance
        return int((self.usable_width + d) * (self.usable_height + d) / (math.pi * d * d / 4))

    def validate(self) -> None:
        if self.system_count < 1:
            raise GalaxyConfigError(f'{self.system_count=} must be at least 1')
        if self.system_count > core.route.ROUTE_ID_FACTOR:
            raise GalaxyConfigError(f'{self.system_count=} exceeds the {core.route.ROUTE_ID_FACTOR} systems route ids can address')
        if self.map_width <= 0 or self.map_height <= 0:
            raise GalaxyConfigError(f'{self.map_width=} and {self.map_height=} must be positive')
        if self.min_system_distance <= 0:
            raise GalaxyConfigError(f'{self.min_system_distance=} must be positive')
        if self.edge_margin < 0:
            raise GalaxyConfigError(f'{self.edge_margin=} must be non-negative')
        if self.usable_width <= 0 or self.usable_height <= 0:
            raise GalaxyConfigError(f'{self.edge_margin=} leaves no usable area in {self.map_width}x{self.map_height}')
        if self.min_system_distance > min(self.usable_width, self.usable_height):
            raise GalaxyConfigError(f'{self.min_system_distance=} larger than usable area {self.usable_width}x{self.usable_height}')
        if self.system_count > self.max_packable_systems():
            raise GalaxyConfigError(f'{self.system_count=} systems cannot fit {self.min_system_distance} apart in {self.usable_width}x{self.usable_height}')
        if self.max_connections < 1:
            raise GalaxyConfigError(f'{self.max_connections=} must be at least 1')
        if self.max_connections < 2 and self.system_count > 2:
            raise GalaxyConfigError(f'{self.max_connections=} cannot connect {self.system_count} systems')
        if self.max_route_distance <= 0:
            raise GalaxyConfigError(f'{self.max_route_distance=} must be positive')
        if not 0. <= self.neutral_fraction <= 1.:
            raise GalaxyConfigError(f'{self.neutral_fraction=} must be in [0, 1]')
        if not 0. <= self.extra_route_chance <= 1.:
            raise GalaxyConfigError(f'{self.extra_route_chance=} must be in [0, 1]')
        if any(w < 0 for w in self.system_type_weights.values()):
            raise GalaxyConfigError(f'{self.system_type_weights=} must be non-negative')
        if sum(self.system_type_weights.values()) <= 0:
            raise GalaxyConfigError(f'{self.system_type_weights=} must have positive total')
        for system_type in self.inhabited_types:
            if not isinstance(system_type, SystemType):
                raise GalaxyConfigError(f'unknown inhabited type {system_type=}')

class GalaxyGenerator:
    """ Runs the generation pipeline once, from one seed.

    Every phase draws from the same random generator in a fixed order, so the
    same seed and config always produce the same world.
    """

    @staticmethod
    def viz_world(world:core.WorldGraph) -> graphviz.Graph:
        g = graphviz.Graph(world.name or "galaxy", engine="neato")
        g.attr(overlap="true", splines="false")

        for system in world.systems():
            faction = world.get_faction(system.faction_id) if system.faction_id is not None else None
            if faction is not None:
                r, gr, b = (int(255 * c) for c in faction.color)
                color = f'#{r:02x}{gr:02x}{b:02x}'
            else:
                color = "#808080"
            shape = "doublecircle" if system.has_tag(core.tags.HUB) else "circle"
            g.node(
                str(system.system_id),
                label=f'{system.name}\n{system.system_type.name}',
                pos=f'{system.loc[0]/72.:.2f},{-system.loc[1]/72.:.2f}!',
                color=color,
                shape=shape,
            )

        for route in world.routes():
            style = "dashed" if route.has_tag(core.tags.DANGEROUS) else "solid"
            g.edge(str(route.system_a), str(route.system_b), label=str(route.hazard_level), style=style)

        return g

    def __init__(self, galaxy_config:Optional[GalaxyConfig]=None, seed:Optional[int]=None, faction_registry:Optional[core.FactionRegistry]=None, name_generator:Optional[NameGenerator]=None) -> None:
        self.logger = logging.getLogger(util.fullname(self))

        self.galaxy_config = galaxy_config if galaxy_config is not None else GalaxyConfig()
        self.seed = seed
        # random generator, threaded through every phase
        self.r = np.random.default_rng(seed)

        self.faction_registry = faction_registry if faction_registry is not None else core.FactionRegistry.load()
        self.name_generator = name_generator if name_generator is not None else NameGenerator.load()

        self.capitals:Dict[str, int] = {}

        self._observers:weakref.WeakSet[GalaxyGeneratorObserver] = weakref.WeakSet()

    def observe(self, observer:GalaxyGeneratorObserver) -> None:
        self._observers.add(observer)

    def unobserve(self, observer:GalaxyGeneratorObserver) -> None:
        try:
            self._observers.remove(observer)
        except KeyError:
            pass

    def _step(self, step:GenerationStep) -> None:
        self.logger.debug(f'generation step {step}')
        for observer in self._observers:
            observer.generation_step(step)

    def _tick(self) -> None:
        for observer in self._observers:
            observer.generation_tick()

    def _faction_ids(self) -> List[str]:
        if len(self.galaxy_config.faction_ids) > 0:
            return list(self.galaxy_config.faction_ids)
        return self.faction_registry.faction_ids()

    def generate(self) -> core.WorldGraph:
        # fail before drawing anything
        self.galaxy_config.validate()
        cfg = self.galaxy_config

        steps = [x for x in GenerationStep if x != GenerationStep.NONE]
        for observer in self._observers:
            observer.estimated_generation_ticks(len(steps))

        self.logger.info(f'generating galaxy with {cfg.system_count} systems {self.seed=}')

        self._step(GenerationStep.SECTOR)
        world = core.WorldGraph(self.name_generator.sector_name(self.r))
        for faction_id in self._faction_ids():
            faction = self.faction_registry.get(faction_id)
            if faction is None:
                self.logger.warning(f'unknown {faction_id=} in galaxy config, skipping')
                continue
            world.add_faction(faction.clone())
        self._tick()

        self._step(GenerationStep.PLACEMENT)
        coords = placement.generate_positions(self.r, cfg.system_count, cfg.map_width, cfg.map_height, cfg.edge_margin, cfg.min_system_distance)
        for i, loc in enumerate(coords):
            world.add_system(core.StarSystem(i, f'System_{i}', SystemType.OUTPOST, loc))
        self.logger.info(f'placed {len(coords)} systems')
        self._tick()

        self._step(GenerationStep.TOPOLOGY)
        topology.build_topology(self.r, world, cfg.max_connections, cfg.max_route_distance, cfg.extra_route_chance)
        self._tick()

        self._step(GenerationStep.TERRITORY)
        self.capitals = territory.assign_territory(world, [f.faction_id for f in world.factions()], cfg.map_width, cfg.map_height, cfg.neutral_fraction)
        self._tick()

        self._step(GenerationStep.CONTENT)
        content.assign_content(self.r, world, self.capitals, cfg.system_type_weights, self.name_generator)
        self._tick()

        self._step(GenerationStep.HAZARDS)
        hazards.update_route_hazards(world)
        self._tick()

        self._step(GenerationStep.STATIONS)
        stations.generate_stations(self.r, world, cfg.inhabited_types, self.name_generator)
        self._tick()

        world.sanity_check()
        self.logger.info(f'generated {world}')

        for observer in self._observers:
            observer.galaxy_generated(world)

        return world

class ProgressObserver(GalaxyGeneratorObserver):
    """ tqdm progress bar over generation steps """

    def __init__(self) -> None:
        self.progress:Optional[tqdm.tqdm] = None

    def estimated_generation_ticks(self, ticks:int) -> None:
        self.progress = tqdm.tqdm(total=ticks, unit="step", file=sys.stderr)

    def generation_step(self, step:GenerationStep) -> None:
        if self.progress is not None:
            self.progress.set_description(step.name.lower())

    def generation_tick(self) -> None:
        if self.progress is not None:
            self.progress.update(1)

    def galaxy_generated(self, world:core.WorldGraph) -> None:
        if self.progress is not None:
            self.progress.close()

def log_summary(logger:logging.Logger, world:core.WorldGraph) -> None:
    logger.info(f'sector: {world.name}')
    for faction_id, count in territory.faction_system_counts(world).items():
        logger.info(f'  {world.faction_name(faction_id) if faction_id != territory.NEUTRAL_KEY else "Unclaimed"}: {count} systems')
    for system in world.systems():
        logger.info(f'  {system.system_id:>3} {system.name:<24} {system.system_type.name:<10} {world.faction_name(system.faction_id):<14} {system.metrics.as_tuple()} {sorted(system.tags)}')
    logger.info(f'stations: {stations.station_type_counts(world)}')

def main() -> None:
    with contextlib.ExitStack() as context_stack:
        logging.basicConfig(
                format="%(asctime)s %(name)-12s %(levelname)-8s %(message)s",
                stream=sys.stderr,
                level=logging.INFO
        )
        logger = logging.getLogger(__name__)

        parser = argparse.ArgumentParser(description="generate a galaxy")
        parser.add_argument("-s", "--seed", type=int, default=None,
                help="random seed. default random")
        parser.add_argument("-c", "--config", type=str, default=None,
                help="toml file overriding the built-in config")
        parser.add_argument("-p", "--preset", choices=["default", "small", "large"], default="default",
                help="galaxy size preset. default \"default\"")
        parser.add_argument("--save", type=str, default=None,
                help="file to write the generated world to")
        parser.add_argument("--render", type=str, default=None,
                help="file path (without extension) to render the route graph to, as pdf")
        args = parser.parse_args()

        if args.config:
            config_file = context_stack.enter_context(open(args.config))
            config.load_config(config_file)

        if args.preset == "default":
            galaxy_config = GalaxyConfig()
        else:
            galaxy_config = GalaxyConfig.preset(args.preset)

        generator = GalaxyGenerator(galaxy_config, seed=args.seed)
        progress = ProgressObserver()
        generator.observe(progress)

        world = generator.generate()
        log_summary(logger, world)

        if args.save:
            with open(args.save, "wb") as f:
                s_world.save(world, f)
            logger.info(f'saved world to {args.save}')

        if args.render:
            GalaxyGenerator.viz_world(world).render(args.render, format="pdf")
            logger.info(f'rendered route graph to {args.render}.pdf')

if __name__ == "__main__":
    main()
