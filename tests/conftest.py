import logging

import pytest
import numpy as np

from fringeworld import core, generate
from fringeworld.generate import names

# some logging to turn on if we like
#logging.getLogger("fringeworld.generate").level = logging.DEBUG
#logging.getLogger("fringeworld.core.world").level = logging.DEBUG

@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(0)

@pytest.fixture
def name_generator() -> names.NameGenerator:
    return names.NameGenerator.load()

@pytest.fixture
def faction_registry() -> core.FactionRegistry:
    return core.FactionRegistry.load()

@pytest.fixture
def galaxy_config() -> generate.GalaxyConfig:
    return generate.GalaxyConfig()

@pytest.fixture
def small_config() -> generate.GalaxyConfig:
    return generate.GalaxyConfig.small()

@pytest.fixture
def generator(small_config:generate.GalaxyConfig, faction_registry:core.FactionRegistry, name_generator:names.NameGenerator) -> generate.GalaxyGenerator:
    return generate.GalaxyGenerator(small_config, seed=12345, faction_registry=faction_registry, name_generator=name_generator)

@pytest.fixture
def world(generator:generate.GalaxyGenerator) -> core.WorldGraph:
    return generator.generate()

@pytest.fixture
def empty_world() -> core.WorldGraph:
    world = core.WorldGraph("Test Reach")
    for faction in core.faction.default_factions():
        world.add_faction(faction)
    return world
