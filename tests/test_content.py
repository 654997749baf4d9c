import numpy as np

from fringeworld import config, core
from fringeworld.core import tags, SystemType, SystemMetrics
from fringeworld.generate import content
from fringeworld.generate.names import NameGenerator

from . import add_system, line_world

def test_choose_system_type_single_weight(rng):
    weights = {SystemType.STATION: 0., SystemType.NEBULA: 1., SystemType.DERELICT: 0.}
    for _ in range(20):
        assert content.choose_system_type(rng, weights) == SystemType.NEBULA

def test_assign_types_forced_roles(rng):
    world = line_world([(100., 100.), (200., 100.), (300., 100.)])
    world.add_system_tag(1, tags.CONTESTED)
    weights = {SystemType.ASTEROID: 1.}
    content.assign_types(rng, world, {"corp": 0}, weights)
    assert world.get_system(0).system_type == SystemType.STATION
    assert world.get_system(1).system_type == SystemType.CONTESTED
    assert world.get_system(2).system_type == SystemType.ASTEROID

def test_assign_types_draws_only_for_free_systems():
    world = line_world([(100., 100.), (200., 100.), (300., 100.)])
    world.add_system_tag(1, tags.CONTESTED)
    r = np.random.default_rng(3)
    content.assign_types(r, world, {"corp": 0}, {SystemType.ASTEROID: 1., SystemType.NEBULA: 1.})

    # one draw for system 2 only
    expected = np.random.default_rng(3)
    expected.uniform()
    assert r.uniform() == expected.uniform()

def test_unique_name_numeric_suffix():
    pools = config.read_data("names.toml")
    names = NameGenerator(dict(pools, SYSTEM_NAMES=["Haven"]), prefix_chance=0., suffix_chance=0.)
    r = np.random.default_rng(0)
    used = set()
    for expected in ["Haven", "Haven 2", "Haven 3"]:
        name = content.unique_name(r, names, SystemType.OUTPOST, used, 20)
        assert name == expected
        used.add(name)

def test_assign_names_unique(name_generator):
    world = core.WorldGraph()
    for i in range(40):
        add_system(world, i, 10. * i, 0., SystemType.NEBULA if i % 2 else SystemType.OUTPOST)
    content.assign_names(np.random.default_rng(0), world, name_generator)
    names = [s.name for s in world.systems()]
    assert len(set(names)) == len(names)
    assert not any(n.startswith("System_") for n in names)

def test_metric_variance_five_draws_in_order():
    metrics = SystemMetrics(2, 2, 2, 2, 2)
    content.apply_metric_variance(np.random.default_rng(6), metrics)

    r = np.random.default_rng(6)
    deltas = [int(r.integers(-1, 2)) for _ in range(5)]
    assert metrics.as_tuple() == tuple(2 + d for d in deltas)

def test_metric_variance_clamps():
    for seed in range(20):
        low = SystemMetrics(0, 0, 0, 0, 0)
        high = SystemMetrics(5, 5, 5, 5, 5)
        content.apply_metric_variance(np.random.default_rng(seed), low)
        content.apply_metric_variance(np.random.default_rng(seed), high)
        assert all(0 <= x <= 1 for x in low.as_tuple())
        assert all(4 <= x <= 5 for x in high.as_tuple())

def test_initialize_metrics_roles():
    world = line_world([(100., 100.), (200., 100.), (300., 100.), (400., 100.)])
    world.get_system(0).system_type = SystemType.STATION
    world.get_system(1).system_type = SystemType.CONTESTED
    world.add_system_tag(1, tags.CONTESTED)
    world.get_system(2).system_type = SystemType.DERELICT
    world.add_system_tag(2, tags.FRONTIER)
    world.get_system(3).system_type = SystemType.OUTPOST

    for seed in range(20):
        content.initialize_metrics(np.random.default_rng(seed), world, {"corp": 0})

        capital = world.get_system(0).metrics
        assert capital.stability in (4, 5)
        assert capital.security_level in (3, 4, 5)
        assert capital.criminal_activity in (0, 1, 2)
        assert capital.economic_activity in (3, 4, 5)
        assert capital.law_enforcement_presence in (3, 4, 5)

        # stability forced to 1, crime 4 boosted past 5 and clamped
        contested = world.get_system(1).metrics
        assert contested.stability in (0, 1, 2)
        assert contested.criminal_activity in (4, 5)

        # derelict 1/0 already at the frontier floors
        derelict = world.get_system(2).metrics
        assert derelict.stability in (0, 1, 2)
        assert derelict.security_level in (0, 1)

        outpost = world.get_system(3).metrics
        assert outpost.stability in (2, 3, 4)
        assert outpost.security_level in (1, 2, 3)

def test_pirate_haven_tags():
    system = core.StarSystem(0, "Red Wake", SystemType.OUTPOST, np.array((0., 0.)))
    system.metrics = SystemMetrics(2, 0, 5, 2, 0)
    content.derive_system_tags(system)
    assert tags.LAWLESS in system.tags
    assert tags.PIRATE_HAVEN in system.tags
    assert tags.MILITARY not in system.tags

def test_archetype_tags():
    asteroid = core.StarSystem(0, "Slag Prime", SystemType.ASTEROID, np.array((0., 0.)))
    asteroid.metrics = SystemMetrics(2, 1, 2, 4, 1)
    content.derive_system_tags(asteroid)
    assert asteroid.tags == {tags.MINING, tags.INDUSTRIAL}

    poor_asteroid = core.StarSystem(1, "Ore Beta", SystemType.ASTEROID, np.array((0., 0.)))
    poor_asteroid.metrics = SystemMetrics(2, 1, 2, 3, 1)
    content.derive_system_tags(poor_asteroid)
    assert poor_asteroid.tags == {tags.MINING}

    derelict = core.StarSystem(2, "Hulk of Vale", SystemType.DERELICT, np.array((0., 0.)))
    derelict.metrics = SystemMetrics(1, 0, 3, 0, 0)
    content.derive_system_tags(derelict)
    assert derelict.tags == {tags.FRONTIER}

    nebula = core.StarSystem(3, "Vale Murk", SystemType.NEBULA, np.array((0., 0.)))
    nebula.metrics = SystemMetrics(2, 0, 3, 1, 0)
    content.derive_system_tags(nebula)
    assert nebula.tags == {tags.LAWLESS}

def test_tags_are_additive():
    station = core.StarSystem(0, "Citadel", SystemType.STATION, np.array((0., 0.)))
    station.tags = {tags.HUB, tags.CORE}
    station.metrics = SystemMetrics(5, 4, 1, 4, 4)
    content.derive_system_tags(station)
    assert station.tags == {tags.HUB, tags.CORE, tags.MILITARY}
