import functools
from typing import Optional, Sequence, Tuple

import numpy as np

from fringeworld import core
from fringeworld.core import SystemType
from fringeworld.serialization import world as s_world

def add_system(world:core.WorldGraph, system_id:int, x:float, y:float, system_type:SystemType=SystemType.OUTPOST, faction_id:Optional[str]=None) -> core.StarSystem:
    system = core.StarSystem(system_id, f'System_{system_id}', system_type, np.array((x, y)))
    system.faction_id = faction_id
    world.add_system(system)
    return system

def line_world(locs:Sequence[Tuple[float, float]], factions:Optional[Sequence[core.Faction]]=None) -> core.WorldGraph:
    """ a world of systems at locs, each connected to the next """
    world = core.WorldGraph("Test Reach")
    for faction in (factions if factions is not None else core.faction.default_factions()):
        world.add_faction(faction)
    for i, (x, y) in enumerate(locs):
        add_system(world, i, x, y)
    for i in range(len(locs)-1):
        world.connect(i, i+1)
    return world

def assert_worlds_equal(a:core.WorldGraph, b:core.WorldGraph) -> None:
    """ field by field comparison of everything a world holds """
    assert a.name == b.name
    assert a.next_station_id == b.next_station_id

    assert [f.faction_id for f in a.factions()] == [f.faction_id for f in b.factions()]
    for fa, fb in zip(a.factions(), b.factions()):
        assert fa.name == fb.name
        assert fa.faction_type == fb.faction_type
        assert fa.color == fb.color
        assert fa.hostility_default == fb.hostility_default
        assert fa.metrics == fb.metrics

    assert [s.system_id for s in a.systems()] == [s.system_id for s in b.systems()]
    for sa, sb in zip(a.systems(), b.systems()):
        assert sa.name == sb.name
        assert sa.system_type == sb.system_type
        assert sa.loc[0] == sb.loc[0] and sa.loc[1] == sb.loc[1]
        assert sa.connections == sb.connections
        assert sa.faction_id == sb.faction_id
        assert sa.metrics == sb.metrics
        assert sa.tags == sb.tags
        assert sa.station_ids == sb.station_ids

    assert [r.route_id for r in a.routes()] == [r.route_id for r in b.routes()]
    for ra, rb in zip(a.routes(), b.routes()):
        assert (ra.system_a, ra.system_b) == (rb.system_a, rb.system_b)
        assert ra.distance == rb.distance
        assert ra.hazard_level == rb.hazard_level
        assert ra.tags == rb.tags

    assert [s.station_id for s in a.stations()] == [s.station_id for s in b.stations()]
    for sa, sb in zip(a.stations(), b.stations()):
        assert sa.name == sb.name
        assert sa.system_id == sb.system_id
        assert sa.faction_id == sb.faction_id
        assert sa.tags == sb.tags
        assert [(f.facility_type, f.level, f.available, f.tags) for f in sa.facilities] == [(f.facility_type, f.level, f.available, f.tags) for f in sb.facilities]

def dump_world_on_failure(func):
    """ Decorator that logs the world's records when an assertion fails in a
    test. The test must take a world keyword argument. """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except AssertionError:
            world = kwargs["world"]
            print(s_world.to_records(world))
            raise
    return wrapper
