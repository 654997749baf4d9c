import numpy as np
import pytest

from fringeworld import core
from fringeworld.core import tags, SystemType, SystemMetrics, FacilityType
from fringeworld.generate import stations
from fringeworld.generate.stations import StationArchetype

from . import line_world

INHABITED = [SystemType.STATION, SystemType.OUTPOST, SystemType.ASTEROID, SystemType.NEBULA]

def make_system(system_type, system_tags=(), crime=2):
    system = core.StarSystem(0, "Beacon", system_type, np.array((0., 0.)))
    system.tags = set(system_tags)
    system.metrics = SystemMetrics(3, 2, crime, 2, 2)
    return system

def test_should_have_station():
    everything = list(SystemType)
    assert stations.should_have_station(make_system(SystemType.STATION), INHABITED)
    assert stations.should_have_station(make_system(SystemType.NEBULA), INHABITED)
    assert not stations.should_have_station(make_system(SystemType.ASTEROID), [SystemType.STATION])
    # never, even when configured as inhabited
    assert not stations.should_have_station(make_system(SystemType.DERELICT), everything)
    assert not stations.should_have_station(make_system(SystemType.CONTESTED), everything)

@pytest.mark.parametrize("system_type,system_tags,crime,expected", [
    (SystemType.STATION, [tags.HUB, tags.MILITARY], 2, StationArchetype.HUB),
    (SystemType.STATION, [tags.MILITARY, tags.PIRATE_HAVEN], 2, StationArchetype.MILITARY),
    (SystemType.OUTPOST, [tags.PIRATE_HAVEN, tags.LAWLESS], 5, StationArchetype.PIRATE_DEN),
    (SystemType.OUTPOST, [tags.LAWLESS], 4, StationArchetype.BLACK_MARKET),
    (SystemType.ASTEROID, [tags.MINING], 2, StationArchetype.MINING),
    (SystemType.NEBULA, [], 3, StationArchetype.BLACK_MARKET),
    (SystemType.NEBULA, [], 2, StationArchetype.OUTPOST),
    (SystemType.STATION, [], 2, StationArchetype.OUTPOST),
    (SystemType.OUTPOST, [], 2, StationArchetype.OUTPOST),
])
def test_choose_archetype(system_type, system_tags, crime, expected):
    assert stations.choose_archetype(make_system(system_type, system_tags, crime)) == expected

def test_hub_bundle():
    station = stations.create_station(7, "Citadel", make_system(SystemType.STATION), StationArchetype.HUB)
    assert [(f.facility_type, f.level) for f in station.facilities] == [
        (FacilityType.SHOP, 2),
        (FacilityType.MISSION_BOARD, 2),
        (FacilityType.REPAIR_YARD, 1),
        (FacilityType.BAR, 1),
        (FacilityType.RECRUITMENT, 1),
        (FacilityType.FUEL_DEPOT, 1),
    ]
    assert station.tags == {tags.HUB, tags.TRADE_HUB}

def test_black_market_bundle():
    station = stations.create_station(3, "Murk Port", make_system(SystemType.NEBULA), StationArchetype.BLACK_MARKET)
    assert [(f.facility_type, f.level) for f in station.facilities] == [
        (FacilityType.BAR, 1),
        (FacilityType.BLACK_MARKET, 3),
        (FacilityType.RECRUITMENT, 1),
    ]
    assert station.has_facility(FacilityType.BLACK_MARKET)
    assert not station.has_facility(FacilityType.SHOP)

def test_every_bundle_is_distinct_per_type():
    for archetype, (facilities, station_tags) in stations.FACILITY_BUNDLES.items():
        facility_types = [t for t, _ in facilities]
        assert len(set(facility_types)) == len(facility_types)
        for _, level in facilities:
            assert 1 <= level <= 3
        station = stations.create_station(0, "x", make_system(SystemType.STATION), archetype)
        assert len(station.facilities) == len(facilities)
        assert stations.station_archetype_of(station) in (archetype, StationArchetype.BLACK_MARKET)

def test_generate_stations(rng, name_generator):
    world = line_world([(100., 100.), (200., 100.), (300., 100.), (400., 100.)])
    types = [SystemType.STATION, SystemType.DERELICT, SystemType.ASTEROID, SystemType.CONTESTED]
    for system, system_type in zip(world.systems(), types):
        system.system_type = system_type
        system.faction_id = "corp"
    world.get_system(0).add_tag(tags.HUB)

    stations.generate_stations(rng, world, INHABITED, name_generator)

    assert len(world.stations()) == 2
    hub = world.primary_station(0)
    mine = world.primary_station(2)
    assert world.primary_station(1) is None
    assert world.primary_station(3) is None
    assert (hub.station_id, mine.station_id) == (0, 1)
    assert world.get_system(0).station_ids == [0]
    assert hub.faction_id == "corp"
    assert stations.station_archetype_of(hub) == StationArchetype.HUB
    assert stations.station_archetype_of(mine) == StationArchetype.MINING
    assert world.next_station_id == 2
    assert stations.station_type_counts(world) == {"HUB": 1, "MINING": 1}
    world.sanity_check()

def test_station_id_and_name_before_archetype(name_generator):
    world = line_world([(100., 100.)])
    system = world.get_system(0)
    system.system_type = SystemType.OUTPOST
    r = np.random.default_rng(2)
    station = stations.create_station_for_system(r, world, system, name_generator)

    expected = np.random.default_rng(2)
    assert station.name == name_generator.station_name(expected, system.name)
    assert r.uniform() == expected.uniform()

def test_add_facility_one_per_type():
    station = core.Station(0, "Beacon", 0)
    assert station.add_facility(FacilityType.SHOP, 2) is not None
    assert station.add_facility(FacilityType.SHOP, 3) is None
    assert station.get_facility(FacilityType.SHOP).level == 2
    station.get_facility(FacilityType.SHOP).available = False
    assert not station.has_facility(FacilityType.SHOP)
    assert station.available_facilities() == []
    # levels clamp into 1-3
    assert station.add_facility(FacilityType.BAR, 9).level == 3
