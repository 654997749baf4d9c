import io
import tempfile

import msgpack # type: ignore
import pytest

from fringeworld import core
from fringeworld.core import tags, FacilityType
from fringeworld.serialization import world as s_world

from . import line_world, assert_worlds_equal

def test_records_round_trip(world):
    restored = s_world.from_records(s_world.to_records(world))
    assert_worlds_equal(world, restored)
    restored.sanity_check()

def test_save_load(world):
    with tempfile.TemporaryFile() as fp:
        s_world.save(world, fp)
        fp.flush()
        fp.seek(0)
        loaded = s_world.load(fp)

    assert_worlds_equal(world, loaded)
    loaded.sanity_check()

    # loaded world keeps working as a world
    assert loaded.find_path(0, len(loaded.systems())-1) == world.find_path(0, len(world.systems())-1)
    assert loaded.generate_station_id() == world.next_station_id

def test_hand_built_world():
    world = line_world([(0., 0.), (10., 0.), (20., 0.)])
    world.set_system_owner(1, "rebels")
    world.add_route_tag(0, 1, tags.SHORTCUT)
    station = core.Station(world.generate_station_id(), "Vesta Port", 1, "rebels")
    station.add_facility(FacilityType.BAR, 2)
    station.add_facility(FacilityType.MEDICAL, 1).available = False
    station.add_tag(tags.MEDICAL)
    world.add_station(station)

    data = s_world.to_records(world)
    assert data["version"] == s_world.RECORD_VERSION
    assert data["next_station_id"] == 1
    assert [r["system_a"] for r in data["routes"]] == [0, 1]
    assert data["stations"][0]["facilities"][1] == {"type": "MEDICAL", "level": 1, "available": False, "tags": []}

    f = io.BytesIO()
    s_world.save(world, f)
    f.seek(0)
    loaded = s_world.load(f)
    assert_worlds_equal(world, loaded)
    assert not loaded.has_facility(0, FacilityType.MEDICAL)
    assert loaded.has_facility(0, FacilityType.BAR)

def test_bad_version(world):
    data = s_world.to_records(world)
    data["version"] = s_world.RECORD_VERSION + 1
    with pytest.raises(ValueError):
        s_world.from_records(data)

    f = io.BytesIO(msgpack.packb({"name": "no version"}))
    with pytest.raises(ValueError):
        s_world.load(f)
