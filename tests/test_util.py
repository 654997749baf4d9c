import numpy as np

from fringeworld import util

def test_clamp():
    assert util.clamp(3, 0, 5) == 3
    assert util.clamp(-2, 0, 5) == 0
    assert util.clamp(9, 0, 5) == 5

def test_distance():
    a = np.array((0., 0.))
    b = np.array((3., 4.))
    assert np.isclose(util.distance(a, b), 5.)
    assert np.isclose(util.distance_sq(a, b), 25.)
    assert util.circle_bbox(b, 1.) == (2., 3., 4., 5.)

def test_pairwise_distances():
    coords = np.array([(0., 0.), (3., 4.), (0., 1.)])
    d = util.pairwise_distances(coords)
    assert d.shape == (3, 3)
    assert np.allclose(np.diag(d), 0.)
    assert np.allclose(d, d.T)
    assert np.isclose(d[0, 1], 5.)
    assert np.isclose(d[0, 2], 1.)

def test_point_inside_rect():
    rect = (10., 10., 90., 50.)
    assert util.point_inside_rect((10., 10.), rect)
    assert util.point_inside_rect((90., 50.), rect)
    assert util.point_inside_rect(np.array((50., 30.)), rect)
    assert not util.point_inside_rect((9.9, 30.), rect)
    assert not util.point_inside_rect((50., 50.1), rect)

def test_weighted_choice():
    r = np.random.default_rng(0)
    for _ in range(50):
        assert util.weighted_choice(r, ["a", "b", "c"], [0., 2., 0.]) == "b"

    counts = {"a": 0, "b": 0}
    for _ in range(1000):
        counts[util.weighted_choice(r, ["a", "b"], [3., 1.])] += 1
    # 3:1 weights, loosely
    assert counts["a"] > counts["b"] * 2

def test_weighted_choice_one_draw():
    r1 = np.random.default_rng(7)
    r2 = np.random.default_rng(7)
    util.weighted_choice(r1, ["a", "b"], [0.5, 0.5])
    r2.uniform()
    assert r1.uniform() == r2.uniform()

class Thing:
    pass

def test_fullname():
    assert util.fullname(Thing()).endswith("test_util.Thing")
    assert util.fullname(Thing).endswith("test_util.Thing")
    assert util.fullname(3) == "int"
