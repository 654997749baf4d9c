""" Scattering system positions under a minimum separation """

import logging
from typing import Tuple

import numpy as np
import numpy.typing as npt
import rtree.index # type: ignore

from fringeworld import util

logger = logging.getLogger(__name__)

ATTEMPTS_PER_SYSTEM = 100

def usable_rect(width:float, height:float, margin:float) -> Tuple[float, float, float, float]:
    return (margin, margin, width - margin, height - margin)

def is_within_bounds(loc:npt.NDArray[np.float64], width:float, height:float, margin:float) -> bool:
    return util.point_inside_rect(loc, usable_rect(width, height, margin))

def generate_positions(r:np.random.Generator, count:int, width:float, height:float, margin:float, min_distance:float) -> npt.NDArray[np.float64]:
    """ rejection samples up to count points in [margin, dim-margin]^2

    A candidate is accepted if it's at least min_distance from every point
    accepted so far. Gives up after ATTEMPTS_PER_SYSTEM*count draws and
    returns however many points were placed, shape (n, 2) with n <= count.
    """

    if count < 0:
        raise ValueError(f'{count=} must be non-negative')

    min_distance_sq = min_distance**2
    max_attempts = ATTEMPTS_PER_SYSTEM * count

    coords = np.zeros((count, 2), dtype=np.float64)
    loc_index = rtree.index.Index()
    placed = 0
    attempts = 0
    while placed < count and attempts < max_attempts:
        attempts += 1
        x = r.uniform(margin, width - margin)
        y = r.uniform(margin, height - margin)
        candidate = np.array((x, y))

        # anything outside the bbox is already far enough away
        reject = False
        for hit in loc_index.intersection(util.circle_bbox(candidate, min_distance), objects="raw"):
            if util.distance_sq(candidate, hit) < min_distance_sq:
                reject = True
                break
        if reject:
            continue

        coords[placed] = candidate
        loc_index.insert(placed, (x, y, x, y), candidate)
        placed += 1

    if placed < count:
        logger.warning(f'placed only {placed} of {count} systems after {attempts} attempts ({min_distance=} in {width}x{height} with {margin=})')
    else:
        logger.debug(f'placed {placed} systems in {attempts} attempts')

    return coords[:placed]
