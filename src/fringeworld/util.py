""" Utility methods broadly applicable across the codebase. """

from __future__ import annotations

import math
from typing import Any, Tuple, Union, Sequence

import numpy as np
import numpy.typing as npt
from numba import jit # type: ignore

def fullname(o:Any) -> str:
    """ module qualified class name of o, or of o itself if it is a class

    Used as the logger name for per-instance loggers.
    """
    # adapted from https://stackoverflow.com/a/2020083/553580, __module__
    # is not guaranteed to be set
    if isinstance(o, type):
        klass = o
    else:
        klass = o.__class__

    module = klass.__module__
    if module is None or module == str.__class__.__module__:
        return klass.__qualname__
    return f'{module}.{klass.__qualname__}'

def clamp(x:int, min_x:int, max_x:int) -> int:
    """ integer clamp into [min_x, max_x] """
    return max(min_x, min(max_x, x))

@jit(cache=True, nopython=True, fastmath=True)
def circle_bbox(loc:npt.NDArray[np.float64], r:float) -> Tuple[float, float, float, float]:
    return (loc[0]-r, loc[1]-r, loc[0]+r, loc[1]+r)

@jit(cache=True, nopython=True, fastmath=True)
def magnitude_sq(x:float, y:float) -> float:
    return x*x + y*y

@jit(cache=True, nopython=True, fastmath=True)
def distance_sq(s:npt.NDArray[np.float64], t:npt.NDArray[np.float64]) -> float:
    return magnitude_sq((s - t)[0], (s - t)[1])

@jit(cache=True, nopython=True, fastmath=True)
def magnitude(x:float, y:float) -> float:
    return math.sqrt(x*x + y*y)

@jit(cache=True, nopython=True, fastmath=True)
def distance(s:npt.NDArray[np.float64], t:npt.NDArray[np.float64]) -> float:
    return magnitude((s - t)[0], (s - t)[1])

def pairwise_distances(coords:npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """ (n, 2) coordinates to an (n, n) matrix of euclidean distances. """
    deltas = coords[:, np.newaxis, :] - coords[np.newaxis, :, :]
    return np.sqrt(np.sum(deltas**2, axis=-1))

def point_inside_rect(p:Union[Tuple[float, float], npt.NDArray[np.float64]], rect:Tuple[float, float, float, float]) -> bool:
    """ inclusive containment test of p in rect (left, top, right, bottom) """
    return rect[0] <= p[0] <= rect[2] and rect[1] <= p[1] <= rect[3]

def weighted_choice(r:np.random.Generator, options:Sequence[Any], weights:Sequence[float]) -> Any:
    """ Chooses one of options by cumulative sum of weights against a single
    uniform roll scaled by the total weight.

    Weights need not be normalized. Consumes exactly one draw from r. Returns
    None if the roll lands past every option, which only float rounding can
    cause.
    """
    total = float(sum(weights))
    roll = r.uniform() * total
    cumulative = 0.
    for option, weight in zip(options, weights):
        cumulative += weight
        if roll <= cumulative:
            return option
    return None
