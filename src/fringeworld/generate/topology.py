""" Connecting placed systems into a route graph """

import math
import logging
from typing import List, Optional, Tuple, Set

import numpy as np
import numpy.typing as npt

from fringeworld import core, util

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]

def prims_mst(distances:npt.NDArray[np.float64], root_idx:int=0, max_degree:Optional[int]=None) -> List[Edge]:
    """ minimum spanning tree edges, in the order they join the tree

    Each edge is (node in tree, node joining). Ties go to the lowest in-tree
    index, then the lowest joining index.

    With max_degree, tree nodes already at max_degree can't take new edges.
    The result is the plain minimum spanning tree whenever that tree already
    respects the cap. max_degree must be at least 2 for more than two nodes,
    otherwise the tree can't grow past a single edge.
    """
    # prim's algorithm to construct a minimum spanning tree
    # https://en.wikipedia.org/wiki/Prim%27s_algorithm
    n = len(distances)
    if n < 2:
        return []

    # invariant(s):
    # V is a mask indicating elements in the tree
    # edges is the tree so far, in order of addition
    # degree counts edges per node in the tree so far
    V = np.zeros(n, bool)
    degree = np.zeros(n, dtype=np.int64)
    edges:List[Edge] = []
    V[root_idx] = True
    while not np.all(V):
        # choose edge from nodes in tree to node not yet in tree with min dist
        d = np.copy(distances)
        # don't choose edges from outside the tree
        d[~V,:] = np.inf
        # don't choose edges into the tree
        d[:,V] = np.inf
        if max_degree is not None:
            # don't choose edges from saturated nodes
            d[degree >= max_degree,:] = np.inf
        i, j = np.unravel_index(np.argmin(d, axis=None), d.shape)
        if not d[i, j] < math.inf:
            raise ValueError(f'cannot grow a spanning tree with {max_degree=} past {len(edges)} edges')
        edges.append((int(i), int(j)))
        degree[i] += 1
        degree[j] += 1
        V[j] = True
    return edges

def degree_counts(n:int, edges:List[Edge]) -> npt.NDArray[np.int64]:
    counts = np.zeros(n, dtype=np.int64)
    for a, b in edges:
        counts[a] += 1
        counts[b] += 1
    return counts

def add_extra_routes(r:np.random.Generator, distances:npt.NDArray[np.float64], mst_edges:List[Edge], max_connections:int, max_route_distance:float, extra_route_chance:float) -> List[Edge]:
    """ probabilistically adds short edges beyond the spanning tree

    Pairs are scanned as (i, j) with i < j in increasing order. A pair is
    skipped without drawing if either end is already at max_connections, it
    is already an edge or it is longer than max_route_distance. Otherwise one
    uniform draw decides it, with shorter pairs more likely. Spanning tree
    edges count toward the cap.
    """

    n = len(distances)
    existing:Set[Edge] = set((min(a, b), max(a, b)) for a, b in mst_edges)
    connection_count = degree_counts(n, mst_edges)

    extra_edges:List[Edge] = []
    for i in range(n):
        if connection_count[i] >= max_connections:
            continue
        for j in range(i+1, n):
            if connection_count[j] >= max_connections:
                continue
            if (i, j) in existing:
                continue
            dist = distances[i, j]
            if dist > max_route_distance:
                continue

            chance = (1.0 - dist / max_route_distance) * extra_route_chance
            if r.uniform() < chance:
                extra_edges.append((i, j))
                existing.add((i, j))
                connection_count[i] += 1
                connection_count[j] += 1
                if connection_count[i] >= max_connections:
                    break

    return extra_edges

def build_topology(r:np.random.Generator, world:core.WorldGraph, max_connections:int, max_route_distance:float, extra_route_chance:float) -> Tuple[List[Edge], List[Edge]]:
    """ connects every system in world, spanning tree first then extras

    No system ends up with more than max_connections routes, the spanning
    tree is degree capped too.

    Routes are created with the default hazard, hazards are derived once
    system content is known. Returns the (spanning tree, extra) edge lists.
    """
    systems = world.systems()
    if len(systems) == 0:
        return [], []
    coords = np.array([s.loc for s in systems])
    distances = util.pairwise_distances(coords)

    mst_edges = prims_mst(distances, 0, max_connections)
    extra_edges = add_extra_routes(r, distances, mst_edges, max_connections, max_route_distance, extra_route_chance)

    for a, b in mst_edges + extra_edges:
        world.connect(systems[a].system_id, systems[b].system_id, core.route.DEFAULT_HAZARD)

    logger.info(f'created {len(mst_edges) + len(extra_edges)} routes ({len(mst_edges)} spanning + {len(extra_edges)} extra)')
    return mst_edges, extra_edges
