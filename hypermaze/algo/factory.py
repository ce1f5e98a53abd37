import logging
from typing import Callable, Optional, Sequence

from hypermaze.core.graph import HypercubeGraph, build_graph
from hypermaze.algo.base import Traversal
from hypermaze.algo.dfs import IterativeDepthFirst
from hypermaze.algo.bfs import IterativeBreadthFirst

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "dfs"

ALGORITHMS = {
    "dfs": IterativeDepthFirst,
    "iterative depth-first traversal": IterativeDepthFirst,
    "bfs": IterativeBreadthFirst,
    "iterative breadth-first traversal": IterativeBreadthFirst,
}


def build_traversal(graph: HypercubeGraph, algorithm: str = DEFAULT_ALGORITHM, start: int = 0,
                    random: Optional[Callable[[], float]] = None, seed: int = None) -> Traversal:
    """Unknown algorithm names fall back to depth-first."""
    cls = ALGORITHMS.get(algorithm)
    if cls is None:
        logger.warning(f"Unknown algorithm {algorithm!r}, falling back to {DEFAULT_ALGORITHM}")
        cls = ALGORITHMS[DEFAULT_ALGORITHM]
    return cls(graph, start, random=random, seed=seed)


def build_maze(dimensions: Sequence[int], layout: str = HypercubeGraph.LAYOUT,
               algorithm: str = DEFAULT_ALGORITHM, start: int = 0,
               random: Optional[Callable[[], float]] = None, seed: int = None,
               event_writer=None) -> Traversal:
    graph = build_graph(dimensions, layout, event_writer=event_writer)
    return build_traversal(graph, algorithm, start, random=random, seed=seed)
