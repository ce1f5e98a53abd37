import logging
import random as _random
from abc import ABC, abstractmethod
from typing import Callable, Iterator, List, NamedTuple, Optional, Tuple

from hypermaze.core.cell import Status
from hypermaze.core.errors import InvalidIndex
from hypermaze.core.graph import HypercubeGraph
from hypermaze.algo.shuffle import shuffle

logger = logging.getLogger(__name__)

# Step phases
VISIT = "visit"
CARVE = "carve"
DONE = "done"


class Step(NamedTuple):
    phase: str
    cell_id: Optional[int]


class Traversal(ABC):
    """
    Randomized traversal that carves a perfect maze one step at a time.

    The work lives in `steps()`, a generator suspended at each observable
    state. `advance()` resumes it once; `run()` hands the same sequence
    out as an iterator. The sequence is finite and cannot be restarted.
    """
    def __init__(self, graph: HypercubeGraph, start: int = 0,
                 random: Optional[Callable[[], float]] = None, seed: int = None):
        if not graph.holds_index(start):
            raise InvalidIndex(f"Start id {start} out of bounds for size {graph.size}")
        self.graph = graph
        self.start = start
        self.seed = seed
        self.random = random if random is not None else _random.Random(seed).random
        self.step_count = 0
        self.last_step: Optional[Step] = None
        self.carved: List[Tuple[int, str, int]] = []
        self._steps: Optional[Iterator[Step]] = None
        self._finished = False

    @abstractmethod
    def steps(self) -> Iterator[Step]:
        """Yields a Step at every suspension point, ending with a DONE step."""

    @property
    def is_done(self) -> bool:
        return self._finished

    def advance(self):
        if self._finished:
            return
        if self._steps is None:
            self._steps = self.steps()
        step = next(self._steps)
        self.step_count += 1
        self.last_step = step
        if step.phase == DONE:
            self._finished = True
            logger.debug(f"{type(self).__name__} finished after {self.step_count} steps")

    def run(self) -> Iterator[Step]:
        while not self._finished:
            self.advance()
            yield self.last_step

    def run_all(self) -> int:
        """Helper to run the traversal to completion."""
        for _ in self.run():
            pass
        return self.step_count

    def _shuffled_directions(self, id: int) -> List[str]:
        return shuffle(self.graph.data[id].neighbors, random=self.random)

    def _connect(self, direction: str, id_a: int, id_b: int):
        self.graph.connect_neighbor(direction, id_a, id_b)
        self.graph.connect_passage(direction, id_a, id_b)
        self.carved.append((id_a, direction, id_b))

    def _unvisited(self, id: Optional[int]) -> bool:
        return id is not None and self.graph.data[id].status is Status.UNVISITED
