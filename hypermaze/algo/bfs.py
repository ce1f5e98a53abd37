from typing import Iterator

from hypermaze.core.cell import Status
from hypermaze.core.frontier import Queue
from hypermaze.algo.base import Traversal, Step, VISIT, CARVE, DONE


class IterativeBreadthFirst(Traversal):
    """
    Queue-driven traversal. The front cell opens one passage per step and
    stays at the front until it has no unvisited neighbors left.

    Carving suspends a second time with both cells non-passive, so an
    animator sees the new cell light up before it joins the queue.
    """

    def __init__(self, graph, start: int = 0, random=None, seed: int = None):
        super().__init__(graph, start, random=random, seed=seed)
        self.queue = Queue(start)

    def steps(self) -> Iterator[Step]:
        graph = self.graph
        while self.queue.has_nodes:
            current = self.queue.front()
            graph.mark(current, Status.ACTIVE)
            yield Step(VISIT, current)

            cell = graph.data[current]
            for direction in self._shuffled_directions(current):
                neighbor = cell.neighbors[direction]
                if self._unvisited(neighbor):
                    self._connect(direction, current, neighbor)
                    graph.mark(current, Status.PASSIVE)
                    graph.mark(neighbor, Status.ACTIVE)
                    yield Step(CARVE, neighbor)

                    self.queue.enqueue(neighbor)
                    graph.mark(neighbor, Status.PASSIVE)
                    break
            else:
                graph.mark(current, Status.COMPLETE)
                self.queue.dequeue()

        yield Step(DONE, None)
