from typing import Iterator

from hypermaze.core.cell import Status
from hypermaze.core.frontier import Stack
from hypermaze.algo.base import Traversal, Step, VISIT, DONE


class IterativeDepthFirst(Traversal):
    """Recursive backtracker driven by an explicit stack."""

    def __init__(self, graph, start: int = 0, random=None, seed: int = None):
        super().__init__(graph, start, random=random, seed=seed)
        self.stack = Stack(start)

    def steps(self) -> Iterator[Step]:
        graph = self.graph
        while self.stack.has_nodes:
            current = self.stack.peek()
            graph.mark(current, Status.ACTIVE)
            yield Step(VISIT, current)

            cell = graph.data[current]
            for direction in self._shuffled_directions(current):
                neighbor = cell.neighbors[direction]
                if self._unvisited(neighbor):
                    self._connect(direction, current, neighbor)
                    graph.mark(current, Status.PASSIVE)
                    self.stack.push(neighbor)
                    break
            else:
                # Dead end: still on top of the stack.
                graph.mark(current, Status.COMPLETE)
                self.stack.pop()

        yield Step(DONE, None)
