import logging
from functools import reduce
from operator import mul
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from hypermaze.core.cell import Cell, Status
from hypermaze.core.errors import InvalidIndex, NotAdjacent

logger = logging.getLogger(__name__)

# (positive, negative) names for the first few axes.
# Higher axes fall back to pos-k / neg-k.
NAMED_AXES = (
    ("east", "west"),
    ("south", "north"),
    ("down", "up"),
    ("ana", "kata"),
)


def product(values: Sequence[int]) -> int:
    # Empty product is 1: a degree-0 graph holds a single cell.
    return reduce(mul, values, 1)


class HypercubeGraph:
    """
    Rectangular lattice of any number of axes.

    Cells are stored in one flat list. Axis 0 varies fastest, so a unit
    step along axis k moves the index by magnitudes[k]:

        dimensions [3, 2]      ids      magnitudes [1, 3]
                               0 1 2
                               3 4 5

    Index arithmetic alone does not give adjacency (2 + 1 = 3 wraps onto
    the next row), so neighbors are always confirmed on coordinates.
    """
    LAYOUT = "hypercube"

    def __init__(self, dimensions: Sequence[int], event_writer=None):
        self.layout = self.LAYOUT
        self.dimensions: Tuple[int, ...] = tuple(int(d) for d in dimensions)
        self.degree = len(self.dimensions)
        self.size = product(self.dimensions)
        self.magnitudes: Tuple[int, ...] = tuple(
            product(self.dimensions[:dg]) for dg in range(self.degree)
        )
        self.event_writer = event_writer

        self.compass: Dict[str, int] = {}
        self.antipodes: Dict[str, str] = {}
        self.axes: Dict[str, int] = {}
        for dg, magnitude in enumerate(self.magnitudes):
            if dg < len(NAMED_AXES):
                positive, negative = NAMED_AXES[dg]
            else:
                positive, negative = f"pos-{dg}", f"neg-{dg}"
            self.compass[negative] = -magnitude
            self.compass[positive] = magnitude
            self.antipodes[negative] = positive
            self.antipodes[positive] = negative
            self.axes[negative] = self.axes[positive] = dg
        self.directions: Tuple[str, ...] = tuple(self.compass)

        self.data: List[Cell] = []
        for id in range(self.size):
            cell = Cell(id)
            cell.neighbors = self.neighbors_of(id)
            cell.passages = dict.fromkeys(self.directions, False)
            self.data.append(cell)

        if self.event_writer:
            self.event_writer.write_header(self.dimensions)
        logger.debug(f"Built {self.layout} graph {self.dimensions} ({self.size} cells)")

    def holds_index(self, id: int) -> bool:
        return 0 <= id < self.size

    def cell(self, id: int) -> Cell:
        if not self.holds_index(id):
            raise InvalidIndex(f"Cell id {id} out of bounds for size {self.size}")
        return self.data[id]

    def coordinates_of(self, *ids: int) -> Tuple[Optional[int], ...]:
        """
        Coordinates of one or more ids.

        With several ids, an axis keeps its value only where every id
        agrees on it; disagreeing axes become None. Ids are not
        bounds-checked here.
        """
        if not ids:
            raise ValueError("coordinates_of needs at least one id")
        result: Optional[List[Optional[int]]] = None
        for id in ids:
            coordinates = [
                (id // magnitude) % dimension
                for dimension, magnitude in zip(self.dimensions, self.magnitudes)
            ]
            if result is None:
                result = coordinates
            else:
                result = [a if a == b else None for a, b in zip(result, coordinates)]
        return tuple(result)

    def index_of(self, coordinates: Sequence[int]) -> int:
        if len(coordinates) != self.degree:
            raise InvalidIndex(f"Expected {self.degree} coordinates, got {len(coordinates)}")
        id = 0
        for coordinate, dimension, magnitude in zip(coordinates, self.dimensions, self.magnitudes):
            if not 0 <= coordinate < dimension:
                raise InvalidIndex(f"Coordinate {tuple(coordinates)} out of bounds for {self.dimensions}")
            id += coordinate * magnitude
        return id

    def are_neighbors(self, id_a: int, id_b: int) -> bool:
        if not self.holds_index(id_a) or not self.holds_index(id_b):
            return False
        steps = 0
        for a, b in zip(self.coordinates_of(id_a), self.coordinates_of(id_b)):
            difference = abs(a - b)
            if difference == 1:
                steps += 1
            elif difference != 0:
                return False
            if steps > 1:
                return False
        return steps == 1

    def neighbors_of(self, id: int) -> Dict[str, Optional[int]]:
        if not self.holds_index(id):
            return {}
        neighbors = {}
        for direction, offset in self.compass.items():
            candidate = id + offset
            neighbors[direction] = candidate if self._steps_along(direction, id, candidate) else None
        return neighbors

    def _steps_along(self, direction: str, id_a: int, id_b: int) -> bool:
        # On a length-1 axis the stride equals the next axis's stride,
        # so adjacency must also happen on the direction's own axis.
        if not self.are_neighbors(id_a, id_b):
            return False
        dg = self.axes[direction]
        return self.coordinates_of(id_a)[dg] != self.coordinates_of(id_b)[dg]

    def slice_on(self, *coordinates: Optional[int]) -> List[int]:
        """
        Ids whose coordinates match every fixed axis; None is a wildcard.
        Axes beyond the given coordinates are wildcards too.
        """
        fixed = [
            (dg, coordinate) for dg, coordinate in enumerate(coordinates[:self.degree])
            if coordinate is not None
        ]
        return [
            id for id in range(self.size)
            if all(
                (id // self.magnitudes[dg]) % self.dimensions[dg] == coordinate
                for dg, coordinate in fixed
            )
        ]

    def _check_link(self, direction: str, id_a: int, id_b: int):
        if direction not in self.compass:
            raise KeyError(f"Unknown direction {direction!r}")
        for id in (id_a, id_b):
            if not self.holds_index(id):
                raise InvalidIndex(f"Cell id {id} out of bounds for size {self.size}")
        if id_b - id_a != self.compass[direction] or not self._steps_along(direction, id_a, id_b):
            raise NotAdjacent(f"Cell {id_b} is not {direction} of cell {id_a}")

    def connect_neighbor(self, direction: str, id_a: int, id_b: int):
        self._check_link(direction, id_a, id_b)
        antipode = self.antipodes[direction]
        cell_a, cell_b = self.data[id_a], self.data[id_b]
        # Links are geometric, so an existing one can only ever match.
        if cell_a.neighbors.get(direction) not in (None, id_b) or \
                cell_b.neighbors.get(antipode) not in (None, id_a):
            raise NotAdjacent(f"Refusing to rewire {direction} link of cell {id_a}")
        cell_a.neighbors[direction] = id_b
        cell_b.neighbors[antipode] = id_a

    def connect_passage(self, direction: str, id_a: int, id_b: int):
        """Opens the wall between two adjacent cells, from both sides."""
        self._check_link(direction, id_a, id_b)
        self.data[id_a].passages[direction] = True
        self.data[id_b].passages[self.antipodes[direction]] = True
        if self.event_writer:
            self.event_writer.log_carve(id_a, self.directions.index(direction), id_b)

    def mark(self, id: int, status: Status):
        self.cell(id).status = status
        if self.event_writer:
            self.event_writer.log_status(id, status.code)

    def open_neighbors(self, id: int) -> Iterator[int]:
        cell = self.cell(id)
        for direction, is_open in cell.passages.items():
            if is_open:
                yield cell.neighbors[direction]

    def passage_pairs(self) -> Iterator[Tuple[int, str, int]]:
        """Each open passage once, from its lower id."""
        for cell in self.data:
            for direction, is_open in cell.passages.items():
                if is_open and self.compass[direction] > 0:
                    yield (cell.id, direction, cell.neighbors[direction])


def build_graph(dimensions: Sequence[int], layout: str = HypercubeGraph.LAYOUT, event_writer=None) -> HypercubeGraph:
    if layout != HypercubeGraph.LAYOUT:
        logger.warning(f"Unknown layout {layout!r}, falling back to {HypercubeGraph.LAYOUT}")
    return HypercubeGraph(dimensions, event_writer=event_writer)
