from typing import Dict, Mapping, Optional, Sequence, Tuple

import numpy as np

from hypermaze.core.cell import Status
from hypermaze.core.errors import InvalidIndex
from hypermaze.core.graph import HypercubeGraph

Color = Tuple[int, int, int]

DEFAULT_PALETTE: Dict[Status, Color] = {
    Status.UNVISITED: (10, 10, 10),
    Status.ACTIVE: (255, 215, 0),      # Gold
    Status.PASSIVE: (200, 80, 60),     # Red tint
    Status.COMPLETE: (60, 100, 160),   # Blue tint
}


class PlaneView:
    """
    A 2-D window onto an N-D graph.

    Two axes are drawn (x, y); every other axis is pinned to a coordinate
    from `fixed` (default 0). Graphs with fewer than two axes are drawn
    with the missing axes collapsed to length 1.
    """
    def __init__(self, graph: HypercubeGraph, axes: Sequence[int] = (0, 1),
                 fixed: Optional[Mapping[int, int]] = None):
        self.graph = graph
        drawn = [dg for dg in axes if dg < graph.degree][:2]
        self.x_axis = drawn[0] if len(drawn) > 0 else None
        self.y_axis = drawn[1] if len(drawn) > 1 else None
        self.fixed = dict(fixed or {})
        for dg in self.fixed:
            if not 0 <= dg < graph.degree:
                raise InvalidIndex(f"Cannot pin axis {dg}: graph has {graph.degree} axes")
            if dg in (self.x_axis, self.y_axis):
                raise InvalidIndex(f"Cannot pin axis {dg}: it is drawn")

        query = []
        for dg, dimension in enumerate(graph.dimensions):
            if dg in (self.x_axis, self.y_axis):
                query.append(None)
                continue
            coordinate = self.fixed.setdefault(dg, 0)
            if not 0 <= coordinate < dimension:
                raise InvalidIndex(f"Axis {dg} coordinate {coordinate} outside 0..{dimension - 1}")
            query.append(coordinate)

        self.width = graph.dimensions[self.x_axis] if self.x_axis is not None else 1
        self.height = graph.dimensions[self.y_axis] if self.y_axis is not None else 1

        # ids[x, y] -> cell id
        self.ids = np.zeros((self.width, self.height), dtype=np.int64)
        for id in graph.slice_on(*query):
            coordinates = graph.coordinates_of(id)
            x = coordinates[self.x_axis] if self.x_axis is not None else 0
            y = coordinates[self.y_axis] if self.y_axis is not None else 0
            self.ids[x, y] = id

        self.x_direction = self._positive_direction(self.x_axis)
        self.y_direction = self._positive_direction(self.y_axis)

    def _positive_direction(self, axis: Optional[int]) -> Optional[str]:
        if axis is None:
            return None
        for direction, dg in self.graph.axes.items():
            if dg == axis and self.graph.compass[direction] > 0:
                return direction
        return None

    def id_at(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise InvalidIndex(f"Coordinate ({x}, {y}) out of bounds")
        return int(self.ids[x, y])

    def has_wall(self, x: int, y: int, direction: Optional[str]) -> bool:
        """Closed toward `direction`; boundaries count as walls."""
        if direction is None:
            return True
        return not self.graph.data[self.id_at(x, y)].passages[direction]

    def status_image(self, palette: Mapping[Status, Color] = DEFAULT_PALETTE) -> np.ndarray:
        """RGB array shaped (width, height, 3), as pygame.surfarray expects."""
        lookup = np.array([palette[status] for status in Status], dtype=np.uint8)
        codes = np.array(
            [self.graph.data[id].status.code for id in self.ids.ravel()], dtype=np.uint8
        ).reshape(self.ids.shape)
        return lookup[codes]
