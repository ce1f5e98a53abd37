from enum import Enum
from typing import Dict, Optional


class Status(str, Enum):
    UNVISITED = "unvisited"
    ACTIVE = "active"      # currently being modified
    PASSIVE = "passive"    # partially completed
    COMPLETE = "complete"

    @property
    def code(self) -> int:
        return STATUS_ORDER.index(self)

    @classmethod
    def from_code(cls, code: int) -> "Status":
        return STATUS_ORDER[code]


STATUS_ORDER = (Status.UNVISITED, Status.ACTIVE, Status.PASSIVE, Status.COMPLETE)


class Cell:
    """
    One node of the maze lattice.

    `id` doubles as the cell's position in the graph's backing list.
    `neighbors` maps direction -> neighbor id (None at a boundary), and
    `passages` maps direction -> True for an open passage, False for a wall.
    """
    __slots__ = ('id', 'status', 'neighbors', 'passages')

    def __init__(self, id: int):
        self.id = id
        self.status = Status.UNVISITED
        self.neighbors: Dict[str, Optional[int]] = {}
        self.passages: Dict[str, bool] = {}

    @property
    def has_path(self) -> bool:
        return any(self.passages.values())

    @property
    def has_wall(self) -> bool:
        return not all(self.passages.values())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "status": self.status.value,
            "neighbors": dict(self.neighbors),
            "passages": dict(self.passages),
        }

    def __repr__(self):
        return f"Cell({self.id}, {self.status.value})"
