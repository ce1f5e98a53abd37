from typing import Iterator, Optional

from hypermaze.core.cell import Status
from hypermaze.core.events import EventReader, EVT_STATUS, EVT_CARVE
from hypermaze.core.graph import HypercubeGraph


class EventAdapter:
    """
    Adapts an EventReader stream to look like a Traversal for the Renderer.
    Applies one event to the graph per advance().
    """
    def __init__(self, graph: HypercubeGraph, reader: EventReader):
        self.graph = graph
        self.reader = reader
        self.step_count = 0
        self.last_event: Optional[tuple] = None
        self._events = reader.stream_events()
        self._finished = False

    @property
    def is_done(self) -> bool:
        return self._finished

    def advance(self):
        if self._finished:
            return
        try:
            type_code, data = next(self._events)
        except StopIteration:
            self._finished = True
            return

        if type_code == EVT_STATUS:
            id, code = data
            self.graph.cell(id).status = Status.from_code(code)
        elif type_code == EVT_CARVE:
            id, direction_index, neighbor = data
            direction = self.graph.directions[direction_index]
            self.graph.connect_neighbor(direction, id, neighbor)
            self.graph.connect_passage(direction, id, neighbor)

        self.step_count += 1
        self.last_event = (type_code, data)

    def run(self) -> Iterator[tuple]:
        while True:
            self.advance()
            if self._finished:
                return
            yield self.last_event

    def run_all(self) -> int:
        for _ in self.run():
            pass
        return self.step_count
