from collections import deque
from typing import Generic, List, TypeVar

from hypermaze.core.errors import EmptyContainer

T = TypeVar("T")


class Stack(Generic[T]):
    """LIFO frontier. The "top" is the end of the list."""

    def __init__(self, *nodes: T):
        self.data: List[T] = list(nodes)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def has_nodes(self) -> bool:
        return self.size != 0

    def __len__(self):
        return self.size

    def push(self, node: T):
        self.data.append(node)

    def pop(self) -> T:
        if not self.data:
            raise EmptyContainer("Cannot pop an empty stack")
        return self.data.pop()

    def peek(self) -> T:
        if not self.data:
            raise EmptyContainer("Cannot peek into an empty stack")
        return self.data[-1]


class Queue(Generic[T]):
    """FIFO frontier. Nodes join at the back and leave from the front."""

    def __init__(self, *nodes: T):
        self.data = deque(nodes)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def has_nodes(self) -> bool:
        return self.size != 0

    def __len__(self):
        return self.size

    def enqueue(self, node: T):
        self.data.append(node)

    def dequeue(self) -> T:
        if not self.data:
            raise EmptyContainer("Cannot dequeue an empty queue")
        return self.data.popleft()

    def front(self) -> T:
        if not self.data:
            raise EmptyContainer("Cannot see front of an empty queue")
        return self.data[0]
