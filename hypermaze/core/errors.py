class InvalidIndex(IndexError):
    """A cell id outside [0, size) was addressed."""


class EmptyContainer(IndexError):
    """pop/peek/dequeue/front on an empty frontier."""


class NotAdjacent(ValueError):
    """Two ids are not grid neighbors along the requested direction."""
