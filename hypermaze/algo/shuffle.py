import random as _random
from typing import Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")

RANDOM = _random.random


def shuffle(items: Iterable[T], count: Optional[int] = None,
            random: Callable[[], float] = RANDOM) -> List[T]:
    """
    Fisher-Yates sample of `count` items (all of them by default).

    Each pick is floor(random() * remaining), so a source that always
    returns 0.0 keeps the input order.
    """
    pool = list(items)
    if count is None:
        count = len(pool)
    results = []
    for _ in range(count):
        choice = int(random() * len(pool))
        results.append(pool.pop(choice))
    return results
