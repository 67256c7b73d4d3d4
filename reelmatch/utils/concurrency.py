from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, TypeVar

from reelmatch.config.settings import settings

T = TypeVar("T")
R = TypeVar("R")


def fan_out(fn: Callable[[T], R], items: Iterable[T], max_workers: Optional[int] = None) -> List[R]:
    """Run fn over items concurrently and return the results in input order.

    Blocks until every unit has finished. fn is expected to handle its own
    failures; an exception escaping fn propagates to the caller.
    """
    items = list(items)
    if not items:
        return []
    workers = max(1, min(max_workers or settings.FANOUT_MAX_WORKERS, len(items)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="reelmatch-fanout") as executor:
        return list(executor.map(fn, items))
