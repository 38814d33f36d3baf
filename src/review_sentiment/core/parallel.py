# parallel.py
import logging
from typing import Any, Callable, Iterable, List

from joblib import Parallel, delayed

logger = logging.getLogger(__name__)


def parallel_map(
    func: Callable[[Any], Any],
    items: Iterable[Any],
    n_jobs: int = -1,
    batch_size: Any = "auto",
) -> List[Any]:
    """
    Map a pure function over ``items`` across worker processes.

    Results come back in input order. ``n_jobs=1`` runs in the calling
    process, which is what the tests use.
    """
    items = list(items)
    if not items:
        return []
    if n_jobs == 1:
        return [func(x) for x in items]
    logger.debug(f"parallel_map: {len(items)} items, n_jobs={n_jobs}")
    return Parallel(n_jobs=n_jobs, batch_size=batch_size)(
        delayed(func)(x) for x in items
    )
