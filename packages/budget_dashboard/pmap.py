"""Order-preserving parallel map over a thread pool, in the spirit of `p-map`.

- ``concurrency`` caps the number of mapper calls running at once.
- Results come back in input order regardless of completion order.
- ``stop_on_error=True`` propagates the first failure (in input order) and
  cancels work that has not started. With ``stop_on_error=False`` every item
  runs to completion and all failures are raised together as an
  ``ExceptionGroup``, ordered by input position.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TypeVar

InT = TypeVar("InT")
OutT = TypeVar("OutT")


def p_map(
    iterable: Iterable[InT],
    mapper: Callable[[InT], OutT],
    *,
    concurrency: int,
    stop_on_error: bool = True,
) -> list[OutT]:
    if isinstance(concurrency, bool) or not isinstance(concurrency, int) or concurrency < 1:
        raise ValueError("concurrency must be a positive integer")

    items = list(iterable)
    if not items:
        return []

    with ThreadPoolExecutor(max_workers=min(concurrency, len(items))) as pool:
        futures: list[Future[OutT]] = [pool.submit(mapper, item) for item in items]

        results: list[OutT] = []
        errors: list[Exception] = []
        for fut in futures:
            try:
                results.append(fut.result())
            except Exception as e:  # noqa: BLE001
                if stop_on_error:
                    for pending in futures:
                        pending.cancel()
                    raise
                errors.append(e)

    if errors:
        raise ExceptionGroup("p_map: one or more mapper calls failed", errors)
    return results


__all__ = ["p_map"]
