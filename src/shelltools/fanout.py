"""Concurrent per-path fan-out with sequential aggregation.

Every target path becomes one task on a bounded thread pool. Tasks never
share state: each one returns its value (or raises) and the coordinating
thread merges outcomes as futures complete. A failure in one task is
recorded against its path and has no effect on the others.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, Iterable, List, Optional, TypeVar

from .logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class FanOutResult(Generic[T]):
    """Outcome of a fan-out run.

    Attributes:
        values: path -> task value, in input order
        errors: path -> raised exception, in input order
    """

    values: Dict[str, T] = field(default_factory=dict)
    errors: Dict[str, Exception] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def __len__(self) -> int:
        return len(self.values) + len(self.errors)


def unique_paths(paths: Iterable[str]) -> List[str]:
    """Drop repeated paths, keeping first-seen order."""
    return list(dict.fromkeys(str(p) for p in paths))


def fan_out(
    paths: Iterable[str],
    task: Callable[[str], T],
    max_workers: Optional[int] = None,
) -> FanOutResult[T]:
    """
    Run ``task`` once per distinct path and collect the results.

    Args:
        paths: Target paths; duplicates are processed once
        task: Callable applied to each path; may raise
        max_workers: Pool size (defaults to one thread per path)

    Returns:
        FanOutResult with every path in exactly one of values/errors
    """
    targets = unique_paths(paths)
    if not targets:
        return FanOutResult()

    workers = max_workers or len(targets)
    completed: Dict[str, T] = {}
    failed: Dict[str, Exception] = {}

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(task, path): path for path in targets}
        for future in as_completed(futures):
            path = futures[future]
            try:
                completed[path] = future.result()
            except Exception as e:
                logger.debug(f"Task failed for {path}: {e}")
                failed[path] = e

    # as_completed order is arbitrary; report in input order
    result: FanOutResult[T] = FanOutResult()
    for path in targets:
        if path in completed:
            result.values[path] = completed[path]
        else:
            result.errors[path] = failed[path]

    logger.debug(f"Fan-out complete: {len(result.values)} ok, {len(result.errors)} failed")
    return result
