from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, List, TypeVar

from ..core.exceptions import DomainError

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class BulkFailure(Generic[T]):
    item: T
    error: str
    error_type: str
    details: dict = field(default_factory=dict)


@dataclass
class BulkResult(Generic[T, R]):
    """Per-item outcome of a batch; one failure never aborts the others."""

    succeeded: List[R] = field(default_factory=list)
    failed: List[BulkFailure[T]] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def all_succeeded(self) -> bool:
        return not self.failed


def run_bulk(
    items: Iterable[T],
    handler: Callable[[T], R],
    *,
    log: logging.Logger,
    tag: str,
) -> BulkResult:
    result: BulkResult[Any, Any] = BulkResult()
    for item in items:
        try:
            result.succeeded.append(handler(item))
        except DomainError as ex:
            log.warning("[%s] bulk item failed: %s", tag, ex.message)
            result.failed.append(
                BulkFailure(item=item, error=ex.message, error_type=type(ex).__name__, details=ex.to_dict())
            )
    log.info("[%s] bulk done: ok=%s failed=%s", tag, result.success_count, result.failure_count)
    return result
