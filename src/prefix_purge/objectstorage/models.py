"""Value types shared by the listing and deletion phases.

All types here are immutable. Loops collect per-step values and build a
result from them once, so every step can be tested on its own.
"""

from dataclasses import dataclass, field
from enum import Enum
from itertools import chain
from typing import Iterator, Optional, Sequence

ObjectKey = str

# Per-request object ceiling of the S3 DeleteObjects API
MAX_DELETE_BATCH_SIZE = 1000


@dataclass(frozen=True)
class ListPage:
    """One page returned by the store's list operation."""

    keys: tuple[ObjectKey, ...]
    has_more: bool = False
    next_token: Optional[str] = None


@dataclass(frozen=True)
class DeleteError:
    """An object the store refused to delete.

    Attributes:
        key: Key of the object that was not deleted
        code: Store error code, e.g. ``AccessDenied``
        message: Human readable error message from the store
    """

    key: ObjectKey
    code: str
    message: str


@dataclass(frozen=True)
class DeleteBatchResult:
    """Outcome of one batch delete call as reported by the store."""

    deleted_count: int
    errors: tuple[DeleteError, ...] = ()


class ListStatus(str, Enum):
    """How a listing ended."""

    OK = "ok"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ListResult:
    """Result of listing every key under a prefix.

    Listing is all-or-nothing: ``keys`` is empty unless the status is OK.
    """

    status: ListStatus
    keys: tuple[ObjectKey, ...] = ()
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status is ListStatus.OK

    @classmethod
    def ok(cls, keys: tuple[ObjectKey, ...]) -> "ListResult":
        return cls(status=ListStatus.OK, keys=keys)

    @classmethod
    def failed(cls, error: str) -> "ListResult":
        return cls(status=ListStatus.FAILED, error=error)

    @classmethod
    def cancelled(cls) -> "ListResult":
        return cls(status=ListStatus.CANCELLED)


def unaccounted_count(batch_result: DeleteBatchResult, submitted: int) -> int:
    """Keys a batch response reported as neither deleted nor errored."""
    return max(submitted - batch_result.deleted_count - len(batch_result.errors), 0)


@dataclass(frozen=True)
class DeletionSummary:
    """Totals for one delete-by-prefix call.

    Attributes:
        total_found: Number of keys the listing returned
        total_deleted: Objects the store confirmed as deleted
        errors: Per-object errors reported by the store, in batch order
        unaccounted: Submitted keys the store reported as neither deleted
            nor errored; left for the caller to reconcile
    """

    total_found: int = 0
    total_deleted: int = 0
    errors: tuple[DeleteError, ...] = ()
    unaccounted: int = 0

    @classmethod
    def from_batches(
        cls,
        total_found: int,
        batches: Sequence[tuple[DeleteBatchResult, int]],
    ) -> "DeletionSummary":
        """Build a summary from (result, submitted key count) pairs in batch order."""
        return cls(
            total_found=total_found,
            total_deleted=sum(result.deleted_count for result, _ in batches),
            errors=tuple(chain.from_iterable(result.errors for result, _ in batches)),
            unaccounted=sum(
                unaccounted_count(result, submitted) for result, submitted in batches
            ),
        )

    @property
    def failed_keys(self) -> frozenset[ObjectKey]:
        return frozenset(error.key for error in self.errors)


class StopReason(str, Enum):
    """Why a delete-by-prefix call stopped."""

    COMPLETED = "completed"
    NOTHING_TO_DELETE = "nothing_to_delete"
    LIST_FAILED = "list_failed"
    LIST_CANCELLED = "list_cancelled"
    CANCELLED = "cancelled"
    BATCH_FAILED = "batch_failed"


@dataclass(frozen=True)
class DeletionOutcome:
    """Overall result of a delete-by-prefix call.

    ``success`` is authoritative: a zero summary with ``success=True`` means
    nothing needed deleting, while ``success=False`` means the run failed or
    was interrupted. Unpacks as ``(success, summary)``.
    """

    success: bool
    summary: DeletionSummary = field(default_factory=DeletionSummary)
    stop_reason: StopReason = StopReason.COMPLETED
    batches_submitted: int = 0
    error: Optional[str] = None

    def __iter__(self) -> Iterator:
        return iter((self.success, self.summary))
