"""Delete everything under a prefix in bounded-size batches.

Deletion runs in two phases: a complete listing, then one delete request per
chunk of at most ``batch_size`` keys. Chunks run strictly in order and one at
a time. Deletions are irrevocable, so a fault or cancellation part way
through keeps the progress already made and reports it.
"""

from typing import Iterator, Optional, Sequence

from prefix_purge.core import CancellationToken, get_logger, get_tracer
from prefix_purge.core.exceptions import ValidationError
from prefix_purge.objectstorage.listing import PrefixLister
from prefix_purge.objectstorage.models import (
    MAX_DELETE_BATCH_SIZE,
    DeleteBatchResult,
    DeletionOutcome,
    DeletionSummary,
    ListStatus,
    ObjectKey,
    StopReason,
    unaccounted_count,
)
from prefix_purge.objectstorage.store import ObjectStore

logger = get_logger(__name__)
tracer = get_tracer(__name__)


def chunk_keys(
    keys: Sequence[ObjectKey], size: int
) -> Iterator[tuple[ObjectKey, ...]]:
    """Yield consecutive chunks of ``keys``; chunk i is keys[i*size:(i+1)*size]."""
    if size < 1:
        raise ValidationError(f"Chunk size must be positive, got: {size}")
    for start in range(0, len(keys), size):
        yield tuple(keys[start : start + size])


class BatchDeleter:
    """Lists the objects under a prefix and deletes them batch by batch."""

    def __init__(
        self,
        store: ObjectStore,
        batch_size: int = MAX_DELETE_BATCH_SIZE,
        lister: Optional[PrefixLister] = None,
    ):
        """Initialize the deleter.

        Args:
            store: Object store providing ``list_page`` and ``delete_batch``
            batch_size: Keys per delete request, 1 to 1000
            lister: Lister to use, defaults to one over ``store``

        Raises:
            ValidationError: If batch_size is out of range
        """
        if not 1 <= batch_size <= MAX_DELETE_BATCH_SIZE:
            raise ValidationError(
                f"batch_size must be between 1 and {MAX_DELETE_BATCH_SIZE}, "
                f"got: {batch_size}"
            )
        self.store = store
        self.batch_size = batch_size
        self.lister = lister or PrefixLister(store)

    def delete_by_prefix(
        self,
        bucket: str,
        prefix: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> DeletionOutcome:
        """Delete every object under ``prefix`` in ``bucket``.

        Args:
            bucket: Bucket name
            prefix: Key prefix, empty for the whole bucket
            cancellation: Checked before every remote call

        Returns:
            DeletionOutcome whose ``success`` is true only when every listed
            object was handled without per-object errors or interruption
        """
        cancellation = cancellation or CancellationToken.none()
        logger.info("Deleting objects by prefix", bucket=bucket, prefix=prefix)

        listing = self.lister.list_by_prefix(bucket, prefix, cancellation)
        if not listing.succeeded:
            reason = (
                StopReason.LIST_CANCELLED
                if listing.status is ListStatus.CANCELLED
                else StopReason.LIST_FAILED
            )
            logger.warning(
                "Listing did not complete, no objects deleted",
                bucket=bucket,
                prefix=prefix,
                stop_reason=reason.value,
            )
            return DeletionOutcome(
                success=False,
                summary=DeletionSummary(),
                stop_reason=reason,
                error=listing.error,
            )

        total_found = len(listing.keys)
        if total_found == 0:
            logger.info("No objects found with prefix", bucket=bucket, prefix=prefix)
            return DeletionOutcome(
                success=True,
                summary=DeletionSummary(),
                stop_reason=StopReason.NOTHING_TO_DELETE,
            )

        logger.info(
            "Starting batch deletion",
            bucket=bucket,
            prefix=prefix,
            object_count=total_found,
            batch_size=self.batch_size,
        )
        outcome = self._delete_chunks(bucket, listing.keys, cancellation)

        logger.info(
            "Deletion finished",
            bucket=bucket,
            prefix=prefix,
            success=outcome.success,
            stop_reason=outcome.stop_reason.value,
            total_found=outcome.summary.total_found,
            total_deleted=outcome.summary.total_deleted,
            error_count=len(outcome.summary.errors),
            unaccounted=outcome.summary.unaccounted,
        )
        return outcome

    def _delete_chunks(
        self,
        bucket: str,
        keys: Sequence[ObjectKey],
        cancellation: CancellationToken,
    ) -> DeletionOutcome:
        stop_reason = StopReason.COMPLETED
        error: Optional[str] = None
        batches: list[tuple[DeleteBatchResult, int]] = []
        deleted = 0

        with tracer.start_as_current_span("delete_chunks") as span:
            span.set_attribute("s3.bucket", bucket)
            span.set_attribute("s3.key_count", len(keys))

            for chunk in chunk_keys(keys, self.batch_size):
                if cancellation.cancelled:
                    logger.warning(
                        "Deletion cancelled mid-operation",
                        bucket=bucket,
                        batches_submitted=len(batches),
                        total_deleted=deleted,
                    )
                    stop_reason = StopReason.CANCELLED
                    break

                try:
                    result = self.store.delete_batch(bucket, chunk)
                except Exception as e:
                    error = (
                        f"Delete batch {len(batches) + 1} failed "
                        f"in bucket {bucket}: {e}"
                    )
                    logger.error(error, error=str(e), batch_keys=len(chunk))
                    span.record_exception(e)
                    stop_reason = StopReason.BATCH_FAILED
                    break

                batches.append((result, len(chunk)))
                deleted += result.deleted_count
                self._log_batch(bucket, len(batches), len(chunk), result)

            span.set_attribute("s3.batches_submitted", len(batches))

        summary = DeletionSummary.from_batches(len(keys), batches)
        return DeletionOutcome(
            success=not summary.errors and stop_reason is StopReason.COMPLETED,
            summary=summary,
            stop_reason=stop_reason,
            batches_submitted=len(batches),
            error=error,
        )

    @staticmethod
    def _log_batch(
        bucket: str, batch_number: int, submitted: int, result: DeleteBatchResult
    ) -> None:
        logger.info(
            "Batch deleted",
            bucket=bucket,
            batch=batch_number,
            submitted=submitted,
            deleted=result.deleted_count,
            errors=len(result.errors),
        )
        shortfall = unaccounted_count(result, submitted)
        if shortfall > 0:
            # Ambiguous store response: neither deleted nor errored
            logger.warning(
                "Store response left keys unaccounted for",
                bucket=bucket,
                batch=batch_number,
                unaccounted=shortfall,
            )
