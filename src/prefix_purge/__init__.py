"""Bulk deletion of S3 objects that share a key prefix.

The pipeline lists every key under a prefix, following continuation tokens,
then deletes the keys in batches of at most 1000 and reports a summary of
deleted objects and per-object errors. Faults and cancellation are reported
through the returned outcome rather than raised.

Recommended Usage:
    >>> from prefix_purge import delete_objects_by_prefix
    >>> success, summary = delete_objects_by_prefix(
    ...     "s3://my-bucket/tmp/", aws_profile="my-profile"
    ... )

Advanced Usage:
    Run the pipeline against any ObjectStore implementation:

    >>> from prefix_purge.objectstorage import BatchDeleter, S3ObjectStore
    >>> outcome = BatchDeleter(S3ObjectStore(client)).delete_by_prefix(
    ...     "my-bucket", "tmp/", cancellation
    ... )
"""

__version__ = "0.1.0"

from .core import CancellationToken
from .objectstorage import (
    BatchDeleter,
    DeleteError,
    DeletionOutcome,
    DeletionSummary,
    ListResult,
    ObjectStore,
    PrefixLister,
    S3ClientConfig,
    S3ObjectStore,
    StopReason,
    delete_objects_by_prefix,
    list_objects_by_prefix,
)

__all__ = [
    "CancellationToken",
    # Pipeline
    "BatchDeleter",
    "PrefixLister",
    "ObjectStore",
    "S3ObjectStore",
    "S3ClientConfig",
    # Results
    "DeleteError",
    "DeletionOutcome",
    "DeletionSummary",
    "ListResult",
    "StopReason",
    # S3 entry points
    "delete_objects_by_prefix",
    "list_objects_by_prefix",
]
