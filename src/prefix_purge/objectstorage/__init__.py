"""Object storage listing and deletion for S3-compatible services."""

from .clients import S3ClientConfig, S3ClientManager
from .deletion import BatchDeleter, chunk_keys
from .listing import PrefixLister
from .models import (
    MAX_DELETE_BATCH_SIZE,
    DeleteBatchResult,
    DeleteError,
    DeletionOutcome,
    DeletionSummary,
    ListPage,
    ListResult,
    ListStatus,
    StopReason,
)
from .s3_operations import delete_objects_by_prefix, list_objects_by_prefix
from .store import ObjectStore, S3ObjectStore

__all__ = [
    "MAX_DELETE_BATCH_SIZE",
    "BatchDeleter",
    "DeleteBatchResult",
    "DeleteError",
    "DeletionOutcome",
    "DeletionSummary",
    "ListPage",
    "ListResult",
    "ListStatus",
    "ObjectStore",
    "PrefixLister",
    "S3ClientConfig",
    "S3ClientManager",
    "S3ObjectStore",
    "StopReason",
    "chunk_keys",
    "delete_objects_by_prefix",
    "list_objects_by_prefix",
]
