"""The two store primitives the purge pipeline depends on.

``ObjectStore`` is the seam between the pipeline and a concrete backend.
``S3ObjectStore`` implements it on top of a boto3 S3 client.
"""

from typing import Optional, Protocol, Sequence

from prefix_purge.core import get_logger
from prefix_purge.core.exceptions import ValidationError
from prefix_purge.objectstorage.models import (
    MAX_DELETE_BATCH_SIZE,
    DeleteBatchResult,
    DeleteError,
    ListPage,
    ObjectKey,
)

logger = get_logger(__name__)


class ObjectStore(Protocol):
    """Protocol for an object store that can list and batch-delete keys."""

    def list_page(
        self, bucket: str, prefix: str, continuation_token: Optional[str] = None
    ) -> ListPage:
        """Return one page of keys under ``prefix``."""
        ...

    def delete_batch(
        self, bucket: str, keys: Sequence[ObjectKey]
    ) -> DeleteBatchResult:
        """Delete up to MAX_DELETE_BATCH_SIZE keys in one request."""
        ...


def validate_batch(keys: Sequence[ObjectKey]) -> None:
    """Check that a key batch fits a single delete request.

    Raises:
        ValidationError: If the batch is empty or too large
    """
    if not keys:
        raise ValidationError("Delete batch must contain at least one key")
    if len(keys) > MAX_DELETE_BATCH_SIZE:
        raise ValidationError(
            f"Delete batch of {len(keys)} keys exceeds the limit of "
            f"{MAX_DELETE_BATCH_SIZE}"
        )


class S3ObjectStore:
    """ObjectStore backed by the S3 ``list_objects_v2`` and ``delete_objects`` APIs.

    Errors raised by boto3 (``ClientError``, endpoint and credential errors)
    propagate unchanged; the pipeline decides how to account for them.
    """

    def __init__(self, client, page_size: Optional[int] = None):
        """Initialize the store.

        Args:
            client: boto3 S3 client
            page_size: Optional MaxKeys per list request (store default if None)
        """
        self.client = client
        self.page_size = page_size

    def list_page(
        self, bucket: str, prefix: str, continuation_token: Optional[str] = None
    ) -> ListPage:
        kwargs = {"Bucket": bucket, "Prefix": prefix}
        if continuation_token:
            kwargs["ContinuationToken"] = continuation_token
        if self.page_size:
            kwargs["MaxKeys"] = self.page_size

        response = self.client.list_objects_v2(**kwargs)

        keys = tuple(obj["Key"] for obj in response.get("Contents", []))
        page = ListPage(
            keys=keys,
            has_more=bool(response.get("IsTruncated", False)),
            next_token=response.get("NextContinuationToken"),
        )
        logger.debug(
            "S3 list page fetched",
            bucket=bucket,
            prefix=prefix,
            key_count=len(keys),
            has_more=page.has_more,
        )
        return page

    def delete_batch(
        self, bucket: str, keys: Sequence[ObjectKey]
    ) -> DeleteBatchResult:
        validate_batch(keys)

        # Quiet=False so the response lists every deleted key
        response = self.client.delete_objects(
            Bucket=bucket,
            Delete={"Objects": [{"Key": key} for key in keys], "Quiet": False},
        )

        errors = tuple(
            DeleteError(
                key=err.get("Key", ""),
                code=err.get("Code", ""),
                message=err.get("Message", ""),
            )
            for err in response.get("Errors", [])
        )
        return DeleteBatchResult(
            deleted_count=len(response.get("Deleted", [])),
            errors=errors,
        )
