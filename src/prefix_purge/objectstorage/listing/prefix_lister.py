"""Paginated listing of every key under a prefix."""

from typing import Optional

from prefix_purge.core import CancellationToken, get_logger, get_tracer
from prefix_purge.objectstorage.models import ListPage, ListResult, ObjectKey
from prefix_purge.objectstorage.store import ObjectStore

logger = get_logger(__name__)
tracer = get_tracer(__name__)


def append_page(keys: list[ObjectKey], page: ListPage) -> list[ObjectKey]:
    """Fold one page into the keys accumulated so far, extending in place."""
    keys.extend(page.keys)
    return keys


def next_token(page: ListPage) -> Optional[str]:
    """Return the token for the following page, or None when listing is done."""
    if page.has_more and page.next_token:
        return page.next_token
    return None


class PrefixLister:
    """Lists every object key under a prefix, following continuation tokens."""

    def __init__(self, store: ObjectStore):
        """Initialize the lister.

        Args:
            store: Object store providing ``list_page``
        """
        self.store = store

    def list_by_prefix(
        self,
        bucket: str,
        prefix: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> ListResult:
        """List all keys under ``prefix`` in ``bucket``.

        The result is all-or-nothing. A fault from the store or a cancellation
        observed before any page request discards the pages fetched so far,
        so callers never act on a silently truncated listing.

        Args:
            bucket: Bucket name
            prefix: Key prefix, empty for the whole bucket
            cancellation: Checked before each page request

        Returns:
            ListResult with status OK and every key in page order, or status
            FAILED/CANCELLED with no keys
        """
        cancellation = cancellation or CancellationToken.none()
        logger.info("Listing objects by prefix", bucket=bucket, prefix=prefix)

        with tracer.start_as_current_span("list_by_prefix") as span:
            span.set_attribute("s3.bucket", bucket)
            span.set_attribute("s3.prefix", prefix)

            keys: list[ObjectKey] = []
            token: Optional[str] = None
            pages = 0

            while True:
                if cancellation.cancelled:
                    logger.warning(
                        "Listing cancelled",
                        bucket=bucket,
                        prefix=prefix,
                        pages_fetched=pages,
                    )
                    return ListResult.cancelled()

                try:
                    page = self.store.list_page(bucket, prefix, token)
                except Exception as e:
                    error_msg = (
                        f"Failed to list objects under s3://{bucket}/{prefix}: {e}"
                    )
                    logger.error(error_msg, error=str(e), pages_fetched=pages)
                    span.record_exception(e)
                    return ListResult.failed(error_msg)

                pages += 1
                keys = append_page(keys, page)
                token = next_token(page)
                if token is None:
                    break

            span.set_attribute("s3.key_count", len(keys))

        logger.info(
            "Objects listed",
            bucket=bucket,
            prefix=prefix,
            pages=pages,
            object_count=len(keys),
        )
        return ListResult.ok(tuple(keys))
