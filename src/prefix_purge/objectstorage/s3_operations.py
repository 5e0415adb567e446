"""S3 entry points for listing and deleting objects under a prefix.

These functions take an ``s3://bucket/prefix`` path and connection keywords,
build the client and store, and run the pipeline. Use ``BatchDeleter`` and
``PrefixLister`` directly to plug in another ObjectStore.
"""

from typing import Optional

from prefix_purge.core import CancellationToken, get_logger, settings
from prefix_purge.core.exceptions import CommandExecutionError
from prefix_purge.objectstorage.clients import S3ClientConfig, S3ClientManager
from prefix_purge.objectstorage.deletion import BatchDeleter
from prefix_purge.objectstorage.listing import PrefixLister
from prefix_purge.objectstorage.models import DeletionOutcome, ObjectKey
from prefix_purge.objectstorage.store import S3ObjectStore

logger = get_logger(__name__)


def _build_store(
    access_key_id: Optional[str],
    secret_access_key: Optional[str],
    session_token: Optional[str],
    region_name: str,
    endpoint_url: Optional[str],
    aws_profile: Optional[str],
    page_size: Optional[int] = None,
) -> S3ObjectStore:
    config = S3ClientConfig(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
    )
    client_manager = S3ClientManager(config)
    return S3ObjectStore(client_manager.client, page_size=page_size)


def list_objects_by_prefix(
    s3_path: str,
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    session_token: Optional[str] = None,
    region_name: str = "us-east-1",
    endpoint_url: Optional[str] = None,
    aws_profile: Optional[str] = None,
    page_size: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
) -> list[ObjectKey]:
    """List every object key under an S3 prefix.

    Args:
        s3_path: S3 path in format s3://bucket/prefix
        access_key_id: AWS access key ID
        secret_access_key: AWS secret access key
        session_token: AWS session token for temporary credentials
        region_name: AWS region name
        endpoint_url: Custom S3 endpoint URL
        aws_profile: AWS CLI profile name
        page_size: Keys per list request (store default if None)
        cancellation: Optional cancellation token

    Returns:
        Object keys in listing order

    Raises:
        ValidationError: If the path format is invalid
        CommandExecutionError: If the listing failed or was cancelled
    """
    bucket, prefix = S3ClientManager.parse_s3_path(s3_path)
    store = _build_store(
        access_key_id,
        secret_access_key,
        session_token,
        region_name,
        endpoint_url,
        aws_profile,
        page_size,
    )

    result = PrefixLister(store).list_by_prefix(bucket, prefix, cancellation)
    if not result.succeeded:
        error_msg = result.error or f"Listing of '{s3_path}' was {result.status.value}"
        logger.error("Failed to list S3 objects", s3_path=s3_path, error=error_msg)
        raise CommandExecutionError(error_msg)

    return list(result.keys)


def delete_objects_by_prefix(
    s3_path: str,
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    session_token: Optional[str] = None,
    region_name: str = "us-east-1",
    endpoint_url: Optional[str] = None,
    aws_profile: Optional[str] = None,
    batch_size: Optional[int] = None,
    page_size: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
) -> DeletionOutcome:
    """Delete every object under an S3 prefix in batches.

    Store faults and cancellation do not raise; they are reported through
    the returned outcome, whose ``success`` flag is authoritative.

    Args:
        s3_path: S3 path in format s3://bucket/prefix
        access_key_id: AWS access key ID
        secret_access_key: AWS secret access key
        session_token: AWS session token for temporary credentials
        region_name: AWS region name
        endpoint_url: Custom S3 endpoint URL
        aws_profile: AWS CLI profile name
        batch_size: Keys per delete request (settings.delete_batch_size if None)
        page_size: Keys per list request (store default if None)
        cancellation: Optional cancellation token

    Returns:
        DeletionOutcome, which unpacks as ``(success, summary)``

    Raises:
        ValidationError: If the path format or batch size is invalid
    """
    bucket, prefix = S3ClientManager.parse_s3_path(s3_path)
    store = _build_store(
        access_key_id,
        secret_access_key,
        session_token,
        region_name,
        endpoint_url,
        aws_profile,
        page_size,
    )

    if batch_size is None:
        batch_size = settings.delete_batch_size
    deleter = BatchDeleter(store, batch_size=batch_size)
    return deleter.delete_by_prefix(bucket, prefix, cancellation)
