"""Test configuration and fixtures for prefix-purge."""

import boto3
import pytest
from moto import mock_aws

from prefix_purge.objectstorage.models import DeleteBatchResult, ListPage


class FakeObjectStore:
    """In-memory ObjectStore that replays scripted pages and batch results.

    ``pages`` and ``batch_results`` entries may be exceptions, which are
    raised instead of returned. When ``batch_results`` runs out, every key
    in a batch is reported as deleted.
    """

    def __init__(self, pages=None, batch_results=None):
        self.pages = list(pages or [ListPage(keys=())])
        self.batch_results = list(batch_results or [])
        self.list_calls = []
        self.delete_calls = []

    def list_page(self, bucket, prefix, continuation_token=None):
        self.list_calls.append((bucket, prefix, continuation_token))
        page = self.pages[len(self.list_calls) - 1]
        if isinstance(page, Exception):
            raise page
        return page

    def delete_batch(self, bucket, keys):
        self.delete_calls.append((bucket, tuple(keys)))
        if self.batch_results:
            result = self.batch_results.pop(0)
            if isinstance(result, Exception):
                raise result
            return result
        return DeleteBatchResult(deleted_count=len(keys))


def single_page(keys):
    """One page holding every key, with no continuation."""
    return [ListPage(keys=tuple(keys))]


@pytest.fixture
def fake_store():
    """Factory for scripted FakeObjectStore instances."""
    return FakeObjectStore


@pytest.fixture
def aws_credentials(monkeypatch):
    """Dummy credentials so boto3 never reaches a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "test_key")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "test_secret")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def s3_client(aws_credentials):
    """Mocked S3 client with an empty ``test-bucket``."""
    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket="test-bucket")
        yield client


@pytest.fixture
def populated_bucket(s3_client):
    """``test-bucket`` holding five objects under ``data/`` and one outside."""
    for i in range(5):
        s3_client.put_object(
            Bucket="test-bucket", Key=f"data/file{i}.txt", Body=b"content"
        )
    s3_client.put_object(Bucket="test-bucket", Key="other/keep.txt", Body=b"keep")
    return s3_client


def bucket_keys(client, bucket="test-bucket"):
    """Every key currently in ``bucket``."""
    response = client.list_objects_v2(Bucket=bucket)
    return sorted(obj["Key"] for obj in response.get("Contents", []))
