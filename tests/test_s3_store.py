"""Tests for the boto3-backed object store."""

from unittest.mock import MagicMock

import pytest

from conftest import bucket_keys
from prefix_purge.core.exceptions import ValidationError
from prefix_purge.objectstorage.models import DeleteError
from prefix_purge.objectstorage.store import S3ObjectStore


class TestS3ObjectStoreListing:
    """Test list_page against mocked S3."""

    def test_list_page_filters_by_prefix(self, populated_bucket):
        """Test only keys under the prefix are returned."""
        page = S3ObjectStore(populated_bucket).list_page("test-bucket", "data/")

        assert sorted(page.keys) == [f"data/file{i}.txt" for i in range(5)]
        assert page.has_more is False

    def test_list_page_paginates(self, populated_bucket):
        """Test a small page size yields continuation tokens."""
        store = S3ObjectStore(populated_bucket, page_size=2)

        first = store.list_page("test-bucket", "data/")
        second = store.list_page("test-bucket", "data/", first.next_token)

        assert len(first.keys) == 2
        assert first.has_more is True
        assert first.next_token
        assert len(second.keys) == 2
        assert set(first.keys).isdisjoint(second.keys)

    def test_list_page_empty_prefix(self, s3_client):
        """Test an empty result has no keys and no token."""
        page = S3ObjectStore(s3_client).list_page("test-bucket", "missing/")

        assert page.keys == ()
        assert page.has_more is False
        assert page.next_token is None


class TestS3ObjectStoreDeletion:
    """Test delete_batch against mocked S3."""

    def test_delete_batch_removes_objects(self, populated_bucket):
        """Test deleted keys disappear and are counted."""
        store = S3ObjectStore(populated_bucket)

        result = store.delete_batch("test-bucket", ["data/file0.txt", "data/file1.txt"])

        assert result.deleted_count == 2
        assert result.errors == ()
        assert "data/file0.txt" not in bucket_keys(populated_bucket)
        assert "data/file2.txt" in bucket_keys(populated_bucket)

    def test_delete_batch_maps_errors(self):
        """Test per-object errors in the response become DeleteError values."""
        client = MagicMock()
        client.delete_objects.return_value = {
            "Deleted": [{"Key": "a"}],
            "Errors": [
                {"Key": "b", "Code": "AccessDenied", "Message": "Access Denied"}
            ],
        }

        result = S3ObjectStore(client).delete_batch("bucket", ["a", "b"])

        assert result.deleted_count == 1
        assert result.errors == (
            DeleteError(key="b", code="AccessDenied", message="Access Denied"),
        )
        client.delete_objects.assert_called_once_with(
            Bucket="bucket",
            Delete={"Objects": [{"Key": "a"}, {"Key": "b"}], "Quiet": False},
        )

    def test_delete_batch_rejects_empty(self):
        """Test an empty batch never reaches the store."""
        client = MagicMock()
        with pytest.raises(ValidationError, match="at least one key"):
            S3ObjectStore(client).delete_batch("bucket", [])
        client.delete_objects.assert_not_called()

    def test_delete_batch_rejects_oversized(self):
        """Test more than 1000 keys is rejected."""
        client = MagicMock()
        keys = [f"k{i}" for i in range(1001)]
        with pytest.raises(ValidationError, match="exceeds the limit"):
            S3ObjectStore(client).delete_batch("bucket", keys)
        client.delete_objects.assert_not_called()
