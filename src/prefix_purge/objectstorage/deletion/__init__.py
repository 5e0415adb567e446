"""Chunked batch deletion of listed objects."""

from .batch_deleter import BatchDeleter, chunk_keys

__all__ = ["BatchDeleter", "chunk_keys"]
