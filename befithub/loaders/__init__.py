"""Loaders writing records to the document store."""

from .firestore import (
    DocumentWrite,
    FirestoreBatchLoader,
    LoadResult,
    batch_count,
    chunk_records,
    get_firestore_client,
    server_timestamp,
)

__all__ = [
    "DocumentWrite",
    "FirestoreBatchLoader",
    "LoadResult",
    "batch_count",
    "chunk_records",
    "get_firestore_client",
    "server_timestamp",
]
