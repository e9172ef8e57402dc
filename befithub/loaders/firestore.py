"""Firestore batch loader.

Writes records to a collection in fixed-size ``WriteBatch`` commits, one
batch at a time. A failed commit aborts the remaining batches; reruns are
safe because keyed writes use merge semantics.
"""

import logging
import math
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, TypeVar, Union

import firebase_admin
from firebase_admin import credentials, firestore

from befithub import config
from befithub.utils.pipeline_logger import PipelineLogger, timed_operation

logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_firestore_client(service_account: Optional[Union[str, Path]] = None):
    """Initialize the default Firebase app once and return a Firestore client.
    
    Args:
        service_account: Service-account key path (or from env:
            FIREBASE_SERVICE_ACCOUNT, default "service-account.json")
            
    Raises:
        ConfigError: If the key file does not exist
    """
    try:
        app = firebase_admin.get_app()
    except ValueError:
        key_path = config.service_account_path(service_account)
        app = firebase_admin.initialize_app(credentials.Certificate(str(key_path)))
        logger.info("Firebase app initialized", extra={"service_account": str(key_path)})
    return firestore.client(app)


def server_timestamp():
    """Sentinel replaced by the commit time on the server."""
    return firestore.SERVER_TIMESTAMP


def chunk_records(records: Sequence[T], batch_size: int) -> list[list[T]]:
    """Split records into consecutive chunks of at most ``batch_size``.
    
    Raises:
        ValueError: If batch_size is outside 1..FIRESTORE_MAX_BATCH_SIZE
    """
    if batch_size < 1 or batch_size > config.FIRESTORE_MAX_BATCH_SIZE:
        raise ValueError(
            f"batch_size must be between 1 and {config.FIRESTORE_MAX_BATCH_SIZE}, got {batch_size}"
        )
    records = list(records)
    return [records[i:i + batch_size] for i in range(0, len(records), batch_size)]


def batch_count(record_count: int, batch_size: int) -> int:
    """Number of batches needed for ``record_count`` records."""
    return math.ceil(record_count / batch_size)


@dataclass
class DocumentWrite:
    """One document to write: its key and field values."""
    
    doc_id: Optional[str]
    data: dict[str, Any]


@dataclass
class LoadResult:
    """Outcome of a batch load."""
    
    collection: str
    documents_written: int = 0
    batches_committed: int = 0
    skipped: int = 0
    doc_ids: list[str] = field(default_factory=list)
    
    def to_dict(self) -> dict:
        return {
            "collection": self.collection,
            "documents_written": self.documents_written,
            "batches_committed": self.batches_committed,
            "skipped": self.skipped,
        }


class FirestoreBatchLoader:
    """Write, add, query and delete documents in a single collection."""
    
    def __init__(
        self,
        db,
        collection: str,
        batch_size: int = config.EXERCISE_BATCH_SIZE,
        pipeline_logger: Optional[PipelineLogger] = None,
    ):
        """Initialize loader.
        
        Args:
            db: Firestore client
            collection: Target collection name
            batch_size: Maximum writes per committed batch
            pipeline_logger: Optional structured run logger
        """
        if batch_size < 1 or batch_size > config.FIRESTORE_MAX_BATCH_SIZE:
            raise ValueError(
                f"batch_size must be between 1 and {config.FIRESTORE_MAX_BATCH_SIZE}, got {batch_size}"
            )
        self.db = db
        self.collection = collection
        self.batch_size = batch_size
        self.pipeline_logger = pipeline_logger or PipelineLogger(
            source=collection, run_id=uuid.uuid4().hex[:12]
        )
    
    @property
    def collection_ref(self):
        return self.db.collection(self.collection)
    
    def load(self, writes: Iterable[DocumentWrite], merge: bool = True) -> LoadResult:
        """Write documents by key in sequential batches.
        
        Args:
            writes: Documents to write
            merge: Merge into existing documents instead of replacing them
            
        Returns:
            LoadResult with counts
            
        Raises:
            Exception: Whatever the failing commit raised; later batches
                are not attempted
        """
        result = LoadResult(collection=self.collection)
        keyed = []
        
        for write in writes:
            if not write.doc_id:
                logger.warning(
                    "Skipping record with no document ID",
                    extra={"collection": self.collection, "doc_name": write.data.get("name")}
                )
                result.skipped += 1
                continue
            keyed.append(write)
        
        chunks = chunk_records(keyed, self.batch_size)
        total_batches = batch_count(len(keyed), self.batch_size)
        
        self.pipeline_logger.start("load", row_count=len(keyed), total_batches=total_batches)
        
        for number, chunk in enumerate(chunks, start=1):
            batch = self.db.batch()
            for write in chunk:
                batch.set(self.collection_ref.document(write.doc_id), write.data, merge=merge)
            
            try:
                with timed_operation("batch_commit", logger) as timer:
                    batch.commit()
            except Exception as e:
                self.pipeline_logger.error(
                    "load",
                    e,
                    batch_number=number,
                    total_batches=total_batches,
                    row_count=result.documents_written,
                )
                raise
            
            result.documents_written += len(chunk)
            result.batches_committed += 1
            result.doc_ids.extend(write.doc_id for write in chunk)
            self.pipeline_logger.log_batch_commit(
                number, total_batches, len(chunk), timer.duration_ms
            )
        
        self.pipeline_logger.success("load", row_count=result.documents_written)
        return result
    
    def add_documents(self, records: Iterable[dict]) -> LoadResult:
        """Add documents with auto-generated IDs, one at a time."""
        result = LoadResult(collection=self.collection)
        
        for record in records:
            _, ref = self.collection_ref.add(record)
            result.documents_written += 1
            result.doc_ids.append(ref.id)
            logger.info(
                f"Added document {ref.id}",
                extra={"collection": self.collection, "doc_id": ref.id, "doc_name": record.get("name")}
            )
        
        return result
    
    def find(self, field_path: str, value: Any) -> list:
        """Return snapshots of documents where ``field_path == value``."""
        return list(self.collection_ref.where(field_path, "==", value).stream())
    
    def delete_where(self, field_path: str, value: Any) -> int:
        """Delete every document where ``field_path == value``.
        
        Returns:
            Number of deleted documents
        """
        snapshots = self.find(field_path, value)
        
        for chunk in chunk_records(snapshots, self.batch_size):
            batch = self.db.batch()
            for snapshot in chunk:
                batch.delete(snapshot.reference)
            batch.commit()
        
        if snapshots:
            logger.info(
                f"Deleted {len(snapshots)} documents",
                extra={"collection": self.collection, "field": field_path, "value": value}
            )
        return len(snapshots)
    
    def update(self, doc_id: str, data: dict) -> None:
        """Update fields of an existing document."""
        self.collection_ref.document(doc_id).update(data)
    
    def count(self) -> int:
        """Count documents using a server-side aggregation."""
        results = self.collection_ref.count().get()
        return int(results[0][0].value)
    
    def preview(self, limit: int = 5) -> list:
        """Return the first ``limit`` document snapshots."""
        return list(self.collection_ref.limit(limit).stream())
    
    def stream(self):
        """Iterate over every document snapshot."""
        return self.collection_ref.stream()
