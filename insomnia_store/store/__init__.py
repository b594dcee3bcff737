"""Record store implementations for NDJSON persistence."""

from insomnia_store.store.base import RecordStore
from insomnia_store.store.local import LocalRecordStore

__all__ = ["LocalRecordStore", "RecordStore"]
