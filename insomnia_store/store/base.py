"""Record store interface.

The record store owns the four flat NDJSON files that together act as one
logical database, plus the read-only project file.  Every read goes to disk;
there is no cache, so the data directory is always the single source of
truth.  The interface is async so that file I/O never blocks the event loop.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from insomnia_store.models.enums import RecordType
from insomnia_store.store.codec import Record


@runtime_checkable
class RecordStore(Protocol):
    """Async protocol for whole-file reads and rewrites of record sets.

    Storage layout::

        {data_dir}/insomnia.Workspace.db
        {data_dir}/insomnia.RequestGroup.db
        {data_dir}/insomnia.Request.db
        {data_dir}/insomnia.Environment.db
        {data_dir}/insomnia.Project.db      (read only)
    """

    @property
    def data_dir(self) -> Path: ...

    async def read(self, kind: RecordType) -> list[Record]:
        """Read every record of ``kind``.  Missing file = empty list."""
        ...

    async def write(self, kind: RecordType, records: list[Record]) -> None:
        """Replace the file for ``kind`` with ``records``."""
        ...

    async def write_many(self, changes: Mapping[RecordType, list[Record]]) -> None:
        """Replace several files, staging all of them before renaming any."""
        ...

    async def resolve_project_id(self) -> str:
        """Return the project that owns newly created collections."""
        ...
