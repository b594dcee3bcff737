"""Local filesystem record store.

Stores each record kind in its own NDJSON file under the application data
directory::

    {data_dir}/insomnia.{Kind}.db

Uses ``anyio.to_thread.run_sync`` for non-blocking file I/O.  Records of
other kinds found in a file are ignored on read, so unrelated record types
can share a file without corrupting each other's view.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import partial
from pathlib import Path

from anyio import to_thread
from loguru import logger

from insomnia_store.models.enums import RecordType
from insomnia_store.store import codec
from insomnia_store.store.codec import Record

DEFAULT_PROJECT_ID = "proj_scratchpad"


def file_name(kind: RecordType) -> str:
    return f"insomnia.{kind}.db"


class LocalRecordStore:
    """Local filesystem implementation of the RecordStore protocol."""

    def __init__(self, data_dir: str | Path, project_id: str | None = None) -> None:
        self._data_dir = Path(data_dir)
        self._project_id = project_id

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, kind: RecordType) -> Path:
        return self._data_dir / file_name(kind)

    # -- Read ------------------------------------------------------------------

    async def read(self, kind: RecordType) -> list[Record]:
        records = await to_thread.run_sync(partial(codec.read_records, self.path_for(kind)))
        return [record for record in records if record.get("type") == kind]

    async def read_projects(self) -> list[Record]:
        return await self.read(RecordType.PROJECT)

    # -- Write -----------------------------------------------------------------

    async def write(self, kind: RecordType, records: list[Record]) -> None:
        if kind is RecordType.PROJECT:
            msg = "Project records are read only"
            raise ValueError(msg)
        logger.debug("Writing {} {} record(s) to {}", len(records), kind, self.path_for(kind))
        await to_thread.run_sync(partial(codec.write_records, self.path_for(kind), records))

    async def write_many(self, changes: Mapping[RecordType, list[Record]]) -> None:
        if RecordType.PROJECT in changes:
            msg = "Project records are read only"
            raise ValueError(msg)
        targets = {self.path_for(kind): records for kind, records in changes.items()}
        logger.debug("Writing {} file(s) as one unit: {}", len(targets), ", ".join(p.name for p in targets))
        await to_thread.run_sync(partial(_write_many, targets))

    # -- Projects --------------------------------------------------------------

    async def resolve_project_id(self) -> str:
        """Configured override, else the first project on disk, else the scratch pad."""
        if self._project_id:
            return self._project_id
        for project in await self.read_projects():
            if isinstance(project.get("_id"), str):
                return project["_id"]
        return DEFAULT_PROJECT_ID


# -- Sync helpers (run in thread pool) -----------------------------------------


def _write_many(targets: dict[Path, list[Record]]) -> None:
    """Stage every file, then rename them into place.

    A failure while staging leaves every target untouched.  The renames
    themselves are not jointly atomic: a failure after the first rename
    leaves the earlier files replaced and the later ones not.
    """
    staged: list[tuple[Path, Path]] = []
    try:
        for path, records in targets.items():
            staged.append((codec.stage(path, codec.encode_records(records)), path))
    except BaseException:
        for tmp_path, _ in staged:
            codec.discard(tmp_path)
        raise

    for index, (tmp_path, path) in enumerate(staged):
        try:
            codec.commit(tmp_path, path)
        except BaseException:
            for pending, _ in staged[index + 1 :]:
                codec.discard(pending)
            raise
