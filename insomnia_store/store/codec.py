"""NDJSON record codec.

One JSON object per line, split on the newline character only, since U+2028
and other Unicode line separators may appear unescaped inside strings.  Blank
lines and CRLF endings written by other tools are tolerated on read; anything
else that fails to parse is fatal.

The file helpers here are synchronous and are meant to run in a worker
thread (see ``insomnia_store.store.local``).  Writes are atomic: data is
written to a temporary file in the same directory, then renamed over the
target, so readers never see a partially-written file.
"""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from insomnia_store.errors import CorruptStoreError, FileSystemError

Record = dict[str, Any]


def decode_records(text: str, source: str = "<memory>") -> list[Record]:
    """Parse NDJSON text into records, preserving order and duplicates."""
    records: list[Record] = []
    for line_number, raw in enumerate(text.split("\n"), start=1):
        line = raw.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError as exc:
            raise CorruptStoreError(source, line_number, exc.msg) from exc
        if not isinstance(record, dict):
            raise CorruptStoreError(source, line_number, f"expected a JSON object, got {type(record).__name__}")
        records.append(record)
    return records


def encode_records(records: Iterable[Record]) -> str:
    """Serialize records as NDJSON.  Trailing newline only when non-empty."""
    lines = [json.dumps(record, ensure_ascii=False, separators=(",", ":")) for record in records]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


# -- Sync file helpers (run in thread pool) ------------------------------------


def read_records(path: Path) -> list[Record]:
    """Read every record from ``path``.  A missing file is an empty set."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except UnicodeDecodeError as exc:
        raise CorruptStoreError(str(path), 0, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise FileSystemError(f"Failed to read {path}", path=str(path), cause=exc) from exc
    return decode_records(text, source=str(path))


def write_records(path: Path, records: Iterable[Record]) -> None:
    """Replace the full contents of ``path`` with ``records``."""
    data = encode_records(records)
    tmp_path = stage(path, data)
    commit(tmp_path, path)


def stage(path: Path, data: str) -> Path:
    """Write ``data`` to a temp file beside ``path`` and return the temp path.

    The temp file is created in the same directory so the later rename is
    atomic on POSIX.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as exc:
        raise FileSystemError(f"Failed to prepare {path}", path=str(path), cause=exc) from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(data)
    except BaseException as exc:
        discard(Path(tmp_name))
        if isinstance(exc, OSError):
            raise FileSystemError(f"Failed to write {path}", path=str(path), cause=exc) from exc
        raise
    return Path(tmp_name)


def commit(tmp_path: Path, path: Path) -> None:
    """Rename a staged temp file over its target."""
    try:
        os.replace(tmp_path, path)
    except OSError as exc:
        discard(tmp_path)
        raise FileSystemError(f"Failed to replace {path}", path=str(path), cause=exc) from exc


def discard(tmp_path: Path) -> None:
    """Remove a staged temp file.  No-op if it is already gone."""
    with contextlib.suppress(OSError):
        os.unlink(tmp_path)
