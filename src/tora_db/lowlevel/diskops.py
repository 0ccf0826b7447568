'''
Whole file persistence for tables.

There is no incremental persistence, every write replaces the full file and
every read loads it whole. No locking is done between writers and readers.

'''
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from tora_db._utils import resolve_db_path
from tora_db.codec import Codec, default_codec
from tora_db.errors import LoadDbError, LoadDbErrorKind

if TYPE_CHECKING:
    from tora_db.engine import Db


log = logging.getLogger(__name__)


def write_bytes(path: str | Path, raw: bytes) -> Path:
    '''
    In order to atomically overwrite an on disk table, write the full payload
    to a temporal location adjacent to target, then replace the target with
    it.

    '''
    path = resolve_db_path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp = path.with_suffix(path.suffix + '.tmp')
    tmp.write_bytes(raw)
    try:
        tmp.replace(path)

    except OSError:
        tmp.unlink(missing_ok=True)
        raise

    return path


def read_bytes(path: str | Path) -> bytes:
    path = resolve_db_path(path)
    try:
        return path.read_bytes()

    except OSError as e:
        raise LoadDbError(
            f'could not read {path}: {e}', LoadDbErrorKind.IO
        ) from e


def write_db(db: Db, path: str | Path, *, codec: Codec | None = None) -> Path:
    raw = (codec or default_codec).encode(db)
    path = write_bytes(path, raw)
    log.debug(f'wrote table to {path}, size: {len(raw):,} bytes')
    return path


def read_db(path: str | Path, *, codec: Codec | None = None) -> Db:
    raw = read_bytes(path)
    log.debug(f'read {len(raw):,} bytes from {path}')
    return (codec or default_codec).decode(raw)
