'''
# Codec contract

A codec turns a `Db` into bytes and back. Any implementation must be
deterministic and order preserving, and `decode(encode(db)) == db` must hold
for every valid `Db`. Bytes that are not a valid encoding must raise a
`LoadDbError` of kind `MALFORMED`, never a generic error.

# Msgpack codec

The default codec writes a versioned `DbMeta` struct with msgspec's msgpack
encoder. Columns are `{name, type}` maps and values are maps tagged by their
`kind`, so every row is self describing.

On decode the payload goes through msgspec validation (layout, tags, integer
ranges, float32 width) and then is rebuilt through `Db.from_parts`, which
only re-checks the shape. Column types are enforced when values are inserted,
so a stored table may legitimately hold a default of another type.

'''

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import msgspec

from tora_db.dtypes import ValueTypes
from tora_db.engine import Db
from tora_db.errors import LoadDbError, LoadDbErrorKind, QueryError
from tora_db.schema import Column
from tora_db.structs import FrozenStruct


log = logging.getLogger(__name__)


FORMAT_VERSION = 1


class DbMeta(FrozenStruct, frozen=True):
    version: int
    columns: list[Column]
    rows: list[list[ValueTypes]]


@runtime_checkable
class Codec(Protocol):
    def encode(self, db: Db) -> bytes:
        ...

    def decode(self, raw: bytes) -> Db:
        ...


def _malformed(message: str) -> LoadDbError:
    return LoadDbError(message, LoadDbErrorKind.MALFORMED)


class MsgpackCodec:
    def __init__(self, version: int = FORMAT_VERSION) -> None:
        self.version = version

    def encode(self, db: Db) -> bytes:
        meta = DbMeta(
            version=self.version,
            columns=list(db.columns),
            rows=db.rows,
        )
        return meta.encode()

    def decode(self, raw: bytes) -> Db:
        try:
            meta = DbMeta.from_bytes(raw)

        except msgspec.DecodeError as e:
            raise _malformed(f'invalid table encoding: {e}') from e

        if meta.version != self.version:
            raise _malformed(
                f'unsupported format version {meta.version}, expected {self.version}'
            )

        try:
            db = Db.from_parts(meta.columns, meta.rows)

        except QueryError as e:
            raise _malformed(f'table contents violate its schema: {e}') from e

        log.debug(
            f'decoded table, {db.column_count} columns, {db.row_count} rows '
            f'from {len(raw):,} bytes'
        )
        return db


default_codec = MsgpackCodec()
