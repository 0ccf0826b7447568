'''
# Overview

The table engine.

A `Db` owns an ordered sequence of `Column`s and an ordered sequence of rows,
all data lives in the rows while the columns are only used for type checking
and validation.

Every operation validates first and mutates after, so an operation that
raises a `QueryError` leaves the table exactly as it was. Between calls the
shape invariant always holds: each row has one value per column.

'''

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable

import polars as pl

from tora_db.dtypes import (
    Null,
    Row,
    Type,
    Value,
    ValueTypes,
    format_value,
    type_of,
    value_of,
)
from tora_db.errors import (
    DataMismatch,
    DataOutOfBounds,
    IndexOutOfBounds,
    InvalidInstruction,
    NotFound,
    QueryError,
    TypeMismatch,
)
from tora_db.instructions import (
    AppendColumn,
    AppendRow,
    DeleteColumn,
    DeleteRow,
    Fetch,
    Instruction,
)
from tora_db.schema import Column, ColumnLike, as_polars, pretty_columns
from tora_db.structs import FrozenStruct

if TYPE_CHECKING:
    from tora_db.codec import Codec


class Ok(FrozenStruct, frozen=True, tag='ok'):
    '''
    Returned from single index operations such as `append_row`,
    `append_column`, `delete_row_by_index` or the `delete_column_*` family.

    '''
    index: int

    def __str__(self) -> str:
        return f'Ok at index: {self.index}'


class OkSingle(FrozenStruct, frozen=True, tag='single'):
    '''A single value returned from `fetch_value`.'''
    value: ValueTypes

    def __str__(self) -> str:
        return f'Returned single value: {format_value(self.value)}'


QueryResponse = Ok | OkSingle


def _check_bound(index: int, count: int, err: type[QueryError]) -> None:
    # no python style negative indexing
    if not 0 <= index < count:
        raise err(index, count)


class Db:
    def __init__(
        self,
        columns: Iterable[ColumnLike] = (),
        rows: Iterable[Iterable[Value]] = (),
    ) -> None:
        self._columns: list[Column] = [Column.from_like(c) for c in columns]
        self._rows: list[Row] = []

        # rows go through the same validation as append_row
        for row in rows:
            self.append_row(row)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Db):
            return NotImplemented

        return self._columns == other._columns and self._rows == other._rows

    __hash__ = None

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return (
            f'{type(self).__name__}(columns={self._columns!r}, rows={self._rows!r})'
        )

    @property
    def columns(self) -> tuple[Column, ...]:
        return tuple(self._columns)

    @property
    def rows(self) -> list[Row]:
        # values are immutable, copying the row lists is enough
        return [list(row) for row in self._rows]

    @property
    def column_count(self) -> int:
        return len(self._columns)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def _remove_column(self, index: int) -> None:
        del self._columns[index]
        for row in self._rows:
            del row[index]

    def delete_column_by_name(self, name: str) -> Ok:
        '''
        Delete the first column whose name exactly matches `name`, along with
        its value on every row.

        '''
        for i, col in enumerate(self._columns):
            if col.name == name:
                self._remove_column(i)
                return Ok(i)

        raise NotFound(name)

    def delete_column_by_index(self, index: int) -> Ok:
        _check_bound(index, len(self._columns), IndexOutOfBounds)
        self._remove_column(index)
        return Ok(index)

    def delete_row_by_index(self, index: int) -> Ok:
        _check_bound(index, len(self._rows), IndexOutOfBounds)
        del self._rows[index]
        return Ok(index)

    def append_column(
        self,
        name: str,
        type: Type | str,
        default: Value | object = Null(),
    ) -> Ok:
        '''
        Create and append a new column with the given name and type
        restriction, `default` is appended to all existing rows.

        Plain python defaults are coerced into the column's variant (`None`
        becomes `Null`), a `Value` default is used as is and not checked
        against the restriction, so the `Null` default may end up in non text
        columns. Coercion happens before anything is mutated.

        '''
        col = Column(name, Type(type))
        default = value_of(default, col.type)

        self._columns.append(col)
        for row in self._rows:
            row.append(default)

        return Ok(len(self._columns) - 1)

    def append_row(self, values: Iterable[Value]) -> Ok:
        '''
        Validate and append a new row.

        The value count is checked before any type, then types are checked
        left to right stopping at the first mismatch.

        '''
        row: Row = list(values)
        if len(row) != len(self._columns):
            raise DataMismatch(len(self._columns), len(row))

        for col, val in zip(self._columns, row, strict=True):
            actual = type_of(val)
            if actual != col.type:
                raise TypeMismatch(col.type, actual)

        self._rows.append(row)
        return Ok(len(self._rows) - 1)

    @classmethod
    def from_parts(
        cls,
        columns: Iterable[ColumnLike],
        rows: Iterable[Iterable[Value]],
    ) -> Db:
        '''
        Rebuild a previously stored table.

        Only the shape is checked. Column types are enforced on insertion,
        not continuously, and `append_column` may have filled existing rows
        with a default of any type.

        '''
        db = cls(columns)
        for values in rows:
            row: Row = list(values)
            if len(row) != len(db._columns):
                raise DataMismatch(len(db._columns), len(row))

            for val in row:
                if not isinstance(val, Value):
                    raise TypeError(f'Not a tora_db value: {val!r}')

            db._rows.append(row)

        return db

    def fetch_value(self, data_index: int, row_index: int) -> OkSingle:
        '''
        Fetch the value at position `data_index` of row `row_index`.

        The row index is checked against the row count first
        (`IndexOutOfBounds`), then the value position against that row's
        width (`DataOutOfBounds`).

        '''
        _check_bound(row_index, len(self._rows), IndexOutOfBounds)
        row = self._rows[row_index]

        _check_bound(data_index, len(row), DataOutOfBounds)
        return OkSingle(row[data_index])

    def query(self, instruction: Instruction) -> QueryResponse:
        match instruction:
            case DeleteColumn(id=str() as name):
                return self.delete_column_by_name(name)

            case DeleteColumn(id=int() as index) if not isinstance(index, bool):
                return self.delete_column_by_index(index)

            case DeleteRow(index=index):
                return self.delete_row_by_index(index)

            case AppendRow(values=values):
                return self.append_row(values)

            case AppendColumn(name=name, type=ty, default=default):
                return self.append_column(name, ty, default)

            case Fetch(data_index=data_index, row_index=row_index):
                return self.fetch_value(data_index, row_index)

        raise InvalidInstruction(instruction)

    def replay(self, instructions: Iterable[Instruction]) -> list[QueryResponse]:
        '''
        Apply instructions in order, the first failing one raises and
        everything before it stays applied.

        '''
        return [self.query(instruction) for instruction in instructions]

    def encode(self, codec: Codec | None = None) -> bytes:
        from tora_db.codec import default_codec

        return (codec or default_codec).encode(self)

    @staticmethod
    def decode(raw: bytes, codec: Codec | None = None) -> Db:
        from tora_db.codec import default_codec

        return (codec or default_codec).decode(raw)

    def write_to_file(self, path: str | Path, codec: Codec | None = None) -> Path:
        from tora_db.lowlevel.diskops import write_db

        return write_db(self, path, codec=codec)

    @staticmethod
    def read_from_file(path: str | Path, codec: Codec | None = None) -> Db:
        from tora_db.lowlevel.diskops import read_db

        return read_db(path, codec=codec)

    def to_frame(self) -> pl.DataFrame:
        '''
        Export the table as a `polars.DataFrame`, nulls become polars nulls.

        '''
        schema = as_polars(self._columns)
        if not self._columns or not self._rows:
            return pl.DataFrame(schema=schema)

        return pl.DataFrame(
            [[v.to_python() for v in row] for row in self._rows],
            schema=schema,
            orient='row',
        )

    def pretty_str(self) -> str:
        '''Return a human-readable representation of the table.'''
        lines = [
            f'Db: {len(self._columns)} columns, {len(self._rows)} rows',
            pretty_columns(self._columns),
            'Rows:',
        ]
        for i, row in enumerate(self._rows):
            lines.append(f'  {i}: {", ".join(format_value(v) for v in row)}')
        return '\n'.join(lines)
