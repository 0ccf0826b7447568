from __future__ import annotations

from typing import Iterable

import polars as pl

from tora_db.dtypes import Type, polars_dtype, py_type_for
from tora_db.errors import ToraDBError
from tora_db.structs import FrozenStruct


class Column(FrozenStruct, frozen=True):
    '''
    A named, single type slot of a table schema.

    Columns carry no data, they only restrict which values rows may hold at
    their position. Names are not unique, lookups by name resolve to the
    first match.

    '''
    name: str
    type: Type

    @staticmethod
    def from_like(c: ColumnLike) -> Column:
        match c:
            case Column():
                return c

            case tuple():
                name, typ = c
                return Column(name, Type(typ))

            case dict():
                return Column.convert(c)

        raise TypeError(f'Cant build a column from {c!r}')

    @property
    def type_restriction(self) -> Type:
        return self.type

    @property
    def py_type(self) -> type:
        return py_type_for(self.type)

    @property
    def polars_dtype(self) -> type[pl.DataType]:
        return polars_dtype(self.type)

    def __str__(self) -> str:
        return f'[`{self.name}`|{self.type}]'


ColumnLike = tuple[str, Type | str] | dict | Column


def as_polars(columns: Iterable[Column]) -> pl.Schema:
    '''
    Map a column sequence to a `polars.Schema`, polars requires unique names
    so duplicated column names are rejected.

    '''
    columns = tuple(columns)
    seen: set[str] = set()
    for col in columns:
        if col.name in seen:
            raise ToraDBError(
                f'Cant map columns to a polars schema, duplicate name {col.name!r}'
            )
        seen.add(col.name)

    return pl.Schema((col.name, col.polars_dtype) for col in columns)


def pretty_columns(columns: Iterable[Column]) -> str:
    '''Return a human-readable listing of a column sequence.'''
    lines = ['Columns:']
    for i, col in enumerate(columns):
        lines.append(f'  {i}: {col.name}: {col.type}')
    return '\n'.join(lines)
