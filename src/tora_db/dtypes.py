'''
# Overview

Scalar type system for tora_db tables.

# Type

A `Type` is a bare tag, it has no payload and is only ever used as a column
restriction.

# Value

A `Value` is an immutable tagged payload, one variant per `Type` plus a
`Null` marker. Values encode as msgpack maps keyed by a `kind` tag so a row is
self describing on disk.

Every value projects to exactly one type through `type_of`. The `Null` marker
projects to `Type.TEXT`, which means a null only satisfies text columns on
row insertion. Existing encoded files depend on this projection.

'''

from __future__ import annotations

from enum import StrEnum
import struct
from typing import Any

from msgspec.structs import force_setattr
import polars as pl

from tora_db.structs import FrozenStruct


class Type(StrEnum):
    INT32 = 'int32'
    INT64 = 'int64'
    FLOAT32 = 'float32'
    FLOAT64 = 'float64'
    TEXT = 'text'


# signed integer bounds per integer type
int_bounds: dict[Type, tuple[int, int]] = {
    Type.INT32: (-(2**31), 2**31 - 1),
    Type.INT64: (-(2**63), 2**63 - 1),
}


def _check_int(value: Any, ty: Type) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f'{ty} value must be an int, got {value!r}')

    lo, hi = int_bounds[ty]
    if not lo <= value <= hi:
        raise ValueError(f'{value} out of range for {ty} [{lo}, {hi}]')


class Value(FrozenStruct, frozen=True, tag_field='kind'):
    @property
    def type(self) -> Type:
        return type_of(self)

    def to_python(self) -> Any:
        return to_python(self)

    def __str__(self) -> str:
        return format_value(self)


class Int32(Value, tag='int32', frozen=True):
    value: int

    def __post_init__(self) -> None:
        _check_int(self.value, Type.INT32)


class Int64(Value, tag='int64', frozen=True):
    value: int

    def __post_init__(self) -> None:
        _check_int(self.value, Type.INT64)


class Float32(Value, tag='float32', frozen=True):
    value: float

    def __post_init__(self) -> None:
        _normalize_float(self)

        # round to single precision, finite doubles past its range are rejected
        try:
            single = struct.unpack('<f', struct.pack('<f', self.value))[0]

        except OverflowError:
            raise ValueError(f'{self.value} out of range for {Type.FLOAT32}') from None

        force_setattr(self, 'value', single)


class Float64(Value, tag='float64', frozen=True):
    value: float

    def __post_init__(self) -> None:
        _normalize_float(self)


class Text(Value, tag='text', frozen=True):
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f'text value must be a str, got {self.value!r}')


class Null(Value, tag='null', frozen=True):
    pass


def _normalize_float(v: Float32 | Float64) -> None:
    if isinstance(v.value, bool) or not isinstance(v.value, int | float):
        raise TypeError(f'{v.type} value must be a float, got {v.value!r}')

    # ints are accepted and stored as floats
    if isinstance(v.value, int):
        force_setattr(v, 'value', float(v.value))


ValueTypes = Int32 | Int64 | Float32 | Float64 | Text | Null

Row = list[ValueTypes]


def type_of(value: Value) -> Type:
    match value:
        case Int32():
            return Type.INT32

        case Int64():
            return Type.INT64

        case Float32():
            return Type.FLOAT32

        case Float64():
            return Type.FLOAT64

        case Text() | Null():
            return Type.TEXT

    raise TypeError(f'Not a tora_db value: {value!r}')


def to_python(value: Value) -> Any:
    match value:
        case Null():
            return None

        case Int32(v) | Int64(v) | Float32(v) | Float64(v) | Text(v):
            return v

    raise TypeError(f'Not a tora_db value: {value!r}')


def format_value(value: Value) -> str:
    '''
    Render a value with a short type suffix, `5int`, `1.5double`,
    `` `x`str `` or `NULL`.

    '''
    match value:
        case Int32(v):
            return f'{v}int'

        case Int64(v):
            return f'{v}long'

        case Float32(v):
            return f'{v}float'

        case Float64(v):
            return f'{v}double'

        case Text(v):
            return f'`{v}`str'

        case Null():
            return 'NULL'

    raise TypeError(f'Not a tora_db value: {value!r}')


# value variant for every type
variant_map: dict[Type, type[Value]] = {
    Type.INT32: Int32,
    Type.INT64: Int64,
    Type.FLOAT32: Float32,
    Type.FLOAT64: Float64,
    Type.TEXT: Text,
}

polars_dtype_map: dict[Type, type[pl.DataType]] = {
    Type.INT32: pl.Int32,
    Type.INT64: pl.Int64,
    Type.FLOAT32: pl.Float32,
    Type.FLOAT64: pl.Float64,
    Type.TEXT: pl.String,
}

py_type_map: dict[Type, type] = {
    Type.INT32: int,
    Type.INT64: int,
    Type.FLOAT32: float,
    Type.FLOAT64: float,
    Type.TEXT: str,
}


def polars_dtype(ty: Type) -> type[pl.DataType]:
    return polars_dtype_map[ty]


def py_type_for(ty: Type) -> type:
    return py_type_map[ty]


def value_of(obj: Any, ty: Type | None = None) -> ValueTypes:
    '''
    Coerce a plain python object into a `Value`.

    `None` always maps to `Null`. If `ty` is given the object is wrapped in
    that type's variant (raising `TypeError` / `ValueError` if it doesn't
    fit), otherwise the variant is inferred: `str` -> `Text`, `int` ->
    `Int64`, `float` -> `Float64`.

    '''
    if isinstance(obj, Value):
        return obj

    if obj is None:
        return Null()

    if ty is not None:
        return variant_map[ty](obj)

    match obj:
        case bool():
            pass

        case str():
            return Text(obj)

        case int():
            return Int64(obj)

        case float():
            return Float64(obj)

    raise TypeError(f'No tora_db value kind for {obj!r}')
