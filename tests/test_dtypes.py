import struct

import pytest
import polars as pl

from tora_db.dtypes import (
    Float32,
    Float64,
    Int32,
    Int64,
    Null,
    Text,
    Type,
    polars_dtype,
    type_of,
    value_of,
)


def test_type_projection():
    assert type_of(Int32(1)) == Type.INT32
    assert type_of(Int64(1)) == Type.INT64
    assert type_of(Float32(1.5)) == Type.FLOAT32
    assert type_of(Float64(1.5)) == Type.FLOAT64
    assert type_of(Text('x')) == Type.TEXT
    assert Text('x').type == Type.TEXT


def test_null_projects_to_text():
    assert Null().type == Type.TEXT


def test_structural_equality():
    assert Int32(5) == Int32(5)
    assert Int32(5) != Int64(5)
    assert Text('a') != Text('b')
    assert Null() == Null()


def test_int_ranges():
    Int32(2**31 - 1)
    Int32(-(2**31))
    with pytest.raises(ValueError):
        Int32(2**31)

    Int64(2**63 - 1)
    with pytest.raises(ValueError):
        Int64(-(2**63) - 1)

    with pytest.raises(TypeError):
        Int32('5')

    with pytest.raises(TypeError):
        Int64(True)


def test_floats_accept_ints():
    v = Float64(3)
    assert v.value == 3.0
    assert isinstance(v.value, float)

    with pytest.raises(TypeError):
        Float32('1.0')


def test_float32_single_precision():
    v = Float32(0.1)
    assert v.value != 0.1
    assert v.value == struct.unpack('<f', struct.pack('<f', 0.1))[0]
    assert Float64(0.1).value == 0.1

    # exactly representable values are untouched
    assert Float32(0.25).value == 0.25
    assert Float32(-250).value == -250.0

    assert Float32(float('inf')).value == float('inf')

    with pytest.raises(ValueError):
        Float32(1e300)

    with pytest.raises(ValueError):
        Float32(-1e39)


def test_text_requires_str():
    with pytest.raises(TypeError):
        Text(5)


def test_format():
    assert str(Int32(5)) == '5int'
    assert str(Int64(5)) == '5long'
    assert str(Float32(1.5)) == '1.5float'
    assert str(Float64(1.5)) == '1.5double'
    assert str(Text('x')) == '`x`str'
    assert str(Null()) == 'NULL'


def test_value_of():
    assert value_of(None) == Null()
    assert value_of('hi') == Text('hi')
    assert value_of(3) == Int64(3)
    assert value_of(2.5) == Float64(2.5)
    assert value_of(3, Type.INT32) == Int32(3)
    assert value_of(Int32(1), Type.TEXT) == Int32(1)

    with pytest.raises(TypeError):
        value_of(True)

    with pytest.raises(TypeError):
        value_of(b'raw')


def test_to_python():
    assert Int32(7).to_python() == 7
    assert Text('x').to_python() == 'x'
    assert Null().to_python() is None


def test_polars_dtypes():
    assert polars_dtype(Type.INT32) == pl.Int32
    assert polars_dtype(Type.TEXT) == pl.String
