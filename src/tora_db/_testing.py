import random
from typing import Generator, Sequence

from tora_db.dtypes import (
    Float32,
    Float64,
    Int32,
    Int64,
    Text,
    Type,
    Value,
    ValueTypes,
    int_bounds,
)
from tora_db.engine import Db
from tora_db.schema import Column


people_columns: tuple[Column, ...] = (
    Column('Name', Type.TEXT),
    Column('Age', Type.INT32),
    Column('Height', Type.FLOAT64),
)

people_rows: tuple[tuple[ValueTypes, ...], ...] = (
    (Text('John'), Int32(34), Float64(1.81)),
    (Text('Ana'), Int32(29), Float64(1.65)),
    (Text('Kenji'), Int32(41), Float64(1.74)),
)


def people_db() -> Db:
    return Db(people_columns, people_rows)


all_types_columns: tuple[Column, ...] = tuple(
    Column(f'col_{ty}', ty) for ty in Type
)


def random_value(ty: Type, rnd: random.Random) -> ValueTypes:
    match ty:
        case Type.INT32 | Type.INT64:
            lo, hi = int_bounds[ty]
            return (Int32 if ty == Type.INT32 else Int64)(rnd.randint(lo, hi))

        case Type.FLOAT32:
            # keep it representable as a 32 bit float
            return Float32(rnd.randint(-1_000, 1_000) / 4)

        case Type.FLOAT64:
            return Float64(rnd.uniform(-1e12, 1e12))

        case Type.TEXT:
            size = rnd.randint(0, 16)
            return Text(''.join(rnd.choice('abcdefxyz ') for _ in range(size)))


def row_stream(
    columns: Sequence[Column],
    rows: int = 100,
    *,
    seed: int | None = None,
) -> Generator[list[Value], None, None]:
    rnd = random.Random(seed)
    for _ in range(rows):
        yield [random_value(col.type, rnd) for col in columns]


def random_db(rows: int = 100, *, seed: int | None = None) -> Db:
    return Db(all_types_columns, row_stream(all_types_columns, rows, seed=seed))


def assert_shape(db: Db) -> None:
    for row in db.rows:
        assert len(row) == db.column_count
