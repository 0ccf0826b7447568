import msgspec
import pytest

from tora_db.dtypes import Int32, Int64, Null, Text, Type
from tora_db.engine import Db, Ok, OkSingle
from tora_db.errors import (
    DataMismatch,
    IndexOutOfBounds,
    InstructionDecodeError,
    InvalidInstruction,
    QueryError,
    NotFound,
)
from tora_db.instructions import (
    AppendColumn,
    AppendRow,
    DeleteColumn,
    DeleteRow,
    Fetch,
    decode_instructions,
    encode_instructions,
)


def test_query_dispatch():
    db = Db()

    assert db.query(AppendColumn('Name', Type.TEXT)) == Ok(0)
    assert db.query(AppendRow((Text('John'),))) == Ok(0)
    assert db.query(Fetch(0, 0)) == OkSingle(Text('John'))
    assert db.query(AppendColumn('Age', Type.INT32, Int32(0))) == Ok(1)
    assert db.query(Fetch(1, 0)) == OkSingle(Int32(0))
    assert db.query(DeleteColumn('Name')) == Ok(0)
    assert db.query(DeleteColumn(0)) == Ok(0)
    assert db.query(DeleteRow(0)) == Ok(0)

    assert db.column_count == 0
    assert db.row_count == 0


def test_query_errors_match_direct_calls(people):
    with pytest.raises(NotFound):
        people.query(DeleteColumn('missing'))

    with pytest.raises(IndexOutOfBounds):
        people.query(DeleteColumn(10))

    with pytest.raises(IndexOutOfBounds):
        people.query(DeleteRow(10))

    with pytest.raises(DataMismatch):
        people.query(AppendRow((Text('x'),)))


def test_query_rejects_hand_built_ids(people):
    for bad in (DeleteColumn(1.5), DeleteColumn(True), DeleteColumn(None)):
        with pytest.raises(InvalidInstruction) as exc:
            people.query(bad)

        assert isinstance(exc.value, QueryError)

    assert people.column_count == 3


def test_append_column_default_is_null():
    assert AppendColumn('x', Type.TEXT).default == Null()


def test_replay_stops_at_first_error():
    db = Db()
    log = [
        AppendColumn('Name', Type.TEXT),
        AppendRow((Text('a'),)),
        DeleteRow(5),
        AppendRow((Text('never'),)),
    ]

    with pytest.raises(IndexOutOfBounds):
        db.replay(log)

    assert db.row_count == 1


def test_replay_responses():
    db = Db()
    resps = db.replay([
        AppendColumn('Name', Type.TEXT),
        AppendRow((Text('a'),)),
        Fetch(0, 0),
    ])
    assert resps == [Ok(0), Ok(0), OkSingle(Text('a'))]


def test_instruction_log_roundtrip():
    log = [
        AppendColumn('Name', Type.TEXT),
        AppendColumn('Count', Type.INT64, Int64(1)),
        AppendRow((Text('a'), Int64(2))),
        Fetch(1, 0),
        DeleteColumn('Count'),
        DeleteColumn(0),
        DeleteRow(0),
    ]

    decoded = decode_instructions(encode_instructions(log))
    assert decoded == log

    # replaying the decoded log rebuilds the same table
    a, b = Db(), Db()
    a.replay(log[:4])
    b.replay(decoded[:4])
    assert a == b


def test_instruction_log_malformed():
    with pytest.raises(InstructionDecodeError):
        decode_instructions(b'\xc1garbage')

    # well formed msgpack, unknown op tag
    with pytest.raises(InstructionDecodeError):
        decode_instructions(msgspec.msgpack.encode([{'op': 'drop_table'}]))


def test_instruction_json():
    ins = AppendRow((Int32(1), Null()))
    assert AppendRow.from_json(ins.to_json()) == ins


def test_format():
    assert str(DeleteColumn('Name')) == 'DELETE_COL @`Name`'
    assert str(DeleteColumn(2)) == 'DELETE_COL @(2)'
    assert str(DeleteRow(1)) == 'DELETE_ROW @(1)'
    assert str(AppendRow((Text('x'), Int32(1)))) == 'APPEND_ROW [`x`str, 1int]'
    assert str(AppendColumn('Age', Type.INT32)) == 'APPEND_COL `Age` OF `int32`'
    assert str(Fetch(0, 3)) == 'FETCH @(0) FROM @(3)'
