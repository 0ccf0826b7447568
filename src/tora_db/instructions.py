'''
Instructions are inert values describing one table operation each, a `Db`
applies them through `Db.query`.

Since they are plain msgspec structs they can be logged, sent over the wire
or stored and replayed later with `Db.replay`.

'''

from __future__ import annotations

from typing import Iterable

import msgspec

from tora_db.dtypes import Null, Type, ValueTypes, format_value
from tora_db.errors import InstructionDecodeError
from tora_db.structs import FrozenStruct


# a column is identified either by name or by position
Id = str | int


class Instruction(FrozenStruct, frozen=True, tag_field='op'):
    def __str__(self) -> str:
        return format_instruction(self)


class DeleteColumn(Instruction, tag='delete_col', frozen=True):
    id: Id


class DeleteRow(Instruction, tag='delete_row', frozen=True):
    index: int


class AppendRow(Instruction, tag='append_row', frozen=True):
    values: tuple[ValueTypes, ...]


class AppendColumn(Instruction, tag='append_col', frozen=True):
    name: str
    type: Type
    default: ValueTypes = Null()


class Fetch(Instruction, tag='fetch', frozen=True):
    # positional order is (value position, row position)
    data_index: int
    row_index: int


InstructionTypes = DeleteColumn | DeleteRow | AppendRow | AppendColumn | Fetch


def format_instruction(instruction: Instruction) -> str:
    match instruction:
        case DeleteColumn(id=str() as name):
            return f'DELETE_COL @`{name}`'

        case DeleteColumn(id=index):
            return f'DELETE_COL @({index})'

        case DeleteRow(index=index):
            return f'DELETE_ROW @({index})'

        case AppendRow(values=values):
            return f'APPEND_ROW [{", ".join(format_value(v) for v in values)}]'

        case AppendColumn(name=name, type=ty):
            return f'APPEND_COL `{name}` OF `{ty}`'

        case Fetch(data_index=data_index, row_index=row_index):
            return f'FETCH @({data_index}) FROM @({row_index})'

    raise TypeError(f'Unknown instruction: {instruction!r}')


_log_encoder = msgspec.msgpack.Encoder()
_log_decoder = msgspec.msgpack.Decoder(list[InstructionTypes])


def encode_instructions(instructions: Iterable[Instruction]) -> bytes:
    '''
    Encode an instruction log, the result can be fed back into
    `decode_instructions` and replayed in the same order.

    '''
    return _log_encoder.encode(list(instructions))


def decode_instructions(raw: bytes) -> list[InstructionTypes]:
    try:
        return _log_decoder.decode(raw)

    except msgspec.DecodeError as e:
        raise InstructionDecodeError(f'Invalid instruction log: {e}') from e
