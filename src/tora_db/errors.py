'''
Exceptions raised by tora_db.

`QueryError` subclasses form the closed set of failures a table operation
can produce, `LoadDbError` covers reading a table back from bytes or disk.

'''

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tora_db.dtypes import Type


class ToraDBError(Exception): ...


class QueryError(ToraDBError):
    '''
    Base for all failures of a single table operation, operations that raise
    one of these leave the table untouched.

    '''


class IndexOutOfBounds(QueryError):
    '''A row or column index was past the current row or column count.'''

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__(f'Index out of bounds: {index} not in [0, {count})')


class DataOutOfBounds(QueryError):
    '''A value position was past the width of the row it was applied to.'''

    def __init__(self, index: int, width: int) -> None:
        self.index = index
        self.width = width
        super().__init__(f'Data out of bounds: {index} not in [0, {width})')


class NotFound(QueryError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Item not found: {name!r}')


class DataMismatch(QueryError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'Data does not fit restrictions: expected {expected} values, got {actual}'
        )


class TypeMismatch(QueryError):
    def __init__(self, expected: Type, actual: Type) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f'Type mismatch: {expected}, {actual}')


class LoadDbErrorKind(StrEnum):
    # content is not a valid table encoding, retrying wont help
    MALFORMED = 'malformed'
    # the byte source could not be read at all
    IO = 'io'


class LoadDbError(ToraDBError):
    def __init__(self, message: str, kind: LoadDbErrorKind) -> None:
        self.message = message
        self.kind = kind
        super().__init__(f'{kind}: {message}')

    @property
    def is_retryable(self) -> bool:
        return self.kind == LoadDbErrorKind.IO


class InvalidInstruction(QueryError):
    '''A hand built instruction whose fields do not fit any operation.'''

    def __init__(self, instruction: object) -> None:
        self.instruction = instruction
        super().__init__(f'Invalid instruction: {instruction!r}')


class InstructionDecodeError(ToraDBError): ...
