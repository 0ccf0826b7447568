'''
Glossary:
    - Db: An in-memory table of typed columns and rows, persisted as a single
      file.
    - Shape invariant: every row holds exactly one value per column.
    - Instruction: A serializable value describing one table operation, applied
      through `Db.query`.
    - Codec: The encode/decode pair used to persist and reload a Db.

'''

from .dtypes import (
    Float32 as Float32,
    Float64 as Float64,
    Int32 as Int32,
    Int64 as Int64,
    Null as Null,
    Text as Text,
    Type as Type,
    Value as Value,
    value_of as value_of,
)

from .schema import Column as Column

from .instructions import (
    AppendColumn as AppendColumn,
    AppendRow as AppendRow,
    DeleteColumn as DeleteColumn,
    DeleteRow as DeleteRow,
    Fetch as Fetch,
    Instruction as Instruction,
)

from .engine import Db as Db, Ok as Ok, OkSingle as OkSingle

from .codec import Codec as Codec, MsgpackCodec as MsgpackCodec
