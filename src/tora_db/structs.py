from typing import Any, Self

import msgspec


class _Struct:
    __slots__ = ()

    @classmethod
    def from_json(cls, s: str | bytes) -> Self:
        return msgspec.json.decode(s, type=cls)

    @classmethod
    def from_bytes(cls, raw: bytes) -> Self:
        return msgspec.msgpack.decode(raw, type=cls)

    def encode(self) -> bytes:
        return msgspec.msgpack.encode(self)

    @classmethod
    def convert(cls, obj: Any) -> Self:
        return msgspec.convert(obj, type=cls)

    def to_dict(self) -> dict:
        return msgspec.to_builtins(self)

    def to_json(self) -> str:
        return msgspec.json.encode(self).decode()


class FrozenStruct(msgspec.Struct, _Struct, frozen=True): ...
