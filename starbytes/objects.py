"""Runtime object model: reference-counted objects with named properties."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Any, Iterator, Optional


class ObjectType(IntEnum):
    """Type identifiers of the built-in object classes."""

    STR = 0
    ARRAY = 1
    DICT = 2
    NUM = 3
    BOOL = 4
    FUNC_REF = 5


_BUILTIN_TYPES = frozenset(int(t) for t in ObjectType)


class NumKind(Enum):
    """Representation held by a number object."""

    INT = "int"
    FLOAT = "float"


class StrEncoding(Enum):
    """Encoding of the code units held by a string object."""

    UTF8 = 8
    UTF16 = 16
    UTF32 = 32


class Comparison(Enum):
    """Outcome of comparing two runtime objects."""

    EQUAL = auto()
    NOT_EQUAL = auto()
    GREATER = auto()
    LESS = auto()


def _to_int32(value: Any) -> int:
    wrapped = int(value) & 0xFFFFFFFF
    return wrapped - (1 << 32) if wrapped & 0x80000000 else wrapped


def _to_float32(value: Any) -> float:
    value = float(value)
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


@dataclass
class ObjectProperty:
    """A named property attached to an object."""

    name: str
    data: "StarbytesObject"


class StarbytesObject:
    """A reference-counted object carrying a type id and ordered properties."""

    def __init__(self, type_id: int) -> None:
        self.type_id = type_id
        self.ref_count = 1
        self._props: list[ObjectProperty] = []

    def add_property(self, name: str, data: "StarbytesObject") -> None:
        """Append a property; the object takes over the given reference."""
        self._props.append(ObjectProperty(name, data))

    def get_property(self, name: str) -> Optional["StarbytesObject"]:
        """Return the data of the first property called ``name``, or None."""
        return next((p.data for p in self._props if p.name == name), None)

    def index_property(self, idx: int) -> ObjectProperty:
        """Return the property at position ``idx``."""
        if not 0 <= idx < len(self._props):
            raise IndexError(f"property index {idx} out of range")
        return self._props[idx]

    def property_count(self) -> int:
        return len(self._props)

    def reference(self) -> None:
        """Take one more reference to this object."""
        self.ref_count += 1

    def release(self) -> None:
        """Drop a reference; at zero the object releases what it owns."""
        if self.ref_count <= 0:
            raise RuntimeError("object has already been released")
        self.ref_count -= 1
        if self.ref_count == 0:
            for prop in self._props:
                if prop.data is not None:
                    prop.data.release()
            self._free()

    def typecheck(self, type_id: int) -> bool:
        return self.type_id == type_id

    def _free(self) -> None:
        """Release private data; overridden by classes that own objects."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type_id={self.type_id!r}, refs={self.ref_count})"


class Num(StarbytesObject):
    """A 32-bit integer or single-precision floating number."""

    def __init__(self, kind: NumKind, value: Any) -> None:
        super().__init__(ObjectType.NUM)
        self.kind = NumKind.INT
        self._i = 0
        self._f = 0.0
        self.assign(kind, value)

    def assign(self, kind: NumKind, value: Any) -> None:
        """Replace the kind and value held in place."""
        self.kind = NumKind(kind)
        if self.kind is NumKind.INT:
            self._i = _to_int32(value)
            self._f = 0.0
        else:
            self._f = _to_float32(value)
            self._i = 0

    def copy(self) -> "Num":
        return Num(self.kind, self._i if self.kind is NumKind.INT else self._f)

    def convert_to(self, kind: NumKind) -> "Num":
        """Return a new number of ``kind``; floats truncate toward zero."""
        kind = NumKind(kind)
        if kind is self.kind:
            return self.copy()
        if kind is NumKind.FLOAT:
            return Num(NumKind.FLOAT, float(self._i))
        return Num(NumKind.INT, int(self._f))

    def _as_float(self) -> float:
        return float(self._i) if self.kind is NumKind.INT else self._f

    def compare(self, other: "Num") -> Comparison:
        """Compare numerically, both sides taken as floats."""
        lhs, rhs = self._as_float(), other._as_float()
        if lhs == rhs:
            return Comparison.EQUAL
        return Comparison.GREATER if lhs > rhs else Comparison.LESS

    def __add__(self, other: "Num") -> "Num":
        if not isinstance(other, Num):
            return NotImplemented
        if self.kind is not other.kind:
            raise TypeError("cannot add numbers of different kinds")
        if self.kind is NumKind.INT:
            return Num(NumKind.INT, self._i + other._i)
        return Num(NumKind.FLOAT, self._f + other._f)

    def int_value(self) -> int:
        if self.kind is not NumKind.INT:
            raise TypeError("number does not hold an integer")
        return self._i

    def float_value(self) -> float:
        if self.kind is not NumKind.FLOAT:
            raise TypeError("number does not hold a float")
        return self._f

    def __repr__(self) -> str:
        return f"Num({self.kind.name}, {self._as_float() if self.kind is NumKind.FLOAT else self._i})"


def _code_units(data: str, encoding: StrEncoding) -> tuple[int, ...]:
    if encoding is StrEncoding.UTF8:
        return tuple(data.encode("utf-8"))
    if encoding is StrEncoding.UTF16:
        raw = data.encode("utf-16-le")
        return struct.unpack(f"<{len(raw) // 2}H", raw)
    return tuple(ord(ch) for ch in data)


class Str(StarbytesObject):
    """A string whose length counts code units of its encoding."""

    def __init__(self, data: str = "", encoding: StrEncoding = StrEncoding.UTF8) -> None:
        super().__init__(ObjectType.STR)
        self.encoding = StrEncoding(encoding)
        self._data = data
        self._units = _code_units(data, self.encoding)
        self.add_property("length", Num(NumKind.INT, len(self._units)))

    def copy(self) -> "Str":
        return Str(self._data, self.encoding)

    def length(self) -> int:
        return self.get_property("length").int_value()

    def compare(self, other: "Str") -> Comparison:
        """Equal when encoding and units match; otherwise ordered by length."""
        if self.encoding is not other.encoding:
            return Comparison.NOT_EQUAL
        lhs_len, rhs_len = self.length(), other.length()
        if lhs_len == rhs_len:
            return Comparison.EQUAL if self._units == other._units else Comparison.NOT_EQUAL
        return Comparison.GREATER if lhs_len > rhs_len else Comparison.LESS

    def text(self) -> str:
        return self._data

    def __repr__(self) -> str:
        return f"Str({self._data!r})"


class Array(StarbytesObject):
    """An ordered sequence that holds a reference to each element."""

    def __init__(self) -> None:
        super().__init__(ObjectType.ARRAY)
        self._items: list[StarbytesObject] = []
        self.add_property("length", Num(NumKind.INT, 0))

    def _sync_length(self) -> None:
        self.get_property("length").assign(NumKind.INT, len(self._items))

    def push(self, obj: StarbytesObject) -> None:
        obj.reference()
        self._items.append(obj)
        self._sync_length()

    def pop(self) -> None:
        """Remove the last element and release it."""
        if not self._items:
            raise IndexError("pop from empty array")
        obj = self._items.pop()
        self._sync_length()
        obj.release()

    def _replace(self, index: int, obj: StarbytesObject) -> None:
        old = self[index]
        obj.reference()
        self._items[index] = obj
        old.release()

    def __getitem__(self, index: int) -> StarbytesObject:
        if not isinstance(index, int):
            raise TypeError("array index must be an integer")
        if not 0 <= index < len(self._items):
            raise IndexError("Cannot index object outside of bounds")
        return self._items[index]

    def __len__(self) -> int:
        return self.get_property("length").int_value()

    def __iter__(self) -> Iterator[StarbytesObject]:
        return iter(list(self._items))

    def copy(self) -> "Array":
        """Shallow copy; the new array references the same elements."""
        result = Array()
        for item in self._items:
            result.push(item)
        return result

    def _free(self) -> None:
        items, self._items = self._items, []
        for item in items:
            item.release()


def _keys_equal(a: StarbytesObject, b: StarbytesObject) -> bool:
    if isinstance(a, Num) and isinstance(b, Num):
        return a.compare(b) is Comparison.EQUAL
    if isinstance(a, Str) and isinstance(b, Str):
        return a.compare(b) is Comparison.EQUAL
    return False


class Dict(StarbytesObject):
    """A mapping keyed by numbers or strings, kept in insertion order."""

    def __init__(self) -> None:
        super().__init__(ObjectType.DICT)
        self.add_property("length", Num(NumKind.INT, 0))
        self.add_property("keys", Array())
        self.add_property("values", Array())

    @staticmethod
    def _check_key(key: StarbytesObject) -> None:
        if not isinstance(key, (Num, Str)):
            raise TypeError("dictionary keys must be numbers or strings")

    def _find(self, key: StarbytesObject) -> Optional[int]:
        keys: Array = self.get_property("keys")
        return next((i for i, existing in enumerate(keys) if _keys_equal(key, existing)), None)

    def set(self, key: StarbytesObject, value: StarbytesObject) -> None:
        """Bind ``key`` to ``value``, replacing and releasing any old value."""
        self._check_key(key)
        values: Array = self.get_property("values")
        index = self._find(key)
        if index is not None:
            values._replace(index, value)
            return
        keys: Array = self.get_property("keys")
        keys.push(key)
        values.push(value)
        self.get_property("length").assign(NumKind.INT, len(keys))

    def get(self, key: StarbytesObject) -> Optional[StarbytesObject]:
        self._check_key(key)
        index = self._find(key)
        if index is None:
            return None
        return self.get_property("values")[index]

    def __len__(self) -> int:
        return self.get_property("length").int_value()


class Bool(StarbytesObject):
    """A boolean value."""

    def __init__(self, value: bool) -> None:
        super().__init__(ObjectType.BOOL)
        self._value = bool(value)

    def value(self) -> bool:
        return self._value


class FuncRef(StarbytesObject):
    """A reference to a function template."""

    def __init__(self, template: Any) -> None:
        super().__init__(ObjectType.FUNC_REF)
        self._template = template

    def template(self) -> Any:
        return self._template


def is_builtin(obj: Optional[StarbytesObject]) -> bool:
    """True when ``obj`` is an instance of one of the built-in classes."""
    return obj is not None and int(obj.type_id) in _BUILTIN_TYPES