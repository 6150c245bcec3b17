"""Registry of native functions and class-id derivation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from starbytes.objects import ObjectType

NativeCallback = Callable[..., object]

_MASK64 = (1 << 64) - 1
_MASK32 = (1 << 32) - 1


@dataclass
class NativeFuncDesc:
    """Description of one native function a module exports."""

    name: str
    arg_count: int
    callback: NativeCallback


@dataclass
class NativeModule:
    """A set of native functions available to the runtime."""

    descs: list[NativeFuncDesc] = field(default_factory=list)

    def add_desc(self, desc: NativeFuncDesc) -> None:
        self.descs.append(desc)

    def load_function(self, name: str) -> Optional[NativeCallback]:
        """Return the callback of the first function called ``name``, or None."""
        return next((d.callback for d in self.descs if d.name == name), None)


def make_class(name: str) -> int:
    """Derive a class type id from a class name."""
    type_id = int(ObjectType.FUNC_REF)
    for byte in name.encode("utf-8"):
        type_id = ((type_id + (~byte & _MASK32)) & _MASK64) >> 1
    return type_id