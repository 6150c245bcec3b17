"""Rendering of runtime objects for the ``print`` builtin."""

from __future__ import annotations

import math
import sys
from typing import Mapping, Optional, TextIO

from starbytes.objects import (
    Array,
    Bool,
    Dict,
    Num,
    NumKind,
    StarbytesObject,
    Str,
    is_builtin,
)

_YELLOW = "\x1b[33m"
_MAGENTA = "\x1b[35m"
_GREEN = "\x1b[32m"
_RESET = "\x1b[0m"


def _format_number(num: Num) -> str:
    value = num.convert_to(NumKind.FLOAT).float_value()
    if math.isfinite(value) and value.is_integer():
        text = str(int(value))
    else:
        text = format(value, "g")
    return f"{_YELLOW}{text}{_RESET}"


def _format_builtin(obj: StarbytesObject, registry: Mapping[int, str]) -> str:
    if isinstance(obj, Num):
        return _format_number(obj)
    if isinstance(obj, Bool):
        return f"{_MAGENTA}{'true' if obj.value() else 'false'}{_RESET}"
    if isinstance(obj, Str):
        return f'{_GREEN}"{obj.text()}"{_RESET}'
    if isinstance(obj, Array):
        return "[" + ",".join(format_object(item, registry) for item in obj) + "]"
    if isinstance(obj, Dict):
        keys = obj.get_property("keys")
        values = obj.get_property("values")
        pairs = (
            f"{format_object(key, registry)}:{format_object(value, registry)}"
            for key, value in zip(keys, values)
        )
        return "{" + "".join(pairs) + "}"
    raise TypeError(f"cannot print object of type {obj.type_id!r}")


def format_object(obj: Optional[StarbytesObject], registry: Mapping[int, str]) -> str:
    """Render ``obj``; user classes are named through ``registry``."""
    if obj is None:
        raise TypeError("cannot print a missing object")
    if is_builtin(obj):
        return _format_builtin(obj, registry)
    class_name = registry.get(obj.type_id, "")
    props = ", ".join(
        f"{prop.name}={format_object(prop.data, registry)}"
        for prop in (obj.index_property(i) for i in range(obj.property_count()))
    )
    return f"{class_name}({props})"


def print_object(
    obj: Optional[StarbytesObject],
    registry: Mapping[int, str],
    stream: Optional[TextIO] = None,
) -> None:
    """Write ``obj`` followed by a newline to ``stream`` (stdout by default)."""
    out = sys.stdout if stream is None else stream
    out.write(format_object(obj, registry) + "\n")
    out.flush()