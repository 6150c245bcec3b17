import io

import pytest

from starbytes.objects import Array, Bool, Dict, FuncRef, Num, NumKind, StarbytesObject, Str
from starbytes.printing import format_object, print_object

Y, M, G, R = "\x1b[33m", "\x1b[35m", "\x1b[32m", "\x1b[0m"


def test_int_number():
    assert format_object(Num(NumKind.INT, 42), {}) == f"{Y}42{R}"


def test_integral_float_prints_as_integer():
    assert format_object(Num(NumKind.FLOAT, 2.0), {}) == f"{Y}2{R}"


def test_fractional_float():
    assert format_object(Num(NumKind.FLOAT, 1.5), {}) == f"{Y}1.5{R}"


def test_bool():
    assert format_object(Bool(True), {}) == f"{M}true{R}"
    assert format_object(Bool(False), {}) == f"{M}false{R}"


def test_string_is_quoted():
    assert format_object(Str("hi"), {}) == f'{G}"hi"{R}'


def test_array_joined_with_commas():
    arr = Array()
    arr.push(Num(NumKind.INT, 1))
    arr.push(Num(NumKind.INT, 2))
    assert format_object(arr, {}) == f"[{Y}1{R},{Y}2{R}]"


def test_empty_array():
    assert format_object(Array(), {}) == "[]"


def test_dict_pairs():
    d = Dict()
    d.set(Str("a"), Num(NumKind.INT, 1))
    assert format_object(d, {}) == f'{{{G}"a"{R}:{Y}1{R}}}'


def test_custom_class_uses_registry():
    obj = StarbytesObject(100)
    obj.add_property("x", Num(NumKind.INT, 1))
    obj.add_property("y", Bool(False))
    assert format_object(obj, {100: "Point"}) == f"Point(x={Y}1{R}, y={M}false{R})"


def test_custom_class_without_registry_entry():
    obj = StarbytesObject(100)
    assert format_object(obj, {}) == "()"


def test_print_object_appends_newline():
    stream = io.StringIO()
    print_object(Str("hi"), {}, stream)
    assert stream.getvalue() == f'{G}"hi"{R}\n'


def test_missing_object_raises():
    with pytest.raises(TypeError):
        format_object(None, {})


def test_func_ref_cannot_be_printed():
    with pytest.raises(TypeError):
        format_object(FuncRef(None), {})