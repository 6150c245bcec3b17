# starbytes

Runtime building blocks of the Starbytes language, usable from Python.

## Modules

- `starbytes.objects` – the runtime object model. `StarbytesObject` carries
  a type id, a reference count (`reference()`, `release()`) and ordered named
  properties (`add_property`, `get_property`, `index_property`,
  `property_count`). Built on it:
  - `Num` – a 32-bit integer or single-precision float (`NumKind.INT` /
    `NumKind.FLOAT`), with `copy`, `convert_to`, `compare`, `assign`, `+`,
    `int_value` and `float_value`.
  - `Str` – a string whose `length()` counts code units of its
    `StrEncoding`; `compare` and `text`.
  - `Array` – `push`, `pop`, indexing, `len`, iteration and shallow `copy`;
    it holds a reference to every element.
  - `Dict` – keyed by `Num` or `Str` objects, in insertion order; `set`,
    `get`, `len`.
  - `Bool` and `FuncRef`.
  - `is_builtin(obj)` tells built-in objects from user class instances.
  Comparisons return a `Comparison` member.
- `starbytes.asttype` – `ASTType`, a named type with type parameters;
  `ASTType.create`, `add_type_param`, `name_matches` and `match`, which
  reports the first mismatch through an optional log callback. Predefined
  types: `VOID_TYPE`, `STRING_TYPE`, `ARRAY_TYPE`, `DICTIONARY_TYPE`,
  `BOOL_TYPE`, `INT_TYPE`, `FLOAT_TYPE`.
- `starbytes.interop` – `NativeModule` and `NativeFuncDesc` for registering
  Python callables as native functions (`add_desc`, `load_function`), and
  `make_class(name)`, which derives a class type id from a class name.
- `starbytes.printing` – `format_object(obj, registry)` renders an object
  the way the `print` builtin does, with ANSI colours for numbers, booleans
  and strings; user class instances are named through `registry`, a mapping
  from type id to class name. `print_object` writes that text and a newline
  to a stream (standard output by default).
- `starbytes.allocator` – `ScopeAllocator`, a store of variables per named
  scope: `set_scope`, `alloc_variable` (an existing binding is kept),
  `reference_variable` (takes a reference) and `clear_scope` (releases the
  current scope's variables and drops it).
- `starbytes.lsp_protocol` – message dataclasses (`Region`, `MessageInfo`,
  `InMessage`, `OutError`, `OutMessage`), `OutErrorCode`, `LSPSymbolType`,
  `MessageIO` for reading and writing common request parameters, and
  `WorkspaceManager`, which tracks open documents.
- `starbytes.lsp_server` – `Server`, a JSON-RPC server over
  `Content-Length` framed binary streams, and `main`.

## Install

```
pip install .
```

## Example

```python
from starbytes.objects import Array, Num, NumKind, Str
from starbytes.printing import format_object

items = Array()
items.push(Num(NumKind.INT, 3))
items.push(Str("hi"))
print(format_object(items, {}))
```

## Language server

Start the server on standard input and output:

```
starbytes-lsp
```

The server answers `initialize` with its capabilities (hover) and server
info, and stops after a `shutdown` request or at the end of input. A
request other than `initialize` can be cancelled by a `cancelRequest`
message carrying the same id while it is in flight. A hover request for a
document that is not open is answered with an `INVALID_PARAMS` error.

## What this package does not do

There is no lexer, parser, compiler or bytecode interpreter here: the
package cannot run or compile Starbytes scripts, and has no disassembler.
The language server does not open documents or analyse source, so it gives
no hover text, completions or definitions; those requests get an empty
result or an error.

## Tests

```
pip install .[test]
pytest
```