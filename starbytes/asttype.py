"""Type descriptors used by the compiler's semantic checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

LogFn = Callable[[str], None]


@dataclass(eq=False)
class ASTType:
    """A named type, optionally parameterised by other types."""

    name: str
    parent_node: Optional[Any] = None
    is_placeholder: bool = False
    is_alias: bool = False
    type_params: list["ASTType"] = field(default_factory=list)

    @staticmethod
    def create(
        name: str,
        parent_node: Optional[Any] = None,
        is_placeholder: bool = False,
        is_alias: bool = False,
    ) -> "ASTType":
        """Build a type with no type parameters."""
        return ASTType(
            name=str(name),
            parent_node=parent_node,
            is_placeholder=is_placeholder,
            is_alias=is_alias,
        )

    def add_type_param(self, param: "ASTType") -> None:
        self.type_params.append(param)

    def name_matches(self, other: "ASTType") -> bool:
        return self.name == other.name

    def match(self, other: "ASTType", log: Optional[LogFn] = None) -> bool:
        """Check that ``other`` matches this type, logging the first mismatch.

        Each type parameter of this type is matched against ``other`` itself.
        """
        if self.name != other.name:
            if log is not None:
                log(f"Type `{self}` does not match type `{other}`")
            return False
        return all(param.match(other, log) for param in self.type_params)

    def __str__(self) -> str:
        return self.name


VOID_TYPE = ASTType.create("Void")
STRING_TYPE = ASTType.create("String")
ARRAY_TYPE = ASTType.create("Array")
DICTIONARY_TYPE = ASTType.create("Dict")
BOOL_TYPE = ASTType.create("Bool")
INT_TYPE = ASTType.create("Int")
FLOAT_TYPE = ASTType.create("Float")