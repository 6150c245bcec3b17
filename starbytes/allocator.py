"""Scoped variable storage for the interpreter."""

from __future__ import annotations

from typing import Optional

from starbytes.objects import StarbytesObject

GLOBAL_SCOPE = "__GLOBAL__"


class ScopeAllocator:
    """Holds the variables of each named scope and tracks the current one."""

    def __init__(self) -> None:
        self._scopes: dict[str, dict[str, Optional[StarbytesObject]]] = {}
        self.current_scope = GLOBAL_SCOPE

    def registry_at(self, name: str) -> dict[str, Optional[StarbytesObject]]:
        """Return the variables of scope ``name``, creating it if absent."""
        return self._scopes.setdefault(name, {})

    def set_scope(self, scope_name: str) -> None:
        self.current_scope = scope_name

    def alloc_variable(
        self,
        name: str,
        obj: Optional[StarbytesObject],
        scope: Optional[str] = None,
    ) -> None:
        """Bind ``name`` in ``scope`` (the current one by default).

        An existing binding of the same name is kept.
        """
        target = self.current_scope if scope is None else scope
        self._scopes.setdefault(target, {}).setdefault(name, obj)

    def reference_variable(self, scope: str, name: str) -> Optional[StarbytesObject]:
        """Return the variable and take a reference to it, or None if unbound."""
        variables = self._scopes.get(scope)
        if variables is None or name not in variables:
            return None
        obj = variables[name]
        if obj is not None:
            obj.reference()
        return obj

    def clear_scope(self) -> None:
        """Release every variable of the current scope and drop the scope."""
        variables = self._scopes.pop(self.current_scope, None)
        if variables is None:
            return
        for obj in variables.values():
            if obj is not None:
                obj.release()