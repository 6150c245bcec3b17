"""Starbytes runtime object model, type matching, printing, scoped storage and a minimal language server."""

__version__ = "0.4"

__all__ = [
    "allocator",
    "asttype",
    "interop",
    "lsp_protocol",
    "lsp_server",
    "objects",
    "printing",
]