"""Message types and helpers shared by the language server."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional, Union

INIT = "initialize"
TEXT_DOC_OPEN = "textDocument/didOpen"
COMPLETION = "textDocument/completion"
HOVER = "textDocument/hover"
DEFINITION = "textDocument/definition"
EXIT = "shutdown"
CANCEL_REQUEST = "cancelRequest"

JsonObject = dict[str, Any]
MessageId = Union[int, str]


@dataclass
class Region:
    """A span of a document, in zero-based lines and columns."""

    start_line: int = 0
    start_col: int = 0
    end_line: int = 0
    end_col: int = 0


@dataclass
class MessageInfo:
    """Identity of a message: its id (absent for notifications) and method."""

    id: Optional[MessageId] = None
    method: str = ""
    progress_token: Optional[str] = None


@dataclass
class InMessage:
    """A message received from the client."""

    info: MessageInfo = field(default_factory=MessageInfo)
    is_notification: bool = False
    params: Optional[JsonObject] = None


class OutErrorCode(IntEnum):
    """Error codes the server reports."""

    NOT_INITIALIZED = -32002
    INVALID_PARAMS = -32603


@dataclass
class OutError:
    """An error to report in reply to a request."""

    code: OutErrorCode
    message: str = ""
    data: Optional[JsonObject] = None


@dataclass
class OutMessage:
    """A reply: either a result or an error object."""

    result: Optional[Any] = None
    error: Optional[JsonObject] = None


class LSPSymbolType(IntEnum):
    """Kinds of symbol offered to the client."""

    VARIABLE = 0
    CLASS = 1
    FUNCTION = 2
    NAMESPACE = 3


class MessageIO:
    """Reads and writes the common parameter shapes of requests."""

    def parse_text_document_position(self, params: JsonObject) -> tuple[Region, str]:
        """Return the position as a zero-width region and the document URI."""
        position = params["position"]
        line = int(position["line"])
        col = int(position["character"])
        uri = params["textDocument"]["uri"]
        if not isinstance(uri, str):
            raise TypeError("textDocument.uri must be a string")
        return Region(line, col, line, col), uri

    def parse_partial_result_token(self, params: JsonObject) -> Optional[str]:
        return params.get("partialResultToken")

    def parse_work_done_token(self, params: JsonObject) -> Optional[str]:
        return params.get("workDoneToken")

    def write_partial_result_token(self, params: JsonObject, token: Optional[str]) -> None:
        """Add the token to ``params`` unless it is empty."""
        if token:
            params["partialResultToken"] = token

    def write_work_done_token(self, params: JsonObject, token: Optional[str]) -> None:
        """Add the token to ``params`` unless it is empty."""
        if token:
            params["workDoneToken"] = token


class WorkspaceManager:
    """Tracks which documents the client has open, with their versions."""

    def __init__(self) -> None:
        self.open_documents: dict[str, int] = {}

    def document_is_open(self, path: str) -> bool:
        return path in self.open_documents

    def close_document(self, path: str) -> None:
        """Forget the document; closing one that is not open does nothing."""
        self.open_documents.pop(path, None)