"""A language server speaking JSON-RPC over Content-Length framed streams."""

from __future__ import annotations

import concurrent.futures
import json
import sys
import threading
from typing import BinaryIO, Optional

from starbytes.lsp_protocol import (
    CANCEL_REQUEST,
    EXIT,
    HOVER,
    INIT,
    InMessage,
    MessageInfo,
    MessageIO,
    OutError,
    OutErrorCode,
    OutMessage,
    WorkspaceManager,
)

SERVER_NAME = "Starbytes LSP"
SERVER_VERSION = "0.1"

_POLL_SECONDS = 0.001

_INIT_RESULT = {
    "capabilities": {"hoverProvider": True},
    "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
}


class Server:
    """Reads requests from ``instream`` and writes replies to ``outstream``."""

    def __init__(self, instream: BinaryIO, outstream: BinaryIO) -> None:
        self._in = instream
        self._out = outstream
        self._read_lock = threading.Lock()
        self._write_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._executor = concurrent.futures.ThreadPoolExecutor()
        self.workspace = WorkspaceManager()
        self.message_io = MessageIO()
        self.server_on = True

    def get_message(self) -> Optional[InMessage]:
        """Read one framed message.

        Returns None when the frame is malformed; raises EOFError at the end
        of the input.
        """
        with self._read_lock:
            content_length: Optional[int] = None
            seen_header = False
            while True:
                line = self._in.readline()
                if not line:
                    raise EOFError("end of input")
                stripped = line.strip()
                if not stripped:
                    if seen_header:
                        break
                    continue
                seen_header = True
                name, _, value = stripped.decode("ascii", "replace").partition(":")
                if name.strip().lower() == "content-length":
                    try:
                        content_length = int(value.strip())
                    except ValueError:
                        content_length = None
            if not content_length or content_length < 0:
                return None
            body = self._in.read(content_length)
        try:
            payload = json.loads(body.decode("utf-8"))
        except ValueError:
            return None
        if not isinstance(payload, dict) or not isinstance(payload.get("method"), str):
            return None
        params = payload.get("params")
        return InMessage(
            info=MessageInfo(id=payload.get("id"), method=payload["method"]),
            is_notification="id" not in payload,
            params=params if isinstance(params, dict) else None,
        )

    def _write_frame(self, payload: dict) -> None:
        body = json.dumps(payload, separators=(",", ":")).encode("utf-8")
        with self._write_lock:
            self._out.write(b"Content-Length: %d\r\n\r\n" % len(body))
            self._out.write(body)
            self._out.flush()

    def send_message(self, message: OutMessage, info: MessageInfo) -> None:
        """Write the reply to the request described by ``info``."""
        payload: dict = {"id": info.id, "method": info.method}
        if message.result is not None or message.error is None:
            payload["result"] = message.result
        else:
            payload["error"] = message.error
        self._write_frame(payload)

    def send_error(self, error: OutError, message: OutMessage) -> None:
        """Attach ``error`` to ``message`` and write the error object."""
        body: dict = {"code": int(error.code)}
        if error.message:
            body["message"] = error.message
        if error.data is not None:
            body["data"] = error.data
        message.error = body
        self._write_frame(body)

    def _handle_request(self, message: InMessage, cancelled: threading.Event) -> Optional[OutMessage]:
        out = OutMessage()
        if message.info.method == HOVER:
            try:
                params = message.params or {}
                _region, document = self.message_io.parse_text_document_position(params)
                self.message_io.parse_partial_result_token(params)
                self.message_io.parse_work_done_token(params)
            except (KeyError, TypeError, ValueError):
                self.send_error(OutError(OutErrorCode.INVALID_PARAMS, "invalid hover parameters"), out)
            else:
                if not self.workspace.document_is_open(document):
                    self.send_error(OutError(OutErrorCode.INVALID_PARAMS), out)
        return None if cancelled.is_set() else out

    def _reply_cancellable(self, message: InMessage) -> None:
        info = message.info
        cancelled = threading.Event()
        future = self._executor.submit(self._handle_request, message, cancelled)
        while True:
            try:
                out = future.result(timeout=_POLL_SECONDS)
            except concurrent.futures.TimeoutError:
                pass
            else:
                if out is not None:
                    self.send_message(out, info)
                return
            if not self.server_on:
                out = future.result()
                if out is not None:
                    self.send_message(out, info)
                return
            try:
                following = self.get_message()
            except EOFError:
                out = future.result()
                if out is not None:
                    self.send_message(out, info)
                raise
            if following is None:
                continue
            if following.info.method == CANCEL_REQUEST and following.info.id == info.id:
                cancelled.set()
                future.cancel()
                return
            self.process_message(following)

    def _reply_to_request(self, message: InMessage) -> None:
        if message.info.method == INIT:
            self.send_message(OutMessage(result=_INIT_RESULT), message.info)
        else:
            self._reply_cancellable(message)

    def process_message(self, message: InMessage) -> None:
        """Handle one message; a shutdown request turns the server off."""
        if message.info.method == EXIT:
            with self._state_lock:
                self.server_on = False
        if not message.is_notification:
            self._reply_to_request(message)

    def cycle(self) -> None:
        """Read and handle one message."""
        message = self.get_message()
        if message is not None:
            self.process_message(message)

    def run(self) -> None:
        """Serve until a shutdown request or the end of input."""
        try:
            while self.server_on:
                self.cycle()
        except EOFError:
            with self._state_lock:
                self.server_on = False
        finally:
            self._executor.shutdown(wait=True)


def main(argv: Optional[list[str]] = None) -> int:
    """Serve on standard input and output."""
    Server(sys.stdin.buffer, sys.stdout.buffer).run()
    return 0