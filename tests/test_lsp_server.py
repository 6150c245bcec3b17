import io
import json
from unittest import mock

import pytest

from starbytes.lsp_protocol import MessageInfo, OutError, OutErrorCode, OutMessage
from starbytes.lsp_server import SERVER_NAME, Server, main


def frame(payload):
    body = json.dumps(payload).encode("utf-8")
    return b"Content-Length: %d\r\n\r\n" % len(body) + body


def read_frames(data):
    frames = []
    while data:
        header, _, rest = data.partition(b"\r\n\r\n")
        assert header.startswith(b"Content-Length: ")
        length = int(header[len(b"Content-Length: "):])
        frames.append(json.loads(rest[:length].decode("utf-8")))
        data = rest[length:]
    return frames


def make_server(*payloads, raw=b""):
    data = b"".join(frame(p) for p in payloads) + raw
    out = io.BytesIO()
    return Server(io.BytesIO(data), out), out


def test_get_message_request():
    server, _ = make_server({"id": 3, "method": "textDocument/hover", "params": {"a": 1}})
    message = server.get_message()
    assert message.info.id == 3
    assert message.info.method == "textDocument/hover"
    assert message.is_notification is False
    assert message.params == {"a": 1}


def test_get_message_notification():
    server, _ = make_server({"method": "textDocument/didOpen"})
    message = server.get_message()
    assert message.is_notification is True
    assert message.info.id is None


def test_get_message_invalid_json_returns_none():
    server, _ = make_server(raw=b"Content-Length: 5\r\n\r\n{oops")
    assert server.get_message() is None


def test_get_message_at_end_raises_eof():
    server, _ = make_server()
    with pytest.raises(EOFError):
        server.get_message()


def test_initialize_reply():
    server, out = make_server({"id": 1, "method": "initialize"})
    server.cycle()
    [reply] = read_frames(out.getvalue())
    assert reply["id"] == 1
    assert reply["method"] == "initialize"
    assert reply["result"]["capabilities"]["hoverProvider"] is True
    assert reply["result"]["serverInfo"]["name"] == SERVER_NAME


def test_content_length_matches_body():
    server, out = make_server()
    server.send_message(OutMessage(result={"k": "é"}), MessageInfo(id=7, method="m"))
    data = out.getvalue()
    header, _, body = data.partition(b"\r\n\r\n")
    assert int(header.split(b":")[1]) == len(body)
    assert json.loads(body)["result"] == {"k": "é"}


def test_send_error_without_message():
    server, out = make_server()
    message = OutMessage()
    server.send_error(OutError(OutErrorCode.NOT_INITIALIZED), message)
    assert message.error == {"code": -32002}
    assert read_frames(out.getvalue()) == [{"code": -32002}]


def test_send_error_with_message_and_data():
    server, out = make_server()
    message = OutMessage()
    server.send_error(OutError(OutErrorCode.INVALID_PARAMS, "bad", {"x": 1}), message)
    assert message.error == {"code": -32603, "message": "bad", "data": {"x": 1}}
    assert read_frames(out.getvalue())[0] == message.error


def test_send_message_with_error():
    server, out = make_server()
    server.send_message(OutMessage(error={"code": -32603}), MessageInfo(id=2, method="x"))
    [reply] = read_frames(out.getvalue())
    assert reply["error"] == {"code": -32603}
    assert "result" not in reply


def test_hover_on_closed_document_reports_invalid_params():
    params = {"position": {"line": 0, "character": 0}, "textDocument": {"uri": "file:///nope"}}
    server, out = make_server({"id": 5, "method": "textDocument/hover", "params": params})
    server.run()
    frames = read_frames(out.getvalue())
    assert frames[-1]["id"] == 5
    assert frames[-1]["error"]["code"] == int(OutErrorCode.INVALID_PARAMS)


def test_hover_on_open_document_has_no_error():
    params = {"position": {"line": 1, "character": 2}, "textDocument": {"uri": "file:///open"}}
    server, out = make_server({"id": 6, "method": "textDocument/hover", "params": params})
    server.workspace.open_documents["file:///open"] = 1
    server.run()
    frames = read_frames(out.getvalue())
    assert len(frames) == 1
    assert frames[0]["id"] == 6
    assert "error" not in frames[0]


def test_notification_gets_no_reply():
    server, out = make_server({"method": "textDocument/didOpen"})
    server.run()
    assert out.getvalue() == b""
    assert server.server_on is False


def test_run_stops_after_shutdown():
    server, out = make_server(
        {"id": 1, "method": "initialize"},
        {"id": 2, "method": "shutdown"},
        {"id": 3, "method": "initialize"},
    )
    server.run()
    frames = read_frames(out.getvalue())
    assert [f["id"] for f in frames] == [1, 2]
    assert server.server_on is False


def test_main_serves_stdio():
    stdin = io.TextIOWrapper(io.BytesIO(frame({"id": 9, "method": "initialize"})))
    stdout = io.TextIOWrapper(io.BytesIO())
    with mock.patch("sys.stdin", stdin), mock.patch("sys.stdout", stdout):
        code = main()
    assert code == 0
    [reply] = read_frames(stdout.buffer.getvalue())
    assert reply["id"] == 9