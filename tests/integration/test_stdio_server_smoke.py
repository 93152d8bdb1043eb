from __future__ import annotations

import io
import json
from pathlib import Path

from local_rag.server import build_arg_parser, create_server


def test_stdio_server_routes_multiple_requests(tmp_path: Path) -> None:
    (tmp_path / "a.ts").write_text("function foo() {}", encoding="utf-8")
    server = create_server(roots=[str(tmp_path)])
    in_stream = io.StringIO(
        "\n".join(
            [
                json.dumps({"id": "req-1", "method": "rag.reindex", "params": {}}),
                "",
                json.dumps(
                    {
                        "id": "req-2",
                        "method": "tools/call",
                        "params": {"name": "rag.search", "arguments": {"query": "foo"}},
                    }
                ),
            ]
        )
        + "\n"
    )
    out_stream = io.StringIO()

    server.serve(in_stream=in_stream, out_stream=out_stream)
    lines = [line for line in out_stream.getvalue().splitlines() if line]

    assert len(lines) == 2
    first = json.loads(lines[0])
    second = json.loads(lines[1])

    assert first["request_id"] == "req-1"
    assert first["ok"] is True
    assert first["result"]["added"] == 1

    assert second["request_id"] == "req-2"
    assert second["ok"] is True
    assert [hit["path"] for hit in second["result"]["results"]] == ["a.ts"]
    assert second["result"]["results"][0]["relevance_score"] > 0


def test_arg_parser_collects_repeated_roots() -> None:
    args = build_arg_parser().parse_args(
        ["--root", "one", "--root", "two", "--max-tokens", "500", "--deny-sensitive", "false"]
    )

    assert args.roots == ["one", "two"]
    assert args.max_tokens == 500
    assert args.deny_sensitive == "false"
    assert args.no_initial_index is False
