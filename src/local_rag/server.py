"""JSON-lines front end: one request object per input line, one response per output line."""

from __future__ import annotations

import argparse
import dataclasses
import itertools
import json
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from local_rag.config import CliOverrides, load_effective_config
from local_rag.logging import emit, sanitize_arguments
from local_rag.service import LocalRagService
from local_rag.tools import ToolCatalog, ToolError, builtin_tools

CALL_TOOL = "tools/call"
LIST_TOOLS = "tools/list"

_DENY_SENSITIVE_FLAGS = {"true": True, "false": False, None: None}


@dataclass(slots=True, frozen=True)
class ToolCall:
    """What a request asks for, once the envelope is unwrapped."""

    tool: str
    arguments: dict[str, object]


def decode_request(payload: object) -> ToolCall:
    """Unwrap ``{method, params}`` or ``tools/call`` ``{name, arguments}``."""
    if not isinstance(payload, dict):
        raise ToolError("INVALID_REQUEST", "Request must be an object.")
    method = payload.get("method")
    params = payload.get("params", {})
    if not isinstance(method, str) or not method:
        raise ToolError("INVALID_REQUEST", "Request method must be a non-empty string.")
    if not isinstance(params, dict):
        raise ToolError("INVALID_PARAMS", "Request params must be an object.")
    if method != CALL_TOOL:
        return ToolCall(method, params)
    name = params.get("name")
    arguments = params.get("arguments", {})
    if not isinstance(name, str) or not name:
        raise ToolError("INVALID_PARAMS", "tools/call params.name must be a non-empty string.")
    if not isinstance(arguments, dict):
        raise ToolError("INVALID_PARAMS", "tools/call params.arguments must be an object.")
    return ToolCall(name, arguments)


def success_response(request_id: str, result: dict[str, object]) -> dict[str, object]:
    return {"request_id": request_id, "ok": True, "result": result}


def error_response(request_id: str, error: ToolError) -> dict[str, object]:
    return {
        "request_id": request_id,
        "ok": False,
        "error": {"code": error.code, "message": error.message},
    }


class ToolServer:
    """Routes decoded requests to the tool catalog and logs one event per request.

    Requests without a usable ``id`` get sequential ``req-NNNNNN`` ids.
    """

    def __init__(self, service: LocalRagService, catalog: ToolCatalog | None = None) -> None:
        self._service = service
        self._catalog = catalog if catalog is not None else ToolCatalog(builtin_tools(service))
        self._fallback_ids = itertools.count(1)

    @property
    def service(self) -> LocalRagService:
        return self._service

    @property
    def catalog(self) -> ToolCatalog:
        return self._catalog

    def serve(self, in_stream: TextIO, out_stream: TextIO) -> None:
        """Answer each non-blank input line until EOF."""
        for line in in_stream:
            if not line.strip():
                continue
            response = self.handle_json_line(line)
            out_stream.write(json.dumps(response, sort_keys=True) + "\n")
            out_stream.flush()

    def handle_json_line(self, line: str) -> dict[str, object]:
        started = time.perf_counter()
        try:
            payload = json.loads(line)
        except (ValueError, RecursionError):
            request_id = self._next_fallback_id()
            response = error_response(
                request_id, ToolError("INVALID_JSON", "Request must be valid JSON.")
            )
            self._log(request_id, "invalid_json", {"raw_line_length": len(line)}, response, started)
            return response
        return self.handle_payload(payload)

    def handle_payload(self, payload: object) -> dict[str, object]:
        started = time.perf_counter()
        raw_id = payload.get("id") if isinstance(payload, dict) else None
        request_id = self._request_id(raw_id)
        tool = "invalid_request"
        arguments: dict[str, object] = {}
        try:
            call = decode_request(payload)
            tool, arguments = call.tool, call.arguments
            result = self._dispatch(call)
        except ToolError as error:
            response = error_response(request_id, error)
        except Exception:
            response = error_response(
                request_id,
                ToolError("INTERNAL_ERROR", "Unhandled server error while executing tool."),
            )
        else:
            response = success_response(request_id, result)
        self._log(request_id, tool, arguments, response, started)
        return response

    def _dispatch(self, call: ToolCall) -> dict[str, object]:
        if call.tool == LIST_TOOLS:
            return {"tools": self._catalog.describe()}
        return self._catalog.call(call.tool, call.arguments)

    def _request_id(self, raw_id: object) -> str:
        if isinstance(raw_id, str) and raw_id:
            return raw_id
        if isinstance(raw_id, int) and not isinstance(raw_id, bool):
            return str(raw_id)
        return self._next_fallback_id()

    def _next_fallback_id(self) -> str:
        return f"req-{next(self._fallback_ids):06d}"

    def _log(
        self,
        request_id: str,
        tool: str,
        arguments: dict[str, object],
        response: dict[str, object],
        started: float,
    ) -> None:
        ok = response["ok"] is True
        error = response.get("error")
        emit(
            self._service.logger,
            "request",
            f"{tool} {'ok' if ok else 'failed'}",
            level="info" if ok else "warning",
            request_id=request_id,
            tool=tool,
            ok=ok,
            error_code=error["code"] if isinstance(error, dict) else None,
            duration_ms=int((time.perf_counter() - started) * 1000),
            arguments=sanitize_arguments(arguments),
        )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="local-rag", description="Serve workspace retrieval tools over JSON lines."
    )
    parser.add_argument(
        "--root",
        dest="roots",
        action="append",
        default=None,
        help="Workspace root to index; repeat for several roots.",
    )
    parser.add_argument("--data-dir", default=None, help="Where the index and event log live.")
    parser.add_argument("--max-file-bytes", type=int, default=None)
    parser.add_argument("--max-results", type=int, default=None)
    parser.add_argument("--max-tokens", type=int, default=None)
    parser.add_argument("--deny-sensitive", choices=("true", "false"), default=None)
    parser.add_argument(
        "--no-initial-index",
        action="store_true",
        help="Skip the indexing pass that normally runs at startup.",
    )
    return parser


def create_server(
    roots: list[str] | tuple[str, ...],
    data_dir: str | None = None,
    cli_overrides: CliOverrides | None = None,
) -> ToolServer:
    """Load config, initialize the store and wrap the service; no indexing pass runs."""
    overrides = cli_overrides or CliOverrides()
    if data_dir is not None:
        overrides = dataclasses.replace(overrides, data_dir=Path(data_dir).resolve())
    config = load_effective_config([Path(root) for root in roots], overrides)
    service = LocalRagService(config)
    service.initialize()
    return ToolServer(service)


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    overrides = CliOverrides(
        data_dir=Path(args.data_dir).resolve() if args.data_dir is not None else None,
        max_file_bytes=args.max_file_bytes,
        max_results=args.max_results,
        max_tokens=args.max_tokens,
        deny_sensitive=_DENY_SENSITIVE_FLAGS[args.deny_sensitive],
    )
    try:
        server = create_server(args.roots or ["."], cli_overrides=overrides)
    except ValueError as error:
        parser.error(str(error))
    if not args.no_initial_index:
        server.service.index_workspace()
    server.serve(sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
