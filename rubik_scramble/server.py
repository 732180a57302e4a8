"""HTTP API server for the scramble generator."""

from __future__ import annotations

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from .checks import check_report
from .generator import InvalidLength, ScrambleGenerator
from .notation import format_scramble, moves_to_json


class RequestError(ValueError):
    """Raised when a request body is malformed."""


class ScrambleHTTPServer:
    def __init__(
        self,
        generator: ScrambleGenerator | None = None,
        host: str = "127.0.0.1",
        port: int = 8000,
    ):
        self.generator = generator if generator is not None else ScrambleGenerator()
        self._lock = threading.RLock()

        handler_cls = self._build_handler()
        self.httpd = ThreadingHTTPServer((host, port), handler_cls)
        self.host, self.port = self.httpd.server_address

    def _scramble_payload(self, body: dict[str, Any]) -> dict[str, Any]:
        if "length" not in body:
            raise RequestError("Missing required field: length")
        length = body["length"]

        seed = body.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise RequestError("seed must be an integer or null")

        wide_moves = body.get("wide_moves")
        if wide_moves is not None and not isinstance(wide_moves, bool):
            raise RequestError("wide_moves must be a boolean or null")

        if wide_moves is None or wide_moves == self.generator.wide_moves:
            moves = self.generator.generate(length, seed=seed)
        else:
            moves = ScrambleGenerator(wide_moves=wide_moves, seed=seed).generate(length)

        return {
            "scramble": format_scramble(moves),
            "moves": moves_to_json(moves),
            "length": len(moves),
            "wide_moves": self.generator.wide_moves if wide_moves is None else wide_moves,
        }

    def _build_handler(self):
        parent = self

        class Handler(BaseHTTPRequestHandler):
            server_version = "RubikScramble/1.0"

            def log_message(self, fmt: str, *args):
                return

            def _send_json(self, code: int, payload: dict[str, Any]):
                body = json.dumps(payload).encode("utf-8")
                self.send_response(code)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                self.wfile.write(body)

            def _read_json(self) -> dict[str, Any]:
                length = int(self.headers.get("Content-Length", "0"))
                if length == 0:
                    return {}
                data = self.rfile.read(length)
                try:
                    obj = json.loads(data.decode("utf-8"))
                except json.JSONDecodeError as exc:
                    raise RequestError(f"Invalid JSON body: {exc}") from exc
                if not isinstance(obj, dict):
                    raise RequestError("JSON body must be an object")
                return obj

            def do_GET(self):
                if self.path == "/health":
                    self._send_json(
                        200,
                        {
                            "ready": True,
                            "wide_moves": parent.generator.wide_moves,
                            "generated": parent.generator.generated_count,
                        },
                    )
                    return

                self._send_json(404, {"error": "Not Found"})

            def do_POST(self):
                try:
                    body = self._read_json()
                    with parent._lock:
                        if self.path == "/scramble":
                            self._send_json(200, parent._scramble_payload(body))
                            return

                        if self.path == "/check":
                            text = body.get("scramble")
                            if not isinstance(text, str):
                                raise RequestError("scramble must be a string")
                            self._send_json(200, check_report(text))
                            return

                except (RequestError, InvalidLength) as exc:
                    self._send_json(400, {"error": str(exc)})
                    return

                self._send_json(404, {"error": "Not Found"})

        return Handler

    def serve_forever(self):
        self.httpd.serve_forever()

    def start_background(self, daemon: bool = True) -> threading.Thread:
        thread = threading.Thread(target=self.serve_forever, daemon=daemon)
        thread.start()
        return thread

    def shutdown(self):
        self.httpd.shutdown()
        self.httpd.server_close()
