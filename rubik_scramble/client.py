"""HTTP client for the scramble server."""

from __future__ import annotations

import json
from urllib import request

from .moves import Move
from .notation import parse_scramble


class ScrambleAPIClient:
    def __init__(self, host: str = "127.0.0.1", port: int = 8000, timeout: float = 10.0):
        self.base = f"http://{host}:{port}"
        self.timeout = timeout

    def _call(self, method: str, path: str, payload: dict | None = None) -> dict:
        data = None
        headers = {}
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"
        req = request.Request(url=f"{self.base}{path}", method=method, data=data, headers=headers)
        with request.urlopen(req, timeout=self.timeout) as resp:
            return json.loads(resp.read().decode("utf-8"))

    def health(self) -> dict:
        return self._call("GET", "/health")

    def scramble(self, length: int, wide_moves: bool | None = None, seed: int | None = None) -> dict:
        payload = {"length": int(length), "seed": seed}
        if wide_moves is not None:
            payload["wide_moves"] = bool(wide_moves)
        return self._call("POST", "/scramble", payload)

    def scramble_moves(self, length: int, wide_moves: bool | None = None, seed: int | None = None) -> list[Move]:
        out = self.scramble(length, wide_moves=wide_moves, seed=seed)
        return parse_scramble(out["scramble"])

    def check(self, scramble: str) -> dict:
        return self._call("POST", "/check", {"scramble": scramble})
