"""CLI entrypoint for the scramble generator."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

import yaml
from tqdm import tqdm

from .checks import check_report
from .generator import ScrambleGenerator
from .notation import format_scramble, moves_to_json
from .server import ScrambleHTTPServer


def load_config(path: str | Path) -> dict:
    """Load YAML config. Returns dict with optional 'generator' and 'server' keys."""
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _log(message: str) -> None:
    ts = datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] {message}", file=sys.stderr, flush=True)


def build_parser(defaults: dict | None = None) -> argparse.ArgumentParser:
    d = defaults or {}
    gen = d.get("generator", {})
    srv = d.get("server", {})

    parser = argparse.ArgumentParser(description="Rubik 3x3 scramble generator")
    sub = parser.add_subparsers(dest="mode", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=str, default=None, help="Path to YAML config (generator + server params)")
    common.add_argument("--verbose", action="store_true")

    generate = sub.add_parser("generate", parents=[common], help="Print random scrambles")
    generate.add_argument("--length", type=int, default=gen.get("length", 20))
    generate.add_argument("--wide", action="store_true", default=bool(gen.get("wide_moves", False)))
    generate.add_argument("--seed", type=int, default=gen.get("seed"))
    generate.add_argument("--count", type=int, default=gen.get("count", 1))
    generate.add_argument("--json", action="store_true", help="Emit JSON instead of plain notation")
    generate.add_argument("--progress", action="store_true", help="Show a progress bar while generating")

    check = sub.add_parser("check", parents=[common], help="Validate a scramble")
    check.add_argument("scramble", type=str)

    serve = sub.add_parser("serve", parents=[common], help="Run the HTTP scramble server")
    serve.add_argument("--host", default=srv.get("host", "127.0.0.1"))
    serve.add_argument("--port", type=int, default=srv.get("port", 8000))
    serve.add_argument("--wide", action="store_true", default=bool(gen.get("wide_moves", False)))
    serve.add_argument("--seed", type=int, default=gen.get("seed"))

    return parser


def run_generate(args: argparse.Namespace) -> list[str]:
    if args.count < 1:
        raise ValueError("--count must be >= 1")

    generator = ScrambleGenerator(wide_moves=args.wide, seed=args.seed)
    if args.verbose:
        _log(f"generate_init length={args.length} count={args.count} wide_moves={args.wide} seed={args.seed}")

    lines: list[str] = []
    records: list[dict] = []
    for idx in tqdm(range(args.count), desc="Scrambles", unit="scramble", disable=not args.progress):
        result = generator.generate_detailed(args.length)
        text = format_scramble(result.moves)
        if args.verbose:
            s = result.stats
            _log(
                f"scramble_done index={idx} draws={s.draws} rejected={s.rejected} "
                f"merged={s.merged} cancelled={s.cancelled}"
            )
        if args.json:
            records.append({"scramble": text, "moves": moves_to_json(result.moves)})
        else:
            lines.append(text)

    if args.json:
        return [json.dumps(records if args.count > 1 else records[0])]
    return lines


def run_check(args: argparse.Namespace) -> tuple[bool, str]:
    report = check_report(args.scramble)
    if args.verbose:
        _log(f"check_done valid={report['valid']} length={report['length']}")
    return bool(report["valid"]), json.dumps(report)


def run_serve(args: argparse.Namespace) -> None:
    generator = ScrambleGenerator(wide_moves=args.wide, seed=args.seed)
    server = ScrambleHTTPServer(generator=generator, host=args.host, port=args.port)
    print(f"Rubik scramble server listening on http://{server.host}:{server.port}", flush=True)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.shutdown()


def main(argv: list[str] | None = None) -> int:
    # Pre-parse to get --config
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", type=str, default=None)
    pre_args, _ = pre.parse_known_args(argv)

    defaults = {}
    if pre_args.config:
        defaults = load_config(pre_args.config)

    parser = build_parser(defaults)
    args = parser.parse_args(argv)

    if args.mode == "generate":
        try:
            lines = run_generate(args)
        except ValueError as exc:
            parser.error(str(exc))
        for line in lines:
            print(line)
        return 0

    if args.mode == "check":
        valid, out = run_check(args)
        print(out)
        return 0 if valid else 1

    if args.mode == "serve":
        run_serve(args)
        return 0

    parser.error(f"Unsupported mode: {args.mode}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
