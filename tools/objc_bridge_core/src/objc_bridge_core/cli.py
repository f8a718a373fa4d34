from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .common import WRITE_DRIFT, BridgeError, read_schema_text, write_if_changed
from .declarations import DEFAULT_PLATFORM
from .emitter import BridgeOptions, generate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="objc-bridge-codegen",
        description="Generate Rust wrappers for Objective-C frameworks from a bridge schema.",
    )
    parser.add_argument("--schema", required=True, help="Path to the bridge schema XML.")
    parser.add_argument("--out", help="Write generated Rust to path (default: print to stdout).")
    parser.add_argument(
        "--platform",
        default=DEFAULT_PLATFORM,
        help=f"Platform whose 'inherits_<platform>' lists are honored (default: {DEFAULT_PLATFORM}).",
    )
    parser.add_argument("--check", action="store_true", help="Fail with a diff if --out is out of date.")
    parser.add_argument("--dry-run", action="store_true", help="Render without writing --out.")
    return parser


def command_generate(args: argparse.Namespace) -> int:
    schema_path = Path(args.schema)
    options = BridgeOptions(platform=args.platform)
    content = generate(read_schema_text(schema_path), options)

    if not args.out:
        sys.stdout.write(content)
        return 0

    state = write_if_changed(Path(args.out), content, args.check, args.dry_run)
    print(f"[{schema_path.name}] generate: {state}")
    return 1 if state == WRITE_DRIFT else 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.out and (args.check or args.dry_run):
        parser.error("--check and --dry-run require --out")

    try:
        return command_generate(args)
    except BridgeError as exc:
        print(f"objc_bridge error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
