from __future__ import annotations

import difflib
from pathlib import Path


class BridgeError(Exception):
    pass


class SchemaParseError(BridgeError):
    pass


class StructuralMismatchError(BridgeError):
    pass


class MissingAttributeError(BridgeError):
    pass


class KindAmbiguityError(BridgeError):
    pass


class GenericSlotsExhaustedError(BridgeError):
    pass


class UnsupportedShapeError(BridgeError):
    pass


def read_schema_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaParseError(f"Unable to read schema '{path}': {exc}") from exc


WRITE_UNCHANGED = "unchanged"
WRITE_DRIFT = "drift"
WRITE_DRY_RUN = "dry-run"
WRITE_UPDATED = "updated"


def write_if_changed(path: Path, content: str, check: bool, dry_run: bool) -> str:
    existing = path.read_text(encoding="utf-8") if path.exists() else None
    if existing == content:
        return WRITE_UNCHANGED
    if check:
        # A missing file diffs as empty.
        diff = difflib.unified_diff(
            (existing or "").splitlines(),
            content.splitlines(),
            fromfile=f"a/{path}",
            tofile=f"b/{path}",
            lineterm="",
        )
        print("\n".join(diff))
        return WRITE_DRIFT
    if dry_run:
        return WRITE_DRY_RUN
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return WRITE_UPDATED
