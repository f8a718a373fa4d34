"""Indentation-aware line writer used by the emitters."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

DEFAULT_INDENT = "    "


class Output:
    def __init__(self, indent: str = DEFAULT_INDENT) -> None:
        self.indent = indent
        self._lines: list[str] = []
        self._depth = 0
        self._last_group: str | None = None
        self._last_blank = True
        self._last_opened = False

    def _append(self, text: str, group: str | None) -> None:
        self._lines.append(f"{self.indent * self._depth}{text}" if text else "")
        self._last_blank = not text
        self._last_opened = False
        self._last_group = group

    def blank(self) -> None:
        # Never first, never doubled, never right after a block opener.
        if self._last_blank or self._last_opened:
            return
        self._lines.append("")
        self._last_blank = True
        self._last_group = None

    def line(self, text: str = "", pad: bool = False, group: str | None = None) -> None:
        if not text.strip():
            self.blank()
            return
        if pad or group != self._last_group:
            self.blank()
        self._append(text, group)

    def verbatim(self, text: str) -> None:
        """Append ``text`` as-is at the current depth, bypassing all spacing rules."""
        self._append(text, None)

    @contextmanager
    def block(self, header: str, pad: bool = False, group: str | None = None) -> Iterator[Output]:
        self.line(f"{header} {{", pad=pad, group=group)
        self._depth += 1
        self._last_opened = True
        try:
            yield self
        finally:
            self._depth -= 1
        self._append("}", group)

    def render(self) -> str:
        lines = list(self._lines)
        while lines and lines[-1] == "":
            lines.pop()
        content = "\n".join(lines)
        if not content.endswith("\n"):
            content += "\n"
        return content
