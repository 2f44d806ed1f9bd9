"""Text accumulator that owns indentation and newline style."""
from __future__ import annotations

from .options import TranspilationOptions


class CodeWriter:
    """Append-only buffer; every line break goes through `newline` so CRLF output stays consistent."""

    def __init__(self, *, indent: str = "  ", newline: str = "\n") -> None:
        self.indent = indent
        self.newline = newline
        self._chunks: list[str] = []

    @classmethod
    def for_options(cls, options: TranspilationOptions) -> "CodeWriter":
        return cls(indent=options.indent_string, newline=options.newline_string)

    def append_line(self, text: str = "", *, depth: int = 0) -> "CodeWriter":
        if text:
            self._chunks.append(self.indent * depth + text)
        self._chunks.append(self.newline)
        return self

    def __str__(self) -> str:
        return "".join(self._chunks)

    def to_string(self) -> str:
        return str(self)
