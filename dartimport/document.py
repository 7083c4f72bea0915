"""
Line‑addressable document surfaces used by the import fixer.

The fixer never touches files directly.  It reads and replaces single lines
through the small :class:`DocumentAccess` protocol, so the same code path
drives an in‑memory list of strings (tests, batch processing) and a file on
disk.
"""

from __future__ import annotations

import codecs
import re
from pathlib import Path
from typing import List, Optional, Protocol

__all__ = [
    "DocumentAccess",
    "LineListDocument",
    "TextFileDocument",
]

_NEWLINE = re.compile(r"(\r\n|\r|\n)")


class DocumentAccess(Protocol):
    """Minimal capability set needed to rewrite a document line by line."""

    def get_file_name(self) -> str:
        ...

    def get_line_count(self) -> int:
        ...

    def get_line_at(self, idx: int) -> str:
        ...

    def replace_line_at(self, idx: int, new_line: str) -> bool:
        ...


class LineListDocument:
    """A document backed by a plain list of lines (without line endings)."""

    def __init__(self, file_name: str, lines: Optional[List[str]] = None) -> None:
        self.file_name = file_name
        self.lines: List[str] = list(lines or [])
        self.replaced = 0

    def get_file_name(self) -> str:
        return self.file_name

    def get_line_count(self) -> int:
        return len(self.lines)

    def get_line_at(self, idx: int) -> str:
        return self.lines[idx]

    def replace_line_at(self, idx: int, new_line: str) -> bool:
        if not 0 <= idx < len(self.lines):
            return False
        self.lines[idx] = new_line
        self.replaced += 1
        return True


class TextFileDocument(LineListDocument):
    """A :class:`LineListDocument` loaded from and saved to a text file.

    Each line keeps its own terminator (``\\n``, ``\\r\\n`` or ``\\r``), and
    a leading UTF‑8 byte order mark is stripped from the first line and
    restored on :meth:`save`, so the file is written back exactly as read
    apart from the replaced lines.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        raw = self.path.read_bytes()
        self.bom = raw.startswith(codecs.BOM_UTF8)
        text = raw.decode("utf-8-sig")
        parts = _NEWLINE.split(text)
        lines = parts[0::2]
        self.endings: List[str] = parts[1::2]
        # An empty last piece means the text is empty or ends with a terminator
        if lines[-1] == "":
            lines.pop()
        else:
            self.endings.append("")
        super().__init__(str(self.path), lines)

    def to_text(self) -> str:
        return "".join(line + ending for line, ending in zip(self.lines, self.endings))

    def save(self) -> bool:
        """Write the document back to disk if any line was replaced.

        Returns ``True`` when the file was written.
        """
        if not self.replaced:
            return False
        self.path.write_bytes(self.to_text().encode("utf-8-sig" if self.bom else "utf-8"))
        return True
