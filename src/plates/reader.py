## plates — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
from pathlib import Path
from typing import Iterable, Protocol, TextIO


class LineSource(Protocol):
    def next_line(self, depth: int) -> str | None:
        """Return the next line of source, or `None` at end of input.

        `depth` starts at zero and increases by one for each construct that is
        still waiting for more tokens, e.g. a `PUSH` without value or an open `DEFN`.
        """


class ListReader:
    """In-memory line source, mostly for embedding and tests."""

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self.depths: list[int] = []

    @classmethod
    def from_text(cls, text: str) -> 'ListReader':
        return cls(text.splitlines())

    def next_line(self, depth: int) -> str | None:
        self.depths.append(depth)
        return next(self._lines, None)


class FileReader:
    """Concatenates several files into one stream of lines, opened lazily in order."""

    def __init__(self, files: Iterable[str | Path | TextIO]):
        self._pending = list(files)
        self._current: TextIO | None = None
        self.filename: str | None = None
        self.lineno = 0

    def _open_next(self) -> bool:
        if not self._pending: return False
        item = self._pending.pop(0)
        if hasattr(item, 'readline'):
            self._current, self.filename = item, getattr(item, 'name', '<STREAM>')
        elif str(item) == '-':
            self._current, self.filename = sys.stdin, '<STDIN>'
        else:
            self._current, self.filename = open(item, 'r', encoding='utf-8'), str(item)
        self.lineno = 0
        return True

    def next_line(self, depth: int) -> str | None:
        while True:
            if self._current is None and not self._open_next():
                return None
            if line := self._current.readline():
                self.lineno += 1
                return line
            if self._current is not sys.stdin: self._current.close()
            self._current = None


class InteractiveReader:
    """Prompts on the terminal, with one `>` per level of nesting."""

    def __init__(self, color: bool = True):
        self.color = color

    def prompt(self, depth: int) -> str:
        marker = '>' * (depth + 1) + ' '
        return f"\033[36m{marker}\033[0m" if self.color else marker

    def next_line(self, depth: int) -> str | None:
        try:
            return input(self.prompt(depth))
        except EOFError:
            print("")
            return None
