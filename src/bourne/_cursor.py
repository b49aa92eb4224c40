"""Byte-indexed cursor over a fully buffered JSON document."""

from typing import Final
from typing import TypeAlias

Position: TypeAlias = int

# JSON whitespace plus form feed; vertical tab is not whitespace.
WHITESPACE: Final = frozenset(b" \t\n\x0c\r")


class Cursor:
    """
    Tracks a byte offset into the UTF-8 encoding of the input.

    None of the operations raise: reads past the end return ``None`` and
    ``matches`` returns ``False``. The offset only moves forward, except for
    ``rewind``, which steps back a single byte.
    """

    def __init__(
        self, data: bytes, index: Position = 0, text: str = ""
    ) -> None:
        self.data: Final = data
        self.text: Final = text
        self.length: Final = len(data)
        self.index = index

    @classmethod
    def from_text(cls, text: str) -> "Cursor":
        """Creates a cursor over the UTF-8 encoding of ``text``."""
        return cls(text.encode("utf-8"), text=text)

    def __repr__(self) -> str:
        return f"Cursor(index={self.index}, length={self.length})"

    def is_eof(self) -> bool:
        return self.index >= self.length

    def peek(self) -> int | None:
        """Returns the byte at the current offset without consuming it."""
        if self.index < self.length:
            return self.data[self.index]
        return None

    def next(self) -> int | None:
        """Consumes and returns the byte at the current offset."""
        if self.index < self.length:
            byte = self.data[self.index]
            self.index += 1
            return byte
        return None

    def indexed_next(self) -> tuple[Position, int] | None:
        """Consumes one byte and returns it with its offset."""
        if self.index < self.length:
            index = self.index
            self.index += 1
            return index, self.data[index]
        return None

    def advance(self, step: int = 1) -> None:
        self.index += step

    def rewind(self) -> None:
        """Un-consumes the last byte."""
        if self.index > 0:
            self.index -= 1

    def matches(self, literal: bytes) -> bool:
        """Checks whether ``literal`` occurs at the current offset."""
        return self.data.startswith(literal, self.index)

    def eat_whitespace(self) -> None:
        data = self.data
        index = self.index
        while index < self.length and data[index] in WHITESPACE:
            index += 1
        self.index = index

    def slice(self, start: Position, end: Position) -> bytes:
        return self.data[start:end]
