"""Byte offset to character offset mapping for UTF-8 encoded documents."""

from __future__ import annotations

from bisect import bisect_right
from typing import Final

_ASCII_LIMIT: Final = 127


class UTF8PositionMapper:
    """Maps byte offsets in the UTF-8 encoding of a text back to characters.

    The parser works on bytes, while line and column numbers are reported in
    characters. Rather than building a full table, the mapper stores a
    checkpoint every ``checkpoint_interval`` characters and walks forward from
    the nearest one.
    """

    def __init__(self, text: str, checkpoint_interval: int = 256) -> None:
        """Build the checkpoint table for ``text``.

        Args:
            text: The decoded document
            checkpoint_interval: Characters between checkpoints
        """
        self.text: Final = text
        self.checkpoint_interval: Final = checkpoint_interval
        self._byte_marks: list[int] = []
        self._char_marks: list[int] = []
        self._is_ascii_only = text.isascii()
        self._byte_length = 0

        if not self._is_ascii_only:
            self._build_checkpoints()
        else:
            self._byte_length = len(text)

    def _build_checkpoints(self) -> None:
        byte_pos = 0
        for char_pos, char in enumerate(self.text):
            if char_pos % self.checkpoint_interval == 0:
                self._byte_marks.append(byte_pos)
                self._char_marks.append(char_pos)
            byte_pos += _utf8_width(char)
        self._byte_length = byte_pos

    def byte_to_char(self, byte_pos: int) -> int:
        """Convert a byte offset to a character offset.

        Offsets that fall inside a multi-byte sequence map to the character
        containing them. Offsets past the end clamp to ``len(text)``.
        """
        if self._is_ascii_only:
            return min(byte_pos, len(self.text))
        if byte_pos >= self._byte_length:
            return len(self.text)

        slot = bisect_right(self._byte_marks, byte_pos) - 1
        current_byte = self._byte_marks[slot]
        current_char = self._char_marks[slot]

        while current_char < len(self.text):
            width = _utf8_width(self.text[current_char])
            if current_byte + width > byte_pos:
                break
            current_byte += width
            current_char += 1

        return current_char

    def line_and_column(self, byte_pos: int) -> tuple[int, int]:
        """Returns the 1-based (line, column) of a byte offset."""
        char_pos = self.byte_to_char(byte_pos)
        lineno = self.text.count("\n", 0, char_pos) + 1
        colno = char_pos - self.text.rfind("\n", 0, char_pos)
        return lineno, colno


def _utf8_width(char: str) -> int:
    code_point = ord(char)
    if code_point <= _ASCII_LIMIT:
        return 1
    if code_point < 0x800:
        return 2
    if code_point < 0x10000:
        return 3
    return 4
