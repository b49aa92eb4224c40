"""Quoted string scanning and escape sequence decoding."""

from collections.abc import Callable
from typing import Final

from ._cursor import Cursor
from ._errors import InvalidCharacterError
from ._errors import InvalidEscapeSequenceError
from ._errors import InvalidHexError
from ._errors import LineBreakInStringError
from ._errors import UnexpectedEOFError
from ._errors import UnexpectedEOFInStringError
from ._profile import ProfileContext

QUOTE: Final = ord('"')
BACKSLASH: Final = ord("\\")
LINE_BREAKS: Final = frozenset(b"\n\r")

# Escapes with a dedicated meaning. Any other escaped character, including
# \" \\ and \/, stands for itself.
SIMPLE_ESCAPES: Final = {
    "f": "\f",
    "b": "\b",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_HEX_DIGITS: Final = frozenset("0123456789abcdefABCDEF")
_HIGH_SURROGATES: Final = range(0xD800, 0xDC00)
_LOW_SURROGATES: Final = range(0xDC00, 0xE000)


def scan_string(cursor: Cursor) -> str:
    """
    Scans a double-quoted string at the cursor and returns its decoded text.

    The cursor is left just past the closing quote. Raw line breaks are
    rejected even when they follow a backslash.
    """
    with ProfileContext("scan_string"):
        byte = cursor.peek()
        if byte is None:
            raise UnexpectedEOFError(cursor.index, cursor.text)
        if byte != QUOTE:
            raise InvalidCharacterError(cursor.index, cursor.text)

        opening = cursor.index
        cursor.advance()
        start = cursor.index

        while (item := cursor.indexed_next()) is not None:
            index, byte = item
            if byte == QUOTE:
                raw = cursor.slice(start, index).decode("utf-8")
                return unescape_string(raw, offset=start, doc=cursor.text)
            if byte in LINE_BREAKS:
                raise LineBreakInStringError(index, cursor.text)
            if byte == BACKSLASH:
                # The escaped byte is skipped so \" cannot close the string.
                if cursor.peek() in LINE_BREAKS:
                    raise LineBreakInStringError(cursor.index, cursor.text)
                cursor.advance()

        raise UnexpectedEOFInStringError(opening, cursor.text)


def unescape_string(raw: str, offset: int = 0, doc: str = "") -> str:
    """
    Decodes the escape sequences of a string body (without its quotes).

    Args:
        raw: The text between the quotes, still escaped
        offset: Byte offset of ``raw`` within ``doc``, used in errors
        doc: The enclosing document, used in errors

    Raises:
        InvalidHexError: a ``\\u`` escape contains a non-hex digit
        UnexpectedEOFError: the text ends inside an escape
        InvalidEscapeSequenceError: a ``\\u`` escape is a lone surrogate
    """
    if "\\" not in raw:
        return raw

    def locate(char_index: int) -> int:
        return offset + len(raw[:char_index].encode("utf-8"))

    with ProfileContext("unescape_string", len(raw)):
        chunks: list[str] = []
        length = len(raw)
        i = 0
        while i < length:
            backslash = raw.find("\\", i)
            if backslash < 0:
                chunks.append(raw[i:])
                break
            chunks.append(raw[i:backslash])

            if backslash + 1 >= length:
                raise UnexpectedEOFError(locate(length), doc)
            escaped = raw[backslash + 1]
            if escaped == "u":
                code_point, i = _decode_unicode_escape(
                    raw, backslash, locate, doc
                )
                chunks.append(chr(code_point))
            else:
                chunks.append(SIMPLE_ESCAPES.get(escaped, escaped))
                i = backslash + 2

        return "".join(chunks)


def _decode_unicode_escape(
    raw: str, backslash: int, locate: Callable[[int], int], doc: str
) -> tuple[int, int]:
    """
    Decodes ``\\uXXXX`` (or a surrogate pair of them) at ``backslash``.

    Returns the code point and the index just past the consumed text.
    """
    code_point = _read_hex4(raw, backslash + 2, locate, doc)
    end = backslash + 6

    if code_point in _LOW_SURROGATES:
        raise InvalidEscapeSequenceError(locate(backslash), doc)
    if code_point in _HIGH_SURROGATES:
        if raw.startswith("\\u", end):
            low = _read_hex4(raw, end + 2, locate, doc)
            if low in _LOW_SURROGATES:
                combined = 0x10000 + (
                    (code_point - 0xD800) << 10 | (low - 0xDC00)
                )
                return combined, end + 6
        raise InvalidEscapeSequenceError(locate(backslash), doc)

    return code_point, end


def _read_hex4(
    raw: str, start: int, locate: Callable[[int], int], doc: str
) -> int:
    value = 0
    for i in range(start, start + 4):
        if i >= len(raw):
            raise UnexpectedEOFError(locate(len(raw)), doc)
        digit = raw[i]
        if digit not in _HEX_DIGITS:
            raise InvalidHexError(locate(i), doc)
        value = value << 4 | int(digit, 16)
    return value
