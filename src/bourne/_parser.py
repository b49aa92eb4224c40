"""
Recursive descent parser building ``Value`` trees.

The parser reads one byte of lookahead to pick a sub-parser; arrays and
objects recurse back into ``parse_value`` for each element. There is no
backtracking once a closing delimiter has been consumed.
"""

import logging
from typing import Final

from ._cursor import Cursor
from ._errors import DepthLimitExceededError
from ._errors import InvalidCharacterError
from ._errors import ParseError
from ._errors import UnexpectedEOFError
from ._number import scan_number
from ._profile import ProfileContext
from ._strings import QUOTE
from ._strings import scan_string
from ._value import Value
from ._value import ValueKind
from ._value import ValueMap

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH: Final = 128

_NULL_START: Final = ord("n")
_NUMBER_START: Final = frozenset(b"+-0123456789")
_BOOLEAN_START: Final = frozenset(b"tf")
_OPEN_ARRAY: Final = ord("[")
_CLOSE_ARRAY: Final = ord("]")
_OPEN_OBJECT: Final = ord("{")
_CLOSE_OBJECT: Final = ord("}")
_COMMA: Final = ord(",")
_COLON: Final = ord(":")


class Parser:
    """
    Parses JSON text held by a ``Cursor`` into ``Value`` trees.

    ``max_depth`` bounds how deeply arrays and objects may nest; ``None``
    lifts the bound, leaving only the interpreter's recursion limit.
    """

    def __init__(
        self, cursor: Cursor, max_depth: int | None = DEFAULT_MAX_DEPTH
    ) -> None:
        self.cursor = cursor
        self.max_depth = max_depth

    def _unexpected_eof(self) -> UnexpectedEOFError:
        return UnexpectedEOFError(self.cursor.index, self.cursor.text)

    def parse_document(self) -> Value:
        """
        Parses exactly one value surrounded by optional whitespace.

        Any other trailing byte is an ``InvalidCharacterError``.
        """
        cursor = self.cursor
        cursor.eat_whitespace()
        value = self.parse_value()
        cursor.eat_whitespace()
        if not cursor.is_eof():
            raise InvalidCharacterError(cursor.index, cursor.text)
        return value

    def parse_value(self, depth: int = 0) -> Value:
        """Dispatches on the lookahead byte."""
        cursor = self.cursor
        byte = cursor.peek()
        if byte is None:
            raise self._unexpected_eof()

        if byte == _NULL_START:
            return self.parse_null()
        elif byte in _BOOLEAN_START:
            return Value(ValueKind.BOOLEAN, self.parse_boolean())
        elif byte in _NUMBER_START:
            return Value(ValueKind.NUMBER, scan_number(cursor))
        elif byte == QUOTE:
            return Value(ValueKind.STRING, scan_string(cursor))
        elif byte == _OPEN_ARRAY:
            return self.parse_array(depth + 1)
        elif byte == _OPEN_OBJECT:
            return self.parse_object(depth + 1)
        else:
            raise InvalidCharacterError(cursor.index, cursor.text)

    def parse_null(self) -> Value:
        cursor = self.cursor
        if cursor.matches(b"null"):
            cursor.advance(4)
            return Value()
        raise InvalidCharacterError(cursor.index, cursor.text)

    def parse_boolean(self) -> bool:
        cursor = self.cursor
        if cursor.matches(b"true"):
            cursor.advance(4)
            return True
        if cursor.matches(b"false"):
            cursor.advance(5)
            return False
        raise InvalidCharacterError(cursor.index, cursor.text)

    def _enter_container(self, opening: int, depth: int) -> None:
        """Consumes the opening bracket after checking the depth bound."""
        cursor = self.cursor
        item = cursor.indexed_next()
        if item is None:
            raise self._unexpected_eof()
        index, byte = item
        if byte != opening:
            raise InvalidCharacterError(index, cursor.text)
        if self.max_depth is not None and depth > self.max_depth:
            raise DepthLimitExceededError(
                index,
                cursor.text,
                f"Nesting depth exceeds the maximum of {self.max_depth}",
            )

    def _expect_separator(self, closing: int) -> bool:
        """
        Consumes a ``,`` or the closing bracket after an element.

        Returns True when another element must follow.
        """
        cursor = self.cursor
        cursor.eat_whitespace()
        item = cursor.indexed_next()
        if item is None:
            raise self._unexpected_eof()
        index, byte = item
        if byte == _COMMA:
            return True
        if byte == closing:
            return False
        raise InvalidCharacterError(index, cursor.text)

    def parse_array(self, depth: int = 1) -> Value:
        """Parses ``[ value (, value)* ]``; trailing commas are rejected."""
        with ProfileContext("parse_array"):
            cursor = self.cursor
            self._enter_container(_OPEN_ARRAY, depth)
            items: list[Value] = []

            while True:
                cursor.eat_whitespace()
                byte = cursor.peek()
                if byte is None:
                    raise self._unexpected_eof()
                if byte == _CLOSE_ARRAY and not items:
                    cursor.advance()
                    break
                if byte in (_CLOSE_ARRAY, _COMMA):
                    raise InvalidCharacterError(cursor.index, cursor.text)

                items.append(self.parse_value(depth))
                if not self._expect_separator(_CLOSE_ARRAY):
                    break

            return Value(ValueKind.ARRAY, items)

    def parse_object(self, depth: int = 1) -> Value:
        """
        Parses ``{ "key": value (, "key": value)* }``.

        Keys must be quoted. A repeated key replaces the earlier member.
        """
        with ProfileContext("parse_object"):
            cursor = self.cursor
            self._enter_container(_OPEN_OBJECT, depth)
            members = ValueMap()

            while True:
                cursor.eat_whitespace()
                byte = cursor.peek()
                if byte is None:
                    raise self._unexpected_eof()
                if byte == _CLOSE_OBJECT and not members:
                    cursor.advance()
                    break
                if byte != QUOTE:
                    raise InvalidCharacterError(cursor.index, cursor.text)

                key = scan_string(cursor)
                cursor.eat_whitespace()
                item = cursor.indexed_next()
                if item is None:
                    raise self._unexpected_eof()
                index, byte = item
                if byte != _COLON:
                    raise InvalidCharacterError(index, cursor.text)
                cursor.eat_whitespace()

                members[key] = self.parse_value(depth)
                if not self._expect_separator(_CLOSE_OBJECT):
                    break

            return Value(ValueKind.OBJECT, members)


def parse(text: str, max_depth: int | None = DEFAULT_MAX_DEPTH) -> Value:
    """Parses a complete JSON document."""
    with ProfileContext("parse", len(text)):
        try:
            cursor = Cursor.from_text(text)
        except UnicodeEncodeError as e:
            pos = len(text[: e.start].encode("utf-8"))
            logger.debug("Unencodable character at index %d", e.start)
            raise InvalidCharacterError(
                pos, text, "Unpaired surrogate in input"
            ) from e
        logger.debug("Parsing %d byte document", cursor.length)
        try:
            value = Parser(cursor, max_depth).parse_document()
        except ParseError as e:
            logger.debug("Parse failed: %s", e)
            raise
        logger.debug("Parsed %s value", value.kind.value)
        return value
