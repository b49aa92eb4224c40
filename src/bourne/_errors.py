"""
Error types raised while parsing JSON text and while mutating value trees.

Every parse failure is a ``ParseError`` carrying the byte offset where the
problem was detected, plus the line and column (in characters) of that offset
when the source document is known.
"""

from __future__ import annotations

from typing import TypeAlias

from ._utf8_mapper import UTF8PositionMapper

Position: TypeAlias = int


class ParseError(ValueError):
    """
    Base class for JSON parse failures.

    Attributes:
        msg: The unformatted error message
        doc: The document being parsed ("" when unknown)
        pos: Byte offset into the UTF-8 encoding of ``doc``
        char_pos: Character offset corresponding to ``pos``
        lineno: 1-based line of ``pos``
        colno: 1-based column of ``pos``
    """

    default_message = "Invalid JSON"

    def __init__(
        self, pos: Position = 0, doc: str = "", msg: str | None = None
    ) -> None:
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg if msg is not None else self.default_message
        self.doc = doc
        self.pos = pos

        if doc:
            mapper = UTF8PositionMapper(doc)
            self.char_pos = mapper.byte_to_char(pos)
            self.lineno, self.colno = mapper.line_and_column(pos)
        else:
            self.char_pos = pos
            self.lineno, self.colno = 1, pos + 1

        super().__init__(
            f"{self.msg} at line {self.lineno}, column {self.colno} "
            f"(byte {self.pos})"
        )

    def __reduce__(
        self,
    ) -> tuple[type["ParseError"], tuple[int, str, str]]:
        return self.__class__, (self.pos, self.doc, self.msg)


class InvalidCharacterError(ParseError):
    """A byte that the grammar does not allow at this position."""

    default_message = "Invalid character"


class UnexpectedEOFError(ParseError):
    """The input ended where more tokens were required."""

    default_message = "Unexpected end of stream"


class UnexpectedEOFInStringError(ParseError):
    """
    The input ended before a string's closing quote.

    ``pos`` is the offset of the opening quote.
    """

    default_message = "Unexpected end of stream while parsing string"


class LineBreakInStringError(ParseError):
    """A raw line feed or carriage return inside a quoted string."""

    default_message = "Line break while parsing string"


class NumberConversionError(ParseError):
    """
    A well-formed numeric literal that cannot be converted.

    Raised for integers outside the signed 64-bit range; the native
    conversion failure, if any, is chained as ``__cause__``.
    """

    default_message = "Number conversion failed"


class InvalidEscapeSequenceError(ParseError):
    """A ``\\u`` escape that does not decode to a Unicode scalar value."""

    default_message = "Invalid escape sequence"


class InvalidHexError(ParseError):
    """A non-hexadecimal digit inside a ``\\u`` escape."""

    default_message = "Invalid hex digit in unicode escape"


class DepthLimitExceededError(ParseError):
    """Arrays and objects nested deeper than the configured maximum."""

    default_message = "Maximum nesting depth exceeded"


class ContainerKindError(TypeError):
    """
    Raised when a mutator is applied to a value of the wrong container kind.

    This signals a programming error (e.g. pushing into an object), not bad
    input, and is not a ``ParseError``.
    """
