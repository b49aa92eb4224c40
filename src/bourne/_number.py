"""
State machine for JSON numeric literals.

Accepted grammar::

    sign? ( "0" | [1-9] [0-9]* ) ( "." [0-9]+ )? ( [eE] sign? [0-9]+ )?

where ``sign`` is ``+`` or ``-``. The literal ends at ``}``, ``]``, ``,``,
whitespace or the end of input; the terminator itself is left for the caller.
"""

from enum import Enum
from typing import Final

from ._cursor import WHITESPACE
from ._cursor import Cursor
from ._errors import InvalidCharacterError
from ._errors import NumberConversionError
from ._profile import ProfileContext
from ._value import I64_MAX
from ._value import I64_MIN
from ._value import Number

TERMINATORS: Final = frozenset(b"}],") | WHITESPACE


class NumberState(Enum):
    START = "start"
    AFTER_SIGN = "after_sign"
    # A leading zero: no further integer digits may follow.
    AFTER_ZERO = "after_zero"
    INTEGER_PART = "integer_part"
    # The next byte must be a digit.
    AFTER_DECIMAL_POINT = "after_decimal_point"
    FRACTIONAL_PART = "fractional_part"
    # A digit or an exponent sign must follow.
    AFTER_EXPONENT = "after_exponent"
    # The next byte must be a digit.
    AFTER_EXPONENT_SIGN = "after_exponent_sign"
    EXPONENT_PART = "exponent_part"


class ByteClass(Enum):
    SIGN = "sign"
    ZERO = "zero"
    NONZERO = "nonzero"
    DECIMAL_POINT = "decimal_point"
    EXPONENT = "exponent"
    OTHER = "other"


def _classify(byte: int) -> ByteClass:
    if byte == 0x30:  # 0
        return ByteClass.ZERO
    if 0x31 <= byte <= 0x39:  # 1-9
        return ByteClass.NONZERO
    if byte in b"+-":
        return ByteClass.SIGN
    if byte == 0x2E:  # .
        return ByteClass.DECIMAL_POINT
    if byte in b"eE":
        return ByteClass.EXPONENT
    return ByteClass.OTHER


_S = NumberState
_B = ByteClass

TRANSITIONS: Final[dict[tuple[NumberState, ByteClass], NumberState]] = {
    (_S.START, _B.SIGN): _S.AFTER_SIGN,
    (_S.START, _B.ZERO): _S.AFTER_ZERO,
    (_S.START, _B.NONZERO): _S.INTEGER_PART,
    (_S.AFTER_SIGN, _B.ZERO): _S.AFTER_ZERO,
    (_S.AFTER_SIGN, _B.NONZERO): _S.INTEGER_PART,
    (_S.AFTER_ZERO, _B.DECIMAL_POINT): _S.AFTER_DECIMAL_POINT,
    (_S.AFTER_ZERO, _B.EXPONENT): _S.AFTER_EXPONENT,
    (_S.INTEGER_PART, _B.ZERO): _S.INTEGER_PART,
    (_S.INTEGER_PART, _B.NONZERO): _S.INTEGER_PART,
    (_S.INTEGER_PART, _B.DECIMAL_POINT): _S.AFTER_DECIMAL_POINT,
    (_S.INTEGER_PART, _B.EXPONENT): _S.AFTER_EXPONENT,
    (_S.AFTER_DECIMAL_POINT, _B.ZERO): _S.FRACTIONAL_PART,
    (_S.AFTER_DECIMAL_POINT, _B.NONZERO): _S.FRACTIONAL_PART,
    (_S.FRACTIONAL_PART, _B.ZERO): _S.FRACTIONAL_PART,
    (_S.FRACTIONAL_PART, _B.NONZERO): _S.FRACTIONAL_PART,
    (_S.FRACTIONAL_PART, _B.EXPONENT): _S.AFTER_EXPONENT,
    (_S.AFTER_EXPONENT, _B.SIGN): _S.AFTER_EXPONENT_SIGN,
    (_S.AFTER_EXPONENT, _B.ZERO): _S.EXPONENT_PART,
    (_S.AFTER_EXPONENT, _B.NONZERO): _S.EXPONENT_PART,
    (_S.AFTER_EXPONENT_SIGN, _B.ZERO): _S.EXPONENT_PART,
    (_S.AFTER_EXPONENT_SIGN, _B.NONZERO): _S.EXPONENT_PART,
    (_S.EXPONENT_PART, _B.ZERO): _S.EXPONENT_PART,
    (_S.EXPONENT_PART, _B.NONZERO): _S.EXPONENT_PART,
}

# States in which the literal may end.
ACCEPTING: Final = frozenset(
    {
        NumberState.AFTER_ZERO,
        NumberState.INTEGER_PART,
        NumberState.FRACTIONAL_PART,
        NumberState.EXPONENT_PART,
    }
)


def scan_number(cursor: Cursor) -> Number:
    """
    Scans a numeric literal at the cursor.

    Literals without a decimal point or exponent become 64-bit integers,
    everything else a float.

    Raises:
        InvalidCharacterError: the literal breaks the grammar, at the
            offending byte (or at the end of input when it stops early)
        NumberConversionError: an integer literal outside the 64-bit range
    """
    with ProfileContext("scan_number"):
        start = cursor.index
        state = NumberState.START
        is_integer = True
        end: int | None = None

        while (item := cursor.indexed_next()) is not None:
            index, byte = item
            if byte in TERMINATORS:
                if state not in ACCEPTING:
                    raise InvalidCharacterError(index, cursor.text)
                end = index
                cursor.rewind()
                break

            byte_class = _classify(byte)
            next_state = TRANSITIONS.get((state, byte_class))
            if next_state is None:
                raise InvalidCharacterError(index, cursor.text)
            if byte_class in (ByteClass.DECIMAL_POINT, ByteClass.EXPONENT):
                is_integer = False
            state = next_state

        if end is None:
            end = cursor.index
            if end == start or state not in ACCEPTING:
                raise InvalidCharacterError(cursor.index, cursor.text)

        literal = cursor.slice(start, end).decode("ascii")
        if is_integer:
            return _convert_integer(literal, start, cursor.text)
        return _convert_float(literal, start, cursor.text)


def _convert_integer(literal: str, start: int, doc: str) -> Number:
    try:
        value = int(literal)
    except ValueError as e:
        raise NumberConversionError(
            start, doc, f"Invalid integer literal {literal!r}"
        ) from e
    if not I64_MIN <= value <= I64_MAX:
        raise NumberConversionError(
            start, doc, "Integer literal out of range for a 64-bit integer"
        )
    return Number(value)


def _convert_float(literal: str, start: int, doc: str) -> Number:
    try:
        return Number(float(literal))
    except ValueError as e:
        raise NumberConversionError(
            start, doc, f"Invalid float literal {literal!r}"
        ) from e
