"""
Hand-rolled JSON parser producing an explicit value tree.

``loads`` turns JSON text into a ``Value``: a discriminated node that keeps
integers and floats apart, reports every syntax error with its byte offset,
and offers non-raising reads plus auto-vivifying writes for building trees
programmatically.
"""

import logging
from dataclasses import dataclass
from typing import IO
from typing import Any

from ._cursor import Cursor
from ._errors import ContainerKindError
from ._errors import DepthLimitExceededError
from ._errors import InvalidCharacterError
from ._errors import InvalidEscapeSequenceError
from ._errors import InvalidHexError
from ._errors import LineBreakInStringError
from ._errors import NumberConversionError
from ._errors import ParseError
from ._errors import UnexpectedEOFError
from ._errors import UnexpectedEOFInStringError
from ._number import NumberState
from ._number import scan_number
from ._parser import DEFAULT_MAX_DEPTH
from ._parser import Parser
from ._parser import parse
from ._profile import PROFILE_HOT_PATHS
from ._profile import HotPathStats
from ._profile import ProfileContext
from ._profile import clear_hot_path_stats
from ._profile import get_hot_path_stats
from ._strings import scan_string
from ._strings import unescape_string
from ._value import I64_MAX
from ._value import I64_MIN
from ._value import OBJECT_BACKING
from ._value import Number
from ._value import NumberKind
from ._value import ObjectBacking
from ._value import Value
from ._value import ValueKind
from ._value import ValueMap
from ._value import backing_map_type

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


@dataclass(frozen=True)
class ParseConfig:
    """
    Immutable parsing options.

    ``max_depth`` limits how many arrays and objects may be nested inside
    each other; ``None`` disables the limit.
    """

    max_depth: int | None = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth is None:
            return
        if isinstance(self.max_depth, bool) or not isinstance(
            self.max_depth, int
        ):
            raise TypeError("max_depth must be an integer or None")
        if self.max_depth < 0:
            raise ValueError("max_depth must be non-negative")


def loads(s: str, **kwargs: Any) -> Value:
    """
    Parses a JSON document into a ``Value``.

    Keyword arguments populate a ``ParseConfig``.

    Raises:
        TypeError: ``s`` is not a ``str``
        ParseError: the text is not a single valid JSON value
    """
    if not isinstance(s, str):
        raise TypeError(
            f"the JSON object must be str, not {type(s).__name__}"
        )

    config = ParseConfig(**kwargs)
    return parse(s, max_depth=config.max_depth)


def load(fp: IO[str], **kwargs: Any) -> Value:
    """Parses the full contents of a text file-like object."""
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), **kwargs)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "I64_MAX",
    "I64_MIN",
    "OBJECT_BACKING",
    "PROFILE_HOT_PATHS",
    "ContainerKindError",
    "Cursor",
    "DepthLimitExceededError",
    "HotPathStats",
    "InvalidCharacterError",
    "InvalidEscapeSequenceError",
    "InvalidHexError",
    "LineBreakInStringError",
    "Number",
    "NumberConversionError",
    "NumberKind",
    "NumberState",
    "ObjectBacking",
    "ParseConfig",
    "ParseError",
    "Parser",
    "ProfileContext",
    "UnexpectedEOFError",
    "UnexpectedEOFInStringError",
    "Value",
    "ValueKind",
    "ValueMap",
    "backing_map_type",
    "clear_hot_path_stats",
    "get_hot_path_stats",
    "load",
    "loads",
    "scan_number",
    "scan_string",
    "unescape_string",
]
