"""
In-memory JSON value tree.

A ``Value`` is a discriminated union over null, boolean, number, string,
array and object. Reads never raise: ``get`` returns ``None`` and indexing
returns a detached null when the target is missing. Writes go through the
auto-vivifying mutators (``entry``, item assignment, ``push``, ``insert``),
which turn a null into the container the index implies and raise
``ContainerKindError`` when the value already holds something else.
"""

import copy
import os
from collections import OrderedDict
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any
from typing import Final
from typing import TypeAlias

from ._errors import ContainerKindError

I64_MIN: Final = -(2**63)
I64_MAX: Final = 2**63 - 1

Index: TypeAlias = int | str


class ObjectBacking(Enum):
    """
    Storage policy for object members.

    HASHED makes no promise about iteration order; ORDERED guarantees
    insertion order and makes object equality order-sensitive.
    """

    HASHED = "hashed"
    ORDERED = "ordered"


def backing_map_type(backing: ObjectBacking) -> type[dict[str, Any]]:
    """Returns the mapping class implementing ``backing``."""
    if backing is ObjectBacking.ORDERED:
        return OrderedDict
    return dict


# Selected once per process by the presence of the variable; its value is
# ignored, as with BOURNE_PROFILE.
OBJECT_BACKING: Final = (
    ObjectBacking.ORDERED
    if "BOURNE_PRESERVE_ORDER" in os.environ
    else ObjectBacking.HASHED
)
ValueMap: Final = backing_map_type(OBJECT_BACKING)


class NumberKind(Enum):
    INT = "int"
    FLOAT = "float"


@dataclass(frozen=True, eq=False)
class Number:
    """
    A JSON number: either a signed 64-bit integer or a double.

    The kind is fixed by the Python type of ``value``; ``Number(1)`` and
    ``Number(1.0)`` are different numbers.
    """

    value: int | float

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(
            self.value, int | float
        ):
            raise TypeError(
                f"Number value must be int or float, not "
                f"{type(self.value).__name__}"
            )
        if isinstance(self.value, int) and not (
            I64_MIN <= self.value <= I64_MAX
        ):
            raise OverflowError(
                f"{self.value} does not fit in a 64-bit signed integer"
            )

    @property
    def kind(self) -> NumberKind:
        if isinstance(self.value, int):
            return NumberKind.INT
        return NumberKind.FLOAT

    @property
    def is_int(self) -> bool:
        return isinstance(self.value, int)

    @property
    def is_float(self) -> bool:
        return isinstance(self.value, float)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        return self.kind is other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __int__(self) -> int:
        return int(self.value)

    def __float__(self) -> float:
        return float(self.value)


class ValueKind(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


_SIZED_KINDS: Final = frozenset(
    {ValueKind.STRING, ValueKind.ARRAY, ValueKind.OBJECT}
)


class Value:
    """
    A node of a JSON tree.

    The constructor trusts its arguments; use the factory classmethods or
    ``from_native`` to build values from Python data. Each node owns its
    children: values handed to the mutators are deep-copied, so a node never
    appears in two places and a tree can never contain itself.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self, kind: ValueKind = ValueKind.NULL, data: Any = None
    ) -> None:
        self._kind = kind
        self._data = data

    # Construction

    @classmethod
    def null(cls) -> "Value":
        return cls()

    @classmethod
    def boolean(cls, flag: bool) -> "Value":
        return cls(ValueKind.BOOLEAN, bool(flag))

    @classmethod
    def number(cls, number: Number | int | float) -> "Value":
        if not isinstance(number, Number):
            number = Number(number)
        return cls(ValueKind.NUMBER, number)

    @classmethod
    def string(cls, text: str) -> "Value":
        return cls(ValueKind.STRING, str(text))

    @classmethod
    def array(cls, items: Any = ()) -> "Value":
        return cls(ValueKind.ARRAY, [cls.from_native(item) for item in items])

    @classmethod
    def mapping(cls, members: Mapping[str, Any] | None = None) -> "Value":
        value = cls(ValueKind.OBJECT, ValueMap())
        for key, member in (members or {}).items():
            value.insert(key, member)
        return value

    @classmethod
    def from_native(cls, obj: Any) -> "Value":  # noqa: PLR0911
        """
        Converts Python data into a value tree.

        ``None``, ``bool``, ``int``, ``float``, ``str``, ``Number``, lists,
        tuples and string-keyed mappings are accepted; a ``Value`` is
        deep-copied. The mutators and container factories convert through
        here.
        """
        if isinstance(obj, Value):
            return copy.deepcopy(obj)
        if obj is None:
            return cls()
        if isinstance(obj, bool):
            return cls(ValueKind.BOOLEAN, obj)
        if isinstance(obj, Number):
            return cls(ValueKind.NUMBER, obj)
        if isinstance(obj, int | float):
            return cls(ValueKind.NUMBER, Number(obj))
        if isinstance(obj, str):
            return cls(ValueKind.STRING, obj)
        if isinstance(obj, Mapping):
            return cls.mapping(obj)
        if isinstance(obj, list | tuple):
            return cls.array(obj)
        msg = (
            f"Object of type {type(obj).__name__} cannot be converted "
            f"to a JSON value"
        )
        raise TypeError(msg)

    def to_native(self) -> Any:
        """Converts the tree into plain Python objects."""
        kind = self._kind
        if kind is ValueKind.NUMBER:
            return self._data.value
        if kind is ValueKind.ARRAY:
            return [item.to_native() for item in self._data]
        if kind is ValueKind.OBJECT:
            return type(self._data)(
                (key, member.to_native()) for key, member in self._data.items()
            )
        return self._data

    # Inspection

    @property
    def kind(self) -> ValueKind:
        return self._kind

    def is_null(self) -> bool:
        return self._kind is ValueKind.NULL

    def as_bool(self) -> bool | None:
        if self._kind is ValueKind.BOOLEAN:
            return self._data
        return None

    def as_number(self) -> Number | None:
        if self._kind is ValueKind.NUMBER:
            return self._data
        return None

    def as_int(self) -> int | None:
        if self._kind is ValueKind.NUMBER and self._data.is_int:
            return self._data.value
        return None

    def as_float(self) -> float | None:
        if self._kind is ValueKind.NUMBER and self._data.is_float:
            return self._data.value
        return None

    def as_str(self) -> str | None:
        if self._kind is ValueKind.STRING:
            return self._data
        return None

    def as_list(self) -> list["Value"] | None:
        """Returns the live element list of an array."""
        if self._kind is ValueKind.ARRAY:
            return self._data
        return None

    def as_dict(self) -> dict[str, "Value"] | None:
        """Returns the live member mapping of an object."""
        if self._kind is ValueKind.OBJECT:
            return self._data
        return None

    def __len__(self) -> int:
        """
        Characters of a string, elements of an array, members of an object;
        zero for every other kind.
        """
        if self._kind in _SIZED_KINDS:
            return len(self._data)
        return 0

    def __iter__(self) -> Iterator[Any]:
        """Iterates array elements or object keys; other kinds are empty."""
        if self._kind in (ValueKind.ARRAY, ValueKind.OBJECT):
            return iter(self._data)
        return iter(())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._kind is other._kind and self._data == other._data

    def __repr__(self) -> str:
        if self._kind is ValueKind.NULL:
            return "Value()"
        return f"Value(ValueKind.{self._kind.name}, {self._data!r})"

    # Reads

    def get(self, index: Index) -> "Value | None":
        """
        Looks up an array element by position or an object member by key.

        Returns ``None`` when the target is absent or when the index kind does
        not match the container kind.
        """
        if isinstance(index, bool):
            return None
        if isinstance(index, int):
            if self._kind is ValueKind.ARRAY and 0 <= index < len(self._data):
                return self._data[index]
            return None
        if isinstance(index, str) and self._kind is ValueKind.OBJECT:
            return self._data.get(index)
        return None

    def __getitem__(self, index: Index) -> "Value":
        """
        Like ``get`` but yields a fresh null instead of ``None``.

        The placeholder is not attached to the tree; use ``entry`` to obtain
        a child that can be written through.
        """
        found = self.get(index)
        if found is None:
            return Value()
        return found

    def __contains__(self, index: object) -> bool:
        return self.get(index) is not None  # type: ignore[arg-type]

    # Writes

    def entry(self, index: Index) -> "Value":
        """
        Returns the attached child at ``index``, creating it when missing.

        A null value becomes an empty array (int index) or an empty object
        (str index). Missing keys receive a null member; positions past the
        end of an array are filled with nulls.

        Raises:
            ContainerKindError: the value is neither null nor the container
                kind the index implies
        """
        _check_index(index)
        if isinstance(index, str):
            members = self._vivify_object()
            child = members.get(index)
            if child is None:
                child = members[index] = Value()
            return child

        if index < 0:
            raise IndexError("array positions must be non-negative")
        items = self._vivify_array()
        missing = index + 1 - len(items)
        if missing > 0:
            items.extend(Value() for _ in range(missing))
        return items[index]

    def __setitem__(self, index: Index, item: Any) -> None:
        _check_index(index)
        child = Value.from_native(item)
        if isinstance(index, str):
            self._vivify_object()[index] = child
        else:
            self.entry(index)
            self._data[index] = child

    def push(self, item: Any) -> None:
        """Appends to an array, turning a null into an empty array first."""
        child = Value.from_native(item)
        self._vivify_array().append(child)

    def insert(self, key: str, item: Any) -> "Value | None":
        """
        Sets an object member, turning a null into an empty object first.

        Returns the member previously stored under ``key``, if any.
        """
        if not isinstance(key, str):
            raise TypeError(
                f"object keys must be str, not {type(key).__name__}"
            )
        child = Value.from_native(item)
        members = self._vivify_object()
        previous = members.get(key)
        members[key] = child
        return previous

    def _vivify_array(self) -> list["Value"]:
        if self._kind is ValueKind.NULL:
            self._kind = ValueKind.ARRAY
            self._data = []
        elif self._kind is not ValueKind.ARRAY:
            raise ContainerKindError(
                f"cannot use a {self._kind.value} value as an array"
            )
        return self._data

    def _vivify_object(self) -> dict[str, "Value"]:
        if self._kind is ValueKind.NULL:
            self._kind = ValueKind.OBJECT
            self._data = ValueMap()
        elif self._kind is not ValueKind.OBJECT:
            raise ContainerKindError(
                f"cannot use a {self._kind.value} value as an object"
            )
        return self._data


def _check_index(index: object) -> None:
    if isinstance(index, bool) or not isinstance(index, int | str):
        raise TypeError(
            f"value indices must be int or str, not {type(index).__name__}"
        )
