"""
Tagged value model shared by the decoder and the encoder.

Every JSON shape maps to exactly one frozen dataclass so that a string is
never mistaken for an array and a decimal literal is never rounded through
a binary float.
"""

import decimal
import re
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

type Key = str

# Text a decoded decimal can have: exact digits, normalized exponent marker.
_DECIMAL_TEXT = re.compile(r"-?(?:0|[1-9][0-9]*)\.[0-9]+(?:E[+-][0-9]+)?")


@dataclass(frozen=True, eq=False)
class Object:
    """
    JSON object as an ordered tuple of (key, value) pairs.

    Duplicate keys are kept. Pair order survives a round-trip but does not
    take part in equality: two objects are equal when they hold the same
    multiset of pairs.
    """

    pairs: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.pairs, tuple):
            object.__setattr__(self, "pairs", tuple(self.pairs))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Object):
            return NotImplemented
        if len(self.pairs) != len(other.pairs):
            return False
        try:
            return Counter(self.pairs) == Counter(other.pairs)
        except TypeError:
            # unhashable members such as plain lists; match pairs one by one
            remaining = list(other.pairs)
            for pair in self.pairs:
                try:
                    remaining.remove(pair)
                except ValueError:
                    return False
            return True

    def __hash__(self) -> int:
        return hash(frozenset(Counter(self.pairs).items()))

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[tuple[Key, "Value"]]:
        return iter(self.pairs)

    def keys(self) -> list[Key]:
        """Returns keys in pair order, duplicates included."""
        return [key for key, _ in self.pairs]

    def get(self, key: Key, default: Any = None) -> Any:
        """
        Returns the value of the first pair named ``key``.

        Linear, non-recursive scan; nested objects are not searched.
        """
        for pair_key, value in self.pairs:
            if pair_key == key:
                return value
        return default

    def get_string(self, key: Key) -> str | None:
        """Returns the unwrapped text of a string member, if there is one."""
        value = self.get(key)
        if isinstance(value, StringValue):
            return value.text
        return None

    def get_object(self, key: Key) -> "Object | None":
        value = self.get(key)
        if isinstance(value, Object):
            return value
        return None


@dataclass(frozen=True)
class Array:
    """JSON array."""

    items: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.items)


@dataclass(frozen=True)
class StringValue:
    """
    Explicitly tagged string content.

    Holds the characters between the quotes exactly as they appeared in the
    source; escape sequences are not interpreted.
    """

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(
                f"StringValue text must be str, not {type(self.text).__name__}"
            )


@dataclass(frozen=True)
class IntegerNumber:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(
                f"IntegerNumber value must be int, not {type(self.value).__name__}"
            )


@dataclass(frozen=True)
class DecimalNumber:
    """
    Number with a fraction and/or exponent, kept as exact text.

    The text always contains a decimal point, e.g. ``3.14`` or ``1.0E+5``.
    """

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError("DecimalNumber text must be str")
        if "." not in self.text:
            raise ValueError(
                f"DecimalNumber text must contain a decimal point: {self.text!r}"
            )
        if _DECIMAL_TEXT.fullmatch(self.text) is None:
            raise ValueError(
                f"DecimalNumber text is not a normalized number: {self.text!r}"
            )

    def to_decimal(self) -> decimal.Decimal:
        return decimal.Decimal(self.text)


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class Null:
    pass


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()

Value = (
    Object | Array | StringValue | IntegerNumber | DecimalNumber | Boolean | Null
)
