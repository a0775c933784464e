"""
Encoder from the tagged value model to JSON text.

Output is compact (no whitespace) and keeps object pairs in the order they
are given. String content is escaped character by character; non-ASCII
passes through untouched.
"""

import decimal
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ._profiling import profiled_output
from ._values import Array
from ._values import Boolean
from ._values import DecimalNumber
from ._values import IntegerNumber
from ._values import Null
from ._values import Object
from ._values import StringValue

ESCAPES: dict[str, str] = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_SLASH_ESCAPES: dict[str, str] = {**ESCAPES, "/": "\\/"}


class EncodeErrorKind(Enum):
    BAD_TOP_LEVEL = "bad_top_level"
    BAD_KEY = "bad_key"
    BAD_TERM = "bad_term"


class JSONEncodeError(TypeError):
    """
    Raised when a term has no JSON shape.

    Carries the offending term so callers can report exactly what could not
    be encoded. The whole encode call fails; no partial output is produced.
    """

    kind: EncodeErrorKind = EncodeErrorKind.BAD_TERM

    def __init__(self, msg: str, term: Any) -> None:
        self.msg = msg
        self.term = term
        super().__init__(f"{msg}: {term!r}")


class BadTopLevel(JSONEncodeError):
    kind = EncodeErrorKind.BAD_TOP_LEVEL


class BadKey(JSONEncodeError):
    kind = EncodeErrorKind.BAD_KEY


class BadTerm(JSONEncodeError):
    kind = EncodeErrorKind.BAD_TERM


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures encoding behavior with immutable settings.

    ``object_root`` requires the outermost value to be an object and
    ``escape_slash`` additionally writes ``/`` as ``\\/``.
    """

    object_root: bool = True
    escape_slash: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.object_root, bool):
            raise TypeError("object_root must be a boolean")
        if not isinstance(self.escape_slash, bool):
            raise TypeError("escape_slash must be a boolean")


def escape_char(char: str, escape_slash: bool = False) -> str:
    """Returns the JSON text for a single character of string content."""
    table = _SLASH_ESCAPES if escape_slash else ESCAPES
    return table.get(char, char)


@profiled_output
def encode_string(text: str, escape_slash: bool = False) -> str:
    escaped = [escape_char(char, escape_slash) for char in text]
    return '"' + "".join(escaped) + '"'


def _encode_integer(term: Any, n: int) -> str:
    try:
        return str(n)
    except ValueError as e:
        # str() refuses integers beyond sys.get_int_max_str_digits()
        raise BadTerm("Integer too large to encode", term) from e


def _encode_object(obj: Object, config: EncodeConfig) -> str:
    if not obj.pairs:
        return "{}"

    items = []
    for pair in obj.pairs:
        if not isinstance(pair, tuple) or len(pair) != 2:  # noqa: PLR2004
            raise BadTerm("Object member is not a (key, value) pair", pair)
        key, value = pair
        if not isinstance(key, str):
            raise BadKey("Object keys must be str", key)
        try:
            encoded_value = encode_value(value, config)
        except JSONEncodeError as e:
            e.add_note(f"while encoding object member {key!r}")
            raise
        items.append(
            f"{encode_string(key, config.escape_slash)}:{encoded_value}"
        )

    return "{" + ",".join(items) + "}"


def _encode_array(
    items: tuple[Any, ...] | list[Any], config: EncodeConfig
) -> str:
    if not items:
        return "[]"

    encoded = []
    for index, item in enumerate(items):
        try:
            encoded.append(encode_value(item, config))
        except JSONEncodeError as e:
            e.add_note(f"while encoding array item {index}")
            raise
    return "[" + ",".join(encoded) + "]"


def encode_value(term: Any, config: EncodeConfig) -> str:  # noqa: PLR0911
    """
    Encodes any value, tagged or a plain Python convenience form.

    Plain ``str`` is quoted like a string value, plain ``list``/``tuple``
    becomes an array, ``int`` and ``decimal.Decimal`` become numbers and
    ``True``/``False``/``None`` become literals. Anything else raises
    ``BadTerm``.
    """
    if isinstance(term, Object):
        return _encode_object(term, config)
    elif isinstance(term, Array):
        return _encode_array(term.items, config)
    elif isinstance(term, StringValue):
        return encode_string(term.text, config.escape_slash)
    elif isinstance(term, IntegerNumber):
        return _encode_integer(term, term.value)
    elif isinstance(term, DecimalNumber):
        return term.text
    elif isinstance(term, Boolean):
        return "true" if term.value else "false"
    elif isinstance(term, Null) or term is None:
        return "null"
    elif term is True:
        return "true"
    elif term is False:
        return "false"
    elif isinstance(term, str):
        return encode_string(term, config.escape_slash)
    elif isinstance(term, int):
        return _encode_integer(term, term)
    elif isinstance(term, decimal.Decimal):
        if not term.is_finite():
            raise BadTerm("Non-finite decimals are not JSON compliant", term)
        return str(term)
    elif isinstance(term, list | tuple):
        return _encode_array(term, config)
    else:
        raise BadTerm("Unencodable term", term)


@profiled_output
def encode_document(value: Any, config: EncodeConfig) -> str:
    """Encodes a whole document; the root must be an object unless relaxed."""
    if config.object_root and not isinstance(value, Object):
        raise BadTopLevel("Top-level value must be an Object", value)
    return encode_value(value, config)
