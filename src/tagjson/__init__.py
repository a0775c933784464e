"""
JSON decoding and encoding over a tagged value model.

Decoding yields ``Object``/``Array``/``StringValue``/``IntegerNumber``/
``DecimalNumber``/``Boolean``/``Null`` trees: strings keep their source
characters verbatim, decimals keep their exact text, objects keep duplicate
keys in order. Encoding turns such a tree back into compact JSON text.
"""

import logging
import os
from pathlib import Path
from typing import IO
from typing import Any

from ._decoder import DecodeErrorKind
from ._decoder import GrammarEngine
from ._decoder import JSONDecodeError
from ._decoder import ParseConfig
from ._decoder import decode_text
from ._decoder import format_decimal
from ._decoder import is_insignificant
from ._decoder import skip_ws
from ._encoder import BadKey
from ._encoder import BadTerm
from ._encoder import BadTopLevel
from ._encoder import EncodeConfig
from ._encoder import EncodeErrorKind
from ._encoder import JSONEncodeError
from ._encoder import encode_document
from ._encoder import encode_string
from ._encoder import escape_char
from ._profiling import RuleStats
from ._profiling import clear_rule_stats
from ._profiling import get_rule_stats
from ._utf8_mapper import UTF8PositionMapper
from ._utf8_mapper import bytes_from_text
from ._utf8_mapper import text_from_bytes
from ._values import FALSE
from ._values import NULL
from ._values import TRUE
from ._values import Array
from ._values import Boolean
from ._values import DecimalNumber
from ._values import IntegerNumber
from ._values import Key
from ._values import Null
from ._values import Object
from ._values import StringValue
from ._values import Value

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def loads(s: str | bytes | bytearray, **kwargs: Any) -> Value:
    """
    Decodes a JSON document held in memory.

    ``bytes`` are read as UTF-8, with undecodable bytes carried through
    as-is. Keyword arguments build a ``ParseConfig``.
    """
    config = ParseConfig(**kwargs)

    if isinstance(s, str):
        return decode_text(s, config)
    if not isinstance(s, bytes | bytearray):
        raise TypeError(
            f"the JSON object must be str or bytes, not {type(s).__name__}"
        )

    text = text_from_bytes(bytes(s))
    try:
        return decode_text(text, config)
    except JSONDecodeError as e:
        e.byte_pos = UTF8PositionMapper(text).char_to_byte(e.pos)
        raise


def load(fp: IO[str] | IO[bytes], **kwargs: Any) -> Value:
    """Decodes the whole content of a file-like object."""
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), **kwargs)


def decode_file(path: str | os.PathLike[str], **kwargs: Any) -> Value:
    """
    Reads a whole file into memory and decodes it.

    Read failures propagate as ``OSError``.
    """
    data = Path(path).read_bytes()
    logger.debug("read %d bytes from %s", len(data), path)
    return loads(data, **kwargs)


def decode(source: str | bytes | os.PathLike[str], **kwargs: Any) -> Value:
    """
    Decodes text, bytes, or the file at a path.

    A ``str`` is always treated as JSON text; pass a ``pathlib.Path`` (or
    another ``os.PathLike``) to decode a file.
    """
    if isinstance(source, os.PathLike):
        return decode_file(source, **kwargs)
    return loads(source, **kwargs)


def dumps(value: Value | Any, **kwargs: Any) -> str:
    """
    Encodes a value tree as compact JSON text.

    Keyword arguments build an ``EncodeConfig``.
    """
    config = EncodeConfig(**kwargs)
    return encode_document(value, config)


def encode(value: Value | Any, **kwargs: Any) -> bytes:
    """
    Encodes a value tree as UTF-8 JSON bytes.

    Characters that came from undecodable input bytes are written back as
    those bytes; any other lone surrogate raises ``BadTerm``.
    """
    text = dumps(value, **kwargs)
    try:
        return bytes_from_text(text)
    except UnicodeEncodeError as e:
        raise BadTerm("String content is not encodable as UTF-8", value) from e


def dump(value: Value | Any, fp: IO[str], **kwargs: Any) -> None:
    """Encodes a value tree and writes it to a file-like object."""
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(dumps(value, **kwargs))


__all__ = [
    "FALSE",
    "NULL",
    "TRUE",
    "Array",
    "BadKey",
    "BadTerm",
    "BadTopLevel",
    "Boolean",
    "DecimalNumber",
    "DecodeErrorKind",
    "EncodeConfig",
    "EncodeErrorKind",
    "GrammarEngine",
    "IntegerNumber",
    "JSONDecodeError",
    "JSONEncodeError",
    "Key",
    "Null",
    "Object",
    "ParseConfig",
    "RuleStats",
    "StringValue",
    "Value",
    "clear_rule_stats",
    "decode",
    "decode_file",
    "dump",
    "dumps",
    "encode",
    "encode_string",
    "escape_char",
    "format_decimal",
    "get_rule_stats",
    "is_insignificant",
    "load",
    "loads",
    "skip_ws",
]
