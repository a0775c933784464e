"""
Recursive-descent decoder producing the tagged value model.

Each grammar rule receives an explicit position and either returns the
matched value together with the position after it, or ``None`` without
consuming anything. Alternatives are tried in a fixed order and the first
one that matches is committed to; nothing is re-parsed after a later
failure.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ._profiling import profiled_rule
from ._values import FALSE
from ._values import NULL
from ._values import TRUE
from ._values import Array
from ._values import DecimalNumber
from ._values import IntegerNumber
from ._values import Key
from ._values import Object
from ._values import StringValue
from ._values import Value

logger = logging.getLogger(__name__)

type Position = int
type Match[T] = tuple[T, Position] | None

DIGITS = "0123456789"
NONZERO_DIGITS = "123456789"

# Printable 7-bit ASCII is 33..126; everything else separates tokens.
_SPACE_LIMIT = 32
_ASCII_LIMIT = 127

_LITERALS: tuple[tuple[str, Value], ...] = (
    ("true", TRUE),
    ("false", FALSE),
    ("null", NULL),
)


class DecodeErrorKind(Enum):
    """Coarse reason attached to a failed decode."""

    UNEXPECTED_END = "unexpected_end"
    EXPECTED_TOKEN = "expected_token"
    INVALID_NUMBER = "invalid_number"
    TOO_DEEP = "too_deep"
    EXTRA_DATA = "extra_data"


class JSONDecodeError(ValueError):
    """
    Raised when the input does not start with a decodable document.

    ``pos`` is the furthest character offset the grammar reached before
    giving up; ``byte_pos`` is filled in when the input was ``bytes``.
    """

    def __init__(
        self,
        msg: str,
        doc: str = "",
        pos: Position = 0,
        kind: DecodeErrorKind = DecodeErrorKind.EXPECTED_TOKEN,
    ) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos
        self.kind = kind
        self.byte_pos: int | None = None

        super().__init__(f"{msg} at char {pos}")


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures decoding behavior with immutable settings.

    ``object_root`` restricts the document to a top-level object,
    ``allow_trailing_data`` ignores anything after the root value, and
    ``max_depth`` bounds container nesting so adversarial input cannot
    exhaust the interpreter stack. A limit set above what the stack can
    hold still fails as ``TOO_DEEP``.
    """

    object_root: bool = True
    allow_trailing_data: bool = True
    max_depth: int = 128

    def __post_init__(self) -> None:
        if not isinstance(self.object_root, bool):
            raise TypeError("object_root must be a boolean")
        if not isinstance(self.allow_trailing_data, bool):
            raise TypeError("allow_trailing_data must be a boolean")
        if isinstance(self.max_depth, bool) or not isinstance(
            self.max_depth, int
        ):
            raise TypeError("max_depth must be an integer")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")


def is_insignificant(char: str) -> bool:
    """Controls, space, DEL and all non-ASCII characters count as whitespace."""
    code = ord(char)
    return code <= _SPACE_LIMIT or code >= _ASCII_LIMIT


def skip_ws(text: str, pos: Position) -> Position:
    """Returns the position after a possibly empty run of whitespace."""
    length = len(text)
    while pos < length and is_insignificant(text[pos]):
        pos += 1
    return pos


def normalize_exponent_marker(marker: str) -> str:
    """Maps ``e``, ``E``, ``e+``, ``E+`` to ``E+`` and ``e-``, ``E-`` to ``E-``."""
    if marker[1:] == "-":
        return "E-"
    return "E+"


def format_decimal(
    integer: str,
    fraction: str | None,
    marker: str | None = None,
    exponent: str | None = None,
) -> str:
    """
    Builds the exact text of a decimal literal.

    Digit runs are copied verbatim. A literal with an exponent but no
    fraction gets a ``0`` fraction so the result still has a decimal point
    and decodes again.
    """
    text = f"{integer}.{fraction if fraction is not None else '0'}"
    if marker is not None and exponent is not None:
        text += normalize_exponent_marker(marker) + exponent
    return text


class GrammarEngine:
    """
    Ordered-choice recursive-descent grammar over an immutable text.

    The engine keeps no cursor of its own. Its only state is the furthest
    position any rule reached, used to describe a failed decode.
    """

    def __init__(self, text: str, config: ParseConfig) -> None:
        self.text = text
        self.length = len(text)
        self.config = config
        self._furthest: Position = -1
        self._expected: list[str] = []
        self._number_error = False

    def _expect(
        self, pos: Position, what: str, number_error: bool = False
    ) -> None:
        """Records an unmet expectation for diagnostics."""
        if pos > self._furthest:
            self._furthest = pos
            self._expected = [what]
            self._number_error = number_error
        elif pos == self._furthest:
            if what not in self._expected:
                self._expected.append(what)
            self._number_error = self._number_error or number_error

    def _token(self, pos: Position, token: str) -> Position | None:
        if self.text.startswith(token, pos):
            return pos + len(token)
        self._expect(pos, repr(token))
        return None

    @property
    def furthest(self) -> Position:
        """Furthest position any rule has reached so far."""
        return min(max(self._furthest, 0), self.length)

    def failure(self) -> JSONDecodeError:
        """Builds the error describing the furthest point of the last parse."""
        pos = max(self._furthest, 0)
        if pos >= self.length:
            return JSONDecodeError(
                "Unexpected end of input",
                self.text,
                self.length,
                DecodeErrorKind.UNEXPECTED_END,
            )
        if self._number_error:
            kind = DecodeErrorKind.INVALID_NUMBER
        else:
            kind = DecodeErrorKind.EXPECTED_TOKEN
        expected = " or ".join(self._expected) or "value"
        return JSONDecodeError(f"Expecting {expected}", self.text, pos, kind)

    def _check_depth(self, pos: Position, depth: int) -> None:
        if depth > self.config.max_depth:
            raise JSONDecodeError(
                f"Nesting deeper than {self.config.max_depth} levels",
                self.text,
                pos,
                DecodeErrorKind.TOO_DEEP,
            )

    def parse_document(self) -> Value:
        """Decodes the root value, honoring the root and trailing-data settings."""
        if self.config.object_root:
            matched: Match[Value] = self.parse_object(0, 1)
        else:
            matched = self.parse_value(0, 0)

        if matched is None:
            raise self.failure()

        value, end = matched
        if not self.config.allow_trailing_data:
            rest = skip_ws(self.text, end)
            if rest < self.length:
                raise JSONDecodeError(
                    "Extra data",
                    self.text,
                    rest,
                    DecodeErrorKind.EXTRA_DATA,
                )
        return value

    @profiled_rule
    def parse_value(self, pos: Position, depth: int) -> Match[Value]:
        """
        Value rule: string, number, true, false, null, object, array.

        The first alternative that matches wins.
        """
        pos = skip_ws(self.text, pos)

        matched: Match[Value] = self.parse_string(pos)
        if matched is not None:
            return matched

        matched = self.parse_number(pos)
        if matched is not None:
            return matched

        for token, literal in _LITERALS:
            end = self._token(pos, token)
            if end is not None:
                return literal, end

        matched = self.parse_object(pos, depth + 1)
        if matched is not None:
            return matched

        return self.parse_array(pos, depth + 1)

    @profiled_rule
    def parse_object(self, pos: Position, depth: int) -> Match[Object]:
        pos = skip_ws(self.text, pos)
        cursor = self._token(pos, "{")
        if cursor is None:
            return None
        self._check_depth(pos, depth)

        cursor = skip_ws(self.text, cursor)
        if self.text.startswith("}", cursor):
            return Object(()), cursor + 1

        pairs, cursor = self._sequence(cursor, depth, self.parse_pair)
        cursor = skip_ws(self.text, cursor)
        end = self._token(cursor, "}")
        if end is None:
            return None
        return Object(tuple(pairs)), end

    @profiled_rule
    def parse_array(self, pos: Position, depth: int) -> Match[Array]:
        pos = skip_ws(self.text, pos)
        cursor = self._token(pos, "[")
        if cursor is None:
            return None
        self._check_depth(pos, depth)

        cursor = skip_ws(self.text, cursor)
        if self.text.startswith("]", cursor):
            return Array(()), cursor + 1

        items, cursor = self._sequence(cursor, depth, self.parse_value)
        cursor = skip_ws(self.text, cursor)
        end = self._token(cursor, "]")
        if end is None:
            return None
        return Array(tuple(items)), end

    def _sequence[T](
        self,
        pos: Position,
        depth: int,
        entry: Callable[[Position, int], Match[T]],
    ) -> tuple[list[T], Position]:
        """
        Members/elements rule: comma-separated entries, trailing comma allowed.

        A comma after an entry commits to continuing. When no entry follows
        the committed comma, the comma is dropped and the entries read so far
        are returned. Never fails; an empty result leaves the caller to
        reject the missing closing bracket.
        """
        entries: list[T] = []
        cursor = pos
        while True:
            matched = entry(skip_ws(self.text, cursor), depth)
            if matched is None:
                return entries, cursor
            value, after = matched
            entries.append(value)

            separator = skip_ws(self.text, after)
            if self._token(separator, ",") is None:
                return entries, after
            cursor = skip_ws(self.text, separator + 1)

    @profiled_rule
    def parse_pair(
        self, pos: Position, depth: int
    ) -> Match[tuple[Key, Value]]:
        pos = skip_ws(self.text, pos)
        key = self.parse_string(pos)
        if key is None:
            return None
        name, cursor = key

        cursor = skip_ws(self.text, cursor)
        colon = self._token(cursor, ":")
        if colon is None:
            return None

        value = self.parse_value(skip_ws(self.text, colon), depth)
        if value is None:
            return None
        return (name.text, value[0]), value[1]

    @profiled_rule
    def parse_string(self, pos: Position) -> Match[StringValue]:
        """
        String rule: everything up to the next unescaped double quote.

        A backslash and the character after it are taken as a pair and both
        kept, which stops ``\\"`` from ending the string. Nothing is
        unescaped.
        """
        text = self.text
        if not text.startswith('"', pos):
            self._expect(pos, "string")
            return None

        cursor = pos + 1
        while cursor < self.length:
            char = text[cursor]
            if char == '"':
                return StringValue(text[pos + 1 : cursor]), cursor + 1
            if char == "\\" and cursor + 1 < self.length:
                cursor += 2
            else:
                cursor += 1

        self._expect(cursor, "closing '\"'")
        return None

    def _digits(self, pos: Position) -> Position:
        """Returns the position after a possibly empty run of ASCII digits."""
        while pos < self.length and self.text[pos] in DIGITS:
            pos += 1
        return pos

    def _integer(self, pos: Position) -> Position | None:
        """
        Integer rule: optional minus, then a non-zero digit followed by any
        digits, or exactly one digit.
        """
        cursor = pos
        if self.text.startswith("-", cursor):
            cursor += 1
        if cursor < self.length and self.text[cursor] in NONZERO_DIGITS:
            return self._digits(cursor + 1)
        if cursor < self.length and self.text[cursor] in DIGITS:
            return cursor + 1
        self._expect(cursor, "number", number_error=cursor > pos)
        return None

    def _fraction(self, pos: Position) -> Match[str]:
        if not self.text.startswith(".", pos):
            return None
        end = self._digits(pos + 1)
        if end == pos + 1:
            self._expect(end, "fraction digits", number_error=True)
            return None
        return self.text[pos + 1 : end], end

    def _exponent(self, pos: Position) -> Match[tuple[str, str]]:
        if pos >= self.length or self.text[pos] not in "eE":
            return None
        cursor = pos + 1
        if cursor < self.length and self.text[cursor] in "+-":
            cursor += 1
        marker = self.text[pos:cursor]

        end = self._digits(cursor)
        if end == cursor:
            self._expect(end, "exponent digits", number_error=True)
            return None
        return (marker, self.text[cursor:end]), end

    @profiled_rule
    def parse_number(
        self, pos: Position
    ) -> Match[IntegerNumber | DecimalNumber]:
        """
        Number rule, longest form first: integer with fraction and exponent,
        with fraction, with exponent, then a bare integer.
        """
        integer_end = self._integer(pos)
        if integer_end is None:
            return None
        integer = self.text[pos:integer_end]

        cursor = integer_end
        fraction: str | None = None
        fraction_match = self._fraction(cursor)
        if fraction_match is not None:
            fraction, cursor = fraction_match

        exponent_match = self._exponent(cursor)
        if exponent_match is not None:
            (marker, exponent), cursor = exponent_match
            text = format_decimal(integer, fraction, marker, exponent)
            return DecimalNumber(text), cursor

        if fraction is not None:
            return DecimalNumber(format_decimal(integer, fraction)), cursor

        try:
            return IntegerNumber(int(integer)), cursor
        except ValueError as e:
            # int() refuses literals beyond sys.get_int_max_str_digits()
            raise JSONDecodeError(
                "Number too large",
                self.text,
                pos,
                DecodeErrorKind.INVALID_NUMBER,
            ) from e


def decode_text(text: str, config: ParseConfig) -> Value:
    """Decodes a whole document held in memory."""
    engine = GrammarEngine(text, config)
    try:
        return engine.parse_document()
    except RecursionError as e:
        # max_depth allowed more nesting than the interpreter stack holds
        logger.debug("decode ran out of stack at char %d", engine.furthest)
        raise JSONDecodeError(
            "Nesting too deep for the interpreter stack",
            text,
            engine.furthest,
            DecodeErrorKind.TOO_DEEP,
        ) from e
    except JSONDecodeError as e:
        logger.debug("decode failed (%s) at char %d", e.kind.value, e.pos)
        raise
