"""Character offset to UTF-8 byte offset mapping for decode error reports."""

from __future__ import annotations

import bisect
from typing import Final

ENCODING: Final = "utf-8"
ERRORS: Final = "surrogateescape"


def text_from_bytes(data: bytes) -> str:
    """Decodes bytes without losing any of them.

    Invalid UTF-8 sequences become lone surrogates and are restored by
    ``bytes_from_text``.
    """
    return data.decode(ENCODING, ERRORS)


def bytes_from_text(text: str) -> bytes:
    return text.encode(ENCODING, ERRORS)


class UTF8PositionMapper:
    """Maps character offsets in decoded text back to byte offsets.

    Only the positions of non-ASCII characters are recorded, so ASCII-only
    documents cost nothing beyond one scan.
    """

    def __init__(self, text: str) -> None:
        """Index the multi-byte characters of ``text``.

        Args:
            text: Text produced by ``text_from_bytes``
        """
        self.text: Final = text
        # char offset of each multi-byte character, and the extra bytes
        # accumulated up to and including it
        self._wide_chars: list[int] = []
        self._extra_bytes: list[int] = []

        ascii_limit = 127
        extra = 0
        for char_pos, char in enumerate(text):
            if ord(char) > ascii_limit:
                width = len(char.encode(ENCODING, ERRORS))
                if width > 1:
                    extra += width - 1
                    self._wide_chars.append(char_pos)
                    self._extra_bytes.append(extra)

    @property
    def is_ascii_only(self) -> bool:
        return not self._wide_chars

    def char_to_byte(self, char_pos: int) -> int:
        """Convert a character offset to a byte offset.

        Args:
            char_pos: Character offset into the decoded text

        Returns:
            Byte offset into the original UTF-8 data
        """
        index = bisect.bisect_left(self._wide_chars, char_pos)
        if index == 0:
            return char_pos
        return char_pos + self._extra_bytes[index - 1]
