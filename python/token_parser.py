"""
Forward-only scanner for token/integer text such as "Button A: X+94, Y+34".

Every read skips leading whitespace first. Calls must be issued in the order
the grammar dictates since the cursor never moves backwards.
"""

from __future__ import annotations

__all__ = ["ParseError", "Parser", "parse_unsigned", "parse_byte"]

WHITESPACE = " \t\r\n"
DIGITS = "0123456789"


class ParseError(ValueError):
    """Malformed or unexpected input, with the offending token and position."""

    def __init__(
        self,
        message: str,
        token: str | None = None,
        row: int | None = None,
        column: int | None = None,
        offset: int | None = None,
    ) -> None:
        super().__init__(message)
        self.token = token
        self.row = row
        self.column = column
        self.offset = offset


def _preview(text: str, limit: int = 30) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


class Parser:
    """Cursor over an immutable source string."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.cursor = 0

    @property
    def remaining(self) -> str:
        return self.source[self.cursor:]

    def _skip_whitespace(self) -> None:
        while self.cursor < len(self.source) and self.source[self.cursor] in WHITESPACE:
            self.cursor += 1

    def is_exhausted(self) -> bool:
        self._skip_whitespace()
        return self.cursor == len(self.source)

    def ensure_exhausted(self) -> None:
        if not self.is_exhausted():
            raise ParseError(
                f"Expected end of input\n"
                f"  Offset: {self.cursor}\n"
                f"  Remaining: '{_preview(self.remaining)}'",
                token=self.remaining,
                offset=self.cursor,
            )

    def literal(self, expected: str) -> None:
        """Consume exactly `expected`."""
        self._skip_whitespace()
        if not self.source.startswith(expected, self.cursor):
            raise ParseError(
                f"Expected literal '{expected}'\n"
                f"  Offset: {self.cursor}\n"
                f"  Found: '{_preview(self.remaining)}'",
                token=self.remaining[: len(expected)],
                offset=self.cursor,
            )
        self.cursor += len(expected)

    def unsigned(self) -> int:
        """Read a run of ASCII digits."""
        return self._integer(allow_sign=False)

    def signed(self) -> int:
        """Read a run of ASCII digits with an optional leading '-'."""
        return self._integer(allow_sign=True)

    def _integer(self, allow_sign: bool) -> int:
        self._skip_whitespace()
        start = self.cursor
        end = start
        if allow_sign and end < len(self.source) and self.source[end] == "-":
            end += 1

        digits_start = end
        while end < len(self.source) and self.source[end] in DIGITS:
            end += 1

        if end == digits_start:
            kind = "signed integer" if allow_sign else "unsigned integer"
            raise ParseError(
                f"Expected {kind}\n"
                f"  Offset: {start}\n"
                f"  Found: '{_preview(self.remaining)}'",
                token=self.source[start:end + 1],
                offset=start,
            )

        self.cursor = end
        return int(self.source[start:end])


def parse_unsigned(text: str) -> int:
    """Convert a whole string of ASCII digits, e.g. one cell of a digit grid."""
    if not text or any(c not in DIGITS for c in text):
        raise ParseError(f"Invalid unsigned integer: '{text}'", token=text)
    return int(text)


def parse_byte(text: str) -> int:
    value = parse_unsigned(text)
    if value > 255:
        raise ParseError(f"Value out of byte range (0-255): '{text}'", token=text)
    return value
