# lexer.py
# Character-level scanning for the JSON parser.
#
# The Cursor owns the input text and one read position, nothing else. Each
# reader starts on the first character of its token and leaves the position
# on the first character after it. Whitespace is skipped by the caller (the
# grammar layer) before every token.

from decimal import Decimal, InvalidOperation
from typing import List, Optional

# ---------------------------------------------------------------------------
# CHARACTER CLASSES
# ---------------------------------------------------------------------------
WHITESPACE = " \t\n\r"
DIGITS     = "0123456789"
HEX_DIGITS = "0123456789abcdefABCDEF"

LITERALS = {"true": True, "false": False, "null": None}

# RFC 8259 single-character escapes, used when standard_escapes is on
_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# ---------------------------------------------------------------------------
# ERROR TYPE
# ---------------------------------------------------------------------------
class ParseError(SyntaxError):
    """
    The single error kind raised for malformed JSON text.

    Subclasses SyntaxError so callers written against a plain SyntaxError
    keep working. ``position`` is the character index where scanning
    stopped, or None when the failure is not tied to one place.
    """
    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.position = position

    def __str__(self):
        return self.msg


def _describe(ch: str) -> str:
    return "end of input" if ch == "" else repr(ch)

# ---------------------------------------------------------------------------
# CURSOR
# ---------------------------------------------------------------------------
class Cursor:
    """Read position over an in-memory JSON text."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.end = len(text)

    def peek(self) -> str:
        if self.pos >= self.end:
            return ""
        return self.text[self.pos]

    def at_end(self) -> bool:
        return self.pos >= self.end

    def advance(self) -> None:
        self.pos += 1

    def skip_whitespace(self) -> None:
        while self.pos < self.end and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def expect(self, ch: str) -> None:
        """Skip whitespace, then consume ``ch`` or raise a ParseError."""
        self.skip_whitespace()
        if self.pos >= self.end:
            raise ParseError(f"Unexpected end of input: expected '{ch}'", self.pos)
        found = self.text[self.pos]
        if found != ch:
            raise ParseError(f"Expected '{ch}' at position {self.pos}, found {found!r}", self.pos)
        self.pos += 1

    # -----------------------------------------------------------------------
    # STRINGS
    # -----------------------------------------------------------------------
    def read_string(self, standard_escapes: bool = False) -> str:
        """
        Read a quoted string and return its unescaped text.

        By default a backslash is dropped and the character after it copied
        literally, so ``\\"`` gives ``"`` and ``\\\\`` gives ``\\``. With
        ``standard_escapes`` the full RFC 8259 escape set is decoded and any
        other escape is rejected.
        """
        start = self.pos
        if self.peek() != '"':
            raise ParseError(f"Expected '\"' at position {start}, found {_describe(self.peek())}", start)
        self.pos += 1

        chunks: List[str] = []
        text, end = self.text, self.end
        while True:
            if self.pos >= end:
                raise ParseError(f"Unterminated string starting at position {start}", start)
            ch = text[self.pos]
            if ch == '"':
                self.pos += 1
                return "".join(chunks)
            if ch == "\\":
                if self.pos + 1 >= end:
                    raise ParseError(f"Unterminated string starting at position {start}", start)
                if standard_escapes:
                    chunks.append(self._read_standard_escape())
                else:
                    chunks.append(text[self.pos + 1])
                    self.pos += 2
                continue
            chunks.append(ch)
            self.pos += 1

    def _read_standard_escape(self) -> str:
        # Cursor sits on the backslash; at least one character follows it.
        at = self.pos
        esc = self.text[at + 1]
        if esc in _SIMPLE_ESCAPES:
            self.pos += 2
            return _SIMPLE_ESCAPES[esc]
        if esc != "u":
            raise ParseError(f"invalid escape \\{esc} at position {at}", at)

        code = self._read_hex4(at)
        if 0xDC00 <= code <= 0xDFFF:
            raise ParseError(f"unpaired surrogate \\u{code:04x} at position {at}", at)
        if 0xD800 <= code <= 0xDBFF:
            low_at = self.pos
            if self.text[low_at:low_at + 2] != "\\u":
                raise ParseError(f"unpaired surrogate \\u{code:04x} at position {at}", at)
            low = self._read_hex4(low_at)
            if not 0xDC00 <= low <= 0xDFFF:
                raise ParseError(f"unpaired surrogate \\u{code:04x} at position {at}", at)
            code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
        return chr(code)

    def _read_hex4(self, at: int) -> int:
        hexpart = self.text[at + 2:at + 6]
        if len(hexpart) < 4:
            raise ParseError(f"short unicode escape at position {at}", at)
        if not all(c in HEX_DIGITS for c in hexpart):
            raise ParseError(f"invalid hex escape \\u{hexpart} at position {at}", at)
        self.pos = at + 6
        return int(hexpart, 16)

    # -----------------------------------------------------------------------
    # NUMBERS
    # -----------------------------------------------------------------------
    def read_number(self) -> Decimal:
        """
        Accumulate the exact number literal and convert it to Decimal.

        The literal never passes through float, so integers beyond 64 bits
        and decimal fractions keep every digit.
        """
        start = self.pos
        if self.peek() == "-":
            self.pos += 1
        self._read_digits(start, "a digit")
        if self.peek() == ".":
            self.pos += 1
            self._read_digits(start, "a digit after '.'")
        if self.peek() in ("e", "E"):
            self.pos += 1
            if self.peek() in ("+", "-"):
                self.pos += 1
            self._read_digits(start, "an exponent digit")

        literal = self.text[start:self.pos]
        try:
            return Decimal(literal)
        except InvalidOperation:
            raise ParseError(f"Invalid number format at position {start}: {literal!r} is out of range", start) from None

    def _read_digits(self, start: int, what: str) -> None:
        first = self.pos
        while self.pos < self.end and self.text[self.pos] in DIGITS:
            self.pos += 1
        if self.pos == first:
            raise ParseError(
                f"Invalid number format at position {start}: expected {what} "
                f"at position {self.pos}, found {_describe(self.peek())}",
                self.pos,
            )

    # -----------------------------------------------------------------------
    # KEYWORDS
    # -----------------------------------------------------------------------
    def read_literal(self):
        """Match ``true``, ``false`` or ``null`` exactly and return its value."""
        start = self.pos
        for word, value in LITERALS.items():
            if self.text.startswith(word, start):
                self.pos += len(word)
                return value
        rest = self.text[start:]
        if rest and any(word.startswith(rest) for word in LITERALS):
            raise ParseError(f"Unexpected end of input in literal {rest!r} at position {start}", self.end)
        raise ParseError(f"Unexpected character {_describe(self.peek())} at position {start}: expected a value", start)
