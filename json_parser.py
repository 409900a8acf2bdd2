# json_parser.py
# Hand-rolled JSON parser and display printer.
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT OVER CHARACTERS
# =============================================================================
#
# One function per grammar rule, one character of lookahead, no token
# buffer. Each rule function starts on the first character of its construct
# and returns with the cursor on the first character after it.
#
#   object := '{' ( member (',' member)* )? '}'
#   member := string ':' value
#   array  := '[' ( value (',' value)* )? ']'
#   value  := object | array | string | number | 'true' | 'false' | 'null'
#
# Whitespace (space, tab, newline, carriage return) is skipped before every
# token. The first violation raises ParseError and nothing is recovered.
#
# Numbers come back as decimal.Decimal built from the exact literal text.
# Objects come back as dicts: a repeated key keeps its first position and
# its last value unless allow_dup is off.
#
# Depth guard defaults to 256 so deeply nested input surfaces as a
# ParseError instead of a RecursionError.
# =============================================================================

import argparse
import logging
import sys
from typing import Any, Dict, List, NamedTuple, Optional

from lexer import DIGITS, Cursor, ParseError
from pretty import pretty_print

log = logging.getLogger(__name__)

__all__ = ["parse", "try_parse", "ParseError", "ParseResult", "ParseOptions", "pretty_print"]

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 256

# Shown when the CLI is run without an input file
SAMPLE_DOCUMENT = (
    '{ "name": "John Doe", "occupation": "Developer", '
    '"bio": "John is a \\"senior\\" developer with 10 years of experience. '
    'He lives in San Francisco and loves coding in Java. '
    'His favorite escape sequence is \\\\\\ for backslashes." }'
)

EXIT_OK          = 0
EXIT_PARSE_ERROR = 1
EXIT_IO_ERROR    = 2


class ParseOptions(NamedTuple):
    strict: bool = False
    allow_dup: bool = True
    standard_escapes: bool = False
    max_depth: int = DEPTH_LIMIT_DEFAULT


class ParseResult(NamedTuple):
    """Outcome of try_parse: either a value or the ParseError that stopped it."""
    value: Any = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

# ---------------------------------------------------------------------------
# CORE VALUE PARSER
# ---------------------------------------------------------------------------
def _parse_value(cur: Cursor, depth: int, opts: ParseOptions):
    """
    Dispatch on the first character of the value.
    """
    cur.skip_whitespace()
    ch = cur.peek()

    if ch == "{":
        return _parse_object(cur, depth + 1, opts)
    if ch == "[":
        return _parse_array(cur, depth + 1, opts)
    if ch == '"':
        return cur.read_string(opts.standard_escapes)
    if ch == "":
        raise ParseError("Unexpected end of input: expected a value", cur.pos)
    if ch == "-" or ch in DIGITS:
        return cur.read_number()
    return cur.read_literal()


def _enter(cur: Cursor, depth: int, opts: ParseOptions) -> None:
    if depth > opts.max_depth:
        raise ParseError(f"Depth limit {opts.max_depth} exceeded at position {cur.pos}", cur.pos)
    cur.advance()

# ---------------------------------------------------------------------------
# ARRAY PARSER
# ---------------------------------------------------------------------------
def _parse_array(cur: Cursor, depth: int, opts: ParseOptions) -> List[Any]:
    """
    Parse a JSON array. The cursor is on the opening bracket.
    """
    start = cur.pos
    _enter(cur, depth, opts)
    items: List[Any] = []

    cur.skip_whitespace()
    if cur.peek() == "]":
        cur.advance()
        return items

    while True:
        items.append(_parse_value(cur, depth, opts))
        cur.skip_whitespace()
        ch = cur.peek()
        if ch == "]":
            cur.advance()
            return items
        if ch == ",":
            cur.advance()
            continue
        if ch == "":
            raise ParseError(f"Unexpected end of input: array starting at position {start} not closed", cur.pos)
        raise ParseError(f"Expected ',' or ']' at position {cur.pos}, found {ch!r}", cur.pos)

# ---------------------------------------------------------------------------
# OBJECT PARSER
# ---------------------------------------------------------------------------
def _parse_object(cur: Cursor, depth: int, opts: ParseOptions) -> Dict[str, Any]:
    """
    Parse a JSON object. The cursor is on the opening brace.

    Keys must be quoted strings; a bare word where a key belongs is an
    error. Duplicate keys overwrite in place unless opts.allow_dup is off.
    """
    start = cur.pos
    _enter(cur, depth, opts)
    obj: Dict[str, Any] = {}

    cur.skip_whitespace()
    if cur.peek() == "}":
        cur.advance()
        return obj

    while True:
        cur.skip_whitespace()
        ch = cur.peek()
        if ch == "":
            raise ParseError(f"Unexpected end of input: object starting at position {start} not closed", cur.pos)
        if ch != '"':
            raise ParseError(f"Expected '\"' at position {cur.pos} to start an object key, found {ch!r}", cur.pos)
        key_pos = cur.pos
        key = cur.read_string(opts.standard_escapes)
        cur.expect(":")
        if key in obj:
            if not opts.allow_dup:
                raise ParseError(f"Duplicate key {key!r} at position {key_pos}", key_pos)
            log.debug("duplicate key %r at position %d overwrites earlier value", key, key_pos)
        obj[key] = _parse_value(cur, depth, opts)

        cur.skip_whitespace()
        ch = cur.peek()
        if ch == "}":
            cur.advance()
            return obj
        if ch == ",":
            cur.advance()
            continue
        if ch == "":
            raise ParseError(f"Unexpected end of input: object starting at position {start} not closed", cur.pos)
        raise ParseError(f"Expected ',' or '}}' at position {cur.pos}, found {ch!r}", cur.pos)

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse(
    text: str,
    *,
    strict: bool = False,
    allow_dup: bool = True,
    standard_escapes: bool = False,
    max_depth: int = DEPTH_LIMIT_DEFAULT,
):
    """
    Parse JSON text into Python structures.

    Returns dict, list, str, Decimal, bool or None. Raises ParseError at the
    first syntax violation.

    Anything after the first complete value is ignored unless ``strict`` is
    set, in which case it is rejected. ``allow_dup=False`` rejects repeated
    object keys. ``standard_escapes`` decodes the full RFC 8259 escape set
    instead of copying the character after a backslash verbatim.
    """
    if not isinstance(text, str):
        raise TypeError(f"JSON text must be str, not {type(text).__name__}")

    opts = ParseOptions(strict, allow_dup, standard_escapes, max_depth)
    cur = Cursor(text)
    try:
        result = _parse_value(cur, 0, opts)
    except RecursionError:
        # max_depth set above what the interpreter stack allows
        raise ParseError(f"Depth limit exceeded at position {cur.pos}: nesting too deep", cur.pos) from None

    cur.skip_whitespace()
    if not cur.at_end():
        if opts.strict:
            raise ParseError(f"Extra data after root value at position {cur.pos}", cur.pos)
        log.debug("ignoring %d characters after root value at position %d", cur.end - cur.pos, cur.pos)
    return result


def try_parse(text: str, **options) -> ParseResult:
    """
    Like parse, but report failure as a value rather than raising.

    Only ParseError is converted; a non-str input still raises TypeError.
    """
    try:
        return ParseResult(value=parse(text, **options))
    except ParseError as exc:
        return ParseResult(error=exc)

# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _read_input(path: Optional[str]) -> str:
    if path is None:
        return SAMPLE_DOCUMENT
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as fh:
        return fh.read()


def _cli(argv: List[str]) -> int:
    """
    Parse a JSON document and print its display rendering.

    Exit codes: 0 on success, 1 on ParseError, 2 when the input file
    cannot be read.
    """
    ap = argparse.ArgumentParser(description="Parse JSON and pretty-print the value tree")
    ap.add_argument("file", nargs="?", help="JSON file to parse ('-' for stdin, omit for the built-in sample)")
    ap.add_argument("--check", action="store_true", help="print OK instead of the rendering")
    ap.add_argument("--strict", action="store_true", help="reject data after the root value")
    ap.add_argument("--reject-dup-keys", action="store_true", help="reject repeated object keys")
    ap.add_argument("--standard-escapes", action="store_true", help="decode the full JSON escape set")
    ap.add_argument("--max-depth", type=int, default=DEPTH_LIMIT_DEFAULT)
    ap.add_argument("--verbose", action="store_true", help="log debug output to stderr")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        data = _read_input(args.file)
    except (OSError, UnicodeDecodeError) as exc:
        reason = getattr(exc, "strerror", None) or exc
        print(f"error: cannot read {args.file}: {reason}", file=sys.stderr)
        return EXIT_IO_ERROR
    log.debug("read %d characters from %s", len(data), args.file or "<sample>")

    try:
        value = parse(
            data,
            strict=args.strict,
            allow_dup=not args.reject_dup_keys,
            standard_escapes=args.standard_escapes,
            max_depth=args.max_depth,
        )
    except ParseError as exc:
        print(f"ParseError: {exc}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    print("OK" if args.check else pretty_print(value))
    return EXIT_OK


def main() -> int:
    return _cli(sys.argv[1:])

# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(main())
