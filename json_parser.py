# json_parser.py
# Strict JSON decoder: recursive-descent parser over json_lexer tokens
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT FOR STRUCTURE
# =============================================================================
#
# This parser uses a classic recursive-descent strategy for JSON, which is
# expression-free and thus well-suited for direct, predictable control flow
# without an expression parser layer [geeksforgeeks.org, Recursive Descent Parser;
# cs.rochester.edu, Recursive-Descent Parsing].
#
# Design Rationale:
# 1. JSON grammar is LL(1): one procedure per nonterminal (value, object,
#    array), each choosing its branch from a single token of lookahead
#    [online.stanford.edu, Compilers I].
# 2. Every token is consumed through _expect(), so each grammar rule reads
#    as a sequence of _expect() calls and recursive _parse_value() calls.
# 3. LookAhead wraps the lazy token stream from json_lexer.scan(); the
#    scanner runs only as far ahead as the parser has asked.
#
# Numbers stay as raw lexemes until the parser converts them, keeping the
# integer/real distinction in one place.
#
# Depth guard defaults to 19 (mirroring JSON_checker) and trips when a
# container would open past it [RFC 8259; hypertextbookshop.com,
# Parser Error Handling and Recovery].
#
# =============================================================================
#  REFERENCES
# =============================================================================
# [1] geeksforgeeks.org - Recursive Descent Parser
# [2] cs.rochester.edu - Recursive-Descent Parsing
# [3] craftinginterpreters.com - Scanning
# [4] RFC 8259 - The JavaScript Object Notation (JSON) standard
# [5] hypertextbookshop.com - Parser Error Handling and Recovery
# =============================================================================

import logging
import math
from typing import Dict, Iterable, List, Union

from json_errors import (
    ControlCharInString,
    DepthLimitExceeded,
    DuplicateKey,
    InvalidEscape,
    JSONSyntaxError,
    ObjectKeyNotString,
    Position,
    TrailingContent,
    UnexpectedCharacter,
    UnexpectedToken,
    UnterminatedString,
    describe_kind,
)
from json_lexer import (
    COLON,
    COMMA,
    EOF,
    FALSE,
    LBRACE,
    LBRACKET,
    NULL,
    NUMBER,
    RBRACE,
    RBRACKET,
    STRING,
    TRUE,
    AnyToken,
    scan,
)

logger = logging.getLogger(__name__)

__all__ = [
    "DEPTH_LIMIT_DEFAULT",
    "JSONValue",
    "LookAhead",
    "decode",
    "parse",
    "scan",
    "Position",
    "JSONSyntaxError",
    "UnterminatedString",
    "InvalidEscape",
    "ControlCharInString",
    "UnexpectedCharacter",
    "UnexpectedToken",
    "ObjectKeyNotString",
    "TrailingContent",
    "DepthLimitExceeded",
    "DuplicateKey",
]

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 19   # Matches JSON_checker - stops unbounded nesting attacks

# ---------------------------------------------------------------------------
# VALUE MODEL
# ---------------------------------------------------------------------------
# int for integral literals, float for fractional/exponential ones.
JSONValue = Union[None, bool, int, float, str, List["JSONValue"], Dict[str, "JSONValue"]]

_LEAF_KINDS = {STRING, NUMBER, TRUE, FALSE, NULL}
_KEYWORD_VALUES = {TRUE: True, FALSE: False, NULL: None}

# ---------------------------------------------------------------------------
# LOOKAHEAD RING
# ---------------------------------------------------------------------------
class LookAhead:
    """
    One-slot pushback iterator.

    This implements minimal lookahead required for LL(1) parsing without
    incurring full buffering cost. Matches the "single token of lookahead"
    principle in top-down parsing theory [geeksforgeeks.org, Top Down Parsing].
    """
    def __init__(self, iterable: Iterable[AnyToken]):
        self._iter = iter(iterable)
        self._buf: List[AnyToken] = []

    def __iter__(self):
        return self

    def __next__(self) -> AnyToken:
        if self._buf:
            return self._buf.pop()
        return next(self._iter)

    def peek(self) -> AnyToken:
        if not self._buf:
            self._buf.append(next(self._iter))
        return self._buf[-1]

# ---------------------------------------------------------------------------
# PARSER UTILITY
# ---------------------------------------------------------------------------
def _expect(tokens: LookAhead, kind: str) -> AnyToken:
    """
    Consume the lookahead if it is ``kind``; otherwise raise UnexpectedToken
    naming the expected and actual kinds at the lookahead's position.
    """
    tok = tokens.peek()
    if tok.kind != kind:
        raise UnexpectedToken(describe_kind(kind), tok)
    return next(tokens)


def _to_number(lexeme: str) -> Union[int, float]:
    """
    Convert a NUMBER lexeme: int when it has no fraction or exponent,
    float otherwise. Conversion failures are internal errors, not
    user-facing JSONSyntaxErrors.
    """
    shown = lexeme if len(lexeme) <= 40 else f"{lexeme[:40]}... ({len(lexeme)} chars)"
    if "." in lexeme or "e" in lexeme or "E" in lexeme:
        try:
            value = float(lexeme)
        except ValueError as exc:
            raise AssertionError(f"number lexeme {shown!r} escaped the lexer grammar") from exc
        # Infinity is not a JSON value
        if math.isinf(value):
            raise AssertionError(f"number {shown!r} overflows a float")
        return value
    try:
        return int(lexeme)
    except ValueError as exc:
        # Only the interpreter's int digit limit can reject a grammar-valid integer.
        raise AssertionError(
            f"integer {shown!r} exceeds the int conversion limit: {exc}"
        ) from exc

# ---------------------------------------------------------------------------
# CORE VALUE PARSER
# ---------------------------------------------------------------------------
def _parse_value(tokens: LookAhead, depth: int, max_depth: int, allow_dup: bool) -> JSONValue:
    """
    Dispatch on the lookahead kind. Leaves are consumed here; containers
    are handed to their own rule one level deeper.
    """
    tok = tokens.peek()
    kind = tok.kind

    if kind in _LEAF_KINDS:
        _expect(tokens, kind)
        if kind == STRING:
            return tok.text
        if kind == NUMBER:
            return _to_number(tok.lexeme)
        return _KEYWORD_VALUES[kind]
    if kind == LBRACE:
        return _parse_object(tokens, depth + 1, max_depth, allow_dup)
    if kind == LBRACKET:
        return _parse_array(tokens, depth + 1, max_depth, allow_dup)

    raise UnexpectedToken("a value", tok)


def _check_depth(tok: AnyToken, depth: int, max_depth: int):
    if depth > max_depth:
        raise DepthLimitExceeded(
            f"nesting depth {depth} exceeds limit of {max_depth}", tok.pos
        )

# ---------------------------------------------------------------------------
# ARRAY PARSER
# ---------------------------------------------------------------------------
def _parse_array(tokens: LookAhead, depth: int, max_depth: int, allow_dup: bool) -> List[JSONValue]:
    """
    Parse a JSON array: '[' then zero or more comma-separated values then ']'.

    Elements keep source order; a ',' directly before ']' is rejected
    because the next _parse_value() sees ']' instead of a value.
    """
    _check_depth(_expect(tokens, LBRACKET), depth, max_depth)
    items: List[JSONValue] = []
    if tokens.peek().kind == RBRACKET:
        _expect(tokens, RBRACKET)
        return items

    while True:
        items.append(_parse_value(tokens, depth, max_depth, allow_dup))
        if tokens.peek().kind == RBRACKET:
            _expect(tokens, RBRACKET)
            return items
        _expect(tokens, COMMA)

# ---------------------------------------------------------------------------
# OBJECT PARSER
# ---------------------------------------------------------------------------
def _parse_object(tokens: LookAhead, depth: int, max_depth: int, allow_dup: bool) -> Dict[str, JSONValue]:
    """
    Parse a JSON object. Applies the duplicate key policy at parse time.

    With allow_dup the later value wins, as with an ordinary dict insert;
    without it the repeated key is reported where it appears.
    """
    _check_depth(_expect(tokens, LBRACE), depth, max_depth)
    obj: Dict[str, JSONValue] = {}
    if tokens.peek().kind == RBRACE:
        _expect(tokens, RBRACE)
        return obj

    while True:
        key_tok = tokens.peek()
        if key_tok.kind != STRING:
            raise ObjectKeyNotString(key_tok)
        _expect(tokens, STRING)
        key = key_tok.text
        if not allow_dup and key in obj:
            raise DuplicateKey(f"duplicate key {key!r}", key_tok.pos)
        _expect(tokens, COLON)
        obj[key] = _parse_value(tokens, depth, max_depth, allow_dup)
        if tokens.peek().kind == RBRACE:
            _expect(tokens, RBRACE)
            return obj
        _expect(tokens, COMMA)

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse(
    tokens: Iterable[AnyToken],
    *,
    max_depth: int = DEPTH_LIMIT_DEFAULT,
    allow_dup: bool = True,
    require_container: bool = False,
) -> JSONValue:
    """
    Build a value tree from a token stream ending in EOF.

    Exactly one value must precede EOF; anything else after it is
    TrailingContent. ``require_container`` restores the RFC 4627 rule that
    the root be an object or array.
    """
    stream = tokens if isinstance(tokens, LookAhead) else LookAhead(tokens)
    if require_container:
        first = stream.peek()
        if first.kind not in (LBRACE, LBRACKET):
            raise UnexpectedToken(
                "'{' or '['", first,
                f"payload must be object or array at root - got {describe_kind(first.kind)}",
            )

    result = _parse_value(stream, 0, max_depth, allow_dup)
    last = stream.peek()
    if last.kind != EOF:
        raise TrailingContent(last)
    _expect(stream, EOF)
    return result


def decode(
    text: str,
    *,
    max_depth: int = DEPTH_LIMIT_DEFAULT,
    allow_dup: bool = True,
    require_container: bool = False,
) -> JSONValue:
    """
    Decode strict JSON text into Python values.

    Raises a JSONSyntaxError subclass, positioned at the first violation,
    if the text is not a single well-formed JSON value.

    Nesting is capped at ``max_depth`` containers (DEPTH_LIMIT_DEFAULT = 19,
    the JSON_checker limit), so otherwise valid documents nested deeper
    raise DepthLimitExceeded unless a larger ``max_depth`` is passed. Keep
    it to a few hundred at most; each level costs two Python stack frames.
    """
    if not isinstance(text, str):
        raise TypeError(f"JSON text must be str, not {type(text).__name__}")
    try:
        result = parse(
            scan(text),
            max_depth=max_depth,
            allow_dup=allow_dup,
            require_container=require_container,
        )
    except JSONSyntaxError as exc:
        logger.debug("decode failed: %s: %s", type(exc).__name__, exc)
        raise
    logger.debug("decoded %d chars into %s", len(text), type(result).__name__)
    return result
