# json_errors.py
# Error taxonomy for the strict JSON decoder
#
# =============================================================================
#  ERROR MODEL
# =============================================================================
#
# Every failure is a SyntaxError subclass so callers that only care about
# "bad JSON" can catch one type, while callers that want detail can branch
# on the concrete class. Each error carries the Position of the offending
# character or token [RFC 8259; hypertextbookshop.com, Parser Error Handling
# and Recovery].
#
# Lexer errors:  UnterminatedString, InvalidEscape, ControlCharInString,
#                UnexpectedCharacter
# Parser errors: UnexpectedToken (ObjectKeyNotString, TrailingContent),
#                DepthLimitExceeded, DuplicateKey
# =============================================================================

from typing import NamedTuple


# ---------------------------------------------------------------------------
# SOURCE POSITION
# ---------------------------------------------------------------------------
class Position(NamedTuple):
    """
    Immutable source location: 1-based line and column, 0-based offset.
    """
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"line {self.line} column {self.column} (offset {self.offset})"


# ---------------------------------------------------------------------------
# BASE ERROR
# ---------------------------------------------------------------------------
class JSONSyntaxError(SyntaxError):
    """
    Base class for every decode failure.

    ``reason`` is the bare message; ``str(exc)`` appends the location.
    SyntaxError's own lineno/offset stay unset so str() is not rewritten
    into the Python-source "(line N)" form.
    """
    def __init__(self, reason: str, pos: Position):
        super().__init__(f"{reason} at {pos}")
        self.reason = reason
        self.pos = pos

    @property
    def line(self) -> int:
        return self.pos.line

    @property
    def column(self) -> int:
        return self.pos.column

    def __reduce__(self):
        return self.__class__, (self.reason, self.pos)


# ---------------------------------------------------------------------------
# LEXER ERRORS
# ---------------------------------------------------------------------------
class UnterminatedString(JSONSyntaxError):
    """End of input reached while a string literal was open."""


class InvalidEscape(JSONSyntaxError):
    """Unknown escape letter, malformed \\uXXXX, or unpaired surrogate."""


class ControlCharInString(JSONSyntaxError):
    """Raw code point below 0x20 inside a string literal."""


class UnexpectedCharacter(JSONSyntaxError):
    """Character that starts no lexical production."""


# ---------------------------------------------------------------------------
# PARSER ERRORS
# ---------------------------------------------------------------------------
def describe_kind(kind: str) -> str:
    # Punctuation kinds are the character itself; quote them so messages read
    # "expected ':'" rather than "expected :".
    return kind if kind.isalpha() else f"'{kind}'"


class UnexpectedToken(JSONSyntaxError):
    """
    Lookahead token does not fit the grammar rule being parsed.

    Covers mismatched closing delimiters and premature EOF.
    """
    def __init__(self, expected: str, token, reason: str = None):
        if reason is None:
            reason = f"unexpected token {describe_kind(token.kind)} - expected {expected}"
        super().__init__(reason, token.pos)
        self.expected = expected
        self.token = token

    def __reduce__(self):
        return self.__class__, (self.expected, self.token, self.reason)


class ObjectKeyNotString(UnexpectedToken):
    """Object entry key position held a non-string token."""
    def __init__(self, token, reason: str = None):
        if reason is None:
            reason = f"object key must be a string - got {describe_kind(token.kind)}"
        super().__init__("STRING", token, reason)

    def __reduce__(self):
        return self.__class__, (self.token, self.reason)


class TrailingContent(UnexpectedToken):
    """A complete value was parsed but tokens remain before EOF."""
    def __init__(self, token, reason: str = None):
        if reason is None:
            reason = f"extra data after root value - got {describe_kind(token.kind)}"
        super().__init__("EOF", token, reason)

    def __reduce__(self):
        return self.__class__, (self.token, self.reason)


class DepthLimitExceeded(JSONSyntaxError):
    """Container nesting went past the configured max_depth."""


class DuplicateKey(JSONSyntaxError):
    """Object key repeated while duplicates are disallowed."""
