# json_lexer.py
# Position-tracking scanner for strict JSON text
#
# =============================================================================
#  LEXER IMPLEMENTATION: COMPILED REGEX PLUS HAND-WRITTEN STRING SCANNER
# =============================================================================
#
# Structural characters, whitespace, numbers and keywords are classified by a
# single compiled regex with named groups, matched anchored at the cursor
# [craftinginterpreters.com, Scanning]. Strings get their own loop because
# every failure inside them (bad escape, raw control character, missing
# closing quote) must be reported at the exact character, which a single
# string regex cannot do.
#
# Cursor state (offset, line, start of current line) lives on the Scanner
# instance. Columns are derived as offset - line_start + 1, so the only
# places that move the line counter are whitespace runs; strings cannot
# contain a raw newline.
# =============================================================================

import re
from typing import Iterator, NamedTuple, Tuple, Union

from json_errors import (
    ControlCharInString,
    InvalidEscape,
    Position,
    UnexpectedCharacter,
    UnterminatedString,
)

# ---------------------------------------------------------------------------
# TOKEN KINDS
# ---------------------------------------------------------------------------
LBRACE   = "{"
RBRACE   = "}"
LBRACKET = "["
RBRACKET = "]"
COMMA    = ","
COLON    = ":"
STRING   = "STRING"
NUMBER   = "NUMBER"
TRUE     = "TRUE"
FALSE    = "FALSE"
NULL     = "NULL"
EOF      = "EOF"

# ---------------------------------------------------------------------------
# REGEX BLUEPRINT
# ---------------------------------------------------------------------------
# ASCII digits only: \d would also accept other Unicode decimal digits.
_WHITESPACE = r"[ \t\r\n]+"
_NUMBER     = r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?"
_LITERAL    = r"(?:true|false|null)(?![A-Za-z0-9_])"

_TOKEN_RE = re.compile(
    rf"(?P<WHITESPACE>{_WHITESPACE})|"
    r"(?P<PUNCT>[{}\[\],:])|"
    rf"(?P<NUMBER>{_NUMBER})|"
    rf"(?P<LITERAL>{_LITERAL})"
)

# Run of ordinary string characters, then whatever stopped the run.
_STRING_CHUNK_RE = re.compile(r'([^"\\\x00-\x1f]*)(["\\\x00-\x1f])?')
_HEX4_RE         = re.compile(r"[0-9A-Fa-f]{4}")
_WORD_RE         = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_ESCAPES = {
    '"': '"', "\\": "\\", "/": "/",
    "b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t",
}

_KEYWORDS = {"true": TRUE, "false": FALSE, "null": NULL}

# ---------------------------------------------------------------------------
# TOKEN RECORDS
# ---------------------------------------------------------------------------
class Token(NamedTuple):
    """Payload-free token: punctuation, keywords and EOF."""
    kind: str
    pos: Position


class StringToken(NamedTuple):
    """STRING token; ``text`` has every escape resolved."""
    kind: str
    text: str
    pos: Position


class NumberToken(NamedTuple):
    """NUMBER token; ``lexeme`` is the raw source text, converted by the parser."""
    kind: str
    lexeme: str
    pos: Position


AnyToken = Union[Token, StringToken, NumberToken]

# ---------------------------------------------------------------------------
# SCANNER
# ---------------------------------------------------------------------------
class Scanner:
    """
    Single-pass token iterator over one input text.

    Not restartable: once exhausted it stays exhausted. Scan the text again
    with a new Scanner.
    """
    def __init__(self, text: str):
        self._text = text
        self._offset = 0
        self._line = 1
        self._line_start = 0
        self._tokens = self._scan()

    def __iter__(self):
        return self

    def __next__(self) -> AnyToken:
        return next(self._tokens)

    def _position(self, offset: int) -> Position:
        return Position(self._line, offset - self._line_start + 1, offset)

    def _scan(self) -> Iterator[AnyToken]:
        text = self._text
        end = len(text)
        match = _TOKEN_RE.match

        while self._offset < end:
            start = self._offset
            if text[start] == '"':
                decoded, self._offset = self._scan_string(start)
                yield StringToken(STRING, decoded, self._position(start))
                continue

            m = match(text, start)
            if m is None:
                raise self._unexpected_character(start)
            kind = m.lastgroup
            lexeme = m.group()
            self._offset = m.end()

            if kind == "WHITESPACE":
                newlines = lexeme.count("\n")
                if newlines:
                    self._line += newlines
                    self._line_start = start + lexeme.rfind("\n") + 1
                continue
            if kind == "PUNCT":
                yield Token(lexeme, self._position(start))
            elif kind == "NUMBER":
                # The number grammar is greedy, so a digit right after a match
                # can only follow a lone leading 0.
                if self._offset < end and "0" <= text[self._offset] <= "9":
                    raise UnexpectedCharacter(
                        f"leading zeros are not allowed in number '{lexeme}'",
                        self._position(self._offset),
                    )
                yield NumberToken(NUMBER, lexeme, self._position(start))
            else:
                yield Token(_KEYWORDS[lexeme], self._position(start))

        yield Token(EOF, self._position(end))

    def _unexpected_character(self, offset: int) -> UnexpectedCharacter:
        word = _WORD_RE.match(self._text, offset)
        if word:
            return UnexpectedCharacter(
                f"invalid literal '{word.group()}'", self._position(offset)
            )
        ch = self._text[offset]
        return UnexpectedCharacter(
            f"unexpected character {ch!r} (U+{ord(ch):04X})", self._position(offset)
        )

    def _scan_string(self, start: int) -> Tuple[str, int]:
        """
        Decode the string literal whose opening quote sits at ``start``.

        Returns the decoded text and the offset just past the closing quote.
        """
        text = self._text
        chunk = _STRING_CHUNK_RE.match
        parts = []
        i = start + 1
        while True:
            m = chunk(text, i)
            content, terminator = m.groups()
            if content:
                parts.append(content)
            i = m.end()
            if terminator is None:
                raise UnterminatedString(
                    "unterminated string", self._position(start)
                )
            if terminator == '"':
                return "".join(parts), i
            if terminator != "\\":
                raise ControlCharInString(
                    f"control character U+{ord(terminator):04X} in string",
                    self._position(i - 1),
                )
            ch, i = self._scan_escape(i - 1, start)
            parts.append(ch)

    def _scan_escape(self, backslash: int, start: int) -> Tuple[str, int]:
        text = self._text
        if backslash + 1 >= len(text):
            raise UnterminatedString("unterminated string", self._position(start))
        esc = text[backslash + 1]
        if esc != "u":
            try:
                return _ESCAPES[esc], backslash + 2
            except KeyError:
                raise InvalidEscape(
                    f"invalid escape \\{esc}", self._position(backslash)
                ) from None

        code = self._hex4(backslash)
        end = backslash + 6
        if 0xDC00 <= code <= 0xDFFF:
            raise InvalidEscape(
                f"unpaired surrogate \\u{code:04x}", self._position(backslash)
            )
        if 0xD800 <= code <= 0xDBFF:
            if text[end:end + 2] != "\\u":
                raise InvalidEscape(
                    f"unpaired surrogate \\u{code:04x}", self._position(backslash)
                )
            low = self._hex4(end)
            if not 0xDC00 <= low <= 0xDFFF:
                raise InvalidEscape(
                    f"unpaired surrogate \\u{code:04x}", self._position(backslash)
                )
            code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
            end += 6
        return chr(code), end

    def _hex4(self, backslash: int) -> int:
        digits = self._text[backslash + 2:backslash + 6]
        if not _HEX4_RE.fullmatch(digits):
            raise InvalidEscape(
                f"invalid unicode escape \\u{digits}", self._position(backslash)
            )
        return int(digits, 16)


# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def scan(text: str) -> Scanner:
    """
    Lazily tokenize ``text``. The last token is always EOF.

    Errors surface while iterating, at the first offending character.
    """
    return Scanner(text)
