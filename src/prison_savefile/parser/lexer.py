"""
Savefile Lexer (Tokenizer)

Converts savefile text into a stream of tokens.
Handles: plain words, quoted strings, and the BEGIN/END keywords.

Tokens are produced lazily, so a large savefile is never held as a token list.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from prison_savefile.parser.errors import LexerError

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Types of tokens in a savefile."""
    WORD = auto()      # Version, 2, 0.5, anything without whitespace
    STRING = auto()    # "quoted string"
    BEGIN = auto()     # BEGIN (bare only)
    END = auto()       # END (bare only)
    EOF = auto()       # End of input


KEYWORDS = {
    "BEGIN": TokenType.BEGIN,
    "END": TokenType.END,
}

# ASCII whitespace: space, tab, LF, FF, CR. Vertical tab is not a separator.
WHITESPACE_CHARS = " \t\n\x0c\r"

_WHITESPACE = re.compile(r"[ \t\n\x0c\r]*")
_WORD = re.compile(r"[^ \t\n\x0c\r]+")
_STRING_SPECIAL = re.compile(r'["\\]')

# Unknown escapes drop the backslash and keep the character.
ESCAPES = {
    "n": "\n",
    '"': '"',
}


@dataclass
class Token:
    """A single token from the lexer."""
    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, L{self.line}:{self.column})"


class Lexer:
    """
    Tokenizer for savefile text.

    Usage:
        lexer = Lexer(source_text)
        for token in lexer.tokenize():
            ...
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.length = len(source)
        self._line_start = 0

    @property
    def column(self) -> int:
        return self.pos - self._line_start + 1

    def _location(self, pos: int) -> Tuple[int, int]:
        """Line and column of a position at or after the current one."""
        newlines = self.source.count("\n", self.pos, pos)
        if newlines:
            line_start = self.source.rfind("\n", self.pos, pos) + 1
            return self.line + newlines, pos - line_start + 1
        return self.line, pos - self._line_start + 1

    def _advance_to(self, pos: int) -> None:
        """Move forward to pos, keeping line tracking current."""
        newlines = self.source.count("\n", self.pos, pos)
        if newlines:
            self.line += newlines
            self._line_start = self.source.rfind("\n", self.pos, pos) + 1
        self.pos = pos

    def _error(self, message: str, pos: int) -> LexerError:
        line, column = self._location(pos)
        return LexerError(message, line, column, self.filename)

    def _skip_whitespace(self) -> None:
        self._advance_to(_WHITESPACE.match(self.source, self.pos).end())

    def _read_string(self) -> str:
        """Read a quoted string, decoding escapes."""
        start = self.pos
        pos = start + 1
        result = []
        while True:
            match = _STRING_SPECIAL.search(self.source, pos)
            if match is None:
                raise self._error("unterminated string", start)
            special = match.start()
            result.append(self.source[pos:special])
            if self.source[special] == '"':
                self._advance_to(special + 1)
                return "".join(result)
            if special + 1 >= self.length:
                raise self._error("incomplete escape", special)
            escaped = self.source[special + 1]
            result.append(ESCAPES.get(escaped, escaped))
            pos = special + 2

    def _read_word(self) -> str:
        """Read a plain word, up to whitespace or end of input."""
        end = _WORD.match(self.source, self.pos).end()
        word = self.source[self.pos:end]
        self._advance_to(end)
        return word

    def tokenize(self) -> Iterator[Token]:
        """Generate tokens from the source. The last token is always EOF."""
        while True:
            self._skip_whitespace()
            line = self.line
            column = self.column

            if self.pos >= self.length:
                yield Token(TokenType.EOF, "", line, column)
                break

            if self.source[self.pos] == '"':
                yield Token(TokenType.STRING, self._read_string(), line, column)
                continue

            word = self._read_word()
            yield Token(KEYWORDS.get(word, TokenType.WORD), word, line, column)

    def tokenize_all(self) -> List[Token]:
        """Convenience method to get all tokens as a list."""
        return list(self.tokenize())


def read_source(filepath: Union[str, Path]) -> str:
    """Read savefile text. Handles encoding fallback."""
    # Try UTF-8 with BOM first, then UTF-8, then latin-1 (which always succeeds)
    for encoding in ["utf-8-sig", "utf-8", "latin-1"]:
        try:
            with open(filepath, "r", encoding=encoding, newline="") as f:
                source = f.read()
            break
        except UnicodeDecodeError:
            logger.warning("%s is not valid %s, retrying", filepath, encoding)
            continue
    logger.debug("Read %s (%d chars, %s)", filepath, len(source), encoding)
    return source


def tokenize_file(filepath: Union[str, Path]) -> List[Token]:
    """Tokenize a file and return all tokens."""
    lexer = Lexer(read_source(filepath), filename=str(filepath))
    return lexer.tokenize_all()
