"""
Savefile Parser

Converts a token stream from the lexer into a tree of Nodes.
Handles key/value properties and nested BEGIN ... END objects.

Grammar:
    node     := (property | child)*
    property := token token
    child    := BEGIN token node END
"""

import logging
import time
from pathlib import Path
from typing import Iterable, Union

from prison_savefile.node import Node
from prison_savefile.parser.errors import ParseError
from prison_savefile.parser.lexer import Lexer, Token, TokenType, read_source

logger = logging.getLogger(__name__)


class Parser:
    """
    Recursive descent parser for savefiles.

    Reads the token stream once, with one token of lookahead.

    Usage:
        parser = Parser(Lexer(source).tokenize())
        root = parser.parse()
    """

    def __init__(self, tokens: Iterable[Token], filename: str = "<unknown>"):
        self.tokens = iter(tokens)
        self.filename = filename
        self._token = next(self.tokens)

    def _current(self) -> Token:
        return self._token

    def _advance(self) -> Token:
        """Advance one token and return the previous one."""
        token = self._token
        if token.type != TokenType.EOF:
            self._token = next(self.tokens)
        return token

    def _error(self, message: str, token: Token) -> ParseError:
        return ParseError(message, token.line, token.column, self.filename)

    def _parse_string(self) -> str:
        """Parse any key or value token. Keywords are plain data here."""
        token = self._current()
        if token.type == TokenType.EOF:
            raise self._error("unexpected eof", token)
        self._advance()
        return token.value

    def parse(self) -> Node:
        """Parse the token stream into a root Node."""
        return self._parse_node(nested=False)

    def _parse_node(self, nested: bool) -> Node:
        """
        Parse a node body.

        The root body runs to end of input. A nested body also stops at END,
        which is left for the enclosing BEGIN to consume.
        """
        node = Node()

        while True:
            token = self._current()

            if token.type == TokenType.BEGIN:
                self._advance()
                key = self._parse_string()
                node.add_child(key, self._parse_node(nested=True))

                end = self._current()
                if end.type != TokenType.END:
                    raise self._error(f"unterminated object '{key}'", end)
                self._advance()

            elif token.type == TokenType.EOF or (nested and token.type == TokenType.END):
                return node

            else:
                key = self._parse_string()
                node.add_property(key, self._parse_string())


def parse_source(source: str, filename: str = "<unknown>") -> Node:
    """Parse savefile text into a root Node."""
    lexer = Lexer(source, filename)
    parser = Parser(lexer.tokenize(), filename)
    return parser.parse()


def parse_file(filepath: Union[str, Path]) -> Node:
    """Read and parse a savefile. Handles encoding fallback."""
    source = read_source(filepath)
    started = time.perf_counter()
    root = parse_source(source, str(filepath))
    logger.debug("Parsed %s in %.3fs", filepath, time.perf_counter() - started)
    return root


read = parse_file
