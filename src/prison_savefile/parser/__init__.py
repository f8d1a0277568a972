"""
prison_savefile.parser - Savefile Parser

Lexer and parser for prison savefiles.
Converts savefile text into a tree of Nodes.
"""

from prison_savefile.parser.errors import ParseError, LexerError
from prison_savefile.parser.lexer import Lexer, Token, TokenType, tokenize_file, read_source
from prison_savefile.parser.parser import (
    Parser,
    parse_file,
    parse_source,
    read,
)

__all__ = [
    # Errors
    "ParseError",
    "LexerError",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "tokenize_file",
    "read_source",
    # Parser
    "Parser",
    "parse_file",
    "parse_source",
    "read",
]
