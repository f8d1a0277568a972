"""
Parse errors for savefile text.

Every malformed-text failure is a ParseError carrying a 1-indexed line and
column. LexerError is the subclass raised while reading a single token.
"""


class ParseError(Exception):
    """Error during parsing."""
    def __init__(self, message: str, line: int, column: int, filename: str = "<unknown>"):
        self.message = message
        self.line = line
        self.column = column
        self.filename = filename
        if filename and filename != "<unknown>":
            super().__init__(f"{filename}:{line}:{column}: {message}")
        else:
            super().__init__(f"{line}:{column}: {message}")


class LexerError(ParseError):
    """Error during lexical analysis (bad string or escape)."""
