"""
Tests for the savefile lexer.
"""

import pytest
from prison_savefile.parser import Lexer, LexerError, ParseError, TokenType, tokenize_file


def token_values(source):
    return [(t.type, t.value) for t in Lexer(source).tokenize()]


class TestTokens:
    """Test basic tokenization."""

    def test_empty_source(self):
        """Empty input yields only EOF."""
        assert token_values("") == [(TokenType.EOF, "")]

    def test_whitespace_only(self):
        assert token_values(" \t\r\n\x0c ") == [(TokenType.EOF, "")]

    def test_words(self):
        """Plain words end at whitespace or end of input."""
        assert token_values("Version 2\n\tId.i  17") == [
            (TokenType.WORD, "Version"),
            (TokenType.WORD, "2"),
            (TokenType.WORD, "Id.i"),
            (TokenType.WORD, "17"),
            (TokenType.EOF, ""),
        ]

    def test_keywords(self):
        """BEGIN and END are keywords only as whole bare words."""
        assert token_values('BEGIN END BEGINNING "END"') == [
            (TokenType.BEGIN, "BEGIN"),
            (TokenType.END, "END"),
            (TokenType.WORD, "BEGINNING"),
            (TokenType.STRING, "END"),
            (TokenType.EOF, ""),
        ]

    def test_quote_inside_word_is_literal(self):
        """A quote only opens a string at the start of a token."""
        assert token_values('ab"cd') == [(TokenType.WORD, 'ab"cd'), (TokenType.EOF, "")]

    def test_vertical_tab_is_data(self):
        assert token_values("a\x0bb") == [(TokenType.WORD, "a\x0bb"), (TokenType.EOF, "")]


class TestStrings:
    """Test quoted strings and escapes."""

    def test_quoted_string_with_space(self):
        assert token_values('"hello, world!"')[0] == (TokenType.STRING, "hello, world!")

    def test_empty_string(self):
        assert token_values('""')[0] == (TokenType.STRING, "")

    def test_escaped_quote_and_newline(self):
        assert token_values(r'"one\n\"two\""')[0] == (TokenType.STRING, 'one\n"two"')

    def test_unknown_escape_drops_backslash(self):
        """Unrecognized escapes keep the character and drop the backslash."""
        assert token_values(r'"a\tb\\c"')[0] == (TokenType.STRING, "atb\\c")

    def test_literal_newline_in_string(self):
        assert token_values('"a\nb"')[0] == (TokenType.STRING, "a\nb")

    def test_unterminated_string(self):
        """A string without a closing quote is an error at the opening quote."""
        with pytest.raises(LexerError) as exc_info:
            Lexer('key "abc').tokenize_all()
        assert exc_info.value.message == "unterminated string"
        assert (exc_info.value.line, exc_info.value.column) == (1, 5)

    def test_incomplete_escape(self):
        """A backslash as the last character is an incomplete escape."""
        with pytest.raises(LexerError) as exc_info:
            Lexer('k "abc\\').tokenize_all()
        assert exc_info.value.message == "incomplete escape"
        assert exc_info.value.column == 7

    def test_lexer_error_is_parse_error(self):
        with pytest.raises(ParseError):
            Lexer('"open').tokenize_all()


class TestPositions:
    """Test token line and column tracking."""

    def test_positions_are_one_indexed(self):
        tokens = Lexer("a b\n  c").tokenize_all()
        assert [(t.line, t.column) for t in tokens] == [(1, 1), (1, 3), (2, 3), (2, 4)]

    def test_newline_inside_string_advances_line(self):
        tokens = Lexer('k "x\ny"\nz').tokenize_all()
        assert (tokens[2].value, tokens[2].line, tokens[2].column) == ("z", 3, 1)

    def test_error_on_later_line(self):
        with pytest.raises(LexerError) as exc_info:
            Lexer('a b\nc "d\ne').tokenize_all()
        assert (exc_info.value.line, exc_info.value.column) == (2, 3)
        assert str(exc_info.value) == "2:3: unterminated string"


class TestTokenizeFile:
    """Test reading tokens from disk."""

    def test_tokenize_file(self, example_path):
        tokens = tokenize_file(example_path)
        assert tokens[0].value == "Version"
        assert (tokens[1].type, tokens[1].value) == (TokenType.WORD, "2.0")
        assert any(t.type == TokenType.STRING and t.value == "[i 0]" for t in tokens)
        assert tokens[-1].type == TokenType.EOF

    def test_error_names_file(self, tmp_path):
        path = tmp_path / "broken.prison"
        path.write_text('Name "unterminated', encoding="utf-8")
        with pytest.raises(LexerError) as exc_info:
            tokenize_file(path)
        assert exc_info.value.filename == str(path)
        assert str(exc_info.value).startswith(f"{path}:1:6:")
