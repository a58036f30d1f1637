"""
Unit tests for gaia_core/scanner.py - Scanner class.
"""

import pytest

from gaia_core.scanner import Scanner, TokenKind


def kinds(source):
    return [t.kind for t in Scanner(source).scan()]


class TestScannerBasic:
    """Tests for token classification."""

    def test_function_header(self):
        assert kinds("函⟨greet⟩") == [
            TokenKind.FUNCTION, TokenKind.OPEN_BRACKET, TokenKind.IDENTIFIER,
            TokenKind.CLOSE_BRACKET, TokenKind.EOF,
        ]

    def test_keyword_expansion(self):
        token = Scanner("文").scan()[0]
        assert token.kind is TokenKind.TEXT
        assert token.expanded == "text"

    def test_vocabulary_tokens(self):
        tokens = Scanner("的碼λ").scan()
        assert [t.kind for t in tokens[:3]] == [TokenKind.CORE_WORD, TokenKind.TECH_TERM, TokenKind.SYMBOL]
        assert [t.expanded for t in tokens[:3]] == ["the", "code", "lambda"]

    def test_chinese_numeral(self):
        token = Scanner("五").scan()[0]
        assert token.kind is TokenKind.NUMBER
        assert token.expanded == "5"

    def test_vector_numeral_is_one_token(self):
        tokens = Scanner("⊗δχβ").scan()
        assert tokens[0].kind is TokenKind.NUMERIC_LITERAL
        assert tokens[0].text == "⊗δχβ"
        assert tokens[1].kind is TokenKind.EOF

    def test_vector_numeral_stops_at_unit(self):
        tokens = Scanner("⊗α⊗∅px").scan()
        assert tokens[0].text == "⊗α⊗∅"
        assert tokens[1].kind is TokenKind.IDENTIFIER
        assert tokens[1].text == "px"

    def test_vector_numeral_stops_before_constant_glyph(self):
        tokens = Scanner("⊗δelse").scan()
        assert tokens[0].kind is TokenKind.NUMERIC_LITERAL
        assert tokens[0].text == "⊗δ"
        assert tokens[1].kind is TokenKind.IDENTIFIER
        assert tokens[1].text == "else"

    def test_constant_numeral_is_a_single_glyph(self):
        tokens = Scanner("⊗π⊗−πx").scan()
        assert [token.text for token in tokens[:3]] == ["⊗π", "⊗−π", "x"]

    def test_ascii_number_merges_numeral_glyphs(self):
        token = Scanner("1二3").scan()[0]
        assert token.kind is TokenKind.NUMERIC_LITERAL
        assert token.expanded == "123"

    def test_string_with_escape(self):
        tokens = Scanner('"a\\"b" x').scan()
        assert tokens[0].kind is TokenKind.STRING_LITERAL
        assert tokens[0].text == '"a\\"b"'
        assert tokens[1].text == "x"

    def test_unterminated_string_runs_to_end(self):
        tokens = Scanner('"abc').scan()
        assert tokens[0].kind is TokenKind.STRING_LITERAL
        assert tokens[0].text == '"abc'

    def test_unknown_character(self):
        tokens = Scanner("@").scan()
        assert tokens[0].kind is TokenKind.UNKNOWN
        assert tokens[0].text == "@"

    def test_empty_source(self):
        tokens = Scanner("").scan()
        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.EOF


class TestScannerPositions:
    """Tests for spans, lines and columns."""

    def test_line_and_column(self):
        tokens = Scanner("a\n  b").scan()
        b = [t for t in tokens if t.text == "b"][0]
        assert b.line == 2
        assert b.column == 3

    def test_newline_token(self):
        assert TokenKind.NEWLINE in kinds("a\nb")

    def test_eof_is_zero_length(self):
        source = "文⟨hi⟩"
        eof = Scanner(source).scan()[-1]
        assert eof.start == eof.end == len(source)

    @pytest.mark.parametrize("source", [
        "導⟨useState⟩ 文⟨Hello⟩ ⊗δχβ",
        "函⟨f, a⟩\n  文⟨x⟩\n⟨/函⟩\n",
        "  樣{color: blue}⟦ 文⟨Hi⟩ ⟧  ",
        '"unterminated',
    ])
    def test_spans_and_gaps_cover_source(self, source):
        """Token spans plus skipped whitespace reconstruct the input length."""
        tokens = Scanner(source).scan()
        covered = sum(t.end - t.start for t in tokens)
        skipped = sum(end - start for start, end in Scanner.gaps(tokens, len(source)))
        assert covered + skipped == len(source)

    def test_token_text_matches_span(self):
        source = "狀⟨count: ⊗∅⟩"
        for token in Scanner(source).scan():
            assert source[token.start:token.end] == token.text

    def test_scanner_is_one_shot(self):
        scanner = Scanner("文")
        scanner.scan()
        with pytest.raises(RuntimeError):
            scanner.scan()
