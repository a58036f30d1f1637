"""
GaiaScript Scanner - tokenizes raw source text.

Glyph classification goes through an explicitly supplied SymbolTable, so
several vocabularies can be used side by side.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from gaia_core.numerals import VECTOR_NUMERAL
from gaia_core.symbols import Category, SymbolTable, default_symbols


class TokenKind(Enum):
    # Keywords
    TEXT = "text"
    LIST = "list"
    OBJECT = "object"
    FUNCTION = "function"
    COMPONENT = "component"
    INTERFACE = "interface"
    STATE = "state"
    STYLE = "style"
    IMPORT = "import"
    DOC = "doc"

    # Delimiters
    OPEN_BRACKET = "open_bracket"
    CLOSE_BRACKET = "close_bracket"
    OPEN_CONTENT = "open_content"
    CLOSE_CONTENT = "close_content"
    OPEN_STYLE = "open_style"
    CLOSE_STYLE = "close_style"
    COMMA = "comma"
    COLON = "colon"
    SEMICOLON = "semicolon"

    # Vocabulary
    CORE_WORD = "core_word"
    TECH_TERM = "tech_term"
    SYMBOL = "symbol"
    NUMBER = "number"

    # Literals
    IDENTIFIER = "identifier"
    STRING_LITERAL = "string_literal"
    NUMERIC_LITERAL = "numeric_literal"

    # Other
    NEWLINE = "newline"
    UNKNOWN = "unknown"
    EOF = "eof"


VOCABULARY_KINDS = {
    Category.CORE_WORD: TokenKind.CORE_WORD,
    Category.TECH_TERM: TokenKind.TECH_TERM,
    Category.SYMBOL: TokenKind.SYMBOL,
}

WHITESPACE = " \t\r"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    start: int
    end: int
    line: int
    column: int
    expanded: Optional[str] = None


class Scanner:
    """
    Single forward cursor over one source string.

    A Scanner is one-shot: build a new one for every source text.
    """

    def __init__(self, source: str, symbols: Optional[SymbolTable] = None):
        self.source = source
        self.symbols = symbols or default_symbols()
        self.pos = 0
        self.line = 1
        self.column = 1
        self._done = False

    def scan(self) -> List[Token]:
        if self._done:
            raise RuntimeError("Scanner has already been used; create a new one per source")
        self._done = True

        tokens = []
        while self.pos < len(self.source):
            token = self.scan_token()
            if token is not None:
                tokens.append(token)
        tokens.append(Token(TokenKind.EOF, "", self.pos, self.pos, self.line, self.column))
        return tokens

    def scan_token(self) -> Optional[Token]:
        start, line, column = self.pos, self.line, self.column
        ch = self.current()

        # Whitespace is consumed without a token
        if ch in WHITESPACE:
            while self.pos < len(self.source) and self.current() in WHITESPACE:
                self.advance()
            return None

        if ch == "\n":
            self.advance()
            self.line += 1
            self.column = 1
            return Token(TokenKind.NEWLINE, ch, start, self.pos, line, column)

        kind = self.symbols.delimiter_kind(ch)
        if kind is not None:
            self.advance()
            return self.make(TokenKind(kind), start, line, column)

        category = self.symbols.lookup(ch)
        if self.symbols.keyword(ch) is not None:
            self.advance()
            return self.make(TokenKind(category.value), start, line, column, category.value)
        if category in VOCABULARY_KINDS:
            self.advance()
            return self.make(VOCABULARY_KINDS[category], start, line, column, self.symbols.expansion(ch))
        if category is Category.NUMERAL:
            self.advance()
            return self.make(TokenKind.NUMBER, start, line, column, self.symbols.expansion(ch))

        # Chinese numerals were handled above; the marker starts a vector numeral
        if self.symbols.is_numeral_glyph(ch):
            return self.scan_vector_numeral(start, line, column)
        if ch.isascii() and ch.isdigit():
            return self.scan_number(start, line, column)

        if self.is_identifier_start(ch):
            while self.pos < len(self.source) and self.is_identifier_part(self.current()):
                self.advance()
            return self.make(TokenKind.IDENTIFIER, start, line, column)

        if ch in ('"', "'"):
            return self.scan_string(start, line, column)

        self.advance()
        return self.make(TokenKind.UNKNOWN, start, line, column)

    def scan_number(self, start, line, column):
        """ASCII digits merged with any numeral glyphs that follow: 1二3 -> 123."""
        digits = []
        while self.pos < len(self.source):
            ch = self.current()
            if ch.isascii() and ch.isdigit() or ch == ".":
                digits.append(ch)
            elif self.symbols.digit(ch) is not None:
                digits.append(str(self.symbols.digit(ch)))
            else:
                break
            self.advance()
        return self.make(TokenKind.NUMERIC_LITERAL, start, line, column, "".join(digits))

    def scan_vector_numeral(self, start, line, column):
        match = VECTOR_NUMERAL.match(self.source, self.pos)
        end = match.end() if match else self.pos + 1  # a bare marker
        while self.pos < end:
            self.advance()
        return self.make(TokenKind.NUMERIC_LITERAL, start, line, column)

    def scan_string(self, start, line, column):
        quote = self.current()
        self.advance()
        while self.pos < len(self.source):
            ch = self.current()
            self.advance()
            if ch == "\\" and self.pos < len(self.source):
                self.advance()
            elif ch == quote:
                break
            elif ch == "\n":
                self.line += 1
                self.column = 1
        return self.make(TokenKind.STRING_LITERAL, start, line, column)

    # --- Cursor helpers ---

    def current(self) -> str:
        return self.source[self.pos] if self.pos < len(self.source) else ""

    def advance(self):
        if self.pos < len(self.source):
            self.pos += 1
            self.column += 1

    def make(self, kind, start, line, column, expanded=None) -> Token:
        return Token(kind, self.source[start:self.pos], start, self.pos, line, column, expanded)

    @staticmethod
    def is_identifier_start(ch: str) -> bool:
        return ch.isascii() and (ch.isalpha() or ch in "_$")

    @classmethod
    def is_identifier_part(cls, ch: str) -> bool:
        return cls.is_identifier_start(ch) or (ch.isascii() and ch.isdigit())

    @staticmethod
    def gaps(tokens: List[Token], length: int) -> List[Tuple[int, int]]:
        """Spans not covered by any token (the skipped whitespace)."""
        spans = []
        pos = 0
        for token in tokens:
            if token.start > pos:
                spans.append((pos, token.start))
            pos = max(pos, token.end)
        if pos < length:
            spans.append((pos, length))
        return spans
