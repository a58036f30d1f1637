"""
GaiaScript Symbol Table.

Static glyph lookup shared by the scanner and the transformer. The tables
are loaded from a flat JSON vocabulary (glyph -> category / word / digit)
and validated with pydantic. A table is immutable once built; pass it
explicitly to the pipeline stages that need it.
"""
import json
import os
import re
from enum import Enum
from functools import lru_cache
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, field_validator


VOCABULARY_FILE = os.path.join(os.path.dirname(__file__), "vocabulary.json")


class Category(str, Enum):
    """Semantic category of a single glyph."""
    # Keyword categories
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

    # Vocabulary
    CORE_WORD = "core_word"
    TECH_TERM = "tech_term"
    SYMBOL = "symbol"
    NUMERAL = "numeral"

    # Structure
    DELIMITER = "delimiter"
    UNRECOGNIZED = "unrecognized"


KEYWORD_CATEGORIES = frozenset({
    Category.TEXT, Category.LIST, Category.OBJECT, Category.FUNCTION,
    Category.COMPONENT, Category.INTERFACE, Category.STATE, Category.STYLE,
    Category.IMPORT, Category.DOC,
})

DELIMITER_KINDS = (
    "open_bracket", "close_bracket",
    "open_content", "close_content",
    "open_style", "close_style",
    "comma", "colon", "semicolon",
)


class Vocabulary(BaseModel):
    """Raw vocabulary tables as stored on disk."""
    keywords: Dict[str, Category]
    core_words: Dict[str, str] = {}
    tech_terms: Dict[str, str] = {}
    symbols: Dict[str, str] = {}
    numerals: Dict[str, int] = {}
    delimiters: Dict[str, str] = {}
    numeral_marker: str = "⊗"
    root_marker: str = "✱"

    @field_validator("keywords")
    @classmethod
    def _keywords_are_keywords(cls, value):
        for glyph, category in value.items():
            if category not in KEYWORD_CATEGORIES:
                raise ValueError(f"'{glyph}' maps to non-keyword category '{category.value}'")
        return value

    @field_validator("numerals")
    @classmethod
    def _numerals_are_digits(cls, value):
        for glyph, digit in value.items():
            if not 0 <= digit <= 9:
                raise ValueError(f"Numeral glyph '{glyph}' must map to a digit 0-9, got {digit}")
        return value

    @field_validator("delimiters")
    @classmethod
    def _known_delimiters(cls, value):
        for glyph, kind in value.items():
            if kind not in DELIMITER_KINDS:
                raise ValueError(f"Unknown delimiter kind '{kind}' for '{glyph}'")
        return value


class SymbolTable:
    """
    Read-only glyph lookup.

    When a glyph appears in more than one table the first match wins, in
    this order: keyword, numeral, core word, tech term, symbol. Unknown
    glyphs are an expected outcome; ``lookup`` returns
    ``Category.UNRECOGNIZED`` instead of raising.
    """

    def __init__(self, vocabulary: Vocabulary):
        self._vocabulary = vocabulary
        self.numeral_marker = vocabulary.numeral_marker
        self.root_marker = vocabulary.root_marker

        categories = {}
        expansions = {}
        layers = [
            (vocabulary.symbols, Category.SYMBOL),
            (vocabulary.tech_terms, Category.TECH_TERM),
            (vocabulary.core_words, Category.CORE_WORD),
        ]
        # Lowest precedence first so later layers overwrite
        for table, category in layers:
            for glyph, word in table.items():
                categories[glyph] = category
                expansions[glyph] = word
        for glyph, digit in vocabulary.numerals.items():
            categories[glyph] = Category.NUMERAL
            expansions[glyph] = str(digit)
        for glyph, category in vocabulary.keywords.items():
            categories[glyph] = category
            expansions[glyph] = category.value
        for glyph in vocabulary.delimiters:
            categories[glyph] = Category.DELIMITER

        self._categories = categories
        self._expansions = expansions
        self._digits = dict(vocabulary.numerals)
        self._delimiters = dict(vocabulary.delimiters)

        # Whole English words back to glyphs, for compress_text
        reverse = {}
        for table in (vocabulary.symbols, vocabulary.tech_terms, vocabulary.core_words):
            for glyph, word in table.items():
                if categories.get(glyph) not in KEYWORD_CATEGORIES | {Category.NUMERAL}:
                    reverse[word] = glyph
        self._reverse = reverse
        self._reverse_pattern = (
            re.compile(r"\b(" + "|".join(sorted(map(re.escape, reverse), key=len, reverse=True)) + r")\b")
            if reverse else None
        )

    @classmethod
    def from_mapping(cls, data: Mapping) -> "SymbolTable":
        return cls(Vocabulary.model_validate(data))

    @classmethod
    def from_file(cls, path: str) -> "SymbolTable":
        """Load a vocabulary JSON file (flat glyph -> value tables)."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_mapping(json.load(f))

    @property
    def vocabulary(self) -> Vocabulary:
        return self._vocabulary

    # --- Lookups ---

    def lookup(self, glyph: str) -> Category:
        return self._categories.get(glyph, Category.UNRECOGNIZED)

    def expansion(self, glyph: str) -> Optional[str]:
        return self._expansions.get(glyph)

    def keyword(self, glyph: str) -> Optional[Category]:
        category = self.lookup(glyph)
        return category if category in KEYWORD_CATEGORIES else None

    def digit(self, glyph: str) -> Optional[int]:
        return self._digits.get(glyph)

    def delimiter_kind(self, glyph: str) -> Optional[str]:
        return self._delimiters.get(glyph)

    def is_open_delimiter(self, glyph: str) -> bool:
        return self._delimiters.get(glyph, "").startswith("open_")

    def is_close_delimiter(self, glyph: str) -> bool:
        return self._delimiters.get(glyph, "").startswith("close_")

    def is_separator(self, glyph: str) -> bool:
        return self._delimiters.get(glyph) in ("comma", "colon", "semicolon")

    def is_numeral_glyph(self, glyph: str) -> bool:
        return glyph in self._digits or glyph == self.numeral_marker

    # --- Text expansion ---

    def expand_text(self, text: str) -> str:
        """Replace every recognized vocabulary glyph in ``text`` with its expansion."""
        parts = []
        for ch in text:
            category = self._categories.get(ch)
            if category is None or category is Category.DELIMITER:
                parts.append(ch)
            else:
                parts.append(self._expansions[ch])
        return "".join(parts)

    def compress_text(self, text: str) -> str:
        """Replace whole English words that have a glyph with that glyph."""
        if self._reverse_pattern is None:
            return text
        return self._reverse_pattern.sub(lambda m: self._reverse[m.group(1)], text)


@lru_cache(maxsize=None)
def default_symbols() -> SymbolTable:
    """The bundled vocabulary, loaded once and shared."""
    return SymbolTable.from_file(VOCABULARY_FILE)
