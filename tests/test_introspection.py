"""
Unit tests for gaia_core/introspection.py - OutlineExtractor.
"""

import pytest

from gaia_core.introspection import OutlineExtractor, outline
from gaia_core.parser import Parser


class TestOutlineExtractor:
    """Tests for declaration outlines."""

    @pytest.fixture
    def extractor(self):
        return OutlineExtractor()

    def test_function(self, extractor):
        program = Parser("函⟨greet, name, greeting⟩ ⟨/函⟩").parse()
        assert extractor.extract(program) == [
            {"type": "function", "name": "greet", "params": ["name", "greeting"], "line": 1},
        ]

    def test_component_and_nested_state(self, extractor):
        program = Parser("組⟨Counter⟩\n  狀⟨count: ⊗∅, step: ⊗α⟩\n⟨/組⟩").parse()
        assert extractor.extract(program) == [
            {"type": "component", "name": "Counter", "line": 1},
            {"type": "state", "keys": ["count", "step"], "line": 2},
        ]

    def test_interfaces(self, extractor):
        program = Parser("界⟨User⟩ ⟨/界⟩ 界⟨✱⟩ ⟨/界⟩").parse()
        assert [e["type"] for e in extractor.extract(program)] == ["interface", "ui-interface"]

    def test_expressions_ignored(self):
        program = Parser("文⟨Hi⟩ ⊗α 列⟨⟩ 導⟨x⟩").parse()
        assert outline(program) == []
