"""
Style declarations for styled elements.

Parses the raw text of a ``樣{...}`` block into ordered ``(property, value)``
pairs with the Lark style grammar, and finds the vector numerals embedded
in values (``⊗α⊗∅px``) so the transformer can decode them.
"""
from lark import Lark, Transformer
from lark.exceptions import LarkError

from gaia_core.errors import StyleError
from gaia_core.grammar import style_grammar
from gaia_core import numerals


class StyleTransformer(Transformer):
    """Turns the style parse tree into a list of (property, value) tuples."""

    def start(self, items):
        return [i for i in items if isinstance(i, tuple)]

    def declaration(self, args):
        return (str(args[0]).strip(), str(args[1]).strip())


_style_parser = Lark(style_grammar, parser='lalr')


def parse_style(text, line_number=None):
    """
    Parse style declarations.

    Args:
        text: The raw declarations, e.g. ``"color: blue; padding: ⊗ε px"``
        line_number: Source line, used in the error message

    Returns:
        Ordered list of (property, value) tuples.

    Raises:
        StyleError: If the text is not a sequence of ``name: value`` pairs.
    """
    if not text.strip():
        return []
    try:
        tree = _style_parser.parse(text)
    except LarkError as e:
        raise StyleError(text, str(e).splitlines()[0], line_number=line_number)
    return StyleTransformer().transform(tree)


def replace_numerals(value, decode):
    """Replace every vector numeral in ``value`` with ``decode(numeral)``."""
    return numerals.VECTOR_NUMERAL.sub(lambda m: str(decode(m.group(0))), value)
