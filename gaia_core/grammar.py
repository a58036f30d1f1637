"""
GaiaScript Style Grammar Definition.

This module contains the Lark grammar for the declaration text inside a
styled element, ``樣{ρ: blue; φ: ⊗α⊗∅px}``.
"""

style_grammar = r"""
    start: (declaration | ";")*

    declaration: PROPERTY ":" VALUE

    // --- Terminals ---
    PROPERTY: /[^\s:;]+/
    VALUE: /[^;]+/

    %import common.WS
    %ignore WS
"""
