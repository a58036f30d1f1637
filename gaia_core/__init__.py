# GaiaScript - Core Compiler Components
"""
Core modules for the GaiaScript compiler:
- symbols: Glyph vocabulary and symbol table
- numerals: Vector numeral codec
- scanner: Source text to tokens
- parser: Tokens to source AST (nodes)
- grammar / styles: Lark grammar for style declarations
- transformer: Source AST to target AST
- emitter: Target AST to TypeScript, JavaScript or Go
- introspection: Declaration outline extraction
- errors: Error handling and validation utilities
"""

from .errors import GaiaCompileError, DecodeError, ParseError, EmissionError, StyleError
from .symbols import SymbolTable, default_symbols
from .scanner import Scanner, Token, TokenKind
from .parser import Parser
from .transformer import Transformer
from .emitter import Emitter, EmitResult
from .introspection import outline

__all__ = [
    'GaiaCompileError',
    'DecodeError',
    'ParseError',
    'EmissionError',
    'StyleError',
    'SymbolTable',
    'default_symbols',
    'Scanner',
    'Token',
    'TokenKind',
    'Parser',
    'Transformer',
    'Emitter',
    'EmitResult',
    'outline',
]
