import sys
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

# Import from the core package
from gaia_core.emitter import Emitter
from gaia_core.errors import GaiaCompileError
from gaia_core.introspection import outline
from gaia_core.parser import Parser
from gaia_core.scanner import Scanner
from gaia_core.symbols import default_symbols
from gaia_core.transformer import Transformer

# Global verbose flag
_VERBOSE = False

def set_verbose(value):
    """Set the global verbose flag."""
    global _VERBOSE
    _VERBOSE = value

def debug_log(message):
    """Log a debug message to stderr if verbose mode is enabled."""
    if _VERBOSE:
        print(f"\033[94mDEBUG:\033[0m {message}", file=sys.stderr)


DECLARATION_KINDS = frozenset({
    "ImportDeclaration", "FunctionDeclaration", "ComponentDeclaration",
    "InterfaceDeclaration", "UIInterfaceDeclaration", "StateBlock",
})


class CompileOptions(BaseModel):
    target: Literal["typescript", "go", "javascript"] = "typescript"
    debug: bool = False
    source_map: bool = False
    strict: bool = False


class CompileResult(BaseModel):
    typescript: Optional[str] = None
    go: Optional[str] = None
    javascript: Optional[str] = None
    success: bool = False
    diagnostics: List[str] = []
    errors: List[str] = []
    source_map: Optional[List[Dict]] = None

    @property
    def output(self):
        """Text of whichever target was produced."""
        for text in (self.typescript, self.javascript, self.go):
            if text is not None:
                return text
        return None


# ==========================================
# PIPELINE
# ==========================================
def compile_source(source_code, options=None, symbols=None):
    """
    Compile GaiaScript source text.

    Args:
        source_code: The GaiaScript program
        options: CompileOptions (or a dict of them); defaults to TypeScript output
        symbols: SymbolTable to classify glyphs with; defaults to the bundled vocabulary

    Returns:
        CompileResult. Never raises for bad input: a syntax error gives
        ``success=False`` with the message in ``errors``.
    """
    if options is None:
        options = CompileOptions()
    elif isinstance(options, dict):
        options = CompileOptions(**options)
    symbols = symbols or default_symbols()

    result = CompileResult()
    trace = []

    def phase(message):
        trace.append(message)
        debug_log(message)

    try:
        # STEP 1: SCAN
        phase("Phase 1: Lexical Analysis")
        tokens = Scanner(source_code, symbols).scan()
        phase(f"Tokenized {len(tokens)} tokens")

        # STEP 2: PARSE
        phase("Phase 2: Syntax Analysis")
        program = Parser(source_code, symbols, tokens=tokens).parse()
        phase(f"Parsed {len(program.body)} top-level statements")

        # STEP 3: TRANSFORM
        phase("Phase 3: Transformation")
        transformer = Transformer(symbols=symbols)
        source_file = transformer.transform(program)
        for message in transformer.diagnostics:
            phase(message)

        # STEP 4: EMIT
        phase(f"Phase 4: Code Generation ({options.target})")
        emitted = Emitter(strict=options.strict).emit(source_file, options.target)
        for message in emitted.diagnostics:
            phase(message)
    except GaiaCompileError as e:
        debug_log(f"Compilation failed: {e}")
        result.errors.append(str(e))
        result.diagnostics = (trace if options.debug else []) + [f"Compilation error: {e}"]
        return result

    if options.source_map:
        result.source_map = [
            {"kind": node.kind, "line": node.line, "column": node.column}
            for node in program.body if node.kind in DECLARATION_KINDS
        ]

    if emitted.errors:
        result.errors.extend(emitted.errors)
        result.diagnostics = (trace if options.debug else []) + [
            f"Compilation error: {message}" for message in emitted.errors
        ]
        return result

    setattr(result, options.target, emitted.text)
    result.success = True
    result.diagnostics = trace if options.debug else []
    debug_log(f"Compiled {len(source_code)} characters to {options.target}")
    return result


def compile_many(sources, options=None, symbols=None):
    """Compile several named sources independently; returns {name: CompileResult}."""
    return {name: compile_source(source, options, symbols) for name, source in sources.items()}


def analyze_source(source_code, symbols=None):
    """Outline of the declarations in ``source_code``. Raises ParseError on bad syntax."""
    program = Parser(source_code, symbols or default_symbols()).parse()
    return outline(program)
