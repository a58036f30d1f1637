"""
GaiaScript AST Transformer - Converts the source AST to the target AST.

This module contains the Transformer class that expands vocabulary glyphs,
decodes numerals and maps every source node kind onto the language-neutral
target AST in gaia_core.target. Recoverable problems (bad numerals, style
blocks the style grammar rejects, unsupported constructs) are collected as
diagnostics instead of raised.
"""
import re

from gaia_core import numerals
from gaia_core import target as t
from gaia_core.errors import DecodeError, StyleError
from gaia_core.styles import parse_style, replace_numerals
from gaia_core.symbols import default_symbols


RUNTIME_MODULE = "@gaia/runtime"
ROOT_COMPONENT = "App"
ELEMENT_FACTORY = "createElement"
ELEMENT_TAG = "div"

EXPRESSIONS = (
    t.Identifier, t.StringLiteral, t.NumericLiteral, t.BooleanLiteral,
    t.ArrayLiteral, t.ObjectLiteral, t.CallExpression, t.Fragment,
)

ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\", '"': '"', "'": "'"}
_escape = re.compile(r"\\(.)", re.DOTALL)
_number = re.compile(r"^-?\d+(\.\d+)?$")


def unquote(text):
    """Strip the quotes of a string literal token and resolve its escapes."""
    quote = text[0]
    body = text[1:]
    if len(text) >= 2 and body.endswith(quote):
        inner = body[:-1]
        # an even run of backslashes escapes itself, not the quote
        if (len(inner) - len(inner.rstrip("\\"))) % 2 == 0:
            body = inner
    return _escape.sub(lambda m: ESCAPES.get(m.group(1), m.group(1)), body)


def infer_type(expression):
    """TypeScript type name for an initializer."""
    if isinstance(expression, t.StringLiteral):
        return "string"
    if isinstance(expression, t.NumericLiteral):
        return "number"
    if isinstance(expression, t.BooleanLiteral):
        return "boolean"
    if isinstance(expression, t.ArrayLiteral):
        kinds = {infer_type(e) for e in expression.elements}
        return f"{kinds.pop()}[]" if len(kinds) == 1 else "any[]"
    if isinstance(expression, t.ObjectLiteral):
        return "object"
    return "any"


class Transformer:
    """
    Transforms a GaiaScript Program into a target SourceFile.

    One ``visit_<Kind>`` method per source node kind. A Transformer may be
    reused; ``diagnostics`` is reset on every ``transform`` call.
    """

    def __init__(self, symbols=None, codec=None):
        self.symbols = symbols or default_symbols()
        self.codec = codec or numerals
        self.diagnostics = []

    def transform(self, program):
        self.diagnostics = []
        return self.visit(program)

    def visit(self, node):
        self.expand(node)
        return getattr(self, f"visit_{node.kind}")(node)

    # --- Vocabulary expansion ---

    def expand(self, node):
        """Fill in ``node.expanded`` once; later calls return the stored text."""
        if node.expanded is not None:
            return node.expanded
        if node.kind == "NumericLiteral":
            node.value = self.number(node)
            node.expanded = str(node.value)
        elif node.text is not None:
            node.expanded = self.symbols.expand_text(node.text)
        return node.expanded

    def number(self, node):
        text = node.text or ""
        if text.startswith(self.codec.MARKER):
            return self.decode(text)
        digits = "".join(
            str(self.symbols.digit(ch)) if self.symbols.digit(ch) is not None else ch
            for ch in text
        )
        try:
            return float(digits) if "." in digits else int(digits)
        except ValueError:
            self.diagnostics.append(str(DecodeError(text, reason="not a number")))
            return 0

    def decode(self, text):
        try:
            return self.codec.decode(text)
        except DecodeError as e:
            self.diagnostics.append(str(e))
            return 0

    # --- Helpers ---

    def statements(self, nodes):
        """Visit ``nodes`` in statement position; bare expressions get wrapped."""
        result = []
        for node in nodes:
            mapped = self.visit(node)
            if mapped is None:
                continue
            if isinstance(mapped, EXPRESSIONS):
                mapped = t.ExpressionStatement(expression=mapped)
            result.append(mapped)
        return result

    def expression(self, node):
        if node is None:
            return None
        mapped = self.visit(node)
        if mapped is not None and not isinstance(mapped, EXPRESSIONS):
            self.diagnostics.append(f"{node.kind} at line {node.line} is not an expression; dropped")
            return None
        return mapped

    def compose(self, body):
        """Statements of a component body followed by a return of its elements."""
        statements, elements = [], []
        for node in body:
            mapped = self.visit(node)
            if mapped is None:
                continue
            if isinstance(mapped, EXPRESSIONS):
                elements.append(mapped)
            else:
                statements.append(mapped)
        element = elements[0] if len(elements) == 1 else t.Fragment(children=elements)
        statements.append(t.ReturnStatement(expression=element))
        return statements

    # --- Program ---

    def visit_Program(self, node):
        for skipped in node.skipped:
            self.visit(skipped)
        return t.SourceFile(statements=self.statements(node.body))

    # --- Declarations ---

    def visit_ImportDeclaration(self, node):
        return t.ImportStatement(names=[n.text for n in node.names], module=RUNTIME_MODULE)

    def visit_FunctionDeclaration(self, node):
        return t.FunctionDeclaration(
            name=node.name.text,
            parameters=[p.text for p in node.parameters],
            body=self.statements(node.body),
        )

    def visit_ComponentDeclaration(self, node):
        return t.FunctionDeclaration(name=node.name.text, body=self.compose(node.body))

    def visit_UIInterfaceDeclaration(self, node):
        return t.FunctionDeclaration(name=ROOT_COMPONENT, body=self.compose(node.body), exported=True)

    def visit_InterfaceDeclaration(self, node):
        members = []
        for child in node.body:
            if child.kind != "StateBlock":
                self.diagnostics.append(
                    f"Interface {node.name.text}: {child.kind} at line {child.line} is not a member; dropped"
                )
                continue
            for declaration in self.visit(child).declarations:
                members.append(t.Member(name=declaration.name, type=declaration.type or "any"))
        return t.InterfaceDeclaration(name=node.name.text, members=members)

    def visit_StateBlock(self, node):
        declarations = []
        for prop in node.declarations:
            initializer = self.expression(prop.value)
            declarations.append(t.VariableDeclaration(
                name=prop.key.text, type=infer_type(initializer), initializer=initializer,
            ))
        return t.VariableStatement(mutable=True, declarations=declarations)

    def visit_Documentation(self, node):
        return t.Comment(text=node.expanded or "")

    def visit_Unsupported(self, node):
        self.diagnostics.append(f"Unsupported construct at line {node.line}: {node.reason or node.text}")
        return None

    # --- Elements ---

    def visit_StyledElement(self, node):
        style = []
        try:
            declarations = parse_style(node.text or "", line_number=node.line)
        except StyleError as e:
            self.diagnostics.append(str(e))
            declarations = []
        for name, value in declarations:
            style.append(t.PropertyAssignment(name=self.symbols.expand_text(name), value=self.style_value(value)))

        children = []
        for child in node.content:
            mapped = self.expression(child)
            if mapped is not None:
                children.append(mapped)

        props = t.ObjectLiteral(properties=[
            t.PropertyAssignment(name="style", value=t.ObjectLiteral(properties=style)),
        ])
        return t.CallExpression(
            callee=ELEMENT_FACTORY,
            arguments=[t.StringLiteral(value=ELEMENT_TAG), props] + children,
        )

    def style_value(self, value):
        value = replace_numerals(value, self.decode)
        if _number.match(value):
            return t.NumericLiteral(value=float(value) if "." in value else int(value))
        return t.StringLiteral(value=value)

    # --- Expressions ---

    def visit_TextLiteral(self, node):
        return t.StringLiteral(value=node.expanded or "")

    def visit_StringLiteral(self, node):
        return t.StringLiteral(value=unquote(node.text))

    def visit_NumericLiteral(self, node):
        return t.NumericLiteral(value=node.value if node.value is not None else 0)

    def visit_Identifier(self, node):
        return t.Identifier(name=node.text)

    def visit_Word(self, node):
        return t.Identifier(name=node.expanded)

    def visit_ArrayLiteral(self, node):
        elements = [self.expression(e) for e in node.elements]
        return t.ArrayLiteral(elements=[e for e in elements if e is not None])

    def visit_ObjectLiteral(self, node):
        return t.ObjectLiteral(properties=[
            p for p in (self.visit(prop) for prop in node.properties) if p is not None
        ])

    def visit_Property(self, node):
        value = self.expression(node.value)
        if value is None:
            self.diagnostics.append(f"Property '{node.key.text}' at line {node.line} has no value; dropped")
            return None
        return t.PropertyAssignment(name=node.key.text, value=value)
