"""
GaiaScript Parser - recursive descent over the scanner's token stream.

One token of lookahead, no backtracking. Block-bodied declarations are
fenced explicitly::

    函⟨greet, name⟩ ... ⟨/函⟩
    組⟨Button⟩ ... ⟨/組⟩
    界⟨✱⟩ ... ⟨/界⟩

The first missing token raises ParseError; nothing is recovered. Tokens
that cannot start an expression are skipped when they show up where an
expression is expected.
"""
from typing import List, Optional

from gaia_core.errors import ParseError, detect_common_error_patterns, get_line_context
from gaia_core.nodes import (
    ArrayLiteral, ComponentDeclaration, Documentation, FunctionDeclaration,
    Identifier, ImportDeclaration, InterfaceDeclaration, NumericLiteral,
    ObjectLiteral, Program, Property, StateBlock, StringLiteral, StyledElement,
    TextLiteral, UIInterfaceDeclaration, Unsupported, Word,
)
from gaia_core.scanner import Scanner, Token, TokenKind
from gaia_core.symbols import SymbolTable, default_symbols


# Structural tokens an expression never consumes; the enclosing construct owns them
CLOSERS = frozenset({
    TokenKind.CLOSE_BRACKET, TokenKind.CLOSE_CONTENT, TokenKind.CLOSE_STYLE,
    TokenKind.COMMA, TokenKind.EOF,
})


class Parser:
    def __init__(self, source: str, symbols: Optional[SymbolTable] = None,
                 tokens: Optional[List[Token]] = None):
        self.source = source
        self.symbols = symbols or default_symbols()
        if tokens is None:
            tokens = Scanner(source, self.symbols).scan()
        self.tokens = [t for t in tokens if t.kind is not TokenKind.NEWLINE]
        self.current = 0
        self.skipped = []

        self.statement_parsers = {
            TokenKind.IMPORT: self.parse_import,
            TokenKind.FUNCTION: self.parse_function,
            TokenKind.COMPONENT: self.parse_component,
            TokenKind.INTERFACE: self.parse_interface,
            TokenKind.STATE: self.parse_state,
            TokenKind.TEXT: self.parse_text,
            TokenKind.LIST: self.parse_list,
            TokenKind.OBJECT: self.parse_object,
            TokenKind.DOC: self.parse_doc,
            TokenKind.STYLE: self.parse_styled_element,
        }
        self.expression_parsers = {
            TokenKind.STRING_LITERAL: self.parse_leaf(StringLiteral),
            TokenKind.NUMERIC_LITERAL: self.parse_leaf(NumericLiteral),
            TokenKind.NUMBER: self.parse_leaf(NumericLiteral),
            TokenKind.IDENTIFIER: self.parse_leaf(Identifier),
            TokenKind.CORE_WORD: self.parse_leaf(Word),
            TokenKind.TECH_TERM: self.parse_leaf(Word),
            TokenKind.TEXT: self.parse_text,
            TokenKind.LIST: self.parse_list,
            TokenKind.OBJECT: self.parse_object,
        }

    def parse(self) -> Program:
        body = []
        while not self.is_at_end():
            statement = self.parse_statement()
            if statement is not None:
                body.append(statement)
        return Program(start=0, end=len(self.source), body=body, skipped=self.skipped)

    # --- Statements ---

    def parse_statement(self):
        parse = self.statement_parsers.get(self.peek().kind)
        if parse is not None:
            return parse()
        position = self.current
        node = self.parse_expression()
        if node is None and self.current == position:
            # A stray closer at statement level
            self.advance()
        return node

    def parse_import(self) -> ImportDeclaration:
        keyword = self.advance()
        self.consume(TokenKind.OPEN_BRACKET, "'⟨' after 導")
        names = []
        while not self.check(TokenKind.CLOSE_BRACKET) and not self.is_at_end():
            names.append(self.identifier("import name"))
            self.match(TokenKind.COMMA)
        self.consume(TokenKind.CLOSE_BRACKET, "'⟩' after imports")
        return self.finish(ImportDeclaration(names=names), keyword)

    def parse_function(self) -> FunctionDeclaration:
        keyword = self.advance()
        self.consume(TokenKind.OPEN_BRACKET, "'⟨' after 函")
        name = self.identifier("function name")
        parameters = []
        while self.match(TokenKind.COMMA):
            parameters.append(self.identifier("parameter name"))
        self.consume(TokenKind.CLOSE_BRACKET, "'⟩' after function signature")
        body = self.parse_block()
        self.close_fence(TokenKind.FUNCTION, "函")
        return self.finish(FunctionDeclaration(name=name, parameters=parameters, body=body), keyword)

    def parse_component(self) -> ComponentDeclaration:
        keyword = self.advance()
        self.consume(TokenKind.OPEN_BRACKET, "'⟨' after 組")
        name = self.identifier("component name")
        self.consume(TokenKind.CLOSE_BRACKET, "'⟩' after component name")
        body = self.parse_block()
        self.close_fence(TokenKind.COMPONENT, "組")
        return self.finish(ComponentDeclaration(name=name, body=body), keyword)

    def parse_interface(self):
        keyword = self.advance()
        self.consume(TokenKind.OPEN_BRACKET, "'⟨' after 界")

        if self.peek().text == self.symbols.root_marker:
            self.advance()
            self.consume(TokenKind.CLOSE_BRACKET, f"'⟩' after {self.symbols.root_marker}")
            body = self.parse_block()
            self.close_fence(TokenKind.INTERFACE, "界")
            return self.finish(UIInterfaceDeclaration(body=body), keyword)

        name = self.identifier("interface name")
        self.consume(TokenKind.CLOSE_BRACKET, "'⟩' after interface name")
        body = self.parse_block()
        self.close_fence(TokenKind.INTERFACE, "界")
        return self.finish(InterfaceDeclaration(name=name, body=body), keyword)

    def parse_state(self) -> StateBlock:
        keyword = self.advance()
        self.consume(TokenKind.OPEN_BRACKET, "'⟨' after 狀")
        declarations = self.parse_properties("state variable name")
        self.consume(TokenKind.CLOSE_BRACKET, "'⟩' after state declarations")
        return self.finish(StateBlock(declarations=declarations), keyword)

    def parse_doc(self) -> Documentation:
        keyword = self.advance()
        return self.finish(Documentation(text=self.raw_payload("doc content")), keyword)

    def parse_styled_element(self) -> StyledElement:
        keyword = self.advance()
        opening = self.consume(TokenKind.OPEN_STYLE, "'{' after 樣")
        while not self.check(TokenKind.CLOSE_STYLE) and not self.is_at_end():
            self.advance()
        closing = self.consume(TokenKind.CLOSE_STYLE, "'}' after styles")
        style = self.source[opening.end:closing.start].strip()

        self.consume(TokenKind.OPEN_CONTENT, "'⟦' after styles")
        content = []
        while not self.check(TokenKind.CLOSE_CONTENT) and not self.is_at_end():
            statement = self.parse_statement()
            if statement is not None:
                content.append(statement)
        self.consume(TokenKind.CLOSE_CONTENT, "'⟧' after content")
        return self.finish(StyledElement(text=style, content=content), keyword)

    def parse_block(self) -> List:
        """Statements up to the '⟨' that opens the closing fence."""
        statements = []
        while not self.check(TokenKind.OPEN_BRACKET) and not self.is_at_end():
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
        return statements

    def close_fence(self, kind: TokenKind, glyph: str):
        self.consume(TokenKind.OPEN_BRACKET, f"'⟨' before closing {glyph}")
        if self.peek().kind is TokenKind.UNKNOWN and self.peek().text == "/":
            self.advance()
        self.consume(kind, f"'{glyph}' in closing fence")
        self.consume(TokenKind.CLOSE_BRACKET, f"'⟩' after closing {glyph}")

    # --- Expressions ---

    def parse_expression(self):
        token = self.peek()
        parse = self.expression_parsers.get(token.kind)
        if parse is not None:
            return parse()
        if token.kind not in CLOSERS:
            self.advance()  # skip unsupported tokens
            self.skipped.append(Unsupported(
                start=token.start, end=token.end, line=token.line, column=token.column,
                text=token.text, reason=f"skipped {token.kind.value} '{token.text}'",
            ))
        return None

    def parse_leaf(self, node_class):
        def parse():
            token = self.advance()
            return node_class(
                start=token.start, end=token.end, line=token.line, column=token.column,
                text=token.text,
            )
        return parse

    def parse_text(self) -> TextLiteral:
        keyword = self.advance()
        return self.finish(TextLiteral(text=self.raw_payload("text content")), keyword)

    def parse_list(self) -> ArrayLiteral:
        keyword = self.advance()
        self.consume(TokenKind.OPEN_BRACKET, "'⟨' after 列")
        elements = []
        while not self.check(TokenKind.CLOSE_BRACKET) and not self.is_at_end():
            position = self.current
            element = self.parse_expression()
            if element is not None:
                elements.append(element)
            if not self.match(TokenKind.COMMA) and self.current == position:
                self.advance()  # a closer that belongs to no open construct
        self.consume(TokenKind.CLOSE_BRACKET, "'⟩' after list elements")
        return self.finish(ArrayLiteral(elements=elements), keyword)

    def parse_object(self) -> ObjectLiteral:
        keyword = self.advance()
        self.consume(TokenKind.OPEN_BRACKET, "'⟨' after 物")
        properties = self.parse_properties("property name")
        self.consume(TokenKind.CLOSE_BRACKET, "'⟩' after object properties")
        return self.finish(ObjectLiteral(properties=properties), keyword)

    def parse_properties(self, what: str) -> List[Property]:
        properties = []
        while not self.check(TokenKind.CLOSE_BRACKET) and not self.is_at_end():
            key = self.identifier(what)
            self.consume(TokenKind.COLON, f"':' after {what}")
            value = self.parse_expression()
            end = value.end if value is not None else key.end
            properties.append(Property(
                start=key.start, end=end, line=key.line, column=key.column,
                key=key, value=value,
            ))
            self.match(TokenKind.COMMA)
        return properties

    def raw_payload(self, what: str) -> str:
        """Exact source text between '⟨' and the next '⟩'."""
        opening = self.consume(TokenKind.OPEN_BRACKET, f"'⟨' before {what}")
        while not self.check(TokenKind.CLOSE_BRACKET) and not self.is_at_end():
            self.advance()
        closing = self.consume(TokenKind.CLOSE_BRACKET, f"'⟩' after {what}")
        return self.source[opening.end:closing.start].strip()

    # --- Token helpers ---

    def identifier(self, what: str) -> Identifier:
        token = self.consume(TokenKind.IDENTIFIER, what)
        return Identifier(
            start=token.start, end=token.end, line=token.line, column=token.column, text=token.text,
        )

    def finish(self, node, first: Token):
        """Stamp the span from ``first`` to the last consumed token."""
        node.start = first.start
        node.end = self.previous().end
        node.line = first.line
        node.column = first.column
        return node

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def is_at_end(self) -> bool:
        return self.peek().kind is TokenKind.EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def check(self, kind: TokenKind) -> bool:
        if self.is_at_end():
            return False
        return self.peek().kind is kind

    def match(self, *kinds: TokenKind) -> bool:
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind: TokenKind, expected: str) -> Token:
        if self.check(kind):
            return self.advance()
        token = self.peek()
        raise ParseError(
            expected,
            token,
            context=get_line_context(self.source, token.line),
            suggestion=detect_common_error_patterns(self.source),
        )
