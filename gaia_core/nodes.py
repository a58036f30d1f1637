"""
GaiaScript source AST.

Every node kind is its own pydantic model tagged by a literal ``kind``; the
``Statement`` and ``Expression`` unions are closed and discriminated on that
tag. Nodes carry their span (``start``/``end`` offsets plus the line and
column of the first token), the raw ``text`` where the construct has one,
and the ``expanded`` text filled in once by the transformer.
"""
from typing import Annotated, Iterator, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class Node(BaseModel):
    start: int = 0
    end: int = 0
    line: int = 1
    column: int = 1
    text: Optional[str] = None
    expanded: Optional[str] = None

    def children(self) -> Iterator["Node"]:
        """Direct children in source order."""
        return iter(())

    def walk(self) -> Iterator["Node"]:
        """This node and all its descendants, depth first, in source order."""
        yield self
        for child in self.children():
            yield from child.walk()


# --- Expressions ---

class Identifier(Node):
    kind: Literal["Identifier"] = "Identifier"


class StringLiteral(Node):
    kind: Literal["StringLiteral"] = "StringLiteral"


class NumericLiteral(Node):
    kind: Literal["NumericLiteral"] = "NumericLiteral"
    value: Optional[Union[int, float]] = None


class Word(Node):
    """A core word or technical term glyph standing for an English word."""
    kind: Literal["Word"] = "Word"


class TextLiteral(Node):
    kind: Literal["TextLiteral"] = "TextLiteral"


class ArrayLiteral(Node):
    kind: Literal["ArrayLiteral"] = "ArrayLiteral"
    elements: List["Expression"] = []

    def children(self):
        return iter(self.elements)


class Property(Node):
    """``key: value`` pair inside an object literal or a state block."""
    kind: Literal["Property"] = "Property"
    key: Identifier
    value: Optional["Expression"] = None

    def children(self):
        yield self.key
        if self.value is not None:
            yield self.value


class ObjectLiteral(Node):
    kind: Literal["ObjectLiteral"] = "ObjectLiteral"
    properties: List[Property] = []

    def children(self):
        return iter(self.properties)


# --- Statements ---

class Documentation(Node):
    kind: Literal["Documentation"] = "Documentation"


class ImportDeclaration(Node):
    kind: Literal["ImportDeclaration"] = "ImportDeclaration"
    names: List[Identifier] = []

    def children(self):
        return iter(self.names)


class StateBlock(Node):
    kind: Literal["StateBlock"] = "StateBlock"
    declarations: List[Property] = []

    def children(self):
        return iter(self.declarations)


class StyledElement(Node):
    """``樣{declarations}⟦content⟧``; ``text`` holds the raw declarations."""
    kind: Literal["StyledElement"] = "StyledElement"
    content: List["Statement"] = []

    def children(self):
        return iter(self.content)


class FunctionDeclaration(Node):
    kind: Literal["FunctionDeclaration"] = "FunctionDeclaration"
    name: Identifier
    parameters: List[Identifier] = []
    body: List["Statement"] = []

    def children(self):
        yield self.name
        yield from self.parameters
        yield from self.body


class ComponentDeclaration(Node):
    kind: Literal["ComponentDeclaration"] = "ComponentDeclaration"
    name: Identifier
    body: List["Statement"] = []

    def children(self):
        yield self.name
        yield from self.body


class InterfaceDeclaration(Node):
    kind: Literal["InterfaceDeclaration"] = "InterfaceDeclaration"
    name: Identifier
    body: List["Statement"] = []

    def children(self):
        yield self.name
        yield from self.body


class UIInterfaceDeclaration(Node):
    """The root UI interface, ``界⟨✱⟩ ... ⟨/界⟩``."""
    kind: Literal["UIInterfaceDeclaration"] = "UIInterfaceDeclaration"
    body: List["Statement"] = []

    def children(self):
        return iter(self.body)


class Unsupported(Node):
    """
    A construct the pipeline keeps a span for but cannot translate.

    The parser records one per token it skips in expression position.
    """
    kind: Literal["Unsupported"] = "Unsupported"
    reason: str = ""


Expression = Annotated[
    Union[
        Identifier, StringLiteral, NumericLiteral, Word,
        TextLiteral, ArrayLiteral, ObjectLiteral, Unsupported,
    ],
    Field(discriminator="kind"),
]

Statement = Annotated[
    Union[
        ImportDeclaration, FunctionDeclaration, ComponentDeclaration,
        UIInterfaceDeclaration, InterfaceDeclaration, StateBlock,
        TextLiteral, ArrayLiteral, ObjectLiteral, StyledElement,
        Documentation, Identifier, NumericLiteral, StringLiteral, Word,
        Unsupported,
    ],
    Field(discriminator="kind"),
]


class Program(Node):
    kind: Literal["Program"] = "Program"
    body: List[Statement] = []
    # tokens dropped from expression position, kept apart from the tree
    skipped: List[Unsupported] = []

    def children(self):
        return iter(self.body)


NODE_KINDS = frozenset({
    "Program", "ImportDeclaration", "FunctionDeclaration", "ComponentDeclaration",
    "UIInterfaceDeclaration", "InterfaceDeclaration", "StateBlock", "TextLiteral",
    "ArrayLiteral", "ObjectLiteral", "StyledElement", "Documentation", "Identifier",
    "NumericLiteral", "StringLiteral", "Word", "Property", "Unsupported",
})


for _model in (
    ArrayLiteral, Property, ObjectLiteral, StyledElement, FunctionDeclaration,
    ComponentDeclaration, InterfaceDeclaration, UIInterfaceDeclaration, Program,
):
    _model.model_rebuild()
