"""
Target AST, shared by every output language.

The transformer builds these nodes fresh for each program; the emitter
prints them. Like the source AST, every kind is a pydantic model tagged by
a literal ``kind`` and the unions are discriminated on it.
"""
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class TargetNode(BaseModel):
    pass


# --- Expressions ---

class Identifier(TargetNode):
    kind: Literal["Identifier"] = "Identifier"
    name: str


class StringLiteral(TargetNode):
    kind: Literal["StringLiteral"] = "StringLiteral"
    value: str


class NumericLiteral(TargetNode):
    kind: Literal["NumericLiteral"] = "NumericLiteral"
    value: Union[int, float]


class BooleanLiteral(TargetNode):
    kind: Literal["BooleanLiteral"] = "BooleanLiteral"
    value: bool


class ArrayLiteral(TargetNode):
    kind: Literal["ArrayLiteral"] = "ArrayLiteral"
    elements: List["Expression"] = []


class PropertyAssignment(TargetNode):
    kind: Literal["PropertyAssignment"] = "PropertyAssignment"
    name: str
    value: "Expression"


class ObjectLiteral(TargetNode):
    kind: Literal["ObjectLiteral"] = "ObjectLiteral"
    properties: List[PropertyAssignment] = []


class CallExpression(TargetNode):
    kind: Literal["CallExpression"] = "CallExpression"
    callee: str
    arguments: List["Expression"] = []


class Fragment(TargetNode):
    """Several sibling elements returned together, ``<>...</>``."""
    kind: Literal["Fragment"] = "Fragment"
    children: List["Expression"] = []


Expression = Annotated[
    Union[
        Identifier, StringLiteral, NumericLiteral, BooleanLiteral,
        ArrayLiteral, ObjectLiteral, CallExpression, Fragment,
    ],
    Field(discriminator="kind"),
]


# --- Statements ---

class ImportStatement(TargetNode):
    kind: Literal["ImportStatement"] = "ImportStatement"
    names: List[str] = []
    module: str


class VariableDeclaration(TargetNode):
    kind: Literal["VariableDeclaration"] = "VariableDeclaration"
    name: str
    type: Optional[str] = None
    initializer: Optional[Expression] = None


class VariableStatement(TargetNode):
    kind: Literal["VariableStatement"] = "VariableStatement"
    mutable: bool = True
    declarations: List[VariableDeclaration] = []


class ExpressionStatement(TargetNode):
    kind: Literal["ExpressionStatement"] = "ExpressionStatement"
    expression: Expression


class ReturnStatement(TargetNode):
    kind: Literal["ReturnStatement"] = "ReturnStatement"
    expression: Optional[Expression] = None


class Comment(TargetNode):
    kind: Literal["Comment"] = "Comment"
    text: str


class Member(BaseModel):
    name: str
    type: str


class InterfaceDeclaration(TargetNode):
    kind: Literal["InterfaceDeclaration"] = "InterfaceDeclaration"
    name: str
    members: List[Member] = []


class FunctionDeclaration(TargetNode):
    kind: Literal["FunctionDeclaration"] = "FunctionDeclaration"
    name: str
    parameters: List[str] = []
    body: List["Statement"] = []
    exported: bool = False


Statement = Annotated[
    Union[
        ImportStatement, FunctionDeclaration, InterfaceDeclaration,
        VariableStatement, ExpressionStatement, ReturnStatement, Comment,
    ],
    Field(discriminator="kind"),
]


class SourceFile(TargetNode):
    kind: Literal["SourceFile"] = "SourceFile"
    statements: List[Statement] = []


TARGET_KINDS = frozenset({
    "SourceFile", "ImportStatement", "FunctionDeclaration", "InterfaceDeclaration",
    "VariableStatement", "VariableDeclaration", "ExpressionStatement",
    "ReturnStatement", "Comment", "StringLiteral", "NumericLiteral",
    "BooleanLiteral", "ArrayLiteral", "ObjectLiteral", "PropertyAssignment",
    "Identifier", "CallExpression", "Fragment",
})


for _model in (
    ArrayLiteral, PropertyAssignment, ObjectLiteral, CallExpression, Fragment,
    VariableDeclaration, ExpressionStatement, ReturnStatement, FunctionDeclaration,
    SourceFile,
):
    _model.model_rebuild()
