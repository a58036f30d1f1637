"""
GaiaScript Emitter - prints a target SourceFile as source text.

TypeScript and JavaScript share one indentation-aware Printer (the
``typed`` flag turns type annotations and ``export`` on or off). Go goes
through GoRenderer, which looks up one ``render_<Kind>`` method per node
kind and degrades a kind it has no method for to a passthrough comment.
"""
import json
import math
import re
from typing import List, Optional

from pydantic import BaseModel

from gaia_core.errors import EmissionError, GaiaCompileError
from gaia_core.transformer import ELEMENT_FACTORY


TARGETS = ("typescript", "javascript", "go")

_identifier = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def quote(value):
    return json.dumps(value, ensure_ascii=False)


class Printer:
    """TypeScript printer; with ``typed=False`` it prints plain JavaScript."""

    def __init__(self, typed=True, indent_unit="  "):
        self.typed = typed
        self.indent_unit = indent_unit
        self.indent = 0
        self.lines = []

    def print(self, source_file):
        self.indent = 0
        self.lines = []
        for statement in source_file.statements:
            self.statement(statement)
        return "\n".join(self.lines) + "\n" if self.lines else ""

    def write(self, text):
        self.lines.append(self.indent_unit * self.indent + text)

    # --- Statements ---

    def statement(self, node):
        kind = node.kind
        if kind == "ImportStatement":
            self.write(f"import {{ {', '.join(node.names)} }} from {quote(node.module)};")
        elif kind == "FunctionDeclaration":
            self.function(node)
        elif kind == "InterfaceDeclaration":
            if not self.typed:
                return
            self.write(f"interface {node.name} {{")
            self.indent += 1
            for member in node.members:
                self.write(f"{member.name}: {member.type};")
            self.indent -= 1
            self.write("}")
        elif kind == "VariableStatement":
            keyword = "let" if node.mutable else "const"
            self.write(f"{keyword} {', '.join(self.declaration(d) for d in node.declarations)};")
        elif kind == "ExpressionStatement":
            expression = self.expression(node.expression)
            if node.expression.kind == "ObjectLiteral":
                # a leading brace would open a block
                expression = f"({expression})"
            self.write(f"{expression};")
        elif kind == "ReturnStatement":
            if node.expression is None:
                self.write("return;")
            else:
                self.write(f"return {self.expression(node.expression)};")
        elif kind == "Comment":
            for line in node.text.splitlines() or [""]:
                self.write(f"// {line}".rstrip())
        else:
            raise EmissionError(kind, "typescript" if self.typed else "javascript")

    def function(self, node):
        if self.typed:
            params = ", ".join(f"{p}: any" for p in node.parameters)
        else:
            params = ", ".join(node.parameters)
        prefix = "export " if node.exported and self.typed else ""
        self.write(f"{prefix}function {node.name}({params}) {{")
        self.indent += 1
        for statement in node.body:
            self.statement(statement)
        self.indent -= 1
        self.write("}")

    def declaration(self, node):
        text = node.name
        if self.typed and node.type:
            text += f": {node.type}"
        if node.initializer is not None:
            text += f" = {self.expression(node.initializer)}"
        return text

    # --- Expressions ---

    def expression(self, node):
        kind = node.kind
        if kind == "Identifier":
            return node.name
        if kind == "StringLiteral":
            return quote(node.value)
        if kind == "NumericLiteral":
            return self.number(node.value)
        if kind == "BooleanLiteral":
            return "true" if node.value else "false"
        if kind == "ArrayLiteral":
            return "[" + ", ".join(self.expression(e) for e in node.elements) + "]"
        if kind == "ObjectLiteral":
            if not node.properties:
                return "{}"
            return "{ " + ", ".join(self.expression(p) for p in node.properties) + " }"
        if kind == "PropertyAssignment":
            name = node.name if _identifier.match(node.name) else quote(node.name)
            return f"{name}: {self.expression(node.value)}"
        if kind == "CallExpression":
            return f"{node.callee}(" + ", ".join(self.expression(a) for a in node.arguments) + ")"
        if kind == "Fragment":
            return "<>" + "".join("{" + self.expression(c) + "}" for c in node.children) + "</>"
        raise EmissionError(kind, "typescript" if self.typed else "javascript")

    @staticmethod
    def number(value):
        if isinstance(value, float):
            if math.isinf(value):
                return "Infinity" if value > 0 else "-Infinity"
            if value.is_integer():
                return str(int(value))
        return repr(value)


GO_TYPES = {"string": "string", "number": "float64", "boolean": "bool"}

# Go counterpart of the runtime element factory, added when a program calls it
ELEMENT_FUNC = (
    f"func {ELEMENT_FACTORY}(tag string, props map[string]interface{{}}, children ...interface{{}}) interface{{}} {{\n"
    '\treturn map[string]interface{}{"tag": tag, "props": props, "children": children}\n'
    "}"
)


class GoRenderer:
    """
    Renders a target SourceFile as a Go ``main`` package.

    Kinds without a ``render_<Kind>`` method come out as
    ``// unsupported: <Kind>`` and are recorded in ``degraded``.
    """

    def __init__(self):
        self.indent = 0
        self.needs_math = False
        self.callees = set()
        self.degraded = []

    def ind(self):
        return "\t" * self.indent

    def render(self, node):
        method = getattr(self, f"render_{node.kind}", None)
        if method is None:
            return self.unsupported(node.kind)
        return method(node)

    def unsupported(self, kind):
        self.degraded.append(EmissionError(kind, "go"))
        return f"// unsupported: {kind}"

    def render_SourceFile(self, node):
        self.indent = 0
        self.needs_math = False
        self.callees = set()
        names = {s.name for s in node.statements if s.kind == "FunctionDeclaration"}

        # Go only allows declarations at package level
        body = [self.render(s) for s in node.statements if s.kind != "ExpressionStatement"]
        self.indent = 1
        loose = [self.render(s) for s in node.statements if s.kind == "ExpressionStatement"]
        self.indent = 0

        needs_fmt = "main" not in names
        if needs_fmt:
            main = ['func main() {', '\tfmt.Println("GaiaScript application started")'] + loose
            if "App" in names:
                main.append("\tApp()")
            main.append("}")
            body.append("\n".join(main))
        elif loose:
            body.append("\n".join(["func init() {"] + loose + ["}"]))

        if ELEMENT_FACTORY in self.callees and ELEMENT_FACTORY not in names:
            body.append(ELEMENT_FUNC)

        imports = [name for name, used in (("fmt", needs_fmt), ("math", self.needs_math)) if used]
        header = "package main\n"
        if len(imports) == 1:
            header += f'\nimport "{imports[0]}"\n'
        elif imports:
            header += "\nimport (\n" + "".join(f'\t"{name}"\n' for name in imports) + ")\n"
        return header + "\n" + "\n\n".join(body) + "\n"

    def render_ImportStatement(self, node):
        module = node.module.lstrip("@")
        return f'{self.ind()}// import "github.com/{module}"'

    def render_FunctionDeclaration(self, node):
        params = ", ".join(f"{p} interface{{}}" for p in node.parameters)
        returns = any(s.kind == "ReturnStatement" and s.expression is not None for s in node.body)
        signature = f"({params})" + (" interface{}" if returns else "")
        nested = self.indent > 0
        if nested:
            # named funcs are package level only, so bind a closure
            lines = [f"{self.ind()}{node.name} := func{signature} {{"]
        else:
            lines = [f"{self.ind()}func {node.name}{signature} {{"]
        self.indent += 1
        lines.extend(self.render(s) for s in node.body)
        self.indent -= 1
        lines.append(f"{self.ind()}}}")
        if nested:
            lines.append(f"{self.ind()}_ = {node.name}")
        return "\n".join(lines)

    def render_InterfaceDeclaration(self, node):
        if not node.members:
            return self.ind() + self.unsupported(node.kind)
        lines = [f"{self.ind()}type {node.name} struct {{"]
        for member in node.members:
            go_type = GO_TYPES.get(member.type, "[]interface{}" if member.type.endswith("[]") else "interface{}")
            lines.append(f"{self.ind()}\t{member.name} {go_type}")
        lines.append(f"{self.ind()}}}")
        return "\n".join(lines)

    def render_VariableStatement(self, node):
        return "\n".join(self.render(d) for d in node.declarations)

    def render_VariableDeclaration(self, node):
        if node.initializer is None:
            line = f"{self.ind()}var {node.name} interface{{}}"
        else:
            line = f"{self.ind()}var {node.name} = {self.render(node.initializer)}"
        if self.indent > 0:
            # unused locals do not compile
            line += f"\n{self.ind()}_ = {node.name}"
        return line

    def render_ExpressionStatement(self, node):
        expression = self.render(node.expression)
        if node.expression.kind == "CallExpression":
            return self.ind() + expression
        return f"{self.ind()}_ = {expression}"

    def render_ReturnStatement(self, node):
        if node.expression is None:
            return f"{self.ind()}return"
        expression = self.render(node.expression)
        if expression.startswith("//"):
            return f"{self.ind()}return nil {expression}"
        return f"{self.ind()}return {expression}"

    def render_Comment(self, node):
        return "\n".join(f"{self.ind()}// {line}".rstrip() for line in node.text.splitlines() or [""])

    # --- Expressions ---

    def render_Identifier(self, node):
        return node.name

    def render_StringLiteral(self, node):
        return quote(node.value)

    def render_NumericLiteral(self, node):
        value = node.value
        if isinstance(value, float) and math.isinf(value):
            self.needs_math = True
            return "math.Inf(1)" if value > 0 else "math.Inf(-1)"
        return Printer.number(value)

    def render_BooleanLiteral(self, node):
        return "true" if node.value else "false"

    def render_ArrayLiteral(self, node):
        return "[]interface{}{" + ", ".join(self.render(e) for e in node.elements) + "}"

    def render_ObjectLiteral(self, node):
        return "map[string]interface{}{" + ", ".join(self.render(p) for p in node.properties) + "}"

    def render_PropertyAssignment(self, node):
        return f"{quote(node.name)}: {self.render(node.value)}"

    def render_CallExpression(self, node):
        self.callees.add(node.callee)
        return f"{node.callee}(" + ", ".join(self.render(a) for a in node.arguments) + ")"


class EmitResult(BaseModel):
    target: str
    text: str = ""
    errors: List[str] = []
    diagnostics: List[str] = []

    @property
    def typescript(self) -> Optional[str]:
        return self.text if self.target == "typescript" else None

    @property
    def javascript(self) -> Optional[str]:
        return self.text if self.target == "javascript" else None

    @property
    def go(self) -> Optional[str]:
        return self.text if self.target == "go" else None


class Emitter:
    """
    Emits a target SourceFile for one target language.

    Never raises: problems land in ``EmitResult.errors`` (fatal for the
    compile) or ``EmitResult.diagnostics`` (output degraded but usable).
    With ``strict=True`` a degradation is reported as an error instead.
    """

    def __init__(self, strict=False):
        self.strict = strict

    def emit(self, source_file, target="typescript"):
        result = EmitResult(target=target)
        if target not in TARGETS:
            result.errors.append(f"Unknown target '{target}'. Expected one of: {', '.join(TARGETS)}")
            return result

        try:
            if target == "go":
                renderer = GoRenderer()
                result.text = renderer.render(source_file)
                degraded = [str(e) for e in renderer.degraded]
                if self.strict:
                    result.errors.extend(degraded)
                else:
                    result.diagnostics.extend(degraded)
            else:
                result.text = Printer(typed=(target == "typescript")).print(source_file)
        except GaiaCompileError as e:
            result.errors.append(str(e))
        return result
