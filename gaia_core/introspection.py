"""
GaiaScript Outline Extraction - Introspection for declarations.

This module contains the OutlineExtractor class that extracts declaration
signatures and metadata from a parsed GaiaScript Program for editor tooling,
documentation and analysis.
"""


class OutlineExtractor:
    """
    Extracts outline information from a GaiaScript AST.

    Unlike the Transformer, which builds target code, OutlineExtractor
    only records structural information (what is declared, its parameters
    or state keys, and where) and ignores implementation details.
    Declarations nested in a body are outlined too, after their parent.
    """

    def extract(self, program):
        entries = []
        for node in program.body:
            self.visit(node, entries)
        return entries

    def visit(self, node, entries):
        method = getattr(self, f"extract_{node.kind}", None)
        if method is None:
            return
        entries.append(method(node))
        for child in getattr(node, "body", []):
            self.visit(child, entries)

    def extract_FunctionDeclaration(self, node):
        return {
            "type": "function",
            "name": node.name.text,
            "params": [p.text for p in node.parameters],
            "line": node.line,
        }

    def extract_ComponentDeclaration(self, node):
        return {"type": "component", "name": node.name.text, "line": node.line}

    def extract_InterfaceDeclaration(self, node):
        return {"type": "interface", "name": node.name.text, "line": node.line}

    def extract_UIInterfaceDeclaration(self, node):
        return {"type": "ui-interface", "name": "App", "line": node.line}

    def extract_StateBlock(self, node):
        return {
            "type": "state",
            "keys": [d.key.text for d in node.declarations],
            "line": node.line,
        }


def outline(program):
    """One entry per declaration in ``program``, in source order."""
    return OutlineExtractor().extract(program)
