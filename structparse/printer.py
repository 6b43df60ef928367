"""Output forms for a parsed Struct: canonical source, debug dump and JSON-ready dicts."""

from typing import Any, Dict, List

from .parser.ast_nodes import ASTVisitor, Struct, Field, Ident, Array

INDENT = "    "


class SourceRenderer(ASTVisitor):
    """Renders an AST back to canonical surface syntax."""

    def visit_struct(self, node: Struct) -> str:
        if not node.fields:
            return f"struct {node.name} {{}}\n"
        lines = [f"struct {node.name} {{"]
        lines.extend(f"{INDENT}{f.accept(self)}," for f in node.fields)
        lines.append("}")
        return "\n".join(lines) + "\n"

    def visit_field(self, node: Field) -> str:
        return f"{node.name}: {node.ty.accept(self)}"

    def visit_ident(self, node: Ident) -> str:
        return node.name

    def visit_array(self, node: Array) -> str:
        return f"[{node.ty.accept(self)}; {node.len}]"


class DictConverter(ASTVisitor):
    """Converts an AST to plain dicts and lists."""

    def visit_struct(self, node: Struct) -> Dict[str, Any]:
        return {"name": node.name, "fields": [f.accept(self) for f in node.fields]}

    def visit_field(self, node: Field) -> Dict[str, Any]:
        return {"name": node.name, "ty": node.ty.accept(self)}

    def visit_ident(self, node: Ident) -> Dict[str, Any]:
        return {"ident": node.name}

    def visit_array(self, node: Array) -> Dict[str, Any]:
        return {"array": {"ty": node.ty.accept(self), "len": node.len}}


def _pp(node: Any, indent: int) -> List[str]:
    ind = INDENT * indent
    if isinstance(node, Struct):
        lines = [f"{ind}Struct {{", f"{ind}{INDENT}name: {node.name!r},", f"{ind}{INDENT}fields: ["]
        for f in node.fields:
            lines.extend(_pp(f, indent + 2))
        lines += [f"{ind}{INDENT}],", f"{ind}}}"]
        return lines
    if isinstance(node, Field):
        lines = [f"{ind}Field {{", f"{ind}{INDENT}name: {node.name!r},"]
        ty_lines = _pp(node.ty, indent + 1)
        ty_lines[0] = f"{ind}{INDENT}ty: " + ty_lines[0].lstrip()
        lines += ty_lines
        lines.append(f"{ind}}},")
        return lines
    if isinstance(node, Ident):
        return [f"{ind}Ident({node.name!r}),"]
    if isinstance(node, Array):
        lines = [f"{ind}Array {{"]
        ty_lines = _pp(node.ty, indent + 1)
        ty_lines[0] = f"{ind}{INDENT}ty: " + ty_lines[0].lstrip()
        lines += ty_lines
        lines += [f"{ind}{INDENT}len: {node.len},", f"{ind}}},"]
        return lines
    return [ind + repr(node)]


def render(struct: Struct) -> str:
    """Render `struct` in canonical form; parsing the result gives an equal Struct."""
    return struct.accept(SourceRenderer())


def dump(struct: Struct) -> str:
    """Indented debug dump of the AST."""
    return "\n".join(_pp(struct, 0))


def to_dict(struct: Struct) -> Dict[str, Any]:
    return struct.accept(DictConverter())
