"""Tree-sitter based parser for Go source units.

Extracts top-level function/method declarations with byte ranges, the
call sites inside them, and a compact structural summary. Callee names are
purely textual; no type resolution is attempted.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from contextify.parser.models import ASTSummary, CallSite, Declaration, ParsedUnit

logger = logging.getLogger("contextify.parser")

_DECLARATION_TYPES = ("function_declaration", "method_declaration")


@lru_cache(maxsize=1)
def _go_language():
    """Get the tree-sitter Language object for Go."""
    import tree_sitter_go
    from tree_sitter import Language

    return Language(tree_sitter_go.language())


def _parse_tree(source: bytes):
    """Parse Go source, returning None when the tree has syntax errors."""
    from tree_sitter import Parser

    # Parsers hold state, so each call (and each worker thread) gets its own.
    parser = Parser(_go_language())
    tree = parser.parse(source)
    if tree.root_node.has_error:
        return None
    return tree


def _text(node) -> str:
    return node.text.decode("utf-8", errors="replace")


def receiver_type_text(node) -> str:
    """Render a receiver type node as plain text.

    Handles identifiers, pointers and package-qualified types. Generic
    instantiations and parenthesized types keep their source text, so
    `*List[T]` stays `*List[T]`. Anything else renders as an empty string.
    """
    if node is None:
        return ""
    if node.type == "type_identifier":
        return _text(node)
    if node.type == "pointer_type":
        inner = node.named_children[0] if node.named_children else None
        return "*" + receiver_type_text(inner)
    if node.type == "qualified_type":
        package = node.child_by_field_name("package")
        name = node.child_by_field_name("name")
        if package is None or name is None:
            return ""
        return f"{_text(package)}.{_text(name)}"
    if node.type in ("generic_type", "parenthesized_type"):
        return _text(node)
    return ""


def _receiver_text(method_node) -> str:
    receiver = method_node.child_by_field_name("receiver")
    if receiver is None:
        return ""
    for param in receiver.named_children:
        if param.type == "parameter_declaration":
            return receiver_type_text(param.child_by_field_name("type"))
    return ""


def _qualified_name(decl_node) -> str:
    name_node = decl_node.child_by_field_name("name")
    if name_node is None:
        return ""
    name = _text(name_node)
    if decl_node.type == "method_declaration":
        return f"{_receiver_text(decl_node)}.{name}"
    return name


def callee_name(call_node) -> str:
    """Extract the textual callee of a call_expression.

    `Foo(x)` -> "Foo"; `pkg.Foo(x)` / `recv.Foo(x)` -> "pkg.Foo" / "recv.Foo";
    `a.b.Foo(x)` or `f().Foo(x)` -> "Foo". Other shapes yield "".
    """
    func = call_node.child_by_field_name("function")
    if func is None:
        return ""
    if func.type == "identifier":
        return _text(func)
    if func.type == "selector_expression":
        operand = func.child_by_field_name("operand")
        field = func.child_by_field_name("field")
        if field is None:
            return ""
        if operand is not None and operand.type == "identifier":
            return f"{_text(operand)}.{_text(field)}"
        return _text(field)
    return ""


def _iter_calls(root):
    """Yield every call_expression node under root, in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "call_expression":
            yield node
        stack.extend(reversed(node.children))


def parse_go_unit(path: str, source: bytes) -> ParsedUnit:
    """Parse a Go unit into its top-level declarations and call sites.

    Never raises: a unit that fails to parse comes back with `errors` set and
    no declarations, which excludes it from the symbol graph.
    """
    result = ParsedUnit(path=path)

    try:
        tree = _parse_tree(source)
    except Exception as e:
        result.errors.append(f"tree-sitter parse error: {e}")
        return result
    if tree is None:
        result.errors.append("syntax error")
        return result

    root = tree.root_node
    for child in root.children:
        if child.type not in _DECLARATION_TYPES:
            continue
        qualified = _qualified_name(child)
        if not qualified:
            continue
        result.declarations.append(
            Declaration(
                qualified_name=qualified,
                path=path,
                start=child.start_byte,
                end=child.end_byte,
            )
        )

    for call in _iter_calls(root):
        callee = callee_name(call)
        if callee:
            result.calls.append(CallSite(callee=callee, offset=call.start_byte))

    return result


def summarize_go_source(source: bytes) -> ASTSummary | None:
    """Build a structural summary of a Go file, or None if it doesn't parse."""
    try:
        tree = _parse_tree(source)
    except Exception as e:
        logger.debug("Summary parse failed: %s", e)
        return None
    if tree is None:
        return None

    summary = ASTSummary()
    for child in tree.root_node.children:
        if child.type == "package_clause":
            for part in child.named_children:
                if part.type == "package_identifier":
                    summary.package = _text(part)
        elif child.type == "import_declaration":
            summary.imports.extend(_import_paths(child))
        elif child.type == "type_declaration":
            for spec in child.named_children:
                if spec.type != "type_spec":
                    continue
                type_node = spec.child_by_field_name("type")
                name_node = spec.child_by_field_name("name")
                if type_node is not None and type_node.type == "struct_type" and name_node:
                    summary.structs.append(_text(name_node))
        elif child.type in _DECLARATION_TYPES:
            name_node = child.child_by_field_name("name")
            if name_node is None:
                continue
            if child.type == "method_declaration":
                summary.functions.append(f"({_receiver_text(child)}).{_text(name_node)}")
            else:
                summary.functions.append(_text(name_node))

    return summary


def _import_paths(import_decl) -> list[str]:
    paths = []
    stack = [import_decl]
    while stack:
        node = stack.pop()
        if node.type == "import_spec":
            path_node = node.child_by_field_name("path")
            if path_node is not None:
                paths.append(_text(path_node).strip('"`'))
            continue
        stack.extend(reversed(node.named_children))
    return paths
