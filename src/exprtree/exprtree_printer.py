"""
Renders exprtree ASTs as text.

Two output formats are supported:

    bracket  `(Add  1(Mul  2  3))` for `1+2*3`. Operator nodes render as `(` +
             tag + left + right + `)`; a leaf child renders as two spaces and its
             decimal value. A tree that is a single leaf renders as `(Number(7))`.
    json     The layout `json.dumps(ASTNode.to_dict())` would produce.

Both formats walk the tree with an explicit stack, so long left-associative
chains do not hit the recursion limit.
"""

import json

from exprtree.exprtree_ast import ASTNode
from exprtree.exprtree_constants import NUMBER_TAG, OPERATOR_TAGS


class TreePrinter:
    """Formats ASTs in bracket or JSON form.

    Attributes:
        indent (int | None): JSON indentation width; None for one line.
    """

    def __init__(self, indent: int | None = None) -> None:
        self.indent = indent

    def render(self, node: ASTNode) -> str:
        if node.is_leaf():
            return f"({NUMBER_TAG}({node.value}))"

        parts: list[str] = []
        stack: list[ASTNode | str] = [node]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            elif item.is_leaf():
                parts.append(f"  {item.value}")
            else:
                assert item.operator is not None  # for mypy
                parts.append(f"({OPERATOR_TAGS[item.operator]}")
                stack.append(")")
                stack.extend(reversed(item.children))
        return "".join(parts)

    def _newline(self, level: int) -> str:
        if self.indent is None:
            return ""
        return "\n" + " " * (self.indent * level)

    def render_json(self, node: ASTNode) -> str:
        """Serializes `node` as JSON, byte-identical to `json.dumps(node.to_dict(), indent=...)`.

        The document is assembled with an explicit stack because `json.dumps`
        recurses once per nesting level and fails on long operator chains.

        Args:
            node (ASTNode): The tree to serialize.

        Returns:
            str: The JSON text.
        """
        sep = ", " if self.indent is None else ","
        parts: list[str] = []
        stack: list[tuple[ASTNode, int] | str] = [(node, 0)]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
                continue
            current, level = item
            inner = self._newline(level + 1)
            fields = [
                f'"kind": {json.dumps(current.kind)}',
                f'"operator": {json.dumps(current.operator)}',
                f'"value": {json.dumps(current.value)}',
                '"children": ',
            ]
            head = "{" + inner + (sep + inner).join(fields)
            if current.is_leaf():
                parts.append(head + "[]" + self._newline(level) + "}")
                continue
            child_indent = self._newline(level + 2)
            parts.append(head + "[" + child_indent)
            left, right = current.children
            stack.append(inner + "]" + self._newline(level) + "}")
            stack.append((right, level + 2))
            stack.append(sep + child_indent)
            stack.append((left, level + 2))
        return "".join(parts)


def render(node: ASTNode) -> str:
    """Returns the bracket rendering of `node` using a default TreePrinter."""
    return TreePrinter().render(node)


def print_ast(node: ASTNode) -> None:
    """Writes the bracket rendering of `node` and a newline to stdout."""
    print(render(node))


__all__ = ["TreePrinter", "print_ast", "render"]
