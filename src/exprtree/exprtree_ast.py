"""
Defines the abstract syntax tree (AST) node structure for exprtree.

Classes:
    ASTNode:
        Common base for the two node shapes. Provides equality, pre-order
        traversal and dictionary serialization.

    NumberNode:
        A leaf holding a non-negative integer literal. It has no children and
        no operator.

    BinaryNode:
        An operator (`ADD`, `SUB`, `MUL` or `DIV`) with exactly two children.
        It has no value.

    ASTDict:
        TypedDict representation of a serialized node, suitable for JSON output.

A tree is either a single NumberNode or a BinaryNode whose children are again
trees. Parentheses never appear as nodes; they only affect the shape.

Example:
    BinaryNode("MUL", BinaryNode("ADD", NumberNode(1), NumberNode(2)), NumberNode(3))
"""

from collections.abc import Iterator
from typing import Any, TypedDict

from exprtree.exprtree_constants import operator_tokens


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an ASTNode used for serialization.

    Fields:
        kind (str): "number" or "binary".
        operator (str | None): Operator token type for binary nodes.
        value (int | None): Literal value for number nodes.
        children (list[ASTDict]): Zero or two serialized children.
    """

    kind: str
    operator: str | None
    value: int | None
    children: list["ASTDict"]


class ASTNode:
    """
    Base class for exprtree AST nodes.

    Subclasses set `kind`, `operator`, `value` and `children`; the base class
    only implements behaviour shared by both shapes.

    Attributes:
        kind (str): "number" or "binary".
        operator (str | None): Operator token type, None on leaves.
        value (int | None): Literal value, None on operator nodes.
        children (tuple[ASTNode, ...]): Empty for leaves, (left, right) otherwise.
    """

    kind: str
    operator: str | None
    value: int | None
    children: tuple["ASTNode", ...]

    def is_leaf(self) -> bool:
        """Checks whether this node is a number leaf.

        Returns:
            bool: True for a NumberNode (no children), False for a BinaryNode.
        """
        return not self.children

    def preorder(self) -> Iterator["ASTNode"]:
        """Yields this node, then every node of the left subtree, then the right.

        The walk uses an explicit stack, so arbitrarily deep trees are safe.

        Returns:
            Iterator[ASTNode]: Nodes in depth-first, pre-order sequence.
        """
        stack: list[ASTNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def leaf_values(self) -> list[int]:
        """Returns the literal values of all leaves, left to right."""
        return [n.value for n in self.preorder() if n.value is not None]

    def depth(self) -> int:
        """Number of operator levels above the deepest leaf (0 for a leaf)."""
        deepest = 0
        stack: list[tuple[ASTNode, int]] = [(self, 0)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children)
        return deepest

    def _signature(self) -> tuple[str, str | None, int | None, int]:
        return (self.kind, self.operator, self.value, len(self.children))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        pairs: list[tuple[ASTNode, ASTNode]] = [(self, other)]
        while pairs:
            mine, theirs = pairs.pop()
            if mine._signature() != theirs._signature():
                return False
            pairs.extend(zip(mine.children, theirs.children))
        return True

    def __hash__(self) -> int:
        # Pre-order signatures with arities determine the tree uniquely.
        return hash(tuple(n._signature() for n in self.preorder()))

    def to_dict(self) -> ASTDict:
        """Converts the node and all descendants into nested dictionaries.

        Built with an explicit stack, so long operator chains do not hit the
        recursion limit.

        Returns:
            ASTDict: A dictionary with `kind`, `operator`, `value` and `children` keys.
        """
        root: ASTDict | None = None
        stack: list[tuple[ASTNode, list[ASTDict] | None]] = [(self, None)]
        while stack:
            node, siblings = stack.pop()
            entry: ASTDict = {
                "kind": node.kind,
                "operator": node.operator,
                "value": node.value,
                "children": [],
            }
            if siblings is None:
                root = entry
            else:
                siblings.append(entry)
            stack.extend((child, entry["children"]) for child in reversed(node.children))
        assert root is not None  # for mypy
        return root


class NumberNode(ASTNode):
    """A leaf carrying a non-negative integer literal."""

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"NumberNode value must be an int, got {value!r}")
        if value < 0:
            raise ValueError(f"NumberNode value must be non-negative, got {value}")
        self.kind = "number"
        self.operator = None
        self.value = value
        self.children = ()

    def __repr__(self) -> str:
        return f"NumberNode({self.value})"


class BinaryNode(ASTNode):
    """An operator node with exactly two children."""

    def __init__(self, operator: str, left: ASTNode, right: ASTNode):
        if operator not in operator_tokens:
            raise ValueError(
                f"BinaryNode operator must be one of {operator_tokens}, got {operator!r}"
            )
        if not isinstance(left, ASTNode) or not isinstance(right, ASTNode):
            raise TypeError("BinaryNode children must be ASTNode instances")
        self.kind = "binary"
        self.operator = operator
        self.value = None
        self.children = (left, right)

    @property
    def left(self) -> ASTNode:
        return self.children[0]

    @property
    def right(self) -> ASTNode:
        return self.children[1]

    def __repr__(self) -> str:
        parts: list[str] = []
        stack: list[ASTNode | str] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            elif item.is_leaf():
                parts.append(repr(item))
            else:
                parts.append(f"BinaryNode({item.operator}, ")
                stack.extend([")", item.children[1], ", ", item.children[0]])
        return "".join(parts)


__all__ = ["ASTDict", "ASTNode", "BinaryNode", "NumberNode"]
