"""
exprtree Parser

Parses arithmetic expression tokens into abstract syntax trees (ASTs).

The parser is a hand-written recursive-descent parser driven by a single
token of lookahead held in the `Lexer`. It never looks at characters itself.

Grammar
-------
    expr   → term (('+' | '-') term)*
    term   → factor (('*' | '/') factor)*
    factor → NUMBER | '(' expr ')'

Both loops fold to the left, so same-precedence operators associate left
(`1-2-3` is `(1-2)-3`). `*` and `/` bind tighter than `+` and `-` because
`expr` reaches numbers only through `term`.

Entry Points
------------
- `Parser.parse()`: Parse a complete input; None for empty input.
- `parse_expression(source)`: Convenience wrapper around `Parser.parse()`.
- `try_parse(source)`: Same, but returns a `ParseOutcome` instead of raising.

Raises
------
ExpressionError
    One of `LexicalError`, `MissingOperandError`, `UnbalancedParenthesisError`,
    `TrailingInputError` or `NestingTooDeepError`. Parsing fails fast; there is
    no recovery.
"""

from __future__ import annotations

from exprtree.exprtree_ast import ASTNode, BinaryNode, NumberNode
from exprtree.exprtree_constants import additive_tokens, multiplicative_tokens
from exprtree.exprtree_errors import (
    ExpressionError,
    MissingOperandError,
    NestingTooDeepError,
    TrailingInputError,
    UnbalancedParenthesisError,
)
from exprtree.exprtree_lexer import CharacterStream, Lexer, Token


class Parser:
    """
    exprtree Parser Class

    Owns one `Lexer` for the duration of one parse.

    Attributes
    ----------
    lexer : Lexer
        Token source and lookahead buffer.

    Methods
    -------
    parse() -> ASTNode | None
        Parse the whole input, rejecting trailing tokens.
    parse_expr() -> ASTNode
        Parse a sum or difference of terms.
    parse_term() -> ASTNode
        Parse a product or quotient of factors.
    parse_factor() -> ASTNode
        Parse a number or a parenthesized expression.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer

    @classmethod
    def from_source(cls, source: str) -> Parser:
        """Builds a parser that owns a new lexer over `source`.

        Args:
            source (str): The expression text.

        Returns:
            Parser: A parser ready for `parse()`.
        """
        return cls(Lexer(CharacterStream(source)))

    def current(self) -> Token | None:
        return self.lexer.current

    def advance(self) -> Token | None:
        return self.lexer.advance()

    def _position(self) -> tuple[int, int]:
        return self.lexer.token_line, self.lexer.token_col

    def parse(self) -> ASTNode | None:
        """Parse a full expression and require that all input is consumed.

        Returns None when the input is empty or whitespace only.

        Raises:
            ExpressionError: On any lexical or syntax error. Parentheses nested
                past the interpreter's recursion limit raise `NestingTooDeepError`.
        """
        if self.advance() is None:
            return None
        try:
            node = self.parse_expr()
        except RecursionError as e:
            line, col = self._position()
            raise NestingTooDeepError(
                "Expression nests too deeply to parse", line, col
            ) from e
        if not self.lexer.exhausted():
            line, col = self._position()
            raise TrailingInputError(
                f"Unexpected trailing input starting with {self.current()}", line, col
            )
        return node

    def parse_expr(self) -> ASTNode:
        left = self.parse_term()
        while True:
            tok = self.current()
            if tok is None or tok.type not in additive_tokens:
                break
            self.advance()
            right = self.parse_term()
            left = BinaryNode(tok.type, left, right)
        return left

    def parse_term(self) -> ASTNode:
        left = self.parse_factor()
        while True:
            tok = self.current()
            if tok is None or tok.type not in multiplicative_tokens:
                break
            self.advance()
            right = self.parse_factor()
            left = BinaryNode(tok.type, left, right)
        return left

    def parse_factor(self) -> ASTNode:
        tok = self.current()

        if tok is not None and tok.type == "LPAREN":
            self.advance()
            node = self.parse_expr()
            closing = self.current()
            if closing is None or closing.type != "RPAREN":
                line, col = self._position()
                found = "end of input" if closing is None else repr(closing)
                raise UnbalancedParenthesisError(
                    f"Expected ')' to close '(', got {found}", line, col
                )
            self.advance()
            return node

        if tok is not None and tok.type == "NUMBER":
            assert isinstance(tok.value, int)  # for mypy
            node = NumberNode(tok.value)
            self.advance()
            return node

        line, col = self._position()
        found = "end of input" if tok is None else repr(tok)
        raise MissingOperandError(
            f"Expected a number or '(', got {found}", line, col
        )


class ParseOutcome:
    """Result of `try_parse`: either a tree (possibly None) or an error.

    Attributes:
        tree (ASTNode | None): The parsed tree; None for empty input or on failure.
        error (ExpressionError | None): The failure, if any.
    """

    def __init__(
        self, tree: ASTNode | None = None, error: ExpressionError | None = None
    ):
        self.tree = tree
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> str | None:
        """The error kind tag, or None on success."""
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> ASTNode | None:
        """Returns the tree, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.tree

    def __repr__(self) -> str:
        if self.error is not None:
            return f"ParseOutcome(error={self.kind}: {self.error})"
        return f"ParseOutcome(tree={self.tree!r})"


def parse_expression(source: str) -> ASTNode | None:
    """Parse `source` into a tree, or None if it holds no tokens.

    Raises:
        ExpressionError: On any lexical or syntax error.
    """
    return Parser.from_source(source).parse()


def try_parse(source: str) -> ParseOutcome:
    try:
        return ParseOutcome(tree=parse_expression(source))
    except ExpressionError as e:
        return ParseOutcome(error=e)


__all__ = ["ParseOutcome", "Parser", "parse_expression", "try_parse"]
