"""
Error taxonomy for the exprtree pipeline.

Every failure the lexer or parser can raise derives from `ExpressionError`,
which itself subclasses the built-in `SyntaxError`. Each class carries a
`kind` tag so callers can tell failures apart without string matching:

    lexical                 LexicalError
    missing_operand         MissingOperandError
    unbalanced_parenthesis  UnbalancedParenthesisError
    trailing_input          TrailingInputError
    nesting_too_deep        NestingTooDeepError

None of these are recoverable for the parse that raised them.
"""


class ExpressionError(SyntaxError):
    """Base class for all lexing and parsing failures.

    Attributes:
        kind (str): Machine-readable error category.
        line (int): 1-based line where the failure was detected (0 if unknown).
        col (int): 1-based column where the failure was detected (0 if unknown).
    """

    kind = "expression"

    def __init__(self, message: str, line: int = 0, col: int = 0):
        super().__init__(message)
        self.message = message
        self.line = line
        self.col = col

    def __str__(self) -> str:
        if self.line:
            return f"{self.message} at line {self.line}, col {self.col}"
        return self.message


class LexicalError(ExpressionError):
    """Raised for characters outside the expression alphabet.

    Attributes:
        char (str): The offending character, or the digit run that could not be converted.
    """

    kind = "lexical"

    def __init__(self, message: str, char: str = "", line: int = 0, col: int = 0):
        super().__init__(message, line, col)
        self.char = char


class MissingOperandError(ExpressionError):
    """Raised when a number or `(` is required but something else is found."""

    kind = "missing_operand"


class UnbalancedParenthesisError(ExpressionError):
    """Raised when a parenthesised expression is not closed by `)`."""

    kind = "unbalanced_parenthesis"


class TrailingInputError(ExpressionError):
    """Raised when input remains after a complete top-level expression."""

    kind = "trailing_input"


class NestingTooDeepError(ExpressionError):
    """Raised when parentheses nest deeper than the interpreter stack allows."""

    kind = "nesting_too_deep"


__all__ = [
    "ExpressionError",
    "LexicalError",
    "MissingOperandError",
    "NestingTooDeepError",
    "TrailingInputError",
    "UnbalancedParenthesisError",
]
