"""
Shared lexical constants for exprtree.

Exports:
    token_hashmap: Single-character symbols mapped to canonical token types.
    operator_tokens: Canonical types of the four binary operators.
    additive_tokens / multiplicative_tokens: Operators grouped by precedence level.
    OPERATOR_TAGS: Display tags used when rendering operator nodes.
    DIGITS: Characters that may start or continue a numeric literal.
"""

token_hashmap: dict[str, str] = {
    "+": "ADD",
    "-": "SUB",
    "*": "MUL",
    "/": "DIV",
    "(": "LPAREN",
    ")": "RPAREN",
}

operator_tokens: list[str] = ["ADD", "SUB", "MUL", "DIV"]

additive_tokens: frozenset[str] = frozenset({"ADD", "SUB"})
multiplicative_tokens: frozenset[str] = frozenset({"MUL", "DIV"})

OPERATOR_TAGS: dict[str, str] = {
    "ADD": "Add",
    "SUB": "Sub",
    "MUL": "Mul",
    "DIV": "Div",
}

NUMBER_TAG = "Number"

# ASCII only; str.isdigit() would also accept superscripts and other scripts.
DIGITS = "0123456789"
