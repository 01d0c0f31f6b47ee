"""
Lexical analyzer for exprtree arithmetic expressions.

This module provides the components that turn raw expression text into tokens:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: An immutable, value-comparable token (type plus value).
    Lexer: Converts a CharacterStream into tokens and holds the parser's lookahead.

Features:
    - Skips any run of whitespace between tokens
    - Coalesces consecutive ASCII digits into a single NUMBER token
    - Recognizes `+ - * / ( )`

Raises:
    LexicalError: On any character that is not whitespace, a digit or a known symbol.

Example:
    >>> lexer = Lexer(CharacterStream("12 + 3"))
    >>> lexer.advance()
    Token(NUMBER, 12)
    >>> lexer.advance()
    Token(ADD, +)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
    - token_hashmap
"""

from dataclasses import dataclass

from exprtree.exprtree_constants import DIGITS, token_hashmap
from exprtree.exprtree_errors import LexicalError


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Positions are only used to annotate error messages; tokens themselves carry none.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Args:
            offset (int, optional): Number of characters to look ahead. Defaults to 0.

        Returns:
            str: The character at the offset, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        """Checks if the stream has reached the end of the source input.

        Returns:
            bool: True if the stream has consumed all characters, False otherwise.
        """
        return self.position >= len(self.source)


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        type (str): The canonical token type (`ADD`, `SUB`, `MUL`, `DIV`,
            `LPAREN`, `RPAREN` or `NUMBER`).
        value (str | int): The symbol for punctuation tokens, the integer for NUMBER.
    """

    type: str
    value: str | int

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"


class Lexer:
    """Lexical analyzer and single-token lookahead buffer.

    `current` always holds the next unconsumed token, or None once the input
    is exhausted (and before the first call to `advance`). `token_line` and
    `token_col` record where the most recently scanned token starts; at end of
    input they point just past the last character.

    Attributes:
        stream (CharacterStream): The remaining input.
        current (Token | None): The lookahead token.
        token_line (int): 1-based line where the last scanned token starts.
        token_col (int): 1-based column where the last scanned token starts.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream
        self.current: Token | None = None
        self.token_line = stream.line
        self.token_col = stream.column

    @classmethod
    def from_source(cls, source: str) -> "Lexer":
        """Builds a lexer over a fresh CharacterStream.

        Args:
            source (str): The expression text.

        Returns:
            Lexer: A lexer with no lookahead yet.
        """
        return cls(CharacterStream(source))

    def peek(self) -> str:
        """Returns the next character without consuming it, or "" at EOF."""
        return self.stream.peek()

    def skip_whitespace(self) -> None:
        """Consumes any run of whitespace characters."""
        while not self.stream.end_of_file() and self.peek().isspace():
            self.stream.next()

    def read_number(self) -> Token:
        """Consumes a maximal run of digits and returns it as a NUMBER token.

        The first non-digit character is left in the stream.

        Raises:
            LexicalError: If the run is too long for the interpreter's int conversion limit.
        """
        digits = ""
        while not self.stream.end_of_file() and self.peek() in DIGITS:
            digits += self.stream.next()
        try:
            value = int(digits)
        except ValueError as e:
            raise LexicalError(
                f"Numeric literal of {len(digits)} digits is too long",
                digits,
                self.token_line,
                self.token_col,
            ) from e
        return Token("NUMBER", value)

    def next_token(self) -> Token | None:
        """Scans and returns the next token, or None at end of input.

        Does not touch the lookahead; use `advance` when parsing.

        Raises:
            LexicalError: If an unrecognised character is encountered.
        """
        self.skip_whitespace()
        self.token_line, self.token_col = self.stream.line, self.stream.column

        if self.stream.end_of_file():
            return None

        ch = self.peek()

        if ch in DIGITS:
            return self.read_number()

        if ch in token_hashmap:
            self.stream.next()
            return Token(token_hashmap[ch], ch)

        raise LexicalError(
            f"Unexpected character {ch!r}", ch, self.token_line, self.token_col
        )

    def advance(self) -> Token | None:
        """Replaces the lookahead with the next token and returns it.

        Returns:
            Token | None: The new lookahead, or None at end of input.

        Raises:
            LexicalError: If the next token cannot be scanned.
        """
        self.current = self.next_token()
        return self.current

    def exhausted(self) -> bool:
        """Checks whether the whole input has been consumed.

        Returns:
            bool: True once no lookahead token and no unread characters remain.
        """
        return self.current is None and self.stream.end_of_file()


def tokenize(source: str) -> list[Token]:
    """Returns every token in `source`, in order.

    Raises:
        LexicalError: If `source` contains an unrecognised character.
    """
    lexer = Lexer(CharacterStream(source))
    tokens: list[Token] = []
    while True:
        tok = lexer.next_token()
        if tok is None:
            break
        tokens.append(tok)
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "token_hashmap", "tokenize"]
