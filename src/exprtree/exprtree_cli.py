"""
exprtree CLI Entrypoint.

This module provides the command-line interface for parsing arithmetic
expressions and printing their syntax trees.

Features:
    - Join all positional arguments (with no separator) into one expression.
    - Lex and parse it, then print the tree in bracket or JSON form.
    - Optionally dump the token stream instead of a tree.
    - Launch an interactive REPL.

Example usage:
    exprtree 1 + 2 '*' 3
    exprtree "(1+2)*3" --json
    exprtree "12 / 4" --tokens
    exprtree --repl

Exit status:
    0 on success (including empty input, which prints nothing),
    1 on a lexical or syntax error, 2 on bad command-line usage.

Functions:
    run_exprtree(source: str, as_json: bool = False, show_tokens: bool = False,
                 verbose: bool = False) -> int:
        Runs the pipeline (lex → parse → print) and returns the exit status.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action.
"""

import argparse
import sys

from exprtree.exprtree_errors import ExpressionError
from exprtree.exprtree_lexer import tokenize
from exprtree.exprtree_parser import try_parse
from exprtree.exprtree_printer import TreePrinter


def report_error(error: ExpressionError) -> None:
    print(f"[error] >>> {error.kind}: {error}", file=sys.stderr)


def run_exprtree(
    source: str,
    as_json: bool = False,
    show_tokens: bool = False,
    verbose: bool = False,
) -> int:
    """
    Run the exprtree pipeline on `source` and print the result.

    Args:
        source (str): The expression text.
        as_json (bool): Print the tree as JSON instead of the bracket rendering.
        show_tokens (bool): Print the token stream instead of a tree.
        verbose (bool): Trace tokens and the parsed node on stderr.

    Returns:
        int: Process exit status.

    Side Effects:
        - Prints the rendered tree (or tokens) to stdout.
        - Prints diagnostics to stderr.
    """
    if show_tokens or verbose:
        try:
            tokens = tokenize(source)
        except ExpressionError as e:
            report_error(e)
            return 1
        if show_tokens:
            for tok in tokens:
                print(tok)
            return 0
        print(f"[tokens] >>> {tokens}", file=sys.stderr)

    outcome = try_parse(source)
    if outcome.error is not None:
        report_error(outcome.error)
        return 1

    tree = outcome.tree
    if tree is None:
        return 0

    if verbose:
        print(f"[ast] >>> {tree!r}", file=sys.stderr)

    printer = TreePrinter()
    print(printer.render_json(tree) if as_json else printer.render(tree))
    return 0


def main() -> None:
    """
    Entry point for the exprtree CLI.

    Supported flags:
        - `-j`, `--json`: Print the tree as JSON.
        - `-t`, `--tokens`: Print one token per line instead of a tree.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Trace tokens and nodes on stderr (or in the REPL).
    """
    parser = argparse.ArgumentParser(
        prog="exprtree",
        description="Parse an arithmetic expression and print its syntax tree.",
    )
    parser.add_argument(
        "expression",
        nargs="*",
        help="Expression text; multiple arguments are joined with no separator",
    )
    parser.add_argument(
        "-j", "--json", dest="as_json", action="store_true", help="Print tree as JSON"
    )
    parser.add_argument(
        "-t",
        "--tokens",
        dest="show_tokens",
        action="store_true",
        help="Print the token stream instead of a tree",
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch interactive REPL"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Trace tokens and AST nodes"
    )

    args = parser.parse_args()

    if args.repl:
        from exprtree.exprtree_repl import start_repl

        start_repl(as_json=args.as_json, verbose=args.verbose)
        return

    status = run_exprtree(
        source="".join(args.expression),
        as_json=args.as_json,
        show_tokens=args.show_tokens,
        verbose=args.verbose,
    )
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
