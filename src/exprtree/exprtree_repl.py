import io
import traceback

from exprtree.exprtree_lexer import tokenize
from exprtree.exprtree_parser import try_parse
from exprtree.exprtree_printer import TreePrinter


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def evaluate_line(src: str, printer: TreePrinter, as_json: bool, verbose: bool) -> None:
    """Parses one REPL line and prints its tree or an error diagnostic."""
    outcome = try_parse(src)
    if outcome.error is not None:
        print(f"[error] >>> {outcome.kind}: {outcome.error}")
        return
    tree = outcome.tree
    if tree is None:
        return
    if verbose:
        print(f"[tokens] >>> {tokenize(src)}")
        print(f"[ast] >>> {tree!r}")
    print(printer.render_json(tree) if as_json else printer.render(tree))


def start_repl(as_json: bool = False, verbose: bool = False) -> None:
    print("exprtree REPL. Type 'exit' or 'quit' to leave.")
    printer = TreePrinter()

    while True:
        try:
            src = input(">>> ").strip()
            if not src:
                continue
            if src in ("exit", "quit"):
                print("Exiting exprtree REPL.")
                return
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            try:
                evaluate_line(src, printer, as_json, verbose)
            except Exception:
                print_traceback()
        except (KeyboardInterrupt, EOFError):
            print("\nExiting exprtree REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
