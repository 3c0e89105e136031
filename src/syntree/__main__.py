"""CLI entry point: run `syntree file.sexp` or `python -m syntree file.sexp`."""

import logging
import random
import sys
from pathlib import Path
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    import argparse
    from .frontend.sexpr import read_all
    from .passes.definitions import longdef, shortdef
    from .passes.gensyms import AliasTable, first_unused, random_choice
    from .pipeline import prettify
    from .serialization import dumps
    from .shared.errors import SyntreeError, format_error
    from .utils.io_utils import read_source_file

    parser = argparse.ArgumentParser(prog="syntree", description="Prettify trees written as S-expressions.")
    parser.add_argument("file", type=Path, nargs="?", help="Path to S-expression file (default: stdin)")
    parser.add_argument("--keep-lines", action="store_true", help="Keep line markers in the output")
    forms = parser.add_mutually_exclusive_group()
    forms.add_argument("--longdef", action="store_true", help="Rewrite definitions to long form")
    forms.add_argument("--shortdef", action="store_true", help="Rewrite definitions to short form")
    parser.add_argument("--seed", type=int, default=None, help="Seed for random alias selection")
    parser.add_argument("--deterministic", action="store_true",
                        help="Alias gensyms with the first unused word instead of a random one")
    parser.add_argument("--compact", action="store_true", help="Print each tree on one line")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pass progress to stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.file is None:
        source = sys.stdin.read()
    else:
        path = args.file.resolve()
        if not path.exists():
            sys.stderr.write(f"syntree: error: file not found: {path}\n")
            return 1
        if not path.is_file():
            sys.stderr.write(f"syntree: error: not a file: {path}\n")
            return 1
        try:
            source = read_source_file(path)
        except OSError as e:
            sys.stderr.write(f"syntree: error: could not read file: {e}\n")
            return 1

    strategy = first_unused if args.deterministic else random_choice(random.Random(args.seed))

    try:
        for tree in read_all(source):
            if args.longdef:
                tree = longdef(tree)
            elif args.shortdef:
                tree = shortdef(tree)
            tree = prettify(
                tree,
                keep_lines=args.keep_lines,
                table=AliasTable(strategy=strategy),
                dump_tree=args.verbose,
            )
            sys.stdout.write(dumps(tree, pretty=not args.compact) + "\n")
    except SyntreeError as e:
        sys.stderr.write(format_error(e) + "\n")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
