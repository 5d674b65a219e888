"""
Command line runner for the built-in grammars.

    grakmat json data.json      parse a file and print the value
    grakmat url                 read lines from stdin, `:quit` to leave
"""
import argparse
import logging
import sys
import traceback
from typing import Any, Callable, Dict, List, Optional

from ..Errors import GrammarError, ParseError
from . import JSON, URL, GrammarDefinitionLanguage

log = logging.getLogger(__name__)

PROMPT = ">>> "
QUIT_COMMAND = ":quit"

GRAMMARS: Dict[str, Any] = {
    "json": JSON,
    "url": URL,
    "grammar": GrammarDefinitionLanguage,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grakmat",
        description="Runner for built-in grammars.",
    )
    parser.add_argument("grammar", choices=sorted(GRAMMARS), help="Grammar to parse.")
    parser.add_argument(
        "file", nargs="?", default=None,
        help="File to parse content from (default: read lines from stdin).",
    )
    parser.add_argument(
        "--trace", "-t", action="store_true", default=False,
        help="Show the traceback on parse errors.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", default=False,
        help="Log parser activity.",
    )
    return parser


def _report(error: Exception, trace: bool) -> None:
    if trace:
        traceback.print_exception(type(error), error, error.__traceback__, file=sys.stdout)
    else:
        print(error)


def _parse_file(grammar, path: str, trace: bool) -> int:
    try:
        result = grammar.parse_file(path)
    except OSError as e:
        print(f"grakmat: cannot read {path}: {e.strerror or e}", file=sys.stderr)
        return 2
    except (ParseError, GrammarError) as e:
        _report(e, trace)
        return 1
    print(result)
    return 0


def _interpret(parse: Callable[[str], Any], trace: bool) -> int:
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            return 1

        if line == QUIT_COMMAND:
            return 0
        try:
            print(parse(line))
        except (ParseError, GrammarError) as e:
            _report(e, trace)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    grammar = GRAMMARS[args.grammar]
    log.debug("using the %s grammar", args.grammar)
    if args.file is not None:
        return _parse_file(grammar, args.file, args.trace)
    return _interpret(grammar.parse, args.trace)


if __name__ == "__main__":
    sys.exit(main())
