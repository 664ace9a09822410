"""
Jack CLI Entrypoint.

This module provides the command-line interface for the Jack front end.

Features:
    - Read source from `.jack` files or inline strings.
    - Classify lines, tokenize, and parse into a single class tree.
    - Print the tree (or the token list) as JSON, or write it to a file.

Example usage:
    jack Main.jack
    jack -s "class Main { }" -p
    jack Main.jack --tokens
    jack Square.jack -o Square.json -v

Functions:
    run_jack(source: str, is_string: bool = False, out: str | None = None,
             pretty: bool = False, tokens_only: bool = False) -> Any:
        Executes the full pipeline (classify → tokenize → parse → output).

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments, configures logging, and invokes `run_jack`.
"""

import argparse
import json
import logging
import sys
from typing import Any

from jack.jack_errors import JackSyntaxError
from jack.jack_lexer import tokenize
from jack.jack_parser import parse
from jack.jack_source import classify_lines

logger = logging.getLogger(__name__)


def run_jack(
    source: str,
    is_string: bool = False,
    out: str | None = None,
    pretty: bool = False,
    tokens_only: bool = False,
) -> Any:
    """
    Run the Jack front end and emit the result as JSON.

    Args:
        source (str): Jack source code or path to a `.jack` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        out (str | None): Optional path to write the JSON to. If None, prints to stdout.
        pretty (bool): If True, indents the JSON output.
        tokens_only (bool): If True, emits the token list instead of the parse tree.

    Returns:
        Any: The emitted data (a dict for the tree, a list for tokens).

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.jack'.
        JackSyntaxError: If the source is not a well-formed Jack class.
    """
    if not is_string and not source.endswith(".jack"):
        raise ValueError("Only .jack files are supported.")
    name = "<string>" if is_string else source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    lines = classify_lines(source)
    tokens = tokenize(lines)
    logger.debug("%s: %d lines, %d tokens", name, len(lines), len(tokens))

    data: Any
    if tokens_only:
        data = [tok.to_dict() for tok in tokens]
    else:
        data = parse(tokens).to_dict()

    text = json.dumps(data, indent=2 if pretty else None)
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        logger.info("Wrote %s", out)
    else:
        print(text)
    return data


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the Jack CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-o`, `--out`: Write the JSON output to a file.
        - `-p`, `--pretty`: Indent the JSON output.
        - `--tokens`: Emit the token list instead of the parse tree.
        - `-v`, `--verbose`: Enable debug logging.

    Returns:
        int: Process exit code; 1 if the source failed to parse.
    """
    parser = argparse.ArgumentParser(prog="jack")
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Indent the JSON output"
    )
    parser.add_argument(
        "--tokens",
        dest="tokens_only",
        action="store_true",
        help="Emit the token list instead of the parse tree",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run_jack(
            source=args.source,
            is_string=args.string,
            out=args.out,
            pretty=args.pretty,
            tokens_only=args.tokens_only,
        )
    except JackSyntaxError as e:
        logger.error("Compilation aborted: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
