"""
wordlens CLI.
"""

import argparse
import logging

from rich.logging import RichHandler

from wordlens.cli.commands import analyze, define, cache, serve


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(prog="wordlens", description="Categorize and explain the words of a text")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command")

    analyze.add_subparser(subparsers)
    define.add_subparser(subparsers)
    cache.add_subparser(subparsers)
    serve.add_subparser(subparsers)

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
