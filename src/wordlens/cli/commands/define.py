"""Define command: print the explanation of one word."""

from rich.console import Console

from wordlens.core.config import load_config
from wordlens.core.pipeline import AnalysisContext

console = Console()


def add_subparser(subparsers):
    parser = subparsers.add_parser("define", help="Show the definition of a word")
    parser.add_argument("word", help="Word to look up")
    parser.add_argument("-c", "--config", help="YAML config file")
    parser.set_defaults(func=run_define)


def run_define(args):
    context = AnalysisContext.create(load_config(args.config))
    try:
        text = context.resolver().resolve(args.word)
    finally:
        context.close()
    console.print(text, markup=False, highlight=False)
