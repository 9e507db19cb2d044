"""Cache commands: inspect and edit the definition cache."""

from rich import print_json

from wordlens.core.cache import CacheStore
from wordlens.core.config import load_config


def add_subparser(subparsers):
    parser = subparsers.add_parser("cache", help="Definition cache")
    parser.add_argument("-c", "--config", help="YAML config file")
    cache_sub = parser.add_subparsers(dest="cache_command", required=True)

    stats_p = cache_sub.add_parser("stats", help="Show cache statistics")
    stats_p.set_defaults(func=cache_stats)

    forget_p = cache_sub.add_parser("forget-unknown", help="Allow an unknown word to be queried again")
    forget_p.add_argument("word", help="Word to forget")
    forget_p.set_defaults(func=cache_forget_unknown)


def open_store(args) -> CacheStore:
    return CacheStore.open(load_config(args.config).cache_path)


def cache_stats(args):
    print_json(data=open_store(args).stats())


def cache_forget_unknown(args):
    store = open_store(args)
    if store.clear_unknown(args.word):
        print(f"✓ Forgot: {args.word.lower()}")
    else:
        print(f"○ Not marked unknown: {args.word.lower()}")
