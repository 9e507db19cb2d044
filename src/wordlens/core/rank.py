# src/wordlens/core/rank.py
"""
Frequency ranking of classified words.
"""

from collections import Counter
from typing import Iterable

from wordlens.core.classify import Category


def _capitalize(part: str) -> str:
    first = part[:1].title()
    # Letters whose title case is longer ("ß" → "Ss") stay as they are
    if len(first) != 1:
        first = part[:1]
    return first + part[1:].lower()


def canonicalize(word: str) -> str:
    """Capitalize each whitespace-separated part: "new  YORK" → "New York"."""
    return " ".join(_capitalize(part) for part in word.split())


def rank(words: Iterable[str]) -> list[tuple[str, int]]:
    """Count words by canonical form, most frequent first, ties alphabetical."""
    counts = Counter(canonicalize(w) for w in words)
    counts.pop("", None)
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def rank_categories(buckets: dict[Category, list[str]]) -> dict[Category, list[tuple[str, int]]]:
    return {category: rank(words) for category, words in buckets.items()}


def rank_all(buckets: dict[Category, list[str]]) -> list[tuple[str, int]]:
    """Global ranking across every category."""
    return rank(w for words in buckets.values() for w in words)
