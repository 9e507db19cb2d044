# src/wordlens/core/classify.py
"""
Word classifier: tagged tokens → category buckets.

Tokens like "Writer/Copywriter" are split into separate words, anything that
is not Latin-script text is dropped, and each word lands in exactly one
category bucket per run (see CategorizationPolicy).
"""

import unicodedata
from enum import Enum
from typing import Iterable


class Category(str, Enum):
    NOUNS = "Nouns"
    VERBS = "Verbs"
    ADJECTIVES = "Adjectives"
    ADVERBS = "Adverbs"
    OTHER = "OtherWords"


class CategorizationPolicy(str, Enum):
    FIRST_SEEN = "first_seen"          # category fixed by first occurrence
    PER_OCCURRENCE = "per_occurrence"  # every occurrence bucketed by its own tag


# Penn Treebank tag prefix → category
TAG_PREFIXES = [
    ("NN", Category.NOUNS),
    ("VB", Category.VERBS),
    ("JJ", Category.ADJECTIVES),
    ("RB", Category.ADVERBS),
]


def split_token(text: str) -> list[str]:
    """Split a slash-separated token into trimmed, non-empty words."""
    return [part.strip() for part in text.split("/") if part.strip()]


def _is_latin_letter(ch: str) -> bool:
    if not ch.isalpha():
        return False
    try:
        return unicodedata.name(ch).startswith("LATIN ")
    except ValueError:
        return False


def is_latin_text(text: str) -> bool:
    """True if text holds only Latin letters, spaces and hyphens (and a letter)."""
    has_letter = False
    for ch in text:
        if ch in (" ", "-"):
            continue
        if not _is_latin_letter(ch):
            return False
        has_letter = True
    return has_letter


def category_for_tag(tag: str) -> Category:
    tag = (tag or "").upper()
    for prefix, category in TAG_PREFIXES:
        if tag.startswith(prefix):
            return category
    return Category.OTHER


def classify(
    tokens: Iterable[tuple[str, str]],
    policy: CategorizationPolicy = CategorizationPolicy.FIRST_SEEN,
) -> dict[Category, list[str]]:
    """
    Bucket tagged tokens by category.

    Returns every category (possibly empty) mapped to the lowercased word
    occurrences in token order.
    """
    buckets: dict[Category, list[str]] = {c: [] for c in Category}
    assigned: dict[str, Category] = {}

    for text, tag in tokens:
        for word in split_token(text):
            if not is_latin_text(word):
                continue
            word = word.lower()

            if policy == CategorizationPolicy.FIRST_SEEN:
                category = assigned.setdefault(word, category_for_tag(tag))
            else:
                category = category_for_tag(tag)

            buckets[category].append(word)

    return buckets
