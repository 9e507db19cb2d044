# src/wordlens/core/format.py
"""
Text rendering of cached definitions.

    Bank [bæŋk]
    Origin: Middle English ...
    Bank 1, noun: An institution where one can place and borrow money.
      Example: I deposited my check at the bank.
      Synonyms: depository
    Bank 2, verb: To deposit in a bank.

Words without definitions (or whose definitions were all filtered out) get a
single "No details available." line so they are never silently dropped.
"""

from wordlens.core.cache import CacheEntry, Definition
from wordlens.core.config import Config
from wordlens.core.rank import canonicalize


NO_DETAILS = "No details available."


def visible_definitions(entry: CacheEntry | None, config: Config) -> list[Definition]:
    if entry is None:
        return []
    if config.filter_definitions_without_examples:
        return [d for d in entry.definitions if d.example]
    return list(entry.definitions)


def format_header(word: str, entry: CacheEntry | None, config: Config) -> str:
    header = canonicalize(word)
    if config.include_phonetic and entry is not None and entry.phonetic:
        phonetic = entry.phonetic.strip("/[] ")
        header += f" [{phonetic}]"
    return header


def format_entry(word: str, entry: CacheEntry | None, config: Config) -> str:
    """Render one word's explanation block."""
    display = canonicalize(word)
    definitions = visible_definitions(entry, config)

    if not definitions:
        return f"{display}: {NO_DETAILS}"

    lines = [format_header(word, entry, config)]

    if config.include_origin and entry.origin:
        lines.append(f"Origin: {entry.origin}")

    for n, d in enumerate(definitions, start=1):
        pos = d.part_of_speech or "unknown"
        lines.append(f"{display} {n}, {pos}: {d.text}")
        if config.include_examples and d.example:
            lines.append(f"  Example: {d.example}")
        if config.include_synonyms and d.synonyms:
            lines.append(f"  Synonyms: {', '.join(d.synonyms)}")
        if config.include_antonyms and d.antonyms:
            lines.append(f"  Antonyms: {', '.join(d.antonyms)}")

    return "\n".join(lines)


def example_sentences(entry: CacheEntry | None, config: Config) -> list[str]:
    """Example sentences in definition order, capped by max_example_sentences."""
    if entry is None:
        return []
    examples = [d.example for d in entry.definitions if d.example]
    if config.max_example_sentences > 0:
        examples = examples[:config.max_example_sentences]
    return examples


def format_examples(word: str, entry: CacheEntry | None, config: Config) -> str:
    """Example-sentence block; empty string when the word has none."""
    examples = example_sentences(entry, config)
    if not examples:
        return ""
    display = canonicalize(word)
    lines = [display]
    lines.extend(f"  {n}. {ex}" for n, ex in enumerate(examples, start=1))
    return "\n".join(lines)
