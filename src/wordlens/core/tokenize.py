# src/wordlens/core/tokenize.py
"""
Document text normalization and tokenization.

Stage 1: raw file text → normalized text (one line)
Stage 2: normalized text → tokens
"""

import re
from dataclasses import dataclass


# Slash and hyphen compounds stay one token; the classifier splits on "/".
TOKEN_RE = re.compile(r"\w+(?:[-/]\w+)*|[^\w\s]")


@dataclass
class Token:
    text: str
    position: int  # character offset in normalized text


def normalize_text(raw: str) -> str:
    """Join the lines of a document with single spaces."""
    return " ".join(line.strip() for line in raw.splitlines() if line.strip())


def tokenize(text: str) -> list[Token]:
    """Split text into tokens, tracking positions."""
    tokens = []
    for match in TOKEN_RE.finditer(text):
        tokens.append(Token(text=match.group(), position=match.start()))
    return tokens
