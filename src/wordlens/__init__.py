"""
wordlens: categorize the words of a text and explain them.
"""

__version__ = "0.1.0"


class WordlensError(Exception):
    """Base error for wordlens."""


class AnalysisError(WordlensError):
    """A run could not complete (unreadable input, unwritable output)."""
