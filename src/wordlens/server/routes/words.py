"""
Word routes: /api/words
"""

from fastapi import APIRouter, Depends

from wordlens.core.format import format_entry
from wordlens.core.pipeline import AnalysisContext
from wordlens.core.rank import canonicalize
from wordlens.server.deps import get_context


router = APIRouter(prefix="/api/words", tags=["words"])


@router.get("/{word}")
def get_word(word: str, context: AnalysisContext = Depends(get_context)):
    """Definition of a word, from the cache or the dictionary API."""
    entry = context.resolver().lookup(word)
    return {
        "word": canonicalize(word),
        "found": entry is not None,
        "entry": entry.to_dict() if entry else None,
        "text": format_entry(word, entry, context.config),
    }
