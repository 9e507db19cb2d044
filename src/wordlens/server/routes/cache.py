"""
Cache routes: /api/cache
"""

from fastapi import APIRouter, Depends, HTTPException

from wordlens.core.pipeline import AnalysisContext
from wordlens.server.deps import get_context


router = APIRouter(prefix="/api/cache", tags=["cache"])


@router.get("")
def cache_stats(context: AnalysisContext = Depends(get_context)):
    return context.store.stats()


@router.delete("/unknown/{word}")
def forget_unknown(word: str, context: AnalysisContext = Depends(get_context)):
    """Allow a word marked unknown to be queried again."""
    if not context.store.clear_unknown(word):
        raise HTTPException(status_code=404, detail="Word not marked unknown")
    return {"success": True}
