"""
Analysis routes: /api/analyses
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Optional

from wordlens import AnalysisError
from wordlens.core.pipeline import AnalysisContext, Analyzer
from wordlens.core.tagger import Tagger
from wordlens.server.deps import get_context, get_tagger


router = APIRouter(prefix="/api/analyses", tags=["analyses"])


class CreateAnalysisRequest(BaseModel):
    path: str
    output_root: Optional[str] = None


@router.post("")
def create_analysis(
    req: CreateAnalysisRequest,
    context: AnalysisContext = Depends(get_context),
    tagger: Tagger = Depends(get_tagger),
):
    """Analyze a text file on the server's filesystem."""
    analyzer = Analyzer(context, tagger)
    try:
        summary = analyzer.run(req.path, req.output_root)
    except AnalysisError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return summary.to_dict()
