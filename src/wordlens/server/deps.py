"""
Shared dependencies for routes.
"""

from functools import lru_cache

from wordlens.core.config import load_config
from wordlens.core.pipeline import AnalysisContext
from wordlens.core.tagger import OpenAITagger, Tagger


@lru_cache(maxsize=1)
def get_context() -> AnalysisContext:
    return AnalysisContext.create(load_config())


def get_tagger() -> Tagger:
    return OpenAITagger()
