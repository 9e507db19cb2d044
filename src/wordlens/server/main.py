"""
wordlens API server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from wordlens import __version__
from wordlens.server.deps import get_context
from wordlens.server.routes import analyses, cache, words


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Flush the cache if it was ever opened
    if get_context.cache_info().currsize:
        get_context().close()


app = FastAPI(title="wordlens API", lifespan=lifespan)

app.include_router(words.router)
app.include_router(analyses.router)
app.include_router(cache.router)


@app.get("/")
async def root():
    return {"name": "wordlens API", "version": __version__}
