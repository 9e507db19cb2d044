"""
Unit tests using FastAPI TestClient (no separate server needed).
"""

import threading
import time

import pytest
from fastapi.testclient import TestClient

from wordlens.core.cache import CacheEntry, CacheStore, Definition
from wordlens.core.config import Config
from wordlens.core.pipeline import AnalysisContext
from wordlens.core.tagger import StaticTagger
from wordlens.server.deps import get_context, get_tagger
from wordlens.server.main import app
from wordlens.server.routes import words


class StubClient:
    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.calls = []
        self._lock = threading.Lock()

    def lookup(self, word):
        with self._lock:
            self.calls.append(word)
        if self.delay:
            time.sleep(self.delay)
        if word != "fox":
            return None
        return CacheEntry(word="fox", definitions=[Definition("noun", "A small wild canine.")])

    def close(self):
        pass


@pytest.fixture
def context(tmp_path):
    config = Config(cache_dir=str(tmp_path / "cache"), include_phonetic=False)
    return AnalysisContext(config, CacheStore.open(config.cache_path), StubClient())


@pytest.fixture
def client(context):
    app.dependency_overrides[get_context] = lambda: context
    app.dependency_overrides[get_tagger] = lambda: StaticTagger({"the": "DT", "fox": "NN"})
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["name"] == "wordlens API"


class TestWordsUnit:
    def test_known_word(self, client, context):
        r = client.get("/api/words/Fox")
        assert r.status_code == 200
        data = r.json()
        assert data["word"] == "Fox"
        assert data["found"] is True
        assert data["entry"]["definitions"][0]["definition"] == "A small wild canine."
        assert data["text"] == "Fox\nFox 1, noun: A small wild canine."

    def test_unknown_word(self, client, context):
        r = client.get("/api/words/zzyzx")
        data = r.json()
        assert data["found"] is False
        assert data["entry"] is None
        assert data["text"] == "Zzyzx: No details available."

    def test_repeat_requests_hit_cache(self, client, context):
        client.get("/api/words/fox")
        client.get("/api/words/fox")
        assert context.client.calls == ["fox"]


class TestCacheUnit:
    def test_stats_and_forget(self, client, context):
        client.get("/api/words/zzyzx")

        r = client.get("/api/cache")
        assert r.json()["unknown"] == 1

        r = client.delete("/api/cache/unknown/zzyzx")
        assert r.json() == {"success": True}

        r = client.delete("/api/cache/unknown/zzyzx")
        assert r.status_code == 404


class TestAnalysesUnit:
    def test_end_to_end(self, client, tmp_path):
        path = tmp_path / "doc.txt"
        path.write_text("The fox. The fox!", encoding="utf-8")

        r = client.post("/api/analyses", json={"path": str(path), "output_root": str(tmp_path / "out")})
        assert r.status_code == 200
        summary = r.json()
        assert summary["total_words"] == 2
        assert summary["known"] == 1
        assert summary["unknown"] == 1

        nouns = (tmp_path / "out" / "doc" / "doc_Nouns.txt").read_text(encoding="utf-8")
        assert nouns == "Fox\n"

    def test_missing_input(self, client, tmp_path):
        r = client.post("/api/analyses", json={"path": str(tmp_path / "nope.txt")})
        assert r.status_code == 400


class TestSharedResolverUnit:
    def test_concurrent_requests_fetch_once(self, tmp_path):
        config = Config(cache_dir=str(tmp_path / "cache"))
        context = AnalysisContext(config, CacheStore.open(config.cache_path), StubClient(delay=0.3))
        results = []

        def request():
            results.append(words.get_word("fox", context))

        threads = [threading.Thread(target=request) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert context.client.calls == ["fox"]
        assert [r["found"] for r in results] == [True] * 4

    def test_unknown_word_requeried_once_per_process(self, tmp_path):
        config = Config(cache_dir=str(tmp_path / "cache"), query_unknown_words=True)
        context = AnalysisContext(config, CacheStore.open(config.cache_path), StubClient())
        context.store.mark_unknown("zzyzx")
        app.dependency_overrides[get_context] = lambda: context
        try:
            client = TestClient(app)
            for _ in range(3):
                assert client.get("/api/words/zzyzx").json()["found"] is False
        finally:
            app.dependency_overrides.clear()

        assert context.client.calls == ["zzyzx"]

    def test_context_hands_out_one_resolver(self, context):
        assert context.resolver() is context.resolver()
