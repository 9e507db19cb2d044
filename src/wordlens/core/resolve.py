# src/wordlens/core/resolve.py
"""
Definition resolver: cache first, dictionary API on a miss.

Each word reaches the network at most once per resolver. Concurrent lookups
of the same word share one in-flight fetch (single flight); every cache write
goes through the CacheStore lock.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Callable, Iterable

from wordlens.core.cache import UNKNOWN, CacheEntry, CacheStore, normalize_key
from wordlens.core.config import Config
from wordlens.core.format import format_entry


logger = logging.getLogger(__name__)

# Returned internally when a fetch was skipped because of cancellation
_SKIPPED = object()


class DefinitionResolver:
    def __init__(
        self,
        store: CacheStore,
        client,
        config: Config,
        cancel: threading.Event | None = None,
    ):
        """
        Args:
            store: cache of known and unknown words
            client: anything with lookup(word) -> CacheEntry | None
            config: query_unknown_words and formatting toggles
            cancel: once set, no new network fetch is started
        """
        self.store = store
        self.client = client
        self.config = config
        self.cancel = cancel or threading.Event()
        self.network_calls = 0
        self._lock = threading.Lock()
        self._inflight: dict[str, Future] = {}
        self._fetched: set[str] = set()

    @property
    def cancelled(self) -> bool:
        return self.cancel.is_set()

    def _cached(self, key: str):
        cached = self.store.get(key)
        if isinstance(cached, CacheEntry):
            return cached
        return None

    def _stopped(self, cancel: threading.Event | None) -> bool:
        return self.cancelled or (cancel is not None and cancel.is_set())

    def _resolve(self, word: str, cancel: threading.Event | None = None):
        key = normalize_key(word)
        if not key:
            return None

        cached = self.store.get(key)
        if isinstance(cached, CacheEntry):
            return cached
        if cached is UNKNOWN and not self.config.query_unknown_words:
            return None

        with self._lock:
            # Already fetched in this run (possibly by another thread)
            if key in self._fetched:
                return self._cached(key)

            future = self._inflight.get(key)
            owner = future is None
            if owner:
                if self._stopped(cancel):
                    return _SKIPPED
                future = Future()
                self._inflight[key] = future
                self.network_calls += 1

        if not owner:
            return future.result()

        try:
            entry = self._fetch(key)
        except BaseException as e:
            future.set_exception(e)
            raise
        else:
            future.set_result(entry)
        finally:
            with self._lock:
                self._fetched.add(key)
                self._inflight.pop(key, None)

        return entry

    def _fetch(self, key: str) -> CacheEntry | None:
        logger.debug("Looking up %r", key)
        entry = self.client.lookup(key)

        if entry is None:
            self.store.mark_unknown(key)
            return None

        self.store.put(key, entry)
        return self._cached(key)

    def lookup(self, word: str) -> CacheEntry | None:
        """Return the cache entry for word, fetching it if needed."""
        result = self._resolve(word)
        return None if result is _SKIPPED else result

    def resolve(self, word: str) -> str:
        """Return the formatted explanation block for word."""
        return format_entry(word, self.lookup(word), self.config)

    def resolve_many(
        self,
        words: Iterable[str],
        workers: int = 1,
        on_progress: Callable[[str, int, int], None] | None = None,
        cancel: threading.Event | None = None,
    ) -> dict[str, CacheEntry | None]:
        """
        Resolve a batch of words with up to `workers` threads.

        Returns {lowercase word: entry or None}. Words skipped after
        cancellation, of the resolver or of this batch, are left out.
        """
        keys = list(dict.fromkeys(normalize_key(w) for w in words if w.strip()))
        total = len(keys)
        results: dict[str, CacheEntry | None] = {}

        def record(key: str, result, current: int) -> None:
            if result is not _SKIPPED:
                results[key] = result
            if on_progress:
                on_progress(key, current, total)

        if workers <= 1:
            for i, key in enumerate(keys, start=1):
                if self._stopped(cancel):
                    break
                record(key, self._resolve(key, cancel), i)
            return results

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {pool.submit(self._resolve, key, cancel): key for key in keys}
            for i, f in enumerate(as_completed(futures), start=1):
                record(futures[f], f.result(), i)

        return results
