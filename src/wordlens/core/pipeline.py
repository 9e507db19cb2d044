# src/wordlens/core/pipeline.py
"""
End-to-end analysis of one document.

Stages:
  read     input file → normalized text
  tag      text → (token, tag) pairs (external tagger)
  classify pairs → category buckets
  rank     buckets → frequency-ranked words
  write    <base>_<Category>.txt, <base>_AllWords.txt
  resolve  ranked words → cache entries (cache, then dictionary API)
  explain  <base>_<Category>_ex.txt, _es.txt, UnknownWords.txt
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from wordlens import AnalysisError
from wordlens.core.cache import CacheEntry, CacheStore
from wordlens.core.classify import Category, classify
from wordlens.core.config import Config
from wordlens.core.dictionary import DictionaryClient
from wordlens.core.format import format_entry, format_examples
from wordlens.core.rank import rank_all, rank_categories
from wordlens.core.resolve import DefinitionResolver
from wordlens.core.tagger import Tagger
from wordlens.core.tokenize import normalize_text


logger = logging.getLogger(__name__)

ALL_WORDS = "AllWords"
UNKNOWN_WORDS_FILE = "UnknownWords.txt"


@dataclass
class ProgressEvent:
    stage: str
    item: str
    current: int
    total: int


@dataclass
class AnalysisSummary:
    input_path: str
    output_dir: str
    total_words: int
    known: int
    unknown: int
    cancelled: bool = False

    def to_dict(self) -> dict:
        return {
            "input_path": self.input_path,
            "output_dir": self.output_dir,
            "total_words": self.total_words,
            "known": self.known,
            "unknown": self.unknown,
            "cancelled": self.cancelled,
        }


@dataclass
class AnalysisContext:
    """Configuration plus the shared store, network client and resolver for a process."""
    config: Config
    store: CacheStore
    client: DictionaryClient
    _resolver: DefinitionResolver | None = field(default=None, init=False, repr=False, compare=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    @classmethod
    def create(cls, config: Config) -> "AnalysisContext":
        store = CacheStore.open(config.cache_path)
        client = DictionaryClient(
            base_url=config.api_base_url,
            timeout=config.timeout,
            retries=config.retries,
            proxy=config.proxy,
        )
        return cls(config=config, store=store, client=client)

    def resolver(self) -> DefinitionResolver:
        """The one resolver of this context, so in-flight fetches are shared."""
        with self._lock:
            if self._resolver is None:
                self._resolver = DefinitionResolver(self.store, self.client, self.config)
            return self._resolver

    def close(self) -> None:
        self.store.persist()
        self.client.close()


def read_document(path: Path) -> str:
    try:
        return normalize_text(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise AnalysisError(f"failed to read input file {path}: {e}") from e


def write_lines(path: Path, lines: list[str], sep: str = "\n") -> None:
    try:
        with path.open("w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + sep)
    except OSError as e:
        raise AnalysisError(f"failed to write {path}: {e}") from e


class Analyzer:
    def __init__(
        self,
        context: AnalysisContext,
        tagger: Tagger,
        on_progress: Callable[[ProgressEvent], None] | None = None,
        cancel: threading.Event | None = None,
    ):
        self.context = context
        self.config = context.config
        self.tagger = tagger
        self.on_progress = on_progress
        self.cancel = cancel or threading.Event()

    def _progress(self, stage: str, item: str = "", current: int = 0, total: int = 0) -> None:
        if self.on_progress:
            self.on_progress(ProgressEvent(stage, item, current, total))

    def output_dir_for(self, input_path: Path, output_root: Path | None) -> Path:
        root = output_root if output_root is not None else input_path.parent
        return root / input_path.stem

    def _write_files(self, files: dict[Path, tuple[list[str], str]]) -> None:
        """Write independent output files in parallel."""
        with ThreadPoolExecutor(max_workers=min(8, max(1, len(files)))) as pool:
            futures = [pool.submit(write_lines, path, lines, sep) for path, (lines, sep) in files.items()]
            for f in futures:
                f.result()

    def run(self, input_path: str | Path, output_root: str | Path | None = None) -> AnalysisSummary:
        input_path = Path(input_path)
        output_root = Path(output_root) if output_root is not None else None

        self._progress("read", str(input_path))
        text = read_document(input_path)

        self._progress("tag", str(input_path))
        tokens = self.tagger.tag(text)

        self._progress("classify", "", len(tokens), len(tokens))
        buckets = classify(tokens, self.config.categorization_policy)
        ranked = rank_categories(buckets)
        all_words = rank_all(buckets)

        out_dir = self.output_dir_for(input_path, output_root)
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise AnalysisError(f"failed to create output directory {out_dir}: {e}") from e

        base = input_path.stem
        word_lists: dict[str, list[tuple[str, int]]] = {c.value: ranked[c] for c in Category}
        word_lists[ALL_WORDS] = all_words

        self._progress("write", str(out_dir))
        self._write_files({
            out_dir / f"{base}_{name}.txt": ([w for w, _ in words], "\n")
            for name, words in word_lists.items()
        })

        summary = AnalysisSummary(
            input_path=str(input_path),
            output_dir=str(out_dir),
            total_words=len(all_words),
            known=0,
            unknown=0,
        )

        needs_lookups = (
            self.config.generate_explanations
            or self.config.generate_example_sentences
            or self.config.write_unknown_words
        )
        if not needs_lookups:
            return summary

        entries = self.context.resolver().resolve_many(
            [w for w, _ in all_words],
            workers=self.config.workers,
            on_progress=lambda word, i, n: self._progress("resolve", word, i, n),
            cancel=self.cancel,
        )
        self.context.store.persist()

        resolved = [(w, c) for w, c in all_words if w.lower() in entries]
        unknown = [w for w, _ in resolved if entries[w.lower()] is None]
        summary.known = len(resolved) - len(unknown)
        summary.unknown = len(unknown)
        summary.cancelled = self.cancel.is_set()

        self._progress("explain", str(out_dir))
        self._write_files(self._explanation_files(out_dir, base, word_lists, entries, unknown))

        logger.info(
            "%s: %d words, %d known, %d unknown → %s",
            input_path.name, summary.total_words, summary.known, summary.unknown, out_dir,
        )
        return summary

    def _explanation_files(
        self,
        out_dir: Path,
        base: str,
        word_lists: dict[str, list[tuple[str, int]]],
        entries: dict[str, CacheEntry | None],
        unknown: list[str],
    ) -> dict[Path, tuple[list[str], str]]:
        files = {}

        for name, words in word_lists.items():
            # Only words resolved before a cancellation are explained
            words = [w for w, _ in words if w.lower() in entries]

            if self.config.generate_explanations:
                blocks = [format_entry(w, entries[w.lower()], self.config) for w in words]
                files[out_dir / f"{base}_{name}_ex.txt"] = (blocks, "\n\n")

            if self.config.generate_example_sentences:
                blocks = [format_examples(w, entries[w.lower()], self.config) for w in words]
                files[out_dir / f"{base}_{name}_es.txt"] = ([b for b in blocks if b], "\n\n")

        if self.config.write_unknown_words:
            files[out_dir / UNKNOWN_WORDS_FILE] = (unknown, "\n")

        return files
