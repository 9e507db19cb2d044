# src/wordlens/core/dictionary.py
"""
Client for the free dictionary API (dictionaryapi.dev).

GET {base_url}/{word} → JSON array of entries:
  [{word, phonetic?, phonetics?: [{text?}], origin?,
    meanings: [{partOfSpeech, synonyms?, antonyms?,
                definitions: [{definition, example?, synonyms?, antonyms?}]}]}]

Every failure (network, status, JSON, schema, empty array) is reported as
"no definition" by returning None.
"""

import logging
import time
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from wordlens.core.cache import CacheEntry, Definition


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.dictionaryapi.dev/api/v2/entries/en"
DEFAULT_TIMEOUT = 10.0


# === Response schema ===

class ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ApiDefinition(ApiModel):
    definition: str
    example: str | None = None
    synonyms: list[str] = []
    antonyms: list[str] = []


class ApiMeaning(ApiModel):
    partOfSpeech: str = ""
    definitions: list[ApiDefinition] = []
    synonyms: list[str] = []
    antonyms: list[str] = []


class ApiPhonetic(ApiModel):
    text: str | None = None
    audio: str | None = None


class ApiEntry(ApiModel):
    word: str = ""
    phonetic: str | None = None
    phonetics: list[ApiPhonetic] = []
    origin: str | None = None
    meanings: list[ApiMeaning] = []


ENTRIES = TypeAdapter(list[ApiEntry])


def _merge(target: list[str], items: list[str]) -> None:
    for item in items:
        if item and item not in target:
            target.append(item)


def build_entry(word: str, entries: list[ApiEntry]) -> CacheEntry | None:
    """Flatten API entries into one CacheEntry, keeping definition order."""
    if not entries:
        return None

    entry = CacheEntry(word=word.lower())

    for api_entry in entries:
        if entry.phonetic is None and api_entry.phonetic:
            entry.phonetic = api_entry.phonetic
        if entry.origin is None and api_entry.origin:
            entry.origin = api_entry.origin

        for meaning in api_entry.meanings:
            _merge(entry.synonyms, meaning.synonyms)
            _merge(entry.antonyms, meaning.antonyms)
            for d in meaning.definitions:
                entry.definitions.append(Definition(
                    part_of_speech=meaning.partOfSpeech,
                    text=d.definition,
                    example=d.example or None,
                    synonyms=list(d.synonyms),
                    antonyms=list(d.antonyms),
                ))
                _merge(entry.synonyms, d.synonyms)
                _merge(entry.antonyms, d.antonyms)

    # Fall back to the phonetics list
    if entry.phonetic is None:
        for api_entry in entries:
            for p in api_entry.phonetics:
                if p.text:
                    entry.phonetic = p.text
                    break
            if entry.phonetic:
                break

    return entry


def parse_entries(payload, word: str) -> CacheEntry | None:
    """Validate a decoded JSON payload and build a CacheEntry (None if empty)."""
    return build_entry(word, ENTRIES.validate_python(payload))


class DictionaryClient:
    """Blocking dictionary lookups over httpx."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = 0,
        backoff: float = 0.5,
        proxy: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.retries = max(0, retries)
        self.backoff = backoff

        kwargs = {"timeout": timeout, "follow_redirects": True}
        if transport is not None:
            kwargs["transport"] = transport
        elif proxy:
            kwargs["proxy"] = proxy
        self.http = httpx.Client(**kwargs)

    def __enter__(self) -> "DictionaryClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.http.close()

    def url_for(self, word: str) -> str:
        return f"{self.base_url}/{quote(word.lower(), safe='')}"

    def _get(self, url: str) -> httpx.Response:
        attempt = 0
        while True:
            try:
                r = self.http.get(url)
                if r.status_code < 500 or attempt >= self.retries:
                    return r
                logger.debug("GET %s → %d, retrying", url, r.status_code)
            except httpx.TransportError as e:
                if attempt >= self.retries:
                    raise
                logger.debug("GET %s failed (%s), retrying", url, e)
            attempt += 1
            time.sleep(self.backoff * (2 ** (attempt - 1)))

    def lookup(self, word: str) -> CacheEntry | None:
        """Fetch and parse the definitions of a word; None if there are none."""
        url = self.url_for(word)
        try:
            r = self._get(url)
            r.raise_for_status()
            entry = parse_entries(r.json(), word)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                logger.debug("No definition for %r", word)
            else:
                logger.warning("Lookup of %r failed: HTTP %d", word, e.response.status_code)
            return None
        except httpx.HTTPError as e:
            logger.warning("Lookup of %r failed: %s", word, e)
            return None
        except (ValueError, ValidationError) as e:
            logger.warning("Malformed response for %r: %s", word, e)
            return None

        if entry is None:
            logger.debug("Empty result for %r", word)
        return entry
