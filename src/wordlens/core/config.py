# src/wordlens/core/config.py
"""
Run configuration.

Loaded from a YAML file of toggles, e.g.

    includePhonetic: true
    includeSynonyms: true
    filterDefinitionsWithoutExamples: false
    maxExampleSentences: 3

Keys may be camelCase or snake_case. A missing or broken file falls back to
the defaults below; loading never raises.
"""

import logging
import os
import re
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

from wordlens.core.classify import CategorizationPolicy
from wordlens.core.dictionary import DEFAULT_BASE_URL, DEFAULT_TIMEOUT


logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = "~/.wordlens"


@dataclass
class Config:
    # Explanation formatting
    include_phonetic: bool = True
    include_origin: bool = False
    include_synonyms: bool = True
    include_antonyms: bool = True
    include_examples: bool = True
    filter_definitions_without_examples: bool = False

    # Output files
    generate_explanations: bool = True
    generate_example_sentences: bool = False
    max_example_sentences: int = 0  # 0 = unlimited
    write_unknown_words: bool = True

    # Lookups
    query_unknown_words: bool = False
    api_base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    retries: int = 0
    workers: int = 1
    http_proxy: str | None = None
    https_proxy: str | None = None

    categorization_policy: CategorizationPolicy = CategorizationPolicy.FIRST_SEEN
    cache_dir: str = DEFAULT_CACHE_DIR

    @property
    def cache_path(self) -> Path:
        return Path(self.cache_dir).expanduser()

    @property
    def proxy(self) -> str | None:
        if self.api_base_url.startswith("https:"):
            return self.https_proxy or self.http_proxy
        return self.http_proxy


def _snake(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


FIELD_NAMES = {f.name for f in fields(Config)}

ALIASES = {
    "query_for_unknown_words": "query_unknown_words",
    "categorization": "categorization_policy",
}


def _coerce(name: str, value):
    default = getattr(Config(), name)
    if name == "categorization_policy":
        return CategorizationPolicy(str(value).lower())
    if isinstance(default, bool):
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
    if isinstance(default, int):
        return int(value)
    if isinstance(default, float):
        return float(value)
    if value is None:
        return None
    return str(value)


def config_from_dict(data: dict) -> Config:
    """Build a Config from a mapping, skipping unknown or invalid keys."""
    values = {}
    for key, value in data.items():
        name = _snake(str(key))
        name = ALIASES.get(name, name)
        if name not in FIELD_NAMES:
            logger.warning("Ignoring unknown config key: %s", key)
            continue
        try:
            values[name] = _coerce(name, value)
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring invalid value for %s: %r (%s)", key, value, e)
    return Config(**values)


def apply_env(config: Config) -> Config:
    overrides = {}
    if os.environ.get("WORDLENS_CACHE_DIR"):
        overrides["cache_dir"] = os.environ["WORDLENS_CACHE_DIR"]
    if not config.http_proxy and os.environ.get("HTTP_PROXY"):
        overrides["http_proxy"] = os.environ["HTTP_PROXY"]
    if not config.https_proxy and os.environ.get("HTTPS_PROXY"):
        overrides["https_proxy"] = os.environ["HTTPS_PROXY"]
    return replace(config, **overrides) if overrides else config


def load_config(path: str | Path | None = None) -> Config:
    """Load a YAML config file; fall back to defaults on any problem."""
    if path is None:
        return apply_env(Config())

    path = Path(path).expanduser()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return apply_env(Config())
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning("Could not read config %s (%s), using defaults", path, e)
        return apply_env(Config())

    if data is None:
        return apply_env(Config())
    if not isinstance(data, dict):
        logger.warning("Config %s is not a mapping, using defaults", path)
        return apply_env(Config())

    return apply_env(config_from_dict(data))
