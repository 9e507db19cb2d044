"""Tests for configuration loading."""

import pytest

from wordlens.core.classify import CategorizationPolicy
from wordlens.core.config import Config, config_from_dict, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("WORDLENS_CACHE_DIR", "HTTP_PROXY", "HTTPS_PROXY"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()

    assert config == Config()
    assert config.generate_explanations
    assert config.max_example_sentences == 0
    assert config.timeout == 10.0
    assert config.categorization_policy == CategorizationPolicy.FIRST_SEEN


def test_load_camel_case_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "includePhonetic: false\n"
        "includeOrigin: true\n"
        "filterDefinitionsWithoutExamples: yes\n"
        "maxExampleSentences: 3\n"
        "queryForUnknownWords: true\n"
        "httpsProxy: http://proxy.local:3128\n"
        "categorization: per_occurrence\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.include_phonetic is False
    assert config.include_origin is True
    assert config.filter_definitions_without_examples is True
    assert config.max_example_sentences == 3
    assert config.query_unknown_words is True
    assert config.https_proxy == "http://proxy.local:3128"
    assert config.proxy == "http://proxy.local:3128"
    assert config.categorization_policy == CategorizationPolicy.PER_OCCURRENCE


def test_snake_case_and_string_booleans():
    config = config_from_dict({"include_synonyms": "off", "workers": "4", "timeout": 2})

    assert config.include_synonyms is False
    assert config.workers == 4
    assert config.timeout == 2.0


def test_unknown_and_invalid_keys_are_ignored():
    config = config_from_dict({"colour": "blue", "maxExampleSentences": "lots", "categorization": "random"})

    assert config == Config()


def test_missing_file_uses_defaults(tmp_path):
    assert load_config(tmp_path / "missing.yaml") == Config()


def test_broken_yaml_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("includePhonetic: [unclosed\n", encoding="utf-8")

    assert load_config(path) == Config()


def test_non_mapping_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    assert load_config(path) == Config()


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == Config()


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("WORDLENS_CACHE_DIR", str(tmp_path))
    monkeypatch.setenv("HTTP_PROXY", "http://proxy.local:8080")

    config = load_config()

    assert config.cache_path == tmp_path
    assert config.http_proxy == "http://proxy.local:8080"
    assert config.proxy == "http://proxy.local:8080"
