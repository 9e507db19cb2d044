"""Tests for text normalization, tokenization and taggers."""

import json
from types import SimpleNamespace

from wordlens.core.tokenize import tokenize, normalize_text, Token
from wordlens.core.tagger import StaticTagger, OpenAITagger


# === Tokenizer tests ===

def test_tokenize_simple():
    tokens = tokenize("The quick fox runs.")

    assert [t.text for t in tokens] == ["The", "quick", "fox", "runs", "."]
    assert tokens[0] == Token("The", 0)
    assert tokens[2] == Token("fox", 10)


def test_tokenize_keeps_slash_compounds():
    tokens = tokenize("a Writer/Copywriter job")

    assert [t.text for t in tokens] == ["a", "Writer/Copywriter", "job"]


def test_tokenize_keeps_hyphenated_words():
    tokens = tokenize("well-known facts")

    assert tokens[0].text == "well-known"


def test_tokenize_empty():
    assert tokenize("") == []


def test_normalize_text_joins_lines():
    raw = "The quick\n  fox\n\nruns.\n"

    assert normalize_text(raw) == "The quick fox runs."


# === Taggers ===

def test_static_tagger_case_insensitive():
    tagger = StaticTagger({"The": "DT", "fox": "NN"}, default="XX")

    assert tagger.tag("the Fox jumps") == [("the", "DT"), ("Fox", "NN"), ("jumps", "XX")]


class FakeCompletions:
    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        content = json.dumps(self.replies.pop(0))
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_openai(replies):
    completions = FakeCompletions(replies)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def test_openai_tagger_pairs_tokens_with_tags():
    client, completions = fake_openai([{"tags": ["DT", "JJ", "NN", "VBZ", "."]}])
    tagger = OpenAITagger(client)

    pairs = tagger.tag("The quick fox runs.")

    assert pairs == [("The", "DT"), ("quick", "JJ"), ("fox", "NN"), ("runs", "VBZ"), (".", ".")]
    sent = json.loads(completions.calls[0]["messages"][1]["content"])
    assert sent == ["The", "quick", "fox", "runs", "."]


def test_openai_tagger_pads_short_replies():
    client, _ = fake_openai([{"tags": ["DT"]}])
    tagger = OpenAITagger(client)

    assert tagger.tag("The fox") == [("The", "DT"), ("fox", "NN")]


def test_openai_tagger_batches():
    client, completions = fake_openai([{"tags": ["DT", "NN"]}, {"tags": ["VBZ"]}])
    tagger = OpenAITagger(client, batch_size=2)

    assert tagger.tag("The fox runs") == [("The", "DT"), ("fox", "NN"), ("runs", "VBZ")]
    assert len(completions.calls) == 2


def test_openai_tagger_empty_text_makes_no_call():
    client, completions = fake_openai([])
    tagger = OpenAITagger(client)

    assert tagger.tag("   ") == []
    assert completions.calls == []
