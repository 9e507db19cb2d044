# src/wordlens/core/tagger.py
"""
Part-of-speech taggers.

A tagger turns normalized document text into (token, Penn Treebank tag) pairs.
The classifier only consumes the pairs, so any implementation will do.
"""

import json
from typing import Protocol

from openai import OpenAI

from wordlens.core.tokenize import tokenize


DEFAULT_TAG = "NN"


class Tagger(Protocol):
    def tag(self, text: str) -> list[tuple[str, str]]: ...


class StaticTagger:
    """Tags tokens from a lookup table. Useful offline and in tests."""

    def __init__(self, tags: dict[str, str] | None = None, default: str = DEFAULT_TAG):
        self.tags = {k.lower(): v for k, v in (tags or {}).items()}
        self.default = default

    def tag(self, text: str) -> list[tuple[str, str]]:
        return [
            (t.text, self.tags.get(t.text.lower(), self.default))
            for t in tokenize(text)
        ]


TAGGING_SYSTEM_PROMPT = """You are a part-of-speech tagger.

Given a JSON list of tokens, return the Penn Treebank tag for each token.
Keep the same order and the same number of items.

Respond with JSON: {"tags": [...]}

Example:
Input: ["The", "quick", "fox", "runs", "."]
Output: {"tags": ["DT", "JJ", "NN", "VBZ", "."]}
"""


class OpenAITagger:
    def __init__(
        self,
        openai_client: OpenAI | None = None,
        model: str = "gpt-4o-mini",
        batch_size: int = 400,
    ):
        self.client = openai_client or OpenAI()
        self.model = model
        self.batch_size = batch_size

    def _tag_batch(self, token_texts: list[str]) -> list[str]:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": TAGGING_SYSTEM_PROMPT},
                {"role": "user", "content": json.dumps(token_texts)},
            ],
            response_format={"type": "json_object"},
        )

        result = json.loads(response.choices[0].message.content)
        tags = result.get("tags", []) if isinstance(result, dict) else result
        return [str(t) for t in tags]

    def tag(self, text: str) -> list[tuple[str, str]]:
        tokens = tokenize(text)
        if not tokens:
            return []

        pairs = []
        for start in range(0, len(tokens), self.batch_size):
            batch = [t.text for t in tokens[start:start + self.batch_size]]
            tags = self._tag_batch(batch)

            # Short replies leave the tail untagged
            tags = tags + [DEFAULT_TAG] * (len(batch) - len(tags))
            pairs.extend(zip(batch, tags))

        return pairs
