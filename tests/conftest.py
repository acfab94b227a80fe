"""Shared fixtures: config factory, sample text, and a network-free tokenizer."""

import re

import pytest
import tiktoken

from app.config.chunking.models import ChunkingConfig


def fake_token_spans(text: str, encoding_name: str = "fake") -> list[tuple[int, int]]:
    """One token per word, leading whitespace attached (like GPT-style ' word' tokens)."""
    spans = [(m.start(), m.end()) for m in re.finditer(r"\s*\S+", text)]
    if spans and spans[-1][1] < len(text):
        spans[-1] = (spans[-1][0], len(text))
    return spans


def fake_count_tokens(text: str, encoding_name: str = "fake") -> int:
    return len(re.findall(r"\S+", text))


@pytest.fixture
def fake_tokenizer(monkeypatch):
    """Replace tiktoken-backed helpers so token tests never download encodings."""
    monkeypatch.setattr("app.services.chunking.strategies.token.token_spans", fake_token_spans)
    monkeypatch.setattr("app.services.chunking.tokenizer.count_tokens", fake_count_tokens)


@pytest.fixture
def byte_encoding(monkeypatch) -> tiktoken.Encoding:
    """Real tiktoken encoding with one token per UTF-8 byte and no merges; built offline."""
    enc = tiktoken.Encoding(
        name="bytes",
        pat_str=r"\S+|\s+",
        mergeable_ranks={bytes([i]): i for i in range(256)},
        special_tokens={},
    )
    monkeypatch.setattr("app.services.chunking.tokenizer.get_encoding", lambda name="bytes": enc)
    return enc


@pytest.fixture
def make_config():
    def _make(**kwargs) -> ChunkingConfig:
        return ChunkingConfig(**kwargs)

    return _make


@pytest.fixture
def sample_text() -> str:
    return (
        "Retrieval pipelines split long documents before embedding them.\n\n"
        "Each chunk should stay under the size budget. Paragraph breaks are the\n"
        "preferred boundary, then line breaks, then spaces.\n\n"
        "Averyveryveryverylongwordwithnospacesatallthatmustbesplitbycharacter and more.\n"
        "Short line.\n\n\n\n"
        "Final paragraph after extra blank lines."
    )
