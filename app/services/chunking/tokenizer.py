"""Tokenizer and length functions for chunking. Token counts come from tiktoken."""

from functools import lru_cache
from typing import Callable

import tiktoken

from app.config.chunking.models import ChunkingConfig
from app.config.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=8)
def get_encoding(encoding_name: str = "cl100k_base") -> tiktoken.Encoding:
    """Lazy-load and cache a tiktoken encoding (cl100k_base used by OpenAI)."""
    logger.debug("Loading tiktoken encoding", extra={"encoding": encoding_name})
    return tiktoken.get_encoding(encoding_name)


def count_tokens(text: str, encoding_name: str = "cl100k_base") -> int:
    """Return token count for text."""
    if not text:
        return 0
    return len(get_encoding(encoding_name).encode(text, disallowed_special=()))


def token_spans(text: str, encoding_name: str = "cl100k_base") -> list[tuple[int, int]]:
    """
    Return (start, end) character spans, one per token, covering the text in order.
    A character encoded across several tokens yields zero-width spans for the
    trailing tokens, so spans never overlap and never leave gaps.
    """
    if not text:
        return []
    enc = get_encoding(encoding_name)
    tokens = enc.encode(text, disallowed_special=())
    _, offsets = enc.decode_with_offsets(tokens)
    starts: list[int] = []
    floor = 0
    for offset in offsets:
        floor = max(floor, min(offset, len(text)))
        starts.append(floor)
    ends = starts[1:] + [len(text)]
    return list(zip(starts, ends))


def get_length_function(config: ChunkingConfig) -> Callable[[str], int]:
    """Explicit length_function wins; otherwise characters or tiktoken tokens."""
    if config.length_function is not None:
        return config.length_function
    if config.length_unit == "tokens":
        encoding_name = config.encoding_name
        return lambda text: count_tokens(text, encoding_name)
    return len
