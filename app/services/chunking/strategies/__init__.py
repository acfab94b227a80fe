"""Chunking strategy implementations."""

from typing import Callable

from app.config.chunking.models import ChunkingConfig
from app.services.chunking.chunk import Chunk
from app.services.chunking.recursive import recursive_chunks
from app.services.chunking.strategies.character import character_chunks
from app.services.chunking.strategies.markdown_header import markdown_header_chunks
from app.services.chunking.strategies.token import token_chunks

STRATEGY_REGISTRY: dict[str, Callable[[str, ChunkingConfig], list[Chunk]]] = {
    "recursive": recursive_chunks,
    "character": character_chunks,
    "token": token_chunks,
    "markdown_header": markdown_header_chunks,
    "markdown": markdown_header_chunks,  # alias
}


def get_strategy_fn(strategy_name: str):
    """Return the chunking function for the given strategy name, or None."""
    return STRATEGY_REGISTRY.get(strategy_name)
