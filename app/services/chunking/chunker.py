"""
Chunker: takes raw text + config and returns chunks or chunk records with chunk_hash.
Pure and deterministic: the same text and config always give the same output.
"""

import hashlib
import json
from typing import Any

from app.config.chunking.models import ChunkingConfig, check_invariants
from app.config.logging import get_logger
from app.services.chunking.chunk import Chunk
from app.services.chunking.cleaners import clean_for_chunking
from app.services.chunking.exceptions import UnknownStrategyError
from app.services.chunking.strategies import get_strategy_fn
from app.utils.ids import generate_chunk_id

logger = get_logger(__name__)


def validate_config(config: ChunkingConfig) -> None:
    """
    Re-check config invariants. Configs built with model_construct or
    model_copy(update=...) skip pydantic validation, so splitting checks again.
    """
    check_invariants(config.max_chunk_size, config.chunk_overlap, config.separators)
    if get_strategy_fn(config.strategy) is None:
        raise UnknownStrategyError(f"Unknown chunking strategy: {config.strategy!r}", field="strategy")


def split_text(text: str, config: ChunkingConfig) -> list[Chunk]:
    """Split text with the configured strategy. Offsets address the (optionally cleaned) text."""
    validate_config(config)
    if not text:
        return []
    cleaned = clean_for_chunking(text, normalize=config.normalize_whitespace)
    chunks = get_strategy_fn(config.strategy)(cleaned, config)
    oversized = sum(1 for c in chunks if c.oversized)
    if oversized:
        logger.info(
            "Chunks exceed max_chunk_size and could not be split further",
            extra={"strategy": config.strategy, "oversized": oversized, "max_chunk_size": config.max_chunk_size},
        )
    return chunks


def compute_chunk_hash(chunk_text: str, strategy: str, config: ChunkingConfig) -> str:
    """Chunk hash = SHA-256(chunk_text + strategy + canonical config)."""
    config_canonical = json.dumps(config.public_dict(), sort_keys=True)
    payload = f"{chunk_text}|{strategy}|{config_canonical}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def chunk_document(text: str, document_id: str, config: ChunkingConfig) -> list[dict[str, Any]]:
    """
    Chunk a document and build chunk records with chunk_id and chunk_hash.
    Deterministic for same input + config.
    """
    chunks = split_text(text, config)
    config_dict = config.public_dict()
    records: list[dict[str, Any]] = []
    for i, chunk in enumerate(chunks):
        chunk_hash = compute_chunk_hash(chunk.text, config.strategy, config)
        records.append({
            "chunk_id": generate_chunk_id(document_id, i, chunk_hash),
            "document_id": document_id,
            "chunk_index": i,
            "chunk_text": chunk.text,
            "start_offset": chunk.start,
            "end_offset": chunk.end,
            "length": chunk.length,
            "length_unit": config.length_unit,
            "level": chunk.level,
            "oversized": chunk.oversized,
            "metadata": chunk.metadata,
            "chunking_strategy": config.strategy,
            "chunking_config": config_dict,
            "max_chunk_size": config.max_chunk_size,
            "chunk_overlap": config.chunk_overlap,
            "chunk_hash": chunk_hash,
        })
    logger.debug("Chunked document", extra={"document_id": document_id, "chunks": len(records)})
    return records
