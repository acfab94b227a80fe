"""Chunk produced by every splitter: an exact span of the source text."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Contiguous substring of the source with offsets for traceability."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Equal to source[start:end]")
    start: int = Field(..., ge=0, description="Start offset into the source text")
    end: int = Field(..., ge=0, description="End offset (exclusive) into the source text")
    length: int = Field(..., ge=0, description="Size under the configured length function")
    level: int | None = Field(default=None, description="Separator index that produced the chunk")
    oversized: bool = Field(default=False, description="Exceeds max_chunk_size and could not be split")
    metadata: dict[str, Any] = Field(default_factory=dict)


def make_chunk(
    source: str,
    start: int,
    end: int,
    length: int,
    max_chunk_size: int,
    level: int | None = None,
    metadata: dict[str, Any] | None = None,
) -> Chunk:
    """Build a chunk from offsets; the oversized flag follows from length."""
    return Chunk(
        text=source[start:end],
        start=start,
        end=end,
        length=length,
        level=level,
        oversized=length > max_chunk_size,
        metadata=dict(metadata or {}),
    )
