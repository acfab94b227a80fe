"""Request/response schemas for POST /split and GET /split/profiles."""

from typing import Any

from pydantic import BaseModel, Field

from app.services.chunking.chunk import Chunk


class SplitRequest(BaseModel):
    """POST /split request body. Profile from static.json unless overridden field by field."""

    text: str = Field(..., description="Text to split")
    profile: str | None = Field(default=None, description="Profile name from static.json; 'active' by default")
    strategy: str | None = Field(default=None, description="Optional strategy override")
    max_chunk_size: int | None = Field(default=None, description="Optional override for max chunk size")
    chunk_overlap: int | None = Field(default=None, description="Optional override for overlap")
    separators: list[str] | None = Field(default=None, description="Optional separator hierarchy override")

    def overrides(self) -> dict[str, Any]:
        fields = ("strategy", "max_chunk_size", "chunk_overlap", "separators")
        return {f: getattr(self, f) for f in fields if getattr(self, f) is not None}


class SplitResponse(BaseModel):
    """POST /split response body."""

    profile: str
    strategy: str
    total_chunks: int = Field(..., ge=0)
    oversized_chunks: int = Field(default=0, ge=0)
    chunks: list[Chunk] = Field(default_factory=list)


class ProfilesResponse(BaseModel):
    """GET /split/profiles response body."""

    active: str
    profiles: dict[str, dict[str, Any]]
