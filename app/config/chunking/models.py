"""Chunking configuration models. Read-only; no business logic."""

from typing import Any, Callable, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.services.chunking.exceptions import ConfigurationError

DEFAULT_SEPARATORS: list[str] = ["\n\n", "\n", " ", ""]

DEFAULT_HEADERS: list[tuple[str, str]] = [
    ("#", "h1"),
    ("##", "h2"),
    ("###", "h3"),
    ("####", "h4"),
    ("#####", "h5"),
    ("######", "h6"),
]


class ChunkingConfig(BaseModel):
    """Splitter strategy and parameters. Immutable once built."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    strategy: str = Field(default="recursive", description="recursive|character|token|markdown_header")
    max_chunk_size: int = Field(default=1000, description="Upper bound on chunk length")
    chunk_overlap: int = Field(default=200, description="Max overlap carried into the next chunk")
    separators: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SEPARATORS),
        description="Separator hierarchy, coarsest first",
    )
    length_unit: Literal["characters", "tokens"] = Field(default="characters")
    encoding_name: str = Field(default="cl100k_base", description="tiktoken encoding for token lengths")
    headers_to_split_on: list[tuple[str, str]] = Field(default_factory=lambda: list(DEFAULT_HEADERS))
    strip_headers: bool = Field(default=True)
    resplit_oversized: bool = Field(default=False, description="Re-split large markdown sections recursively")
    normalize_whitespace: bool = Field(default=False)
    length_function: Callable[[str], int] | None = Field(default=None, exclude=True)

    @model_validator(mode="after")
    def validate_invariants(self) -> "ChunkingConfig":
        check_invariants(self.max_chunk_size, self.chunk_overlap, self.separators)
        return self

    def public_dict(self) -> dict[str, Any]:
        """JSON-safe view used for hashing and API responses."""
        return self.model_dump(mode="json")


def check_invariants(max_chunk_size: int, chunk_overlap: int, separators: list[str]) -> None:
    """Raise ConfigurationError when size, overlap or separators are unusable."""
    if max_chunk_size <= 0:
        raise ConfigurationError(
            f"max_chunk_size must be positive, got {max_chunk_size}", field="max_chunk_size"
        )
    if chunk_overlap < 0:
        raise ConfigurationError(
            f"chunk_overlap must be non-negative, got {chunk_overlap}", field="chunk_overlap"
        )
    if chunk_overlap >= max_chunk_size:
        raise ConfigurationError(
            f"chunk_overlap ({chunk_overlap}) must be smaller than max_chunk_size ({max_chunk_size})",
            field="chunk_overlap",
        )
    if not separators:
        raise ConfigurationError("separators must not be empty", field="separators")
