"""Fixed-delimiter chunking. One split on the first separator; no merging, no overlap."""

from app.config.chunking.models import ChunkingConfig
from app.services.chunking.chunk import Chunk, make_chunk
from app.services.chunking.recursive import split_segments
from app.services.chunking.tokenizer import get_length_function


def character_chunks(text: str, config: ChunkingConfig) -> list[Chunk]:
    """
    Split on the first configured separator and emit every non-empty segment as
    its own chunk. Segments above max_chunk_size are kept whole and flagged.
    """
    if not text:
        return []
    length_function = get_length_function(config)
    separator = config.separators[0]
    return [
        make_chunk(text, seg.start, seg.end, seg.length, config.max_chunk_size, level=0)
        for seg in split_segments(text, 0, len(text), separator, length_function)
        if seg.end > seg.start
    ]
