"""Token-budget chunking. Windows of max_chunk_size tokens with chunk_overlap tokens of overlap."""

from app.config.chunking.models import ChunkingConfig
from app.services.chunking.chunk import Chunk, make_chunk
from app.services.chunking.recursive import Segment, merge_segments
from app.services.chunking.tokenizer import token_spans


def token_segments(spans: list[tuple[int, int]]) -> list[Segment]:
    """
    One segment per character run, weighted by its token count. A character
    encoded across several tokens shows up as zero-width spans followed by the
    span that covers it; those are folded into that span so no segment is empty.
    """
    segments: list[Segment] = []
    carried = 0
    for start, end in spans:
        if start == end:
            carried += 1
            continue
        segments.append(Segment(start, end, carried + 1))
        carried = 0
    if carried and segments:
        last = segments[-1]
        segments[-1] = last._replace(length=last.length + carried)
    return segments


def token_chunks(text: str, config: ChunkingConfig) -> list[Chunk]:
    """
    Tokenize with character offsets, then regroup tokens with the same greedy
    merge used by the recursive splitter (segments joined by the empty
    separator, lengths in tokens). Chunk text is the exact source span. A single
    character worth more tokens than max_chunk_size comes out flagged oversized.
    """
    if not text:
        return []
    segments = token_segments(token_spans(text, config.encoding_name))
    windows = merge_segments(segments, 0, config.max_chunk_size, config.chunk_overlap)
    return [make_chunk(text, w.start, w.end, w.length, config.max_chunk_size, level=0) for w in windows]
