"""
Recursive separator-hierarchy chunking.

Text is split on the coarsest separator present, consecutive segments are merged
greedily up to max_chunk_size, and any single segment that is still too large is
split again with the next separator. Chunks are always exact spans of the source
(text == source[start:end]); separators dropped at chunk boundaries are the only
characters not covered by some chunk.
"""

from collections import deque
from typing import Callable, NamedTuple

from app.config.chunking.models import ChunkingConfig
from app.config.logging import get_logger
from app.services.chunking.chunk import Chunk, make_chunk
from app.services.chunking.tokenizer import get_length_function

logger = get_logger(__name__)


class Segment(NamedTuple):
    """Raw piece of the source between two separator occurrences."""

    start: int
    end: int
    length: int


class Window(NamedTuple):
    """Merged run of segments, ready to become a chunk."""

    start: int
    end: int
    length: int


def split_segments(
    source: str,
    start: int,
    end: int,
    separator: str,
    length_function: Callable[[str], int] = len,
) -> list[Segment]:
    """
    Split source[start:end] on literal occurrences of separator. Segments exclude
    the separator and may be empty (adjacent separators). An empty separator
    yields one segment per character.
    """
    if separator == "":
        return [Segment(i, i + 1, length_function(source[i])) for i in range(start, end)]
    segments: list[Segment] = []
    pos = start
    while True:
        hit = source.find(separator, pos, end)
        if hit == -1:
            segments.append(Segment(pos, end, length_function(source[pos:end])))
            return segments
        segments.append(Segment(pos, hit, length_function(source[pos:hit])))
        pos = hit + len(separator)


def _close_window(
    current: deque[Segment],
    separator_length: int,
    measure: Callable[[int, int], int] | None = None,
) -> Window | None:
    """Trim empty segments at both edges so chunks never start or end on a separator."""
    kept = list(current)
    while kept and kept[0].start == kept[0].end:
        kept.pop(0)
    while kept and kept[-1].start == kept[-1].end:
        kept.pop()
    if not kept:
        return None
    if measure is not None:
        return Window(kept[0].start, kept[-1].end, measure(kept[0].start, kept[-1].end))
    length = sum(s.length for s in kept) + separator_length * (len(kept) - 1)
    return Window(kept[0].start, kept[-1].end, length)


def merge_segments(
    segments: list[Segment],
    separator_length: int,
    max_chunk_size: int,
    chunk_overlap: int,
    measure: Callable[[int, int], int] | None = None,
) -> list[Window]:
    """
    Greedily merge consecutive segments while the joined length stays within
    max_chunk_size. After each emitted window the next one is seeded with the
    longest run of trailing segments that fits in chunk_overlap and still leaves
    room for the incoming segment. A segment larger than max_chunk_size on its
    own becomes a window by itself.

    Without measure, lengths add up (segments plus one separator between each),
    which is exact for character counts. For length functions that are not
    additive, such as token counts, pass measure(start, end) to size the joined
    source span directly.
    """
    windows: list[Window] = []
    current: deque[Segment] = deque()
    total = 0

    def projected(seg: Segment) -> int:
        if measure is not None:
            return measure(current[0].start, seg.end)
        return total + separator_length + seg.length

    def recount() -> int:
        if not current:
            return 0
        return measure(current[0].start, current[-1].end) if measure is not None else total

    for seg in segments:
        # empty segments only carry a separator and never force a window closed
        if current and seg.start < seg.end and projected(seg) > max_chunk_size:
            window = _close_window(current, separator_length, measure)
            if window is not None:
                windows.append(window)
            while current and (
                total > chunk_overlap
                or projected(seg) > max_chunk_size
                or current[0].start == current[0].end
            ):
                dropped = current.popleft()
                total -= dropped.length + (separator_length if current else 0)
                total = recount()
            if not current:
                total = 0
        # an empty segment never opens a window
        if not current and seg.start == seg.end:
            continue
        joiner = separator_length if current else 0
        current.append(seg)
        total += joiner + seg.length
        total = recount()
    window = _close_window(current, separator_length, measure)
    if window is not None:
        windows.append(window)
    return windows


def _pick_level(source: str, start: int, end: int, separators: list[str], first_level: int) -> int:
    """Index of the first separator at or after first_level that occurs in the range."""
    for level in range(first_level, len(separators)):
        separator = separators[level]
        if separator == "" or source.find(separator, start, end) != -1:
            return level
    return len(separators) - 1


def split_range(
    source: str,
    start: int,
    end: int,
    config: ChunkingConfig,
    length_function: Callable[[str], int],
    first_level: int = 0,
) -> list[Chunk]:
    """
    Chunk source[start:end] starting at separator index first_level. Recursion
    depth is bounded by len(config.separators).
    """
    separators = config.separators
    max_size = config.max_chunk_size
    level = _pick_level(source, start, end, separators, first_level)
    separator = separators[level]
    has_finer = separator != "" and level + 1 < len(separators)
    separator_length = length_function(separator) if separator else 0

    # character counts add up exactly; anything else is measured on the joined span
    measure = None if length_function is len else (lambda a, b: length_function(source[a:b]))

    chunks: list[Chunk] = []
    pending: list[Segment] = []

    def flush() -> None:
        for window in merge_segments(pending, separator_length, max_size, config.chunk_overlap, measure):
            text = source[window.start : window.end]
            chunks.append(
                make_chunk(source, window.start, window.end, length_function(text), max_size, level=level)
            )
        pending.clear()

    for seg in split_segments(source, start, end, separator, length_function):
        if seg.length <= max_size:
            pending.append(seg)
            continue
        flush()
        if has_finer:
            chunks.extend(split_range(source, seg.start, seg.end, config, length_function, level + 1))
        else:
            logger.debug(
                "Emitting oversized chunk",
                extra={"start": seg.start, "end": seg.end, "length": seg.length, "max_chunk_size": max_size},
            )
            chunks.append(make_chunk(source, seg.start, seg.end, seg.length, max_size, level=level))
    flush()
    return chunks


def recursive_chunks(text: str, config: ChunkingConfig) -> list[Chunk]:
    """Split text along config.separators, coarsest first, with overlap between merged chunks."""
    if not text:
        return []
    return split_range(text, 0, len(text), config, get_length_function(config))
