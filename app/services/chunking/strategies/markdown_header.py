"""Markdown header chunking. Groups content under the most recent header of each level."""

from typing import NamedTuple, Union

from app.config.chunking.models import ChunkingConfig
from app.services.chunking.chunk import Chunk, make_chunk
from app.services.chunking.recursive import split_range
from app.services.chunking.tokenizer import get_length_function

FENCES = ("```", "~~~")


class HeadingBlock(NamedTuple):
    """A header line. Span covers the line including its newline."""

    level: int
    name: str
    title: str
    start: int
    end: int


class ContentBlock(NamedTuple):
    """Any non-header line, fenced code included."""

    start: int
    end: int


Block = Union[HeadingBlock, ContentBlock]

# (level, name, title) from outermost to innermost
HeaderStack = tuple[tuple[int, str, str], ...]


def _match_heading(stripped: str, headers: list[tuple[str, str]]) -> tuple[str, str] | None:
    for prefix, name in headers:
        if stripped.startswith(prefix) and (len(stripped) == len(prefix) or stripped[len(prefix)] in " \t"):
            return prefix, name
    return None


def scan_blocks(text: str, headers_to_split_on: list[tuple[str, str]]) -> list[Block]:
    """Classify each line as a heading or content. Fenced code is never a heading."""
    headers = sorted(headers_to_split_on, key=lambda h: len(h[0]), reverse=True)
    blocks: list[Block] = []
    fence: str | None = None
    pos = 0
    for line in text.splitlines(keepends=True):
        start, end = pos, pos + len(line)
        pos = end
        stripped = line.strip()
        if fence is not None:
            if stripped.startswith(fence):
                fence = None
            blocks.append(ContentBlock(start, end))
            continue
        opener = next((f for f in FENCES if stripped.startswith(f)), None)
        if opener is not None:
            fence = opener
            blocks.append(ContentBlock(start, end))
            continue
        match = _match_heading(stripped, headers)
        if match is None:
            blocks.append(ContentBlock(start, end))
            continue
        prefix, name = match
        level = prefix.count("#") or len(prefix)
        blocks.append(HeadingBlock(level, name, stripped[len(prefix) :].strip(), start, end))
    return blocks


def push_heading(stack: HeaderStack, heading: HeadingBlock) -> HeaderStack:
    """New stack with headers at the same or deeper level replaced by heading."""
    kept = tuple(entry for entry in stack if entry[0] < heading.level)
    return kept + ((heading.level, heading.name, heading.title),)


class Section(NamedTuple):
    start: int
    end: int
    stack: HeaderStack


def group_sections(blocks: list[Block], strip_headers: bool) -> list[Section]:
    """Fold blocks into sections, one per run of content under a header path."""
    sections: list[Section] = []
    stack: HeaderStack = ()
    open_start: int | None = None
    open_end = 0
    open_stack: HeaderStack = ()
    for block in blocks:
        if isinstance(block, HeadingBlock):
            if open_start is not None:
                sections.append(Section(open_start, open_end, open_stack))
            stack = push_heading(stack, block)
            if strip_headers:
                open_start = None
            else:
                open_start, open_end, open_stack = block.start, block.end, stack
            continue
        if open_start is None:
            open_start, open_stack = block.start, stack
        open_end = block.end
    if open_start is not None:
        sections.append(Section(open_start, open_end, open_stack))
    return sections


def _trim(text: str, start: int, end: int) -> tuple[int, int]:
    while start < end and text[start] in "\r\n":
        start += 1
    while end > start and text[end - 1] in "\r\n":
        end -= 1
    return start, end


def markdown_header_chunks(text: str, config: ChunkingConfig) -> list[Chunk]:
    """
    Chunk markdown by header structure. Each chunk carries the enclosing header
    titles as metadata ({"h1": ..., "h2": ...}). Sections longer than
    max_chunk_size are re-split recursively when resplit_oversized is set,
    otherwise emitted whole and flagged oversized.
    """
    if not text:
        return []
    length_function = get_length_function(config)
    blocks = scan_blocks(text, config.headers_to_split_on)
    chunks: list[Chunk] = []
    for section in group_sections(blocks, config.strip_headers):
        start, end = _trim(text, section.start, section.end)
        if not text[start:end].strip():
            continue
        metadata = {name: title for _, name, title in section.stack}
        length = length_function(text[start:end])
        if length > config.max_chunk_size and config.resplit_oversized:
            for piece in split_range(text, start, end, config, length_function):
                chunks.append(piece.model_copy(update={"metadata": {**metadata, **piece.metadata}}))
            continue
        chunks.append(make_chunk(text, start, end, length, config.max_chunk_size, metadata=metadata))
    return chunks
