"""Test helpers shared across modules."""

from app.services.chunking.chunk import Chunk


def reconstruct(chunks: list[Chunk], source: str) -> tuple[str, list[str]]:
    """
    Rebuild source from chunks: each chunk contributes the part not already
    covered by its predecessor, and the uncovered gaps are copied from source.
    Returns the rebuilt text and the list of gaps.
    """
    out: list[str] = []
    gaps: list[str] = []
    pos = 0
    for chunk in chunks:
        if chunk.start > pos:
            gaps.append(source[pos : chunk.start])
            out.append(source[pos : chunk.start])
        out.append(chunk.text[max(0, pos - chunk.start) :])
        pos = max(pos, chunk.end)
    if pos < len(source):
        gaps.append(source[pos:])
        out.append(source[pos:])
    return "".join(out), gaps
