"""Tests for the markdown header splitter."""

from app.services.chunking.strategies.markdown_header import (
    ContentBlock,
    HeadingBlock,
    markdown_header_chunks,
    push_heading,
    scan_blocks,
)

DOC = (
    "Preamble line.\n"
    "# Intro\n"
    "Welcome text.\n"
    "\n"
    "## Setup\n"
    "Install it.\n"
    "```python\n"
    "# not a header\n"
    "```\n"
    "# Usage\n"
    "Run it.\n"
)


def _config(make_config, **kwargs):
    params = {"strategy": "markdown_header", "max_chunk_size": 500, "chunk_overlap": 0}
    params.update(kwargs)
    return make_config(**params)


def test_groups_content_under_headers(make_config):
    chunks = markdown_header_chunks(DOC, _config(make_config))
    assert [(c.text, c.metadata) for c in chunks] == [
        ("Preamble line.", {}),
        ("Welcome text.", {"h1": "Intro"}),
        ("Install it.\n```python\n# not a header\n```", {"h1": "Intro", "h2": "Setup"}),
        ("Run it.", {"h1": "Usage"}),
    ]
    assert all(DOC[c.start : c.end] == c.text for c in chunks)


def test_keeps_header_lines_when_not_stripped(make_config):
    chunks = markdown_header_chunks(DOC, _config(make_config, strip_headers=False))
    assert chunks[1].text == "# Intro\nWelcome text."
    assert chunks[-1].text == "# Usage\nRun it."


def test_only_configured_prefixes_split(make_config):
    config = _config(make_config, headers_to_split_on=[("#", "h1")])
    chunks = markdown_header_chunks(DOC, config)
    assert len(chunks) == 3
    assert "## Setup" in chunks[1].text
    assert chunks[1].metadata == {"h1": "Intro"}


def test_hashtag_is_not_a_header():
    blocks = scan_blocks("#hashtag\ntext\n", [("#", "h1")])
    assert all(isinstance(b, ContentBlock) for b in blocks)


def test_fenced_code_is_content():
    blocks = scan_blocks("~~~\n# inside\n~~~\n# Out\n", [("#", "h1")])
    assert [type(b) for b in blocks] == [ContentBlock, ContentBlock, ContentBlock, HeadingBlock]
    assert blocks[-1].title == "Out"


def test_push_heading_replaces_same_and_deeper_levels():
    stack = push_heading((), HeadingBlock(1, "h1", "A", 0, 4))
    stack = push_heading(stack, HeadingBlock(2, "h2", "B", 4, 9))
    stack = push_heading(stack, HeadingBlock(3, "h3", "C", 9, 15))
    assert push_heading(stack, HeadingBlock(2, "h2", "D", 15, 20)) == ((1, "h1", "A"), (2, "h2", "D"))
    assert push_heading(stack, HeadingBlock(1, "h1", "E", 15, 20)) == ((1, "h1", "E"),)


def test_large_section_flagged_without_resplit(make_config):
    text = "# Big\n" + "word " * 20
    chunks = markdown_header_chunks(text, _config(make_config, max_chunk_size=30, chunk_overlap=5))
    assert len(chunks) == 1 and chunks[0].oversized


def test_large_section_resplit_keeps_metadata(make_config):
    text = "# Big\n" + "word " * 20
    config = _config(make_config, max_chunk_size=30, chunk_overlap=5, resplit_oversized=True)
    chunks = markdown_header_chunks(text, config)
    assert len(chunks) > 1
    assert all(c.metadata == {"h1": "Big"} for c in chunks)
    assert all(not c.oversized and c.length <= 30 for c in chunks)
    assert all(text[c.start : c.end] == c.text for c in chunks)


def test_header_without_content_is_skipped(make_config):
    chunks = markdown_header_chunks("# Empty\n\n# Full\nbody\n", _config(make_config))
    assert [(c.text, c.metadata) for c in chunks] == [("body", {"h1": "Full"})]
