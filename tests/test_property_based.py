from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st
from notemark.blocks import parse_blocks, parse_line
from notemark.classifiers import try_close_fence, try_open_fence
from notemark.highlight import tokenize
from notemark.inline import parse_inlines, scan_inline
from notemark.models import BlockKind, InlineKind, ParserContext, ParserState

markdown_text = st.text(alphabet="*_`~[]()!#->|xX. \t\n\\", max_size=200)


@given(st.text(max_size=200))
def test_parse_blocks_is_deterministic(content: str):
    assert parse_blocks(content) == parse_blocks(content)


@given(markdown_text)
def test_parse_blocks_never_yields_empty_paragraphs(content: str):
    for block in parse_blocks(content):
        if block.kind is BlockKind.PARAGRAPH:
            assert block.content.strip()


@given(st.text(alphabet=" \t\n", max_size=50))
def test_whitespace_only_documents_have_no_blocks(content: str):
    assert parse_blocks(content) == []


@given(st.text(alphabet="#", min_size=1, max_size=20), st.text(alphabet=string.ascii_letters))
def test_heading_level_is_bounded(hashes: str, title: str):
    block = parse_line(f"{hashes} {title}")

    assert block.kind is BlockKind.HEADING
    assert 1 <= block.level <= 6


@given(markdown_text)
def test_inline_spans_tile_the_text(content: str):
    spans = scan_inline(content)

    position = 0
    for span in spans:
        assert span.start == position
        assert span.end > span.start
        position = span.end
    assert position == len(content)


@given(markdown_text)
def test_adjacent_text_spans_are_merged(content: str):
    inlines = parse_inlines(content)

    for previous, current in zip(inlines, inlines[1:]):
        assert not (previous.kind is InlineKind.TEXT and current.kind is InlineKind.TEXT)


@given(st.text(alphabet=string.ascii_letters + string.digits + " .,", max_size=80))
def test_text_without_markers_is_one_text_span(content: str):
    inlines = parse_inlines(content)

    if content:
        assert [(inline.kind, inline.text) for inline in inlines] == [(InlineKind.TEXT, content)]
    else:
        assert inlines == []


@given(markdown_text)
def test_tokens_are_ordered_and_disjoint(content: str):
    tokens = tokenize(content)

    for token in tokens:
        assert 0 <= token.start < token.end <= len(content)
    for previous, current in zip(tokens, tokens[1:]):
        assert previous.end <= current.start


@given(
    st.sampled_from(["```", "~~~"]),
    st.sampled_from(["", "go", "c++", "py3"]),
    st.integers(min_value=0, max_value=3),
    st.sampled_from(["```", "~~~"]),
)
def test_parser_context_resets_after_fence_cycle(
    open_marker: str, language: str, indent: int, close_marker: str
):
    ctx = ParserContext()

    assert try_open_fence(ctx, f"{' ' * indent}{open_marker}{language}", 7) is True
    assert ctx.state is ParserState.IN_FENCED_CODE
    assert ctx.language == (language or None)
    assert ctx.fence_line == 7

    assert try_close_fence(ctx, f"{close_marker}{' ' * indent}") is True
    assert ctx.state is ParserState.NORMAL
    assert ctx.language is None
    assert ctx.fence_line is None


@given(st.text(alphabet=string.ascii_lowercase + " \n", max_size=100))
def test_fence_body_round_trips(body: str):
    lines = body.split("\n")
    text = "\n".join(["```", *lines, "```"])

    (block,) = parse_blocks(text)

    assert block.kind is BlockKind.CODE_FENCE
    assert block.content == "\n".join(lines)


@given(markdown_text)
def test_inline_text_never_exceeds_its_source(content: str):
    for span in scan_inline(content):
        assert len(span.text) <= span.end - span.start


@given(markdown_text)
def test_reparsing_block_content_is_idempotent(content: str):
    for block in parse_blocks(content):
        if block.kind in (BlockKind.PARAGRAPH, BlockKind.HEADING, BlockKind.QUOTE):
            assert parse_inlines(block.content) == list(block.inlines)


def _is_subsequence(needle: str, haystack: str) -> bool:
    remaining = iter(haystack)
    return all(character in remaining for character in needle)


@given(markdown_text)
def test_span_text_is_drawn_from_its_source(content: str):
    for span in scan_inline(content):
        source = content[span.start : span.end]
        assert _is_subsequence(span.text, source)
        if span.kind not in (InlineKind.TEXT, InlineKind.LINK):
            assert span.text in source


@given(st.text(alphabet=string.ascii_letters + "[]()!#|. \\", max_size=100))
def test_text_spans_without_emphasis_markers_match_their_source(content: str):
    for span in scan_inline(content):
        if span.kind is InlineKind.TEXT:
            assert span.text == content[span.start : span.end]


_WRAPPERS = ("{}", "**{}**", "*{}*", "_{}_", "`{}`", "~~{}~~", "[{}](url)", "![{}](img.png)")


@given(
    st.lists(
        st.tuples(st.sampled_from(_WRAPPERS), st.text(alphabet=string.ascii_letters, min_size=1)),
        max_size=8,
    )
)
def test_span_texts_rebuild_visible_characters(pieces: list[tuple[str, str]]):
    content = " ".join(wrapper.format(word) for wrapper, word in pieces)
    visible = " ".join(word for _, word in pieces)

    assert "".join(span.text for span in scan_inline(content)) == visible
