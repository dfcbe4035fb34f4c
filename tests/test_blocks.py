from __future__ import annotations

import logging

import pytest

from notemark.blocks import parse_blocks, parse_line
from notemark.config import NotemarkConfig
from notemark.models import Block, BlockKind, Inline, InlineKind, TaskData


def _kinds(text: str) -> list[BlockKind]:
    return [block.kind for block in parse_blocks(text)]


def test_empty_document_has_no_blocks():
    assert parse_blocks("") == []
    assert parse_blocks("\n\n   \n") == []


def test_blank_lines_produce_no_blocks():
    assert _kinds("one\n\n\ntwo\n") == [BlockKind.PARAGRAPH, BlockKind.PARAGRAPH]


def test_heading_block():
    (block,) = parse_blocks("## Setup **now**")

    assert block.kind is BlockKind.HEADING
    assert block.level == 2
    assert block.content == "Setup **now**"
    assert block.inlines == (Inline(InlineKind.TEXT, "Setup "), Inline(InlineKind.BOLD, "now"))


def test_heading_level_is_capped():
    (block,) = parse_blocks("####### a")

    assert block.level == 6
    assert block.content == "# a"


def test_fence_with_language_keeps_tag_in_content():
    (block,) = parse_blocks("```go\nfoo\nbar\n```")

    assert block == Block(kind=BlockKind.CODE_FENCE, content="go\nfoo\nbar", language="go")


def test_fence_without_language():
    block = parse_blocks("~~~\n  indented\n\nafter blank\n~~~\nnext")[0]

    assert block.content == "  indented\n\nafter blank"
    assert block.language is None
    assert _kinds("~~~\nx\n~~~\nnext") == [BlockKind.CODE_FENCE, BlockKind.PARAGRAPH]


def test_fence_body_is_not_parsed():
    (block,) = parse_blocks("```\n# not a heading\n- not a list\n```")

    assert block.kind is BlockKind.CODE_FENCE
    assert block.content == "# not a heading\n- not a list"
    assert block.inlines == ()


def test_unterminated_fence_still_yields_block():
    assert parse_blocks("```\nfoo") == [Block(kind=BlockKind.CODE_FENCE, content="foo")]


def test_unterminated_fence_logs_its_opening_line(caplog):
    with caplog.at_level(logging.DEBUG, logger="notemark.blocks"):
        parse_blocks("intro\n\n```\nx")

    assert "opened at line 3 is never closed" in caplog.text


def test_unterminated_fence_runs_to_end():
    (block,) = parse_blocks("```py\nx = 1\n\ny = 2")

    assert block.kind is BlockKind.CODE_FENCE
    assert block.content == "py\nx = 1\n\ny = 2"


def test_tagged_fence_line_does_not_close():
    (block,) = parse_blocks("```\na\n```js\nb\n```")

    assert block.content == "a\n```js\nb"


def test_either_fence_char_closes():
    assert _kinds("```\na\n~~~\nb") == [BlockKind.CODE_FENCE, BlockKind.PARAGRAPH]


def test_empty_fence():
    (block,) = parse_blocks("```\n```")

    assert block.content == ""


def test_list_items():
    blocks = parse_blocks("- milk\n* *eggs*\n12. bread")

    assert [(block.marker, block.content) for block in blocks] == [
        ("-", "milk"),
        ("*", "*eggs*"),
        ("12.", "bread"),
    ]
    assert all(block.kind is BlockKind.LIST_ITEM for block in blocks)
    assert blocks[1].inlines == (Inline(InlineKind.ITALIC, "eggs"),)


def test_task_items():
    done, todo = parse_blocks("[x] done\n[] todo")

    assert done.kind is BlockKind.TASK_ITEM
    assert done.task == TaskData(checked=True, content="done")
    assert done.content == "done"
    assert todo.task == TaskData(checked=False, content="todo")


def test_task_inlines_are_off_by_default():
    (block,) = parse_blocks("[ ] buy **milk**")

    assert block.inlines == ()


def test_task_inlines_can_be_enabled():
    config = NotemarkConfig(parse_task_inlines=True)

    (block,) = parse_blocks("[ ] buy **milk**", config)

    assert block.inlines == (Inline(InlineKind.TEXT, "buy "), Inline(InlineKind.BOLD, "milk"))


def test_consecutive_quote_lines_merge():
    blocks = parse_blocks("> first *line*\n>second\n\n> third")

    assert [(block.kind, block.content) for block in blocks] == [
        (BlockKind.QUOTE, "first *line*\nsecond"),
        (BlockKind.QUOTE, "third"),
    ]
    assert blocks[0].inlines[1] == Inline(InlineKind.ITALIC, "line")


@pytest.mark.parametrize("line", ["---", "***", "_ _ _"])
def test_horizontal_rule(line: str):
    assert parse_blocks(line) == [Block(kind=BlockKind.HORIZONTAL_RULE)]


def test_list_marker_wins_over_rule_for_spaced_dashes():
    assert _kinds("- - -") == [BlockKind.LIST_ITEM]


def test_paragraph_inlines():
    (block,) = parse_blocks("see [docs](http://x/(y))")

    assert block.kind is BlockKind.PARAGRAPH
    assert block.inlines[-1] == Inline(InlineKind.LINK, "docs", url="http://x/(y)")


def test_table_block():
    text = "| a | b |\n|:--|--:|\n| 1 | 2 |\n| 3 | 4 |\nafter"

    table_block, paragraph = parse_blocks(text)

    assert table_block.kind is BlockKind.TABLE
    assert table_block.content == "| a | b |\n|:--|--:|\n| 1 | 2 |\n| 3 | 4 |"
    assert table_block.table.headers == ("a", "b")
    assert table_block.table.rows == (("1", "2"), ("3", "4"))
    assert table_block.table.alignments == ("left", "right")
    assert paragraph.content == "after"


def test_table_without_headers_is_dropped():
    assert parse_blocks("| |\n| 1 | 2 |\nnext") == [
        Block(kind=BlockKind.PARAGRAPH, content="next", inlines=(Inline(InlineKind.TEXT, "next"),))
    ]


def test_crlf_documents():
    blocks = parse_blocks("# T\r\n\r\n```\r\ncode\r\n```\r\n")

    assert [block.kind for block in blocks] == [BlockKind.HEADING, BlockKind.CODE_FENCE]
    assert blocks[0].content == "T"
    assert blocks[1].content == "code"


def test_parse_line_returns_none_for_blank():
    assert parse_line("") is None
    assert parse_line(" \t ") is None


def test_parse_line_fence_line():
    block = parse_line("```rust")

    assert block.kind is BlockKind.CODE_FENCE
    assert block.content == "rust"
    assert block.language == "rust"


def test_parse_line_ordering():
    assert parse_line("# - x").kind is BlockKind.HEADING
    assert parse_line("- [x] item").kind is BlockKind.LIST_ITEM
    assert parse_line("> - x").kind is BlockKind.QUOTE
    assert parse_line("plain").kind is BlockKind.PARAGRAPH


def test_parsing_is_deterministic():
    text = "# a\n- b\n> c\n```\nd\n```\n| e |\n[x] f"

    assert parse_blocks(text) == parse_blocks(text)
