"""Block-level Markdown parsing."""

from __future__ import annotations

from .classifiers import (
    classify_fence,
    is_blank,
    is_heading,
    is_horizontal_rule,
    is_quote,
    is_table_row,
    is_table_separator,
    parse_heading,
    parse_list_item,
    parse_table_alignments,
    parse_task_item,
    split_lines,
    split_table_row,
    strip_quote_marker,
    try_close_fence,
    try_open_fence,
)
from .config import NotemarkConfig
from .inline import parse_inlines
from .logger import get_logger
from .models import Block, BlockKind, ParserContext, ParserState, TableData

logger = get_logger(__name__)


def parse_blocks(text: str, config: NotemarkConfig | None = None) -> list[Block]:
    """Parse Markdown text into an ordered list of blocks.

    A single forward pass over the lines. Fences, quotes and tables own every
    line up to their own terminator; nothing inside them is reclassified.
    Other lines are classified one at a time and blank lines produce no block.
    Malformed input never raises: an unterminated fence still yields a block,
    and a table without header cells is dropped.

    Args:
        text: The Markdown document.
        config: Parsing configuration; defaults to `NotemarkConfig()`.

    Returns:
        list[Block]: Blocks in document order.

    Examples:
        parse_blocks("# Title\\n\\nSome *text*")
        parse_blocks("```go\\nfoo\\n```")[0].content  # "go\\nfoo"
    """
    config = config or NotemarkConfig()
    lines = split_lines(text)
    blocks: list[Block] = []
    i = 0

    while i < len(lines):
        line = lines[i]

        if classify_fence(line) is not None:
            block, i = _consume_fence(lines, i)
            blocks.append(block)
            continue

        if is_quote(line):
            block, i = _consume_quote(lines, i, config)
            blocks.append(block)
            continue

        if is_table_row(line):
            table, next_index = parse_table(lines, i)
            if table is None:
                logger.debug("Dropping table without header cells at line %d", i + 1)
            else:
                content = "\n".join(lines[i:next_index])
                blocks.append(Block(kind=BlockKind.TABLE, content=content, table=table))
            i = next_index
            continue

        block = parse_line(line, config)
        if block is not None:
            blocks.append(block)
        i += 1

    return blocks


def parse_line(line: str, config: NotemarkConfig | None = None) -> Block | None:
    """Classify a single line into a block.

    Checks heading, fence, list item, task item, quote and horizontal rule in
    that order and falls back to a paragraph.

    Args:
        line: Line without its terminator.
        config: Parsing configuration; defaults to `NotemarkConfig()`.

    Returns:
        Block | None: The block, or None for a blank line.

    Examples:
        parse_line("## Setup").level  # 2
        parse_line("   ")  # None
    """
    if is_blank(line):
        return None

    config = config or NotemarkConfig()

    if is_heading(line):
        level, content = parse_heading(line)
        return Block(
            kind=BlockKind.HEADING,
            content=content,
            level=level,
            inlines=tuple(parse_inlines(content, config)),
        )

    fence = classify_fence(line)
    if fence is not None:
        return Block(kind=BlockKind.CODE_FENCE, content=fence.language or "", language=fence.language)

    list_item = parse_list_item(line)
    if list_item is not None:
        marker, content = list_item
        return Block(
            kind=BlockKind.LIST_ITEM,
            content=content,
            marker=marker,
            inlines=tuple(parse_inlines(content, config)),
        )

    task = parse_task_item(line)
    if task is not None:
        inlines = parse_inlines(task.content, config) if config.parse_task_inlines else []
        return Block(kind=BlockKind.TASK_ITEM, content=task.content, task=task, inlines=tuple(inlines))

    if is_quote(line):
        content = strip_quote_marker(line)
        return Block(
            kind=BlockKind.QUOTE, content=content, inlines=tuple(parse_inlines(content, config))
        )

    if is_horizontal_rule(line):
        return Block(kind=BlockKind.HORIZONTAL_RULE)

    return Block(kind=BlockKind.PARAGRAPH, content=line, inlines=tuple(parse_inlines(line, config)))


def parse_table(lines: list[str], start: int) -> tuple[TableData | None, int]:
    """Accumulate a table starting at `lines[start]`.

    The first row is the header. An immediately following separator row is
    consumed for its alignments. Every following contiguous table row that is
    not a separator becomes a data row.

    Args:
        lines: Document lines.
        start: Index of the header row.

    Returns:
        tuple[TableData | None, int]: The table (None when the header holds no
            cells) and the index of the first line after it.

    Examples:
        parse_table(["| a | b |", "|---|---|", "| 1 | 2 |"], 0)
        # (TableData(headers=("a", "b"), rows=(("1", "2"),), ...), 3)
    """
    headers = tuple(split_table_row(lines[start]))
    i = start + 1

    alignments: tuple[str | None, ...] = ()
    if i < len(lines) and is_table_separator(lines[i]):
        alignments = parse_table_alignments(lines[i])
        i += 1

    rows: list[tuple[str, ...]] = []
    while i < len(lines) and is_table_row(lines[i]) and not is_table_separator(lines[i]):
        rows.append(tuple(split_table_row(lines[i])))
        i += 1

    if not headers:
        return None, i
    return TableData(headers=headers, rows=tuple(rows), alignments=alignments), i


def _consume_fence(lines: list[str], start: int) -> tuple[Block, int]:
    ctx = ParserContext()
    try_open_fence(ctx, lines[start], start)
    language = ctx.language

    body: list[str] = []
    i = start + 1
    while i < len(lines):
        line = lines[i]
        i += 1
        if try_close_fence(ctx, line):
            break
        body.append(line)

    if ctx.state is ParserState.IN_FENCED_CODE:
        logger.debug("Code fence opened at line %d is never closed", ctx.fence_line + 1)

    code = "\n".join(body)
    content = f"{language}\n{code}" if language else code
    return Block(kind=BlockKind.CODE_FENCE, content=content, language=language), i


def _consume_quote(lines: list[str], start: int, config: NotemarkConfig) -> tuple[Block, int]:
    quoted: list[str] = []
    i = start
    while i < len(lines) and is_quote(lines[i]):
        quoted.append(strip_quote_marker(lines[i]))
        i += 1

    content = "\n".join(quoted)
    block = Block(
        kind=BlockKind.QUOTE, content=content, inlines=tuple(parse_inlines(content, config))
    )
    return block, i
