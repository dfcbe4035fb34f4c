"""Line splitting and single-line Markdown classification.

Every predicate here is pure and total: it accepts any string and never
raises. The block parser and the syntax tokenizer both classify lines through
this module so preview and highlighting agree on what a line is.
"""

from __future__ import annotations

from collections.abc import Iterator

from .constants import (
    BULLET_MARKERS,
    FENCE_MARKERS,
    FENCE_TAG_EXTRA_CHARS,
    MAX_HEADING_LEVEL,
    MIN_RULE_LENGTH,
    MIN_TASK_LENGTH,
    RULE_CHARS,
    TABLE_SEPARATOR_CHARS,
    TASK_CHECKED_MARKS,
    TASK_STATE_CHARS,
)
from .models import FenceMarker, ParserContext, ParserState, TaskData


def iter_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield each line of `text` together with its starting offset.

    Lines are split on ``\\n``; the newline is not retained and a trailing
    ``\\r`` is dropped. A final newline does not produce an extra empty line.

    Args:
        text: Full document text.

    Yields:
        tuple[int, str]: Offset of the line's first character in `text`, and
            the line itself.

    Examples:
        list(iter_lines("a\\nbc\\n"))  # [(0, "a"), (2, "bc")]
    """
    pieces = text.split("\n")
    if pieces[-1] == "":
        pieces.pop()

    offset = 0
    for raw_line in pieces:
        line = raw_line[:-1] if raw_line.endswith("\r") else raw_line
        yield offset, line
        offset += len(raw_line) + 1


def split_lines(text: str) -> list[str]:
    """Split text into lines without their line terminators.

    Examples:
        split_lines("# Title\\n\\nBody")  # ["# Title", "", "Body"]
    """
    return [line for _, line in iter_lines(text)]


def is_blank(line: str) -> bool:
    return not line.strip()


def is_escaped(text: str, pos: int) -> bool:
    """Tell whether `text[pos]` is preceded by an odd run of backslashes.

    Examples:
        is_escaped("\\\\]", 2)  # False, the backslashes escape each other
        is_escaped("\\]", 1)  # True
    """
    run_start = pos
    while run_start > 0 and text[run_start - 1] == "\\":
        run_start -= 1
    return (pos - run_start) % 2 == 1


# Headings


def is_heading(line: str) -> bool:
    return line.startswith("#")


def parse_heading(line: str) -> tuple[int, str]:
    """Split a heading line into its level and content.

    The level is the number of leading ``#`` characters, capped at six. Extra
    ``#`` characters stay in the content. One space after the level run is
    consumed as the separator.

    Args:
        line: A line for which `is_heading` is true.

    Returns:
        tuple[int, str]: Heading level (1-6) and content.

    Examples:
        parse_heading("## Setup")  # (2, "Setup")
        parse_heading("####### deep")  # (6, "# deep")
        parse_heading("#tag")  # (1, "tag")
    """
    run_length = len(line) - len(line.lstrip("#"))
    level = min(run_length, MAX_HEADING_LEVEL)
    content = line[level:]
    if content.startswith(" "):
        content = content[1:]
    return level, content


# Fences


def _is_language_tag(text: str) -> bool:
    return all(
        (character.isascii() and character.isalnum()) or character in FENCE_TAG_EXTRA_CHARS
        for character in text
    )


def classify_fence(line: str) -> FenceMarker | None:
    """Recognise a fence delimiter line.

    After trimming, the line must start with three backticks or three tildes.
    Nothing else after the marker makes a delimiter that can also close a
    fence; an ASCII alphanumeric tag (``+`` and ``#`` allowed) makes an
    opening delimiter. Anything else is ordinary text.

    Args:
        line: Line to classify.

    Returns:
        FenceMarker | None: The delimiter, or None when the line is not one.

    Examples:
        classify_fence("```python")  # FenceMarker(char="`", language="python")
        classify_fence("  ~~~  ")  # FenceMarker(char="~", language=None)
        classify_fence("```js title")  # None
    """
    trimmed = line.strip()
    if trimmed[:3] not in FENCE_MARKERS:
        return None

    remainder = trimmed[3:].strip()
    if not remainder:
        return FenceMarker(char=trimmed[0])
    if _is_language_tag(remainder):
        return FenceMarker(char=trimmed[0], language=remainder)
    return None


def is_fence_close(line: str) -> bool:
    marker = classify_fence(line)
    return marker is not None and marker.is_closing


def try_open_fence(ctx: ParserContext, line: str, line_number: int = 0) -> bool:
    """Detect the start of a fenced code block.

    Args:
        ctx: Scanner context to update when a fence opens.
        line: Current line being scanned.
        line_number: Zero-based index of the line, kept for diagnostics.

    Returns:
        bool: True when the line begins a fence and the context is updated.

    Examples:
        try_open_fence(ParserContext(), "```python")  # True
    """
    if ctx.state is not ParserState.NORMAL:
        return False

    marker = classify_fence(line)
    if marker is None:
        return False

    ctx.state = ParserState.IN_FENCED_CODE
    ctx.language = marker.language
    ctx.fence_line = line_number
    return True


def try_close_fence(ctx: ParserContext, line: str) -> bool:
    """Attempt to close the active fenced code block.

    Any closing delimiter ends the block, whichever fence character opened it.

    Args:
        ctx: Scanner context describing the active fence.
        line: Current line being scanned.

    Returns:
        bool: True when the line closes the fence; otherwise False.

    Examples:
        ctx = ParserContext(state=ParserState.IN_FENCED_CODE)
        try_close_fence(ctx, "```")  # True
    """
    if ctx.state is not ParserState.IN_FENCED_CODE:
        return False

    if not is_fence_close(line):
        return False

    ctx.state = ParserState.NORMAL
    ctx.language = None
    ctx.fence_line = None
    return True


# Lists and tasks


def parse_list_item(line: str) -> tuple[str, str] | None:
    """Split a list item into its marker and content.

    Bullets are ``-`` or ``*`` followed by a space; ordered items are a run of
    ASCII digits, a period and a space.

    Returns:
        tuple[str, str] | None: Marker and the text after its separating
            space, or None when the line is not a list item.

    Examples:
        parse_list_item("- milk")  # ("-", "milk")
        parse_list_item("12. eggs")  # ("12.", "eggs")
        parse_list_item("-milk")  # None
    """
    if len(line) > 1 and line[0] in BULLET_MARKERS and line[1] == " ":
        return line[0], line[2:]

    digits = 0
    while digits < len(line) and "0" <= line[digits] <= "9":
        digits += 1
    if digits and line[digits : digits + 2] == ". ":
        return line[: digits + 1], line[digits + 2 :]

    return None


def is_list_item(line: str) -> bool:
    return parse_list_item(line) is not None


def _task_close_index(line: str) -> int | None:
    if len(line) < MIN_TASK_LENGTH or line[0] != "[" or line[1] not in TASK_STATE_CHARS:
        return None

    # "[]" is shorthand for an unchecked box
    close = 1 if line[1] == "]" else 2
    if line[close] != "]":
        return None

    after = close + 1
    if after < len(line) and line[after] != " ":
        return None
    return close


def is_task_item(line: str) -> bool:
    return _task_close_index(line) is not None


def parse_task_item(line: str) -> TaskData | None:
    """Parse a task item line.

    Examples:
        parse_task_item("[x] done")  # TaskData(checked=True, content="done")
        parse_task_item("[] todo")  # TaskData(checked=False, content="todo")
    """
    close = _task_close_index(line)
    if close is None:
        return None
    return TaskData(checked=line[1] in TASK_CHECKED_MARKS, content=line[close + 1 :].strip())


# Quotes and rules


def is_quote(line: str) -> bool:
    return line.startswith(">")


def strip_quote_marker(line: str) -> str:
    """Remove the leading ``>`` and at most one following space."""
    stripped = line[1:] if line.startswith(">") else line
    if stripped.startswith(" "):
        stripped = stripped[1:]
    return stripped


def is_horizontal_rule(line: str) -> bool:
    """Check for a thematic break such as ``---``, ``* * *`` or ``___``."""
    if len(line) < MIN_RULE_LENGTH or line[0] not in RULE_CHARS:
        return False
    symbol = line[0]
    return all(character in (symbol, " ") for character in line)


# Tables


def is_table_row(line: str) -> bool:
    trimmed = line.strip()
    return bool(trimmed) and (trimmed.startswith("|") or " | " in trimmed)


def split_table_row(line: str) -> list[str]:
    """Split a table row into trimmed cell texts.

    Leading and trailing pipes are dropped. ``\\|`` is a literal pipe, and pipes
    between backticks do not separate cells.

    Args:
        line: Table row line.

    Returns:
        list[str]: Cell texts; empty when the row holds no cell content.

    Examples:
        split_table_row("| a | b |")  # ["a", "b"]
        split_table_row("| `x|y` | z |")  # ["`x|y`", "z"]
    """
    trimmed = line.strip()
    if trimmed.startswith("|"):
        trimmed = trimmed[1:]
    if trimmed.endswith("|") and not is_escaped(trimmed, len(trimmed) - 1):
        trimmed = trimmed[:-1]
    if not trimmed.strip():
        return []

    cells: list[str] = []
    current: list[str] = []
    in_code = False
    i = 0
    while i < len(trimmed):
        character = trimmed[i]
        if character == "\\" and i + 1 < len(trimmed) and trimmed[i + 1] == "|":
            current.append("|")
            i += 2
            continue
        if character == "`":
            in_code = not in_code
        if character == "|" and not in_code:
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(character)
        i += 1

    cells.append("".join(current).strip())
    return cells


def is_table_separator(line: str) -> bool:
    """Check for a separator row such as ``|---|:---:|``.

    Every cell must be built from ``-``, ``:`` and spaces; an empty cell
    counts, so ``| --- | |`` and ``| :: |`` both qualify.
    """
    if not is_table_row(line):
        return False
    cells = split_table_row(line)
    return bool(cells) and all(
        character in TABLE_SEPARATOR_CHARS for cell in cells for character in cell
    )


def parse_table_alignments(line: str) -> tuple[str | None, ...]:
    """Read column alignments from a separator row.

    Examples:
        parse_table_alignments("|:--|:-:|--:|---|")  # ("left", "center", "right", None)
    """
    alignments: list[str | None] = []
    for cell in split_table_row(line):
        left = cell.startswith(":")
        right = cell.endswith(":") and len(cell) > 1
        if left and right:
            alignments.append("center")
        elif left:
            alignments.append("left")
        elif right:
            alignments.append("right")
        else:
            alignments.append(None)
    return tuple(alignments)
