"""Data models for notemark."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class BlockKind(Enum):
    """Block-level element kinds produced by the block parser.

    Attributes:
        HEADING: ATX heading (``#`` to ``######``).
        PARAGRAPH: Any line that matches no other construct.
        CODE_FENCE: Verbatim region between fence delimiters.
        LIST_ITEM: Bullet (``-``/``*``) or ordered (``1.``) item.
        TASK_ITEM: Checkbox item (``[ ]``, ``[x]``, ``[]``).
        QUOTE: Run of consecutive ``>`` lines.
        HORIZONTAL_RULE: Thematic break (``---``, ``***``, ``___``).
        TABLE: Pipe table with optional separator row.
    """

    HEADING = auto()
    PARAGRAPH = auto()
    CODE_FENCE = auto()
    LIST_ITEM = auto()
    TASK_ITEM = auto()
    QUOTE = auto()
    HORIZONTAL_RULE = auto()
    TABLE = auto()


class InlineKind(Enum):
    """Inline span kinds produced by the inline parser.

    ``BOLD_ITALIC`` is the combined strong+emphasis state, reachable through a
    three-character marker or through emphasis nested inside a strong span.
    """

    TEXT = auto()
    BOLD = auto()
    ITALIC = auto()
    BOLD_ITALIC = auto()
    STRIKE = auto()
    CODE = auto()
    LINK = auto()


class TokenKind(Enum):
    """Highlight token kinds produced by the syntax tokenizer."""

    TEXT = auto()
    HEADING = auto()
    BOLD = auto()
    ITALIC = auto()
    CODE_INLINE = auto()
    CODE_BLOCK = auto()
    LIST = auto()
    LINK = auto()
    QUOTE = auto()


class ParserState(Enum):
    """Line-scanner states shared by the block parser and the tokenizer.

    Attributes:
        NORMAL: Default state for regular lines.
        IN_FENCED_CODE: Inside a fenced code block.
    """

    NORMAL = auto()
    IN_FENCED_CODE = auto()


@dataclass
class ParserContext:
    """Encapsulate line-scanner state while walking Markdown text.

    Attributes:
        state: Current scanner state.
        language: Info tag of the opening fence, if any.
        fence_line: Zero-based line index of the opening fence, if any.
    """

    state: ParserState = ParserState.NORMAL
    language: str | None = None
    fence_line: int | None = None


@dataclass(frozen=True)
class FenceMarker:
    """A line recognised as a fence delimiter.

    Attributes:
        char: Fence character, a backtick or ``~``.
        language: Info tag following the marker, or None when absent.
    """

    char: str
    language: str | None = None

    @property
    def is_closing(self) -> bool:
        """Whether the delimiter can close an open fence (no info tag)."""
        return self.language is None


@dataclass(frozen=True)
class Inline:
    """A typed run of visible text inside a block.

    Attributes:
        kind: Span kind.
        text: Visible text with delimiters stripped.
        url: Link or image target; empty for other kinds.
        image: True when the link was written as ``![alt](url)``.
    """

    kind: InlineKind
    text: str
    url: str = ""
    image: bool = False


@dataclass(frozen=True)
class Span:
    """Offset-oriented inline scan result.

    Attributes:
        kind: Span kind.
        start: Index of the first character of the construct, delimiters included.
        end: Index one past the last character of the construct.
        text: Visible text with delimiters stripped.
        url: Link or image target; empty for other kinds.
        image: True for image links.
    """

    kind: InlineKind
    start: int
    end: int
    text: str
    url: str = ""
    image: bool = False

    def to_inline(self) -> Inline:
        return Inline(kind=self.kind, text=self.text, url=self.url, image=self.image)


@dataclass(frozen=True)
class TableData:
    """Parsed pipe table.

    Attributes:
        headers: Column labels from the header row.
        rows: Data rows; a row may hold fewer cells than `headers`.
        alignments: Per-column alignment from the separator row (``"left"``,
            ``"center"``, ``"right"`` or None); empty without a separator.
    """

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()
    alignments: tuple[str | None, ...] = ()

    @property
    def column_count(self) -> int:
        """Authoritative column count for layout."""
        return max([len(self.headers), *(len(row) for row in self.rows)])


@dataclass(frozen=True)
class TaskData:
    """Checkbox state and text of a task item."""

    checked: bool
    content: str


@dataclass(frozen=True)
class Block:
    """A structural unit of a parsed document.

    Attributes:
        kind: Block kind.
        content: Raw text payload; meaning depends on `kind`.
        level: Heading depth 1-6; 0 for other kinds.
        inlines: Inline spans for Heading, Paragraph, Quote and ListItem blocks.
        table: Table payload, TABLE blocks only.
        task: Task payload, TASK_ITEM blocks only.
        language: Fence info tag, CODE_FENCE blocks only.
        marker: List marker (``-``, ``*`` or ``N.``), LIST_ITEM blocks only.
    """

    kind: BlockKind
    content: str = ""
    level: int = 0
    inlines: tuple[Inline, ...] = ()
    table: TableData | None = None
    task: TaskData | None = None
    language: str | None = None
    marker: str | None = None


@dataclass(frozen=True)
class Token:
    """Offset-tagged highlight unit.

    Attributes:
        kind: Token kind.
        start: Index into the full text where the token starts.
        end: Index one past the token's last character.
        text: Resolved payload (delimiters stripped where applicable).
    """

    kind: TokenKind
    start: int
    end: int
    text: str
