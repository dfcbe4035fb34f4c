"""Offset-tagged tokens for live syntax highlighting.

The tokenizer scans the whole document, not individual blocks, and reports
absolute offsets into the text so an editor can paint overlays on the raw
source. Line classification and inline resolution come from the same
functions the block parser uses, so highlighting always agrees with the
preview. Tables and task lists are not highlighted specially: their lines get
inline tokens like any paragraph.
"""

from __future__ import annotations

from .classifiers import (
    is_blank,
    is_heading,
    is_list_item,
    is_quote,
    iter_lines,
    parse_heading,
    strip_quote_marker,
    try_close_fence,
    try_open_fence,
)
from .config import NotemarkConfig
from .inline import scan_inline
from .models import InlineKind, ParserContext, ParserState, Token, TokenKind

_INLINE_TOKEN_KINDS = {
    InlineKind.TEXT: TokenKind.TEXT,
    InlineKind.BOLD: TokenKind.BOLD,
    InlineKind.BOLD_ITALIC: TokenKind.BOLD,
    InlineKind.ITALIC: TokenKind.ITALIC,
    InlineKind.STRIKE: TokenKind.TEXT,
    InlineKind.CODE: TokenKind.CODE_INLINE,
    InlineKind.LINK: TokenKind.LINK,
}

_TOKEN_STYLES = {
    TokenKind.TEXT: "text",
    TokenKind.HEADING: "heading",
    TokenKind.BOLD: "bold",
    TokenKind.ITALIC: "italic",
    TokenKind.CODE_INLINE: "code_inline",
    TokenKind.CODE_BLOCK: "code_block",
    TokenKind.LIST: "list",
    TokenKind.LINK: "link",
    TokenKind.QUOTE: "quote",
}


def tokenize(text: str, config: NotemarkConfig | None = None) -> list[Token]:
    """Produce highlight tokens for a whole document.

    Fence lines and every line between them are CODE_BLOCK tokens; an
    unterminated fence runs to the end of the text. Heading, list and quote
    lines are one token each. Other lines are split into inline tokens with
    plain-text runs in between. Blank lines produce no token.

    Args:
        text: Full editor content.
        config: Parsing configuration; defaults to `NotemarkConfig()`.

    Returns:
        list[Token]: Tokens ordered by `start`; offsets index into `text`.

    Examples:
        tokenize("# Title\\nSome **bold**")
        # [Token(HEADING, 0, 7, "Title"), Token(TEXT, 8, 13, "Some "),
        #  Token(BOLD, 13, 21, "bold")]
    """
    config = config or NotemarkConfig()
    tokens: list[Token] = []
    ctx = ParserContext()

    for line_number, (offset, line) in enumerate(iter_lines(text)):
        end = offset + len(line)

        if ctx.state is ParserState.IN_FENCED_CODE:
            try_close_fence(ctx, line)
            if line:
                tokens.append(Token(TokenKind.CODE_BLOCK, offset, end, line))
            continue

        if try_open_fence(ctx, line, line_number):
            tokens.append(Token(TokenKind.CODE_BLOCK, offset, end, line))
            continue

        if is_blank(line):
            continue

        if is_heading(line):
            _, content = parse_heading(line)
            tokens.append(Token(TokenKind.HEADING, offset, end, content))
            continue

        if is_list_item(line):
            tokens.append(Token(TokenKind.LIST, offset, end, line))
            continue

        if is_quote(line):
            tokens.append(Token(TokenKind.QUOTE, offset, end, strip_quote_marker(line)))
            continue

        tokens.extend(tokenize_inline(line, offset, config))

    return tokens


def tokenize_inline(line: str, offset: int = 0, config: NotemarkConfig | None = None) -> list[Token]:
    """Convert the inline spans of `line` into tokens shifted by `offset`."""
    return [
        Token(_INLINE_TOKEN_KINDS[span.kind], offset + span.start, offset + span.end, span.text)
        for span in scan_inline(line, config)
    ]


def token_style(kind: TokenKind) -> str:
    """Return the style name a highlight renderer uses for `kind`.

    Examples:
        token_style(TokenKind.CODE_INLINE)  # "code_inline"
    """
    return _TOKEN_STYLES.get(kind, "text")
