"""Inline span resolution.

`scan_inline` walks a block's text once, left to right, and returns spans that
tile the text exactly: every character belongs to one span and spans are in
order. At each position the first matching construct wins:

1. link or image ``[text](url)`` / ``![alt](url)``
2. code span ```code```
3. strikethrough ``~~text~~``
4. strong emphasis ``***text***`` / ``___text___``
5. strong ``**text**`` / ``__text__``
6. emphasis ``*text*`` / ``_text_``
7. a run of plain text

A marker without a closer is plain text and the scan moves past the whole
marker. Strong and combined spans parse their inner text recursively and
promote the first inner span to the strong kind.

`parse_inlines` is the block-oriented view of the same scan; the syntax
tokenizer uses the spans' offsets directly.
"""

from __future__ import annotations

from dataclasses import replace

from .classifiers import is_escaped
from .config import NotemarkConfig
from .constants import EMPHASIS_CHARS, INLINE_MARKERS
from .models import Inline, InlineKind, Span

_PROMOTIONS: dict[InlineKind, dict[InlineKind, InlineKind]] = {
    InlineKind.BOLD: {
        InlineKind.TEXT: InlineKind.BOLD,
        InlineKind.BOLD: InlineKind.BOLD,
        InlineKind.ITALIC: InlineKind.BOLD_ITALIC,
        InlineKind.BOLD_ITALIC: InlineKind.BOLD_ITALIC,
    },
    InlineKind.BOLD_ITALIC: {
        InlineKind.TEXT: InlineKind.BOLD_ITALIC,
        InlineKind.BOLD: InlineKind.BOLD_ITALIC,
        InlineKind.ITALIC: InlineKind.BOLD_ITALIC,
        InlineKind.BOLD_ITALIC: InlineKind.BOLD_ITALIC,
    },
}


def parse_inlines(text: str, config: NotemarkConfig | None = None) -> list[Inline]:
    """Resolve the inline spans of one block's content.

    Args:
        text: Block content.
        config: Parsing configuration; defaults to `NotemarkConfig()`.

    Returns:
        list[Inline]: Ordered spans. Adjacent plain-text runs are merged.

    Examples:
        parse_inlines("**bold** and *it*")
        # [Inline(BOLD, "bold"), Inline(TEXT, " and "), Inline(ITALIC, "it")]
    """
    return [span.to_inline() for span in scan_inline(text, config)]


def scan_inline(text: str, config: NotemarkConfig | None = None) -> list[Span]:
    """Resolve inline spans together with their offsets in `text`.

    Args:
        text: Text to scan.
        config: Parsing configuration; defaults to `NotemarkConfig()`.

    Returns:
        list[Span]: Spans covering ``text[0:len(text)]`` without gaps or overlaps.
    """
    config = config or NotemarkConfig()
    return _scan(text, 0, len(text), config.trailing_punctuation)


def _scan(text: str, start: int, end: int, punctuation: str) -> list[Span]:
    spans: list[Span] = []
    i = start

    while i < end:
        character = text[i]

        if character == "[" or character == "!":
            link = match_link(text, i, end)
            if link is not None:
                _append(spans, link)
                i = link.end
            else:
                _append_text(spans, text, i, i + 1)
                i += 1
            continue

        if character == "`":
            close = text.find("`", i + 1, end)
            if close > i + 1:
                _append(spans, Span(InlineKind.CODE, i, close + 1, text[i + 1 : close]))
                i = close + 1
            else:
                _append_text(spans, text, i, i + 1)
                i += 1
            continue

        if character == "~":
            if text.startswith("~~", i, end):
                close = text.find("~~", i + 2, end)
                if close > i + 2:
                    _append(spans, Span(InlineKind.STRIKE, i, close + 2, text[i + 2 : close]))
                    i = close + 2
                else:
                    _append_text(spans, text, i, i + 2)
                    i += 2
            else:
                _append_text(spans, text, i, i + 1)
                i += 1
            continue

        if character in EMPHASIS_CHARS:
            i = _scan_emphasis(text, i, end, punctuation, spans)
            continue

        run_end = i + 1
        while run_end < end and text[run_end] not in INLINE_MARKERS:
            run_end += 1
        _append_text(spans, text, i, run_end)
        i = run_end

    return spans


def _scan_emphasis(text: str, i: int, end: int, punctuation: str, spans: list[Span]) -> int:
    """Resolve the emphasis construct starting at `i` and return the next position."""
    character = text[i]

    for width, kind in ((3, InlineKind.BOLD_ITALIC), (2, InlineKind.BOLD)):
        marker = character * width
        if not text.startswith(marker, i, end):
            continue
        close = text.find(marker, i + width, end)
        if close <= i + width:
            _append_text(spans, text, i, i + width)
            return i + width
        inner = _scan(text, i + width, close, punctuation)
        for span in _promote(inner, kind, i, close + width):
            _append(spans, span)
        return close + width

    close = text.find(character, i + 1, end)
    if close <= i + 1:
        _append_text(spans, text, i, i + 1)
        return i + 1

    # Sentence punctuation before the closer stays outside the span
    inner_end = close
    while inner_end - 1 > i + 1 and text[inner_end - 1] in punctuation:
        inner_end -= 1

    if inner_end == close:
        _append(spans, Span(InlineKind.ITALIC, i, close + 1, text[i + 1 : close]))
    else:
        _append(spans, Span(InlineKind.ITALIC, i, inner_end, text[i + 1 : inner_end]))
        _append(spans, Span(InlineKind.TEXT, inner_end, close + 1, text[inner_end:close]))
    return close + 1


def _promote(inner: list[Span], kind: InlineKind, start: int, end: int) -> list[Span]:
    """Retag the first inner span and stretch the run over the delimiters."""
    promotions = _PROMOTIONS[kind]
    first = inner[0]
    inner[0] = replace(first, kind=promotions.get(first.kind, first.kind), start=start)
    inner[-1] = replace(inner[-1], end=end)
    return inner


def match_link(text: str, start: int, end: int | None = None) -> Span | None:
    """Match a link or image starting at `start`.

    The label ends at the first unescaped ``]``, which must be followed
    immediately by ``(``. The target ends at the ``)`` that balances it, so
    URLs may contain parentheses.

    Args:
        text: Text to inspect.
        start: Index of ``[`` (link) or ``!`` (image).
        end: Exclusive upper bound of the scan; defaults to ``len(text)``.

    Returns:
        Span | None: A LINK span, or None when no complete link starts here.

    Examples:
        match_link("[x](http://a/(b))", 0).url  # "http://a/(b)"
        match_link("![logo](img.png)", 0).image  # True
    """
    end = len(text) if end is None else end
    image = text.startswith("!", start, end)
    open_bracket = start + 1 if image else start
    if not text.startswith("[", open_bracket, end):
        return None

    close_bracket = open_bracket + 1
    while close_bracket < end:
        if text[close_bracket] == "]" and not is_escaped(text, close_bracket):
            break
        close_bracket += 1
    else:
        return None

    if not text.startswith("(", close_bracket + 1, end):
        return None

    depth = 1
    close_paren = close_bracket + 2
    while close_paren < end:
        if text[close_paren] == "(":
            depth += 1
        elif text[close_paren] == ")":
            depth -= 1
            if depth == 0:
                break
        close_paren += 1
    else:
        return None

    return Span(
        InlineKind.LINK,
        start,
        close_paren + 1,
        text[open_bracket + 1 : close_bracket],
        url=text[close_bracket + 2 : close_paren],
        image=image,
    )


def _append_text(spans: list[Span], text: str, start: int, end: int) -> None:
    _append(spans, Span(InlineKind.TEXT, start, end, text[start:end]))


def _append(spans: list[Span], span: Span) -> None:
    if span.kind is InlineKind.TEXT and spans and spans[-1].kind is InlineKind.TEXT:
        previous = spans[-1]
        spans[-1] = replace(previous, end=span.end, text=previous.text + span.text)
        return
    spans.append(span)
