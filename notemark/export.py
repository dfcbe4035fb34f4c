"""HTML export through markdown-it-py.

Export uses a full CommonMark converter with the GFM table, strikethrough and
task-list extensions, independent of the note parser. Its output is not
expected to match `parse_blocks` structurally.
"""

from __future__ import annotations

from markdown_it import MarkdownIt
from mdit_py_plugins.tasklists import tasklists_plugin

from .config import NotemarkConfig
from .exceptions import ConversionError
from .logger import get_logger

logger = get_logger(__name__)


def create_converter(config: NotemarkConfig | None = None) -> MarkdownIt:
    """Build a configured markdown-it converter.

    Raw HTML in the source is not passed through.

    Args:
        config: Export settings; defaults to `NotemarkConfig()`.

    Returns:
        MarkdownIt: A fresh converter instance.
    """
    config = config or NotemarkConfig()
    md = MarkdownIt(
        "commonmark",
        {"html": False, "breaks": config.export_hard_wraps, "xhtmlOut": config.export_xhtml},
    )
    md.enable(["table", "strikethrough"])
    md.use(tasklists_plugin)
    return md


def markdown_to_html(text: str, config: NotemarkConfig | None = None) -> str:
    """Convert Markdown to HTML.

    Args:
        text: Markdown source.
        config: Export settings; defaults to `NotemarkConfig()`.

    Returns:
        str: Rendered HTML; empty for empty input.

    Raises:
        ConversionError: If the converter fails for any reason.

    Examples:
        markdown_to_html("~~old~~ new")  # "<p><s>old</s> new</p>\\n"
    """
    if not text:
        return ""

    try:
        return create_converter(config).render(text)
    except Exception as error:
        logger.debug("HTML conversion failed: %r", error)
        raise ConversionError(str(error)) from error
