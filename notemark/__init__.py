"""
notemark: Markdown parsing and highlighting for a note-taking editor.

The core turns note text into blocks with inline spans for the preview pane,
and into offset-tagged tokens for highlighting the raw text while typing.
HTML export is delegated to markdown-it-py.

CLI Usage:
    notemark blocks note.md
    notemark export note.md --output note.html

Library Usage:
    from notemark import parse_blocks, tokenize

    blocks = parse_blocks("# Title\\n\\nSome **bold** text")
    tokens = tokenize("# Title\\n\\nSome **bold** text")
"""

from .blocks import parse_blocks, parse_line, parse_table
from .config import ConfigError, NotemarkConfig, build_config, load_config
from .exceptions import ConversionError, DocumentReadError, NotemarkError
from .export import markdown_to_html
from .highlight import token_style, tokenize
from .inline import parse_inlines, scan_inline
from .models import (
    Block,
    BlockKind,
    Inline,
    InlineKind,
    Span,
    TableData,
    TaskData,
    Token,
    TokenKind,
)

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "parse_blocks",
    "parse_line",
    "parse_table",
    "parse_inlines",
    "scan_inline",
    "tokenize",
    "token_style",
    "markdown_to_html",
    # Data models
    "Block",
    "BlockKind",
    "Inline",
    "InlineKind",
    "Span",
    "TableData",
    "TaskData",
    "Token",
    "TokenKind",
    # Configuration
    "NotemarkConfig",
    "build_config",
    "load_config",
    # Exceptions
    "ConfigError",
    "ConversionError",
    "DocumentReadError",
    "NotemarkError",
    # Version
    "__version__",
]
