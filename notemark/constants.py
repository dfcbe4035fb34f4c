"""Constants used across the notemark package."""

from __future__ import annotations

from .config import NotemarkConfig

DEFAULT_CONFIG = NotemarkConfig()

# Block markers
MAX_HEADING_LEVEL = 6
FENCE_MARKERS = ("```", "~~~")
FENCE_TAG_EXTRA_CHARS = "+#"
BULLET_MARKERS = "-*"
RULE_CHARS = "-*_"
MIN_RULE_LENGTH = 3
MIN_TASK_LENGTH = 4
TASK_CHECKED_MARKS = "xX"
TASK_STATE_CHARS = " xX]"
TABLE_SEPARATOR_CHARS = "-: "

# Inline markers
INLINE_MARKERS = "*_`~[!"
EMPHASIS_CHARS = "*_"

# Documents
MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".mkdn", ".txt")
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
