"""Settings for parsing, highlighting and export, read from TOML files."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from .logger import get_logger

logger = get_logger(__name__)


@dataclass
class NotemarkConfig:
    """Configuration for parsing, highlighting and exporting Markdown notes.

    Attributes:
        parse_task_inlines: Whether task item text is inline-parsed. Off by
            default: task text renders as plain text.
        trailing_punctuation: Characters excluded from the end of a single
            ``*``/``_`` emphasis span.
        export_hard_wraps: Render single newlines as ``<br />`` on export.
        export_xhtml: Emit XHTML-style void elements on export.
        max_file_size: Maximum document size in bytes accepted by the CLI.

    Examples:
        NotemarkConfig(parse_task_inlines=True, trailing_punctuation=".!?")
    """

    # Parsing
    parse_task_inlines: bool = False
    trailing_punctuation: str = ".,!?:;"

    # Export
    export_hard_wraps: bool = True
    export_xhtml: bool = True

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """A configuration file or override holds an unusable value.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


# Files probed in each directory, in order, with the tables they may hold
CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", "notemark"),)),
    (".notemark.toml", (("notemark",), ("tool", "notemark"))),
)

_BOOLEAN_FIELDS = ("parse_task_inlines", "export_hard_wraps", "export_xhtml")
_POSITIVE_INT_FIELDS = ("max_file_size",)


def load_config(search_path: Path) -> NotemarkConfig:
    """Find the closest notemark settings for a note directory.

    Each directory from `search_path` up to the filesystem root is probed for
    `CONFIG_SOURCES`; the first file holding a notemark table wins, even when
    the table is empty. TOML that cannot be read or parsed is ignored.

    Args:
        search_path: Directory of the note being processed.

    Returns:
        NotemarkConfig: Settings from the first matching table, or defaults.

    Raises:
        ConfigError: If the matching table is not a table or has unknown keys.

    Examples:
        load_config(Path("notes/2024"))
    """
    directory = search_path.resolve()
    for candidate in (directory, *directory.parents):
        for filename, table_paths in CONFIG_SOURCES:
            found = _read_settings(candidate / filename, table_paths)
            if found is not None:
                return normalize_config(found)
    return NotemarkConfig()


def _read_settings(
    config_file: Path, table_paths: tuple[tuple[str, ...], ...]
) -> NotemarkConfig | None:
    if not config_file.is_file():
        return None

    try:
        document = tomllib.loads(config_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as error:
        logger.debug("Ignoring %s: %s", config_file, error)
        return None

    for table_path in table_paths:
        section: object = document
        for key in table_path:
            section = section.get(key) if isinstance(section, dict) else None
        if section is None:
            continue
        logger.debug("Using [%s] from %s", ".".join(table_path), config_file)
        return _settings_from_table(section, f"{config_file} [{'.'.join(table_path)}]")

    return None


def _settings_from_table(section: object, origin: str) -> NotemarkConfig:
    if not isinstance(section, dict):
        raise ConfigError(f"Expected a table of settings in {origin}")

    known = {field.name for field in fields(NotemarkConfig)}
    values = {key.replace("-", "_"): value for key, value in section.items()}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"Unknown setting(s) {', '.join(unknown)} in {origin}")
    return NotemarkConfig(**values)


def normalize_config(config: NotemarkConfig) -> NotemarkConfig:
    """Drop repeated punctuation characters, keeping first occurrences."""
    punctuation = config.trailing_punctuation
    if not isinstance(punctuation, str):
        return config
    return replace(config, trailing_punctuation="".join(dict.fromkeys(punctuation)))


def validate_config(config: NotemarkConfig) -> None:
    """Reject settings the parser and CLI cannot use.

    Raises:
        ConfigError: If a flag is not a boolean, the punctuation set is not a
            whitespace-free string, or a size limit is not a positive integer.

    Examples:
        validate_config(NotemarkConfig(max_file_size=1024))
    """
    for name in _BOOLEAN_FIELDS:
        if not isinstance(getattr(config, name), bool):
            raise ConfigError(f"`{name}` must be a boolean")

    punctuation = config.trailing_punctuation
    if not isinstance(punctuation, str):
        raise ConfigError("`trailing_punctuation` must be a string")
    if any(character.isspace() for character in punctuation):
        raise ConfigError("`trailing_punctuation` must not contain whitespace")

    for name in _POSITIVE_INT_FIELDS:
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{name}` must be an integer")
        if value <= 0:
            raise ConfigError(f"`{name}` must be a positive integer")


def apply_overrides(config: NotemarkConfig, **overrides: object) -> NotemarkConfig:
    """Layer command-line values over file settings.

    Args:
        config: Settings loaded from disk.
        overrides: Replacement values by field name; None means "not given".

    Returns:
        NotemarkConfig: `config` itself when nothing is overridden, otherwise
            an updated copy.

    Raises:
        TypeError: If an override names a field that does not exist.
    """
    given = {name: value for name, value in overrides.items() if value is not None}
    return replace(config, **given) if given else config


def build_config(search_path: Path, **overrides: object) -> NotemarkConfig:
    """Resolve the effective settings for a note.

    Loads the closest config file, applies `overrides`, normalizes and
    validates the result.

    Raises:
        ConfigError: If any step fails.

    Examples:
        build_config(Path.cwd(), parse_task_inlines=True)
    """
    try:
        merged = apply_overrides(load_config(search_path), **overrides)
    except TypeError as error:
        raise ConfigError(f"Unknown override: {error}") from error

    merged = normalize_config(merged)
    validate_config(merged)
    return merged
