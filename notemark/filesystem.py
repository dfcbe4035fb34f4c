"""Reading notes from disk and writing exported files.

The parsing core works on strings only; these helpers are the CLI's guarded
path to the filesystem. Notes are read as UTF-8 with line endings untouched,
so token offsets computed on the returned text match the file.
"""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSIONS
from .exceptions import DocumentReadError

MAX_FILE_SIZE_ENV_VAR = "NOTEMARK_MAX_FILE_SIZE"
NEW_FILE_PERMISSIONS = 0o644


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return the document size limit, honouring ``NOTEMARK_MAX_FILE_SIZE``.

    Raises:
        ValueError: If the variable is set to anything but a positive integer.

    Examples:
        get_max_file_size(default=1024)  # 1024 unless the variable is set
    """
    raw = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw is None:
        return default

    try:
        limit = int(raw)
    except ValueError:
        limit = 0
    if limit <= 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {raw!r}")
    return limit


def contains_symlink(path: Path) -> bool:
    """Tell whether `path` or one of its ancestors is a symbolic link.

    Components that cannot be inspected are treated as ordinary directories.
    """
    for component in (path, *path.parents):
        try:
            is_link = component.is_symlink()
        except OSError:
            continue
        if is_link:
            return True
    return False


def normalize_filepath(raw_path: str, base_dir: Path) -> Path:
    """Turn a user-supplied note path into a checked absolute path.

    The note must exist, be a regular file with a Markdown or text extension,
    live under `base_dir`, and be reachable without following symlinks.

    Args:
        raw_path: Path as typed on the command line; ``~`` is expanded.
        base_dir: Resolved directory the note has to live in.

    Returns:
        Path: The resolved note path.

    Raises:
        ValueError: With a user-facing message for the first failed check.
    """
    candidate = Path(raw_path).expanduser()
    if contains_symlink(candidate):
        raise ValueError(f"Refusing to follow symlinks: {candidate}")

    try:
        note = candidate.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{candidate} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Cannot resolve {candidate}: {error}") from error

    if not note.is_file():
        raise ValueError(f"{note} is not a regular file.")
    if not note.is_relative_to(base_dir):
        raise ValueError(f"{note} is outside of the working directory {base_dir}.")
    if note.suffix.lower() not in MARKDOWN_EXTENSIONS:
        accepted = ", ".join(MARKDOWN_EXTENSIONS)
        raise ValueError(f"{note} is not a Markdown file (accepted: {accepted}).")
    return note


def collect_file_stat(filepath: Path, max_size: int | None = None) -> os.stat_result:
    """Stat a note without following links and check it can be loaded.

    Args:
        filepath: File to inspect.
        max_size: Size limit in bytes; no limit when None.

    Returns:
        os.stat_result: Metadata of the file itself.

    Raises:
        IOError: If the file is unreachable, a symlink, not a regular file or
            larger than `max_size`.
    """
    try:
        info = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    mode = info.st_mode
    if stat.S_ISLNK(mode):
        raise IOError(f"Refusing to follow symlinks: {filepath}")
    if not stat.S_ISREG(mode):
        raise IOError(f"{filepath} is not a regular file.")
    if max_size is not None and info.st_size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")
    return info


def read_document(filepath: Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> str:
    """Load a note as text.

    Raises:
        DocumentReadError: If the note is unreachable, too large or not UTF-8.

    Examples:
        text = read_document(Path("todo.md"), max_size=get_max_file_size())
    """
    try:
        collect_file_stat(filepath, max_size)
        with open(filepath, encoding="UTF-8", newline="") as note:
            return note.read()
    except UnicodeDecodeError as error:
        raise DocumentReadError(filepath, f"invalid UTF-8 at byte {error.start}") from error
    except OSError as error:
        raise DocumentReadError(filepath, str(error)) from error


def write_text_atomic(
    filepath: Path, text: str, warn: Callable[[str], None] | None = None
) -> None:
    """Replace `filepath` with `text` in one step.

    The text goes to a sibling temporary file that is synced and then renamed
    over the destination, so readers never observe a partial export. Mode and
    ownership of an existing destination carry over; new files get
    ``0o644``.

    Args:
        filepath: Destination file.
        text: Content to store.
        warn: Receives a message when ownership cannot be preserved.

    Raises:
        IOError: If the destination is a symlink or the write fails.
    """
    if contains_symlink(filepath):
        raise IOError(f"Refusing to follow symlinks: {filepath}")

    previous = collect_file_stat(filepath) if filepath.exists() else None

    fd, temp_name = tempfile.mkstemp(dir=filepath.parent, prefix=f".{filepath.name}.")
    try:
        with os.fdopen(fd, "w", encoding="UTF-8", newline="") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        _copy_metadata(temp_name, previous, filepath.name, warn)
        os.replace(temp_name, filepath)
    except OSError as error:
        Path(temp_name).unlink(missing_ok=True)
        raise IOError(f"Error writing {filepath}: {error}") from error


def _copy_metadata(
    temp_name: str,
    previous: os.stat_result | None,
    display_name: str,
    warn: Callable[[str], None] | None,
) -> None:
    if previous is None:
        os.chmod(temp_name, NEW_FILE_PERMISSIONS)
        return

    os.chmod(temp_name, stat.S_IMODE(previous.st_mode))
    if not hasattr(os, "chown"):
        return
    try:
        os.chown(temp_name, previous.st_uid, previous.st_gid)
    except PermissionError:
        if warn is not None:
            warn(f"Warning: could not keep the owner of {display_name}")
