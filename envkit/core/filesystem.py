"""
File system utilities for EnvKit.

Provides the handful of file operations provisioning needs:
- Backup-by-rename of existing configuration (never deletes user data)
- Atomic writes of generated configuration files
- Temporary directories with cleanup
"""

import logging
import shutil
import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from envkit.core.exceptions import FilesystemError

logger = logging.getLogger(__name__)

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


# ============================================================================
# Backups
# ============================================================================


def backup_name(path: Path, now: Optional[datetime] = None) -> Path:
    """
    Compute the timestamped backup sibling for a path.

    Args:
        path: Path to back up
        now: Timestamp to use (defaults to current local time)

    Returns:
        Sibling path named ``<name>.bak.<YYYYMMDD_HHMMSS>``

    Example:
        >>> backup_name(Path('/home/u/.config/nvim'), datetime(2024, 1, 2, 3, 4, 5))
        PosixPath('/home/u/.config/nvim.bak.20240102_030405')
    """
    if now is None:
        now = datetime.now()
    return path.with_name(f"{path.name}.bak.{now.strftime(BACKUP_TIMESTAMP_FORMAT)}")


def backup_path(
    path: Union[str, Path], now: Optional[datetime] = None, dry_run: bool = False
) -> Optional[Path]:
    """
    Move an existing file or directory out of the way by renaming it.

    The original is renamed to a timestamped sibling. If that sibling
    already exists (two backups within the same second) a numeric suffix
    is appended so that no earlier backup is overwritten.

    Args:
        path: File or directory to back up
        now: Timestamp to use (defaults to current local time)
        dry_run: Only log what would happen

    Returns:
        Backup path, or None if ``path`` did not exist

    Raises:
        FilesystemError: If the rename fails
    """
    path = Path(path)
    if not path.exists() and not path.is_symlink():
        logger.debug(f"Nothing to back up at {path}")
        return None

    target = backup_name(path, now)
    counter = 1
    base = target
    while target.exists() or target.is_symlink():
        target = base.with_name(f"{base.name}.{counter}")
        counter += 1

    if dry_run:
        logger.info(f"[dry-run] mv {path} {target}")
        return target

    try:
        path.rename(target)
    except OSError as e:
        raise FilesystemError(f"Failed to back up '{path}' to '{target}': {e}") from e

    logger.info(f"Backed up {path} to {target}")
    return target


# ============================================================================
# Safe File Operations
# ============================================================================


def atomic_write(file_path: Union[str, Path], content: str, encoding: str = "utf-8") -> None:
    """
    Write file atomically using temp file + rename.

    This ensures the file is never in a partially-written state.
    If the write fails, the original file (if any) remains unchanged.

    Args:
        file_path: Path to write to
        content: Text to write
        encoding: Text encoding
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Create temp file in same directory (ensures same filesystem)
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        with open(temp_fd, "w", encoding=encoding) as f:
            f.write(content)

        temp_path.replace(file_path)

    except Exception:
        temp_path.unlink(missing_ok=True)
        raise


def append_line(file_path: Union[str, Path], line: str) -> None:
    """
    Append a line to a text file, creating it if needed.

    The existing content is only inspected for a trailing newline, so files
    in any encoding are accepted.

    Args:
        file_path: File to append to
        line: Line content without trailing newline

    Raises:
        FilesystemError: If the file cannot be read or written
    """
    file_path = Path(file_path)

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)

        prefix = ""
        if file_path.exists():
            existing = file_path.read_bytes()
            if existing and not existing.endswith(b"\n"):
                prefix = "\n"

        with open(file_path, "a", encoding="utf-8") as f:
            f.write(f"{prefix}{line}\n")
    except OSError as e:
        raise FilesystemError(f"Failed to append to '{file_path}': {e}") from e


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists (idempotent).

    Args:
        path: Directory path

    Returns:
        Path object
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


@contextmanager
def temporary_directory(prefix: str = "envkit_"):
    """
    Context manager for temporary directory with automatic cleanup.

    Args:
        prefix: Prefix for temp directory name

    Yields:
        Path to temporary directory
    """
    temp_dir = Path(tempfile.mkdtemp(prefix=prefix))

    try:
        yield temp_dir
    finally:
        if temp_dir.exists():
            shutil.rmtree(temp_dir, ignore_errors=True)


__all__ = [
    "BACKUP_TIMESTAMP_FORMAT",
    "backup_name",
    "backup_path",
    "atomic_write",
    "append_line",
    "ensure_directory",
    "temporary_directory",
]
