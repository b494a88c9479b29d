"""
Utility functions for Studio Admin Hub.
Atomic file writes for exports produced by the CLI.

Usage:
    from scripts.lib.utils import atomic_write_text, ensure_directory
"""
import os
from pathlib import Path

from scripts.lib.logger import setup_logger

logger = setup_logger(__name__)


def atomic_write_text(
    content: str, file_path: str | Path, encoding: str = "utf-8"
) -> bool:
    """
    Write text to file atomically using temp file + rename.
    Prevents a half-written export if the program crashes during write.

    Args:
        content: Text to write.
        file_path: Target file path.
        encoding: File encoding ("utf-8-sig" adds a BOM for spreadsheets).

    Returns:
        True if successful, False otherwise.
    """
    file_path = Path(file_path)
    temp_path = file_path.with_suffix(file_path.suffix + ".tmp")

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(temp_path, "w", encoding=encoding, newline="") as f:
            f.write(content)

        os.replace(temp_path, file_path)
        logger.debug("Atomically wrote %s", file_path)
        return True

    except OSError as e:
        logger.error("Failed to write %s: %s", file_path, e)
        if temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                logger.warning("Could not remove temp file %s", temp_path)
        return False


def ensure_directory(path: str | Path) -> Path:
    """Ensure directory exists, create if needed."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path
