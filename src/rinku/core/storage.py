"""
Atomic JSON persistence shared by the progress and requirements stores.

Every document rinku persists goes through atomic_write_json: the payload is
written to a temp file in the destination directory and then moved over the
target with os.replace, so a reader sees either the previous document or the
new one, never a partial write.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def atomic_write_json(path: Path, data: Any) -> Path:
    """
    Write data as JSON to path atomically.

    Creates parent directories if they don't exist. The temp file lives in the
    same directory as the target so the final rename never crosses filesystems.

    Args:
        path: Destination file
        data: JSON-serializable payload

    Returns:
        Path to the written file

    Raises:
        OSError: If the directory or file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.stem}_",
        suffix=".json.tmp",
    )

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())

        # Atomic rename (replaces existing file)
        os.replace(temp_path, path)

    except BaseException:
        # Clean up temp file on error
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise

    logger.debug("Wrote %s", path)
    return path


def read_json(path: Path) -> Any | None:
    """
    Read a JSON document, returning None if the file does not exist.

    Args:
        path: File to read

    Returns:
        Parsed JSON, or None when the file is absent

    Raises:
        OSError: If the file exists but cannot be read
        json.JSONDecodeError: If the file is not valid JSON
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    return json.loads(content)


def remove_file(path: Path) -> bool:
    """
    Remove a file; an already-absent file is not an error.

    Returns:
        True if a file was removed, False if nothing was there
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.debug("Removed %s", path)
    return True
