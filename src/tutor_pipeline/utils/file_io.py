"""File I/O utilities for reading source content and writing generated assets.

Source reads come in two flavours: strict readers that raise (``read_json``,
``read_text``) and tolerant readers used on authored content that may be absent
or broken. Asset writes always use the stable JSON encoding so that repeated
runs produce byte-identical files.
"""

import json
import logging
import shutil
from pathlib import Path
from typing import Any, List, Tuple, Union

from tutor_pipeline.errors import OutputDirectoryError

logger = logging.getLogger(__name__)


# ============================================================================
# JSON Functions
# ============================================================================


def read_json(file_path: Union[str, Path]) -> Any:
    """Read JSON file and return the parsed value.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON value (object, array, or scalar)

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file contains invalid JSON
    """
    file_path = Path(file_path)
    logger.debug(f"Reading JSON from {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)


def read_json_tolerant(file_path: Union[str, Path]) -> Tuple[Any, str]:
    """Read JSON file without raising.

    Args:
        file_path: Path to JSON file

    Returns:
        Tuple of (parsed value or None, problem). ``problem`` is "" on success,
        "missing" when the file does not exist and "malformed" when it could
        not be read or parsed.
    """
    file_path = Path(file_path)

    if not file_path.is_file():
        logger.debug(f"Source file missing: {file_path}")
        return None, "missing"

    try:
        return read_json(file_path), ""
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(
            f"Unreadable source file {file_path}: {e}",
            extra={"source": str(file_path)},
        )
        return None, "malformed"


def stable_json(data: Any) -> str:
    """Encode data as pretty-printed, newline-terminated JSON.

    Non-ASCII text is kept literal and key order is the insertion order of
    ``data``.
    """
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json(data: Any, file_path: Union[str, Path]) -> None:
    """Write data to a JSON file using the stable encoding.

    Creates parent directories if they don't exist.

    Args:
        data: JSON-serializable data
        file_path: Path to output JSON file

    Raises:
        OutputDirectoryError: If the file cannot be written
    """
    file_path = Path(file_path)
    logger.debug(f"Writing JSON to {file_path}")

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(stable_json(data))
    except OSError as e:
        raise OutputDirectoryError(f"Cannot write {file_path}: {e}") from e


# ============================================================================
# Text Functions
# ============================================================================


def read_text(file_path: Union[str, Path]) -> str:
    """Read a UTF-8 text file.

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    file_path = Path(file_path)
    logger.debug(f"Reading text from {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        return f.read()


# ============================================================================
# Directory Management
# ============================================================================


def reset_directory(directory: Union[str, Path]) -> Path:
    """Delete a directory with all its contents and recreate it empty.

    Args:
        directory: Directory to reset

    Returns:
        Path of the recreated, empty directory

    Raises:
        OutputDirectoryError: If the directory cannot be removed or created
    """
    directory = Path(directory)

    try:
        if directory.is_dir():
            shutil.rmtree(directory)
        elif directory.exists():
            directory.unlink()
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(f"Cannot reset output directory {directory}: {e}") from e

    logger.debug(f"Reset directory: {directory}")
    return directory


def list_subdirectories(directory: Union[str, Path]) -> List[str]:
    """Names of non-hidden subdirectories, sorted lexicographically.

    Returns an empty list when ``directory`` does not exist.
    """
    directory = Path(directory)

    if not directory.is_dir():
        logger.warning(f"Directory does not exist: {directory}")
        return []

    names = [
        entry.name
        for entry in directory.iterdir()
        if entry.is_dir() and not entry.name.startswith(".")
    ]
    return sorted(names)


def list_files(directory: Union[str, Path], pattern: str = "*") -> List[Path]:
    """List regular files in directory matching pattern, sorted by name.

    Args:
        directory: Directory to search
        pattern: Glob pattern (default: '*' = all files)

    Returns:
        List of Path objects matching pattern

    Raises:
        OutputDirectoryError: If directory does not exist
    """
    directory = Path(directory)

    if not directory.is_dir():
        raise OutputDirectoryError(f"Directory does not exist: {directory}")

    files = sorted(f for f in directory.glob(pattern) if f.is_file())

    logger.debug(f"Found {len(files)} files in {directory} matching '{pattern}'")
    return files
