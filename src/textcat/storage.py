"""Learning categories from sample files and file based persistence helpers.

A samples directory holds one file per category, named after its label::

    samples/
        english.sample
        spanish.sample

:func:`learn_from_directory` trains one category per file, using the file
stem as the label.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional, TypeVar

from .category import Categories

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SAMPLE_EXTENSION = "sample"


def get_files_from_directory(
    path: str | Path,
    extension: str = DEFAULT_SAMPLE_EXTENSION,
) -> list[Path]:
    """Sample files in *path*, sorted by name.

    Raises:
        FileNotFoundError: If *path* does not exist.
        NotADirectoryError: If *path* is not a directory.
    """
    directory = Path(path)
    if not directory.exists():
        raise FileNotFoundError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")

    suffix = "." + extension.lstrip(".")
    return sorted(p for p in directory.glob(f"*{suffix}") if p.is_file())


def learn_from_directory(
    path: str | Path,
    extension: str = DEFAULT_SAMPLE_EXTENSION,
) -> Categories[str]:
    """Learn one category per sample file found in *path*.

    Files are decoded as UTF-8; invalid bytes are replaced rather than
    rejected. Read errors propagate to the caller.
    """
    content: Categories[str] = Categories()

    for file in get_files_from_directory(path, extension):
        text = file.read_bytes().decode("utf-8", errors="replace")
        content.add_category(file.stem, text)

    logger.info("Learned %d categories from %s", len(content), path)
    return content


def load(
    path: str | Path,
    decode_label: Optional[Callable[[Any], T]] = None,
) -> Categories[T]:
    """Load categories stored in a JSON file."""
    return Categories.load(path, decode_label)


def persist(
    categories: Categories[T],
    path: str | Path,
    encode_label: Optional[Callable[[T], Any]] = None,
) -> None:
    """Store *categories* in a JSON file."""
    categories.persist(path, encode_label)
