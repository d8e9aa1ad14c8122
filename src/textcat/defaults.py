"""Built-in language profiles.

The package ships a small corpus of language samples. The default store is
trained from it the first time it is requested, cut down to its serialized
form (the top ranked n-grams of every profile) and reused for the rest of
the process. It therefore scores text exactly like the document written by
``textcat embed``.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib.resources import files

from .category import Categories
from .storage import DEFAULT_SAMPLE_EXTENSION

logger = logging.getLogger(__name__)

_SAMPLES_PACKAGE = "textcat"


def _sample_files():
    root = files(_SAMPLES_PACKAGE) / "data" / "samples"
    suffix = "." + DEFAULT_SAMPLE_EXTENSION
    return sorted(
        (entry for entry in root.iterdir() if entry.is_file() and entry.name.endswith(suffix)),
        key=lambda entry: entry.name,
    )


@lru_cache(maxsize=1)
def _default_store() -> Categories[str]:
    store: Categories[str] = Categories()
    for entry in _sample_files():
        label = entry.name[: -len(DEFAULT_SAMPLE_EXTENSION) - 1]
        store.add_category(label, entry.read_text(encoding="utf-8"))
    logger.info("Trained %d built-in language profiles", len(store))
    return Categories.from_dict(store.to_dict())


def languages() -> Categories[str]:
    """Store of the built-in language profiles.

    Every call returns a new store object, so changing its threshold does not
    affect other callers.
    """
    return _default_store().copy()


def available_languages() -> list[str]:
    """Labels of the built-in language profiles."""
    return _default_store().categories()
