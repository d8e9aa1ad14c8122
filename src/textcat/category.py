"""Categories of ranked n-gram profiles and classification by distance.

A :class:`Categories` store groups labeled profiles learned from sample
texts. Unknown text is profiled the same way and compared to every stored
profile; a label is reported only when a single category is clearly closer
than the others.

The store round-trips through a small JSON document::

    {
      "version": "0.3.0",
      "categories": [
        {"name": "english", "ngrams": ["e", "t", "_t", ...]},
        ...
      ]
    }

Only the first :data:`~textcat.ngram.MAX_SERIALIZED_NGRAMS` n-grams of every
profile are written. The ambiguity threshold is runtime configuration and is
never persisted.
"""

from __future__ import annotations

import json
import logging
import math
import numbers
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar

from . import __version__
from .errors import InvalidThresholdError, ProfileFormatError
from .ngram import DEFAULT_NGRAM_LENGTH, MAX_SERIALIZED_NGRAMS, Ngrams, distance

logger = logging.getLogger(__name__)

T = TypeVar("T")

#: Fraction of the best distance within which runner-up categories count as ties.
DEFAULT_THRESHOLD = 0.03


def _identity(value: Any) -> Any:
    return value


def _major(version: str) -> str:
    return version.split(".", 1)[0]


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Category(Generic[T]):
    """A label and the n-gram profile learned for it."""

    name: T
    ngrams: Ngrams

    def distance(self, sample: Ngrams) -> int:
        """Out-of-place distance from *sample* to this category's profile."""
        return distance(sample, self.ngrams)

    def to_list(self) -> list[str]:
        """Ranked n-gram texts as they are persisted."""
        return self.ngrams.to_list(MAX_SERIALIZED_NGRAMS)


# ---------------------------------------------------------------------------
# Category store
# ---------------------------------------------------------------------------

class Categories(Generic[T]):
    """Ordered collection of categories with ambiguity-aware classification.

    Labels can be of any type that compares for equality. Labels that are
    not plain JSON values need ``encode_label`` / ``decode_label`` callables
    when persisting and loading.

    Example::

        store = Categories()
        store.add_category("english", "the quick brown fox")
        store.add_category("spanish", "el rapido zorro marron")

        store.get_category("the lazy dog")   # "english"
        store.persist("languages.json")

        again = Categories.load("languages.json")

    Args:
        categories: Initial categories, kept in the given order.
        version: Format version recorded in persisted documents.
    """

    def __init__(
        self,
        categories: Optional[list[Category[T]]] = None,
        version: str = __version__,
    ) -> None:
        self.version = version
        self._categories: list[Category[T]] = list(categories or [])
        self._threshold = DEFAULT_THRESHOLD

    # -- configuration -----------------------------------------------------

    @property
    def threshold(self) -> float:
        """Current ambiguity threshold (runtime only, never persisted)."""
        return self._threshold

    def set_threshold(self, threshold: float) -> None:
        """Update the ambiguity threshold.

        Args:
            threshold: A fraction strictly between 0 and 1. ``0.03`` means
                categories within 3% of the best distance are considered
                too close to tell apart.

        Raises:
            InvalidThresholdError: If the value is not a real number or is
                outside ``(0, 1)``. The current threshold is kept.
        """
        if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real):
            raise InvalidThresholdError(threshold)

        value = float(threshold)
        if not math.isfinite(value) or value <= 0.0 or value >= 1.0:
            raise InvalidThresholdError(threshold)

        self._threshold = value

    # -- training ----------------------------------------------------------

    def add_category(self, name: T, sample: str) -> None:
        """Learn a new category from a sample text.

        Labels are not de-duplicated: adding the same label twice creates two
        independent categories.
        """
        ngrams = Ngrams.from_text(sample, DEFAULT_NGRAM_LENGTH)
        self._categories.append(Category(name=name, ngrams=ngrams))
        logger.debug("Learned category %r with %d n-grams", name, len(ngrams))

    def categories(self) -> list[T]:
        """All labels in training order."""
        return [category.name for category in self._categories]

    # -- classification ----------------------------------------------------

    def get_categories(self, sample: str) -> Optional[list[tuple[T, int]]]:
        """Candidate categories for *sample* and their distances.

        Candidates are sorted by ascending distance (the lower the better);
        equal distances keep training order. Only categories whose distance
        is below ``round((1 + threshold) * best)`` are returned, the best
        one always among them.

        Returns:
            ``None`` when the store has no categories. An empty list when the
            sample has no n-grams to compare.
        """
        if not self._categories:
            return None

        ngrams = Ngrams.from_text(sample, DEFAULT_NGRAM_LENGTH)
        if not ngrams:
            return []

        scored = sorted(
            ((category.distance(ngrams), category) for category in self._categories),
            key=lambda pair: pair[0],
        )
        best = scored[0][0]
        bound = round((1.0 + self._threshold) * best)
        logger.debug(
            "Distances: %s (bound %d)",
            ", ".join(f"{c.name!r}={d}" for d, c in scored),
            bound,
        )

        return [(category.name, dist) for dist, category in scored if dist == best or dist < bound]

    def get_category(self, sample: str) -> Optional[T]:
        """The single best category for *sample*.

        Returns ``None`` when there is no data or when two or more categories
        are too close to call. Use :meth:`get_categories` to tell those apart.
        """
        candidates = self.get_categories(sample)
        if candidates and len(candidates) == 1:
            return candidates[0][0]
        return None

    # -- serialization -----------------------------------------------------

    def to_list(self) -> list[tuple[T, list[str]]]:
        """``(label, ranked n-grams)`` for every category, as persisted."""
        return [(category.name, category.to_list()) for category in self._categories]

    def to_dict(self, encode_label: Optional[Callable[[T], Any]] = None) -> dict:
        """Serialize the store to a JSON-compatible dictionary."""
        encode = encode_label or _identity
        return {
            "version": self.version,
            "categories": [
                {"name": encode(name), "ngrams": ngrams}
                for name, ngrams in self.to_list()
            ],
        }

    @classmethod
    def from_dict(
        cls,
        data: Any,
        decode_label: Optional[Callable[[Any], T]] = None,
    ) -> "Categories[T]":
        """Rebuild a store from a dictionary produced by :meth:`to_dict`.

        Unknown keys (including ``threshold`` from older documents) are
        ignored and the threshold is reset to :data:`DEFAULT_THRESHOLD`.

        Raises:
            ProfileFormatError: If the document is malformed or its major
                version differs from this engine's.
        """
        decode = decode_label or _identity

        if not isinstance(data, dict):
            raise ProfileFormatError("Profile document must be a JSON object")

        version = data.get("version")
        if not isinstance(version, str) or not version:
            raise ProfileFormatError("Profile document has no version")
        if _major(version) != _major(__version__):
            raise ProfileFormatError(
                f"Unsupported profile version {version} (engine version {__version__})"
            )

        entries = data.get("categories")
        if not isinstance(entries, list):
            raise ProfileFormatError("Profile document has no 'categories' list")

        categories: list[Category[T]] = []
        for i, entry in enumerate(entries):
            if not isinstance(entry, dict) or "name" not in entry or "ngrams" not in entry:
                raise ProfileFormatError(f"Category #{i} must have 'name' and 'ngrams'")
            ngrams = entry["ngrams"]
            if not isinstance(ngrams, list) or not all(isinstance(n, str) for n in ngrams):
                raise ProfileFormatError(f"Category #{i} n-grams must be a list of strings")
            try:
                name = decode(entry["name"])
            except (TypeError, ValueError, KeyError) as exc:
                raise ProfileFormatError(f"Category #{i} has an invalid name: {exc}") from exc
            categories.append(Category(name=name, ngrams=Ngrams.from_ranked(ngrams)))

        return cls(categories, version=version)

    def persist(
        self,
        path: str | Path,
        encode_label: Optional[Callable[[T], Any]] = None,
    ) -> None:
        """Write the store to a JSON file.

        The write is not atomic; an interrupted write can leave a partial
        file behind.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(encode_label), f, ensure_ascii=False)
        logger.info("Persisted %d categories to %s", len(self), path)

    @classmethod
    def load(
        cls,
        path: str | Path,
        decode_label: Optional[Callable[[Any], T]] = None,
    ) -> "Categories[T]":
        """Load a store previously written with :meth:`persist`.

        Raises:
            OSError: If the file cannot be read.
            ProfileFormatError: If the file is not a valid profile document.
        """
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise ProfileFormatError(f"Cannot parse {path}: {exc}") from exc

        store = cls.from_dict(data, decode_label)
        logger.info("Loaded %d categories from %s", len(store), path)
        return store

    # -- misc --------------------------------------------------------------

    def copy(self) -> "Categories[T]":
        """Shallow copy sharing the (immutable) categories, threshold included."""
        other: Categories[T] = Categories(self._categories, version=self.version)
        other._threshold = self._threshold
        return other

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[Category[T]]:
        return iter(self._categories)

    def __repr__(self) -> str:
        return f"Categories(version={self.version!r}, categories={self.categories()!r})"
