"""Character n-gram extraction, ranking and the out-of-place distance.

Text is normalized into a single stream where every word is prefixed with
``_``, so that word boundaries take part in the n-grams::

    "Hi there" -> "_hi_there"

Overlapping n-grams of every width from 1 up to ``length - 1`` are counted
and ranked by frequency. Two rankings are compared with the out-of-place
measure described by Cavnar and Trenkle (1994): every n-gram of the sample is
looked up in the reference ranking and its position is added to the total,
or a fixed penalty when the reference does not know it.
"""

from __future__ import annotations

import string
import unicodedata
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Optional

import regex

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Upper bound (exclusive) of the n-gram widths used for training and queries.
DEFAULT_NGRAM_LENGTH = 5

#: Number of ranked n-grams kept when a profile is serialized.
MAX_SERIALIZED_NGRAMS = 400

#: Distance added for every sample n-gram missing from the reference.
OUT_OF_PLACE_PENALTY = 5000

WORD_SEPARATOR = "_"

# Default Unicode word boundaries (UAX #29)
_WORD_BOUNDARY_RE = regex.compile(r"\b", flags=regex.WORD | regex.V1)
_NUMERIC_CATEGORIES = frozenset({"Nd", "Nl", "No"})
_ASCII_PUNCTUATION = frozenset(string.punctuation)


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

def normalize(text: str) -> str:
    """Lower-case *text* and join its words, each prefixed with ``_``.

    Words are the Unicode word segments that contain at least one letter or
    number, so ``"1,000"`` stays whole and every ideograph stands alone.
    """
    words = [
        word for word in _WORD_BOUNDARY_RE.split(text.lower())
        if any(ch.isalnum() for ch in word)
    ]
    return "".join(WORD_SEPARATOR + word for word in words)


def _is_skipped_unigram(ch: str) -> bool:
    return unicodedata.category(ch) in _NUMERIC_CATEGORIES or ch in _ASCII_PUNCTUATION


def split_and_group_by_ngrams(text: str, start: int, end: int) -> list[list[str]]:
    """Split *text* into n-grams of widths ``start`` to ``end - 1``.

    Returns one list per width, each in text order. Single characters that
    are numeric or ASCII punctuation are dropped; longer n-grams keep them.
    """
    chars = normalize(text)
    text_length = len(chars)

    groups: list[list[str]] = []
    for width in range(start, end):
        ngrams: list[str] = []
        for i in range(text_length - width + 1):
            if width == 1 and _is_skipped_unigram(chars[i]):
                continue
            ngram = chars[i : i + width]
            if not ngram:
                continue
            ngrams.append(ngram)
        groups.append(ngrams)

    return groups


def split(text: str, start: int, end: int) -> list[str]:
    """Flattened :func:`split_and_group_by_ngrams`."""
    return [ngram for group in split_and_group_by_ngrams(text, start, end) for ngram in group]


def parse_text(text: str, length: int = DEFAULT_NGRAM_LENGTH) -> dict[str, int]:
    """Count every n-gram of width 1 to ``length - 1`` found in *text*."""
    return dict(Counter(split(text, 1, length)))


extract = parse_text


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Ngram:
    """A single n-gram and how often it occurred in the source text.

    The count is zero for n-grams restored from a serialized profile.
    """

    text: str
    count: int = 0


class Ngrams:
    """Ranked set of n-grams with constant time rank lookup.

    Rank 0 is the most frequent n-gram. Ties on count are broken by the
    n-gram text in descending order, which keeps rankings identical between
    runs and between implementations.

    Example::

        profile = Ngrams.from_text("aa bb")
        profile.to_list()[:2]     # ['b', 'a']
        profile.position("zz")    # None
    """

    __slots__ = ("_ngrams", "_index")

    def __init__(self, ngrams: Iterable[Ngram] = ()) -> None:
        self._ngrams: tuple[Ngram, ...] = tuple(ngrams)
        index: dict[str, int] = {}
        for pos, ngram in enumerate(self._ngrams):
            index.setdefault(ngram.text, pos)
        self._index = index

    @classmethod
    def from_counts(cls, counts: Mapping[str, int]) -> "Ngrams":
        """Rank raw n-gram counts."""
        ranked = sorted(counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
        return cls(Ngram(text, count) for text, count in ranked)

    @classmethod
    def from_text(cls, text: str, length: int = DEFAULT_NGRAM_LENGTH) -> "Ngrams":
        """Extract and rank the n-grams of *text*."""
        return cls.from_counts(parse_text(text, length))

    @classmethod
    def from_ranked(cls, texts: Iterable[str]) -> "Ngrams":
        """Rebuild a profile from an already ranked list of n-gram texts."""
        return cls(Ngram(text) for text in texts)

    def position(self, ngram: str) -> Optional[int]:
        """Rank of *ngram*, or ``None`` if it is not part of this profile."""
        return self._index.get(ngram)

    rank_of = position

    def get(self, ngram: str) -> Optional[Ngram]:
        pos = self._index.get(ngram)
        return None if pos is None else self._ngrams[pos]

    def get_by_position(self, pos: int) -> Optional[Ngram]:
        if 0 <= pos < len(self._ngrams):
            return self._ngrams[pos]
        return None

    def to_list(self, limit: Optional[int] = None) -> list[str]:
        """N-gram texts in rank order, optionally truncated to *limit* entries."""
        ngrams = self._ngrams if limit is None else self._ngrams[:limit]
        return [ngram.text for ngram in ngrams]

    def ranked_texts(self) -> list[str]:
        return self.to_list()

    def distance(self, reference: "Ngrams") -> int:
        """Out-of-place distance from this profile to *reference*."""
        return distance(self, reference)

    def __len__(self) -> int:
        return len(self._ngrams)

    def __iter__(self) -> Iterator[Ngram]:
        return iter(self._ngrams)

    def __contains__(self, ngram: object) -> bool:
        return ngram in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ngrams):
            return NotImplemented
        return self.to_list() == other.to_list()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        head = ", ".join(repr(text) for text in self.to_list(5))
        more = ", ..." if len(self) > 5 else ""
        return f"Ngrams([{head}{more}], size={len(self)})"


# ---------------------------------------------------------------------------
# Distance
# ---------------------------------------------------------------------------

def distance(sample: Ngrams, reference: Ngrams) -> int:
    """Out-of-place distance of *sample* measured against *reference*.

    Sums the rank in *reference* of every n-gram of *sample*, adding
    :data:`OUT_OF_PLACE_PENALTY` for those *reference* does not contain.
    The measure is not symmetric and is not normalized by length.
    """
    total = 0
    for ngram in sample:
        pos = reference.position(ngram.text)
        total += OUT_OF_PLACE_PENALTY if pos is None else pos
    return total
