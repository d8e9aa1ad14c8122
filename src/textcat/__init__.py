"""Textcat -- text categorization by character n-gram profiles."""

__version__ = "0.3.0"

from .category import DEFAULT_THRESHOLD, Categories, Category
from .errors import InvalidThresholdError, ProfileFormatError, TextcatError
from .ngram import (
    DEFAULT_NGRAM_LENGTH,
    MAX_SERIALIZED_NGRAMS,
    OUT_OF_PLACE_PENALTY,
    Ngram,
    Ngrams,
    distance,
    parse_text,
    split,
    split_and_group_by_ngrams,
)
from .storage import get_files_from_directory, learn_from_directory, load, persist

__all__ = [
    # Profiles
    "Ngram",
    "Ngrams",
    "distance",
    "parse_text",
    "split",
    "split_and_group_by_ngrams",
    "DEFAULT_NGRAM_LENGTH",
    "MAX_SERIALIZED_NGRAMS",
    "OUT_OF_PLACE_PENALTY",
    # Categories
    "Categories",
    "Category",
    "DEFAULT_THRESHOLD",
    # Storage
    "get_files_from_directory",
    "learn_from_directory",
    "load",
    "persist",
    # Errors
    "TextcatError",
    "ProfileFormatError",
    "InvalidThresholdError",
]
