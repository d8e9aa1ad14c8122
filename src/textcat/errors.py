"""Exceptions raised by the text categorization engine."""

from __future__ import annotations


class TextcatError(Exception):
    """Base class for all textcat errors."""


class ProfileFormatError(TextcatError, ValueError):
    """A persisted profile document is malformed or from an incompatible version."""


class InvalidThresholdError(TextcatError, ValueError):
    """An ambiguity threshold outside the open interval (0, 1) was given."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"The threshold has to be between 0 and 1 (exclusive), got {value!r}")
