from __future__ import annotations


class AutocorrectError(Exception):
    """Base error for the autocorrect package."""


class DictionaryLoadError(AutocorrectError):
    pass


class GrammarCheckError(AutocorrectError):
    """Raised when the remote grammar service fails or returns garbage."""
