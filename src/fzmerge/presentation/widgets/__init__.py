"""Textual widgets backed by the completion session."""

from .autocomplete import FuzzyAutoComplete

__all__ = ["FuzzyAutoComplete"]
