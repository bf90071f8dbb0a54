"""Interactive completion playground."""

from .app import FuzzyApp

__all__ = ["FuzzyApp"]
