"""Search engine over document rows."""

from .engine import Match, SearchState, search_for

__all__ = ["Match", "SearchState", "search_for"]
