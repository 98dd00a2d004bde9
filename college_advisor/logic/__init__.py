"""
Matching Logic Module

Provides the deterministic matching engine for college suggestions.
"""

from .contracts import (
    CollegeProfile,
    ClosingRankRow,
    JoinedCollege,
    JoinedDataset,
    StudentPreferences,
    Suggestion,
    SuggestionMeta,
    SuggestionOutput,
)
from .engine import AdvisorEngine, suggest_colleges
from .joiner import join_datasets
from .constants import Category

__all__ = [
    # Main engine
    "AdvisorEngine",
    "suggest_colleges",
    "join_datasets",

    # Contracts
    "CollegeProfile",
    "ClosingRankRow",
    "JoinedCollege",
    "JoinedDataset",
    "StudentPreferences",
    "Suggestion",
    "SuggestionMeta",
    "SuggestionOutput",

    # Enums
    "Category",
]
