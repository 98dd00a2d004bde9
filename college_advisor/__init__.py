from .loader import DatasetCache, DatasetLoadError, load_dataset
from .logic import AdvisorEngine, StudentPreferences, SuggestionOutput, suggest_colleges
from .logic.runner import run_suggestions

__all__ = [
    "AdvisorEngine",
    "DatasetCache",
    "DatasetLoadError",
    "StudentPreferences",
    "SuggestionOutput",
    "load_dataset",
    "run_suggestions",
    "suggest_colleges",
]
