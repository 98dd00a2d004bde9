"""
Matching Engine

Main orchestrator that combines filtering, scoring and ranking into a single
pure pipeline over an already-loaded dataset.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from .constants import DEFAULT_TOP_N
from .contracts import (
    EligibleCollege,
    JoinedCollege,
    JoinedDataset,
    ResolvedPreferences,
    StudentPreferences,
    SuggestionOutput,
)
from .eligibility import evaluate_college
from .normalize import (
    min_required_grade_score,
    normalize_category,
    normalize_text,
    parse_money,
    parse_rank,
    rank_from_band,
)
from .output_assembler import assemble_output, assemble_suggestion
from .ranker import get_top_colleges
from .scorer import batch_score, score_college


def resolve_preferences(preferences: StudentPreferences) -> ResolvedPreferences:
    """
    Normalize raw preference values once per run.

    An exact rank always wins over the rank band.
    """
    exact_rank = parse_rank(preferences.exam_rank)
    band_rank = rank_from_band(preferences.exam_rank_band)
    if exact_rank is not None:
        student_rank, rank_source = exact_rank, "exact"
    elif band_rank is not None:
        student_rank, rank_source = band_rank, "band"
    else:
        student_rank, rank_source = None, "none"

    return ResolvedPreferences(
        student_rank=student_rank,
        rank_source=rank_source,
        category=normalize_category(preferences.category),
        required_branch=preferences.required_branch.strip(),
        college_types=list(preferences.college_type),
        budget_min=parse_money(preferences.budget_min),
        budget_max=parse_money(preferences.budget_max),
        min_grade_score=min_required_grade_score(preferences.naac_grade),
        home_location=normalize_text(preferences.home_location),
        dream_colleges=normalize_text(preferences.dream_colleges),
    )


class AdvisorEngine:
    """
    Matching engine over one joined dataset.

    Pipeline flow:
    1. Preference Resolution - Normalize rank, category, budget, grade
    2. Eligibility - Filter each joined college, pick its branch row
    3. Scoring - Score survivors and collect reasons
    4. Ranking - Sort, keep best branch per college, truncate to Top N
    5. Output Assembly - Build final SuggestionOutput

    The dataset is never modified, so one engine can serve many runs.
    """

    def __init__(self, dataset: JoinedDataset):
        self.dataset = dataset

    def filter_colleges(self, resolved: ResolvedPreferences) -> List[EligibleCollege]:
        eligible = []
        for college in self.dataset.iter_colleges():
            result = evaluate_college(college, resolved)
            if result is not None:
                eligible.append(result)
        return eligible

    def suggest(
        self,
        preferences: StudentPreferences,
        top_n: int = DEFAULT_TOP_N
    ) -> SuggestionOutput:
        """
        Generate the Top N suggestions for a preference set.

        Args:
            preferences: Student's preferences
            top_n: Maximum colleges to return

        Returns:
            SuggestionOutput (empty `top` when nothing matched)
        """
        resolved = resolve_preferences(preferences)

        eligible = self.filter_colleges(resolved)
        scored = batch_score(eligible, resolved)
        top = get_top_colleges(scored, top_n)

        return assemble_output(
            preferences=preferences,
            resolved=resolved,
            top=top,
            dataset=self.dataset,
            total_eligible=len(eligible),
        )

    def suggest_from_dict(
        self,
        preference_data: Mapping[str, Any],
        **kwargs
    ) -> SuggestionOutput:
        """
        Generate suggestions from the flat field mapping a form produces.

        Convenience method for UI integration.
        """
        preferences = StudentPreferences.model_validate(dict(preference_data))
        return self.suggest(preferences, **kwargs)

    def score_single_college(
        self,
        preferences: StudentPreferences,
        college_code: str
    ) -> Optional[Dict[str, Any]]:
        """
        Explain how one college fares for a student.

        Returns:
            Dict with eligibility and scoring details, or None if the
            college is not in the joined dataset
        """
        code = college_code.strip()
        if code not in self.dataset.rows_by_code or code not in self.dataset.profiles_by_code:
            return None

        resolved = resolve_preferences(preferences)
        college = JoinedCollege(
            college_code=code,
            profile=self.dataset.profiles_by_code[code],
            rows=self.dataset.rows_by_code[code],
        )
        eligible = evaluate_college(college, resolved)
        if eligible is None:
            return {"college_code": code, "is_eligible": False, "suggestion": None}

        scored = score_college(eligible, resolved)
        return {
            "college_code": code,
            "is_eligible": True,
            "suggestion": assemble_suggestion(scored, resolved.category).model_dump(mode="json"),
        }


# Convenience function for simple usage
def suggest_colleges(
    preferences: Union[StudentPreferences, Mapping[str, Any]],
    dataset: JoinedDataset,
    top_n: int = DEFAULT_TOP_N
) -> SuggestionOutput:
    """
    Convenience function to get suggestions.

    Args:
        preferences: StudentPreferences or a flat form mapping
        dataset: Joined dataset
        top_n: Maximum colleges to return

    Returns:
        SuggestionOutput
    """
    engine = AdvisorEngine(dataset)
    if isinstance(preferences, StudentPreferences):
        return engine.suggest(preferences, top_n=top_n)
    return engine.suggest_from_dict(preferences, top_n=top_n)
