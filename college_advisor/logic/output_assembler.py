"""
Output Assembler

Transforms internal scoring data into the final SuggestionOutput contract.
Generates display warnings from the preferences and the run outcome.
"""

from typing import List, Optional

from .constants import ENGINE_VERSION
from .contracts import (
    JoinedDataset,
    ResolvedPreferences,
    ScoredCollege,
    StudentPreferences,
    Suggestion,
    SuggestionMeta,
    SuggestionOutput,
)
from .normalize import parse_rank, safe_website


# Preferences collected by the form that the dataset has no columns for
UNSCORED_PREFERENCES = [
    ("dual_degree", "dual degree"),
    ("hostel_preference", "hostel"),
    ("college_area", "college area"),
    ("max_distance_km", "maximum distance"),
    ("transport_importance", "transport"),
    ("fest_frequency", "fests"),
    ("facilities", "facilities"),
    ("gender_ratio", "gender ratio"),
    ("scholarship_importance", "scholarships"),
    ("placement_importance", "placements"),
]

NO_MATCH_TIPS = [
    "Remove branch filter (leave it empty)",
    "Increase budget max",
    "Remove NAAC minimum",
    "Check your rank/category inputs",
]


def assemble_suggestion(scored: ScoredCollege, category: str = "") -> Suggestion:
    """
    Convert a ScoredCollege into a Suggestion.

    Args:
        scored: The scored college
        category: Normalized category the cutoff was resolved for

    Returns:
        Suggestion object
    """
    eligible = scored.eligible
    profile = eligible.college.profile
    row = eligible.row

    return Suggestion(
        # Identifiers
        college_code=eligible.college.college_code,
        college_name=profile.name or row.college_name or eligible.college.college_code,
        branch_name=row.branch_name,

        # Basic Info
        district=profile.district,
        location=profile.location,
        type=profile.type,
        fees=eligible.fee,
        naac_grade=profile.naac_grade,
        nirf_rank=parse_rank(profile.nirf_rank),
        website=safe_website(profile.website),

        # Eligibility
        cutoff=eligible.cutoff,
        category=category,

        # Scoring
        score=scored.score,
        reasons=list(scored.reasons),
    )


def assemble_output(
    preferences: StudentPreferences,
    resolved: ResolvedPreferences,
    top: List[ScoredCollege],
    dataset: JoinedDataset,
    total_eligible: int,
    processing_time_ms: Optional[float] = None
) -> SuggestionOutput:
    """
    Assemble the final SuggestionOutput.

    Args:
        preferences: Original student preferences
        resolved: Normalized preferences used for the run
        top: Ranked, deduplicated colleges
        dataset: Joined dataset the run was computed over
        total_eligible: Colleges that survived filtering
        processing_time_ms: Processing time in milliseconds

    Returns:
        Complete SuggestionOutput
    """
    meta = SuggestionMeta(
        considered_colleges=len(dataset.college_codes),
        total_eligible=total_eligible,
        student_rank=resolved.student_rank,
        rank_source=resolved.rank_source,
        category=resolved.category,
        required_branch=resolved.required_branch,
        budget_min=resolved.budget_min,
        budget_max=resolved.budget_max,
        dataset_counts=dataset.counts,
    )

    return SuggestionOutput(
        top=[assemble_suggestion(s, resolved.category) for s in top],
        meta=meta,
        warnings=_generate_warnings(preferences, resolved, len(top)),
        processing_time_ms=processing_time_ms,
        engine_version=ENGINE_VERSION,
    )


def _generate_warnings(
    preferences: StudentPreferences,
    resolved: ResolvedPreferences,
    result_count: int
) -> List[str]:
    """Generate any warnings for the output."""
    warnings = []

    if result_count == 0:
        warnings.append(
            "No colleges matched your filters. Try: " + "; ".join(NO_MATCH_TIPS) + "."
        )

    if resolved.rank_source == "band":
        warnings.append(
            f"Exact rank not provided: using {resolved.student_rank} from your rank band as a conservative estimate."
        )

    if resolved.student_rank is None:
        warnings.append("Rank not provided. Eligibility is not guaranteed for these colleges.")
    elif not resolved.category:
        warnings.append("Category not provided. Eligibility depends on category cutoffs.")

    unscored = [label for attr, label in UNSCORED_PREFERENCES if getattr(preferences, attr)]
    if unscored:
        warnings.append(
            "Recorded but not scored (not in the college dataset): " + ", ".join(unscored) + "."
        )

    return warnings
