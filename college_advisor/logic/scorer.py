"""
Scorer

Computes an additive relevance score and human-readable reasons for each
eligible college. Each rule is a separate function returning its points and
at most one reason; `score_college` runs them in a fixed order so the reasons
list is stable.
"""

from typing import Callable, List, Optional, Tuple

from .constants import (
    AUTONOMOUS_BONUS,
    BELOW_MIN_BUDGET_PENALTY,
    BUDGET_FIT_BONUS,
    CATEGORY_UNKNOWN_SCORE,
    CLOSENESS_WEIGHT,
    DREAM_COLLEGE_BONUS,
    ELIGIBLE_BASE_SCORE,
    FEE_KNOWN_BONUS,
    GOVERNMENT_BONUS,
    LOCATION_MATCH_BONUS,
    NAAC_POINTS_PER_GRADE,
    NIRF_MAX_BONUS,
    NIRF_RANKS_PER_POINT,
    RANK_UNKNOWN_SCORE,
)
from .contracts import EligibleCollege, ResolvedPreferences, ScoredCollege
from .normalize import format_inr, grade_score, normalize_text, parse_rank


RuleResult = Tuple[float, Optional[str]]


def _texts_overlap(needle: str, haystack: str) -> bool:
    """Either text contains the other; blank text never matches."""
    if not needle or not haystack:
        return False
    return needle in haystack or haystack in needle


def score_eligibility(eligible: EligibleCollege, prefs: ResolvedPreferences) -> RuleResult:
    """
    Dominant term: how tightly the student's rank fits the cutoff.

    closeness is 1.0 when rank == cutoff and approaches 0 as the cutoff
    grows far beyond the rank.
    """
    cutoff = eligible.cutoff
    if prefs.rank_gated and cutoff is not None:
        gap = cutoff - prefs.student_rank
        closeness = max(0.0, 1 - gap / max(cutoff, 1))
        return (
            ELIGIBLE_BASE_SCORE + closeness * CLOSENESS_WEIGHT,
            f"Eligible: your rank {prefs.student_rank} ≤ cutoff {cutoff} ({prefs.category})",
        )
    if prefs.student_rank is None:
        return RANK_UNKNOWN_SCORE, "Rank not provided: showing likely options (eligibility not guaranteed)"
    if not prefs.category:
        return CATEGORY_UNKNOWN_SCORE, "Category not provided: eligibility depends on category cutoffs"
    return 0.0, None


def score_budget(eligible: EligibleCollege, prefs: ResolvedPreferences) -> RuleResult:
    fee = eligible.fee
    if fee is None:
        return 0.0, None

    points = 0.0
    reason = None
    if prefs.budget_max is not None:
        if fee <= prefs.budget_max:
            points += BUDGET_FIT_BONUS
            reason = f"Fees fit: ~₹{format_inr(fee)}/yr"
    else:
        points += FEE_KNOWN_BONUS
        reason = f"Fees: ~₹{format_inr(fee)}/yr"

    if prefs.budget_min is not None and fee < prefs.budget_min:
        points -= BELOW_MIN_BUDGET_PENALTY
        if reason is None:
            reason = f"Fees below your minimum budget: ~₹{format_inr(fee)}/yr"

    return points, reason


def score_naac(eligible: EligibleCollege, prefs: ResolvedPreferences) -> RuleResult:
    naac = eligible.college.profile.naac_grade
    g_score = grade_score(naac)
    points = g_score * NAAC_POINTS_PER_GRADE if g_score is not None else 0.0
    return points, (f"NAAC: {naac}" if naac else None)


def score_nirf(eligible: EligibleCollege, prefs: ResolvedPreferences) -> RuleResult:
    """Better (lower) NIRF rank earns more; nothing past rank 600."""
    nirf = parse_rank(eligible.college.profile.nirf_rank)
    if nirf is None:
        return 0.0, None
    points = max(0, NIRF_MAX_BONUS - min(NIRF_MAX_BONUS, nirf // NIRF_RANKS_PER_POINT))
    return float(points), f"NIRF: {nirf}"


def score_location(eligible: EligibleCollege, prefs: ResolvedPreferences) -> RuleResult:
    if not prefs.home_location:
        return 0.0, None
    profile = eligible.college.profile
    loc = normalize_text(profile.location)
    dist = normalize_text(profile.district)
    if _texts_overlap(prefs.home_location, loc) or _texts_overlap(prefs.home_location, dist):
        return LOCATION_MATCH_BONUS, f"Near your location: {profile.location}, {profile.district}"
    return 0.0, None


def score_dream_college(eligible: EligibleCollege, prefs: ResolvedPreferences) -> RuleResult:
    if not prefs.dream_colleges:
        return 0.0, None
    name = normalize_text(eligible.college.profile.name)
    if _texts_overlap(prefs.dream_colleges, name):
        return DREAM_COLLEGE_BONUS, "Matches your dream college list"
    return 0.0, None


def score_government(eligible: EligibleCollege, prefs: ResolvedPreferences) -> RuleResult:
    if eligible.classification.is_government:
        return GOVERNMENT_BONUS, "Government college"
    return 0.0, None


def score_autonomous(eligible: EligibleCollege, prefs: ResolvedPreferences) -> RuleResult:
    if eligible.classification.is_autonomous:
        return AUTONOMOUS_BONUS, "Autonomous institution"
    return 0.0, None


# Order matters for the reasons list
SCORING_RULES: List[Callable[[EligibleCollege, ResolvedPreferences], RuleResult]] = [
    score_eligibility,
    score_budget,
    score_naac,
    score_nirf,
    score_location,
    score_dream_college,
    score_government,
    score_autonomous,
]


def score_college(eligible: EligibleCollege, prefs: ResolvedPreferences) -> ScoredCollege:
    """
    Apply every scoring rule to one eligible college.

    Args:
        eligible: College that passed the eligibility filter
        prefs: Normalized student preferences

    Returns:
        ScoredCollege with total score and ordered reasons
    """
    score = 0.0
    reasons: List[str] = []

    for rule in SCORING_RULES:
        points, reason = rule(eligible, prefs)
        score += points
        if reason:
            reasons.append(reason)

    return ScoredCollege(eligible=eligible, score=score, reasons=reasons)


def batch_score(
    eligible_colleges: List[EligibleCollege],
    prefs: ResolvedPreferences
) -> List[ScoredCollege]:
    """Score colleges in their original order."""
    return [score_college(e, prefs) for e in eligible_colleges]
