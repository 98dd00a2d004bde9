"""
Eligibility Filter

Decides whether a joined college is shown to a student and picks the single
branch row that represents it. Filters run in a fixed order and stop at the
first failure:

1. College type
2. Budget ceiling (with tolerance)
3. Minimum NAAC grade
4. Branch matching
5. Rank eligibility (only when rank and category are both known)
6. Representative row selection
"""

import re
from typing import List, Optional, Sequence

from .constants import (
    BRANCH_ALIAS_RULES,
    BRANCH_COMPACT_ALIASES,
    BUDGET_TOLERANCE_PERCENT,
    CATEGORY_CUTOFF_FIELDS,
    COLLEGE_TYPE_ANY,
    COLLEGE_TYPE_GOVERNMENT,
    COLLEGE_TYPE_PRIVATE_AFFILIATED,
    COLLEGE_TYPE_PRIVATE_AUTONOMOUS,
    COLLEGE_TYPE_PRIVATE_NON_AUTONOMOUS,
    PROXY_CATEGORY,
    Category,
)
from .contracts import (
    ClosingRankRow,
    CollegeClassification,
    CollegeProfile,
    EligibleCollege,
    JoinedCollege,
    ResolvedPreferences,
)
from .normalize import (
    grade_score,
    normalize_category,
    normalize_text,
    parse_money,
    parse_rank,
)


_BRANCH_QUERY_RE = re.compile(r"[^a-z0-9+ ]")


# =============================================================================
# COLLEGE TYPE
# =============================================================================

def classify_college(profile: CollegeProfile) -> CollegeClassification:
    """Classify a college from its type, autonomy and name text."""
    college_type = normalize_text(profile.type)
    return CollegeClassification(
        is_government="government" in college_type,
        is_private="private" in college_type,
        is_autonomous=(
            "autonomous" in normalize_text(profile.autonomous_status)
            or "autonomous" in normalize_text(profile.name)
        ),
    )


def matches_college_type(
    classification: CollegeClassification,
    selected_types: Sequence[str]
) -> bool:
    """
    Check a college against the requested types.

    No selection, or "any", accepts every college. Unrecognized labels
    do not constrain.
    """
    if not selected_types:
        return True
    selected = [normalize_text(t) for t in selected_types]
    if COLLEGE_TYPE_ANY in selected:
        return True

    for t in selected:
        if t == COLLEGE_TYPE_GOVERNMENT:
            if classification.is_government:
                return True
        elif t == COLLEGE_TYPE_PRIVATE_AUTONOMOUS:
            if classification.is_private and classification.is_autonomous:
                return True
        elif t in (COLLEGE_TYPE_PRIVATE_AFFILIATED, COLLEGE_TYPE_PRIVATE_NON_AUTONOMOUS):
            if classification.is_private and not classification.is_autonomous:
                return True
        else:
            return True
    return False


# =============================================================================
# BUDGET / GRADE
# =============================================================================

def within_budget(fee: Optional[int], budget_max: Optional[int]) -> bool:
    """Fee may exceed the maximum by the tolerance band; unknowns pass."""
    if budget_max is None or fee is None:
        return True
    return fee * 100 <= budget_max * BUDGET_TOLERANCE_PERCENT


def meets_min_grade(naac_grade: str, min_grade_score: Optional[int]) -> bool:
    """An ungraded college fails only when a minimum was requested."""
    if min_grade_score is None:
        return True
    college_grade = grade_score(naac_grade)
    return college_grade is not None and college_grade >= min_grade_score


# =============================================================================
# BRANCH MATCHING
# =============================================================================

def branch_matches(branch_name: str, required_branch: str) -> bool:
    """
    Match a branch name against free text or a short code.

    "computer science" matches by substring; "cse", "ece", "aiml" etc.
    are expanded through BRANCH_ALIAS_RULES.
    """
    req = normalize_text(required_branch)
    if not req:
        return True

    b = normalize_text(branch_name)
    if not b:
        return False

    req_normalized = _BRANCH_QUERY_RE.sub(" ", req).strip()
    if req_normalized and req_normalized in b:
        return True

    req_compact = req_normalized.replace(" ", "")
    alternatives = BRANCH_ALIAS_RULES.get(req_compact, [])
    if any(all(fragment in b for fragment in alt) for alt in alternatives):
        return True

    b_compact = b.replace(" ", "")
    return any(fragment in b_compact for fragment in BRANCH_COMPACT_ALIASES.get(req_compact, ()))


def filter_branch_rows(
    rows: Sequence[ClosingRankRow],
    required_branch: str
) -> List[ClosingRankRow]:
    if not required_branch:
        return list(rows)
    return [r for r in rows if branch_matches(r.branch_name, required_branch)]


# =============================================================================
# CUTOFF RESOLUTION
# =============================================================================

def get_closing_rank_for_category(row: ClosingRankRow, category: str) -> Optional[int]:
    """
    Resolve the closing rank of a row for a category.

    Looks up the category's boys/girls columns and returns the more
    permissive (larger) parseable rank.

    Returns:
        Closing rank, or None when the category is unknown or has no seats
    """
    code = normalize_category(category)
    if not code:
        return None

    ranks = [parse_rank(row.cutoffs.get(field)) for field in CATEGORY_CUTOFF_FIELDS[Category(code)]]
    ranks = [r for r in ranks if r is not None]
    return max(ranks) if ranks else None


def filter_rank_eligible(
    rows: Sequence[ClosingRankRow],
    prefs: ResolvedPreferences
) -> List[ClosingRankRow]:
    """Keep rows whose closing rank admits the student (rank <= cutoff)."""
    if not prefs.rank_gated:
        return list(rows)

    eligible = []
    for row in rows:
        cutoff = get_closing_rank_for_category(row, prefs.category)
        if cutoff is not None and prefs.student_rank <= cutoff:
            eligible.append(row)
    return eligible


def select_representative_row(
    rows: Sequence[ClosingRankRow],
    prefs: ResolvedPreferences
) -> Optional[ClosingRankRow]:
    """
    Pick the row that best represents the college for this student.

    With rank and category known: the smallest non-negative gap between
    cutoff and rank. Otherwise: the lowest OC cutoff as a competitiveness
    proxy. Ties keep the first row.
    """
    chosen: Optional[ClosingRankRow] = None
    best_key: Optional[int] = None

    for row in rows:
        if prefs.rank_gated:
            cutoff = get_closing_rank_for_category(row, prefs.category)
            if cutoff is None:
                continue
            key = cutoff - prefs.student_rank
        else:
            key = get_closing_rank_for_category(row, PROXY_CATEGORY.value)
            if key is None:
                continue

        if best_key is None or key < best_key:
            best_key = key
            chosen = row

    return chosen


# =============================================================================
# PIPELINE
# =============================================================================

def evaluate_college(
    college: JoinedCollege,
    prefs: ResolvedPreferences
) -> Optional[EligibleCollege]:
    """
    Run every filter on one college.

    Args:
        college: Joined college with its closing-rank rows
        prefs: Normalized student preferences

    Returns:
        EligibleCollege, or None when any filter excludes the college
    """
    profile = college.profile

    classification = classify_college(profile)
    if not matches_college_type(classification, prefs.college_types):
        return None

    fee = parse_money(profile.fees)
    if not within_budget(fee, prefs.budget_max):
        return None

    if not meets_min_grade(profile.naac_grade, prefs.min_grade_score):
        return None

    matching_rows = filter_branch_rows(college.rows, prefs.required_branch)
    if not matching_rows:
        return None

    eligible_rows = filter_rank_eligible(matching_rows, prefs)
    if not eligible_rows:
        return None

    chosen = select_representative_row(eligible_rows, prefs)
    if chosen is None:
        return None

    cutoff = get_closing_rank_for_category(chosen, prefs.category) if prefs.category else None

    return EligibleCollege(
        college=college,
        row=chosen,
        cutoff=cutoff,
        fee=fee,
        classification=classification,
    )
