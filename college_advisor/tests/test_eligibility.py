"""
Test the eligibility filter: type, budget, grade, branch, rank and row selection.
"""

import pytest

from college_advisor.logic.constants import CATEGORY_CUTOFF_FIELDS, Category
from college_advisor.logic.contracts import (
    ClosingRankRow,
    CollegeClassification,
    CollegeProfile,
    JoinedCollege,
    ResolvedPreferences,
)
from college_advisor.logic.eligibility import (
    branch_matches,
    classify_college,
    evaluate_college,
    filter_rank_eligible,
    get_closing_rank_for_category,
    matches_college_type,
    meets_min_grade,
    select_representative_row,
    within_budget,
)


def _row(branch="CSE", **cutoffs):
    return ClosingRankRow(college_code="X1", branch_name=branch, cutoffs=cutoffs)


def _college(rows, **profile):
    profile.setdefault("collegeCode", "X1")
    return JoinedCollege(
        college_code=profile["collegeCode"],
        profile=CollegeProfile.model_validate(profile),
        rows=rows,
    )


# =============================================================================
# COLLEGE TYPE
# =============================================================================

def test_classify_college_from_free_text():
    gov = classify_college(CollegeProfile(collegeCode="G", type="Government"))
    assert gov.is_government and not gov.is_private and not gov.is_autonomous

    named = classify_college(CollegeProfile(collegeCode="P", type="Private", name="XYZ College (Autonomous)"))
    assert named.is_private and named.is_autonomous


@pytest.mark.parametrize("selected, expected", [
    ([], True),
    (["any"], True),
    (["government"], False),
    (["private-autonomous"], True),
    (["private-jntuh-ou"], False),
    (["government", "private-autonomous"], True),
    (["something-new"], True),
])
def test_matches_college_type_private_autonomous(selected, expected):
    classification = CollegeClassification(is_private=True, is_autonomous=True)
    assert matches_college_type(classification, selected) is expected


def test_private_non_autonomous_labels():
    affiliated = CollegeClassification(is_private=True, is_autonomous=False)
    assert matches_college_type(affiliated, ["private-jntuh-ou"])
    assert matches_college_type(affiliated, ["private-non-autonomous"])
    assert not matches_college_type(affiliated, ["private-autonomous"])


# =============================================================================
# BUDGET / GRADE
# =============================================================================

def test_budget_tolerance_boundary():
    assert within_budget(84000, 80000)  # exactly 105%
    assert not within_budget(84008, 80000)  # 105.01%
    assert within_budget(None, 80000)
    assert within_budget(10 ** 9, None)


def test_min_grade():
    assert meets_min_grade("A", 2)
    assert meets_min_grade("B++", 2)
    assert not meets_min_grade("B+", 2)
    assert not meets_min_grade("", 2)
    assert meets_min_grade("", None)


# =============================================================================
# BRANCH MATCHING
# =============================================================================

@pytest.mark.parametrize("branch, query", [
    ("COMPUTER SCIENCE AND ENGINEERING", "computer science"),
    ("COMPUTER SCIENCE AND ENGINEERING", "CSE"),
    ("COMPUTER ENGINEERING", "cs"),
    ("INFORMATION TECHNOLOGY", "IT"),
    ("ELECTRONICS AND COMMUNICATION ENGINEERING", "ece"),
    ("ELECTRICAL AND ELECTRONICS ENGINEERING", "EEE"),
    ("MECHANICAL ENGINEERING", "mech"),
    ("CIVIL ENGINEERING", "Civil"),
    ("CSE (ARTIFICIAL INTELLIGENCE AND MACHINE LEARNING)", "AI/ML"),
    ("CSE-AIML", "aiml"),
    ("COMPUTER SCIENCE AND ENGINEERING (DATA SCIENCE)", "ds"),
    ("anything", ""),
])
def test_branch_matches(branch, query):
    assert branch_matches(branch, query)


@pytest.mark.parametrize("branch, query", [
    ("CIVIL ENGINEERING", "cse"),
    ("MECHANICAL ENGINEERING", "ece"),
    ("", "cse"),
    ("ELECTRONICS AND COMMUNICATION ENGINEERING", "eee"),
])
def test_branch_does_not_match(branch, query):
    assert not branch_matches(branch, query)


# =============================================================================
# CUTOFF RESOLUTION
# =============================================================================

def test_every_category_has_a_column_pair():
    for category in Category:
        boys, girls = CATEGORY_CUTOFF_FIELDS[category]
        assert boys and girls


def test_closing_rank_takes_more_permissive_value():
    row = _row(**{"BC-A Boys": "14000", "BC-A Girls": "19000"})
    assert get_closing_rank_for_category(row, "BC-A") == 19000


def test_closing_rank_single_side_and_missing():
    row = _row(**{"SC Boys": "", "SC Girls": "25000", "ST Boys": "NA", "ST Girls": None})
    assert get_closing_rank_for_category(row, "SC") == 25000
    assert get_closing_rank_for_category(row, "ST") is None
    assert get_closing_rank_for_category(row, "") is None
    assert get_closing_rank_for_category(row, "UNKNOWN") is None


def test_ews_uses_its_own_columns():
    row = _row(**{"EWS GEN OU": 30000, "EWS GIRLS": 32000, "EWS Boys": 999999})
    assert get_closing_rank_for_category(row, "ews") == 32000


def test_obc_alias_resolves_to_bc_b_columns():
    row = _row(**{"BC-B Boys": "17000"})
    assert get_closing_rank_for_category(row, "OBC") == 17000


# =============================================================================
# RANK ELIGIBILITY / ROW SELECTION
# =============================================================================

def test_rank_filter_keeps_rows_with_rank_at_or_below_cutoff():
    rows = [_row("A", **{"OC Boys": 9999}), _row("B", **{"OC Boys": 10000}), _row("C", **{"OC Boys": 12000})]
    prefs = ResolvedPreferences(student_rank=10000, category="OC")
    assert [r.branch_name for r in filter_rank_eligible(rows, prefs)] == ["B", "C"]


def test_rank_filter_skipped_without_category():
    rows = [_row("A", **{"OC Boys": 1})]
    prefs = ResolvedPreferences(student_rank=10000, category="")
    assert filter_rank_eligible(rows, prefs) == rows


def test_select_row_with_smallest_gap():
    rows = [_row("far", **{"OC Boys": 30000}), _row("near", **{"OC Boys": 11000}), _row("mid", **{"OC Boys": 20000})]
    prefs = ResolvedPreferences(student_rank=10000, category="OC")
    assert select_representative_row(rows, prefs).branch_name == "near"


def test_select_row_ties_keep_first():
    rows = [_row("first", **{"OC Boys": 11000}), _row("second", **{"OC Girls": 11000})]
    prefs = ResolvedPreferences(student_rank=10000, category="OC")
    assert select_representative_row(rows, prefs).branch_name == "first"


def test_select_row_without_rank_uses_lowest_oc_cutoff():
    rows = [_row("a", **{"OC Boys": 5000}), _row("b", **{"OC Boys": 3000}), _row("c")]
    prefs = ResolvedPreferences(category="BC-B")
    assert select_representative_row(rows, prefs).branch_name == "b"


def test_select_row_without_any_oc_cutoff_is_none():
    prefs = ResolvedPreferences()
    assert select_representative_row([_row("a", **{"SC Boys": 100})], prefs) is None


# =============================================================================
# FULL FILTER
# =============================================================================

def test_evaluate_college_short_circuits_on_type():
    college = _college([_row(**{"OC Boys": 100})], type="Private")
    assert evaluate_college(college, ResolvedPreferences(college_types=["government"])) is None


def test_evaluate_college_excludes_when_no_branch_matches():
    college = _college([_row("CIVIL ENGINEERING", **{"OC Boys": 100})], type="Government")
    assert evaluate_college(college, ResolvedPreferences(required_branch="cse")) is None


def test_evaluate_college_excludes_when_no_row_is_rank_eligible():
    college = _college([_row("CSE", **{"OC Boys": 100})], type="Government")
    prefs = ResolvedPreferences(student_rank=5000, rank_source="exact", category="OC")
    assert evaluate_college(college, prefs) is None


def test_evaluate_college_excludes_ungraded_when_minimum_requested():
    college = _college([_row(**{"OC Boys": 100})], naacGrade="")
    assert evaluate_college(college, ResolvedPreferences(min_grade_score=1)) is None


def test_evaluate_college_resolves_cutoff_and_fee():
    college = _college(
        [_row("CSE", **{"OC Boys": 8000, "OC Girls": 9000}), _row("ECE", **{"OC Boys": 20000})],
        type="Government",
        fees="₹45,500",
    )
    prefs = ResolvedPreferences(student_rank=7000, rank_source="exact", category="OC")

    result = evaluate_college(college, prefs)

    assert result.row.branch_name == "CSE"
    assert result.cutoff == 9000
    assert result.fee == 45500
    assert result.classification.is_government
