"""
Shared fixtures: a small profile dataset and closing-rank dataset.

C1, C2, C4 and GAMMA exist in both sources; PROFILE_ONLY and ROWS_ONLY exist
in only one and must never reach the engine.
"""

import pytest

from college_advisor.logic.joiner import join_datasets


def _row(code, branch, bc_b_boys="", bc_b_girls="", oc_boys="", oc_girls="", **extra):
    row = {
        "College Code": code,
        "College Name": f"{code} COLLEGE",
        "Branch Name": branch,
        "OC Boys": oc_boys,
        "OC Girls": oc_girls,
        "BC-B Boys": bc_b_boys,
        "BC-B Girls": bc_b_girls,
    }
    row.update(extra)
    return row


@pytest.fixture
def raw_profiles():
    return [
        {
            "collegeCode": "C1",
            "name": "Alpha Government College of Engineering",
            "type": "Government",
            "autonomousStatus": "Autonomous",
            "fees": "₹60,000",
            "naacGrade": "A+",
            "nirfRank": "120",
            "location": "Hyderabad",
            "district": "Hyderabad",
            "website": "alpha.ac.in",
        },
        {
            "collegeCode": "C2",
            "name": "Beta Institute of Technology",
            "type": "Private",
            "autonomousStatus": "Affiliated",
            "fees": "84,000",
            "naacGrade": "A",
            "nirfRank": "",
            "location": "Warangal",
            "district": "Warangal",
            "website": "https://beta.edu.in",
        },
        {
            "collegeCode": "C3",
            "name": "Gamma College of Engineering",
            "type": "Private",
            "autonomousStatus": "",
            "fees": "90,000",
            "naacGrade": "B+",
            "location": "Karimnagar",
            "district": "Karimnagar",
        },
        {
            "collegeCode": "C4",
            "name": "Delta Engineering College",
            "type": "Private",
            "autonomousStatus": "Autonomous",
            "fees": "70000",
            "naacGrade": "B++",
            "location": "Medchal",
            "district": "Medchal-Malkajgiri",
        },
        {
            "collegeCode": "PROFILE_ONLY",
            "name": "Orphan Profile College",
            "type": "Government",
            "fees": "10000",
        },
    ]


@pytest.fixture
def raw_rows():
    return [
        _row("C1", "COMPUTER SCIENCE AND ENGINEERING", bc_b_boys="18000", bc_b_girls="20000", oc_boys="9000", oc_girls="11000"),
        _row("C1", "CIVIL ENGINEERING", bc_b_boys="40000", oc_boys="30000"),
        _row("C2", "COMPUTER SCIENCE AND ENGINEERING", bc_b_boys="16000", oc_boys="12000"),
        _row("C3", "COMPUTER SCIENCE AND ENGINEERING", bc_b_boys="50000", oc_boys="35000"),
        _row("C4", "COMPUTER SCIENCE AND ENGINEERING", bc_b_boys="12000", oc_boys="8000"),
        _row("ROWS_ONLY", "COMPUTER SCIENCE AND ENGINEERING", bc_b_boys="90000", oc_boys="90000"),
        {"Branch Name": "MECHANICAL ENGINEERING", "OC Boys": "5000"},  # no college code
    ]


@pytest.fixture
def dataset(raw_profiles, raw_rows):
    return join_datasets(raw_profiles, raw_rows)
