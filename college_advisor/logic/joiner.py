"""
Dataset Joiner

Merges college profile records and closing-rank records on the shared college
code. Only colleges present in both sources are kept; malformed records are
dropped without aborting the join.

This is a pure READ + TRANSFORM layer:
- NO filtering on student preferences
- NO scoring
"""

import logging
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from .contracts import (
    COLLEGE_CODE_KEY,
    ClosingRankRow,
    CollegeProfile,
    DatasetCounts,
    JoinedDataset,
)

logger = logging.getLogger(__name__)


def index_profiles(raw_profiles: Iterable[Any]) -> Dict[str, CollegeProfile]:
    """
    Build college code -> profile. Last record wins on duplicate codes.

    Args:
        raw_profiles: Parsed JSON objects from the profile dataset

    Returns:
        Dict in first-seen code order
    """
    profiles_by_code: Dict[str, CollegeProfile] = {}

    for record in raw_profiles:
        if not isinstance(record, dict):
            logger.debug(f"Skipping non-object profile record: {record!r}")
            continue
        try:
            profile = CollegeProfile.model_validate(record)
        except ValidationError as e:
            logger.debug(f"Skipping malformed profile record: {e}")
            continue
        if not profile.college_code:
            logger.debug("Skipping profile without collegeCode")
            continue
        profiles_by_code[profile.college_code] = profile

    return profiles_by_code


def group_closing_rows(raw_rows: Iterable[Any]) -> Dict[str, List[ClosingRankRow]]:
    """
    Group closing-rank rows by college code, keeping source order.

    Args:
        raw_rows: Parsed JSON objects from the closing-rank dataset

    Returns:
        Dict of college code -> rows
    """
    rows_by_code: Dict[str, List[ClosingRankRow]] = {}

    for record in raw_rows:
        if not isinstance(record, dict):
            logger.debug(f"Skipping non-object closing-rank row: {record!r}")
            continue
        row = ClosingRankRow.from_record(record)
        if not row.college_code:
            logger.debug(f"Skipping closing-rank row without '{COLLEGE_CODE_KEY}'")
            continue
        rows_by_code.setdefault(row.college_code, []).append(row)

    return rows_by_code


def join_datasets(raw_profiles: List[Any], raw_rows: List[Any]) -> JoinedDataset:
    """
    Join the two sources on college code.

    A college missing from either source never appears in `college_codes`.
    The code order follows the profile dataset.

    Args:
        raw_profiles: Profile dataset (JSON array)
        raw_rows: Closing-rank dataset (JSON array)

    Returns:
        JoinedDataset
    """
    profiles_by_code = index_profiles(raw_profiles)
    rows_by_code = group_closing_rows(raw_rows)

    college_codes = [code for code in profiles_by_code if code in rows_by_code]

    counts = DatasetCounts(
        profile_colleges=len(profiles_by_code),
        closing_rank_colleges=len(rows_by_code),
        joined_colleges=len(college_codes),
        closing_rows=len(raw_rows),
    )
    logger.info(
        f"Joined {counts.joined_colleges} colleges "
        f"({counts.profile_colleges} profiles, {counts.closing_rank_colleges} with closing ranks)"
    )

    return JoinedDataset(
        profiles_by_code=profiles_by_code,
        rows_by_code=rows_by_code,
        college_codes=college_codes,
        counts=counts,
    )
