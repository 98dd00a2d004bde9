"""
Engine Runner

Orchestrates one matching run:
1. Accepts StudentPreferences (or the raw form mapping)
2. Gets the joined dataset from the session cache
3. Runs the matching engine
4. Returns the Top N suggestions

This is a pure orchestration layer - NO filtering, NO scoring, NO parsing.
"""

import asyncio
import logging
import time
from typing import Any, Mapping, Optional, Union

from .contracts import StudentPreferences, SuggestionOutput
from .engine import AdvisorEngine

logger = logging.getLogger(__name__)


async def run_suggestions(
    cache,
    preferences: Union[StudentPreferences, Mapping[str, Any]],
    top_n: Optional[int] = None
) -> SuggestionOutput:
    """
    Main entry point: run the full matching pipeline.

    Args:
        cache: DatasetCache owned by the caller's session
        preferences: Student preferences or the flat form mapping
        top_n: Maximum colleges to return (defaults to the cache settings)

    Returns:
        SuggestionOutput

    Raises:
        DatasetLoadError: when the dataset cannot be loaded
    """
    if not isinstance(preferences, StudentPreferences):
        preferences = StudentPreferences.model_validate(dict(preferences))
    top_n = top_n if top_n is not None else cache.settings.top_n

    logger.info(
        f"🚀 Starting matching run (branch={preferences.required_branch or '-'}, "
        f"category={preferences.category or '-'})"
    )

    # Step 1: Dataset (loaded once per session)
    dataset = await cache.get()
    logger.info(f"📦 Colleges available for matching: {len(dataset.college_codes)}")

    # Step 2: Run engine
    start_time = time.perf_counter()
    output = AdvisorEngine(dataset).suggest(preferences, top_n=top_n)
    processing_time = (time.perf_counter() - start_time) * 1000

    logger.info(f"✅ Eligible colleges: {output.meta.total_eligible}")
    if not output.top:
        logger.warning("⚠️ No colleges matched the given preferences")

    output.processing_time_ms = round(processing_time, 2)
    logger.info(f"✨ Returned {len(output.top)} suggestions ({processing_time:.2f}ms)")

    return output


# =============================================================================
# VALIDATION
# =============================================================================

def validate_runner():
    """
    Developer sanity check - runs the full pipeline against the configured
    data sources.
    """
    from ..config import configure_logging, get_settings
    from ..loader import DatasetCache

    settings = get_settings()
    configure_logging(settings)

    preferences = {
        "examName": "TS EAMCET",
        "examRank": "15000",
        "category": "OBC",
        "requiredBranch": "CSE",
        "budgetMax": "120000",
        "collegeType": ["any"],
    }

    cache = DatasetCache(settings)
    output = asyncio.run(run_suggestions(cache, preferences))

    print("=" * 60)
    print("RUNNER VALIDATION")
    print("=" * 60)
    print(f"\nConsidered: {output.meta.considered_colleges} colleges")
    print(f"Eligible: {output.meta.total_eligible}")
    print(f"Rank used: {output.meta.student_rank} | Category: {output.meta.category}")

    for idx, s in enumerate(output.top, 1):
        print(f"\n#{idx} {s.college_name} ({s.college_code})")
        print(f"   Branch: {s.branch_name}")
        print(f"   Score: {s.score:.2f} | Cutoff: {s.cutoff}")
        for reason in s.reasons:
            print(f"   - {reason}")

    if output.warnings:
        print(f"\n--- WARNINGS ---")
        for w in output.warnings:
            print(f"  ⚠️  {w}")

    return output


if __name__ == "__main__":
    validate_runner()
