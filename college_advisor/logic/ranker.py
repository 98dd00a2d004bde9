"""
Ranker

Orders scored colleges and trims them to the Top N.
Keeps only the best-scoring branch per college.
"""

from typing import List, Set

from .constants import DEFAULT_TOP_N
from .contracts import ScoredCollege


def rank_colleges(scored: List[ScoredCollege]) -> List[ScoredCollege]:
    """
    Rank by score (descending).

    `sorted` is stable, so equal scores keep their evaluation order.
    """
    return sorted(scored, key=lambda x: x.score, reverse=True)


def deduplicate(
    ranked: List[ScoredCollege],
    top_n: int = DEFAULT_TOP_N
) -> List[ScoredCollege]:
    """
    Keep the first (best) entry per college code, stopping at top_n.

    Args:
        ranked: Colleges already sorted by score
        top_n: Maximum results to keep

    Returns:
        At most top_n entries with distinct college codes
    """
    seen: Set[str] = set()
    top: List[ScoredCollege] = []

    if top_n <= 0:
        return top

    for scored in ranked:
        if scored.college_code in seen:
            continue
        seen.add(scored.college_code)
        top.append(scored)
        if len(top) >= top_n:
            break

    return top


def get_top_colleges(
    scored: List[ScoredCollege],
    top_n: int = DEFAULT_TOP_N
) -> List[ScoredCollege]:
    """Rank, deduplicate and truncate in one step."""
    return deduplicate(rank_colleges(scored), top_n)
