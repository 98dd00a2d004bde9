"""
Matching Engine Constants

Defines the band mappings, grade scale, category cutoff table, branch aliases
and score weights used by the matching engine.
All values are deterministic with no AI/ML components.
"""

from enum import Enum
from typing import Dict, List, Tuple

# =============================================================================
# RANK BANDS
# =============================================================================

# Coarse rank band -> conservative upper bound used when no exact rank is given
RANK_BAND_MAP: Dict[str, int] = {
    "under-1000": 1000,
    "1000-5000": 5000,
    "5000-10000": 10000,
    "10000-25000": 25000,
    "25000-50000": 50000,
    "50000-100000": 100000,
    "100000-plus": 200000,
}

# =============================================================================
# NAAC GRADES
# =============================================================================

# Higher is better
NAAC_GRADE_SCALE: Dict[str, int] = {
    "A++": 5,
    "A+": 4,
    "A": 3,
    "B++": 2,
    "B+": 1,
    "B": 0,
}

# =============================================================================
# CATEGORIES
# =============================================================================

class Category(str, Enum):
    """Reservation categories that carry their own closing ranks."""
    OC = "OC"
    SC = "SC"
    ST = "ST"
    EWS = "EWS"
    BC_A = "BC-A"
    BC_B = "BC-B"
    BC_C = "BC-C"
    BC_D = "BC-D"
    BC_E = "BC-E"


# Legacy labels students still type
CATEGORY_ALIASES: Dict[str, Category] = {
    "OBC": Category.BC_B,
    "GENERAL": Category.OC,
}

# Closing-rank columns per category (boys/general seat, girls seat)
CATEGORY_CUTOFF_FIELDS: Dict[Category, Tuple[str, str]] = {
    Category.OC: ("OC Boys", "OC Girls"),
    Category.SC: ("SC Boys", "SC Girls"),
    Category.ST: ("ST Boys", "ST Girls"),
    Category.EWS: ("EWS GEN OU", "EWS GIRLS"),
    Category.BC_A: ("BC-A Boys", "BC-A Girls"),
    Category.BC_B: ("BC-B Boys", "BC-B Girls"),
    Category.BC_C: ("BC-C Boys", "BC-C Girls"),
    Category.BC_D: ("BC-D Boys", "BC-D Girls"),
    Category.BC_E: ("BC-E Boys", "BC-E Girls"),
}


def _validate_cutoff_fields() -> None:
    missing = [c.value for c in Category if c not in CATEGORY_CUTOFF_FIELDS]
    if missing:
        raise ValueError(f"No closing-rank columns configured for: {', '.join(missing)}")
    for category, fields in CATEGORY_CUTOFF_FIELDS.items():
        if len(fields) != 2 or not all(isinstance(f, str) and f.strip() for f in fields):
            raise ValueError(f"Closing-rank columns for {category.value} must be two non-empty names")


_validate_cutoff_fields()

# Category used as the competitiveness proxy when rank or category is unknown
PROXY_CATEGORY = Category.OC

# =============================================================================
# COLLEGE TYPES
# =============================================================================

COLLEGE_TYPE_ANY = "any"
COLLEGE_TYPE_GOVERNMENT = "government"
COLLEGE_TYPE_PRIVATE_AUTONOMOUS = "private-autonomous"
COLLEGE_TYPE_PRIVATE_AFFILIATED = "private-jntuh-ou"  # affiliated, not autonomous
COLLEGE_TYPE_PRIVATE_NON_AUTONOMOUS = "private-non-autonomous"

# =============================================================================
# BRANCH ALIASES
# =============================================================================

# Short code -> alternatives; a branch matches when every fragment of any one
# alternative appears in its normalized name.
BRANCH_ALIAS_RULES: Dict[str, List[Tuple[str, ...]]] = {
    "cse": [("computer", "science")],
    "cs": [("computer", "science"), ("computer", "engineering")],
    "it": [("information technology",), ("information", "technology")],
    "ece": [("electronics", "communication")],
    "eee": [("electrical", "electronics")],
    "mech": [("mechanical",)],
    "mechanical": [("mechanical",)],
    "civil": [("civil",)],
    "aiml": [("artificial", "intelligence"), ("machine learning",)],
    "ds": [("data", "science")],
}

# Short code -> fragments matched against the branch name with spaces removed
BRANCH_COMPACT_ALIASES: Dict[str, Tuple[str, ...]] = {
    "aiml": ("aiml",),
}

# =============================================================================
# SCORE WEIGHTS
# =============================================================================

ELIGIBLE_BASE_SCORE = 55.0
CLOSENESS_WEIGHT = 25.0
RANK_UNKNOWN_SCORE = 25.0
CATEGORY_UNKNOWN_SCORE = 20.0

BUDGET_FIT_BONUS = 12.0
FEE_KNOWN_BONUS = 6.0
BELOW_MIN_BUDGET_PENALTY = 2.0

# Fee may exceed the stated maximum by this many percent before exclusion
BUDGET_TOLERANCE_PERCENT = 105

NAAC_POINTS_PER_GRADE = 2.0

NIRF_MAX_BONUS = 12
NIRF_RANKS_PER_POINT = 50

LOCATION_MATCH_BONUS = 10.0
DREAM_COLLEGE_BONUS = 18.0
GOVERNMENT_BONUS = 4.0
AUTONOMOUS_BONUS = 3.0

# =============================================================================
# RANKING CONFIGURATION
# =============================================================================

DEFAULT_TOP_N = 10

ENGINE_VERSION = "1.0.0"
