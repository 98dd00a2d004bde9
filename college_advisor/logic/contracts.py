"""
Data Contracts for the College Matching Engine

Defines Pydantic models for the source records (CollegeProfile, ClosingRankRow),
the student input (StudentPreferences) and the run output (SuggestionOutput).
These contracts are the API boundary for the matching engine.
"""

from typing import Any, Dict, Iterator, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


COLLEGE_CODE_KEY = "College Code"
COLLEGE_NAME_KEY = "College Name"
BRANCH_NAME_KEY = "Branch Name"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        # Repeated form keys arrive as lists; scalar fields keep the first value
        for item in value:
            text = _as_text(item)
            if text:
                return text
        return ""
    return str(value).strip()


def _as_text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return [str(v).strip() for v in value if v is not None and str(v).strip()]
    text = str(value).strip()
    return [text] if text else []


# =============================================================================
# SOURCE RECORDS
# =============================================================================

class CollegeProfile(BaseModel):
    """
    One college from the profile dataset.
    Loaded once per session and never modified.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    college_code: str = Field(alias="collegeCode")
    name: str = ""
    type: str = ""  # free text, e.g. "Government", "Private"
    autonomous_status: str = Field(default="", alias="autonomousStatus")
    fees: str = ""  # currency text, e.g. "₹60,000"
    naac_grade: str = Field(default="", alias="naacGrade")
    nirf_rank: Optional[Any] = Field(default=None, alias="nirfRank")
    location: str = ""
    district: str = ""
    website: str = ""

    @field_validator(
        "college_code", "name", "type", "autonomous_status", "fees",
        "naac_grade", "location", "district", "website",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)


class ClosingRankRow(BaseModel):
    """
    One branch of one college from the closing-rank dataset.
    `cutoffs` keeps every category column exactly as it appeared in the source.
    """
    model_config = ConfigDict(frozen=True)

    college_code: str
    college_name: str = ""
    branch_name: str = ""
    cutoffs: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ClosingRankRow":
        reserved = (COLLEGE_CODE_KEY, COLLEGE_NAME_KEY, BRANCH_NAME_KEY)
        return cls(
            college_code=_as_text(record.get(COLLEGE_CODE_KEY)),
            college_name=_as_text(record.get(COLLEGE_NAME_KEY)),
            branch_name=_as_text(record.get(BRANCH_NAME_KEY)),
            cutoffs={k: v for k, v in record.items() if k not in reserved},
        )


# =============================================================================
# JOINED DATASET
# =============================================================================

class DatasetCounts(BaseModel):
    """Sizes of the source datasets and of their join."""
    profile_colleges: int = 0
    closing_rank_colleges: int = 0
    joined_colleges: int = 0
    closing_rows: int = 0


class JoinedCollege(BaseModel):
    """A college present in both datasets, with all of its branch rows."""
    model_config = ConfigDict(frozen=True)

    college_code: str
    profile: CollegeProfile
    rows: List[ClosingRankRow] = Field(min_length=1)


class JoinedDataset(BaseModel):
    """
    Result of joining the two sources on college code.
    Read-only after construction; safe to reuse across matching runs.
    """
    model_config = ConfigDict(frozen=True)

    profiles_by_code: Dict[str, CollegeProfile] = Field(default_factory=dict)
    rows_by_code: Dict[str, List[ClosingRankRow]] = Field(default_factory=dict)
    college_codes: List[str] = Field(default_factory=list)
    counts: DatasetCounts = Field(default_factory=DatasetCounts)

    def iter_colleges(self) -> Iterator[JoinedCollege]:
        for code in self.college_codes:
            yield JoinedCollege(
                college_code=code,
                profile=self.profiles_by_code[code],
                rows=self.rows_by_code[code],
            )


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class StudentPreferences(BaseModel):
    """
    Input contract for the matching engine.
    Mirrors the flat field mapping produced by the preference form; every
    field is optional and blank means "unconstrained".
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    # Exam
    exam_name: str = Field(default="", alias="examName")
    exam_rank: str = Field(default="", alias="examRank")
    exam_rank_band: str = Field(default="", alias="examRankBand")

    # Hard constraints
    required_branch: str = Field(default="", alias="requiredBranch")
    category: str = ""
    college_type: List[str] = Field(default_factory=list, alias="collegeType")
    budget_min: str = Field(default="", alias="budgetMin")
    budget_max: str = Field(default="", alias="budgetMax")
    naac_grade: str = Field(default="", alias="naacGrade")

    # Scored preferences
    home_location: str = Field(default="", alias="homeLocation")
    dream_colleges: str = Field(default="", alias="dreamColleges")

    # Soft signals (recorded, not present in the dataset)
    dual_degree: str = Field(default="", alias="dualDegree")
    hostel_preference: str = Field(default="", alias="hostelPreference")
    college_area: str = Field(default="", alias="collegeArea")
    max_distance_km: str = Field(default="", alias="maxDistanceKm")
    transport_importance: str = Field(default="", alias="transportImportance")
    fest_frequency: str = Field(default="", alias="festFrequency")
    facilities: List[str] = Field(default_factory=list)
    gender_ratio: str = Field(default="", alias="genderRatio")
    scholarship_importance: str = Field(default="", alias="scholarshipImportance")
    placement_importance: str = Field(default="", alias="placementImportance")

    @field_validator("college_type", "facilities", mode="before")
    @classmethod
    def _coerce_multi(cls, value: Any) -> List[str]:
        return _as_text_list(value)

    @field_validator(
        "exam_name", "exam_rank", "exam_rank_band", "required_branch", "category",
        "budget_min", "budget_max", "naac_grade", "home_location", "dream_colleges",
        "dual_degree", "hostel_preference", "college_area", "max_distance_km",
        "transport_importance", "fest_frequency", "gender_ratio",
        "scholarship_importance", "placement_importance",
        mode="before",
    )
    @classmethod
    def _coerce_single(cls, value: Any) -> str:
        return _as_text(value)


class ResolvedPreferences(BaseModel):
    """
    Preferences after normalization.
    Computed once per run and passed explicitly to every filter and scorer.
    """
    model_config = ConfigDict(frozen=True)

    student_rank: Optional[int] = None
    rank_source: str = "none"  # exact/band/none
    category: str = ""  # normalized category code, "" when unconstrained
    required_branch: str = ""
    college_types: List[str] = Field(default_factory=list)
    budget_min: Optional[int] = None
    budget_max: Optional[int] = None
    min_grade_score: Optional[int] = None
    home_location: str = ""
    dream_colleges: str = ""

    @property
    def rank_gated(self) -> bool:
        """True when both rank and category are known, making eligibility a hard gate."""
        return self.student_rank is not None and bool(self.category)


# =============================================================================
# INTERMEDIATE DATA STRUCTURES
# =============================================================================

class CollegeClassification(BaseModel):
    """Type heuristics derived from a profile's free text."""
    is_government: bool = False
    is_private: bool = False
    is_autonomous: bool = False


class EligibleCollege(BaseModel):
    """
    A college that passed every filter, with its representative branch row.
    Used between filtering and scoring stages.
    """
    college: JoinedCollege
    row: ClosingRankRow
    cutoff: Optional[int] = None  # closing rank for the student's category
    fee: Optional[int] = None
    classification: CollegeClassification = Field(default_factory=CollegeClassification)


class ScoredCollege(BaseModel):
    """
    An eligible college with its score and reasons.
    Used between scoring and ranking stages.
    """
    eligible: EligibleCollege
    score: float = 0.0
    reasons: List[str] = Field(default_factory=list)

    @property
    def college_code(self) -> str:
        return self.eligible.college.college_code


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class Suggestion(BaseModel):
    """
    Single college suggestion, ready to render without re-deriving any value.
    """
    # Identifiers
    college_code: str
    college_name: str
    branch_name: str = ""

    # Basic info
    district: str = ""
    location: str = ""
    type: str = ""
    fees: Optional[int] = None
    naac_grade: str = ""
    nirf_rank: Optional[int] = None
    website: str = ""

    # Eligibility
    cutoff: Optional[int] = None
    category: str = ""

    # Scoring
    score: float = 0.0
    reasons: List[str] = Field(default_factory=list)


class SuggestionMeta(BaseModel):
    """Run metadata, for display only."""
    considered_colleges: int = 0
    total_eligible: int = 0
    student_rank: Optional[int] = None
    rank_source: str = "none"
    category: str = ""
    required_branch: str = ""
    budget_min: Optional[int] = None
    budget_max: Optional[int] = None
    dataset_counts: DatasetCounts = Field(default_factory=DatasetCounts)


class SuggestionOutput(BaseModel):
    """
    Output contract for the matching engine.
    An empty `top` list is a valid outcome, distinct from a load failure.
    """
    top: List[Suggestion] = Field(default_factory=list)
    meta: SuggestionMeta = Field(default_factory=SuggestionMeta)

    # Warnings/Notes
    warnings: List[str] = Field(default_factory=list)

    # Processing metadata
    processing_time_ms: Optional[float] = None
    engine_version: str = "1.0.0"

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
