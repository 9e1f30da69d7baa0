"""Grading core: domain normalization, header/SSL assessment and overall score aggregation.

Everything here is pure and synchronous. Malformed input degrades instead of
raising: unparseable URLs pass through, missing observations count as failed
and unknown grades score 0.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Mapping, NamedTuple, Optional, Tuple
from urllib.parse import urlsplit

from models import HEADER_NAMES, SSL_CHECKS, AssessmentResult, Grade

DEFAULT_SCHEME = "https://"

# (inclusive lower bound on percentage, grade); 100% is always A+
HEADER_THRESHOLDS = (
    (83, Grade.A),
    (67, Grade.B),
    (50, Grade.C),
    (33, Grade.D),
    (17, Grade.E),
)

SSL_THRESHOLDS = (
    (75, Grade.A),
    (50, Grade.B),
    (25, Grade.C),
)

GRADE_SCORES = {
    Grade.A_PLUS: 100,
    Grade.A: 95,
    Grade.B: 85,
    Grade.C: 75,
    Grade.D: 65,
    Grade.E: 55,
    Grade.F: 45,
}


class WeightingScheme(NamedTuple):
    name: str
    header_weight: Decimal
    ssl_weight: Decimal
    thresholds: Tuple[Tuple[int, Grade], ...]


REPORT_SCHEME = WeightingScheme(
    name="report",
    header_weight=Decimal("0.4"),
    ssl_weight=Decimal("0.6"),
    thresholds=(
        (95, Grade.A_PLUS),
        (85, Grade.A),
        (75, Grade.B),
        (65, Grade.C),
        (55, Grade.D),
        (45, Grade.E),
    ),
)

# Weights and buckets the interactive results page used before grading was
# consolidated. Kept for comparison only; nothing aggregates with it by default.
RESULTS_PAGE_SCHEME = WeightingScheme(
    name="results-page",
    header_weight=Decimal("0.45"),
    ssl_weight=Decimal("0.55"),
    thresholds=(
        (95, Grade.A_PLUS),
        (90, Grade.A),
        (80, Grade.B),
        (70, Grade.C),
        (60, Grade.D),
        (50, Grade.E),
    ),
)

CANONICAL_SCHEME = REPORT_SCHEME


def normalize(raw_url: str) -> str:
    """Return the hostname of *raw_url*, or *raw_url* itself when none can be parsed."""
    url = raw_url.strip()
    if not url.lower().startswith(("http://", "https://")):
        url = DEFAULT_SCHEME + url
    try:
        hostname = urlsplit(url).hostname
    except ValueError:
        return raw_url
    return hostname or raw_url


def _normalize_observations(observations: Optional[Mapping[str, bool]], keys: Tuple[str, ...],
                            case_insensitive: bool = False) -> Dict[str, bool]:
    observations = observations or {}
    if case_insensitive:
        observations = {str(k).lower(): v for k, v in observations.items()}
    return {key: bool(observations.get(key, False)) for key in keys}


def _percentage(observations: Dict[str, bool]) -> float:
    return sum(1 for ok in observations.values() if ok) / len(observations) * 100


def _bucket(percentage: float, thresholds) -> Grade:
    if percentage >= 100:
        return Grade.A_PLUS
    for lower, grade in thresholds:
        if percentage >= lower:
            return grade
    return Grade.F


def assess_headers(observations: Optional[Mapping[str, bool]]) -> AssessmentResult:
    normalized = _normalize_observations(observations, HEADER_NAMES, case_insensitive=True)
    percentage = _percentage(normalized)
    return AssessmentResult(
        grade=_bucket(percentage, HEADER_THRESHOLDS),
        score=percentage,
        observations=normalized,
    )


def assess_ssl(observations: Optional[Mapping[str, bool]]) -> AssessmentResult:
    normalized = _normalize_observations(observations, SSL_CHECKS)
    percentage = _percentage(normalized)
    return AssessmentResult(
        grade=_bucket(percentage, SSL_THRESHOLDS),
        score=percentage,
        observations=normalized,
    )


def parse_grade(value) -> Optional[Grade]:
    try:
        return Grade(value)
    except (ValueError, TypeError):
        return None


def grade_to_score(grade) -> int:
    """Numeric value of a grade; anything outside the enumeration is worth 0, not 45."""
    grade = parse_grade(grade)
    if grade is None:
        return 0
    return GRADE_SCORES[grade]


def weighted_score(header_grade, ssl_grade, scheme: WeightingScheme = CANONICAL_SCHEME) -> int:
    total = (grade_to_score(header_grade) * scheme.header_weight
             + grade_to_score(ssl_grade) * scheme.ssl_weight)
    return int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def score_to_grade(score: int, scheme: WeightingScheme = CANONICAL_SCHEME) -> Grade:
    for lower, grade in scheme.thresholds:
        if score >= lower:
            return grade
    return Grade.F


def aggregate(header_grade, ssl_grade, scheme: WeightingScheme = CANONICAL_SCHEME) -> Grade:
    return score_to_grade(weighted_score(header_grade, ssl_grade, scheme), scheme)
