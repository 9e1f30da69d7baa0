"""Scorecard data model: grades, assessment results, recommendations and the report."""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Grade(str, Enum):
    A_PLUS = "A+"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"

    @property
    def rank(self) -> int:
        """Position from best (0) to worst (6)."""
        return GRADE_ORDER.index(self)


GRADE_ORDER = (Grade.A_PLUS, Grade.A, Grade.B, Grade.C, Grade.D, Grade.E, Grade.F)


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


HEADER_NAMES = (
    "strict-transport-security",
    "content-security-policy",
    "x-content-type-options",
    "x-frame-options",
    "referrer-policy",
    "permissions-policy",
)

SSL_CHECKS = (
    "validCertificate",
    "strongCiphers",
    "secureProtocols",
    "certChainValid",
)


class AssessmentResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    grade: Grade
    score: float = Field(ge=0, le=100)
    observations: Dict[str, bool]

    @property
    def passed(self) -> int:
        return sum(1 for ok in self.observations.values() if ok)

    @property
    def total(self) -> int:
        return len(self.observations)


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    priority: Priority


class SecurityReport(BaseModel):
    """Everything the renderers need for one scanned URL. Built once, never mutated."""

    model_config = ConfigDict(frozen=True)

    url: str
    hostname: str
    overall_grade: Grade
    overall_score: int
    headers: AssessmentResult
    ssl: AssessmentResult
    recommendations: List[Recommendation] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("headers")
    @classmethod
    def validate_header_keys(cls, v: AssessmentResult) -> AssessmentResult:
        return _require_keys(v, HEADER_NAMES, "header")

    @field_validator("ssl")
    @classmethod
    def validate_ssl_keys(cls, v: AssessmentResult) -> AssessmentResult:
        return _require_keys(v, SSL_CHECKS, "SSL check")


def _require_keys(result: AssessmentResult, keys, kind: str) -> AssessmentResult:
    unknown = set(result.observations) - set(keys)
    if unknown:
        raise ValueError(f"unknown {kind} names: {sorted(unknown)}")
    missing = set(keys) - set(result.observations)
    if missing:
        raise ValueError(f"missing {kind} names: {sorted(missing)}")
    return result
