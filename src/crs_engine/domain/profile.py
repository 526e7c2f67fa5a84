"""Domain model for scored candidates and score breakdowns."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from .language import ProficiencyProfile


class EducationLevel(StrEnum):
    """Highest completed education, in ascending order."""

    NONE = "none"
    HIGH_SCHOOL = "high_school"
    ONE_YEAR = "one_year"
    TWO_YEAR = "two_year"
    BACHELORS = "bachelors"
    TWO_OR_MORE = "two_or_more"
    MASTERS = "masters"
    PHD = "phd"


class CanadianEducation(StrEnum):
    """Canadian credential tier used by the additional-points table."""

    NONE = "none"
    SECONDARY = "secondary"
    ONE_OR_TWO_YEAR = "one_or_two_year"
    THREE_OR_MORE_YEAR = "three_or_more_year"


class MaritalStatus(StrEnum):
    """Marital status (collected, not scored)."""

    SINGLE = "single"
    MARRIED = "married"


@dataclass(frozen=True)
class CandidateProfile:
    """Complete, immutable input to one score computation.

    Every field carries its category default so an omitted answer scores 0.
    Work experience accepts a year count or a bucket label such as ``"5+"``.
    """

    age: int = 0
    education: EducationLevel | None = None
    marital_status: MaritalStatus = MaritalStatus.SINGLE
    first_language: ProficiencyProfile | None = None
    second_language: ProficiencyProfile | None = None
    canadian_work_years: int | str = 0
    foreign_work_years: int | str = 0
    certificate_of_qualification: bool = False
    arranged_employment: bool = False
    provincial_nomination: bool = False
    canadian_education: CanadianEducation = CanadianEducation.NONE
    canadian_family: bool = False


def _empty_points() -> MappingProxyType[str, int]:
    return MappingProxyType({})


@dataclass(frozen=True)
class ScoreBreakdown:
    """Points per category plus the unclamped total."""

    categories: MappingProxyType[str, int] = field(default_factory=_empty_points)

    @classmethod
    def from_points(cls, points: Mapping[str, int]) -> ScoreBreakdown:
        return cls(categories=MappingProxyType(dict(points)))

    @property
    def total(self) -> int:
        return sum(self.categories.values())

    def __getitem__(self, category: str) -> int:
        return self.categories[category]

    def capped(self, maximum: int) -> int:
        """Return the total limited to ``maximum`` (a caller-side policy)."""
        return min(self.total, maximum)

    def to_dict(self) -> dict[str, object]:
        return {"categories": dict(self.categories), "total": self.total}
