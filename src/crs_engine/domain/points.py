"""Category point tables for the Comprehensive Ranking System.

Each table is a pure lookup: values it cannot classify score 0.

Usage example:
    from crs_engine.domain.points import age_points, canadian_work_points

    assert age_points(28) == 110
    assert canadian_work_points("5+") == 80
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType

from .language import SKILLS, ProficiencyProfile
from .profile import CanadianEducation, EducationLevel

AGE_POINTS: MappingProxyType[int, int] = MappingProxyType(
    {
        18: 90,
        19: 95,
        20: 100,
        21: 105,
        **dict.fromkeys(range(22, 31), 110),
        31: 105,
        32: 99,
        33: 94,
        34: 88,
        35: 77,
        36: 72,
        37: 66,
        38: 61,
        39: 55,
        40: 50,
        41: 39,
        42: 28,
        43: 17,
        44: 6,
    }
)

EDUCATION_POINTS: MappingProxyType[str, int] = MappingProxyType(
    {
        EducationLevel.NONE: 0,
        EducationLevel.HIGH_SCHOOL: 30,
        EducationLevel.ONE_YEAR: 90,
        EducationLevel.TWO_YEAR: 98,
        EducationLevel.BACHELORS: 120,
        EducationLevel.TWO_OR_MORE: 128,
        EducationLevel.MASTERS: 135,
        EducationLevel.PHD: 140,
    }
)

# (minimum CLB level, points per skill), descending.
FIRST_LANGUAGE_SCHEDULE: tuple[tuple[int, int], ...] = (
    (10, 32),
    (9, 29),
    (8, 22),
    (7, 16),
    (6, 8),
    (5, 6),
    (4, 4),
)


class SecondLanguageSchedule(StrEnum):
    """Per-skill point schedules for the second official language."""

    FORM = "form"
    CONVERSATIONAL = "conversational"


SECOND_LANGUAGE_SCHEDULES: MappingProxyType[
    SecondLanguageSchedule, tuple[tuple[int, int], ...]
] = MappingProxyType(
    {
        SecondLanguageSchedule.FORM: ((5, 4), (4, 2)),
        SecondLanguageSchedule.CONVERSATIONAL: ((7, 6), (5, 3)),
    }
)

CANADIAN_WORK_POINTS: MappingProxyType[str, int] = MappingProxyType(
    {"0": 0, "1": 40, "2": 53, "3": 64, "4": 72, "5+": 80}
)

FOREIGN_WORK_POINTS: MappingProxyType[str, int] = MappingProxyType(
    {"0": 0, "1": 13, "2": 13, "3+": 25}
)

CANADIAN_WORK_BUCKETS: tuple[str, ...] = tuple(CANADIAN_WORK_POINTS)
FOREIGN_WORK_BUCKETS: tuple[str, ...] = tuple(FOREIGN_WORK_POINTS)

PROVINCIAL_NOMINATION_POINTS = 600
ARRANGED_EMPLOYMENT_POINTS = 50
CERTIFICATE_OF_QUALIFICATION_POINTS = 50
CANADIAN_FAMILY_POINTS = 15
CANADIAN_EDUCATION_POINTS: MappingProxyType[str, int] = MappingProxyType(
    {
        CanadianEducation.NONE: 0,
        CanadianEducation.SECONDARY: 0,
        CanadianEducation.ONE_OR_TWO_YEAR: 15,
        CanadianEducation.THREE_OR_MORE_YEAR: 30,
    }
)


def age_points(age: int) -> int:
    """Score age; anything outside 18–44 scores 0."""
    return AGE_POINTS.get(age, 0)


def education_points(level: EducationLevel | str | None) -> int:
    """Score the highest education tier; unknown tiers score 0."""
    if level is None:
        return 0
    return EDUCATION_POINTS.get(level, 0)


def _schedule_points(level: int, schedule: tuple[tuple[int, int], ...]) -> int:
    for minimum, points in schedule:
        if level >= minimum:
            return points
    return 0


def first_language_points(profile: ProficiencyProfile | None) -> int:
    """Sum first-official-language points over the four skills (max 128)."""
    if profile is None:
        return 0
    return sum(
        _schedule_points(profile.for_skill(skill), FIRST_LANGUAGE_SCHEDULE) for skill in SKILLS
    )


def second_language_points(
    profile: ProficiencyProfile | None,
    schedule: SecondLanguageSchedule = SecondLanguageSchedule.FORM,
) -> int:
    """Sum second-official-language points over the four skills."""
    if profile is None:
        return 0
    table = SECOND_LANGUAGE_SCHEDULES[schedule]
    return sum(_schedule_points(profile.for_skill(skill), table) for skill in SKILLS)


def work_bucket(years: int | str, buckets: tuple[str, ...]) -> str:
    """Map a year count or label onto a bucket label.

    The open-ended top bucket (e.g. ``"5+"``) absorbs exactly its own lower
    bound; larger counts fall outside the bucket set.
    """
    label = str(years).strip()
    open_ended = buckets[-1]
    if label == open_ended.rstrip("+"):
        return open_ended
    return label


def canadian_work_points(years: int | str) -> int:
    """Score Canadian work experience; undefined buckets score 0."""
    bucket = work_bucket(years, CANADIAN_WORK_BUCKETS)
    return CANADIAN_WORK_POINTS.get(bucket, 0)


def foreign_work_points(years: int | str) -> int:
    """Score foreign work experience; undefined buckets score 0."""
    bucket = work_bucket(years, FOREIGN_WORK_BUCKETS)
    return FOREIGN_WORK_POINTS.get(bucket, 0)


def additional_points(
    *,
    provincial_nomination: bool = False,
    arranged_employment: bool = False,
    certificate_of_qualification: bool = False,
    canadian_education: CanadianEducation | str = CanadianEducation.NONE,
    canadian_family: bool = False,
) -> int:
    """Sum the independent flat bonuses."""
    points = 0
    if provincial_nomination:
        points += PROVINCIAL_NOMINATION_POINTS
    if arranged_employment:
        points += ARRANGED_EMPLOYMENT_POINTS
    if certificate_of_qualification:
        points += CERTIFICATE_OF_QUALIFICATION_POINTS
    points += CANADIAN_EDUCATION_POINTS.get(canadian_education, 0)
    if canadian_family:
        points += CANADIAN_FAMILY_POINTS
    return points
