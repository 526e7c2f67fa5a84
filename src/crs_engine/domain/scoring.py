"""Aggregate category points into a CRS score breakdown.

Usage example:
    from crs_engine.domain.language import LanguageTest, RawScores, normalize
    from crs_engine.domain.profile import CandidateProfile, EducationLevel
    from crs_engine.domain.scoring import compute_score

    profile = CandidateProfile(
        age=28,
        education=EducationLevel.BACHELORS,
        first_language=normalize(LanguageTest.IELTS, RawScores(7.0, 7.0, 7.0, 7.0)),
        canadian_work_years=3,
    )
    breakdown = compute_score(profile)
    assert breakdown.total == 382
"""

from __future__ import annotations

from .points import (
    SecondLanguageSchedule,
    additional_points,
    age_points,
    canadian_work_points,
    education_points,
    first_language_points,
    foreign_work_points,
    second_language_points,
)
from .profile import CandidateProfile, ScoreBreakdown

CATEGORY_AGE = "age"
CATEGORY_EDUCATION = "education"
CATEGORY_FIRST_LANGUAGE = "first_language"
CATEGORY_SECOND_LANGUAGE = "second_language"
CATEGORY_CANADIAN_WORK = "canadian_work_experience"
CATEGORY_FOREIGN_WORK = "foreign_work_experience"
CATEGORY_ADDITIONAL = "additional"

CATEGORIES: tuple[str, ...] = (
    CATEGORY_AGE,
    CATEGORY_EDUCATION,
    CATEGORY_FIRST_LANGUAGE,
    CATEGORY_SECOND_LANGUAGE,
    CATEGORY_CANADIAN_WORK,
    CATEGORY_FOREIGN_WORK,
    CATEGORY_ADDITIONAL,
)


def compute_score(
    profile: CandidateProfile,
    *,
    second_language_schedule: SecondLanguageSchedule = SecondLanguageSchedule.FORM,
) -> ScoreBreakdown:
    """Score every category for a candidate and return the breakdown.

    The total is the plain sum of category points; no overall maximum is applied.
    """
    return ScoreBreakdown.from_points(
        {
            CATEGORY_AGE: age_points(profile.age),
            CATEGORY_EDUCATION: education_points(profile.education),
            CATEGORY_FIRST_LANGUAGE: first_language_points(profile.first_language),
            CATEGORY_SECOND_LANGUAGE: second_language_points(
                profile.second_language, second_language_schedule
            ),
            CATEGORY_CANADIAN_WORK: canadian_work_points(profile.canadian_work_years),
            CATEGORY_FOREIGN_WORK: foreign_work_points(profile.foreign_work_years),
            CATEGORY_ADDITIONAL: additional_points(
                provincial_nomination=profile.provincial_nomination,
                arranged_employment=profile.arranged_employment,
                certificate_of_qualification=profile.certificate_of_qualification,
                canadian_education=profile.canadian_education,
                canadian_family=profile.canadian_family,
            ),
        }
    )
