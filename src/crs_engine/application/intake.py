"""Validation of collected answers into a scoreable candidate profile.

Collection surfaces (a multi-step form, a question sequence) gather raw answers
as plain JSON-compatible values. This module is the single gate between those
answers and the engine: malformed input is rejected here so scoring never sees
it.

Usage example:
    from crs_engine.application.intake import build_candidate_profile

    profile = build_candidate_profile(
        {
            "age": 28,
            "education": "bachelors",
            "first_language": {
                "test": "IELTS",
                "scores": {"speaking": 7, "listening": 7, "reading": 7, "writing": 7},
            },
            "canadian_work_experience": 3,
        }
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..domain.language import (
    SCORE_RANGES,
    SKILLS,
    LanguageTest,
    ProficiencyProfile,
    RawScores,
    normalize,
)
from ..domain.points import CANADIAN_WORK_BUCKETS, FOREIGN_WORK_BUCKETS, work_bucket
from ..domain.profile import (
    CandidateProfile,
    CanadianEducation,
    EducationLevel,
    MaritalStatus,
)
from ..exceptions import CandidateFileNotFoundError, CandidateInputValidationError
from ..protocols import FileSystem

MIN_AGE = 17
MAX_AGE = 99


def _lowered(value: object) -> object:
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _bucket_label(value: object, buckets: tuple[str, ...]) -> str:
    if isinstance(value, bool) or not isinstance(value, int | str):
        raise ValueError
    label = work_bucket(value, buckets)
    if label not in buckets:
        raise ValueError
    return label


class _RawScoresModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    speaking: float
    listening: float
    reading: float
    writing: float


class _LanguageAnswerModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    test: LanguageTest
    scores: _RawScoresModel

    @field_validator("test", mode="before")
    @classmethod
    def _normalise_test(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def _validate_score_ranges(self) -> _LanguageAnswerModel:
        ranges = SCORE_RANGES[self.test]
        for skill in SKILLS:
            score = getattr(self.scores, skill.value)
            low, high = ranges[skill]
            if score < low or score > high:
                raise ValueError(
                    f"{skill.value} score {score:g} is outside {low:g}-{high:g} for {self.test}"
                )
            # CELPIP reports whole levels.
            if self.test is LanguageTest.CELPIP and not score.is_integer():
                raise ValueError(f"{skill.value} score {score:g} must be a whole CELPIP level")
        return self

    def to_profile(self) -> ProficiencyProfile:
        return normalize(
            self.test,
            RawScores(
                speaking=self.scores.speaking,
                listening=self.scores.listening,
                reading=self.scores.reading,
                writing=self.scores.writing,
            ),
        )


class _CandidateAnswersModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    age: int
    education: EducationLevel
    first_language: _LanguageAnswerModel
    marital_status: MaritalStatus = MaritalStatus.SINGLE
    second_language: _LanguageAnswerModel | None = None
    canadian_work_experience: str = "0"
    foreign_work_experience: str = "0"
    certificate_of_qualification: bool = False
    arranged_employment: bool = False
    provincial_nomination: bool = False
    canadian_education: CanadianEducation = CanadianEducation.NONE
    canadian_family: bool = False

    @field_validator("age")
    @classmethod
    def _validate_age(cls, value: int) -> int:
        if value < MIN_AGE or value > MAX_AGE:
            raise ValueError
        return value

    @field_validator("education", "marital_status", "canadian_education", mode="before")
    @classmethod
    def _normalise_choice(cls, value: object) -> object:
        return _lowered(value)

    @field_validator("second_language", mode="before")
    @classmethod
    def _normalise_second_language(cls, value: object) -> object:
        if isinstance(value, str) and value.strip().lower() in {"", "none"}:
            return None
        return value

    @field_validator("canadian_work_experience", mode="before")
    @classmethod
    def _validate_canadian_work(cls, value: object) -> str:
        return _bucket_label(value, CANADIAN_WORK_BUCKETS)

    @field_validator("foreign_work_experience", mode="before")
    @classmethod
    def _validate_foreign_work(cls, value: object) -> str:
        return _bucket_label(value, FOREIGN_WORK_BUCKETS)


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def _to_domain_profile(model: _CandidateAnswersModel) -> CandidateProfile:
    return CandidateProfile(
        age=model.age,
        education=model.education,
        marital_status=model.marital_status,
        first_language=model.first_language.to_profile(),
        second_language=model.second_language.to_profile()
        if model.second_language is not None
        else None,
        canadian_work_years=model.canadian_work_experience,
        foreign_work_years=model.foreign_work_experience,
        certificate_of_qualification=model.certificate_of_qualification,
        arranged_employment=model.arranged_employment,
        provincial_nomination=model.provincial_nomination,
        canadian_education=model.canadian_education,
        canadian_family=model.canadian_family,
    )


def build_candidate_profile(
    answers: Mapping[str, object],
    *,
    source: str = "answers",
) -> CandidateProfile:
    """Validate collected answers and assemble an immutable candidate profile.

    Raises:
        CandidateInputValidationError: If any answer is missing, non-numeric,
            out of range, or not one of the offered choices.
    """
    try:
        model = _CandidateAnswersModel.model_validate(dict(answers))
    except ValidationError as exc:
        raise CandidateInputValidationError(source, _format_validation_error(exc)) from exc
    return _to_domain_profile(model)


def build_proficiency_profile(
    test: str,
    scores: Mapping[str, object],
    *,
    source: str = "language scores",
) -> ProficiencyProfile:
    """Validate one test's raw scores and normalise them to CLB levels.

    Applies the same finiteness, range and whole-level checks as the
    language answers inside a full candidate answer set.
    """
    try:
        model = _LanguageAnswerModel.model_validate({"test": test, "scores": dict(scores)})
    except ValidationError as exc:
        raise CandidateInputValidationError(source, _format_validation_error(exc)) from exc
    return model.to_profile()


def load_candidate_profile(*, path: Path, fs: FileSystem) -> CandidateProfile:
    """Load a JSON answer file and build a candidate profile from it."""
    if not fs.exists(path):
        raise CandidateFileNotFoundError(str(path))
    try:
        answers = fs.read_json(path)
    except (RuntimeError, ValueError) as exc:
        raise CandidateInputValidationError(str(path), "file must contain a JSON object") from exc
    return build_candidate_profile(answers, source=str(path))
