"""Language test normalisation onto the Canadian Language Benchmark (CLB) scale.

Usage example:
    from crs_engine.domain.language import LanguageTest, RawScores, normalize

    profile = normalize(
        LanguageTest.IELTS,
        RawScores(speaking=7.0, listening=8.0, reading=6.5, writing=6.0),
    )
    assert profile.speaking == 8
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

MIN_LEVEL = 3


class LanguageTest(StrEnum):
    """Supported official-language tests."""

    IELTS = "IELTS"
    CELPIP = "CELPIP"
    TEF = "TEF"


class Skill(StrEnum):
    """The four assessed language skills."""

    SPEAKING = "speaking"
    LISTENING = "listening"
    READING = "reading"
    WRITING = "writing"


SKILLS: tuple[Skill, ...] = (Skill.SPEAKING, Skill.LISTENING, Skill.READING, Skill.WRITING)


@dataclass(frozen=True)
class LevelBand:
    """A level assigned when a raw score is at least ``minimum``."""

    minimum: float
    level: int


# Bands are ordered by descending minimum; the first band met wins.
IELTS_BANDS: tuple[LevelBand, ...] = (
    LevelBand(minimum=9.0, level=10),
    LevelBand(minimum=8.5, level=9),
    LevelBand(minimum=7.0, level=8),
    LevelBand(minimum=6.5, level=7),
    LevelBand(minimum=6.0, level=6),
    LevelBand(minimum=5.5, level=5),
    LevelBand(minimum=5.0, level=4),
    LevelBand(minimum=4.0, level=3),
)

_TEF_SPEAKING_WRITING: tuple[LevelBand, ...] = (
    LevelBand(minimum=393, level=10),
    LevelBand(minimum=371, level=9),
    LevelBand(minimum=349, level=8),
    LevelBand(minimum=310, level=7),
    LevelBand(minimum=271, level=6),
    LevelBand(minimum=226, level=5),
    LevelBand(minimum=181, level=4),
)

TEF_BANDS: MappingProxyType[Skill, tuple[LevelBand, ...]] = MappingProxyType(
    {
        Skill.SPEAKING: _TEF_SPEAKING_WRITING,
        Skill.LISTENING: (
            LevelBand(minimum=316, level=10),
            LevelBand(minimum=298, level=9),
            LevelBand(minimum=280, level=8),
            LevelBand(minimum=249, level=7),
            LevelBand(minimum=217, level=6),
            LevelBand(minimum=181, level=5),
            LevelBand(minimum=145, level=4),
        ),
        Skill.READING: (
            LevelBand(minimum=263, level=10),
            LevelBand(minimum=248, level=9),
            LevelBand(minimum=233, level=8),
            LevelBand(minimum=207, level=7),
            LevelBand(minimum=181, level=6),
            LevelBand(minimum=151, level=5),
            LevelBand(minimum=121, level=4),
        ),
        Skill.WRITING: _TEF_SPEAKING_WRITING,
    }
)

# Native scale bounds shown to people entering raw scores.
SCORE_RANGES: MappingProxyType[LanguageTest, MappingProxyType[Skill, tuple[float, float]]] = (
    MappingProxyType(
        {
            LanguageTest.IELTS: MappingProxyType({skill: (0.0, 9.0) for skill in SKILLS}),
            LanguageTest.CELPIP: MappingProxyType({skill: (1.0, 12.0) for skill in SKILLS}),
            LanguageTest.TEF: MappingProxyType(
                {
                    Skill.SPEAKING: (0.0, 450.0),
                    Skill.LISTENING: (0.0, 360.0),
                    Skill.READING: (0.0, 300.0),
                    Skill.WRITING: (0.0, 450.0),
                }
            ),
        }
    )
)


@dataclass(frozen=True)
class RawScores:
    """Per-skill scores on a test's native scale."""

    speaking: float
    listening: float
    reading: float
    writing: float

    def for_skill(self, skill: Skill) -> float:
        return float(getattr(self, skill.value))


@dataclass(frozen=True)
class ProficiencyProfile:
    """Per-skill CLB levels produced by :func:`normalize`."""

    speaking: int
    listening: int
    reading: int
    writing: int

    def for_skill(self, skill: Skill) -> int:
        return int(getattr(self, skill.value))

    def levels(self) -> tuple[int, ...]:
        """Return levels in canonical skill order."""
        return tuple(self.for_skill(skill) for skill in SKILLS)


def level_from_bands(score: float, bands: tuple[LevelBand, ...]) -> int:
    """Return the level of the first band the score meets, or the floor level."""
    for band in bands:
        if score >= band.minimum:
            return band.level
    return MIN_LEVEL


def normalize_skill(test: LanguageTest, skill: Skill, score: float) -> int:
    """Convert one raw skill score to a CLB level."""
    match test:
        case LanguageTest.IELTS:
            return level_from_bands(score, IELTS_BANDS)
        case LanguageTest.CELPIP:
            # CELPIP levels already align with CLB; no clamp is applied.
            return int(score)
        case LanguageTest.TEF:
            return level_from_bands(score, TEF_BANDS[skill])


def normalize(test: LanguageTest, raw_scores: RawScores) -> ProficiencyProfile:
    """Normalise four raw test scores into a proficiency profile.

    Args:
        test: The language test the scores were reported on.
        raw_scores: Finite, non-NaN scores on the test's native scale.

    Returns:
        A ProficiencyProfile. IELTS and TEF levels never drop below 3.
    """
    return ProficiencyProfile(
        speaking=normalize_skill(test, Skill.SPEAKING, raw_scores.speaking),
        listening=normalize_skill(test, Skill.LISTENING, raw_scores.listening),
        reading=normalize_skill(test, Skill.READING, raw_scores.reading),
        writing=normalize_skill(test, Skill.WRITING, raw_scores.writing),
    )
