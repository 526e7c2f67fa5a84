"""Domain modules for the CRS engine."""

from .language import LanguageTest, ProficiencyProfile, RawScores, Skill, normalize
from .profile import CandidateProfile, ScoreBreakdown
from .scoring import compute_score

__all__ = [
    "CandidateProfile",
    "LanguageTest",
    "ProficiencyProfile",
    "RawScores",
    "ScoreBreakdown",
    "Skill",
    "compute_score",
    "normalize",
]
