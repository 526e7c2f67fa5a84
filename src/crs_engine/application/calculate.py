"""Application service: load collected answers, score them, report the result."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..config import EngineConfig
from ..domain.profile import CandidateProfile, ScoreBreakdown
from ..domain.scoring import compute_score
from ..observability.logging import get_logger
from ..protocols import FileSystem
from .intake import load_candidate_profile


@dataclass(frozen=True)
class CalculationResult:
    """Outcome of scoring one candidate answer file."""

    profile: CandidateProfile
    breakdown: ScoreBreakdown
    reported_total: int
    output_path: Path | None = None


def reported_total(breakdown: ScoreBreakdown, config: EngineConfig) -> int:
    """Apply the configured cap policy to a breakdown total."""
    if config.total_cap is None:
        return breakdown.total
    return breakdown.capped(config.total_cap)


def score_profile(profile: CandidateProfile, config: EngineConfig) -> ScoreBreakdown:
    """Score a profile using the configured second-language schedule."""
    return compute_score(profile, second_language_schedule=config.second_language_schedule)


def run_calculation(
    *,
    profile_path: Path,
    config: EngineConfig,
    fs: FileSystem,
    out_path: Path | None = None,
) -> CalculationResult:
    """Score a candidate answer file and optionally write the breakdown as JSON.

    Args:
        profile_path: JSON answer file produced by a collection surface.
        config: Engine configuration (schedule and cap policy).
        fs: Filesystem used for reading answers and writing the result.
        out_path: Optional destination for the JSON breakdown.

    Returns:
        CalculationResult with the profile, breakdown and reported total.
    """
    logger = get_logger("crs_engine.calculate", level=config.log_level)
    profile = load_candidate_profile(path=profile_path, fs=fs)
    breakdown = score_profile(profile, config)
    total = reported_total(breakdown, config)
    logger.info(
        "Scored %s: categories=%s total=%s reported=%s schedule=%s",
        profile_path,
        len(breakdown.categories),
        breakdown.total,
        total,
        config.second_language_schedule.value,
    )

    if out_path is not None:
        payload = breakdown.to_dict()
        payload["reported_total"] = total
        payload["second_language_schedule"] = config.second_language_schedule.value
        fs.write_json(payload, out_path)
        logger.info("Wrote score breakdown to %s", out_path)

    return CalculationResult(
        profile=profile,
        breakdown=breakdown,
        reported_total=total,
        output_path=out_path,
    )
