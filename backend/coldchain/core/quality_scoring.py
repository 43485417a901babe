"""Quality Scoring — breach detection, penalty and assessment banding.

Invariants:
    - Flat BREACH_PENALTY per breach, floor 0, no recovery on compliant readings
    - Score never leaves [0, 100]
    - Bands: >=80 excellent, 60-79 good, 40-59 fair, <40 poor (derived, never stored)
"""

from coldchain.core.domain_types import (
    BREACH_PENALTY,
    MAX_QUALITY_SCORE,
    MIN_QUALITY_SCORE,
    QualityBand,
    QualityScore,
)


EXCELLENT_THRESHOLD = 80
GOOD_THRESHOLD = 60
FAIR_THRESHOLD = 40


def is_breach(temperature: int, min_temp: int, max_temp: int) -> bool:
    return temperature < min_temp or temperature > max_temp


def clamp_quality(score: int) -> QualityScore:
    return QualityScore(max(MIN_QUALITY_SCORE, min(MAX_QUALITY_SCORE, score)))


def apply_breach_penalty(score: int) -> QualityScore:
    """One breach event: subtract the flat penalty, floored at 0."""
    return clamp_quality(score - BREACH_PENALTY)


def assess_quality(score: int) -> QualityBand:
    if score >= EXCELLENT_THRESHOLD:
        return QualityBand.EXCELLENT
    if score >= GOOD_THRESHOLD:
        return QualityBand.GOOD
    if score >= FAIR_THRESHOLD:
        return QualityBand.FAIR
    return QualityBand.POOR
