"""
Handball fitness test scoring

Point tables for the automatically scored tests:
- 30 m sprint (time, lower is better)
- medicine ball throw (forward + backward sum, higher is better)
- five-jump (distance, higher is better)

Hand throw and envelope test scores are entered manually and are never
computed here.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


# =====================================================
# Constants
# =====================================================

# Tolerance for measurements typed as decimals (3.72 is not exact in binary)
EPS = 1e-9

MAX_SCORE = 80
MIN_SCORE = 0


class ScoredTest(str, Enum):
    """Tests with an automatic point table"""
    SPRINT_30M = "sprint30m"
    MEDICINE_BALL = "medicineBall"
    FIVE_JUMP = "fiveJump"


# =====================================================
# Data classes
# =====================================================

@dataclass(frozen=True)
class ScoreBand:
    """One linear segment of a point table.

    ``start`` is the measurement worth ``top_score``; every ``step`` away from
    it in the losing direction costs one point, down to ``floor_score``.
    ``end`` is the last measurement still inside the band.
    """
    start: float
    end: float
    top_score: int
    step: float
    floor_score: int


# Sprint: start < time <= end
SPRINT_30M_BANDS: Tuple[ScoreBand, ...] = (
    ScoreBand(start=3.70, end=4.60, top_score=80, step=0.02, floor_score=35),
    ScoreBand(start=4.60, end=5.20, top_score=35, step=0.04, floor_score=20),
    ScoreBand(start=5.20, end=5.50, top_score=20, step=0.05, floor_score=14),
    ScoreBand(start=5.50, end=5.90, top_score=14, step=0.10, floor_score=10),
)

# Medicine ball sum: end <= sum < start
MEDICINE_BALL_BANDS: Tuple[ScoreBand, ...] = (
    ScoreBand(start=30.00, end=21.00, top_score=80, step=0.20, floor_score=35),
    ScoreBand(start=21.00, end=18.00, top_score=35, step=0.20, floor_score=20),
    ScoreBand(start=18.00, end=16.60, top_score=20, step=0.20, floor_score=14),
    ScoreBand(start=16.60, end=14.50, top_score=14, step=0.50, floor_score=10),
)

# Five-jump distance: end <= distance < start
FIVE_JUMP_BANDS: Tuple[ScoreBand, ...] = (
    ScoreBand(start=13.50, end=11.50, top_score=80, step=0.05, floor_score=40),
    ScoreBand(start=11.50, end=11.00, top_score=40, step=0.10, floor_score=35),
    ScoreBand(start=11.00, end=9.50, top_score=35, step=0.10, floor_score=20),
    ScoreBand(start=9.50, end=7.80, top_score=20, step=0.20, floor_score=10),
)


# =====================================================
# Band helpers
# =====================================================

def _is_valid(value: Optional[float]) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def _band_score(band: ScoreBand, distance: float) -> int:
    """Score inside a band; ``distance`` is how far the value is from ``start``"""
    steps = math.ceil(distance / band.step - EPS)
    return max(band.top_score - steps, band.floor_score)


def _score_lower_is_better(value: float, bands: Tuple[ScoreBand, ...]) -> int:
    if value <= bands[0].start + EPS:
        return MAX_SCORE
    for band in bands:
        if value <= band.end + EPS:
            return _band_score(band, value - band.start)
    return MIN_SCORE


def _score_higher_is_better(value: float, bands: Tuple[ScoreBand, ...]) -> int:
    if value >= bands[0].start - EPS:
        return MAX_SCORE
    for band in bands:
        if value >= band.end - EPS:
            return _band_score(band, band.start - value)
    return MIN_SCORE


# =====================================================
# Score functions
# =====================================================

def sprint30m_score(time: Optional[float]) -> Optional[int]:
    """30 m sprint time (s) → points"""
    if not _is_valid(time):
        return None
    return _score_lower_is_better(float(time), SPRINT_30M_BANDS)


def medicine_ball_score(total: Optional[float]) -> Optional[int]:
    """Medicine ball forward + backward sum (m) → points"""
    if not _is_valid(total):
        return None
    return _score_higher_is_better(float(total), MEDICINE_BALL_BANDS)


def five_jump_score(distance: Optional[float]) -> Optional[int]:
    """Five-jump distance (m) → points"""
    if not _is_valid(distance):
        return None
    return _score_higher_is_better(float(distance), FIVE_JUMP_BANDS)


SCORE_FUNCTIONS = {
    ScoredTest.SPRINT_30M: sprint30m_score,
    ScoredTest.MEDICINE_BALL: medicine_ball_score,
    ScoredTest.FIVE_JUMP: five_jump_score,
}


def score_for(test: ScoredTest, value: Optional[float]) -> Optional[int]:
    """Score a measurement for the given test"""
    return SCORE_FUNCTIONS[ScoredTest(test)](value)


# =====================================================
# CLI
# =====================================================

def print_score_table(test: ScoredTest, start: float, stop: float, step: float):
    """Print measurement → points rows, handy for checking a table by eye"""
    count = int(round((stop - start) / step)) + 1
    print(f"\n{'=' * 30}")
    print(f"{ScoredTest(test).value}")
    print(f"{'=' * 30}")
    for i in range(count):
        value = round(start + i * step, 2)
        print(f"{value:>8.2f} {score_for(test, value):>6}")


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Handball fitness test point tables")
    parser.add_argument("test", choices=[t.value for t in ScoredTest], help="Test")
    parser.add_argument("--start", type=float, required=True, help="First measurement")
    parser.add_argument("--stop", type=float, required=True, help="Last measurement")
    parser.add_argument("--step", type=float, default=0.01, help="Increment")

    args = parser.parse_args()
    print_score_table(ScoredTest(args.test), args.start, args.stop, args.step)


if __name__ == "__main__":
    main()
