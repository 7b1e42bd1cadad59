"""
Handball fitness test scoring

Point tables for the automatically scored tests
"""
from .calculator import (
    EPS,
    MAX_SCORE,
    MIN_SCORE,
    ScoredTest,
    ScoreBand,
    SPRINT_30M_BANDS,
    MEDICINE_BALL_BANDS,
    FIVE_JUMP_BANDS,
    sprint30m_score,
    medicine_ball_score,
    five_jump_score,
    score_for,
)

__all__ = [
    "EPS",
    "MAX_SCORE",
    "MIN_SCORE",
    "ScoredTest",
    "ScoreBand",
    "SPRINT_30M_BANDS",
    "MEDICINE_BALL_BANDS",
    "FIVE_JUMP_BANDS",
    "sprint30m_score",
    "medicine_ball_score",
    "five_jump_score",
    "score_for",
]
