"""Score reporting: submission validation, leaderboard sink and reporter."""

from neon_racer.scoring.leaderboard import Leaderboard, PlayerRecord, SubmissionResult
from neon_racer.scoring.reporter import ScoreReporter
from neon_racer.scoring.submission import (
    ScoreRejectedError,
    ScoreSubmission,
    check_plausible,
    max_plausible_score,
)

__all__ = [
    "Leaderboard",
    "PlayerRecord",
    "ScoreRejectedError",
    "ScoreReporter",
    "ScoreSubmission",
    "SubmissionResult",
    "check_plausible",
    "max_plausible_score",
]
