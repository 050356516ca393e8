"""Game-over collaborator that forwards final run values to a score sink.

Submission is fire-and-forget: a failing sink is logged and counted but
never retried, and nothing propagates back into the engine.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from neon_racer.scoring.leaderboard import Leaderboard
from neon_racer.scoring.submission import ScoreSubmission, is_reward_eligible

logger = logging.getLogger(__name__)

ScoreSink = Callable[[ScoreSubmission], Any]


class ScoreReporter:
    """Callable suitable for ``SimulationEngine(on_game_over=...)``.

    Attributes:
        sink: Receives one :class:`ScoreSubmission` per finished run.
        reward_threshold: Score that shows the reward notice.
        best_score: Highest score seen this session.
        reward_unlocked: True if the latest run reached the threshold.
        last_submission: Most recent submission built, sent or not.
        failures: Number of sink failures so far.
    """

    def __init__(self, sink: ScoreSink, reward_threshold: int = 10000) -> None:
        self.sink: ScoreSink = sink
        self.reward_threshold: int = reward_threshold
        self.best_score: int = 0
        self.reward_unlocked: bool = False
        self.last_submission: ScoreSubmission | None = None
        self.failures: int = 0

    @classmethod
    def for_leaderboard(cls, leaderboard: Leaderboard, player: str) -> ScoreReporter:
        """Reporter that submits to *leaderboard* on behalf of *player*."""
        return cls(
            lambda submission: leaderboard.submit(player, submission),
            reward_threshold=leaderboard.reward_threshold,
        )

    def __call__(self, score: int, distance: float, time: float, speed: float) -> None:
        self.best_score = max(self.best_score, score)
        self.reward_unlocked = is_reward_eligible(score, self.reward_threshold)

        try:
            submission = ScoreSubmission(
                score=score, distance=distance, time=time, speed=speed
            )
            self.last_submission = submission
            self.sink(submission)
        except Exception:
            self.failures += 1
            logger.exception("Failed to save score %s", score)
            return
        logger.debug("score %d submitted", score)
