"""In-memory score sink with per-player bests and reward eligibility.

Stands in for the persistence layer behind the score-submission
endpoint: it keeps every accepted record, tracks each player's best
score, and marks a player reward-eligible the first time a new best
reaches the threshold.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from neon_racer.scoring.submission import (
    ScoreRejectedError,
    ScoreSubmission,
    check_plausible,
    is_reward_eligible,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionResult:
    """Reply to an accepted submission."""

    best_score: int
    reward_eligible: bool
    new_best: bool


@dataclass
class PlayerRecord:
    """Per-player standing.

    Attributes:
        name: Player identifier.
        best_score: Highest accepted score.
        reward_eligible: Latched once a best score reaches the threshold.
        runs: Accepted submissions in arrival order.
    """

    name: str
    best_score: int = 0
    reward_eligible: bool = False
    runs: list[ScoreSubmission] = field(default_factory=list)


class Leaderboard:
    """Accepts validated submissions and answers ranking queries.

    Args:
        reward_threshold: Score that unlocks reward eligibility.
        require_registration: Reject submissions from players that were
            not registered with :meth:`register`.
    """

    def __init__(
        self,
        reward_threshold: int = 10000,
        require_registration: bool = False,
    ) -> None:
        if reward_threshold < 0:
            raise ValueError("reward_threshold must be >= 0.")
        self.reward_threshold: int = reward_threshold
        self.require_registration: bool = require_registration
        self._players: dict[str, PlayerRecord] = {}

    def register(self, player: str) -> PlayerRecord:
        if not player:
            raise ValueError("player name must not be empty.")
        return self._players.setdefault(player, PlayerRecord(name=player))

    def player(self, player: str) -> PlayerRecord | None:
        return self._players.get(player)

    def submit(self, player: str, submission: ScoreSubmission) -> SubmissionResult:
        """Store a run and update the player's standing.

        Raises:
            ScoreRejectedError: If the player is unknown while registration
                is required, or the score fails the plausibility check.
        """
        if self.require_registration and player not in self._players:
            raise ScoreRejectedError(f"Unknown player '{player}'")
        check_plausible(submission)

        record = self.register(player)
        record.runs.append(submission)

        new_best = submission.score > record.best_score
        if new_best:
            record.best_score = submission.score
            if not record.reward_eligible and is_reward_eligible(
                submission.score, self.reward_threshold
            ):
                record.reward_eligible = True
                logger.info("%s is now reward eligible (%d)", player, submission.score)

        return SubmissionResult(
            best_score=record.best_score,
            reward_eligible=record.reward_eligible,
            new_best=new_best,
        )

    def top(self, n: int = 10) -> list[tuple[str, int]]:
        """Best scores, highest first; ties keep registration order.

        Raises:
            ValueError: If n < 0.
        """
        if n < 0:
            raise ValueError("n must be >= 0.")
        ranked = sorted(
            self._players.values(), key=lambda rec: rec.best_score, reverse=True
        )
        return [(rec.name, rec.best_score) for rec in ranked[:n]]

    def __len__(self) -> int:
        return len(self._players)
