"""Score submission payload and server-side plausibility rules."""

from __future__ import annotations

import math
from dataclasses import dataclass

from neon_racer.core.run_state import RunSnapshot

# A score above this multiple of the theoretical maximum is rejected.
PLAUSIBILITY_TOLERANCE: float = 1.5


class ScoreRejectedError(ValueError):
    """Raised when a submission fails validation or the tamper check."""


@dataclass(frozen=True)
class ScoreSubmission:
    """Final run values sent to the score sink.

    Attributes:
        score: Final score (>= 0).
        distance: Final distance (>= 0).
        time: Run duration in seconds (>= 0).
        speed: Speed at the end of the run (>= 0).
    """

    score: int
    distance: float
    time: float
    speed: float

    def __post_init__(self) -> None:
        for name in ("score", "distance", "time", "speed"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ScoreRejectedError(f"{name} must be numeric.")
            if not math.isfinite(value):
                raise ScoreRejectedError(f"{name} must be finite.")
            if value < 0:
                raise ScoreRejectedError(f"{name} must be >= 0.")

    @classmethod
    def from_snapshot(cls, snapshot: RunSnapshot) -> ScoreSubmission:
        return cls(
            score=snapshot.score,
            distance=snapshot.distance,
            time=snapshot.time,
            speed=snapshot.speed,
        )

    def as_dict(self) -> dict[str, float]:
        return {
            "score": self.score,
            "distance": self.distance,
            "time": self.time,
            "speed": self.speed,
        }


def max_plausible_score(distance: float, time: float) -> float:
    """Upper bound a client could legitimately report for a run."""
    return distance * 10.0 + time * 100.0


def check_plausible(submission: ScoreSubmission) -> None:
    """Reject scores far above what the distance and time allow.

    Raises:
        ScoreRejectedError: If ``score > max_plausible * 1.5``.
    """
    ceiling = max_plausible_score(submission.distance, submission.time)
    if submission.score > ceiling * PLAUSIBILITY_TOLERANCE:
        raise ScoreRejectedError(
            f"Invalid score {submission.score}: exceeds plausible "
            f"ceiling {ceiling * PLAUSIBILITY_TOLERANCE:.1f}"
        )


def is_reward_eligible(score: int, threshold: int) -> bool:
    return score >= threshold
