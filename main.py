"""CLI entrypoint for the Neon Racer simulation engine."""

from __future__ import annotations

import logging
import sys

from neon_racer import __version__
from neon_racer.config import load_game_config
from neon_racer.core.bots import LaneDodger
from neon_racer.core.engine import FrameSnapshot, SimulationEngine
from neon_racer.core.loop import FrameLoop, ManualFrameScheduler
from neon_racer.frontend.render import Cosmetics, RenderFrame, build_render_frame
from neon_racer.scoring.leaderboard import Leaderboard
from neon_racer.scoring.reporter import ScoreReporter

_FRAME_MS: float = 1000.0 / 60.0
_MAX_FRAMES: int = 60 * 180
_REPORT_EVERY: int = 60 * 10


def main() -> None:
    """Run one headless, bot-driven game through the real frame loop."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print(f"Neon Racer Simulation Engine v{__version__}")
    print("=" * 56)

    # -- Load configuration ---------------------------------------------------
    config = load_game_config()
    print(
        f"\nRoad {config.road_width:.0f}px, {config.lane_count} lanes, "
        f"speed {config.base_speed:g}->{config.max_speed:g}, "
        f"spawn rate {config.spawn_rate:g}/tick"
    )

    # -- Wire engine, reporter, bot and loop ----------------------------------
    leaderboard = Leaderboard(reward_threshold=config.reward_score_threshold)
    reporter = ScoreReporter.for_leaderboard(leaderboard, "demo-bot")
    engine = SimulationEngine(
        config=config, width=800, height=900, seed=2026, on_game_over=reporter
    )
    bot = LaneDodger(config)
    scheduler = ManualFrameScheduler()
    cosmetics = Cosmetics()
    frames: list[RenderFrame] = []

    def render(frame: FrameSnapshot) -> None:
        frames.append(build_render_frame(frame, config, cosmetics, reporter.best_score))
        left, right = bot(frame)
        engine.set_left_intent(left)
        engine.set_right_intent(right)

    loop = FrameLoop(engine, scheduler, render=render)
    loop.start_run(scheduler.now_ms)

    print(f"\n  {'Frame':>6}  {'Time':>6}  {'Speed':>6}  {'Score':>8}")
    print(f"  {'------':>6}  {'------':>6}  {'------':>6}  {'--------':>8}")

    for i in range(1, _MAX_FRAMES + 1):
        if scheduler.advance(_FRAME_MS) == 0:
            break
        if i % _REPORT_EVERY == 0:
            snap = engine.run_snapshot()
            print(f"  {i:6d}  {snap.time:6.1f}  {snap.speed:6.2f}  {snap.score:8d}")

    loop.halt()
    final = engine.run_snapshot()
    print("-" * 56)
    print(f"Final score {final.score} after {final.time:.1f}s ({len(frames)} frames)")
    if frames:
        print("\n".join(f"  {line}" for line in frames[-1].hud))
    for rank, (name, best) in enumerate(leaderboard.top(5), start=1):
        print(f"  #{rank} {name}: {best}")


if __name__ == "__main__":
    sys.exit(main() or 0)
