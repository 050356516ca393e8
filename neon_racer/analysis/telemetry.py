"""Tabular views of replay traces and Monte Carlo ensembles.

This module turns the per-tick rows collected by
:func:`neon_racer.core.replay.replay_run` into pandas DataFrames and
derives a handful of summary figures used by the dashboard and the
benchmark script.
"""

from __future__ import annotations

from typing import Any

import pandas as pd

TRACE_COLUMNS: tuple[str, ...] = (
    "tick",
    "time",
    "distance",
    "speed",
    "score",
    "player_x",
    "obstacles",
)


def trace_to_frame(trace: list[dict[str, Any]]) -> pd.DataFrame:
    """Build a DataFrame with one row per tick, indexed by tick number.

    Raises:
        ValueError: If any row lacks one of :data:`TRACE_COLUMNS`.
    """
    if not trace:
        return pd.DataFrame(columns=list(TRACE_COLUMNS)).set_index("tick")

    df = pd.DataFrame(trace)
    missing = [col for col in TRACE_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"trace rows missing columns: {missing}")
    return df.loc[:, list(TRACE_COLUMNS)].set_index("tick")


def summarize_trace(df: pd.DataFrame, max_speed: float) -> dict[str, Any]:
    """Summarise a single run.

    Args:
        df: Output of :func:`trace_to_frame`.
        max_speed: Saturation speed from the run's configuration.

    Returns:
        Dictionary with keys ``ticks``, ``final_score``, ``final_distance``,
        ``duration``, ``peak_speed``, ``time_to_max_speed`` (``None`` when
        the run never saturated) and ``mean_obstacles``.
    """
    if df.empty:
        return {
            "ticks": 0,
            "final_score": 0,
            "final_distance": 0.0,
            "duration": 0.0,
            "peak_speed": 0.0,
            "time_to_max_speed": None,
            "mean_obstacles": 0.0,
        }

    last = df.iloc[-1]
    saturated = df[df["speed"] >= max_speed]
    return {
        "ticks": int(len(df)),
        "final_score": int(last["score"]),
        "final_distance": float(last["distance"]),
        "duration": float(last["time"]),
        "peak_speed": float(df["speed"].max()),
        "time_to_max_speed": (
            float(saturated["time"].iloc[0]) if not saturated.empty else None
        ),
        "mean_obstacles": float(df["obstacles"].mean()),
    }


def ensemble_to_frame(results: dict[str, Any]) -> pd.DataFrame:
    """One row per Monte Carlo replication with score and survival time."""
    return pd.DataFrame(
        {
            "run": range(1, len(results["scores"]) + 1),
            "score": results["scores"],
            "survival_time": results["survival_times"],
        }
    ).set_index("run")
