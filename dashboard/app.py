"""Neon Racer Bot Analytics Dashboard.

Interactive analytics dashboard built with Streamlit and Plotly.
Runs seeded Monte Carlo ensembles of headless bot policies, shows score
distributions and survival statistics, and plots the telemetry of a
single replayed run.

Launch with::

    streamlit run dashboard/app.py
"""

from __future__ import annotations

from dataclasses import replace

import plotly.graph_objects as go
import streamlit as st

from neon_racer.analysis.telemetry import (
    ensemble_to_frame,
    summarize_trace,
    trace_to_frame,
)
from neon_racer.config import load_game_config
from neon_racer.core.bots import LaneDodger, RandomWiggler, idle_policy
from neon_racer.core.game_config import GameConfig
from neon_racer.core.monte_carlo import simulate_runs_monte_carlo
from neon_racer.core.replay import constant_deltas, replay_run

_FRAME_TIME: float = 1.0 / 60.0
_MAX_TICKS: int = 60 * 240

_POLICY_NAMES: list[str] = ["Lane dodger", "Random wiggler", "Idle"]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _policy_factory(name: str, config: GameConfig):
    """Return a seed -> policy factory for a sidebar policy name."""
    if name == "Lane dodger":
        return lambda seed: LaneDodger(config)
    if name == "Random wiggler":
        return lambda seed: RandomWiggler(seed=seed)
    return lambda seed: idle_policy


# ---------------------------------------------------------------------------
# Streamlit app
# ---------------------------------------------------------------------------


def main() -> None:  # noqa: C901
    """Entry point for the Streamlit dashboard."""
    st.set_page_config(
        page_title="Neon Racer Bot Analytics",
        layout="wide",
    )

    st.title("Neon Racer Bot Analytics")

    # ── Sidebar ──────────────────────────────────────────────────────────
    st.sidebar.header("Simulation Parameters")

    base_config = load_game_config()

    policy_name: str = st.sidebar.selectbox("Policy", options=_POLICY_NAMES, index=0)

    n_runs: int = st.sidebar.slider(
        "Monte Carlo runs",
        min_value=10,
        max_value=1000,
        value=100,
        step=10,
    )

    spawn_rate: float = st.sidebar.slider(
        "Spawn rate per tick",
        min_value=0.0,
        max_value=0.10,
        value=float(base_config.spawn_rate),
        step=0.005,
    )

    base_seed: int = int(st.sidebar.number_input("Base seed", value=42, step=1))

    config = replace(base_config, spawn_rate=spawn_rate)

    st.sidebar.markdown("---")
    st.sidebar.caption(
        f"Speed {config.base_speed:g} -> {config.max_speed:g}, "
        f"reward threshold {config.reward_score_threshold:,}"
    )

    # ── Section 1: Run ensemble ──────────────────────────────────────────
    st.header("1 -- Policy Ensemble")

    if st.button("Run Ensemble"):
        with st.spinner("Running Monte Carlo ensemble..."):
            results = simulate_runs_monte_carlo(
                _policy_factory(policy_name, config),
                n_runs,
                config=config,
                base_seed=base_seed,
                frame_time=_FRAME_TIME,
                max_ticks=_MAX_TICKS,
            )
        st.session_state["results"] = results
        st.session_state["config"] = config
        st.session_state["policy_name"] = policy_name
        st.session_state["base_seed"] = base_seed

    # Guard: only show results if available
    if "results" not in st.session_state:
        st.info(
            "Configure parameters in the sidebar, then press 'Run Ensemble'."
        )
        return

    results = st.session_state["results"]
    config = st.session_state["config"]
    policy_name = st.session_state["policy_name"]
    base_seed = st.session_state["base_seed"]

    col_m1, col_m2, col_m3, col_m4 = st.columns(4)
    col_m1.metric("Mean score", f"{results['mean_score']:,.0f}")
    col_m2.metric("Median score", f"{results['median_score']:,.0f}")
    col_m3.metric("Mean survival (s)", f"{results['mean_survival_time']:.1f}")
    col_m4.metric("Reward probability", f"{results['reward_probability']:.1%}")

    # ── Section 2: Distributions ─────────────────────────────────────────
    st.header("2 -- Score Distribution")

    col_hist, col_scatter = st.columns(2)
    hist = results["score_histogram"]
    edges = hist["edges"]
    centres = [(a + b) / 2.0 for a, b in zip(edges[:-1], edges[1:])]

    with col_hist:
        fig_hist = go.Figure(go.Bar(x=centres, y=hist["counts"], marker_color="#00ffff"))
        fig_hist.update_layout(
            title=f"Final Scores ({policy_name})",
            xaxis_title="Score",
            yaxis_title="Runs",
            height=380,
        )
        st.plotly_chart(fig_hist, use_container_width=True)

    ensemble_df = ensemble_to_frame(results)
    with col_scatter:
        fig_scatter = go.Figure(
            go.Scatter(
                x=ensemble_df["survival_time"],
                y=ensemble_df["score"],
                mode="markers",
                marker_color="#ff00ff",
            )
        )
        fig_scatter.update_layout(
            title="Score vs Survival Time",
            xaxis_title="Survival time (s)",
            yaxis_title="Score",
            height=380,
        )
        st.plotly_chart(fig_scatter, use_container_width=True)

    # ── Section 3: Telemetry of the best run ─────────────────────────────
    st.header("3 -- Best Run Telemetry")

    scores: list[int] = results["scores"]
    best_seed = base_seed + scores.index(max(scores))
    replay = replay_run(
        constant_deltas(_FRAME_TIME, _MAX_TICKS),
        config=config,
        seed=best_seed,
        policy=_policy_factory(policy_name, config)(best_seed),
    )
    trace_df = trace_to_frame(replay.trace)
    summary = summarize_trace(trace_df, config.max_speed)

    st.write(
        f"Seed **{best_seed}** -- {summary['ticks']} ticks, "
        f"score **{summary['final_score']:,}**, "
        f"peak speed {summary['peak_speed']:.2f}"
    )

    col_speed, col_score = st.columns(2)
    with col_speed:
        fig_speed = go.Figure(
            go.Scatter(x=trace_df["time"], y=trace_df["speed"], mode="lines")
        )
        fig_speed.update_layout(
            title="Speed", xaxis_title="Time (s)", yaxis_title="Speed", height=320
        )
        st.plotly_chart(fig_speed, use_container_width=True)

    with col_score:
        fig_score = go.Figure(
            go.Scatter(x=trace_df["time"], y=trace_df["score"], mode="lines")
        )
        fig_score.update_layout(
            title="Score", xaxis_title="Time (s)", yaxis_title="Score", height=320
        )
        st.plotly_chart(fig_score, use_container_width=True)

    fig_lane = go.Figure(
        go.Scatter(x=trace_df["time"], y=trace_df["player_x"], mode="lines")
    )
    fig_lane.update_layout(
        title="Player x position",
        xaxis_title="Time (s)",
        yaxis_title="x (px)",
        height=300,
    )
    st.plotly_chart(fig_lane, use_container_width=True)

    # ── Footer ───────────────────────────────────────────────────────────
    st.markdown("---")
    st.caption(
        "Neon Racer Bot Analytics. "
        "Core engine is not modified by this dashboard."
    )


if __name__ == "__main__":
    main()
