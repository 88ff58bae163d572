"""
Run results loader for the Colony Battle Simulator.

Reads a finished run directory back into pandas for analysis.
"""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd


def load_metrics(run_dir: str | Path) -> pd.DataFrame:
    """
    Load a run's per-tick metrics.

    Args:
        run_dir: Run directory created by RunManager.

    Returns:
        DataFrame with one row per tick (empty if the run logged no ticks).

    Raises:
        FileNotFoundError: If the run has no metrics.csv.
    """
    path = Path(run_dir) / "metrics.csv"
    if not path.exists():
        raise FileNotFoundError(f"Metrics file not found: {path}")
    try:
        return pd.read_csv(path)
    except pd.errors.EmptyDataError:
        return pd.DataFrame()


def summarize_run(run_dir: str | Path) -> dict:
    """
    Headline numbers of a run.

    Returns:
        Dict with ticks, total battles, conquests, starvations, food
        consumed, whether the simulation ended, and the saved summary.json
        contents under "summary" (None if absent).
    """
    run_dir = Path(run_dir)
    df = load_metrics(run_dir)

    summary_path = run_dir / "summary.json"
    saved = None
    if summary_path.exists():
        with open(summary_path, "r", encoding="utf-8") as f:
            saved = json.load(f)

    if df.empty:
        return {
            "ticks": 0,
            "battles": 0,
            "conquests": 0,
            "starvations": 0,
            "food_consumed": 0,
            "ended": False,
            "summary": saved,
        }

    return {
        "ticks": int(df["tick"].max()),
        "battles": int(df["battles"].sum()),
        "conquests": int(df["conquests"].sum()),
        "starvations": int(df["starvations"].sum()),
        "food_consumed": int(df["food_consumed"].sum()),
        "ended": bool(df["simulation_ended"].astype(str).str.lower().eq("true").any()),
        "summary": saved,
    }
