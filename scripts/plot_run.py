# scripts/plot_run.py

import argparse
from pathlib import Path
import pandas as pd
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

SCENARIO_COLORS = {
    "orderly": "#2E86AB",
    "disorderly": "#F18F01",
    "hothouse": "#C73E1D",
}


def plot_fan_chart(trajectories: pd.DataFrame, bands: pd.DataFrame, out_path: Path, title: str) -> Path:
    """Deterministic cost per scenario with p5-p95 and p25-p75 Monte Carlo envelopes."""
    required = {"scenario", "year", "total_cost"}
    missing = required - set(trajectories.columns)
    if missing:
        raise ValueError(f"Missing columns: {missing}")

    fig, ax = plt.subplots(figsize=(9, 5))

    for scenario, traj in trajectories.groupby("scenario", sort=False):
        color = SCENARIO_COLORS.get(scenario, "gray")
        band = bands[bands["scenario"] == scenario]
        if len(band) > 0:
            ax.fill_between(band["year"], band["p5"] / 1e6, band["p95"] / 1e6, color=color, alpha=0.12)
            ax.fill_between(band["year"], band["p25"] / 1e6, band["p75"] / 1e6, color=color, alpha=0.25)
        ax.plot(traj["year"], traj["total_cost"] / 1e6, color=color, linewidth=2, label=scenario.title())

    ax.set_xlabel("Year")
    ax.set_ylabel("Portfolio carbon cost (USD m)")
    ax.legend()
    ax.set_title(title)
    fig.tight_layout()

    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=200)
    plt.close(fig)
    return out_path


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--run",
        required=True,
        help="Path to run directory containing trajectories.csv and bands.csv"
    )
    parser.add_argument(
        "--out",
        default=None,
        help="Output PNG path (default: outputs/<run_name>.png)"
    )
    args = parser.parse_args()

    run_dir = Path(args.run)
    traj_path = run_dir / "trajectories.csv"
    bands_path = run_dir / "bands.csv"

    if not traj_path.exists():
        raise FileNotFoundError(f"Missing trajectories.csv in {run_dir}")

    trajectories = pd.read_csv(traj_path)
    bands = pd.read_csv(bands_path) if bands_path.exists() else pd.DataFrame(columns=["scenario"])

    out_path = (
        Path(args.out)
        if args.out
        else Path("outputs") / f"{run_dir.name}.png"
    )
    plot_fan_chart(trajectories, bands, out_path, run_dir.name.replace("_", " "))

    print(f"Saved figure -> {out_path}")


if __name__ == "__main__":
    main()
