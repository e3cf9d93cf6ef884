#!/usr/bin/env python3
from __future__ import annotations

import json
from pathlib import Path
from datetime import datetime
from typing import List, Optional

import pandas as pd

from src.ingest import load_companies
from src.transition.engine import run_engine
from src.transition.schema import load_run_config


def find_configs(scenarios_dir: Path) -> List[Path]:
    """Find all YAML run configs in the scenarios directory."""
    if not scenarios_dir.exists():
        raise FileNotFoundError(f"Scenarios directory not found: {scenarios_dir}")
    return sorted(scenarios_dir.glob("*.yaml"))


def run_suite(
    scenarios_dir: Path = Path("scenarios"),
    output_base: Path = Path("runs"),
    companies_path: Optional[str] = None,
) -> pd.DataFrame:
    """
    Run every config in the scenarios directory and return a summary DataFrame.

    Args:
        scenarios_dir: Directory containing run config YAML files
        output_base: Base directory for outputs
        companies_path: Company table used when a config has no companies_path

    Returns:
        DataFrame with one row per config and all summary metrics as columns
    """
    config_files = find_configs(scenarios_dir)

    if not config_files:
        raise ValueError(f"No run configs found in {scenarios_dir}")

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    suite_dir = output_base / f"suite_{timestamp}"
    suite_dir.mkdir(parents=True, exist_ok=True)

    summary_rows = []

    for config_path in config_files:
        try:
            cfg = load_run_config(str(config_path))
            table = cfg.companies_path or companies_path
            if table is None:
                raise ValueError("config has no companies_path and no default table was given")
            companies = load_companies(table)
            result = run_engine(companies, cfg)
            metrics = result.summary()

            run_dir = suite_dir / cfg.name
            run_dir.mkdir(parents=True, exist_ok=True)
            result.trajectories_frame().to_csv(run_dir / "trajectories.csv", index=False)
            result.bands_frame().to_csv(run_dir / "bands.csv", index=False)
            with open(run_dir / "var_metrics.json", "w", encoding="utf-8") as f:
                json.dump(metrics, f, indent=2, sort_keys=True)

            summary_rows.append({
                "run": cfg.name,
                "config_file": config_path.name,
                "horizon_year": cfg.horizon_year,
                **metrics
            })

        except (OSError, ValueError) as e:
            # Record the failure and continue with the other configs
            print(f"Error running {config_path.name}: {e}")
            summary_rows.append({
                "run": config_path.stem,
                "config_file": config_path.name,
                "error": str(e)
            })

    summary_df = pd.DataFrame(summary_rows)

    summary_path = suite_dir / "summary.csv"
    summary_df.to_csv(summary_path, index=False)

    print(f"Suite run complete: {len(summary_df)} runs")
    print(f"Summary: {summary_path}")
    print(f"Outputs: {suite_dir}")

    return summary_df


def main() -> int:
    """Main entrypoint for batch runner."""
    import argparse

    parser = argparse.ArgumentParser(description="Run all configs in scenarios/ directory")
    parser.add_argument("--scenarios-dir", type=str, default="scenarios",
                       help="Directory containing run config YAML files")
    parser.add_argument("--output-dir", type=str, default="runs",
                       help="Base output directory")
    parser.add_argument("--companies", type=str, default=None,
                       help="Default company exposure table")
    args = parser.parse_args()

    summary_df = run_suite(Path(args.scenarios_dir), Path(args.output_dir), args.companies)

    print("\n=== Summary ===")
    print(summary_df.to_string(index=False))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
