#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
from pathlib import Path
from datetime import datetime

from src.config import Config
from src.ingest import load_companies
from src.transition.engine import run_engine
from src.transition.exposure import fixed_price_exposure
from src.transition.schema import load_run_config


def main() -> int:
    parser = argparse.ArgumentParser(description="Run carbon transition scenarios for a company cohort.")
    parser.add_argument("--config", required=True, help="Path to run config YAML.")
    parser.add_argument("--companies", default=None,
                       help="Company exposure table (overrides companies_path in the config)")
    parser.add_argument("--out-dir", dest="out_dir", type=str, default=None,
                       help="Output directory (if not provided, uses runs/<name>/<timestamp>/)")
    args = parser.parse_args()

    cfg = load_run_config(args.config)
    companies_path = args.companies or cfg.companies_path
    if companies_path is None:
        parser.error("no company table: pass --companies or set companies_path in the config")

    companies = load_companies(companies_path)
    result = run_engine(companies, cfg)
    metrics = result.summary()

    # Determine output directory
    if args.out_dir:
        out_dir = Path(args.out_dir)
    else:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        out_dir = Path(cfg.outputs.out_dir) / cfg.name / ts
    out_dir.mkdir(parents=True, exist_ok=True)

    result.trajectories_frame().to_csv(out_dir / "trajectories.csv", index=False)
    result.bands_frame().to_csv(out_dir / "bands.csv", index=False)
    fixed_price_exposure(companies).to_csv(out_dir / "exposure.csv", index=False)
    if cfg.outputs.save_paths:
        result.paths_frame().to_csv(out_dir / "mc_paths.csv", index=False)
    with open(out_dir / "var_metrics.json", "w", encoding="utf-8") as f:
        json.dump(metrics, f, indent=2, sort_keys=True)

    # Print summary
    print(f"Run: {cfg.name} ({len(companies)} companies)")
    print(f"Horizon: {cfg.horizon_year}  paths={cfg.monte_carlo.n_paths} "
          f"seed={cfg.monte_carlo.seed} alpha={cfg.monte_carlo.alpha}")
    for kind, m in result.var_metrics.items():
        print(f"{kind.value}: mean={m.mean:,.0f} VaR={m.var:,.0f} CVaR={m.cvar:,.0f}")
    print(f"Outputs: {out_dir}")
    return 0


if __name__ == "__main__":
    Config.ensure_directories()
    raise SystemExit(main())
