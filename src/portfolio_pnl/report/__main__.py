"""Allow running the report as: python -m portfolio_pnl.report [--config path]."""

import argparse

from portfolio_pnl.report.runner import main

parser = argparse.ArgumentParser(description="Portfolio profit/loss report")
parser.add_argument("--config", default=None, help="Path to config.yaml")
parser.add_argument(
    "--synthetic",
    action="store_true",
    help="Skip the live quote provider and use placeholder prices",
)
parser.add_argument("--full-position", type=float, default=None, help="Override full-position capital")
parser.add_argument("--closed", action="store_true", help="Report realised closed trades instead")
args = parser.parse_args()
main(
    config_path=args.config,
    force_synthetic=args.synthetic,
    full_position=args.full_position,
    closed=args.closed,
)
