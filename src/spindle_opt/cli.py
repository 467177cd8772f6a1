"""Command-line entry point: ``spindle-opt`` / ``python -m spindle_opt``."""

import argparse
import logging
import sys

from spindle_opt.exceptions import SpindleOptError
from spindle_opt.log import configure_logging
from spindle_opt.optimizer import OptimizerConfig, SpindleOptimizer
from spindle_opt.report import format_pareto_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spindle-opt",
        description="Search for Pareto-optimal grinding spindle designs (vibration, bearing life, temperature rise).",
    )
    parser.add_argument("--duration", type=float, required=True, help="Simulated duration in seconds (> 0).")
    parser.add_argument("--load-factor", type=float, default=1.0, help="Load scaling factor in [0.5, 2.0].")
    parser.add_argument("--population-size", type=int, default=50, help="Population size (>= 10).")
    parser.add_argument("--generations", type=int, default=20, help="Number of generations (>= 1).")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible run.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress for every generation.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = OptimizerConfig(
            duration=args.duration,
            load_factor=args.load_factor,
            population_size=args.population_size,
            generations=args.generations,
        )
    except SpindleOptError as e:
        parser.error(str(e))

    configure_logging(logging.INFO if args.verbose else logging.WARNING)

    optimizer = SpindleOptimizer(seed=args.seed)
    try:
        result = optimizer.run(config)
    except SpindleOptError as e:
        print(f"Error: Optimization failed - {e}", file=sys.stderr)
        return 1

    sys.stdout.write(format_pareto_report(result, optimizer.space))
    return 0
