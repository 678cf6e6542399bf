"""
Command-line interface for the Monte Carlo engine.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional
from montecarlo.calibration import (
    GbmCalibrationFactory,
    SimulatedLikelihood,
    estimate_gbm_parameters,
)
from montecarlo.config import SimulationConfig
from montecarlo.data import fetch_closes, load_closes
from montecarlo.polynomials import PolynomialTable
from montecarlo.process import GeometricBrownianMotion, OrnsteinUhlenbeck
from montecarlo.simulation import GaussianDeviates, PathEnsemble, PathGenerator


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list of str, optional
        Arguments to parse; defaults to ``sys.argv[1:]``

    Returns
    -------
    argparse.Namespace
        Parsed command-line arguments
    """
    parser = argparse.ArgumentParser(
        prog="montecarlo",
        description="Monte Carlo simulation of single-factor stochastic processes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s simulate --x0 100 --mu 0.08 --sigma 0.2 --num-paths 1000
  %(prog)s simulate --process ou --x0 0.5 --theta 2 --mean 0 --sigma 0.3
  %(prog)s table --capacity 500 --degree 7
  %(prog)s calibrate MSFT --history-period 100d --num-paths 200
        """,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    simulate = subparsers.add_parser("simulate", help="Simulate an ensemble of paths")
    simulate.add_argument(
        "--process",
        choices=("gbm", "ou"),
        default="gbm",
        help="Process to simulate (default: gbm)",
    )
    simulate.add_argument("--x0", type=float, default=100.0, help="Initial value (default: 100)")
    simulate.add_argument("--mu", type=float, default=0.1, help="GBM drift (default: 0.1)")
    simulate.add_argument("--sigma", type=float, default=0.2, help="Volatility (default: 0.2)")
    simulate.add_argument("--theta", type=float, default=1.0, help="OU reversion speed (default: 1.0)")
    simulate.add_argument("--mean", type=float, default=0.0, help="OU long-run level (default: 0.0)")
    simulate.add_argument(
        "--top",
        type=int,
        default=10,
        help="Number of most populated histogram buckets to print (default: 10)",
    )
    _add_run_arguments(simulate)
    simulate.add_argument(
        "--output",
        type=str,
        default=None,
        help="Path to save the plot (optional)",
    )
    simulate.add_argument(
        "--no-plot",
        action="store_true",
        help="Do not display the plot (useful for headless execution)",
    )

    table = subparsers.add_parser("table", help="Inspect the primitive polynomial table")
    table.add_argument(
        "--capacity",
        type=int,
        default=None,
        help="Number of polynomials needed (default: 21200)",
    )
    table.add_argument(
        "--degree",
        type=int,
        default=None,
        help="List the encoded polynomials of this degree",
    )

    calibrate = subparsers.add_parser(
        "calibrate",
        help="Evaluate the simulated likelihood of GBM parameters on observed prices",
    )
    calibrate.add_argument(
        "ticker",
        nargs="?",
        default=None,
        help="Ticker symbol to fetch from Yahoo Finance (e.g., MSFT)",
    )
    calibrate.add_argument("--csv", type=str, default=None, help="CSV file with observed prices")
    calibrate.add_argument("--column", type=str, default="Close", help="CSV price column (default: Close)")
    calibrate.add_argument(
        "--history-period",
        type=str,
        default="100d",
        help="Time period to look back for historical data (default: 100d)",
    )
    calibrate.add_argument(
        "--bandwidth",
        type=float,
        default=None,
        help="Density window half-width (default: 1%% of the last price)",
    )
    calibrate.add_argument(
        "--periods-per-year",
        type=int,
        default=252,
        help="Observations per year; one period separates consecutive prices (default: 252)",
    )
    _add_run_arguments(calibrate, time_steps=2, num_paths=200, with_duration=False)

    return parser.parse_args(argv)


def _add_run_arguments(
    parser: argparse.ArgumentParser,
    time_steps: int = 252,
    num_paths: int = 500,
    with_duration: bool = True,
) -> None:
    if with_duration:
        parser.add_argument(
            "--duration",
            type=float,
            default=1.0,
            help="Duration of each path in years (default: 1.0)",
        )
    parser.add_argument(
        "--time-steps",
        type=int,
        default=time_steps,
        help=f"Samples per path (default: {time_steps})",
    )
    parser.add_argument(
        "--num-paths",
        type=int,
        default=num_paths,
        help=f"Number of Monte Carlo paths (default: {num_paths})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=20,
        help="Random seed for the deviate source (default: 20)",
    )


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command-line arguments

    Raises
    ------
    ValueError
        If arguments are invalid
    """
    if args.command == "simulate":
        SimulationConfig(
            duration=args.duration,
            time_steps=args.time_steps,
            num_paths=args.num_paths,
            seed=args.seed,
        )
        if args.top < 0:
            raise ValueError("top must be non-negative")
        if args.output:
            output_path = Path(args.output)
            if not output_path.parent.exists():
                raise ValueError(
                    f"Output directory does not exist: {output_path.parent}"
                )

    if args.command == "calibrate":
        if (args.ticker is None) == (args.csv is None):
            raise ValueError("Give either a ticker or --csv")
        if args.time_steps < 2:
            raise ValueError("calibrate needs at least 2 time steps")
        if args.periods_per_year <= 0:
            raise ValueError("periods-per-year must be positive")
        if args.num_paths < 1:
            raise ValueError("num-paths must be at least 1")
        if args.bandwidth is not None and args.bandwidth <= 0:
            raise ValueError("bandwidth must be positive")


def run_simulate(args: argparse.Namespace) -> int:
    """Simulate an ensemble and print terminal statistics."""
    config = SimulationConfig(
        duration=args.duration,
        time_steps=args.time_steps,
        num_paths=args.num_paths,
        seed=args.seed,
    )
    if args.process == "gbm":
        process = GeometricBrownianMotion(args.x0, args.mu, args.sigma)
    else:
        process = OrnsteinUhlenbeck(args.x0, args.theta, args.mean, args.sigma)

    generator = PathGenerator(
        process,
        config.time_steps,
        config.duration,
        GaussianDeviates(config.seed),
    )
    ensemble = PathEnsemble.simulate(generator, config.num_paths)
    stats = ensemble.get_statistics_at_step(-1)
    accumulator = ensemble.accumulate(precision=config.precision)

    print("=" * 70)
    print(f"Process: {process}")
    print(f"Paths: {config.num_paths} | Samples: {config.time_steps} | dt: {config.dt:.6g}")
    print("=" * 70)
    print(
        f"Terminal mean: {stats['mean']:.4f} | std: {stats['std']:.4f} | "
        f"median: {stats['median']:.4f}"
    )
    print(f"Terminal range: [{stats['min']:.4f}, {stats['max']:.4f}]")

    if args.top:
        counts = accumulator.to_series().sort_values(ascending=False, kind="stable")
        print(f"\nMost populated buckets ({len(accumulator)} distinct):")
        for bucket, count in counts.head(args.top).items():
            print(f"  {bucket:>14.{config.precision}f}  {count}")

    if args.output or not args.no_plot:
        from montecarlo.visualization import plot_ensemble

        plot_ensemble(ensemble, output_path=args.output, show_plot=not args.no_plot)
        if args.output:
            print(f"Plot saved to: {args.output}")

    return 0


def run_table(args: argparse.Namespace) -> int:
    """Print the tier and per-degree contents of a polynomial table."""
    table = PolynomialTable() if args.capacity is None else PolynomialTable(args.capacity)

    print(f"Tier: {table.n_max_degree} | Capacity: {table.get_max_capacity()}")
    for degree in table.degrees:
        print(f"  degree {degree:>2}: {len(table.polynomials(degree)) - 1} polynomials")

    if args.degree is not None:
        encoded = table.polynomials(args.degree)[:-1]
        print(f"\nDegree {args.degree}:")
        print(" ".join(str(value) for value in encoded))

    return 0


def run_calibrate(args: argparse.Namespace) -> int:
    """Report moment estimates and simulated likelihoods for observed prices."""
    if args.csv:
        closes = load_closes(args.csv, column=args.column)
        source = args.csv
    else:
        closes = fetch_closes(args.ticker, args.history_period)
        source = args.ticker

    mu, sigma = estimate_gbm_parameters(closes, periods_per_year=args.periods_per_year)
    # the last sample of a path must land one observation period later
    duration = args.time_steps / ((args.time_steps - 1) * args.periods_per_year)
    factory = GbmCalibrationFactory(duration, args.time_steps)
    bandwidth = args.bandwidth or 0.01 * float(closes.iloc[-1])
    objective = SimulatedLikelihood(
        factory,
        closes.to_numpy(),
        num_paths=args.num_paths,
        seed=args.seed,
        bandwidth=bandwidth,
    )

    start = factory.get_starting_point()
    print(f"Observations: {len(closes)} prices from {source}")
    print(f"Moment estimates: mu={mu:.4f}, sigma={sigma:.4f}")
    print(f"Transition horizon: {factory.horizon:.6g} years | bandwidth: {bandwidth:.4g}")
    print(f"Negative log-likelihood at start point {start.tolist()}: {objective(start):.4f}")
    print(f"Negative log-likelihood at moment estimates: {objective([mu, sigma]):.4f}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Returns
    -------
    int
        Exit code (0 for success, 1 for error)
    """
    try:
        args = parse_args(argv)
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )
        validate_args(args)

        if args.command == "simulate":
            return run_simulate(args)
        if args.command == "table":
            return run_table(args)
        return run_calibrate(args)

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
