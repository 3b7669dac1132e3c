"""
Command-line interface for aptvanity.

Usage:
    python -m aptvanity --prefix cafe
    python -m aptvanity --suffix beef --threads 8
    python -m aptvanity --prefix 0 --count 5 --multisig
"""

import argparse
import logging
import sys

from aptvanity import __version__
from aptvanity.generator import SearchStats, VanityGenerator
from aptvanity.matcher import SearchConfig, default_thread_count
from aptvanity.worker import ResultEvent

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aptvanity",
        description="Aptos Vanity Address Generator",
        epilog=(
            "Examples:\n"
            "  aptvanity --prefix cafe\n"
            "  aptvanity --suffix beef --threads 8\n"
            "  aptvanity --prefix 0 --count 5 --multisig\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version", action="version", version=f"aptvanity {__version__}"
    )
    parser.add_argument(
        "--prefix", "-p", metavar="HEX",
        help="Address prefix to match (no leading 0x)",
    )
    parser.add_argument(
        "--suffix", "-s", metavar="HEX",
        help="Address suffix to match",
    )
    parser.add_argument(
        "--multisig", "-m", action="store_true",
        help="Search for multisig account addresses",
    )
    parser.add_argument(
        "--count", "-c", type=positive_int, default=1, metavar="N",
        help="Number of addresses to generate (default: 1)",
    )
    parser.add_argument(
        "--threads", "-t", type=positive_int, default=default_thread_count(), metavar="N",
        help="Number of worker processes (default: number of CPUs)",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Show the time estimate without searching",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging",
    )

    return parser


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def progress_callback(stats: SearchStats) -> None:
    sys.stdout.write(f"\rGenerating... {int(stats.rate):,} addresses per second")
    sys.stdout.flush()


def result_callback(result: ResultEvent, stats: SearchStats) -> None:
    sys.stdout.write("\n")  # Leave the progress line
    if result.multisig_address:
        print(f"Multisig account address: 0x{result.multisig_address}")
    print(f"Standard account address: 0x{result.address}")
    print(f"Private key:              0x{result.private_key}\n")
    sys.stdout.flush()


def print_summary(stats: SearchStats) -> None:
    print(f"Final generation rate: {int(stats.rate):,} addresses/second")
    print(f"Elapsed time: {stats.elapsed:.3f}s")
    print(f"Total addresses generated: {stats.total_generated:,}")


def main(argv: list[str] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = SearchConfig.create(
            prefix=args.prefix,
            suffix=args.suffix,
            multisig=args.multisig,
            target_count=args.count,
            thread_count=args.threads,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    gen = VanityGenerator(config)

    print("Benchmarking system performance...")
    try:
        estimate = gen.get_estimate()
    except (ValueError, RuntimeError) as e:
        print(f"Error: benchmark failed: {e}", file=sys.stderr)
        return 1
    print(f"Estimated time: {estimate}")

    if args.dry_run:
        return 0

    print("Generating addresses...\n")
    sys.stdout.flush()

    gen.on_progress = progress_callback
    gen.on_result = result_callback

    try:
        results = gen.run_blocking()
    except (OSError, RuntimeError) as e:
        logger.debug("Search failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if len(results) < config.target_count:
        print(
            f"\nSearch interrupted after {len(results)} of {config.target_count} results.",
            file=sys.stderr,
        )
        return 1

    print_summary(gen.stats)
    return 0
