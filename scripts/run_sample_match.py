#!/usr/bin/env python3
"""Sample match harness for end-to-end validation.

This script provides a manual way to validate the Swap Match Engine without
running pytest. It loads a listing snapshot, runs the matcher for one user and
prints the matches plus a summary table.

Usage:
    # Run against the bundled fixture snapshot
    python scripts/run_sample_match.py

    # Another user, chain search switched on
    python scripts/run_sample_match.py --user-id bob --enable-chains

    # Custom snapshot and configuration
    python scripts/run_sample_match.py --snapshot listings.yaml --config config.yaml
"""

import argparse
import sys
import time
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from swapmatch.config.exceptions import ConfigurationError
from swapmatch.config.loader import load_config
from swapmatch.listings import SnapshotError, build_listing_pool, load_snapshot
from swapmatch.logging.config import configure_logging
from swapmatch.matching import MatchingEngine, format_match_summary


def print_header(title: str):
    """Print a formatted section header."""
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def print_summary_table(pool, result, duration_seconds: float):
    """Print a formatted summary table of the run."""
    print_header("Run Summary")

    metrics = [
        ("Requester Offers", len(pool.user_offers)),
        ("Requester Needs", len(pool.user_needs)),
        ("Pool Offers", len(pool.all_offers)),
        ("Pool Needs", len(pool.all_needs)),
        ("Skipped Postings", pool.skipped_count),
        ("Direct Matches", len(result.direct_matches)),
        ("Chain Matches", len(result.chain_matches)),
        ("Duration (seconds)", f"{duration_seconds:.3f}"),
    ]

    max_label_width = max(len(label) for label, _ in metrics)

    print("┌" + "─" * (max_label_width + 2) + "┬" + "─" * 22 + "┐")
    print(f"│ {'Metric':<{max_label_width}} │ {'Value':<20} │")
    print("├" + "─" * (max_label_width + 2) + "┼" + "─" * 22 + "┤")

    for label, value in metrics:
        print(f"│ {label:<{max_label_width}} │ {str(value):<20} │")

    print("└" + "─" * (max_label_width + 2) + "┴" + "─" * 22 + "┘")


def main():
    """Main entry point for sample match harness."""
    parser = argparse.ArgumentParser(
        description="Run a sample match for end-to-end validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=Path("tests/fixtures/sample_snapshot.json"),
        help="Path to listing snapshot (default: tests/fixtures/sample_snapshot.json)",
    )
    parser.add_argument(
        "--user-id",
        default="alice",
        help="Requesting user id (default: alice)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: built-in defaults)",
    )
    parser.add_argument(
        "--enable-chains",
        action="store_true",
        help="Turn on chain search regardless of configuration",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: INFO)",
    )

    args = parser.parse_args()

    load_dotenv()

    print_header("Swap Match Engine - Sample Match Harness")
    print(f"Snapshot: {args.snapshot}")
    print(f"Requester: {args.user_id}")
    print(f"Log level: {args.log_level}")

    try:
        print("\n📋 Loading configuration...")
        app_config, _ = load_config(args.config)

        configure_logging(
            level=args.log_level,
            format_type=app_config.logging.format,
            environment="validation",
        )

        matching_config = app_config.matching
        if args.enable_chains:
            matching_config = matching_config.model_copy(
                update={"chain": matching_config.chain.model_copy(update={"enabled": True})}
            )
        print(f"✓ Threshold {matching_config.similarity_threshold}, "
              f"chains {'on' if matching_config.chain.enabled else 'off'}")

        print("\n📦 Loading snapshot...")
        pool = build_listing_pool(load_snapshot(args.snapshot), args.user_id)
        print(f"✓ {len(pool.all_offers)} offers and {len(pool.all_needs)} needs in the pool")

        print("\n🚀 Running matcher...")
        start = time.perf_counter()
        result = MatchingEngine(matching_config).run(
            pool.user_offers,
            pool.user_needs,
            pool.all_offers,
            pool.all_needs,
            requester_id=args.user_id,
        )
        duration = time.perf_counter() - start

        print_header("Matches")
        print(format_match_summary(result))

        print_summary_table(pool, result, duration)
        return 0

    except (ConfigurationError, SnapshotError) as e:
        print(f"\n❌ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
