"""Main entry point for the Swap Match Engine command line."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Optional, Tuple

from swapmatch.config.environment import EnvironmentConfig
from swapmatch.config.exceptions import ConfigurationError
from swapmatch.config.loader import load_config
from swapmatch.config.models import AppConfig
from swapmatch.listings import SnapshotError, build_listing_pool, load_snapshot
from swapmatch.logging import get_logger
from swapmatch.logging.config import configure_logging
from swapmatch.matching import MatchingEngine, build_result_payload, format_match_summary

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load and prepare runtime configuration.

    Args:
        config_path: Path to configuration file, or None to search defaults
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with the effective log level resolved

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    # Apply log level priority: CLI > Environment > Config
    if log_level_override:
        env_config.log_level = log_level_override
    elif env_config.log_level:
        pass
    else:
        env_config.log_level = app_config.logging.level

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Swap Match Engine - find direct and chain swap matches for a user"
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        required=True,
        help="Path to a JSON or YAML listing snapshot",
    )
    parser.add_argument(
        "--user-id",
        required=True,
        help="Id of the user requesting matches",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--output",
        default="text",
        choices=["text", "json"],
        help="Output format (default: text)",
    )
    return parser


def main(argv=None) -> int:
    """
    Main entry point for the Swap Match Engine.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for configuration or snapshot errors).
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)

    try:
        # Step 1: Load configuration before logging so the format is known
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        # Step 2: Configure logging
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        logger.info(
            "Configuration loaded",
            extra={
                "event": "config.loaded",
                "config_path": str(args.config) if args.config else None,
                "log_level": env_config.log_level,
                "log_format": app_config.logging.format,
                "similarity_threshold": app_config.matching.similarity_threshold,
                "chain_enabled": app_config.matching.chain.enabled,
            },
        )

        # Step 3: Load snapshot and assemble matcher inputs
        snapshot = load_snapshot(args.snapshot)
        pool = build_listing_pool(snapshot, args.user_id)

        if not pool.requester_has_postings:
            logger.warning(
                f"User {args.user_id} has no offers or needs; nothing to match",
                extra={"event": "cli.requester.empty", "requester_id": args.user_id},
            )

        # Step 4: Run the engine
        engine = MatchingEngine(app_config.matching)
        result = engine.run(
            pool.user_offers,
            pool.user_needs,
            pool.all_offers,
            pool.all_needs,
            requester_id=args.user_id,
        )

        # Step 5: Render
        if args.output == "json":
            print(json.dumps(build_result_payload(result), indent=2))
        else:
            print(format_match_summary(result))

        logger.info(
            "Match run finished",
            extra={
                "event": "cli.completed",
                "direct_count": len(result.direct_matches),
                "chain_count": len(result.chain_matches),
                "duration_seconds": round(time.time() - start_time, 3),
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except SnapshotError as e:
        print(f"Snapshot Error: {e}", file=sys.stderr)
        logger.error(
            f"Snapshot error: {e}",
            extra={"event": "listings.snapshot.error", "path": e.path},
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
