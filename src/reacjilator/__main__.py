"""Entry point for running the reaction translation bridge.

This module handles:
- Configuration loading
- Logging setup with secret sanitization
- Serving the Slack Events API endpoint with uvicorn
"""

import argparse
import sys
from pathlib import Path

import structlog
import uvicorn
from pydantic import ValidationError

from reacjilator._version import __version__

log = structlog.get_logger()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="reacjilator",
        description="Translate Slack messages when someone reacts with a flag emoji",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: read from environment)",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate configuration and exit",
    )

    parser.add_argument(
        "--format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    parser.add_argument("--host", default=None, help="Override server.host")
    parser.add_argument("--port", type=int, default=None, help="Override server.port")

    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """Load configuration and serve the webhook endpoint.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    from reacjilator.config.loader import load_config
    from reacjilator.utils.logging import configure_logging
    from reacjilator.utils.security import mask_config_value

    log.info("starting_reacjilator", version=__version__, config_path=str(args.config))

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        log.error("configuration_file_not_found", path=str(args.config), error=str(e))
        return 1
    except (ValueError, ValidationError) as e:
        log.error("configuration_invalid", error=str(e))
        return 1

    # Reconfigure logging from config file settings, CLI --debug wins
    configure_logging(
        level="DEBUG" if args.debug else config.logging.level,
        log_format=config.logging.format,
        file_path=config.logging.file.path if config.logging.file.enabled else None,
        file_enabled=config.logging.file.enabled,
    )
    log.info(
        "configuration_loaded",
        slack_token=mask_config_value("token", config.slack.bot_token),
        translate_parent=config.translate.parent,
        dispatch_mode=config.dispatch.mode,
        max_jitter_ms=config.dispatch.max_jitter_ms,
    )

    if args.dry_run:
        log.info("dry_run_mode_config_valid")
        return 0

    from reacjilator.server import create_app

    try:
        app = create_app(config)
    except Exception as e:
        log.exception("app_creation_failed", error=str(e))
        return 1

    uvicorn.run(
        app,
        host=args.host or config.server.host,
        port=args.port or config.server.port,
        log_config=None,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    from reacjilator.utils.logging import configure_logging

    configure_logging(level="DEBUG" if args.debug else "INFO", log_format=args.format)

    try:
        return run(args)
    except KeyboardInterrupt:
        log.info("shutting_down_gracefully")
        return 0


if __name__ == "__main__":
    sys.exit(main())
