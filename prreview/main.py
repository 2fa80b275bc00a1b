"""
prreview entry point: webhook server that reviews pull requests.

Listens for GitHub pull_request and issue_comment webhooks on the
configured repository. On PR opened (or a comment starting with the
trigger phrase) posts a new review comment; on new commits updates the
existing one.
"""

import argparse
import logging
import sys
from pathlib import Path

from prreview.config import AppConfig, load_config
from prreview.logging import setup_logging
from prreview.webhook.server import run_webhook_server


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="prreview",
        description="prreview - GitHub pull request review bot (webhook server)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file (optional; env is used when missing)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv)


def run(config: AppConfig) -> None:
    """Set up logging and run the webhook server."""
    setup_logging(config.logging)
    log = logging.getLogger("prreview.main")
    log.debug("Running github-pr-review")
    if not config.github_token_resolved:
        log.warning("No GitHub token configured; comment API calls will be unauthenticated")
    log.info(
        "prreview started | repo=%s | model=%s | trigger=%r",
        config.bot.repository,
        config.llm.model_name,
        config.bot.trigger_phrase,
    )
    run_webhook_server(config)


def main(argv: list[str] | None = None) -> int:
    """Entry point for prreview."""
    args = parse_args(argv)
    config = load_config(args.config)

    if args.check:
        print("Config OK:", config.bot.repository, config.llm.model_name)
        return 0

    try:
        run(config)
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        logging.getLogger("prreview.main").exception("Fatal error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
