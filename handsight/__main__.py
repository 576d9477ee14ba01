"""Command line entry point launching the Handsight window."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import AppConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Handwriting trait detector")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="YAML or JSON deployment file providing api_base_url.",
    )
    parser.add_argument(
        "--base-url",
        help="Base URL of the analysis service (overrides HANDSIGHT_API_URL).",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level, e.g. DEBUG or INFO.",
    )

    args = parser.parse_args(argv)

    try:
        config = AppConfig.resolve(
            path=args.config,
            base_url=args.base_url,
            log_level=args.log_level,
        )
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    configure_logging(config.log_level)
    logging.getLogger(__name__).info("Using analysis service at %s", config.api_base_url)

    from .gui import run_app

    return run_app(config)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
