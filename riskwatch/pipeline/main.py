"""Command-line entrypoint for one assessment run."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from pydantic import ValidationError

from .core.config import Settings, get_settings
from .core.logging import setup_logging
from .services.assessment_service import AssessmentService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="riskwatch-assess",
        description="Fetch patients, classify risk and submit the assessment.",
    )
    parser.add_argument("--verbose", action="store_true", help="echo request URLs, raw bodies and retries")
    parser.add_argument("--dry-run", action="store_true", help="classify but do not submit")
    parser.add_argument("--env-file", default=None, help="read settings from this .env file")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    cfg = Settings(_env_file=args.env_file) if args.env_file else get_settings()
    overrides = {}
    if args.verbose:
        overrides["verbose"] = True
    if args.dry_run:
        overrides["dry_run"] = True
    return cfg.model_copy(update=overrides) if overrides else cfg


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = load_settings(args)
    except ValidationError as exc:
        print(f"Invalid configuration:\n{exc}", file=sys.stderr)
        return 2

    setup_logging(verbose=cfg.verbose, secret=cfg.api_key)
    report = asyncio.run(AssessmentService(cfg).run())
    print(json.dumps(report.model_dump(), indent=2, ensure_ascii=False))
    return 0 if report.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
