"""
Application entry point — wires settings, logging and the sign-up railway.

Composition root: loads SignupSettings, configures structlog, builds the
User from the command line and runs the pipeline once.

    signup --name john --email john@doe.com --age 18 [--home ~/john]

Exit codes: 0 on Success, 1 on a rejected sign-up, 2 on bad configuration.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

import structlog
from pydantic import ValidationError
from railway.failure import Fault
from railway.result import match

from signup.config import SignupSettings
from signup.domain.models import User
from signup.pipeline import register_user

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_CONFIG_ERROR = 2


def configure_structlog(log_level: str = "INFO") -> None:
    """Configure structlog for human-readable console output at the given level."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="signup",
        description="Validate a user sign-up through the railway pipeline.",
    )
    parser.add_argument("--name", required=True, help="User name")
    parser.add_argument("--email", required=True, help="User e-mail address")
    parser.add_argument("--age", required=True, type=int, help="User age in years")
    parser.add_argument("--home", default=None, help="Home directory that must exist")
    return parser


def _describe_failure(error: object) -> dict[str, str]:
    if isinstance(error, Fault):
        return {"kind": error.code, "reason": error.message}
    return {"kind": type(error).__name__, "reason": str(error)}


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the sign-up railway, and report the outcome."""
    args = build_parser().parse_args(argv)

    try:
        settings = SignupSettings()
    except ValidationError as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        return EXIT_CONFIG_ERROR

    configure_structlog(settings.log_level)
    log = structlog.get_logger()
    log.info("app.starting", minimum_age=settings.minimum_age, log_level=settings.log_level)

    user = User(name=args.name, email=args.email, age=args.age, home=args.home)
    result = asyncio.run(register_user(user, settings))

    def on_failure(error: object) -> int:
        log.warning("signup.failed", **_describe_failure(error))
        return EXIT_REJECTED

    def on_success(registered: User) -> int:
        log.info("signup.completed", name=registered.name, home=registered.home)
        return EXIT_OK

    return match(on_failure, on_success, result)


if __name__ == "__main__":
    sys.exit(main())
