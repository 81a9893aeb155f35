# eggnode/__main__.py
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from .curve import string_curve_type
from .log_config import configure_logging
from .registry import registry

log = logging.getLogger("eggnode.cli")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m eggnode",
        description="Print the registered node type hierarchy and classify curve-type keywords.",
    )
    parser.add_argument("tokens", nargs="*", help="curve-type keywords to classify")
    parser.add_argument("--json-logs", action="store_true", help="render log records as JSON")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="eggnode log level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level, json=args.json_logs)
    log.debug("Dumping type hierarchy.", extra={"type_count": len(registry)})

    print(registry.format_hierarchy())
    for token in args.tokens:
        print(f"{token!r} -> {string_curve_type(token)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
