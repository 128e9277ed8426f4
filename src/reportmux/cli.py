"""Command line entry point.

Examples:
- reportmux build sample_v2.json --dist dist/now
- reportmux build sample_v2.json --mock --log-level DEBUG
- reportmux narrow sample_v2.json -o single-category.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
import sys
from typing import TYPE_CHECKING

from reportmux import build_sample_reports
from reportmux.config import Config
from reportmux.errors import ReportmuxError
from reportmux.lhr import load_result
from reportmux.narrow import narrow_to_performance

if TYPE_CHECKING:
    from collections.abc import Sequence


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reportmux",
        description="Render every locale and environment variant of an audit Result.",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", parents=[common], help="Write all report variants")
    build.add_argument("result", type=Path, help="Path to the base Result JSON")
    build.add_argument(
        "--dist",
        type=Path,
        default=None,
        help="Output directory (default: $REPORTMUX_DIST_DIR or dist/now)",
    )
    build.add_argument(
        "--assets",
        type=Path,
        default=None,
        help="Directory overriding the packaged templates and scripts",
    )
    build.add_argument(
        "--mock",
        action="store_true",
        help="Build the error variant without invoking lighthouse",
    )
    build.add_argument(
        "--no-plugin-category",
        action="store_false",
        dest="plugin_category",
        default=True,
        help="Do not add the demo plugin category to the base Result",
    )
    build.add_argument(
        "--audit-timeout",
        type=float,
        default=None,
        help="Seconds to allow the audit-only run",
    )

    narrow = sub.add_parser(
        "narrow", parents=[common], help="Write the performance-only Result"
    )
    narrow.add_argument("result", type=Path, help="Path to the Result JSON")
    narrow.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )
    return parser


def _cmd_build(args: argparse.Namespace) -> int:
    config = Config(
        dist_dir=args.dist,
        assets_dir=args.assets,
        include_plugin_category=args.plugin_category,
        audit_timeout_s=args.audit_timeout,
        use_mock=args.mock,
    )
    result = load_result(args.result)
    trace = asyncio.run(build_sample_reports(result, config=config))
    logging.info("%d file(s) written to %s", len(trace.written), config.dist_dir)
    return 0


def _cmd_narrow(args: argparse.Namespace) -> int:
    narrowed = narrow_to_performance(load_result(args.result))
    text = json.dumps(narrowed, ensure_ascii=False, indent=2)
    if args.output is None:
        sys.stdout.write(text + "\n")
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + "\n", encoding="utf-8")
        logging.info("✅ %s written.", args.output)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s",
    )

    commands = {"build": _cmd_build, "narrow": _cmd_narrow}
    try:
        return commands[args.command](args)
    except ReportmuxError as e:
        sys.stderr.write(f"error: {e}\n")
        if e.hint:
            sys.stderr.write(f"hint: {e.hint}\n")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
