"""
CLI command implementations.
"""

import argparse
import json
import logging
import sys
from collections.abc import Iterable
from typing import TextIO

from ..env import build_from_env
from ..entry import Mogrified
from ..errors import MogrifierError
from ..metrics import MogrifierMetrics

logger = logging.getLogger(__name__)


def format_result(result: Mogrified, as_json: bool = False) -> str:
    """Render a mogrified name as ``name<TAB>tag,tag`` or JSON."""
    if as_json:
        return json.dumps({"name": result.name, "tags": list(result.tags)})
    return f"{result.name}\t{','.join(result.tags)}"


def cmd_rewrite(
    args: argparse.Namespace,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    metrics: MogrifierMetrics | None = None,
) -> int:
    """
    Rewrite metric names from the arguments or stdin

    Args:
        args: Parsed command-line arguments
        stdin: Source of names when none are given (default: sys.stdin)
        stdout: Output stream (default: sys.stdout)
        metrics: Metrics to record the build and rewrites

    Returns:
        Process exit status
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    try:
        mogrifiers = build_from_env(metrics=metrics)
    except MogrifierError as e:
        logger.error(f"Invalid mogrifier configuration: {e}")
        return 1

    names: Iterable[str] = args.names or (line.strip() for line in stdin)
    for name in names:
        if not name:
            continue
        stdout.write(format_result(mogrifiers.mogrify(name), as_json=args.json) + "\n")

    return 0


def cmd_check(
    args: argparse.Namespace,
    stdout: TextIO | None = None,
    metrics: MogrifierMetrics | None = None,
) -> int:
    """
    Build the mogrifier set and report what was loaded

    Args:
        args: Parsed command-line arguments
        stdout: Output stream (default: sys.stdout)
        metrics: Metrics to record the build

    Returns:
        Process exit status
    """
    stdout = stdout or sys.stdout

    try:
        mogrifiers = build_from_env(metrics=metrics)
    except MogrifierError as e:
        logger.error(f"Invalid mogrifier configuration: {e}")
        return 1

    keys = mogrifiers.get_keys()
    stdout.write(f"{len(keys)} mogrifier(s) configured")
    stdout.write(f": {', '.join(keys)}\n" if keys else "\n")
    return 0
