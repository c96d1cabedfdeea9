"""
Command-line interface for metric name mogrification.

Available commands:
- rewrite: Rewrite metric names using the configured mogrifiers
- check: Validate the mogrifier configuration

Logging is configured from LOG_LEVEL, LOG_FILE, LOG_JSON and LOG_CONSOLE;
tracing from OTLP_ENDPOINT and TRACE_CONSOLE.
"""

import sys

from ..metrics import MetricsPublisher, MogrifierMetrics
from ..utils.logging import configure_from_env
from ..utils.tracing import initialize_tracing, shutdown_tracing
from .commands import cmd_check, cmd_rewrite, format_result
from .parser import create_parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the mogrify CLI"""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_from_env(default_level=args.log_level)

    if args.command not in ('rewrite', 'check'):
        parser.print_help()
        sys.exit(1)

    metrics = MogrifierMetrics()
    if args.metrics_port:
        MetricsPublisher(port=args.metrics_port, registry=metrics.registry).start()

    initialize_tracing()
    try:
        if args.command == 'rewrite':
            status = cmd_rewrite(args, metrics=metrics)
        else:
            status = cmd_check(args, metrics=metrics)
    finally:
        shutdown_tracing()

    sys.exit(status)


__all__ = [
    'main',
    'cmd_rewrite',
    'cmd_check',
    'create_parser',
    'format_result',
]


if __name__ == '__main__':
    main()
