"""
Command-line argument parser configuration.
"""

import argparse


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="mogrify",
        description="Rewrite statsd metric names into name and tags using "
                    "DOG_STATSD_MOGRIFIER_* configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Configure a mogrifier
  export DOG_STATSD_MOGRIFIERS=USERS
  export DOG_STATSD_MOGRIFIER_USERS_PATTERN='^users\\.(\\d+)\\.(\\w+)$'
  export DOG_STATSD_MOGRIFIER_USERS_NAME='users.$2'
  export DOG_STATSD_MOGRIFIER_USERS_TAGS='user_id:$1'

  # Rewrite names given as arguments
  mogrify rewrite users.42.logins

  # Rewrite names read from stdin, one JSON object per line
  cat names.txt | mogrify rewrite --json

  # Validate the configuration
  mogrify check

  # Expose Prometheus metrics while rewriting a stream of names
  tail -f names.log | mogrify --metrics-port 9091 rewrite
        """
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Logging level (default: WARNING, or LOG_LEVEL)'
    )
    parser.add_argument(
        '--metrics-port',
        type=int,
        help='Expose Prometheus metrics on this port while the command runs'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    rewrite_parser = subparsers.add_parser('rewrite', help='Rewrite metric names')
    rewrite_parser.add_argument(
        'names',
        nargs='*',
        help='Metric names (default: read one per line from stdin)'
    )
    rewrite_parser.add_argument(
        '--json',
        action='store_true',
        help='Print one JSON object per name'
    )

    subparsers.add_parser('check', help='Validate the mogrifier configuration')

    return parser
