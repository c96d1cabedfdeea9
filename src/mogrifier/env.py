"""
Load mogrifier configuration from environment variables.

Environment variables:
    DOG_STATSD_MOGRIFIERS: Comma-separated mogrifier keys, in evaluation order
    DOG_STATSD_MOGRIFIER_<KEY>_PATTERN: Regular expression (required)
    DOG_STATSD_MOGRIFIER_<KEY>_NAME: Name template (required)
    DOG_STATSD_MOGRIFIER_<KEY>_TAGS: Tag templates as ``key:value,key:value``

Example:
    DOG_STATSD_MOGRIFIERS=USERS
    DOG_STATSD_MOGRIFIER_USERS_PATTERN=^users\\.(\\d+)\\.(\\w+)$
    DOG_STATSD_MOGRIFIER_USERS_NAME=users.$2
    DOG_STATSD_MOGRIFIER_USERS_TAGS=user_id:$1
"""

import logging
import os
from collections.abc import Mapping

from .entry import EntrySpec
from .errors import ConfigurationError
from .metrics import MogrifierMetrics
from .mogrifier_set import MogrifierSet, build
from .utils.logging import ContextLogger

logger = logging.getLogger(__name__)

ENV_PREFIX = "DOG_STATSD_MOGRIFIER"
KEYS_VARIABLE = "DOG_STATSD_MOGRIFIERS"


def parse_tag_map(text: str) -> dict[str, str]:
    """
    Parse a ``key:value,key:value`` tag map.

    Values may contain further colons; only the first one separates the
    key. A later duplicate key replaces an earlier one.

    Args:
        text: Raw variable value

    Returns:
        Tag key to tag template mapping

    Raises:
        ConfigurationError: If an item has no ``:`` or an empty key
    """
    tags: dict[str, str] = {}
    if not text.strip():
        return tags

    for item in text.split(","):
        tag_key, sep, value = item.partition(":")
        tag_key = tag_key.strip()
        if not sep or not tag_key:
            raise ConfigurationError(f"invalid tag map item {item!r}, expected key:value")
        tags[tag_key] = value

    return tags


def mogrifier_keys_from_env(environ: Mapping[str, str] | None = None) -> list[str]:
    """Get the configured mogrifier keys in evaluation order."""
    environ = os.environ if environ is None else environ
    raw = environ.get(KEYS_VARIABLE, "")
    return [key.strip() for key in raw.split(",") if key.strip()]


def load_specs_from_env(
    keys: list[str],
    environ: Mapping[str, str] | None = None,
    prefix: str = ENV_PREFIX,
) -> list[EntrySpec]:
    """
    Read one entry spec per mogrifier key.

    Args:
        keys: Mogrifier keys, in evaluation order
        environ: Variables to read (default: os.environ)
        prefix: Variable prefix

    Returns:
        Entry specs in the order of ``keys``

    Raises:
        ConfigurationError: If a required variable is missing or the tag
                            map is malformed
    """
    environ = os.environ if environ is None else environ
    specs = []

    for key in keys:
        # variable names are upper-cased, the key keeps its configured spelling
        key_prefix = f"{prefix}_{key}".upper()
        context_logger = ContextLogger(__name__, mogrifier=key)

        pattern = environ.get(f"{key_prefix}_PATTERN")
        if not pattern:
            raise ConfigurationError(f"failed to load mogrifier {key}: {key_prefix}_PATTERN is not set")

        name = environ.get(f"{key_prefix}_NAME")
        if name is None:
            raise ConfigurationError(f"failed to load mogrifier {key}: {key_prefix}_NAME is not set")

        try:
            tags = parse_tag_map(environ.get(f"{key_prefix}_TAGS", ""))
        except ConfigurationError as e:
            raise ConfigurationError(f"failed to load mogrifier {key}: {e}") from e

        context_logger.debug("Loaded mogrifier configuration", tag_count=len(tags))
        specs.append(
            EntrySpec(pattern=pattern, name_template=name, tag_templates=tags, key=key)
        )

    return specs


def build_from_env(
    environ: Mapping[str, str] | None = None,
    metrics: MogrifierMetrics | None = None,
) -> MogrifierSet:
    """
    Build a mogrifier set from DOG_STATSD_MOGRIFIERS and its per-key variables.

    With no keys configured the set is empty and leaves names unchanged.
    """
    keys = mogrifier_keys_from_env(environ)
    if not keys:
        logger.info(f"{KEYS_VARIABLE} not set, mogrification disabled")

    return build(load_specs_from_env(keys, environ), metrics=metrics)
