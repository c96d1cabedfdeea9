"""
Metric name mogrification for statsd.

Rewrites legacy or noisy metric names (e.g. names with embedded IDs) into a
normalized name plus ``key:value`` tags. Each mogrifier binds a regular
expression to a name template and tag templates; ``$0``, ``$1``, ... in a
template expand to the match's capture groups. The first configured
mogrifier whose pattern matches wins.

Usage:
    from mogrifier import EntrySpec, build

    mogrifiers = build([
        EntrySpec(r"^users\\.(\\d+)\\.logins$", "users.logins", {"user_id": "$1"}),
    ])
    mogrifiers.mogrify("users.42.logins")
    # Mogrified(name='users.logins', tags=('user_id:42',))
"""

from .entry import EntrySpec, Mogrified, MogrifierEntry
from .env import build_from_env, load_specs_from_env, parse_tag_map
from .errors import (
    ConfigurationError,
    MogrifierError,
    PatternCompileError,
    TemplateIndexError,
)
from .metrics import MogrifierMetrics
from .mogrifier_set import MogrifierSet, build, mogrify
from .template import Template, expand, parse_template

__version__ = "1.0.0"

__all__ = [
    "EntrySpec",
    "Mogrified",
    "MogrifierEntry",
    "MogrifierSet",
    "MogrifierMetrics",
    "Template",
    "build",
    "build_from_env",
    "expand",
    "load_specs_from_env",
    "mogrify",
    "parse_tag_map",
    "parse_template",
    "MogrifierError",
    "ConfigurationError",
    "PatternCompileError",
    "TemplateIndexError",
]
