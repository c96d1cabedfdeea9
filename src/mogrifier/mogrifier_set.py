"""
Ordered, immutable collection of mogrifiers.

Entries are tried in configuration order and the first one whose pattern
matches rewrites the name. The set is built once with build() and is safe to
share between threads afterwards.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from opentelemetry import trace

from .entry import EntrySpec, Mogrified, MogrifierEntry
from .errors import ConfigurationError, TemplateIndexError
from .metrics import MogrifierMetrics
from .utils.tracing import add_span_attributes, add_span_event, trace_operation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MogrifierSet:
    """First-match-wins collection of mogrifier entries."""

    entries: tuple[MogrifierEntry, ...] = ()
    metrics: MogrifierMetrics | None = field(default=None, compare=False, repr=False)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[MogrifierEntry]:
        return iter(self.entries)

    def mogrify(self, name: str) -> Mogrified:
        """
        Rewrite a metric name with the first matching entry.

        Args:
            name: Raw metric name

        Returns:
            The rewritten name and tags, or ``(name, ())`` when no entry
            matches
        """
        for entry in self.entries:
            try:
                result = entry.apply(name)
            except TemplateIndexError as e:
                logger.error(f"Mogrifier {entry.key} failed on {name!r}: {e}")
                if self.metrics:
                    self.metrics.record_error(entry.key, type(e).__name__)
                continue

            if result is not None:
                if self.metrics:
                    self.metrics.record_match(entry.key)
                return result

        if self.metrics and self.entries:
            self.metrics.record_miss()
        return Mogrified(name)

    def get_keys(self) -> list[str]:
        """Get entry keys in evaluation order."""
        return [entry.key for entry in self.entries]


def build(
    specs: Iterable[EntrySpec],
    metrics: MogrifierMetrics | None = None,
) -> MogrifierSet:
    """
    Compile entry specs into a mogrifier set.

    Either every spec compiles or nothing is returned.

    Args:
        specs: Entry specs in evaluation order
        metrics: Optional metrics to record the build and later rewrites

    Returns:
        Ready-to-use MogrifierSet

    Raises:
        PatternCompileError: If a pattern does not compile
        TemplateIndexError: If a template references a missing group
    """
    specs = list(specs)

    with trace_operation(
        "mogrifier.build",
        kind=trace.SpanKind.INTERNAL,
        spec_count=len(specs),
    ):
        entries = []
        try:
            for position, spec in enumerate(specs):
                entry = MogrifierEntry.from_spec(spec, position)
                add_span_event(
                    "mogrifier.compiled",
                    key=entry.key,
                    tag_count=len(entry.tag_templates),
                )
                entries.append(entry)
        except ConfigurationError as e:
            logger.error(f"Failed to build mogrifiers: {e}")
            if metrics:
                metrics.record_build(success=False)
            raise

        add_span_attributes(entry_count=len(entries))

    entries = tuple(entries)

    if metrics:
        metrics.record_build(success=True, entry_count=len(entries))

    logger.info(f"Built mogrifier set with {len(entries)} entries")

    return MogrifierSet(entries=entries, metrics=metrics)


def mogrify(mogrifiers: MogrifierSet | None, name: str) -> Mogrified:
    """
    Rewrite ``name`` with ``mogrifiers``.

    An unconfigured (None) set leaves every name unchanged.
    """
    if mogrifiers is None:
        return Mogrified(name)
    return mogrifiers.mogrify(name)
