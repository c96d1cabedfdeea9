"""
Single mogrifier: one compiled pattern bound to a name template and tag templates.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from re import Pattern
from typing import NamedTuple

from .errors import PatternCompileError, TemplateIndexError
from .template import Template, parse_template

logger = logging.getLogger(__name__)


class Mogrified(NamedTuple):
    """Rewritten metric name and its derived ``key:value`` tags."""

    name: str
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class EntrySpec:
    """
    Unvalidated mogrifier configuration as handed over by a loader.

    ``key`` is only a label for errors, logs and metrics.
    """

    pattern: str
    name_template: str
    tag_templates: Mapping[str, str] = field(default_factory=dict)
    key: str | None = None


@dataclass(frozen=True)
class MogrifierEntry:
    """Compiled, validated mogrifier."""

    key: str
    matcher: Pattern
    name_template: Template
    tag_templates: tuple[tuple[str, Template], ...] = ()

    @classmethod
    def from_spec(cls, spec: EntrySpec, position: int = 0) -> "MogrifierEntry":
        """
        Compile and validate an entry spec.

        Args:
            spec: Entry configuration
            position: Position of the spec in its set, used as the label
                      when the spec carries no key

        Returns:
            Ready-to-use entry

        Raises:
            PatternCompileError: If the pattern does not compile
            TemplateIndexError: If a template references a missing group
        """
        key = spec.key or f"#{position}"

        try:
            matcher = re.compile(spec.pattern)
        except re.error as e:
            raise PatternCompileError(key, spec.pattern, str(e)) from e

        name_template = parse_template(spec.name_template)
        tag_templates = tuple(
            (tag_key, parse_template(value))
            for tag_key, value in spec.tag_templates.items()
        )

        # group 0 always exists, so the highest usable index is matcher.groups
        for template in (name_template, *(t for _, t in tag_templates)):
            if template.max_index > matcher.groups:
                raise TemplateIndexError(
                    template.max_index,
                    matcher.groups + 1,
                    key=key,
                    template=template.text,
                )

        logger.debug(
            f"Compiled mogrifier {key}: pattern={spec.pattern!r} "
            f"name={spec.name_template!r} tags={len(tag_templates)}"
        )

        return cls(
            key=key,
            matcher=matcher,
            name_template=name_template,
            tag_templates=tag_templates,
        )

    def apply(self, name: str) -> Mogrified | None:
        """
        Rewrite ``name`` if the pattern matches it.

        Args:
            name: Raw metric name

        Returns:
            Mogrified result, or None if the pattern does not match

        Raises:
            TemplateIndexError: If a template references a missing group
        """
        match = self.matcher.search(name)
        if match is None:
            return None

        # groups that did not take part in the match expand to ""
        captures = [match.group(0), *match.groups(default="")]

        new_name = self.name_template.expand(captures)
        tags = tuple(
            f"{tag_key}:{template.expand(captures)}"
            for tag_key, template in self.tag_templates
        )
        return Mogrified(new_name, tags)
