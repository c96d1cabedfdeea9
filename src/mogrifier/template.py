"""
Template expansion over regex capture groups.

A template is a plain string in which ``$0``, ``$1``, ... are replaced by the
corresponding capture of a match: ``$0`` is the whole match, ``$1`` onwards
are the subgroups. Only ``$`` followed by ASCII digits is a placeholder; any
other ``$`` (``$x``, a trailing ``$``) is copied through literally.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from .errors import TemplateIndexError

PLACEHOLDER = re.compile(r"\$([0-9]+)")


@dataclass(frozen=True)
class Template:
    """A parsed template string and the capture indexes it references."""

    text: str
    indexes: tuple[int, ...] = ()

    @property
    def max_index(self) -> int:
        """Highest referenced capture index, or -1 without placeholders."""
        return max(self.indexes, default=-1)

    def has_placeholders(self) -> bool:
        return bool(self.indexes)

    def expand(self, captures: Sequence[str]) -> str:
        return expand(self, captures)

    def __str__(self) -> str:
        return self.text


def parse_template(text: str) -> Template:
    """
    Parse a template string.

    Args:
        text: Template text, e.g. ``"requests.$1"``

    Returns:
        Template with its placeholder indexes precomputed
    """
    indexes = tuple(int(m.group(1)) for m in PLACEHOLDER.finditer(text))
    return Template(text=text, indexes=indexes)


def expand(template: Template | str, captures: Sequence[str]) -> str:
    """
    Replace every ``$<index>`` in ``template`` with ``captures[index]``.

    Args:
        template: Template (or raw template text) to expand
        captures: Match captures, element 0 being the whole match

    Returns:
        Expanded string

    Raises:
        TemplateIndexError: If a placeholder has no matching capture
    """
    if isinstance(template, str):
        template = parse_template(template)

    if not template.has_placeholders():
        return template.text

    if template.max_index >= len(captures):
        raise TemplateIndexError(
            template.max_index, len(captures), template=template.text
        )

    return PLACEHOLDER.sub(lambda m: captures[int(m.group(1))], template.text)
