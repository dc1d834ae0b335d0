"""Markdown rendering of guides."""

from __future__ import annotations

from .entry import RuleEntry
from .guide import StyleGuide

DEFAULT_TITLE = "Ruby Style Guide"


def render_entry(entry: RuleEntry, number: int | None = None, language: str = "ruby") -> str:
    """Render one entry as a Markdown section."""
    heading = f"## {number}. {entry.rule}" if number is not None else f"## {entry.rule}"
    parts = [heading, entry.why.strip()]
    if entry.example is not None:
        parts.append(f"```{language}\n{entry.example.rstrip()}\n```")
    return "\n\n".join(parts) + "\n"


def render_markdown(
    guide: StyleGuide,
    title: str = DEFAULT_TITLE,
    language: str = "ruby",
) -> str:
    """Render a whole guide, entries numbered from 1."""
    sections = [f"# {title}\n"]
    for number, entry in enumerate(guide, start=1):
        sections.append(render_entry(entry, number=number, language=language))
    return "\n".join(sections)
