"""StyleGuide: an ordered, immutable list of rule entries."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .entry import RuleEntry
from .errors import GuideFormatError

logger = logging.getLogger(__name__)

GUIDES_DIR = Path(__file__).parent / "guides"
BUNDLED_GUIDE = GUIDES_DIR / "general_style.yaml"


class _GuideDumper(yaml.SafeDumper):
    """SafeDumper that writes multi-line text as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_GuideDumper.add_representer(str, _represent_str)


@dataclass(frozen=True)
class StyleGuide:
    """A style guide document, in reading order."""

    entries: tuple[RuleEntry, ...] = ()
    sources: tuple[Path, ...] = field(default=(), compare=False)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[RuleEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> RuleEntry:
        return self.entries[index]

    @classmethod
    def loads(cls, text: str, source: str | Path | None = None) -> StyleGuide:
        """
        Parse a guide from YAML text.

        Args:
            text: YAML document whose root is a list of records.
            source: Where the text came from, recorded on the guide and used
                in error messages.

        Returns:
            The parsed guide. An empty document gives an empty guide.

        Raises:
            GuideFormatError: If the YAML is invalid, the root is not a list,
                or any record is malformed.
        """
        try:
            records = yaml.safe_load(text)
        except yaml.YAMLError as e:
            msg = f"invalid YAML: {e}"
            raise GuideFormatError(msg, source) from e

        if records is None:
            records = []
        if not isinstance(records, list):
            msg = f"guide must be a list of entries, got {type(records).__name__}"
            raise GuideFormatError(msg, source)

        entries = tuple(
            RuleEntry.from_mapping(record, source=source, index=i)
            for i, record in enumerate(records)
        )
        sources = (Path(source),) if source is not None else ()
        logger.debug("Parsed %d entries from %s", len(entries), source or "<string>")
        return cls(entries=entries, sources=sources)

    @classmethod
    def from_yaml(cls, path: str | Path) -> StyleGuide:
        """Load a guide from a YAML file."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            msg = f"not valid UTF-8: {e}"
            raise GuideFormatError(msg, path) from e
        return cls.loads(text, source=path)

    @classmethod
    def merge(cls, *guides: StyleGuide) -> StyleGuide:
        """Concatenate guides, keeping their order."""
        entries: list[RuleEntry] = []
        sources: list[Path] = []
        for guide in guides:
            entries.extend(guide.entries)
            sources.extend(guide.sources)
        return cls(entries=tuple(entries), sources=tuple(sources))

    def dumps(self) -> str:
        """Serialize the guide back to YAML with symbol-style keys."""
        return yaml.dump(
            [entry.to_mapping() for entry in self.entries],
            Dumper=_GuideDumper,
            explicit_start=True,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            width=100,
        )

    def save(self, path: str | Path) -> None:
        """Write the guide to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.dumps(), encoding="utf-8")

    def search(self, text: str) -> list[RuleEntry]:
        """Return entries whose rule or rationale contains ``text``, ignoring case."""
        needle = text.casefold()
        return [
            entry
            for entry in self.entries
            if needle in entry.rule.casefold() or needle in entry.why.casefold()
        ]


def bundled_guide() -> StyleGuide:
    """Load the guide shipped with the package."""
    return StyleGuide.from_yaml(BUNDLED_GUIDE)
