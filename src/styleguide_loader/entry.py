"""Rule entries: one record of a style guide.

Guides are authored with Ruby-symbol keys (``:rule``, ``:why``, ``:example``),
which YAML reads back as plain strings with a leading colon. Bare keys are
accepted too so guides can be written by hand without the prefix.
"""

from __future__ import annotations

import warnings
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import GuideFormatError

FIELDS = ("rule", "why", "example")
REQUIRED_FIELDS = ("rule", "why")


def normalize_key(key: Any) -> Any:
    """Strip the Ruby symbol prefix from a record key."""
    if isinstance(key, str) and key.startswith(":"):
        return key[1:]
    return key


@dataclass(frozen=True)
class RuleEntry:
    """A single convention: what to do, why, and optionally how it looks."""

    rule: str
    why: str
    example: str | None = None

    @property
    def has_example(self) -> bool:
        return self.example is not None

    @classmethod
    def from_mapping(
        cls,
        data: Any,
        source: str | Path | None = None,
        index: int | None = None,
    ) -> RuleEntry:
        """
        Build an entry from a parsed YAML record.

        Args:
            data: The record, normally a dict produced by ``yaml.safe_load``.
            source: File the record came from, used in error messages.
            index: Zero-based position of the record in its document.

        Returns:
            The entry.

        Raises:
            GuideFormatError: If the record is not a mapping, a required field
                is missing or blank, or a present example is blank.
        """
        if not isinstance(data, Mapping):
            msg = f"expected a mapping, got {type(data).__name__}"
            raise GuideFormatError(msg, source, index)

        fields: dict[str, Any] = {}
        for key, value in data.items():
            name = normalize_key(key)
            if name not in FIELDS:
                warnings.warn(
                    f"Ignoring unknown key {key!r} in {source or 'guide'}",
                    UserWarning,
                    stacklevel=2,
                )
                continue
            fields[name] = value

        for name in REQUIRED_FIELDS:
            value = fields.get(name)
            if value is None:
                raise GuideFormatError(f"missing required field {name!r}", source, index)
            if not isinstance(value, str) or not value.strip():
                raise GuideFormatError(f"field {name!r} must be non-empty text", source, index)

        example = fields.get("example")
        if example is not None and (not isinstance(example, str) or not example.strip()):
            raise GuideFormatError("field 'example' must be non-empty text", source, index)

        return cls(rule=fields["rule"], why=fields["why"], example=example)

    def to_mapping(self, symbol_keys: bool = True) -> dict[str, str]:
        """Return the record in authored key order."""
        prefix = ":" if symbol_keys else ""
        data = {f"{prefix}rule": self.rule, f"{prefix}why": self.why}
        if self.example is not None:
            data[f"{prefix}example"] = self.example
        return data
