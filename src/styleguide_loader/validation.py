"""Document checks for guide files.

Unlike :meth:`StyleGuide.loads`, which stops at the first malformed record,
these functions walk the whole document and report every problem they find.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .entry import FIELDS, REQUIRED_FIELDS, normalize_key

logger = logging.getLogger(__name__)

# Number of rules documented in the bundled guide
EXPECTED_ENTRY_COUNT = 13


@dataclass
class ValidationResult:
    """Result of validating one guide document."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_records(
    records: Any,
    expected_count: int | None = None,
    source: str | Path | None = None,
) -> ValidationResult:
    """
    Validate a parsed guide document.

    Args:
        records: The value returned by ``yaml.safe_load`` for the document.
        expected_count: If given, the number of entries the document must hold.
        source: Label used as a prefix in messages.

    Returns:
        ValidationResult with ``entries`` and ``examples`` stats.
    """
    prefix = f"{source}: " if source is not None else ""
    errors: list[str] = []
    warnings: list[str] = []

    if records is None:
        records = []
    if not isinstance(records, list):
        errors.append(f"{prefix}guide must be a list of entries, got {type(records).__name__}")
        return ValidationResult(is_valid=False, errors=errors, stats={"entries": 0, "examples": 0})

    examples = 0
    labels: Counter[str] = Counter()

    for i, record in enumerate(records, start=1):
        where = f"{prefix}entry {i}"
        if not isinstance(record, dict):
            errors.append(f"{where}: expected a mapping, got {type(record).__name__}")
            continue

        fields = {normalize_key(key): value for key, value in record.items()}
        for key in record:
            if normalize_key(key) not in FIELDS:
                warnings.append(f"{where}: unknown key {key!r}")

        for name in REQUIRED_FIELDS:
            if name not in fields:
                errors.append(f"{where}: missing required field {name!r}")
            elif not _is_text(fields[name]):
                errors.append(f"{where}: field {name!r} must be non-empty text")

        if "example" in fields:
            if _is_text(fields["example"]):
                examples += 1
            else:
                errors.append(f"{where}: field 'example' must be non-empty text")

        if _is_text(fields.get("rule")):
            labels[fields["rule"].strip()] += 1

    for label, count in labels.items():
        if count > 1:
            warnings.append(f"{prefix}rule {label!r} appears {count} times")

    if expected_count is not None and len(records) != expected_count:
        errors.append(f"{prefix}expected {expected_count} entries, found {len(records)}")

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        stats={"entries": len(records), "examples": examples},
    )


def validate_file(path: str | Path, expected_count: int | None = None) -> ValidationResult:
    """Validate a guide file, reporting unreadable or unparsable files as errors."""
    path = Path(path)
    logger.debug("Validating %s", path)
    try:
        records = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        return ValidationResult(is_valid=False, errors=[f"{path}: cannot read file: {e}"])
    except UnicodeDecodeError as e:
        return ValidationResult(is_valid=False, errors=[f"{path}: not valid UTF-8: {e}"])
    except yaml.YAMLError as e:
        return ValidationResult(is_valid=False, errors=[f"{path}: invalid YAML: {e}"])

    return validate_records(records, expected_count=expected_count, source=path)
