from .ctx import StyleGuideLoaderContext
from .entry import RuleEntry
from .errors import GuideFormatError, StyleGuideError
from .guide import StyleGuide, bundled_guide
from .render import render_entry, render_markdown
from .validation import EXPECTED_ENTRY_COUNT, ValidationResult, validate_file, validate_records

__version__ = "0.1.0"

__all__ = [
    "EXPECTED_ENTRY_COUNT",
    "GuideFormatError",
    "RuleEntry",
    "StyleGuide",
    "StyleGuideError",
    "StyleGuideLoaderContext",
    "ValidationResult",
    "bundled_guide",
    "render_entry",
    "render_markdown",
    "validate_file",
    "validate_records",
]
