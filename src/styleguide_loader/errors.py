from pathlib import Path


class StyleGuideError(Exception):
    """Base class for errors raised by styleguide_loader."""


class GuideFormatError(StyleGuideError, ValueError):
    """A guide document or one of its records is malformed."""

    def __init__(
        self,
        message: str,
        source: str | Path | None = None,
        index: int | None = None,
    ) -> None:
        self.source = source
        self.index = index
        location = ""
        if source is not None:
            location = f"{source}"
        if index is not None:
            location = f"{location} entry {index + 1}" if location else f"entry {index + 1}"
        super().__init__(f"{location}: {message}" if location else message)
