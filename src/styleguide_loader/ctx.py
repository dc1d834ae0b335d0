import logging
import warnings
from collections.abc import Generator
from pathlib import Path

from .errors import GuideFormatError
from .guide import BUNDLED_GUIDE, StyleGuide
from .render import DEFAULT_TITLE, render_markdown

logger = logging.getLogger(__name__)

GUIDE_SUFFIXES = (".yaml", ".yml")
LOCAL_GUIDE_FILENAME = "styleguide.local.yaml"


class StyleGuideLoaderContext:
    """Context class for loading style guide files for a project directory."""

    def __init__(  # noqa: PLR0913
        self,
        project_dir: str | Path,
        guide_dirname: str = ".styleguide",
        include_bundled: bool = True,
        user_dir: str | Path | None = None,
        caching: bool = True,
        strict: bool = False,
    ) -> None:
        """
        Initialize the context with the project directory.

        Args:
            project_dir: Path to the project directory.
            guide_dirname: Name of the project guide directory (default: ".styleguide").
                Every *.yaml / *.yml file below it is loaded, recursively.
            include_bundled: Whether to start from the guide shipped with the package
                (default: True).
            user_dir: Directory holding the user's own guide files
                (default: ~/.styleguide).
            caching: Whether to cache loaded guides until a file changes (default: True).
            strict: Whether a malformed guide file raises GuideFormatError instead of
                being skipped with a warning (default: False).

        Raises:
            NotADirectoryError: If project_dir is not a directory.
        """
        self.project_dir = Path(project_dir).resolve()
        if not self.project_dir.is_dir():
            msg = f"project_dir must be a directory, got: {self.project_dir}"
            raise NotADirectoryError(msg)
        self.guide_dirname = guide_dirname
        self.include_bundled = include_bundled
        self.user_dir = Path(user_dir) if user_dir is not None else Path.home() / ".styleguide"
        self.caching = caching
        self.strict = strict
        # cache_key (extra files in load order) -> (guides, {path: mtime})
        self._cache: dict[tuple[str, ...], tuple[list[StyleGuide], dict[Path, float]]] = {}

    def load_guides(self, extra_guide_files: list[str | Path] | None = None) -> list[StyleGuide]:
        """
        Load every guide file that applies to the project.

        Args:
            extra_guide_files: Optional list of additional guide files, loaded after
                the conventional locations. Relative paths resolve against the project.

        Returns:
            One StyleGuide per file that contributed at least one entry, in load order.
        """
        cache_key = tuple(str(p) for p in self._resolve_extra(extra_guide_files))

        if self.caching and cache_key in self._cache:
            cached_guides, cached_mtimes = self._cache[cache_key]
            if self._cache_is_valid(cached_mtimes):
                logger.debug("Using cached guides for %s", self.project_dir)
                return list(cached_guides)
            del self._cache[cache_key]

        files_read: dict[Path, float] = {}
        guides = [guide for _, guide in self._iter_guide_files(files_read, extra_guide_files)]

        if not guides:
            warnings.warn(
                "No style guide entries found in conventional locations or extra files",
                UserWarning,
                stacklevel=2,
            )

        if self.caching:
            self._cache[cache_key] = (list(guides), files_read)

        return guides

    def load_guide(self, extra_guide_files: list[str | Path] | None = None) -> StyleGuide:
        """Load all applicable guide files merged into one guide."""
        return StyleGuide.merge(*self.load_guides(extra_guide_files))

    def load_markdown(
        self,
        extra_guide_files: list[str | Path] | None = None,
        title: str = DEFAULT_TITLE,
    ) -> str:
        """Load the merged guide and render it as Markdown."""
        return render_markdown(self.load_guide(extra_guide_files), title=title)

    def load_guide_chunks(
        self,
        extra_guide_files: list[str | Path] | None = None,
        chunk_size: int = 200,
        chunk_overlap: int = 0,
    ) -> Generator[tuple[str, str, int, int], None, None]:
        """
        Load guide files and yield chunks of their Markdown rendering (for RAG).

        Each file is rendered on its own, titled after the file name, so chunk
        line numbers refer to that file's rendering.

        Args:
            extra_guide_files: Optional list of additional guide files.
            chunk_size: Maximum size of each text chunk in characters (default: 200).
            chunk_overlap: Number of characters to overlap between chunks (default: 0).

        Yields:
            Tuples of (file_path, chunk_text, start_line, end_line) where line
            numbers are 1-based.

        Example:
            >>> ctx = StyleGuideLoaderContext("/path/to/project")
            >>> for path, chunk, start, end in ctx.load_guide_chunks(chunk_size=500):
            ...     print(f"{path}:{start}-{end} = {len(chunk)} chars")
        """
        for file_path, guide in self._iter_guide_files({}, extra_guide_files):
            yield from self._chunk_content(
                str(file_path),
                render_markdown(guide, title=file_path.stem),
                chunk_size,
                chunk_overlap,
            )

    def invalidate_cache(self) -> None:
        """
        Clear all cached guides.

        Note: Cached guides are already dropped when a tracked file changes, so
        manual invalidation is rarely needed.
        """
        self._cache.clear()

    def _resolve_extra(self, extra_guide_files: list[str | Path] | None) -> list[Path]:
        resolved = []
        for extra_file in extra_guide_files or []:
            extra_path = Path(extra_file)
            if not extra_path.is_absolute():
                extra_path = self.project_dir / extra_path
            resolved.append(extra_path.resolve())
        return resolved

    def _iter_guide_files(
        self,
        files_read: dict[Path, float],
        extra_guide_files: list[str | Path] | None = None,
    ) -> Generator[tuple[Path, StyleGuide], None, None]:
        """
        Iterate over guide files in conventional locations and extra files.

        Locations, in order:
        1. The bundled guide
        2. User guides (<user_dir>/*.yaml)
        3. Project guides (<project>/<guide_dirname>/**/*.yaml)
        4. Local personal file (<project>/styleguide.local.yaml)
        5. Extra files

        Args:
            files_read: Filled with the modification time of every file and
                directory consulted, for cache invalidation.
            extra_guide_files: Optional list of additional guide files.

        Yields:
            Tuples of (file_path, guide) for files holding at least one entry.
        """
        # Creating the guide directory or the local file changes the project dir
        self._track(self.project_dir, files_read)

        candidates: list[Path] = []
        if self.include_bundled:
            candidates.append(BUNDLED_GUIDE)

        candidates.extend(self._scan_dir(self.user_dir, files_read, recursive=False))
        candidates.extend(
            self._scan_dir(self.project_dir / self.guide_dirname, files_read, recursive=True)
        )

        local_file = self.project_dir / LOCAL_GUIDE_FILENAME
        if local_file.exists():
            candidates.append(local_file)

        for file_path in candidates:
            guide = self._load_file(file_path, files_read)
            if guide:
                yield file_path, guide

        for extra_path in self._resolve_extra(extra_guide_files):
            if not extra_path.exists():
                self._track(extra_path.parent, files_read)
                warnings.warn(f"File not found: {extra_path}", UserWarning, stacklevel=2)
                continue
            guide = self._load_file(extra_path, files_read)
            if guide:
                yield extra_path, guide

    def _track(self, path: Path, files_read: dict[Path, float]) -> None:
        """Record a path's modification time if it exists."""
        if path.exists():
            files_read[path] = path.stat().st_mtime

    def _scan_dir(
        self,
        directory: Path,
        files_read: dict[Path, float],
        recursive: bool,
    ) -> list[Path]:
        """List guide files in a directory, sorted for consistent ordering."""
        if not directory.is_dir():
            # Watch the parent so creating the directory invalidates the cache
            self._track(directory.parent, files_read)
            return []

        # Track directories too, so added or removed files invalidate the cache
        pattern_iter = directory.rglob("*") if recursive else directory.iterdir()
        files = []
        files_read[directory] = directory.stat().st_mtime
        for path in sorted(pattern_iter):
            if path.is_dir():
                files_read[path] = path.stat().st_mtime
            elif path.suffix in GUIDE_SUFFIXES:
                files.append(path)
        return files

    def _load_file(self, file_path: Path, files_read: dict[Path, float]) -> StyleGuide | None:
        """
        Load a single guide file.

        Returns:
            The guide, or None if the file is malformed and strict mode is off.

        Raises:
            GuideFormatError: If the file is malformed and strict mode is on.
        """
        resolved_path = file_path.resolve()
        files_read[resolved_path] = resolved_path.stat().st_mtime
        logger.debug("Loading guide file %s", resolved_path)

        try:
            return StyleGuide.from_yaml(resolved_path)
        except GuideFormatError as e:
            if self.strict:
                raise
            warnings.warn(f"Skipping malformed guide: {e}", UserWarning, stacklevel=2)
            return None

    def _cache_is_valid(self, cached_mtimes: dict[Path, float]) -> bool:
        """
        Check if cached guides are still valid by comparing modification times.

        Args:
            cached_mtimes: Dictionary of paths to their cached modification times.

        Returns:
            True if all paths still have the same modification time, False otherwise.
        """
        for path, cached_mtime in cached_mtimes.items():
            try:
                if path.stat().st_mtime != cached_mtime:
                    return False
            except OSError:
                # Deleted or unreadable
                return False
        return True

    def _chunk_content(
        self,
        file_path: str,
        content: str,
        chunk_size: int,
        chunk_overlap: int,
    ) -> Generator[tuple[str, str, int, int], None, None]:
        """
        Split content into overlapping chunks and yield with source information.

        Args:
            file_path: Path to the source file
            content: The text content to chunk
            chunk_size: Maximum size of each chunk in characters
            chunk_overlap: Number of characters to overlap between chunks

        Yields:
            Tuples of (file_path, chunk_text, start_line, end_line)
        """
        if not content:
            return

        step = max(chunk_size - chunk_overlap, 1)
        current_pos = 0

        while current_pos < len(content):
            chunk_end = min(current_pos + chunk_size, len(content))
            chunk_text = content[current_pos:chunk_end]

            start_line = content.count("\n", 0, current_pos) + 1
            end_line = start_line + chunk_text.count("\n")

            yield (file_path, chunk_text, start_line, end_line)

            current_pos += step
