"""
Filesystem walker for the ff15 file finder.

This module traverses a directory tree depth-first and collects the files whose
name matches a search query. Entries that cannot be read because of missing
permissions are skipped; any other filesystem error ends the walk and is
reported together with the matches found up to that point.
"""

import os
import stat
import time
from typing import Callable, Dict, Iterator, Optional, TextIO, Union
import logging

from ..models.config import FinderConfig
from ..models.search_query import SearchQuery
from ..models.search_results import MatchResult
from .spinner import create_spinner


logger = logging.getLogger(__name__)


class FSWalker:
    """
    Filesystem walker that traverses a directory tree and matches file names.

    Each call to ``walk`` runs its own progress spinner for the duration of
    the traversal and returns a fresh MatchResult.
    """

    def __init__(self, config: Optional[FinderConfig] = None,
                 spinner_factory: Optional[Callable[[], object]] = None,
                 stream: Optional[TextIO] = None):
        """
        Initialize the filesystem walker.

        Args:
            config: Configuration object; defaults are used when omitted
            spinner_factory: Callable returning a new spinner for each walk
            stream: Stream the default spinner draws on
        """
        self.config = config if config is not None else FinderConfig()
        if spinner_factory is None:
            spinner_factory = lambda: create_spinner(self.config.spinner, stream=stream)
        self._spinner_factory = spinner_factory
        self.reset_stats()

    def walk(self, root: Union[str, os.PathLike], query: Union[str, SearchQuery]) -> MatchResult:
        """
        Walk a directory tree and collect the files matching a query.

        Args:
            root: Directory (or single file) to search
            query: Search term or SearchQuery

        Returns:
            MatchResult with the matching paths in traversal order. When the
            walk was aborted, ``error`` is set and ``paths`` holds the partial
            matches.
        """
        if not isinstance(query, SearchQuery):
            query = SearchQuery(text=query)
        root = os.fspath(root)

        self.reset_stats()
        paths = []
        error = None

        spinner = self._spinner_factory()
        started = time.perf_counter()
        spinner.start()
        try:
            for path in self._iter_matches(root, query):
                paths.append(path)
        except OSError as e:
            self._stats['errors'] += 1
            error = str(e)
            logger.info(f"Walk of {root} aborted: {e}")
        finally:
            spinner.stop()

        duration = time.perf_counter() - started
        logger.info(
            f"Walked {root} for '{query.text}': {len(paths)} matches, "
            f"{self._stats['files_scanned']} files, "
            f"{self._stats['directories_traversed']} directories, "
            f"{self._stats['permission_denied']} skipped in {duration:.2f}s"
        )

        return MatchResult(query=query, root=root, paths=paths, error=error,
                           duration_seconds=duration)

    def _iter_matches(self, root: str, query: SearchQuery) -> Iterator[str]:
        """
        Yield matching paths below root, depth-first.

        Raises:
            OSError: For any filesystem error other than a permission error
        """
        try:
            root_stat = os.stat(root)
        except PermissionError as e:
            self._on_walk_error(e)
            return

        if not stat.S_ISDIR(root_stat.st_mode):
            if self._check_candidate(root, query):
                yield root
            return

        for current_dir, subdirs, files in os.walk(root, onerror=self._on_walk_error):
            self._stats['directories_traversed'] += 1

            for filename in files:
                file_path = os.path.join(current_dir, filename)
                if self._check_candidate(file_path, query):
                    yield file_path

            # os.walk lists directory symlinks with subdirs but does not follow them
            for dirname in subdirs:
                link_path = os.path.join(current_dir, dirname)
                if os.path.islink(link_path) and self._check_candidate(link_path, query):
                    yield link_path

    def _check_candidate(self, path: str, query: SearchQuery) -> bool:
        """Match a non-directory entry by its base name."""
        self._stats['files_scanned'] += 1
        if query.matches(os.path.basename(path)):
            self._stats['files_matched'] += 1
            return True
        return False

    def _on_walk_error(self, error: OSError) -> None:
        """
        Handle an error raised while reading an entry.

        Permission errors are counted and skipped; anything else aborts the walk.
        """
        if isinstance(error, PermissionError):
            self._stats['permission_denied'] += 1
            logger.debug(f"Skipping inaccessible entry {error.filename}: {error}")
            return
        raise error

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the last walk.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = {
            'files_scanned': 0,
            'files_matched': 0,
            'directories_traversed': 0,
            'permission_denied': 0,
            'errors': 0
        }


def find_files(root: Union[str, os.PathLike], query: Union[str, SearchQuery],
               config: Optional[FinderConfig] = None) -> MatchResult:
    """
    Convenience function to walk a tree once.

    Args:
        root: Directory to search
        query: Search term
        config: Configuration (optional)

    Returns:
        MatchResult of the walk
    """
    return FSWalker(config).walk(root, query)
