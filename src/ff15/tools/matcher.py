"""
File name matching for the ff15 file finder.

Matching is deliberately loose: the search term is lower-cased and stripped of
its extension, then looked up as a substring of the lower-cased candidate name.
Opening a file uses the strict counterpart, ``is_exact_match``.
"""

import os


def _base_name(path: str) -> str:
    """Return the last element of a path, ignoring trailing separators."""
    separators = os.sep + (os.altsep or '')
    stripped = path.rstrip(separators)
    if not stripped:
        return path
    return os.path.basename(stripped)


def strip_extension(name: str) -> str:
    """
    Remove the trailing extension from a file name.

    The extension is everything from the last dot on, so ``".txt"`` becomes
    the empty string and ``"archive.tar.gz"`` becomes ``"archive.tar"``.

    Args:
        name: File name without directory components

    Returns:
        The name without its extension
    """
    dot = name.rfind('.')
    if dot == -1:
        return name
    return name[:dot]


def normalize_query(query: str) -> str:
    """
    Normalize a search term for substring matching.

    Args:
        query: Raw search term as typed by the user

    Returns:
        Lower-cased base name of the term without its extension
    """
    return strip_extension(_base_name(query.lower()))


def is_match(candidate_name: str, query: str) -> bool:
    """
    Check whether a file name matches a search term.

    Args:
        candidate_name: Base name of the file being considered
        query: Raw search term

    Returns:
        True if the lower-cased name contains the normalized term
    """
    return normalize_query(query) in candidate_name.lower()


def is_exact_match(candidate_path: str, query: str) -> bool:
    """Check whether a path's base name equals the raw search term, ignoring case."""
    return os.path.basename(candidate_path).lower() == query.lower()
