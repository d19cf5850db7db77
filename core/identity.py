"""
Identity helpers.

Identifiers are opaque strings assigned once and never derived from a
position in any collection.
"""
import uuid
from typing import Iterable, List, Set


def generate_id() -> str:
    """Generate a fresh opaque identifier."""
    return str(uuid.uuid4())


def filter_new_paths(paths: Iterable[str], known_paths: Set[str]) -> List[str]:
    """
    Drop paths that are already known or repeated within ``paths``.

    Args:
        paths: Candidate source paths, in request order
        known_paths: Paths already present in the queue

    Returns:
        Paths to ingest, first occurrence order preserved
    """
    seen = set(known_paths)
    fresh = []
    for path in paths:
        if path in seen:
            continue
        seen.add(path)
        fresh.append(path)
    return fresh
