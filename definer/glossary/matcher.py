"""
Term resolution for ``find``: exact and partial matching plus edit-distance
suggestions.
"""
import logging
from typing import List, Optional, Sequence

from ..core.models import Definition, MatchResult, fold


logger = logging.getLogger(__name__)

SUGGESTION_THRESHOLD = 3


def levenshtein_distance(a: str, b: str) -> int:
    """
    Classic edit distance with unit insert/delete/substitute costs.

    Works row by row over code points, keeping only the previous row.
    """
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(
                current[j - 1] + 1,
                previous[j] + 1,
                previous[j - 1] + cost,
            ))
        previous = current

    return previous[-1]


def find_matches(query: str, definitions: Sequence[Definition]) -> MatchResult:
    """
    Scan ``definitions`` in order for ``query``.

    The first definition whose term or alias equals the query wins and stops
    the scan; partial hits are only reported when there is no exact hit.
    """
    wanted = fold(query)
    partial: List[Definition] = []

    for definition in definitions:
        keys = [fold(key) for key in definition.keys()]

        if wanted in keys:
            logger.debug(f"Exact match for '{query}': {definition.term}")
            return MatchResult(exact=definition)

        if any(wanted in key for key in keys):
            partial.append(definition)

    logger.debug(f"No exact match for '{query}', {len(partial)} partial")
    return MatchResult(partial=partial)


def suggest(
    query: str,
    definitions: Sequence[Definition],
    threshold: int = SUGGESTION_THRESHOLD
) -> Optional[str]:
    """
    Closest term or alias to ``query`` by edit distance.

    Ties keep the first key seen. Returns None when the collection is empty or
    nothing is within ``threshold``.
    """
    wanted = fold(query)
    best: Optional[str] = None
    best_distance: Optional[int] = None

    for definition in definitions:
        for key in definition.keys():
            distance = levenshtein_distance(wanted, fold(key))
            if best_distance is None or distance < best_distance:
                best, best_distance = key, distance

    if best_distance is None or best_distance > threshold:
        return None
    return best
