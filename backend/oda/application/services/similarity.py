"""Edit-distance matching for file names that are almost, but not exactly, right."""

from collections.abc import Sequence

from oda.domain.entities import PublicData


def levenshtein_distance(a: str, b: str) -> int:
    """Classic Levenshtein distance over code points (unit costs)."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (ca != cb),
                )
            )
        previous = current
    return previous[-1]


def closest_match(query: str, candidates: Sequence[PublicData]) -> PublicData | None:
    """Candidate whose name is closest to ``query``; ties keep the earlier one."""
    best: PublicData | None = None
    best_distance = 0
    for candidate in candidates:
        distance = levenshtein_distance(query, candidate.file_data_name or "")
        if best is None or distance < best_distance:
            best, best_distance = candidate, distance
    return best
