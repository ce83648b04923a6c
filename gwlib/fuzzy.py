# gwlib/fuzzy.py
"""Resolve a user-typed token against existing worktree names.

Rules are applied in order: exact match, then substring containment, then
Jaro-Winkler similarity. Substring ambiguity is reported as-is; only the
similarity stage may break a tie, and only when the best score is strictly
higher than the runner-up.
"""
from typing import NamedTuple, Sequence, Tuple

JARO_THRESHOLD = 0.85
WINKLER_PREFIX_SCALE = 0.1
WINKLER_MAX_PREFIX = 4


class MatchKind:
    EXACT = "exact"
    SINGLE = "single"
    AMBIGUOUS = "ambiguous"
    NONE = "none"


class Match(NamedTuple):
    kind: str
    names: Tuple[str, ...] = ()

    @property
    def name(self):
        """The matched name for exact/single outcomes, else None."""
        if self.kind in (MatchKind.EXACT, MatchKind.SINGLE):
            return self.names[0]
        return None


NO_MATCH = Match(MatchKind.NONE)


def jaro(a: str, b: str) -> float:
    if a == b:
        return 1.0
    len_a, len_b = len(a), len(b)
    if not len_a or not len_b:
        return 0.0

    window = max(max(len_a, len_b) // 2 - 1, 0)
    matched_a = [False] * len_a
    matched_b = [False] * len_b
    matches = 0
    for i, ch in enumerate(a):
        lo = max(0, i - window)
        hi = min(i + window + 1, len_b)
        for j in range(lo, hi):
            if not matched_b[j] and b[j] == ch:
                matched_a[i] = matched_b[j] = True
                matches += 1
                break
    if not matches:
        return 0.0

    transpositions = 0
    j = 0
    for i in range(len_a):
        if not matched_a[i]:
            continue
        while not matched_b[j]:
            j += 1
        if a[i] != b[j]:
            transpositions += 1
        j += 1

    m = float(matches)
    return (m / len_a + m / len_b + (m - transpositions / 2) / m) / 3


def jaro_winkler(a: str, b: str) -> float:
    score = jaro(a, b)
    prefix = 0
    for ca, cb in zip(a[:WINKLER_MAX_PREFIX], b[:WINKLER_MAX_PREFIX]):
        if ca != cb:
            break
        prefix += 1
    return score + prefix * WINKLER_PREFIX_SCALE * (1.0 - score)


def _similarity_match(token: str, candidates: Sequence[str]) -> Match:
    scored = [(c, jaro_winkler(token, c)) for c in candidates]
    scored = [(c, s) for c, s in scored if s >= JARO_THRESHOLD]
    if not scored:
        return NO_MATCH
    if len(scored) == 1:
        return Match(MatchKind.SINGLE, (scored[0][0],))

    ranked = sorted(scored, key=lambda item: item[1], reverse=True)
    if ranked[0][1] > ranked[1][1]:
        return Match(MatchKind.SINGLE, (ranked[0][0],))
    return Match(MatchKind.AMBIGUOUS, tuple(c for c, _ in scored))


def resolve(token: str, candidates: Sequence[str]) -> Match:
    """Map token to one candidate, several candidates, or nothing."""
    if not candidates:
        return NO_MATCH
    if token in candidates:
        return Match(MatchKind.EXACT, (token,))

    containing = [c for c in candidates if token in c]
    if len(containing) == 1:
        return Match(MatchKind.SINGLE, (containing[0],))
    if containing:
        return Match(MatchKind.AMBIGUOUS, tuple(containing))

    return _similarity_match(token, candidates)
