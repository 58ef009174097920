from __future__ import annotations


def distance(a: str, b: str) -> int:
    """Case-insensitive Levenshtein distance between two strings.

    Uses a single rolling cost row sized to the shorter input.
    """
    s1 = a.upper()
    s2 = b.upper()

    # keep the row over the shorter string
    if len(s2) > len(s1):
        s1, s2 = s2, s1

    m = len(s1)
    n = len(s2)
    if n == 0:
        return m

    costs = list(range(n + 1))
    for i, c1 in enumerate(s1):
        corner = i
        costs[0] = i + 1
        for j, c2 in enumerate(s2):
            upper = costs[j + 1]
            if c1 == c2:
                costs[j + 1] = corner
            else:
                costs[j + 1] = min(costs[j], upper, corner) + 1
            corner = upper

    return costs[n]
