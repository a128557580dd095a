from __future__ import annotations

from typing import List

_SEED_ROWS = 8


class BinomialCache:
    """Rows of Pascal's triangle, grown on demand and never shrunk."""

    def __init__(self, seed_rows: int = _SEED_ROWS) -> None:
        self._rows: List[List[int]] = [[1]]
        self._grow(max(int(seed_rows), 1) - 1)

    @property
    def depth(self) -> int:
        return len(self._rows)

    def row(self, n: int) -> tuple[int, ...]:
        if n < 0:
            raise ValueError("n must be non-negative.")
        self._grow(n)
        return tuple(self._rows[n])

    def coefficient(self, n: int, k: int) -> float:
        """Return C(n, k) for ``0 <= k <= n``."""

        if n < 0 or k < 0 or k > n:
            raise ValueError(f"Binomial coefficient C({n}, {k}) is undefined.")
        self._grow(n)
        return float(self._rows[n][k])

    def _grow(self, n: int) -> None:
        while len(self._rows) <= n:
            prev = self._rows[-1]
            row = [1] + [prev[i - 1] + prev[i] for i in range(1, len(prev))] + [1]
            self._rows.append(row)


_shared_cache = BinomialCache()


def binomial(n: int, k: int) -> float:
    """C(n, k) from the shared cache."""
    return _shared_cache.coefficient(n, k)


__all__ = ["BinomialCache", "binomial"]
