"""
Nearest-timestamp lookup over sorted auxiliary file indices.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, Sequence

from ..core import config as C
from .models import TimestampedFileRef


def _identity(v: Any) -> Any:
    return v


def _ref_time(ref: TimestampedFileRef) -> int:
    return ref.timestamp_ms


def _lower_bound(items: Sequence[Any], t: int, key: Callable[[Any], int] = _identity) -> int:
    """First position whose time is >= t (len(items) if none)."""
    lo, hi = 0, len(items)
    while lo < hi:
        mid = (lo + hi) // 2
        if key(items[mid]) < t:
            lo = mid + 1
        else:
            hi = mid
    return lo


def nearest_index(items: Sequence[Any], target: float, tolerance: int = C.MATCH_TOLERANCE_MS,
                  key: Callable[[Any], int] = _identity) -> Optional[int]:
    """
    Position of the entry closest to target, or None when the best |dt| > tolerance.

    A plain binary search stops next to the answer, not on it, so both the
    floor (lo - 1) and ceiling (lo) of the insertion point are compared.
    Equal distances resolve to the earlier entry; duplicate timestamps resolve
    to the first of the run.
    """
    n = len(items)
    if n == 0:
        return None
    lo = _lower_bound(items, target, key)

    best: Optional[int] = None
    best_dt = 0
    if lo > 0:
        floor_t = key(items[lo - 1])
        best = _lower_bound(items, floor_t, key)
        best_dt = abs(target - floor_t)
    if lo < n:
        dt = abs(key(items[lo]) - target)
        if best is None or dt < best_dt:
            best = lo
            best_dt = dt

    if best is None or best_dt > tolerance:
        return None
    return best


def resolve(index: Sequence[TimestampedFileRef], target_ms: float,
            tolerance_ms: int = C.MATCH_TOLERANCE_MS) -> Optional[TimestampedFileRef]:
    """Closest file reference to target_ms within tolerance_ms, else None."""
    idx = nearest_index(index, target_ms, tolerance_ms, key=_ref_time)
    return None if idx is None else index[idx]


class AuxIndex:
    """Time-indexed auxiliary file list with 'nearest(t)' lookup."""

    def __init__(self, refs: Iterable[TimestampedFileRef] = ()):
        self._refs: List[TimestampedFileRef] = []
        for ref in refs:
            self.add(ref)
        self.finalize()

    def add(self, ref: TimestampedFileRef):
        self._refs.append(ref)

    def finalize(self):
        # sorted() is stable: equal timestamps keep discovery order
        self._refs = sorted(self._refs, key=_ref_time)

    def __len__(self) -> int:
        return len(self._refs)

    def __iter__(self):
        return iter(self._refs)

    def __getitem__(self, i: int) -> TimestampedFileRef:
        return self._refs[i]

    @property
    def refs(self) -> List[TimestampedFileRef]:
        return list(self._refs)

    def nearest(self, t_ms: int, tol: int = C.MATCH_TOLERANCE_MS) -> Optional[TimestampedFileRef]:
        """Return the ref closest to t_ms if |dt| <= tol; otherwise None."""
        return resolve(self._refs, t_ms, tol)
