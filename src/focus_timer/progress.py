"""Progress projection for the countdown ring."""

from __future__ import annotations


def progress(remaining: int | float, total: int | float) -> float:
    """Return `remaining / total` clamped to [0, 1]; 0.0 when `total` is not positive."""
    if total <= 0:
        return 0.0
    fraction = float(remaining) / float(total)
    return max(0.0, min(1.0, fraction))
