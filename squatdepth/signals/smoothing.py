"""Two-pass smoothing of a finalized depth series.

Pass 1 is a median of five that knocks out single-frame landmark glitches;
pass 2 is a three-sample moving average that rounds off the remaining
staircase. Both passes keep ``None`` samples as ``None`` and only use the
non-null neighbours of a valid sample.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

DepthSample = Optional[float]


def _present(values: Sequence[DepthSample]) -> List[float]:
    return [v for v in values if v is not None]


def median5(series: Sequence[DepthSample], i: int) -> DepthSample:
    """Median of the non-null samples in ``i-2..i+2``.

    With fewer than three usable values the sample is returned unchanged.
    For an even count the upper of the two middle values is used.
    """
    window = sorted(_present(series[i - 2:i + 3]))
    if len(window) < 3:
        return series[i]
    return window[len(window) // 2]


def mean3(series: Sequence[DepthSample], i: int) -> DepthSample:
    window = _present(series[i - 1:i + 2])
    if not window:
        return None
    return sum(window) / len(window)


class Smoother:
    """Median-of-5 followed by moving-average-of-3, run once per session."""

    def median_pass(self, series: Sequence[DepthSample]) -> List[DepthSample]:
        # Updated in place left to right: later windows see earlier medians.
        out = list(series)
        n = len(out)
        for i in range(2, n - 2):
            if out[i] is None:
                continue
            out[i] = median5(out, i)
        return out

    def average_pass(self, series: Sequence[DepthSample]) -> List[DepthSample]:
        n = len(series)
        out = list(series)
        for i in range(1, n - 1):
            if series[i] is None:
                continue
            out[i] = mean3(series, i)
        return out

    def smooth(self, series: Sequence[DepthSample]) -> List[DepthSample]:
        return self.average_pass(self.median_pass(series))
