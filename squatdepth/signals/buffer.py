"""Bounded history of per-frame depth samples."""

from __future__ import annotations

from typing import Iterable, List, Optional

from squatdepth.config import DepthConfig
from squatdepth.utils.logger import get_logger

log = get_logger(__name__)

DepthSample = Optional[float]


class DepthSeriesBuffer:
    """Append-only depth series with batched compaction.

    Once an append pushes the length past ``capacity``, only the most recent
    ``retain`` samples are kept. Eviction happens in one step per overflow,
    not per element, so the series length moves between ``retain`` and
    ``capacity``. ``None`` samples mark unusable frames and are kept in order.
    """

    def __init__(self, capacity: int = 2000, retain: int = 1000) -> None:
        if retain <= 0 or retain >= capacity:
            raise ValueError("retain must be positive and below capacity")
        self.capacity = capacity
        self.retain = retain
        self._samples: List[DepthSample] = []
        self.evicted = 0

    @classmethod
    def from_config(cls, config: DepthConfig) -> "DepthSeriesBuffer":
        return cls(capacity=config.buffer_capacity, retain=config.buffer_retain)

    def __len__(self) -> int:
        return len(self._samples)

    @property
    def latest(self) -> DepthSample:
        return self._samples[-1] if self._samples else None

    def append(self, values: Iterable[DepthSample]) -> DepthSample:
        """Append a batch of samples and return the most recent one.

        An empty batch leaves the series untouched and returns the previous
        most recent sample.
        """
        batch = list(values)
        if not batch:
            return self.latest

        self._samples.extend(batch)
        if len(self._samples) > self.capacity:
            dropped = len(self._samples) - self.retain
            self._samples = self._samples[-self.retain:]
            self.evicted += dropped
            log.debug("depth series compacted: dropped %d samples, kept %d", dropped, self.retain)
        return self.latest

    def snapshot(self) -> List[DepthSample]:
        """Copy of the current series, oldest first."""
        return list(self._samples)
