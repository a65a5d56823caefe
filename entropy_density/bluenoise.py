"""Progressive best-candidate blue noise on the unit torus ``[0, 1)``.

Each new sample is the best of ``candidate_multiplier * n`` uniform candidates,
where "best" means farthest from its nearest existing sample (distances wrap
around at 1.0).  Samples are only ever appended, so the first N samples of a
longer sequence are themselves a complete N-sample sequence.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from loguru import logger

from entropy_density.errors import InvalidConfigurationError
from entropy_density.rng import uniform


def _check_config(target_count: int | None, candidate_multiplier: int) -> None:
    if target_count is not None and target_count < 0:
        raise InvalidConfigurationError(
            f"target sample count must be >= 0, got {target_count}"
        )
    if candidate_multiplier < 1:
        raise InvalidConfigurationError(
            f"candidate multiplier must be >= 1, got {candidate_multiplier}"
        )


def _check_samples(samples: Sequence[float]) -> list[float]:
    values = [float(s) for s in samples]
    bad = [v for v in values if not 0.0 <= v < 1.0]
    if bad:
        raise InvalidConfigurationError(
            f"samples must lie in [0, 1), got {bad[0]!r}"
        )
    return values


class BlueNoiseSampler:
    """Growable blue-noise sequence with a sorted shadow for neighbour lookups.

    Usage::

        sampler = BlueNoiseSampler(make_rng(7), candidate_multiplier=4)
        sampler.extend_to(256)
        sampler.samples[:10]
    """

    def __init__(
        self,
        rng: np.random.Generator,
        candidate_multiplier: int = 1,
        samples: Sequence[float] = (),
    ) -> None:
        _check_config(None, candidate_multiplier)
        self._rng = rng
        self.candidate_multiplier = candidate_multiplier
        self._samples = _check_samples(samples)
        self._size = len(self._samples)
        self._sorted = np.empty(max(16, self._size), dtype=np.float64)
        self._sorted[: self._size] = np.sort(self._samples)

    def __len__(self) -> int:
        return self._size

    @property
    def samples(self) -> list[float]:
        """Samples in generation order."""
        return list(self._samples)

    @property
    def sorted_samples(self) -> np.ndarray:
        return self._sorted[: self._size].copy()

    # ── internals ──

    def _insert_sorted(self, value: float, pos: int) -> None:
        if self._size == len(self._sorted):
            grown = np.empty(2 * len(self._sorted), dtype=np.float64)
            grown[: self._size] = self._sorted[: self._size]
            self._sorted = grown
        self._sorted[pos + 1: self._size + 1] = self._sorted[pos: self._size]
        self._sorted[pos] = value
        self._size += 1

    def _best_candidate(self) -> tuple[float, int]:
        """Pick the candidate with the largest nearest-neighbour distance.

        Returns the value and its lower-bound position in the sorted shadow.
        """
        n = self._size
        shadow = self._sorted[:n]
        candidates = uniform(self._rng, self.candidate_multiplier * n)
        pos = np.searchsorted(shadow, candidates, side="left")

        before = np.where(pos > 0, shadow[np.maximum(pos - 1, 0)], shadow[-1] - 1.0)
        after = np.where(pos < n, shadow[np.minimum(pos, n - 1)], shadow[0] + 1.0)
        nearest = np.minimum(candidates - before, after - candidates)

        best = int(np.argmax(nearest))  # first maximum wins ties
        return float(candidates[best]), int(pos[best])

    # ── public API ──

    def add(self) -> float:
        """Append one sample and return it."""
        if self._size == 0:
            value, pos = float(uniform(self._rng)), 0
        else:
            value, pos = self._best_candidate()
        self._samples.append(value)
        self._insert_sorted(value, pos)
        return value

    def extend_to(self, target_count: int) -> list[float]:
        """Grow to *target_count* samples and return the first *target_count*."""
        _check_config(target_count, self.candidate_multiplier)
        start = self._size
        while self._size < target_count:
            self.add()
        if self._size > start:
            logger.debug(
                "blue noise: {} -> {} samples (x{} candidates)",
                start, self._size, self.candidate_multiplier,
            )
        return self._samples[:target_count]


def generate(
    existing: Sequence[float],
    target_count: int,
    rng: np.random.Generator,
    candidate_multiplier: int = 1,
) -> list[float]:
    """Extend *existing* to *target_count* blue-noise samples.

    If *existing* already holds *target_count* or more samples, its first
    *target_count* are returned and *rng* is not touched.  Otherwise the
    result starts with *existing* unchanged followed by new samples drawn
    from *rng*; the same seed gives the same sequence.
    """
    _check_config(target_count, candidate_multiplier)
    existing = _check_samples(existing)
    if target_count <= len(existing):
        return existing[:target_count]
    sampler = BlueNoiseSampler(rng, candidate_multiplier, existing)
    return sampler.extend_to(target_count)


def quantize_to_bytes(samples: Sequence[float]) -> bytes:
    """Map samples in ``[0, 1)`` to bytes with ``min(floor(f * 256), 255)``."""
    arr = np.asarray(samples, dtype=np.float64)
    return np.minimum(np.floor(arr * 256), 255).astype(np.uint8).tobytes()


def torus_gaps(samples: Sequence[float]) -> np.ndarray:
    """Gaps between neighbouring samples on the unit circle, wrap-around included."""
    s = np.sort(np.asarray(samples, dtype=np.float64))
    if len(s) == 0:
        return s
    return np.append(np.diff(s), s[0] + 1.0 - s[-1])


def gap_ratio(samples: Sequence[float]) -> float:
    """Largest over smallest torus gap; ``inf`` when two samples coincide.

    Close to 1 for evenly spread points, large for white noise.
    """
    gaps = torus_gaps(samples)
    if len(gaps) == 0:
        raise InvalidConfigurationError("gap ratio needs at least one sample")
    smallest = float(gaps.min())
    if smallest == 0.0:
        return float("inf")
    return float(gaps.max()) / smallest
