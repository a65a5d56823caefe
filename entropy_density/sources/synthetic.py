"""Generated reference inputs: constant, white noise and blue noise bytes."""

from __future__ import annotations

from entropy_density.bluenoise import generate, quantize_to_bytes
from entropy_density.rng import DEFAULT_SEED, make_rng, random_bytes
from entropy_density.sources.base import InputSource

DEFAULT_SAMPLE_BYTES = 4096


class ConstantSource(InputSource):
    """A single repeated byte.  Zero entropy at every width."""

    name = "constant"
    description = "Repeated byte value (zero-entropy reference)"

    def __init__(self, value: int = 0) -> None:
        if not 0 <= value <= 255:
            raise ValueError(f"byte value must be in [0, 255], got {value}")
        self.value = value

    def collect(self, n_bytes: int | None = None) -> bytes:
        n = DEFAULT_SAMPLE_BYTES if n_bytes is None else n_bytes
        return bytes([self.value]) * n


class WhiteNoiseSource(InputSource):
    """Uniform bytes from a seeded PCG64 generator."""

    name = "white_noise"
    description = "Seeded uniform random bytes"

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        self.seed = seed

    def collect(self, n_bytes: int | None = None) -> bytes:
        n = DEFAULT_SAMPLE_BYTES if n_bytes is None else n_bytes
        return random_bytes(make_rng(self.seed), n)


class BlueNoiseSource(InputSource):
    """Best-candidate blue noise samples quantized to bytes.

    Generation is quadratic in the byte count, so keep *n_bytes* in the
    thousands.
    """

    name = "blue_noise"
    description = "Seeded best-candidate blue noise, quantized to bytes"

    def __init__(self, seed: int = DEFAULT_SEED, candidate_multiplier: int = 1) -> None:
        self.seed = seed
        self.candidate_multiplier = candidate_multiplier

    def collect(self, n_bytes: int | None = None) -> bytes:
        n = DEFAULT_SAMPLE_BYTES if n_bytes is None else n_bytes
        samples = generate([], n, make_rng(self.seed), self.candidate_multiplier)
        return quantize_to_bytes(samples)
