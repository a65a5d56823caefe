"""Tests for the explicit random generator helpers."""

import numpy as np
import pytest

from entropy_density.rng import make_rng, random_bytes, uniform, uniform_uint64


class TestMakeRng:
    def test_same_seed_same_stream(self):
        assert np.array_equal(uniform(make_rng(5), 10), uniform(make_rng(5), 10))

    def test_different_seeds(self):
        assert random_bytes(make_rng(1), 32) != random_bytes(make_rng(2), 32)

    def test_unseeded(self):
        assert isinstance(make_rng(), np.random.Generator)


class TestDraws:
    def test_uniform_range(self):
        vals = uniform(make_rng(0), 1000)
        assert np.all(vals >= 0) and np.all(vals < 1)

    def test_uint64(self):
        vals = uniform_uint64(make_rng(0), 100)
        assert vals.dtype == np.uint64
        assert vals.max() > 2**63  # high bits are populated

    @pytest.mark.parametrize("n", [0, 1, 7, 8, 9, 1000])
    def test_random_bytes_length(self, n):
        data = random_bytes(make_rng(0), n)
        assert isinstance(data, bytes)
        assert len(data) == n

    def test_random_bytes_prefix_stable(self):
        assert random_bytes(make_rng(3), 16)[:5] == random_bytes(make_rng(3), 5)

    def test_negative_length(self):
        with pytest.raises(ValueError):
            random_bytes(make_rng(0), -1)
