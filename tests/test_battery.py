"""Tests for the estimator battery."""

import pytest

from entropy_density.battery import (
    DEFAULT_TESTS,
    TEST_TABLE,
    BatteryResult,
    EntropyTest,
    collect_inputs,
    parse_tests,
    run_battery,
)
from entropy_density.errors import InvalidConfigurationError
from entropy_density.rng import make_rng, random_bytes
from entropy_density.sources import ConstantSource, FileSource


class TestEntropyTest:
    def test_labels(self):
        assert EntropyTest(8).label == "H<8>"
        assert EntropyTest(8, order=1).label == "H<8|o1>"
        assert EntropyTest(8, advance=4).label == "H<8@4>"
        assert EntropyTest(4, order=2, advance=1).label == "H<4|o2@1>"

    def test_run_dispatch(self):
        data = b"\x55" * 64
        assert EntropyTest(1).run(data) == pytest.approx(1.0)
        assert EntropyTest(1, order=1).run(data) == 0.0
        assert EntropyTest(2, advance=1).run(data) == pytest.approx(0.5, abs=0.01)

    def test_order_zero_is_plain(self):
        data = random_bytes(make_rng(1), 2000)
        assert EntropyTest(8, order=0).run(data) == pytest.approx(EntropyTest(8).run(data))

    @pytest.mark.parametrize("kwargs", [
        {"width": 0},
        {"width": 65},
        {"width": 8, "advance": 0},
        {"width": 8, "order": -1},
        {"width": 32, "order": 2},
    ])
    def test_rejects_bad_config(self, kwargs):
        with pytest.raises(InvalidConfigurationError):
            EntropyTest(**kwargs)

    def test_undersampled(self):
        assert EntropyTest(16).undersampled(1000)
        assert not EntropyTest(8).undersampled(1000)
        assert EntropyTest(8, order=1).undersampled(1000)

    def test_hashable(self):
        assert len({EntropyTest(8), EntropyTest(8), EntropyTest(8, order=1)}) == 2


class TestDefaults:
    def test_unique_labels(self):
        assert len(TEST_TABLE) == len(DEFAULT_TESTS)

    def test_lookup(self):
        assert TEST_TABLE["H<8|o1>"] == EntropyTest(8, order=1)


class TestParse:
    def test_widths(self):
        assert parse_tests("1, 4,8") == [EntropyTest(1), EntropyTest(4), EntropyTest(8)]

    def test_order_and_advance(self):
        assert parse_tests("8|o1,8|2,8@4,4|o1@2") == [
            EntropyTest(8, order=1),
            EntropyTest(8, order=2),
            EntropyTest(8, advance=4),
            EntropyTest(4, order=1, advance=2),
        ]

    def test_labels(self):
        assert parse_tests("H<8|o1>,H<3>") == [EntropyTest(8, order=1), EntropyTest(3)]

    @pytest.mark.parametrize("text", ["x", "8|", "", ",", "0", "99"])
    def test_invalid(self, text):
        with pytest.raises(InvalidConfigurationError):
            parse_tests(text)


class TestRunBattery:
    def test_rows_and_columns(self):
        tests = parse_tests("1,8,8|o1")
        inputs = {"zeros": bytes(512), "noise": random_bytes(make_rng(3), 4096)}
        results = run_battery(inputs, tests)
        assert [r.label for r in results] == ["zeros", "noise"]
        assert list(results[0].values) == ["H<1>", "H<8>", "H<8|o1>"]
        assert results[0].min_entropy == 0.0
        assert results[1].values["H<8>"] > 0.95

    def test_pairs_keep_order(self):
        results = run_battery([("b", b"\x01"), ("a", b"\x02")], [EntropyTest(8)])
        assert [r.label for r in results] == ["b", "a"]

    def test_flags_undersampled(self):
        results = run_battery({"short": b"abc"}, [EntropyTest(1), EntropyTest(8)])
        assert results[0].undersampled == ["H<8>"]

    def test_min_of_empty_battery(self):
        assert BatteryResult("x", 0).min_entropy == 0.0

    def test_min_entropy(self):
        r = BatteryResult("x", 10, values={"a": 0.9, "b": 0.4, "c": 0.7})
        assert r.min_entropy == 0.4


class TestCollectInputs:
    def test_skips_missing(self, tmp_path):
        present = tmp_path / "present.bin"
        present.write_bytes(b"\x01\x02")
        inputs = collect_inputs([
            FileSource(present),
            FileSource(tmp_path / "missing.bin"),
            ConstantSource(),
        ], n_bytes=16)
        assert inputs == {"present.bin": b"\x01\x02", "constant": bytes(16)}
