"""Tests for the CLI."""

import csv

from click.testing import CliRunner

from entropy_density.cli import main


class TestCLI:
    def test_version(self):
        r = CliRunner().invoke(main, ["--version"])
        assert r.exit_code == 0
        assert "0.1.0" in r.output

    def test_estimate(self, tmp_path):
        path = tmp_path / "zeros.bin"
        path.write_bytes(bytes(1024))
        r = CliRunner().invoke(main, ["estimate", str(path), "--widths", "1,8"])
        assert r.exit_code == 0
        assert "H<1>" in r.output
        assert "H<8>" in r.output
        assert "0.000000" in r.output

    def test_estimate_conditional(self, tmp_path):
        path = tmp_path / "alt.bin"
        path.write_bytes(b"\x55" * 256)
        r = CliRunner().invoke(main, ["estimate", str(path), "--widths", "1", "--order", "1"])
        assert r.exit_code == 0
        assert "H<1|o1>" in r.output

    def test_estimate_bad_width(self, tmp_path):
        path = tmp_path / "a.bin"
        path.write_bytes(b"abc")
        r = CliRunner().invoke(main, ["estimate", str(path), "--widths", "0"])
        assert r.exit_code == 2

    def test_estimate_missing_file(self, tmp_path):
        r = CliRunner().invoke(main, ["estimate", str(tmp_path / "missing.bin")])
        assert r.exit_code == 1

    def test_battery_csv(self, tmp_path):
        out = tmp_path / "results.csv"
        r = CliRunner().invoke(main, ["battery", "--bytes", "512", "--tests", "1,8", "--csv", str(out)])
        assert r.exit_code == 0, r.output
        rows = list(csv.reader(out.open()))
        assert rows[0] == ["label", "bytes", "H<1>", "H<8>", "min"]
        assert [row[0] for row in rows[1:]] == ["text", "constant", "white_noise", "blue_noise"]

    def test_battery_files_only(self, tmp_path):
        path = tmp_path / "in.bin"
        path.write_bytes(bytes(64))
        md = tmp_path / "report.md"
        r = CliRunner().invoke(main, ["battery", "--no-synthetic", "--tests", "8", str(path),
                                      "--markdown", str(md)])
        assert r.exit_code == 0, r.output
        assert str(path) in md.read_text()

    def test_battery_rejects_repeated_file(self, tmp_path):
        path = tmp_path / "in.bin"
        path.write_bytes(bytes(64))
        r = CliRunner().invoke(main, ["battery", "--no-synthetic", "--tests", "8", str(path), str(path)])
        assert r.exit_code == 2
        assert "already an input label" in r.output

    def test_battery_rejects_file_shadowing_builtin(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            with open("constant", "wb") as f:
                f.write(b"\xff" * 64)
            r = runner.invoke(main, ["battery", "--bytes", "64", "--tests", "8", "constant"])
            assert r.exit_code == 2
            assert "already an input label" in r.output
            r = runner.invoke(main, ["battery", "--no-synthetic", "--tests", "8", "constant"])
            assert r.exit_code == 0, r.output

    def test_battery_no_inputs(self):
        r = CliRunner().invoke(main, ["battery", "--no-synthetic"])
        assert r.exit_code == 1

    def test_battery_bad_tests(self):
        r = CliRunner().invoke(main, ["battery", "--tests", "8|x"])
        assert r.exit_code == 2

    def test_bluenoise_floats(self):
        r = CliRunner().invoke(main, ["bluenoise", "--count", "5", "--seed", "1"])
        assert r.exit_code == 0
        values = [float(line) for line in r.output.split()]
        assert len(values) == 5
        assert all(0.0 <= v < 1.0 for v in values)

    def test_bluenoise_bytes(self):
        r = CliRunner().invoke(main, ["bluenoise", "--count", "10", "--format", "bytes"])
        assert r.exit_code == 0
        assert len(r.stdout_bytes) == 10

    def test_bluenoise_deterministic(self):
        a = CliRunner().invoke(main, ["bluenoise", "--count", "20", "--seed", "9"])
        b = CliRunner().invoke(main, ["bluenoise", "--count", "20", "--seed", "9"])
        assert a.output == b.output

    def test_bluenoise_bad_multiplier(self):
        r = CliRunner().invoke(main, ["bluenoise", "--multiplier", "0"])
        assert r.exit_code == 2

    def test_env_config(self):
        r = CliRunner().invoke(main, ["bluenoise"], env={"ENTROPY_DENSITY_BLUENOISE_COUNT": "3"})
        assert r.exit_code == 0
        assert len(r.output.split()) == 3

    def test_sources_lists_profiles(self):
        r = CliRunner().invoke(main, ["sources", "--bytes", "2048"])
        assert r.exit_code == 0, r.output
        for label in ("text", "constant", "white_noise", "blue_noise"):
            assert label in r.output
        assert "H<1>=0.0000" in r.output  # constant input
        assert "2,048 B" in r.output

    def test_sources_bad_bytes(self):
        r = CliRunner().invoke(main, ["sources", "--bytes", "-1"])
        assert r.exit_code == 2
