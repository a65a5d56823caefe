"""CSV and Markdown output for battery results."""

from __future__ import annotations

import csv
import io
import platform
from datetime import datetime
from pathlib import Path
from typing import IO, Sequence

from entropy_density.battery import BatteryResult, EntropyTest


def _header(tests: Sequence[EntropyTest]) -> list[str]:
    return ["label", "bytes", *(t.label for t in tests), "min"]


def _row(result: BatteryResult, tests: Sequence[EntropyTest]) -> list[str]:
    cells = [f"{result.values[t.label]:.6f}" for t in tests]
    return [result.label, str(result.n_bytes), *cells, f"{result.min_entropy:.6f}"]


def write_csv(
    results: Sequence[BatteryResult],
    tests: Sequence[EntropyTest],
    output: str | Path | IO[str],
) -> None:
    """One row per input, one column per test, plus ``bytes`` and ``min``."""
    if isinstance(output, (str, Path)):
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", newline="") as f:
            write_csv(results, tests, f)
        return
    writer = csv.writer(output)
    writer.writerow(_header(tests))
    for r in results:
        writer.writerow(_row(r, tests))


def to_csv(results: Sequence[BatteryResult], tests: Sequence[EntropyTest]) -> str:
    buf = io.StringIO()
    write_csv(results, tests, buf)
    return buf.getvalue()


def generate_markdown_report(
    results: Sequence[BatteryResult],
    tests: Sequence[EntropyTest],
    output_path: str | Path | None = None,
) -> str:
    """Markdown table of all results, with undersampled cells starred."""
    now = datetime.now()
    header = _header(tests)
    lines = [
        "# Entropy Density Report",
        "",
        f"**Generated:** {now.strftime('%Y-%m-%d %H:%M:%S')}",
        f"**Machine:** {platform.node()} ({platform.machine()}, {platform.system()} {platform.release()})",
        f"**Python:** {platform.python_version()}",
        f"**Tests in battery:** {len(tests)}",
        "",
        "| " + " | ".join(header) + " |",
        "|" + "|".join("---" for _ in header) + "|",
    ]
    for r in results:
        cells = []
        for t in tests:
            mark = "*" if t.label in r.undersampled else ""
            cells.append(f"{r.values[t.label]:.4f}{mark}")
        lines.append(
            f"| {r.label} | {r.n_bytes:,} | " + " | ".join(cells) + f" | {r.min_entropy:.4f} |"
        )

    lines += [
        "",
        "\\* Fewer symbols than possible symbol values: the estimate is biased "
        "and should not be read as a property of the source.",
        "",
    ]
    report = "\n".join(lines)

    if output_path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(report)

    return report
