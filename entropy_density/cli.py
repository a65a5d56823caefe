"""CLI for entropy-density."""

from __future__ import annotations

import sys

import click

from entropy_density import __version__
from entropy_density.errors import InvalidConfigurationError


@click.group(context_settings={"auto_envvar_prefix": "ENTROPY_DENSITY"})
@click.version_option(__version__)
@click.option("-v", "--verbose", count=True, help="-v for progress, -vv for debug output.")
def main(verbose: int) -> None:
    """entropy-density: entropy per bit of binary data, with blue noise for reference."""
    from entropy_density.log import configure_logging

    configure_logging(["WARNING", "INFO", "DEBUG"][min(verbose, 2)])


# ────────────────────────────────────────────────────────────
# Estimates
# ────────────────────────────────────────────────────────────


@main.command()
@click.option("--bytes", "n_bytes", default=None, type=int,
              help="Bytes per generated input (default: each source's own).")
@click.option("--seed", default=None, type=int, help="Seed for the noise inputs.")
def sources(n_bytes: int | None, seed: int | None) -> None:
    """List the built-in inputs with a quick H<1> / H<8> profile."""
    from entropy_density.rng import DEFAULT_SEED
    from entropy_density.sources import default_sources

    if n_bytes is not None and n_bytes < 0:
        raise click.BadParameter("must be >= 0", param_hint="--bytes")

    found = default_sources(DEFAULT_SEED if seed is None else seed)
    click.echo(f"{len(found)} built-in input(s):\n")
    for src in found:
        p = src.quick_profile(n_bytes)
        flag = "*" if p["undersampled"] else ""
        click.echo(
            f"  {p['label']:<12} {p['bytes']:>8,} B  "
            f"H<1>={p['H<1>']:.4f}  H<8>={p['H<8>']:.4f}{flag}  {src.description}"
        )


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option("--widths", default="1,4,8,16", show_default=True,
              help="Comma-separated symbol widths in bits.")
@click.option("--order", default=None, type=int, help="Markov order (conditional entropy).")
@click.option("--advance", default=None, type=int, help="Bits between symbol starts.")
def estimate(files: tuple[str, ...], widths: str, order: int | None, advance: int | None) -> None:
    """Entropy per bit of FILES at each symbol width.

    Examples:

        entropy-density estimate /bin/ls --widths 1,8,16

        entropy-density estimate data.bin --widths 8 --order 1
    """
    tests = _build_tests(widths, order, advance)
    for path in files:
        data = _load(path)
        click.echo(f"{path} ({len(data):,} bytes)")
        for test in tests:
            flag = "  (undersampled)" if test.undersampled(len(data)) else ""
            click.echo(f"  {test.label:<14} {test.run(data):.6f}{flag}")


@main.command()
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False))
@click.option("--tests", "test_spec", default=None,
              help="Tests such as '1,4,8,8|o1,8@4' (default: built-in battery).")
@click.option("--bytes", "n_bytes", default=None, type=int,
              help="Bytes per synthetic input (files are read whole).")
@click.option("--seed", default=None, type=int, help="Seed for the noise inputs.")
@click.option("--synthetic/--no-synthetic", default=True, show_default=True,
              help="Include the text, constant, white and blue noise inputs.")
@click.option("--csv", "csv_path", default=None, type=click.Path(dir_okay=False),
              help="Write results as CSV.")
@click.option("--markdown", "md_path", default=None, type=click.Path(dir_okay=False),
              help="Write a Markdown report.")
def battery(
    files: tuple[str, ...],
    test_spec: str | None,
    n_bytes: int | None,
    seed: int | None,
    synthetic: bool,
    csv_path: str | None,
    md_path: str | None,
) -> None:
    """Run the estimator battery on synthetic inputs and FILES."""
    from rich.console import Console
    from rich.table import Table

    from entropy_density.battery import DEFAULT_TESTS, collect_inputs, parse_tests, run_battery
    from entropy_density.report import generate_markdown_report, write_csv
    from entropy_density.rng import DEFAULT_SEED
    from entropy_density.sources import default_sources

    try:
        tests = parse_tests(test_spec) if test_spec else list(DEFAULT_TESTS)
    except InvalidConfigurationError as e:
        raise click.BadParameter(str(e), param_hint="--tests")
    if n_bytes is not None and n_bytes < 0:
        raise click.BadParameter("must be >= 0", param_hint="--bytes")

    inputs: dict[str, bytes] = {}
    if synthetic:
        inputs.update(collect_inputs(default_sources(DEFAULT_SEED if seed is None else seed), n_bytes))
    for path in files:
        if path in inputs:
            raise click.BadParameter(
                f"{path!r} is already an input label; pass each file once "
                "and rename files that shadow a built-in input",
                param_hint="FILES",
            )
        inputs[path] = _load(path)
    if not inputs:
        click.echo("No inputs: pass FILES or drop --no-synthetic.", err=True)
        sys.exit(1)

    results = run_battery(inputs, tests)

    table = Table(title=f"Entropy per bit ({len(tests)} tests)")
    table.add_column("Input")
    table.add_column("Bytes", justify="right")
    for t in tests:
        table.add_column(t.label, justify="right")
    table.add_column("Min", justify="right")
    for r in results:
        cells = [
            f"{r.values[t.label]:.4f}" + ("*" if t.label in r.undersampled else "")
            for t in tests
        ]
        table.add_row(r.label, f"{r.n_bytes:,}", *cells, f"{r.min_entropy:.4f}")
    Console().print(table)
    click.echo("* undersampled: fewer symbols than possible values, estimate is biased")

    if csv_path:
        write_csv(results, tests, csv_path)
        click.echo(f"CSV saved to: {csv_path}")
    if md_path:
        generate_markdown_report(results, tests, md_path)
        click.echo(f"Report saved to: {md_path}")


# ────────────────────────────────────────────────────────────
# Blue noise
# ────────────────────────────────────────────────────────────


@main.command()
@click.option("--count", default=256, show_default=True, type=int, help="Number of samples.")
@click.option("--seed", default=None, type=int, help="Generator seed (default: fixed seed).")
@click.option("--multiplier", default=1, show_default=True, type=int,
              help="Candidates per existing sample.")
@click.option("--format", "fmt", type=click.Choice(["float", "bytes"]), default="float",
              help="One float per line, or raw quantized bytes.")
def bluenoise(count: int, seed: int | None, multiplier: int, fmt: str) -> None:
    """Generate a progressive blue noise sequence on [0, 1).

    Examples:

        entropy-density bluenoise --count 16

        entropy-density bluenoise --count 4096 --format bytes > blue.bin
    """
    from entropy_density.bluenoise import generate, quantize_to_bytes
    from entropy_density.rng import DEFAULT_SEED, make_rng

    rng = make_rng(DEFAULT_SEED if seed is None else seed)
    try:
        samples = generate([], count, rng, multiplier)
    except InvalidConfigurationError as e:
        raise click.BadParameter(str(e))

    if fmt == "bytes":
        out = click.get_binary_stream("stdout")
        out.write(quantize_to_bytes(samples))
        out.flush()
    else:
        for value in samples:
            click.echo(repr(value))


# ────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────


def _build_tests(widths: str, order: int | None, advance: int | None):
    from entropy_density.battery import EntropyTest

    try:
        values = [int(w) for w in widths.split(",") if w.strip()]
    except ValueError:
        raise click.BadParameter(f"not a list of integers: {widths!r}", param_hint="--widths")
    if not values:
        raise click.BadParameter("no widths given", param_hint="--widths")
    try:
        return [EntropyTest(w, order=order, advance=advance) for w in values]
    except InvalidConfigurationError as e:
        raise click.BadParameter(str(e), param_hint="--widths")


def _load(path: str) -> bytes:
    """Read a file, exiting with status 1 if it cannot be read."""
    from entropy_density.sources import FileSource

    try:
        return FileSource(path).collect()
    except OSError as e:
        click.echo(f"Error: cannot read {path}: {e.strerror or e}", err=True)
        sys.exit(1)
