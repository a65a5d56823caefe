"""A configurable battery of entropy-density estimates."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from loguru import logger

from entropy_density.bitreader import MAX_WIDTH, Buffer, check_width, symbol_count
from entropy_density.errors import InvalidConfigurationError
from entropy_density.estimator import estimate, estimate_conditional
from entropy_density.sources.base import InputSource


@dataclass(frozen=True)
class EntropyTest:
    """One estimator configuration: symbol width, optional Markov order and stride."""

    width: int
    order: int | None = None
    advance: int | None = None

    def __post_init__(self) -> None:
        check_width(self.width, self.advance)
        if self.order is not None:
            if self.order < 0:
                raise InvalidConfigurationError(f"order must be >= 0, got {self.order}")
            if self.width * (self.order + 1) > MAX_WIDTH:
                raise InvalidConfigurationError(
                    f"{self.label} needs a {self.width * (self.order + 1)}-bit context key"
                )

    @property
    def label(self) -> str:
        text = f"H<{self.width}"
        if self.order is not None:
            text += f"|o{self.order}"
        if self.advance is not None:
            text += f"@{self.advance}"
        return text + ">"

    def run(self, data: Buffer) -> float:
        if self.order is None:
            return estimate(data, self.width, advance=self.advance)
        return estimate_conditional(data, self.width, self.order, advance=self.advance)

    def undersampled(self, n_bytes: int) -> bool:
        """True when the estimate for *n_bytes* is biased by unfilled bins."""
        order = self.order or 0
        observations = symbol_count(n_bytes, self.width, self.advance) - order
        return observations < 2 ** (self.width * (order + 1))


DEFAULT_TESTS: tuple[EntropyTest, ...] = (
    EntropyTest(1),
    EntropyTest(2),
    EntropyTest(4),
    EntropyTest(8),
    EntropyTest(12),
    EntropyTest(16),
    EntropyTest(20),
    EntropyTest(24),
    EntropyTest(8, order=1),
    EntropyTest(4, order=2),
    EntropyTest(8, advance=1),
)

TEST_TABLE: dict[str, EntropyTest] = {t.label: t for t in DEFAULT_TESTS}

_TOKEN = re.compile(r"^(?:H<)?(\d+)(?:\|o?(\d+))?(?:@(\d+))?>?$")


def parse_tests(text: str) -> list[EntropyTest]:
    """Build a battery from ``"1,4,8|o1,8@4"`` style text.

    Each comma-separated token is a width, optionally followed by ``|oN``
    (Markov order) and ``@A`` (advance).  Labels such as ``H<8|o1>`` are
    accepted as well.
    """
    tests: list[EntropyTest] = []
    for token in (t.strip() for t in text.split(",")):
        if not token:
            continue
        if token in TEST_TABLE:
            tests.append(TEST_TABLE[token])
            continue
        m = _TOKEN.match(token)
        if m is None:
            raise InvalidConfigurationError(f"cannot parse test {token!r}")
        width, order, advance = (int(g) if g is not None else None for g in m.groups())
        tests.append(EntropyTest(width, order=order, advance=advance))
    if not tests:
        raise InvalidConfigurationError("no tests given")
    return tests


@dataclass
class BatteryResult:
    """All estimates for one input."""

    label: str
    n_bytes: int
    values: dict[str, float] = field(default_factory=dict)
    undersampled: list[str] = field(default_factory=list)

    @property
    def min_entropy(self) -> float:
        """Lowest density across the battery (0.0 for an empty battery)."""
        return min(self.values.values(), default=0.0)


def run_battery(
    inputs: Mapping[str, bytes] | Iterable[tuple[str, bytes]],
    tests: Sequence[EntropyTest] = DEFAULT_TESTS,
) -> list[BatteryResult]:
    """Run every test on every input, in order."""
    items = inputs.items() if isinstance(inputs, Mapping) else inputs
    results: list[BatteryResult] = []
    for label, data in items:
        t0 = time.monotonic()
        result = BatteryResult(label=label, n_bytes=len(data))
        for test in tests:
            result.values[test.label] = test.run(data)
            if test.undersampled(len(data)):
                result.undersampled.append(test.label)
        logger.info(
            "{}: {} bytes, {} tests, min={:.4f} [{:.2f}s]",
            label, len(data), len(tests), result.min_entropy, time.monotonic() - t0,
        )
        results.append(result)
    return results


def collect_inputs(
    sources: Iterable[InputSource], n_bytes: int | None = None
) -> dict[str, bytes]:
    """Collect bytes from each available source, keyed by source name."""
    inputs: dict[str, bytes] = {}
    for src in sources:
        if not src.is_available():
            logger.warning("skipping unavailable source {!r}", src.name)
            continue
        inputs[src.name] = src.collect(n_bytes)
    return inputs
