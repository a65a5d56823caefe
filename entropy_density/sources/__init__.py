"""Battery input sources."""

from __future__ import annotations

from entropy_density.rng import DEFAULT_SEED
from entropy_density.sources.base import InputSource
from entropy_density.sources.literal import FileSource, TextSource
from entropy_density.sources.synthetic import (
    DEFAULT_SAMPLE_BYTES,
    BlueNoiseSource,
    ConstantSource,
    WhiteNoiseSource,
)

ALL_SOURCES: list[type[InputSource]] = [
    FileSource,
    TextSource,
    ConstantSource,
    WhiteNoiseSource,
    BlueNoiseSource,
]


def default_sources(seed: int = DEFAULT_SEED) -> list[InputSource]:
    """The synthetic inputs every battery run includes."""
    return [
        TextSource(),
        ConstantSource(),
        WhiteNoiseSource(seed),
        BlueNoiseSource(seed),
    ]


__all__ = [
    "ALL_SOURCES",
    "DEFAULT_SAMPLE_BYTES",
    "BlueNoiseSource",
    "ConstantSource",
    "FileSource",
    "InputSource",
    "TextSource",
    "WhiteNoiseSource",
    "default_sources",
]
