"""Histogram-based entropy density estimates.

Every estimate is Shannon entropy of the symbol distribution divided by the
symbol width, i.e. bits of entropy per bit of input, in ``[0, 1]``.

The estimate is biased whenever the number of possible symbols
(``2**width``) approaches or exceeds the number of symbols in the buffer:
bins that never had a chance to fill are indistinguishable from improbable
ones.  This is reported, not corrected; see
:func:`is_undersampled`.
"""

from __future__ import annotations

from typing import Iterable, Iterator

import numpy as np
from loguru import logger
from scipy import stats as sp_stats

from entropy_density.bitreader import (
    MAX_WIDTH,
    Buffer,
    check_width,
    iter_symbol_chunks,
    symbol_count,
)
from entropy_density.errors import InvalidConfigurationError

# Above this width a dense 2**width histogram is replaced by np.unique.
DENSE_HISTOGRAM_MAX_BITS = 16


def _count(chunks: Iterable[np.ndarray], bits: int) -> tuple[np.ndarray, np.ndarray]:
    """Non-zero bins of the histogram over all *chunks* as (values, counts)."""
    if bits <= DENSE_HISTOGRAM_MAX_BITS:
        counts = np.zeros(1 << bits, dtype=np.int64)
        for chunk in chunks:
            counts += np.bincount(chunk.astype(np.int64), minlength=1 << bits)
        values = np.flatnonzero(counts)
        return values.astype(np.uint64), counts[values]

    part_values, part_counts = [], []
    for chunk in chunks:
        v, c = np.unique(chunk, return_counts=True)
        part_values.append(v)
        part_counts.append(c)
    if not part_values:
        return np.empty(0, dtype=np.uint64), np.empty(0, dtype=np.int64)
    values, inverse = np.unique(np.concatenate(part_values), return_inverse=True)
    counts = np.bincount(inverse.ravel(), weights=np.concatenate(part_counts))
    return values, counts.astype(np.int64)


def _markov_keys(
    chunks: Iterable[np.ndarray], width: int, order: int
) -> Iterator[np.ndarray]:
    """Pack each symbol with the *order* before it, newest in the low bits."""
    history = np.empty(0, dtype=np.uint64)
    for chunk in chunks:
        symbols = np.concatenate([history, chunk])
        if len(symbols) > order:
            keys = symbols[order:].copy()
            for lag in range(1, order + 1):
                keys |= symbols[order - lag: len(symbols) - lag] << np.uint64(width * lag)
            yield keys
        # context carried across the chunk boundary
        history = symbols[len(symbols) - min(order, len(symbols)):]


def _density(h: float, width: int) -> float:
    # rounding can push a uniform histogram a hair past 1.0
    return min(1.0, max(0.0, h / width))


def histogram(
    buffer: Buffer, width: int, *, advance: int | None = None
) -> tuple[np.ndarray, np.ndarray]:
    """Symbol histogram of *buffer* as (values, counts), zero bins omitted.

    ``counts.sum()`` equals the number of complete symbols extracted.
    """
    return _count(iter_symbol_chunks(buffer, width, advance), width)


def entropy_from_counts(counts: np.ndarray, width: int) -> float:
    """Entropy per bit of a histogram of *width*-bit symbols."""
    check_width(width)
    counts = np.asarray(counts)
    if counts.sum() == 0:
        return 0.0
    h = float(sp_stats.entropy(counts, base=2))
    return _density(h, width)


def estimate(buffer: Buffer, width: int, *, advance: int | None = None) -> float:
    """Entropy per bit of *buffer* read as *width*-bit symbols.

    Parameters
    ----------
    buffer:
        Input bytes.  An empty buffer (or one shorter than *width* bits)
        gives ``0.0``.
    width:
        Symbol width in bits, 1 to 64.
    advance:
        Bits between the starts of consecutive symbols.  Defaults to
        *width* (non-overlapping windows).

    Returns
    -------
    float
        Value in ``[0, 1]``; 1.0 means every symbol value is equally likely.
    """
    _, counts = histogram(buffer, width, advance=advance)
    density = entropy_from_counts(counts, width)
    logger.debug(
        "H<{}> over {} symbols ({} distinct) = {:.6f}",
        width, int(counts.sum()), len(counts), density,
    )
    return density


def estimate_conditional(
    buffer: Buffer, width: int, order: int, *, advance: int | None = None
) -> float:
    """Conditional entropy per bit of the next symbol given the *order* before it.

    Computes ``H(Y|X) = -sum p(x, y) * log2 p(y|x)`` where ``x`` is the
    context of the previous *order* symbols and ``y`` the current one, then
    divides by *width*.  The first *order* symbols only prime the context and
    are not counted.  ``order=0`` is the plain :func:`estimate`.
    """
    step = check_width(width, advance)
    if order < 0:
        raise InvalidConfigurationError(f"order must be >= 0, got {order}")
    if width * (order + 1) > MAX_WIDTH:
        raise InvalidConfigurationError(
            f"context of {order} x {width}-bit symbols plus the current one "
            f"exceeds {MAX_WIDTH} bits"
        )

    keys = _markov_keys(iter_symbol_chunks(buffer, width, step), width, order)
    values, counts = _count(keys, width * (order + 1))
    n = int(counts.sum())
    if n == 0:
        return 0.0

    if order == 0:
        contexts = np.zeros(len(values), dtype=np.uint64)
    else:
        contexts = values >> np.uint64(width)
    _, group = np.unique(contexts, return_inverse=True)
    group_totals = np.bincount(group.ravel(), weights=counts)

    p_joint = counts / n
    p_cond = counts / group_totals[group.ravel()]
    h = float(-np.sum(p_joint * np.log2(p_cond)))
    density = _density(h, width)
    logger.debug(
        "H<{}|o{}> over {} symbols ({} contexts) = {:.6f}",
        width, order, n, len(group_totals), density,
    )
    return density


def is_undersampled(n_bytes: int, width: int, advance: int | None = None) -> bool:
    """True when *n_bytes* cannot fill every one of the ``2**width`` bins."""
    return symbol_count(n_bytes, width, advance) < 2 ** width
