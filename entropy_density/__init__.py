"""
entropy-density: how many bits of entropy does each bit of your data carry?

Reads arbitrary bytes as fixed-width symbols, estimates Shannon entropy per
bit (optionally conditioned on preceding symbols), and generates
best-candidate blue noise as a well-spread reference input.
"""

__version__ = "0.1.0"

from loguru import logger

from entropy_density.bitreader import BitCursor, extract_symbols, iter_symbols, next_bit, next_symbol
from entropy_density.bluenoise import BlueNoiseSampler, generate, quantize_to_bytes
from entropy_density.errors import EndOfStream, InvalidConfigurationError
from entropy_density.estimator import estimate, estimate_conditional, is_undersampled
from entropy_density.rng import make_rng

__all__ = [
    "BitCursor",
    "BlueNoiseSampler",
    "EndOfStream",
    "InvalidConfigurationError",
    "__version__",
    "estimate",
    "estimate_conditional",
    "extract_symbols",
    "generate",
    "is_undersampled",
    "iter_symbols",
    "make_rng",
    "next_bit",
    "next_symbol",
    "quantize_to_bytes",
]

# silent as a library; configure_logging() turns output on
logger.disable("entropy_density")
