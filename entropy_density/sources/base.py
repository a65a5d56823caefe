"""Abstract base class for battery inputs."""

from __future__ import annotations

from abc import ABC, abstractmethod

from entropy_density.estimator import estimate, is_undersampled


class InputSource(ABC):
    """A named producer of bytes to run the entropy battery on.

    Every source declares a ``name`` and ``description`` and implements
    ``collect``.  ``is_available`` defaults to True; sources backed by
    something that may be missing (a file) override it.
    """

    name: str = "unnamed"
    description: str = ""

    def is_available(self) -> bool:
        return True

    @abstractmethod
    def collect(self, n_bytes: int | None = None) -> bytes:
        """Return the source's bytes.

        Parameters
        ----------
        n_bytes:
            Requested length.  Generated sources produce exactly this many
            bytes; finite sources return at most this many.  ``None`` means
            the source's natural length (or its default for generators).
        """
        ...

    def quick_profile(self, n_bytes: int | None = None) -> dict:
        """Collect once and report entropy per bit at 1 and 8 bits."""
        data = self.collect(n_bytes)
        return {
            "label": self.name,
            "bytes": len(data),
            "H<1>": round(estimate(data, 1), 6),
            "H<8>": round(estimate(data, 8), 6),
            "undersampled": is_undersampled(len(data), 8),
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
