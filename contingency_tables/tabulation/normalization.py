"""Normalization policies turning counts into proportions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

import numpy as np

from ..config import VALID_DIMENSIONS, Dimension
from .errors import InvalidArgumentError


class Normalization(Protocol):
    """Strategy object dividing a count table by one of its totals."""

    dimension: Optional[Dimension]

    def derive(self, counts: np.ndarray) -> np.ndarray:
        """Return float64 proportions with the same shape as ``counts``."""
        ...


def _divide(counts: np.ndarray, totals: np.ndarray | float) -> np.ndarray:
    # Zero totals yield NaN (0/0) rather than an error.
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.asarray(counts, dtype=np.float64) / totals


@dataclass(frozen=True)
class TotalNormalization:
    """Each cell over the grand total; the whole table sums to one."""

    dimension: Optional[Dimension] = None

    def derive(self, counts: np.ndarray) -> np.ndarray:
        return _divide(counts, np.asarray(counts, dtype=np.float64).sum())


@dataclass(frozen=True)
class RowNormalization:
    """Each cell over its row total; every row sums to one."""

    dimension: Optional[Dimension] = "row"

    def derive(self, counts: np.ndarray) -> np.ndarray:
        if counts.ndim != 2:
            return TotalNormalization().derive(counts)
        return _divide(counts, np.asarray(counts, dtype=np.float64).sum(axis=1, keepdims=True))


@dataclass(frozen=True)
class ColumnNormalization:
    """Each cell over its column total; every column sums to one."""

    dimension: Optional[Dimension] = "col"

    def derive(self, counts: np.ndarray) -> np.ndarray:
        if counts.ndim != 2:
            return TotalNormalization().derive(counts)
        return _divide(counts, np.asarray(counts, dtype=np.float64).sum(axis=0, keepdims=True))


def normalization_for(dims: Optional[str]) -> Normalization:
    """Resolve a ``dims`` argument into its normalization policy."""
    if dims is not None and not isinstance(dims, str):
        raise InvalidArgumentError(f"dims must be one of {VALID_DIMENSIONS}, received {dims!r}")
    if dims not in VALID_DIMENSIONS:
        raise InvalidArgumentError(f"dims must be one of {VALID_DIMENSIONS}, received {dims!r}")
    if dims == "row":
        return RowNormalization()
    if dims == "col":
        return ColumnNormalization()
    return TotalNormalization()


__all__ = [
    "ColumnNormalization",
    "Normalization",
    "RowNormalization",
    "TotalNormalization",
    "normalization_for",
]
