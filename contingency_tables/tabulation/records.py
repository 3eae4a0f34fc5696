"""Immutable result records produced by tabulation and its derivations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np

from ..config import Dimension
from .domain import ValueDomain

LevelSpec = Optional[Tuple[Any, ...]]


def _frozen(table: np.ndarray, dtype: Any = None) -> np.ndarray:
    arr = np.array(table, dtype=dtype, copy=True)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class ContingencyResult:
    """Dense counts over one or two domains plus their provenance."""

    counts: np.ndarray
    axes: Tuple[ValueDomain, ...]
    weights_used: bool
    value_type: Any
    count_type: type
    levels: Tuple[LevelSpec, ...]
    ordered: Tuple[bool, ...]

    @classmethod
    def create(
        cls,
        counts: np.ndarray,
        axes: Tuple[ValueDomain, ...],
        weights_used: bool,
        value_type: Any,
        levels: Tuple[LevelSpec, ...],
        ordered: Tuple[bool, ...],
    ) -> "ContingencyResult":
        count_type = float if weights_used else int
        dtype = np.float64 if weights_used else np.int64
        arr = _frozen(counts, dtype)
        _check_shape(arr, axes, levels, ordered)
        return cls(arr, tuple(axes), bool(weights_used), value_type, count_type, tuple(levels), tuple(ordered))

    @property
    def ndim(self) -> int:
        return self.counts.ndim

    @property
    def shape(self) -> Tuple[int, ...]:
        return tuple(self.counts.shape)

    @property
    def total(self) -> float:
        return self.counts.sum().item()


@dataclass(frozen=True, eq=False)
class ProportionResult:
    """Relative frequencies indexed exactly like the source counts.

    ``dimension`` records the total each cell was divided by: ``None`` for
    the grand total, ``"row"`` or ``"col"`` for conditional proportions.
    """

    proportions: np.ndarray
    axes: Tuple[ValueDomain, ...]
    dimension: Optional[Dimension]
    value_type: Any
    count_type: type
    levels: Tuple[LevelSpec, ...]
    ordered: Tuple[bool, ...]

    @classmethod
    def create(
        cls,
        proportions: np.ndarray,
        source: ContingencyResult,
        dimension: Optional[Dimension],
    ) -> "ProportionResult":
        arr = _frozen(proportions, np.float64)
        _check_shape(arr, source.axes, source.levels, source.ordered)
        return cls(arr, source.axes, dimension, source.value_type, float, source.levels, source.ordered)

    @property
    def ndim(self) -> int:
        return self.proportions.ndim


@dataclass(frozen=True, eq=False)
class ExpectedResult:
    """Expected frequencies under independence, labelled like the observed table."""

    frequencies: np.ndarray
    axes: Tuple[ValueDomain, ...]
    value_type: Any
    levels: Tuple[LevelSpec, ...]
    ordered: Tuple[bool, ...]

    @classmethod
    def create(cls, frequencies: np.ndarray, source: ContingencyResult) -> "ExpectedResult":
        arr = _frozen(frequencies)
        _check_shape(arr, source.axes, source.levels, source.ordered)
        return cls(arr, source.axes, source.value_type, source.levels, source.ordered)

    @property
    def ndim(self) -> int:
        return self.frequencies.ndim


def _check_shape(
    table: np.ndarray,
    axes: Tuple[ValueDomain, ...],
    levels: Tuple[LevelSpec, ...],
    ordered: Tuple[bool, ...],
) -> None:
    if table.ndim not in (1, 2):
        raise ValueError(f"Tables must be 1-D or 2-D, got {table.ndim} dimensions")
    if len(axes) != table.ndim or len(levels) != table.ndim or len(ordered) != table.ndim:
        raise ValueError("Axis metadata must provide one entry per table dimension.")
    expected = tuple(len(axis) for axis in axes)
    if table.shape != expected:
        raise ValueError(f"Table shape {table.shape} does not match domain sizes {expected}")


__all__ = ["ContingencyResult", "ExpectedResult", "LevelSpec", "ProportionResult"]
