"""Coercion and validation helpers shared by one- and two-way tabulation."""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .domain import Categorical, DeclaresLevels, is_missing, unwrap
from .errors import EmptyInputError, InvalidArgumentError, LengthMismatchError, NegativeWeightError

SourceLike = Union[Sequence[Any], np.ndarray, pd.Series, pd.Categorical, Categorical]
WeightsLike = Optional[Union[Sequence[Optional[float]], np.ndarray, pd.Series]]
Source = Union[Tuple[Any, ...], Categorical]


def ensure_source(values: SourceLike, *, name: str = "values") -> Source:
    """Materialize an observation source, keeping declared levels when present."""
    if isinstance(values, Categorical):
        source: Source = values
    elif isinstance(values, pd.Categorical):
        source = Categorical.from_pandas(values)
    elif isinstance(values, pd.Series):
        if isinstance(values.dtype, pd.CategoricalDtype):
            source = Categorical.from_pandas(values)
        else:
            source = tuple(values.tolist())
    elif isinstance(values, np.ndarray):
        if values.ndim != 1:
            raise ValueError(f"{name} must be 1-D, got shape {values.shape}")
        source = tuple(values.tolist())
    elif isinstance(values, (str, bytes)):
        raise TypeError(f"{name} must be a sequence of observations, not a single string")
    else:
        source = tuple(values)

    if len(source) == 0:
        raise EmptyInputError(f"{name} must not be empty")
    return source


def ensure_weights(weights: WeightsLike, n_samples: int, *, name: str = "weights") -> Optional[np.ndarray]:
    """Validate optional weights; missing entries become 0.0."""
    if weights is None:
        return None
    if isinstance(weights, (str, bytes)):
        raise TypeError(f"{name} must be a sequence of numbers, not a single string")
    raw = weights.tolist() if isinstance(weights, (np.ndarray, pd.Series)) else list(weights)
    if len(raw) != n_samples:
        raise LengthMismatchError(f"Length of {name} ({len(raw)}) must match length of input ({n_samples})")

    try:
        arr = np.asarray([0.0 if is_missing(weight) else float(weight) for weight in raw], dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"{name} must be numeric: {exc}") from exc
    if np.any(arr < 0):
        raise NegativeWeightError(f"{name} must be non-negative")
    return arr


def validate_inputs(
    sources: Sequence[SourceLike],
    weights: WeightsLike = None,
) -> Tuple[Tuple[Source, ...], Optional[np.ndarray]]:
    """Run every input check before aggregation starts."""
    names = ("values",) if len(sources) == 1 else tuple(f"values{i + 1}" for i in range(len(sources)))
    checked = tuple(ensure_source(source, name=name) for source, name in zip(sources, names))

    lengths = {len(source) for source in checked}
    if len(lengths) != 1:
        joined = ", ".join(str(len(source)) for source in checked)
        raise LengthMismatchError(f"Input sequences must have the same length, received: {joined}")

    return checked, ensure_weights(weights, len(checked[0]))


def infer_value_type(source: Iterable[Any]) -> type:
    """Element type of a source; ``object`` when the observed values mix types."""
    if isinstance(source, DeclaresLevels):
        candidates = list(source.levels)
    else:
        candidates = [unwrap(value) for value in source if not is_missing(value)]
    types = {type(value) for value in candidates}
    if len(types) == 1:
        return types.pop()
    return object


__all__ = [
    "Source",
    "SourceLike",
    "WeightsLike",
    "ensure_source",
    "ensure_weights",
    "infer_value_type",
    "validate_inputs",
]
