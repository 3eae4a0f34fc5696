"""pandas adapter: pull observation sources out of frames and render results as frames."""

from __future__ import annotations

from collections import abc
from typing import Any, Hashable, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ..config import MISSING_LABEL
from ..tabulation.builders import TableRequest, request_for
from ..tabulation.domain import MISSING, Categorical, ValueDomain
from ..tabulation.helpers import SourceLike
from ..tabulation.records import ContingencyResult, ExpectedResult, ProportionResult

WeightsSpec = Optional[Union[Hashable, Sequence[float], np.ndarray, pd.Series]]


def column_values(frame: pd.DataFrame, column: Hashable) -> SourceLike:
    """Observation source for one column; categorical dtypes keep their levels."""
    if column not in frame.columns:
        raise KeyError(f"Column {column!r} not found; available: {list(frame.columns)}")
    series = frame[column]
    if isinstance(series.dtype, pd.CategoricalDtype):
        return Categorical.from_pandas(series)
    return tuple(series.tolist())


def request_from_frame(
    frame: pd.DataFrame,
    column: Hashable,
    by: Optional[Hashable] = None,
    weights: WeightsSpec = None,
    skip_missing: bool = False,
) -> TableRequest:
    """Build a tabulation request from frame columns.

    ``weights`` may name a column of ``frame`` or be an explicit sequence.
    """
    weight_values: Any = weights
    if weights is not None and _names_a_column(weights):
        if weights not in frame.columns:
            raise KeyError(f"Weights column {weights!r} not found; available: {list(frame.columns)}")
        weight_values = frame[weights].tolist()

    other = None if by is None else column_values(frame, by)
    return request_for(column_values(frame, column), other, skip_missing=skip_missing, weights=weight_values)


def _names_a_column(key: Any) -> bool:
    """Strings and other hashable scalars are column labels; iterables are explicit weights."""
    if isinstance(key, (str, bytes)):
        return True
    return isinstance(key, abc.Hashable) and not isinstance(key, abc.Iterable)


def axis_labels(domain: ValueDomain) -> List[Any]:
    """Domain values with the missing bucket replaced by its display label."""
    return [MISSING_LABEL if value is MISSING else value for value in domain.values]


def _table_frame(table: np.ndarray, axes: Sequence[ValueDomain], value_name: str) -> pd.DataFrame:
    if table.ndim == 1:
        return pd.DataFrame({"Value": axis_labels(axes[0]), value_name: np.array(table)})
    frame = pd.DataFrame(np.array(table), columns=[str(label) for label in axis_labels(axes[1])])
    frame.insert(0, "Row", [str(label) for label in axis_labels(axes[0])])
    return frame


def counts_frame(result: ContingencyResult) -> pd.DataFrame:
    """``Value``/``Count`` columns for one-way tables, ``Row`` + one column per level otherwise."""
    return _table_frame(result.counts, result.axes, "Count")


def proportions_frame(result: ProportionResult) -> pd.DataFrame:
    return _table_frame(result.proportions, result.axes, "Proportion")


def expected_frame(result: ExpectedResult) -> pd.DataFrame:
    return _table_frame(result.frequencies, result.axes, "Count")


__all__ = [
    "axis_labels",
    "column_values",
    "counts_frame",
    "expected_frame",
    "proportions_frame",
    "request_from_frame",
]
