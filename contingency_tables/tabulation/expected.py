"""Expected cell frequencies under row/column independence."""

from __future__ import annotations

import numpy as np

from .records import ContingencyResult, ExpectedResult


def expected_frequency(result: ContingencyResult) -> ExpectedResult:
    """Compute E[i, j] = row_total[i] * col_total[j] / grand_total.

    One-way tables have no independence model; their observed counts are
    returned unchanged. A zero grand total yields NaN cells.
    """
    if result.ndim == 1:
        return ExpectedResult.create(result.counts, result)

    observed = np.asarray(result.counts, dtype=np.float64)
    row_totals = observed.sum(axis=1, keepdims=True)
    col_totals = observed.sum(axis=0, keepdims=True)
    grand_total = observed.sum()
    with np.errstate(divide="ignore", invalid="ignore"):
        expected = (row_totals @ col_totals) / grand_total
    return ExpectedResult.create(expected, result)


__all__ = ["expected_frequency"]
