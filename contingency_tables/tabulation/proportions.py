"""Derive proportion tables from contingency results."""

from __future__ import annotations

from typing import Optional

from .normalization import normalization_for
from .records import ContingencyResult, ProportionResult


def derive_proportions(result: ContingencyResult, dims: Optional[str] = None) -> ProportionResult:
    """Divide counts by the grand, row or column total.

    Args:
        result: Counts to normalize; left untouched.
        dims: ``None`` for total proportions, ``"row"`` for P(column | row),
            ``"col"`` for P(row | column).

    Returns:
        A new ProportionResult. One-way tables always use the grand total and
        record ``dimension=None``. Rows or columns whose total is zero come
        out as NaN.
    """
    policy = normalization_for(dims)
    if result.ndim == 1:
        policy = normalization_for(None)
    return ProportionResult.create(policy.derive(result.counts), result, policy.dimension)


__all__ = ["derive_proportions"]
