"""Dense count accumulation over one or two resolved value domains."""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

import numpy as np

from .domain import ValueDomain, is_missing

SKIPPED = -1


def complete_rows(columns: Sequence[Sequence[Any]], skip_missing: bool = False) -> np.ndarray:
    """Boolean row mask; with ``skip_missing`` a row is dropped if any member is missing."""
    keep = np.ones(len(columns[0]), dtype=bool)
    if skip_missing:
        for column in columns:
            keep &= np.fromiter((not is_missing(value) for value in column), dtype=bool, count=len(column))
    return keep


def encode(values: Sequence[Any], domain: ValueDomain, keep: Optional[np.ndarray] = None) -> np.ndarray:
    """Map each kept observation to its domain position; dropped rows become -1."""
    codes = np.full(len(values), SKIPPED, dtype=np.intp)
    for position, value in enumerate(values):
        if keep is None or keep[position]:
            codes[position] = domain.index_of(value)
    return codes


def _encode_all(
    sources: Sequence[Sequence[Any]],
    domains: Sequence[ValueDomain],
    skip_missing: bool,
) -> Tuple[np.ndarray, ...]:
    if len(sources) != len(domains):
        raise ValueError("Each source needs exactly one domain.")
    columns = [list(source) for source in sources]
    keep = complete_rows(columns, skip_missing)
    return tuple(encode(column, domain, keep) for column, domain in zip(columns, domains))


def _accumulate(
    codes: Tuple[np.ndarray, ...],
    shape: Tuple[int, ...],
    weights: Optional[np.ndarray],
) -> np.ndarray:
    """Add one unit (or the paired weight) per retained observation."""
    keep = np.ones(codes[0].shape[0], dtype=bool)
    for axis_codes in codes:
        keep &= axis_codes != SKIPPED

    if weights is None:
        table = np.zeros(shape, dtype=np.int64)
        np.add.at(table, tuple(axis_codes[keep] for axis_codes in codes), 1)
    else:
        table = np.zeros(shape, dtype=np.float64)
        np.add.at(table, tuple(axis_codes[keep] for axis_codes in codes), weights[keep])
    return table


def aggregate(
    sources: Sequence[Sequence[Any]],
    domains: Sequence[ValueDomain],
    weights: Optional[np.ndarray] = None,
    skip_missing: bool = False,
) -> np.ndarray:
    """Count paired observations into a table shaped by the domains.

    An observation is dropped when ``skip_missing`` is set and any of its
    members is missing. Counts are ``int64`` without weights and ``float64``
    with them; declared levels that were never observed stay at zero.
    """
    codes = _encode_all(sources, domains, skip_missing)
    shape = tuple(len(domain) for domain in domains)
    return _accumulate(codes, shape, weights)


def aggregate_1d(
    source: Sequence[Any],
    domain: ValueDomain,
    weights: Optional[np.ndarray] = None,
    skip_missing: bool = False,
) -> np.ndarray:
    return aggregate((source,), (domain,), weights, skip_missing)


def aggregate_2d(
    first: Sequence[Any],
    second: Sequence[Any],
    row_domain: ValueDomain,
    col_domain: ValueDomain,
    weights: Optional[np.ndarray] = None,
    skip_missing: bool = False,
) -> np.ndarray:
    return aggregate((first, second), (row_domain, col_domain), weights, skip_missing)


def aggregate_partitioned(
    sources: Sequence[Sequence[Any]],
    domains: Sequence[ValueDomain],
    weights: Optional[np.ndarray] = None,
    skip_missing: bool = False,
    partitions: int = 4,
) -> np.ndarray:
    """Aggregate contiguous chunks independently and sum the partial tables.

    Produces the same table as :func:`aggregate`; each chunk only needs a
    domain-sized buffer, so chunks can be handed to separate workers.
    """
    if partitions < 1:
        raise ValueError("partitions must be at least 1.")

    codes = _encode_all(sources, domains, skip_missing)
    shape = tuple(len(domain) for domain in domains)
    bounds = np.array_split(np.arange(codes[0].shape[0]), partitions)

    dtype = np.int64 if weights is None else np.float64
    total = np.zeros(shape, dtype=dtype)
    for rows in bounds:
        if rows.size == 0:
            continue
        chunk_codes = tuple(axis_codes[rows] for axis_codes in codes)
        chunk_weights = None if weights is None else weights[rows]
        total += _accumulate(chunk_codes, shape, chunk_weights)
    return total


__all__ = [
    "aggregate",
    "aggregate_1d",
    "aggregate_2d",
    "aggregate_partitioned",
    "complete_rows",
    "encode",
]
