"""Public entry points for building and deriving contingency tables."""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

from .aggregator import aggregate, complete_rows
from .builders import OneWayRequest, TableRequest, TwoWayRequest
from .domain import declared_levels, declared_ordered, resolve_domain
from .expected import expected_frequency
from .helpers import SourceLike, WeightsLike, infer_value_type, validate_inputs
from .normalization import normalization_for
from .proportions import derive_proportions
from .records import ContingencyResult, ExpectedResult, ProportionResult


def tabulate(request: TableRequest) -> ContingencyResult:
    """Validate the request, resolve its domains and count the observations."""
    if isinstance(request, OneWayRequest):
        raw_sources = (request.values,)
    elif isinstance(request, TwoWayRequest):
        raw_sources = (request.rows, request.columns)
    else:
        raise TypeError(f"Unsupported request type {type(request)}")

    options = request.options
    options.validate()
    sources, weights = validate_inputs(raw_sources, options.weights)

    levels = tuple(declared_levels(source) for source in sources)
    observed = _complete_cases(sources) if options.skip_missing else sources
    domains = tuple(
        resolve_domain(source, levels=axis_levels, skip_missing=options.skip_missing)
        for source, axis_levels in zip(observed, levels)
    )
    counts = aggregate(sources, domains, weights=weights, skip_missing=options.skip_missing)

    value_types = tuple(infer_value_type(source) for source in sources)
    return ContingencyResult.create(
        counts,
        axes=domains,
        weights_used=weights is not None,
        value_type=value_types[0] if len(value_types) == 1 else value_types,
        levels=levels,
        ordered=tuple(declared_ordered(source) for source in sources),
    )


def _complete_cases(sources: Tuple[Sequence[Any], ...]) -> Tuple[Tuple[Any, ...], ...]:
    """Keep only the observations where no member of the pair is missing."""
    columns = [list(source) for source in sources]
    keep = complete_rows(columns, skip_missing=True)
    return tuple(tuple(value for value, kept in zip(column, keep) if kept) for column in columns)


def contingency_table(
    values: SourceLike,
    *,
    skip_missing: bool = False,
    weights: WeightsLike = None,
) -> ContingencyResult:
    """Frequency table of one variable."""
    return tabulate(OneWayRequest.of(values, skip_missing=skip_missing, weights=weights))


def cross_table(
    rows: SourceLike,
    columns: SourceLike,
    *,
    skip_missing: bool = False,
    weights: WeightsLike = None,
) -> ContingencyResult:
    """Two-way contingency table; ``rows`` indexes the first axis."""
    return tabulate(TwoWayRequest.of(rows, columns, skip_missing=skip_missing, weights=weights))


def proportions(result: ContingencyResult, dims: Optional[str] = None) -> ProportionResult:
    """Proportion table from an existing contingency result."""
    return derive_proportions(result, dims)


def proportion_table(request: TableRequest, dims: Optional[str] = None) -> ProportionResult:
    """Tabulate the request, then normalize it in one call."""
    normalization_for(dims)
    return derive_proportions(tabulate(request), dims)


def value_proportions(
    values: SourceLike,
    *,
    skip_missing: bool = False,
    weights: WeightsLike = None,
    dims: Optional[str] = None,
) -> ProportionResult:
    """Share of each value among the observations of one variable."""
    return proportion_table(OneWayRequest.of(values, skip_missing=skip_missing, weights=weights), dims)


def cross_proportions(
    rows: SourceLike,
    columns: SourceLike,
    *,
    skip_missing: bool = False,
    weights: WeightsLike = None,
    dims: Optional[str] = None,
) -> ProportionResult:
    """Joint (``dims=None``) or conditional (``"row"``/``"col"``) proportions of two variables."""
    return proportion_table(TwoWayRequest.of(rows, columns, skip_missing=skip_missing, weights=weights), dims)


__all__ = [
    "ContingencyResult",
    "ExpectedResult",
    "ProportionResult",
    "contingency_table",
    "cross_proportions",
    "cross_table",
    "expected_frequency",
    "proportion_table",
    "proportions",
    "tabulate",
    "value_proportions",
]
