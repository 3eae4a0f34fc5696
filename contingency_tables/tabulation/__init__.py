"""Tabulation engine: value domains, aggregation and derived tables."""

from .builders import OneWayRequest, TableRequest, TabulationOptions, TwoWayRequest
from .domain import MISSING, Categorical, CategoricalValue, HasUnderlyingValue, ValueDomain, resolve_domain
from .errors import (
    EmptyInputError,
    InvalidArgumentError,
    LengthMismatchError,
    NegativeWeightError,
    TabulationError,
)
from .expected import expected_frequency
from .proportions import derive_proportions
from .records import ContingencyResult, ExpectedResult, ProportionResult
from .tables import (
    contingency_table,
    cross_proportions,
    cross_table,
    proportion_table,
    proportions,
    tabulate,
    value_proportions,
)

__all__ = [
    "MISSING",
    "Categorical",
    "CategoricalValue",
    "ContingencyResult",
    "EmptyInputError",
    "ExpectedResult",
    "HasUnderlyingValue",
    "InvalidArgumentError",
    "LengthMismatchError",
    "NegativeWeightError",
    "OneWayRequest",
    "ProportionResult",
    "TableRequest",
    "TabulationError",
    "TabulationOptions",
    "TwoWayRequest",
    "ValueDomain",
    "contingency_table",
    "cross_proportions",
    "cross_table",
    "derive_proportions",
    "expected_frequency",
    "proportion_table",
    "proportions",
    "resolve_domain",
    "tabulate",
    "value_proportions",
]
