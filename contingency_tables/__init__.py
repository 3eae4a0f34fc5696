"""Frequency, proportion and expected-frequency tables for one or two variables."""

from .tabulation import (
    MISSING,
    Categorical,
    ContingencyResult,
    EmptyInputError,
    ExpectedResult,
    InvalidArgumentError,
    LengthMismatchError,
    NegativeWeightError,
    OneWayRequest,
    ProportionResult,
    TabulationError,
    TwoWayRequest,
    contingency_table,
    cross_proportions,
    cross_table,
    expected_frequency,
    proportion_table,
    proportions,
    tabulate,
    value_proportions,
)

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "Categorical",
    "ContingencyResult",
    "EmptyInputError",
    "ExpectedResult",
    "InvalidArgumentError",
    "LengthMismatchError",
    "NegativeWeightError",
    "OneWayRequest",
    "ProportionResult",
    "TabulationError",
    "TwoWayRequest",
    "contingency_table",
    "cross_proportions",
    "cross_table",
    "expected_frequency",
    "proportion_table",
    "proportions",
    "tabulate",
    "value_proportions",
]
