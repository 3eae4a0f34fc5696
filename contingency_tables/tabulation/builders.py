"""Request records describing one- and two-way tabulations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .helpers import SourceLike, WeightsLike


@dataclass(frozen=True)
class TabulationOptions:
    """Options shared by every tabulation request."""

    skip_missing: bool = False
    weights: WeightsLike = field(default=None, repr=False)

    def validate(self) -> None:
        if not isinstance(self.skip_missing, bool):
            raise TypeError("skip_missing must be a bool.")

    @property
    def weighted(self) -> bool:
        return self.weights is not None


@dataclass(frozen=True)
class OneWayRequest:
    """Frequency table of a single observation source."""

    values: SourceLike
    options: TabulationOptions = field(default_factory=TabulationOptions)

    @classmethod
    def of(cls, values: SourceLike, skip_missing: bool = False, weights: WeightsLike = None) -> "OneWayRequest":
        return cls(values, TabulationOptions(skip_missing=skip_missing, weights=weights))


@dataclass(frozen=True)
class TwoWayRequest:
    """Cross-tabulation of two paired observation sources (rows x columns)."""

    rows: SourceLike
    columns: SourceLike
    options: TabulationOptions = field(default_factory=TabulationOptions)

    @classmethod
    def of(
        cls,
        rows: SourceLike,
        columns: SourceLike,
        skip_missing: bool = False,
        weights: WeightsLike = None,
    ) -> "TwoWayRequest":
        return cls(rows, columns, TabulationOptions(skip_missing=skip_missing, weights=weights))


TableRequest = Union[OneWayRequest, TwoWayRequest]


def request_for(values: SourceLike, by: Optional[Any] = None, **options: Any) -> TableRequest:
    """Pick the request variant matching the number of supplied sources."""
    if by is None:
        return OneWayRequest.of(values, **options)
    return TwoWayRequest.of(values, by, **options)


__all__ = ["OneWayRequest", "TableRequest", "TabulationOptions", "TwoWayRequest", "request_for"]
